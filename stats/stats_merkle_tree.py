"""Statistics for Merkle trees built by FIFO reduction."""

import argparse
import logging
import os
import time
from datetime import datetime
from statistics import mean

import numpy as np
from tqdm import trange

from merkle_trees.factory import create_merkle_tree
from merkle_trees.invariants import assert_tree_invariants_raise, check_tree_invariants
from merkle_trees.merkle_tree_base import MerkleTree
from merkle_trees.tree_stats import tree_stats_

logger = logging.getLogger(__name__)


def random_values(n: int, duplicates: float = 0.0) -> list:
    """
    Draw ``n`` leaf values from a 2^24 key space.

    ``duplicates`` is the fraction of values re-drawn from values already
    picked, so the tree holds repeated leaves.
    """
    space = 1 << 24
    if space <= n:
        raise ValueError(f"Key-space too small! Required: {n + 1}, Available: {space}")

    values = np.random.choice(space, size=n, replace=False)
    n_dup = int(n * duplicates)
    if n_dup:
        positions = np.random.choice(n, size=n_dup, replace=False)
        values[positions] = np.random.choice(values, size=n_dup, replace=True)
    return values.tolist()


def repeated_experiment(size: int, repetitions: int, duplicates: float, indexed: bool) -> None:
    """
    Build ``repetitions`` random trees of ``size`` leaves and log averaged
    statistics and timings for build, path derivation and verification.
    """
    t_all_0 = time.perf_counter()

    results = []
    times_build = []
    times_path = []
    times_verify = []
    failed_paths = 0

    for _ in trange(repetitions, desc=f"n={size}", leave=False):
        values = random_values(size, duplicates)

        t0 = time.perf_counter()
        tree = create_merkle_tree(values, indexed=indexed)
        times_build.append(time.perf_counter() - t0)

        stats = tree_stats_(tree)
        assert_tree_invariants_raise(tree, stats)
        check_tree_invariants(tree, check_paths=False)
        results.append(stats)

        t0 = time.perf_counter()
        paths = [tree.path(v) for v in values]
        times_path.append(time.perf_counter() - t0)

        t0 = time.perf_counter()
        ok = [MerkleTree.verify(v, p, tree.root) for v, p in zip(values, paths)]
        times_verify.append(time.perf_counter() - t0)
        failed_paths += ok.count(False)

    rows = [
        ("Leaf count", [s.leaf_count for s in results]),
        ("Distinct leaves", [s.distinct_leaf_count for s in results]),
        ("Sibling entries", [s.sibling_entry_count for s in results]),
        ("Min path length", [s.min_path_length for s in results]),
        ("Max path length", [s.max_path_length for s in results]),
        ("Avg path length", [s.avg_path_length for s in results]),
        ("Perfect height", [s.perfect_height for s in results]),
        ("Height amplification", [s.max_path_length / s.perfect_height if s.perfect_height else 0 for s in results]),
    ]

    header = f"{'Metric':<22} {'Avg':>15} {'(Var)':>15}"
    sep_line = "-" * len(header)
    logger.info(header)
    logger.info(sep_line)
    for name, samples in rows:
        var_str = f"({np.var(samples):.2f})"
        logger.info(f"{name:<22} {mean(samples):15.2f} {var_str:>15}")
    logger.info(f"{'Paths not verifying':<22} {failed_paths:>15}")

    perf_rows = [
        ("Build time (s)", times_build),
        ("Path time (s)", times_path),
        ("Verify time (s)", times_verify),
    ]
    total_sum = sum(sum(t) for _, t in perf_rows)

    header = f"{'Metric':<20}{'Avg(s)':>13}{'Var(s)':>13}{'Total(s)':>13}{'%Total':>10}"
    sep = "-" * len(header)

    logger.info("")
    logger.info("Performance summary:")
    logger.info(header)
    logger.info(sep)
    for name, times in perf_rows:
        total = sum(times)
        pct = (total / total_sum * 100) if total_sum else 0
        logger.info(f"{name:<20}{mean(times):13.6f}{np.var(times):13.6f}{total:13.6f}{pct:10.2f}%")

    logger.info(sep)
    logger.info("Execution time: %.3f seconds", time.perf_counter() - t_all_0)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run statistics experiments for Merkle trees.")
    parser.add_argument(
        "--sizes", type=int, nargs="+", default=[10, 100, 1000, 10_000], help="List of tree sizes to test."
    )
    parser.add_argument("--repetitions", type=int, default=10, help="Number of repetitions for each experiment.")
    parser.add_argument(
        "--duplicates", type=float, default=0.0, help="Fraction of leaves that repeat an earlier value."
    )
    parser.add_argument("--indexed", action="store_true", help="Use the position-indexed tree variant.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level (default: INFO)",
    )

    args = parser.parse_args()

    if args.seed is not None:
        np.random.seed(args.seed)

    log_dir = os.path.join(os.getcwd(), "stats/logs/merkle_tree_logs")
    os.makedirs(log_dir, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"run_{ts}.log")

    log_level = getattr(logging, args.log_level)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="w"),
            logging.StreamHandler(),
        ],
        force=True,
    )
    logging.getLogger("merkle_trees").setLevel(log_level)

    for n in args.sizes:
        logger.info("")
        logger.info(
            f"---------------- NOW RUNNING EXPERIMENT: n = {n}, duplicates = {args.duplicates}, "
            f"indexed = {args.indexed}, repetitions = {args.repetitions} ----------------"
        )
        t0 = time.perf_counter()
        repeated_experiment(size=n, repetitions=args.repetitions, duplicates=args.duplicates, indexed=args.indexed)
        logger.info(f"Total experiment time: {time.perf_counter() - t0:.3f} seconds")
