"""
Benchmarking utilities for Merkle trees.

Common helpers and a base class for ASV benchmarks.

Reproducibility:
    All random data generation uses deterministic seeds by default.
    The default seed can be overridden via the BENCHMARK_SEED environment variable.

Configuration:
    BENCHMARK_SEED, BENCHMARK_VERIFY_ONLY, BENCHMARK_SKIP_WARMUP and
    BENCHMARK_LOG_LEVEL are read once into ``CONFIG``.

Logging:
    Benchmarks should be run with logging at INFO level or higher; the
    tree logs every rebuild at DEBUG.
"""

import gc
import logging
import random
from typing import List, Tuple

import numpy as np

from merkle_trees.invariants import check_tree_invariants
from merkle_trees.logging_config import PACKAGE_LOGGER

from .config import BenchmarkConfig

CONFIG = BenchmarkConfig.from_env()


class BenchmarkUtils:
    """Deterministic data generation and setup checks for ASV benchmarks."""

    @staticmethod
    def check_logging_level():
        """
        Refuse to benchmark with DEBUG logging on the package logger.

        Raises:
            ValueError: If the effective level is DEBUG or lower.
        """
        effective_level = logging.getLogger(PACKAGE_LOGGER).getEffectiveLevel()
        if effective_level <= logging.DEBUG:
            raise ValueError(
                f"Logging level is set to {logging.getLevelName(effective_level)}. "
                "Benchmarks require logging to be at INFO level or higher to avoid "
                "performance contamination from verbose debug output."
            )

    @staticmethod
    def generate_deterministic_values(size: int,
                                      seed: int = None,
                                      key_range: Tuple[int, int] = (1, 1000000),
                                      distribution: str = 'uniform') -> List[int]:
        """
        Generate deterministic leaf values.

        Args:
            size: Number of values to generate
            seed: Random seed. If None, uses BENCHMARK_SEED.
            key_range: Range of values (min, max)
            distribution: 'uniform' (no duplicates), 'sequential' or
                'duplicates' (drawn with replacement from size // 4 values)

        Returns:
            List of values, same output for the same inputs
        """
        if seed is None:
            seed = CONFIG.seed

        rng = np.random.default_rng(seed)
        min_key, max_key = key_range

        if distribution == 'uniform':
            return rng.choice(np.arange(min_key, max_key + 1), size=size, replace=False).tolist()
        elif distribution == 'sequential':
            return list(range(min_key, min_key + size))
        elif distribution == 'duplicates':
            pool = rng.choice(np.arange(min_key, max_key + 1), size=max(1, size // 4), replace=False)
            return rng.choice(pool, size=size, replace=True).tolist()
        else:
            raise ValueError(f"Unknown distribution: {distribution}")

    @staticmethod
    def create_lookup_values(values: List[int], num_lookups: int = 1000, seed: int = None) -> List[int]:
        """Pick values to derive paths for (always hits)."""
        if seed is None:
            seed = CONFIG.seed
        return random.Random(seed).choices(values, k=num_lookups)


class BaseBenchmark:
    """Base class for ASV benchmarks.

    ``setup`` applies BENCHMARK_LOG_LEVEL to the package logger and checks
    it; subclasses prepare data after calling it, pass the tree they built
    to ``verify_tree`` and then disable the garbage collector.
    ``teardown`` re-enables it.
    """

    params = []
    param_names = []

    warmup_time = 0.0 if CONFIG.skip_warmup else 0.1
    sample_time = 0.4

    def setup(self, *params):
        logging.getLogger(PACKAGE_LOGGER).setLevel(CONFIG.log_level.upper())
        BenchmarkUtils.check_logging_level()

    def verify_tree(self, tree):
        """
        Check the invariants of a tree built during setup (not timed).

        With BENCHMARK_VERIFY_ONLY the inclusion paths are checked too and
        the timed part is skipped: ASV treats NotImplementedError raised
        from setup as "skip this benchmark".
        """
        check_tree_invariants(tree, check_paths=CONFIG.verify_only)
        if CONFIG.verify_only:
            raise NotImplementedError("BENCHMARK_VERIFY_ONLY is set; tree verified, timing skipped")

    def teardown(self, *params):
        if not gc.isenabled():
            gc.enable()
