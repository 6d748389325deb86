"""Statistics for Merkle trees built by FIFO reduction."""

from __future__ import annotations

import collections
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from merkle_trees.logging_config import get_logger

if TYPE_CHECKING:
    from merkle_trees.merkle_tree_base import MerkleTree

logger = get_logger(__name__)


@dataclass
class Stats:
    """Aggregated statistics for a Merkle tree."""

    leaf_count: int
    distinct_leaf_count: int
    duplicate_leaf_count: int
    internal_node_count: int
    sibling_entry_count: int
    min_path_length: int
    max_path_length: int
    avg_path_length: float
    perfect_height: int
    is_empty: bool


def reduction_depths(n: int) -> List[int]:
    """
    Inclusion path length of each of ``n`` leaf positions.

    The shape of the queue reduction depends only on the leaf count, so
    this runs the reduction on positions without hashing anything.
    """
    if n <= 0:
        return []

    parent = [-1] * n
    queue = collections.deque(range(n))
    while len(queue) > 1:
        left = queue.popleft()
        right = queue.popleft()
        parent[left] = parent[right] = len(parent)
        queue.append(len(parent))
        parent.append(-1)

    # Parents are created after their children, so walk positions backwards
    depth = [0] * len(parent)
    for pos in range(len(parent) - 2, -1, -1):
        depth[pos] = depth[parent[pos]] + 1
    return depth[:n]


def tree_stats_(tree: MerkleTree) -> Stats:
    """Returns aggregated statistics for a Merkle tree in **O(n)** time."""
    leaves = tree.leaves
    n = len(leaves)
    if n == 0:
        return Stats(
            leaf_count=0,
            distinct_leaf_count=0,
            duplicate_leaf_count=0,
            internal_node_count=0,
            sibling_entry_count=0,
            min_path_length=0,
            max_path_length=0,
            avg_path_length=0.0,
            perfect_height=0,
            is_empty=True,
        )

    distinct = len(set(leaves))
    depths = reduction_depths(n)
    stats = Stats(
        leaf_count=n,
        distinct_leaf_count=distinct,
        duplicate_leaf_count=n - distinct,
        internal_node_count=n - 1,
        sibling_entry_count=len(tree.siblings),
        min_path_length=min(depths),
        max_path_length=max(depths),
        avg_path_length=sum(depths) / n,
        perfect_height=math.ceil(math.log2(n)),
        is_empty=False,
    )
    logger.debug(f"Stats for {tree!r}: {stats}")
    return stats
