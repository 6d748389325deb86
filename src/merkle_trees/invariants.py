"""Shared invariant-checking utilities.

Used by the stats script and the test suite to validate Merkle trees
after construction and insertion.
"""

from __future__ import annotations

import collections
from typing import TYPE_CHECKING, Optional

from merkle_trees.hashing import hash_parents
from merkle_trees.logging_config import get_logger
from merkle_trees.merkle_tree_base import EMPTY_ROOT, ValueNotInTreeError

if TYPE_CHECKING:
    from merkle_trees.merkle_tree_base import MerkleTree
    from merkle_trees.tree_stats import Stats

logger = get_logger(__name__)


class InvariantError(Exception):
    """Raised when a Merkle tree invariant is violated."""


def check_tree_invariants(tree: MerkleTree, check_paths: bool = True) -> None:
    """
    Check structural invariants, raising :class:`InvariantError` on the first failure.

    With ``check_paths`` every leaf that occurs exactly once must have an
    inclusion path that verifies against the root. Leaves sharing a hash
    are skipped, since the flat sibling map only keeps their last pairing.
    """
    leaves = tree.leaves
    root = tree.root

    if (root is EMPTY_ROOT) != (not leaves):
        raise InvariantError(f"Invariant failed: root={root} with {len(leaves)} leaves")
    if not leaves:
        return

    siblings = tree.siblings
    if len(leaves) > 1:
        missing = [leaf for leaf in leaves if leaf not in siblings]
        if missing:
            raise InvariantError(f"Invariant failed: leaves without sibling entry: {missing}")
    elif siblings:
        raise InvariantError(f"Invariant failed: single-leaf tree has sibling entries {siblings}")

    # A fresh build over the same leaf keys must land on the same root
    rebuilt = _rebuild_root(tree)
    if rebuilt != root:
        raise InvariantError(f"Invariant failed: rebuild gives root {rebuilt}, tree has {root}")

    if not check_paths:
        return

    counts = collections.Counter(leaves)
    hash_function = tree.hash_function
    for text, key in tree.history.items():
        if counts[key] != 1:
            continue
        try:
            path = tree.path(text)
        except ValueNotInTreeError as exc:
            raise InvariantError(f"Invariant failed: no path for leaf {text!r}") from exc
        if not tree.verify(text, path, root, hash_function=hash_function):
            raise InvariantError(f"Invariant failed: path for {text!r} does not verify: {path}")


def assert_tree_invariants_raise(tree: MerkleTree, stats: Stats) -> None:
    """Check that ``stats`` agree with ``tree``, raising :class:`InvariantError` otherwise."""
    n = tree.leaf_count()
    if stats.is_empty != tree.is_empty():
        raise InvariantError(f"Invariant failed: is_empty={stats.is_empty} for tree {tree!r}")
    if stats.leaf_count != n:
        raise InvariantError(f"Invariant failed: leaf_count={stats.leaf_count}, tree has {n}")
    if stats.distinct_leaf_count + stats.duplicate_leaf_count != n:
        raise InvariantError(
            f"Invariant failed: distinct={stats.distinct_leaf_count} + "
            f"duplicates={stats.duplicate_leaf_count} != {n}"
        )
    if n == 0:
        return
    if stats.internal_node_count != n - 1:
        raise InvariantError(f"Invariant failed: internal_node_count={stats.internal_node_count} for {n} leaves")
    if stats.sibling_entry_count > 2 * (n - 1):
        raise InvariantError(
            f"Invariant failed: sibling_entry_count={stats.sibling_entry_count} exceeds {2 * (n - 1)}"
        )
    if not stats.min_path_length <= stats.avg_path_length <= stats.max_path_length:
        raise InvariantError(
            f"Invariant failed: path lengths min={stats.min_path_length} "
            f"avg={stats.avg_path_length} max={stats.max_path_length}"
        )
    if stats.max_path_length < stats.perfect_height:
        raise InvariantError(
            f"Invariant failed: max_path_length={stats.max_path_length} below "
            f"perfect_height={stats.perfect_height}"
        )


def _rebuild_root(tree: MerkleTree) -> Optional[int]:
    """Run the queue reduction over ``tree``'s leaf keys without touching the tree."""
    queue = collections.deque(tree.leaves)
    if not queue:
        return EMPTY_ROOT
    while len(queue) > 1:
        left = queue.popleft()
        right = queue.popleft()
        queue.append(hash_parents(left, right, tree.hash_function))
    return queue[0]
