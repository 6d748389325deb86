"""
merkle_trees — Merkle trees built by FIFO pairwise reduction.

Quick-start imports::

    from merkle_trees import MerkleTree, create_merkle_tree

    tree = MerkleTree([7, 8, 9, 10])
    proof = tree.path(8)
    assert MerkleTree.verify(8, proof, tree.root)
"""

from merkle_trees.factory import create_merkle_tree
from merkle_trees.hashing import (
    DEFAULT_SEED,
    CanonicalizationError,
    HashFunction,
    canonical_string,
    hash_parents,
    hash_value,
    parent_hash_string,
    xxh64_hash,
)
from merkle_trees.indexed_merkle_tree import IndexedMerkleTree
from merkle_trees.invariants import (
    InvariantError,
    assert_tree_invariants_raise,
    check_tree_invariants,
)
from merkle_trees.merkle_tree_base import EMPTY_ROOT, MerkleTree, ValueNotInTreeError

# Stats & invariants
from merkle_trees.tree_stats import Stats, reduction_depths, tree_stats_

__all__ = [
    "DEFAULT_SEED",
    "EMPTY_ROOT",
    "CanonicalizationError",
    "HashFunction",
    "IndexedMerkleTree",
    "InvariantError",
    "MerkleTree",
    "Stats",
    "ValueNotInTreeError",
    "assert_tree_invariants_raise",
    "canonical_string",
    "check_tree_invariants",
    "create_merkle_tree",
    "hash_parents",
    "hash_value",
    "parent_hash_string",
    "reduction_depths",
    "tree_stats_",
    "xxh64_hash",
]
