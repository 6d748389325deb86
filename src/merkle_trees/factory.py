"""Factory for Merkle tree instances"""

from typing import Any, Optional, Sequence

from merkle_trees.hashing import HashFunction, xxh64_hash
from merkle_trees.indexed_merkle_tree import IndexedMerkleTree
from merkle_trees.merkle_tree_base import MerkleTree


def create_merkle_tree(
    values: Sequence[Any] = (),
    hash_function: Optional[HashFunction] = None,
    indexed: bool = False,
) -> MerkleTree:
    """
    Create a Merkle tree over ``values``.

    Parameters:
        values: Initial leaf values, in order
        hash_function: Hash used for leaves and parents; ``None`` selects
            64-bit xxHash with the default seed
        indexed (bool): Track siblings by node position so that duplicate
            values keep valid inclusion paths

    Returns:
        MerkleTree: A flat-map tree, or an IndexedMerkleTree if ``indexed``
    """
    if hash_function is None:
        hash_function = xxh64_hash
    tree_class = IndexedMerkleTree if indexed else MerkleTree
    return tree_class(values, hash_function=hash_function)
