"""Merkle tree with a flat, hash-keyed sibling map."""

from __future__ import annotations

import collections
from typing import Any, Dict, Iterable, Iterator, List, Optional

from merkle_trees.hashing import (
    CanonicalizationError,
    HashFunction,
    canonical_string,
    hash_parents,
    hash_value,
    xxh64_hash,
)
from merkle_trees.logging_config import get_logger

logger = get_logger(__name__)

# Root of a tree without leaves
EMPTY_ROOT = None


class ValueNotInTreeError(ValueError):
    """Raised when no inclusion path can be found for a value."""

    def __init__(self, value: Any):
        super().__init__(f"Value {value!r} is not part of this tree")
        self.value = value


def _flatten(values: Iterable[Any]) -> Iterator[Any]:
    """Yield values depth-first, expanding nested lists and tuples."""
    for value in values:
        if isinstance(value, (list, tuple)):
            yield from _flatten(value)
        else:
            yield value


class MerkleTree:
    """
    Binary Merkle tree built by FIFO pairwise reduction.

    The leaves are placed in a queue; the two front elements are hashed
    into a parent that goes to the back, until one hash (the root) is
    left. The resulting shape is not a balanced binary tree whenever the
    leaf count is not a power of two.

    Every combination records ``siblings[a] = b`` and ``siblings[b] = a``.
    The map is keyed by hash value, so duplicate leaves or colliding
    hashes overwrite earlier pairings (last write wins). See
    :class:`~merkle_trees.indexed_merkle_tree.IndexedMerkleTree` for a
    variant that tracks siblings by node position instead.

    Attributes:
        root (Optional[int]): Root hash, ``None`` while the tree has no leaves.
        leaves (List[int]): Leaf keys in insertion order.
    """
    __slots__ = ("_hash_function", "_leaves", "_history", "_siblings", "_root")

    def __init__(
        self,
        values: Iterable[Any] = (),
        hash_function: HashFunction = xxh64_hash,
    ) -> None:
        self._hash_function = hash_function
        self._leaves: List[int] = []
        self._history: Dict[Any, int] = {}
        self._siblings: Dict[int, int] = {}
        self._root: Optional[int] = EMPTY_ROOT
        # A lone string is one value, not a sequence of characters
        if isinstance(values, (str, bytes, bytearray)):
            values = (values,)
        self._insert(values)
        self._root = self._build()

    @property
    def root(self) -> Optional[int]:
        return self._root

    @property
    def leaves(self) -> List[int]:
        return list(self._leaves)

    @property
    def hash_function(self) -> HashFunction:
        return self._hash_function

    @property
    def history(self) -> Dict[Any, int]:
        """Canonical string of every inserted value mapped to its leaf key."""
        return dict(self._history)

    @property
    def siblings(self) -> Dict[int, int]:
        """Node hash -> the hash it was last paired with."""
        return dict(self._siblings)

    def is_empty(self) -> bool:
        return not self._leaves

    def leaf_count(self) -> int:
        return len(self._leaves)

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        if self.is_empty():
            return f"Empty {cls}"
        return f"{cls}(leaves={len(self._leaves)}, root={self._root})"

    # Public API
    def add(self, *values: Any) -> Optional[int]:
        """
        Append values as new leaves and rebuild the whole tree.

        Accepts any mix of single values and (nested) lists or tuples,
        flattened into one ordered batch. The rebuild is never
        incremental: pairings are derived again from all leaves.

        Returns:
            Optional[int]: The new root; unchanged for an empty batch.
        """
        if not self._insert(values):
            return self._root
        self._root = self._build()
        return self._root

    def leaf_hash(self, value: Any) -> int:
        """Leaf key of ``value`` under this tree's hash function."""
        return hash_value(value, self._hash_function)

    def path(self, value: Any) -> List[int]:
        """
        Return the sibling hashes leading from ``value``'s leaf to the root.

        The leaf key is recomputed, not looked up. The path is empty when
        the value's leaf key is the root itself.

        Raises:
            ValueNotInTreeError: If the chain of siblings breaks before the root.
        """
        current = self.leaf_hash(value)
        tree_path: List[int] = []
        # No leaf sits deeper than leaf_count - 1 in a queue reduction
        max_steps = len(self._leaves)
        while current != self._root:
            partner = self._siblings.get(current)
            if partner is None or len(tree_path) >= max_steps:
                logger.debug(f"No path for {value!r}: chain broke at {current} after {len(tree_path)} steps")
                raise ValueNotInTreeError(value)
            tree_path.append(partner)
            current = hash_parents(current, partner, self._hash_function)
        return tree_path

    @staticmethod
    def verify(
        value: Any,
        path: Iterable[int],
        root: Optional[int],
        hash_function: HashFunction = xxh64_hash,
    ) -> bool:
        """
        Check that folding ``path`` onto ``value``'s leaf key yields ``root``.

        Needs no tree instance. Never raises: a value without a string
        form, a ``path`` that is not iterable (such as ``None``), or a path
        that leads elsewhere, gives ``False``.
        """
        try:
            acc = hash_value(value, hash_function)
            nodes = iter(path)
        except (CanonicalizationError, TypeError):
            return False
        for node in nodes:
            acc = hash_parents(acc, node, hash_function)
        return acc == root

    # Internals
    def _insert(self, values: Iterable[Any]) -> bool:
        """Hash a batch and append it; nothing is recorded if any value fails."""
        entries = []
        for value in _flatten(values):
            text = canonical_string(value)
            entries.append((text, self._hash_function(text)))
        for text, key in entries:
            self._history[text] = key
        self._leaves.extend(key for _, key in entries)
        return bool(entries)

    def _combine(self, left: int, right: int) -> int:
        self._siblings[left] = right
        self._siblings[right] = left
        return hash_parents(left, right, self._hash_function)

    def _build(self) -> Optional[int]:
        """Reduce the current leaves to a root, recording sibling pairs."""
        self._siblings.clear()
        if not self._leaves:
            return EMPTY_ROOT

        queue = collections.deque(self._leaves)
        while len(queue) > 1:
            left = queue.popleft()
            right = queue.popleft()
            queue.append(self._combine(left, right))

        root = queue[0]
        logger.debug(f"Built {self.__class__.__name__} from {len(self._leaves)} leaves: root={root}")
        return root
