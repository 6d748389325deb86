"""Merkle tree variant that tracks siblings by node position."""

from __future__ import annotations

import collections
from typing import Any, List, Optional

from merkle_trees.merkle_tree_base import EMPTY_ROOT, MerkleTree, ValueNotInTreeError
from merkle_trees.logging_config import get_logger

logger = get_logger(__name__)


class IndexedMerkleTree(MerkleTree):
    """
    :class:`MerkleTree` whose inclusion paths survive duplicate hashes.

    The build is the same FIFO reduction and produces the same root, but
    every node produced during it gets a position: leaves take positions
    ``0 .. n-1`` and each parent is appended after them. For each
    position the parent and sibling positions are stored, so a path is
    a walk up parent links rather than a lookup by hash value.

    The flat ``siblings`` view is still maintained.
    """
    __slots__ = ("_nodes", "_parent", "_sibling")

    def __init__(self, *args, **kwargs) -> None:
        self._nodes: List[int] = []
        self._parent: List[int] = []
        self._sibling: List[int] = []
        super().__init__(*args, **kwargs)

    def path(self, value: Any) -> List[int]:
        """
        Return the sibling hashes from the first leaf holding ``value`` to the root.

        Raises:
            ValueNotInTreeError: If no leaf holds ``value``'s leaf key.
        """
        key = self.leaf_hash(value)
        try:
            pos = self._leaves.index(key)
        except ValueError:
            logger.debug(f"No leaf with key {key} for {value!r}")
            raise ValueNotInTreeError(value) from None

        tree_path: List[int] = []
        while self._parent[pos] != -1:
            tree_path.append(self._nodes[self._sibling[pos]])
            pos = self._parent[pos]
        return tree_path

    def node_count(self) -> int:
        """Number of leaf and internal nodes produced by the last build."""
        return len(self._nodes)

    def depth(self, position: int) -> int:
        """Number of combination steps between a node position and the root."""
        steps = 0
        while self._parent[position] != -1:
            position = self._parent[position]
            steps += 1
        return steps

    def _build(self) -> Optional[int]:
        self._siblings.clear()
        self._nodes = list(self._leaves)
        # -1 marks "none": the root has no parent and no sibling
        self._parent = [-1] * len(self._nodes)
        self._sibling = [-1] * len(self._nodes)
        if not self._nodes:
            return EMPTY_ROOT

        queue = collections.deque(range(len(self._nodes)))
        while len(queue) > 1:
            left = queue.popleft()
            right = queue.popleft()
            parent = len(self._nodes)
            self._nodes.append(self._combine(self._nodes[left], self._nodes[right]))
            self._parent.append(-1)
            self._sibling.append(-1)
            self._parent[left] = self._parent[right] = parent
            self._sibling[left] = right
            self._sibling[right] = left
            queue.append(parent)

        root = self._nodes[queue[0]]
        logger.debug(f"Built {self.__class__.__name__} from {len(self._leaves)} leaves: "
                     f"{len(self._nodes)} nodes, root={root}")
        return root
