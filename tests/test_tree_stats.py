"""Tests for Merkle tree statistics and invariant checks."""

import unittest

from merkle_trees import (
    IndexedMerkleTree,
    InvariantError,
    MerkleTree,
    Stats,
    assert_tree_invariants_raise,
    check_tree_invariants,
    reduction_depths,
    tree_stats_,
)
from tests.test_merkle_tree import MANY_LEAVES


class TestReductionDepths(unittest.TestCase):

    def test_small_sizes(self):
        expected = {
            0: [],
            1: [0],
            2: [1, 1],
            3: [2, 2, 1],
            4: [2, 2, 2, 2],
            5: [3, 3, 2, 2, 2],
        }
        for n, depths in expected.items():
            with self.subTest(n=n):
                self.assertEqual(reduction_depths(n), depths)

    def test_powers_of_two_are_balanced(self):
        for exp in range(1, 8):
            with self.subTest(n=1 << exp):
                self.assertEqual(set(reduction_depths(1 << exp)), {exp})

    def test_second_leaf_of_nine_needs_four_siblings(self):
        self.assertEqual(reduction_depths(9)[1], 4)


class TestTreeStats(unittest.TestCase):

    def test_empty_tree(self):
        stats = tree_stats_(MerkleTree())
        self.assertTrue(stats.is_empty)
        self.assertEqual(stats.leaf_count, 0)
        self.assertEqual(stats.max_path_length, 0)
        assert_tree_invariants_raise(MerkleTree(), stats)

    def test_many_leaves(self):
        tree = MerkleTree(MANY_LEAVES)
        stats = tree_stats_(tree)
        self.assertFalse(stats.is_empty)
        self.assertEqual(stats.leaf_count, 9)
        self.assertEqual(stats.distinct_leaf_count, 9)
        self.assertEqual(stats.duplicate_leaf_count, 0)
        self.assertEqual(stats.internal_node_count, 8)
        self.assertEqual(stats.sibling_entry_count, 16)
        self.assertEqual(stats.perfect_height, 4)
        self.assertEqual(stats.max_path_length, 4)
        self.assertEqual(stats.min_path_length, 3)
        self.assertAlmostEqual(stats.avg_path_length, sum(reduction_depths(9)) / 9)
        assert_tree_invariants_raise(tree, stats)

    def test_duplicates_counted(self):
        tree = IndexedMerkleTree([7, 8, 7, 7])
        stats = tree_stats_(tree)
        self.assertEqual(stats.distinct_leaf_count, 2)
        self.assertEqual(stats.duplicate_leaf_count, 2)
        self.assertLess(stats.sibling_entry_count, 6)
        assert_tree_invariants_raise(tree, stats)

    def test_mismatched_stats_raise(self):
        tree = MerkleTree([1, 2, 3])
        stats = tree_stats_(tree)
        bad = Stats(**{**stats.__dict__, "leaf_count": 4})
        with self.assertRaises(InvariantError):
            assert_tree_invariants_raise(tree, bad)
        bad = Stats(**{**stats.__dict__, "max_path_length": 0})
        with self.assertRaises(InvariantError):
            assert_tree_invariants_raise(tree, bad)


class TestCheckTreeInvariants(unittest.TestCase):

    def test_valid_trees(self):
        for values in ([], [7], [7, 8], MANY_LEAVES, [7, 7, 8]):
            with self.subTest(values=values):
                check_tree_invariants(MerkleTree(values))
                check_tree_invariants(IndexedMerkleTree(values))

    def test_wrong_root(self):
        tree = MerkleTree(MANY_LEAVES)
        tree._root = tree.root ^ 1
        with self.assertRaises(InvariantError):
            check_tree_invariants(tree, check_paths=False)

    def test_root_without_leaves(self):
        tree = MerkleTree()
        tree._root = 1
        with self.assertRaises(InvariantError):
            check_tree_invariants(tree)

    def test_missing_sibling_entries(self):
        tree = MerkleTree(MANY_LEAVES)
        tree._siblings.clear()
        with self.assertRaises(InvariantError):
            check_tree_invariants(tree)

    def test_single_leaf_with_siblings(self):
        tree = MerkleTree([7])
        tree._siblings[1] = 2
        with self.assertRaises(InvariantError):
            check_tree_invariants(tree)

    def test_broken_path(self):
        tree = MerkleTree([1, 2, 3, 4])
        leaf = tree.leaves[0]
        tree._siblings[leaf] = tree.leaves[2]
        with self.assertRaises(InvariantError):
            check_tree_invariants(tree)


if __name__ == "__main__":
    unittest.main()
