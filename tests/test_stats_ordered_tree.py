"""Tests for tree statistics and invariant detection"""
# pylint: skip-file

import unittest
from unittest.mock import patch
import logging
from dataclasses import fields

from ordered_trees.base import Balancing
from ordered_trees.factory import make_tree_classes
from ordered_trees.red_black import Color
from ordered_trees.ordered_tree_base import TREE_FLAGS, Stats, tree_stats_
import stats.stats_ordered_tree as stats_helpers
import tests.utils as test_utils
from stats.stats_ordered_tree import (
    InvariantError,
    assert_tree_invariants_raise,
    check_values_in_order,
    create_ordered_tree,
    random_tree_of_size,
    random_values,
)

# Configure logging for test
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

R, B = Color.RED, Color.BLACK


class TestTreeStatsValidTrees(unittest.TestCase):

    def test_flags_are_shared_stats_fields(self):
        self.assertIs(stats_helpers.TREE_FLAGS, TREE_FLAGS)
        self.assertIs(test_utils.TREE_FLAGS, TREE_FLAGS)
        names = {f.name for f in fields(Stats)}
        for flag in TREE_FLAGS:
            self.assertIn(flag, names)

    def test_empty_tree(self):
        stats = tree_stats_(create_ordered_tree([], Balancing.RED_BLACK))
        self.assertEqual(stats.node_count, 0)
        self.assertEqual(stats.height, 0)
        self.assertIsNone(stats.least_value)
        self.assertTrue(stats.is_search_tree)

    def test_none_tree(self):
        self.assertEqual(tree_stats_(None).node_count, 0)

    def test_red_black_scenario(self):
        tree = create_ordered_tree([20, 15, 25, 1, 16], Balancing.RED_BLACK)
        stats = tree_stats_(tree)
        self.assertEqual(stats.node_count, 5)
        self.assertEqual(stats.height, 3)
        self.assertEqual(stats.black_height, 2)
        self.assertEqual(stats.least_value, 1)
        self.assertEqual(stats.greatest_value, 25)
        self.assertTrue(stats.root_is_black)
        self.assertTrue(stats.no_red_red)
        self.assertTrue(stats.black_height_uniform)

    def test_unbalanced_tree_has_no_black_height(self):
        stats = tree_stats_(create_ordered_tree([2, 1, 3], Balancing.NONE))
        self.assertEqual(stats.black_height, -1)
        self.assertTrue(stats.root_is_black)
        self.assertTrue(stats.no_red_red)

    def test_random_tree_of_size(self):
        for balancing in Balancing:
            tree = random_tree_of_size(200, balancing, seed=3)
            stats = tree_stats_(tree)
            self.assertEqual(stats.node_count, 200)
            assert_tree_invariants_raise(tree, stats)

    def test_random_values_are_distinct_without_duplicates(self):
        values = random_values(100, space=100, seed=0)
        self.assertEqual(sorted(values), list(range(100)))

    def test_random_values_space_too_small(self):
        with self.assertRaises(ValueError):
            random_values(10, space=5)

    def test_check_values_in_order(self):
        tree = create_ordered_tree([3, 1, 2, 2], Balancing.RED_BLACK)
        values, presence_ok, order_ok = check_values_in_order(tree, [2, 2, 1, 3])
        self.assertEqual(values, [1, 2, 2, 3])
        self.assertTrue(presence_ok)
        self.assertTrue(order_ok)
        _, presence_ok, _ = check_values_in_order(tree, [1, 2, 3])
        self.assertFalse(presence_ok)


class TestTreeStatsInvalidProperties(unittest.TestCase):
    """Hand-built trees that break one invariant each"""

    def setUp(self):
        self.TreeClass, self.NodeClass = make_tree_classes(Balancing.RED_BLACK)

    def _node(self, value, color, left=None, right=None):
        node = self.NodeClass(value, color)
        node.left, node.right = left, right
        for child in (left, right):
            if child is not None:
                child.parent = node
        return node

    def test_red_root(self):
        tree = self.TreeClass(self._node(2, R, self._node(1, B), self._node(3, B)))
        stats = tree_stats_(tree)
        self.assertFalse(stats.root_is_black)
        with self.assertRaises(InvariantError):
            assert_tree_invariants_raise(tree, stats)

    def test_red_red_edge(self):
        tree = self.TreeClass(self._node(3, B, self._node(2, R, self._node(1, R)), None))
        stats = tree_stats_(tree)
        self.assertFalse(stats.no_red_red)
        # black-heights still agree; only the red property is broken
        self.assertTrue(stats.black_height_uniform)
        self.assertEqual(stats.black_height, 1)

    def test_unequal_black_height(self):
        tree = self.TreeClass(self._node(2, B, self._node(1, B), None))
        stats = tree_stats_(tree)
        self.assertFalse(stats.black_height_uniform)
        self.assertEqual(stats.black_height, -1)
        self.assertTrue(stats.no_red_red)

    def test_order_violation(self):
        tree = self.TreeClass(self._node(2, B, self._node(3, R), self._node(1, R)))
        stats = tree_stats_(tree)
        self.assertFalse(stats.is_search_tree)
        with self.assertRaises(InvariantError):
            assert_tree_invariants_raise(tree)

    def test_deep_order_violation(self):
        # 6 sits in the left subtree of 5
        left = self._node(2, B, self._node(1, R), self._node(6, R))
        tree = self.TreeClass(self._node(5, B, left, self._node(8, B)))
        self.assertFalse(tree_stats_(tree).is_search_tree)

    def test_broken_parent_link(self):
        root = self._node(2, B, self._node(1, R), self._node(3, R))
        root.right.parent = root.left
        stats = tree_stats_(self.TreeClass(root))
        self.assertFalse(stats.parent_links_consistent)

    def test_root_with_parent(self):
        root = self._node(2, B)
        root.parent = self._node(9, B)
        self.assertFalse(tree_stats_(self.TreeClass(root)).parent_links_consistent)


class TestDebugInvariantLogging(unittest.TestCase):

    def test_debug_flag_checks_each_insert(self):
        import ordered_trees.ordered_tree_base as otb
        with patch.object(otb, "DEBUG", True), \
                patch.object(otb, "_log_invariant_violations") as check:
            create_ordered_tree([1, 2, 3], Balancing.RED_BLACK)
        # the first insert only sets the root
        self.assertEqual(check.call_count, 2)

    def test_debug_flag_logs_nothing_for_valid_tree(self):
        import ordered_trees.ordered_tree_base as otb
        with patch.object(otb, "DEBUG", True), \
                patch.object(otb.logger, "error") as log_error:
            create_ordered_tree(random_values(50, seed=5), Balancing.RED_BLACK)
        log_error.assert_not_called()


if __name__ == "__main__":
    unittest.main()
