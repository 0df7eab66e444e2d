"""Tests for the ordered tree class factory"""
# pylint: skip-file

import unittest
import logging

from ordered_trees.base import Balancing, AbstractSortedCollection
from ordered_trees.factory import make_tree_classes, create_tree
from ordered_trees.ordered_tree_base import OrderedTreeBase, TreeNodeBase, ColoredNode

# Configure logging for test
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class TestTreeFactory(unittest.TestCase):
    """Test the factory pattern itself with both balancing policies"""

    def test_factory_creates_policy_classes(self):
        for balancing in Balancing:
            tree_class, node_class = make_tree_classes(balancing)
            self.assertTrue(issubclass(tree_class, OrderedTreeBase))
            self.assertTrue(issubclass(tree_class, AbstractSortedCollection))
            self.assertTrue(issubclass(node_class, TreeNodeBase))
            self.assertIs(tree_class.NodeClass, node_class)
            self.assertIs(tree_class.BALANCING, balancing)

    def test_class_names(self):
        tree_class, node_class = make_tree_classes(Balancing.RED_BLACK)
        self.assertEqual(tree_class.__name__, "RedBlackTree")
        self.assertEqual(node_class.__name__, "RedBlackNode")
        tree_class, node_class = make_tree_classes(Balancing.NONE)
        self.assertEqual(tree_class.__name__, "UnbalancedTree")
        self.assertEqual(node_class.__name__, "UnbalancedNode")

    def test_node_classes(self):
        _, rb_node = make_tree_classes(Balancing.RED_BLACK)
        _, plain_node = make_tree_classes(Balancing.NONE)
        self.assertTrue(issubclass(rb_node, ColoredNode))
        self.assertFalse(issubclass(plain_node, ColoredNode))

    def test_classes_are_cached(self):
        first = make_tree_classes(Balancing.RED_BLACK)
        second = make_tree_classes("red_black")
        self.assertIs(first[0], second[0])
        self.assertIs(first[1], second[1])

    def test_policies_get_different_classes(self):
        rb_tree, _ = make_tree_classes(Balancing.RED_BLACK)
        plain_tree, _ = make_tree_classes(Balancing.NONE)
        self.assertIsNot(rb_tree, plain_tree)

    def test_default_is_red_black(self):
        self.assertIs(create_tree().BALANCING, Balancing.RED_BLACK)

    def test_unknown_policy(self):
        with self.assertRaises(ValueError):
            make_tree_classes("avl")

    def test_create_tree_returns_fresh_empty_trees(self):
        first = create_tree(Balancing.NONE)
        second = create_tree(Balancing.NONE)
        self.assertIsNot(first, second)
        self.assertTrue(first.is_empty())
        first.insert(1)
        self.assertTrue(second.is_empty())

    def test_nodes_have_no_instance_dict(self):
        tree_class, node_class = make_tree_classes(Balancing.RED_BLACK)
        node = node_class(1)
        self.assertFalse(hasattr(node, "__dict__"))


if __name__ == "__main__":
    unittest.main()
