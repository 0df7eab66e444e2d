"""
Ordered trees - binary search trees with optional red-black balancing.

This package provides an ordered tree whose balancing policy is chosen
through a class factory, a rotation primitive, and a bounded in-order
iterator.
"""

from ordered_trees.base import (
    Item,
    Balancing,
    AbstractSortedCollection,
    NullArgumentError,
    InvalidRelationshipError,
)
from ordered_trees.ordered_tree_base import (
    OrderedTreeBase,
    TreeNodeBase,
    ColoredNode,
    Stats,
    TREE_FLAGS,
    tree_stats_,
    collect_values,
)
from ordered_trees.red_black import Color
from ordered_trees.rotation import rotate
from ordered_trees.iterator import BoundedIterator
from ordered_trees.factory import (
    make_tree_classes,
    create_tree,
)

__all__ = [
    'Item',
    'Balancing',
    'AbstractSortedCollection',
    'NullArgumentError',
    'InvalidRelationshipError',
    'OrderedTreeBase',
    'TreeNodeBase',
    'ColoredNode',
    'Stats',
    'TREE_FLAGS',
    'tree_stats_',
    'collect_values',
    'Color',
    'rotate',
    'BoundedIterator',
    'make_tree_classes',
    'create_tree',
]
