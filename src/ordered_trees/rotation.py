"""Rotation primitive for binary search trees"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from ordered_trees.base import NullArgumentError, InvalidRelationshipError
from ordered_trees.profiling import track_performance, count_event

if TYPE_CHECKING:
    from ordered_trees.ordered_tree_base import OrderedTreeBase, TreeNodeBase

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)


@track_performance
def rotate(tree: OrderedTreeBase, child: TreeNodeBase, parent: TreeNodeBase) -> None:
    """
    Exchange the roles of `child` and its `parent`, keeping the in-order
    sequence of the tree intact.

    A left child is promoted by a right rotation, a right child by a left
    rotation. The grandparent's link to `parent` (or `tree.root` when
    `parent` is the root) is retargeted to `child`. Nodes are relinked in
    place, never copied.

    Args:
        tree: The tree owning both nodes; its root is updated when needed.
        child: The node to promote. Must be a direct child of `parent`.
        parent: The node to demote.

    Raises:
        NullArgumentError: If `child` or `parent` is None.
        InvalidRelationshipError: If `child` is not a child of `parent`.
    """
    if child is None or parent is None:
        raise NullArgumentError("rotate(): child and parent cannot be None")

    if parent.left is child:
        rotate_right(tree, child, parent)
    elif parent.right is child:
        rotate_left(tree, child, parent)
    else:
        raise InvalidRelationshipError(
            f"rotate(): {child.label()} is not a child of {parent.label()}"
        )


def rotate_right(tree: OrderedTreeBase, child: TreeNodeBase, parent: TreeNodeBase) -> None:
    """Promote `child`, the left child of `parent`."""
    if parent.left is not child:
        raise InvalidRelationshipError("rotate_right(): child must be the left child of parent")

    grandparent = parent.parent

    # child's right subtree lies between child and parent
    inner = child.right
    parent.left = inner
    if inner is not None:
        inner.parent = parent

    child.right = parent
    parent.parent = child

    _replace_child(tree, grandparent, parent, child)
    count_event("rotate.right")
    logger.debug(f"Rotated right: {child.label()} above {parent.label()}")


def rotate_left(tree: OrderedTreeBase, child: TreeNodeBase, parent: TreeNodeBase) -> None:
    """Promote `child`, the right child of `parent`."""
    if parent.right is not child:
        raise InvalidRelationshipError("rotate_left(): child must be the right child of parent")

    grandparent = parent.parent

    inner = child.left
    parent.right = inner
    if inner is not None:
        inner.parent = parent

    child.left = parent
    parent.parent = child

    _replace_child(tree, grandparent, parent, child)
    count_event("rotate.left")
    logger.debug(f"Rotated left: {child.label()} above {parent.label()}")


def _replace_child(tree, grandparent, old, new) -> None:
    """Point the link that referenced `old` at `new`."""
    new.parent = grandparent
    if grandparent is None:
        tree.root = new
    elif grandparent.left is old:
        grandparent.left = new
    else:
        grandparent.right = new
