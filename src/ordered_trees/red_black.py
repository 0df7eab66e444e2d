"""Red-black insertion fix-up"""

from __future__ import annotations
import logging
from enum import Enum
from typing import TYPE_CHECKING, Optional

from ordered_trees.rotation import rotate
from ordered_trees.profiling import track_performance, count_event

if TYPE_CHECKING:
    from ordered_trees.ordered_tree_base import OrderedTreeBase, ColoredNode

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)


class Color(Enum):
    """Node color; the value is the suffix used in debug serializations."""
    RED = "r"
    BLACK = "b"

    def flipped(self) -> "Color":
        return Color.BLACK if self is Color.RED else Color.RED


def is_red(node: Optional[ColoredNode]) -> bool:
    """Absent children count as black."""
    return node is not None and node.color is Color.RED


@track_performance
def ensure_red_property(tree: OrderedTreeBase, node: ColoredNode) -> None:
    """
    Repair a red-red violation between the red `node` and its parent.

    Walks upward from `node` while the red-aunt case keeps pushing the
    violation toward the root. Each step handles exactly one of:

    * red aunt: recolor parent and aunt black, grandparent red, continue
      from the grandparent;
    * zig-zag (black aunt, node and parent on opposite sides): rotate node
      over parent, then over grandparent; node becomes black, grandparent red;
    * zig-zig (black aunt, node and parent on the same side): rotate parent
      over grandparent; parent becomes black, grandparent red.

    The root may be left red; the caller forces it black afterwards.
    """
    while True:
        parent = node.parent
        if parent is None or not is_red(parent):
            return

        grandparent = parent.parent
        if grandparent is None:
            return

        parent_is_left = grandparent.left is parent
        aunt = grandparent.right if parent_is_left else grandparent.left

        if is_red(aunt):
            parent.flip_color()
            aunt.flip_color()
            grandparent.flip_color()
            count_event("fixup.red_aunt")
            logger.debug(f"Red aunt at {grandparent.label()}: recolored, moving up")
            node = grandparent
            continue

        node_is_left = parent.left is node
        if node_is_left != parent_is_left:
            rotate(tree, node, parent)
            rotate(tree, node, grandparent)
            node.color = Color.BLACK
            grandparent.color = Color.RED
            count_event("fixup.zig_zag")
            logger.debug(f"Zig-zag at {grandparent.label()}: {node.label()} promoted")
        else:
            rotate(tree, parent, grandparent)
            parent.color = Color.BLACK
            grandparent.color = Color.RED
            count_event("fixup.zig_zig")
            logger.debug(f"Zig-zig at {grandparent.label()}: {parent.label()} promoted")
        return
