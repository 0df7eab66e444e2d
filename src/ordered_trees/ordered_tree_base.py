"""Ordered tree base implementation"""

from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Type

from ordered_trees.base import (
    AbstractSortedCollection,
    Balancing,
    NullArgumentError,
)
from ordered_trees.iterator import BoundedIterator
from ordered_trees.red_black import Color, ensure_red_property
from ordered_trees.rotation import rotate
from ordered_trees.profiling import track_performance

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    # Prevent propagation to the root logger to avoid duplicate logs
    logger.propagate = False

# When set, every insert recomputes the tree statistics and logs violated invariants
DEBUG = False


class TreeNodeBase:
    """
    A vertex of an ordered tree.

    `left` and `right` are the owning links. `parent` only navigates
    upward for rotations and the red-black fix-up.
    """
    __slots__ = ("value", "left", "right", "parent")

    def __init__(self, value: Any) -> None:
        self.value = value
        self.left: Optional[TreeNodeBase] = None
        self.right: Optional[TreeNodeBase] = None
        self.parent: Optional[TreeNodeBase] = None

    def label(self) -> str:
        """Text used for this node in debug serializations."""
        return str(self.value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.label()})"


class ColoredNode(TreeNodeBase):
    """Node of a red-black tree. New nodes start out red."""
    __slots__ = ("color",)

    def __init__(self, value: Any, color: Color = Color.RED) -> None:
        super().__init__(value)
        self.color = color

    def is_red(self) -> bool:
        return self.color is Color.RED

    def flip_color(self) -> None:
        self.color = self.color.flipped()

    def label(self) -> str:
        return f"{self.value}({self.color.value})"


class OrderedTreeBase(AbstractSortedCollection):
    """
    A binary search tree holding comparable values, duplicates included.
    Values equal to a node's value go to its left subtree.

    The factory sets:
      - NodeClass : TreeNodeBase or ColoredNode
      - BALANCING : Balancing.NONE or Balancing.RED_BLACK

    Attributes:
        root (Optional[TreeNodeBase]): The root node; None for an empty tree.
    """
    __slots__ = ("root", "_iterator_min", "_iterator_max")

    # Will be set by the factory
    NodeClass: Type[TreeNodeBase] = TreeNodeBase
    BALANCING: Balancing = Balancing.NONE

    def __init__(self, root: Optional[TreeNodeBase] = None):
        self.root: Optional[TreeNodeBase] = root
        self._iterator_min: Any = None
        self._iterator_max: Any = None

    def is_empty(self) -> bool:
        return self.root is None

    def __str__(self):
        name = self.__class__.__name__
        return f"Empty {name}" if self.is_empty() else f"{name}(root={self.root.label()})"

    __repr__ = __str__

    # Public API
    @track_performance
    def insert(self, value: Any) -> None:
        """
        Insert a value (O(depth) descent, O(log n) for red-black trees).

        Duplicates are kept and placed left of their equals. Red-black
        trees repair the red property starting from the new node and
        leave the root black.

        Args:
            value: The value to insert; must be comparable with the stored values.

        Raises:
            NullArgumentError: If value is None.
        """
        if value is None:
            raise NullArgumentError("insert(): value cannot be None")

        node = self.NodeClass(value)
        red_black = self.BALANCING is Balancing.RED_BLACK

        if self.root is None:
            self.root = node
            if red_black:
                node.color = Color.BLACK
            logger.debug(f"Inserted {node.label()} as root")
            return

        self._insert_below(node, self.root)
        logger.debug(f"Inserted {node.label()} below {node.parent.label()}")

        if red_black:
            ensure_red_property(self, node)
            self.root.color = Color.BLACK

        if DEBUG:
            _log_invariant_violations(self)

    def _insert_below(self, new_node: TreeNodeBase, subtree: TreeNodeBase) -> None:
        """Attach `new_node` at the first free slot found descending from `subtree`."""
        value = new_node.value
        cur = subtree
        while True:
            if value <= cur.value:
                if cur.left is None:
                    cur.left = new_node
                    break
                cur = cur.left
            else:
                if cur.right is None:
                    cur.right = new_node
                    break
                cur = cur.right
        new_node.parent = cur

    def contains(self, value: Any) -> bool:
        """Return True if a value equal to `value` is stored. O(depth)."""
        if value is None:
            return False
        cur = self.root
        while cur is not None:
            if value == cur.value:
                return True
            cur = cur.left if value < cur.value else cur.right
        return False

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def size(self) -> int:
        """Count the nodes by walking the whole tree; O(n), nothing is cached."""
        count = 0
        pending = [self.root] if self.root is not None else []
        while pending:
            node = pending.pop()
            count += 1
            if node.left is not None:
                pending.append(node.left)
            if node.right is not None:
                pending.append(node.right)
        return count

    def __len__(self) -> int:
        return self.size()

    def clear(self) -> None:
        self.root = None

    def rotate(self, child: TreeNodeBase, parent: TreeNodeBase) -> None:
        """Rotate `child` above `parent`. See ordered_trees.rotation.rotate."""
        rotate(self, child, parent)

    def min_value(self) -> Any:
        """Leftmost value, or None for an empty tree."""
        cur = self.root
        if cur is None:
            return None
        while cur.left is not None:
            cur = cur.left
        return cur.value

    def max_value(self) -> Any:
        """Rightmost value, or None for an empty tree."""
        cur = self.root
        if cur is None:
            return None
        while cur.right is not None:
            cur = cur.right
        return cur.value

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path."""
        height = 0
        level = [self.root] if self.root is not None else []
        while level:
            height += 1
            level = [c for n in level for c in (n.left, n.right) if c is not None]
        return height

    # Iteration
    def set_iterator_min(self, min_value: Any) -> None:
        """Store a lower bound used by iter(tree); None removes it."""
        self._iterator_min = min_value

    def set_iterator_max(self, max_value: Any) -> None:
        """Store an upper bound used by iter(tree); None removes it."""
        self._iterator_max = max_value

    def iterator(self, min_value: Any = None, max_value: Any = None) -> BoundedIterator:
        """
        Return a fresh iterator over the values in [min_value, max_value],
        in ascending order. A bound left as None falls back to the one
        stored with set_iterator_min / set_iterator_max, if any.

        The iterator is built from the current root; do not insert into the
        tree while it is in use.
        """
        if min_value is None:
            min_value = self._iterator_min
        if max_value is None:
            max_value = self._iterator_max
        return BoundedIterator(self.root, min_value, max_value)

    def __iter__(self) -> Iterator[Any]:
        return self.iterator()

    # Debug serializations
    def to_in_order_string(self) -> str:
        """In-order node labels, e.g. "[ 1, 2, 3 ]"; "[ ]" when empty."""
        labels = [node.label() for node in _iter_nodes_in_order(self.root)]
        return _bracket(labels)

    def to_level_order_string(self) -> str:
        """Breadth-first node labels, e.g. "[ 2(b), 1(r), 3(r) ]"; "[ ]" when empty."""
        labels = []
        queue = deque([self.root] if self.root is not None else [])
        while queue:
            node = queue.popleft()
            labels.append(node.label())
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)
        return _bracket(labels)

    def print_structure(self, indent: int = 0, max_depth: Optional[int] = None) -> str:
        prefix = ' ' * indent
        if self.is_empty():
            return f"{prefix}Empty {self.__class__.__name__}"

        result = [f"{prefix}{self.__class__.__name__}(balancing={self.BALANCING.value})"]

        def _walk(node, depth, tag):
            pad = prefix + ' ' * (4 * (depth + 1))
            if node is None:
                result.append(f"{pad}{tag}Empty")
                return
            if max_depth is not None and depth > max_depth:
                result.append(f"{pad}... (max depth reached)")
                return
            result.append(f"{pad}{tag}{node.label()}")
            if node.left is not None or node.right is not None:
                _walk(node.left, depth + 1, "L: ")
                _walk(node.right, depth + 1, "R: ")

        _walk(self.root, 0, "")
        return "\n".join(result)


def _bracket(labels: List[str]) -> str:
    if not labels:
        return "[ ]"
    return "[ " + ", ".join(labels) + " ]"


def _iter_nodes_in_order(root: Optional[TreeNodeBase]) -> Iterator[TreeNodeBase]:
    stack: List[TreeNodeBase] = []
    cur = root
    while stack or cur is not None:
        while cur is not None:
            stack.append(cur)
            cur = cur.left
        cur = stack.pop()
        yield cur
        cur = cur.right


def collect_values(tree: OrderedTreeBase) -> List[Any]:
    """All stored values in in-order sequence."""
    return [node.value for node in _iter_nodes_in_order(tree.root)]


# Boolean Stats fields that must all hold for a well-formed tree
TREE_FLAGS = (
    "is_search_tree",
    "parent_links_consistent",
    "root_is_black",
    "no_red_red",
    "black_height_uniform",
)


@dataclass
class Stats:
    node_count: int
    height: int
    black_height: int
    least_value: Optional[Any]
    greatest_value: Optional[Any]
    is_search_tree: bool
    parent_links_consistent: bool
    root_is_black: bool
    no_red_red: bool
    black_height_uniform: bool


def tree_stats_(t: Optional[OrderedTreeBase]) -> Stats:
    """
    Returns aggregated statistics for an ordered tree in **O(n)** time.

    Color related flags are True for trees whose nodes carry no color;
    `black_height` is -1 for those and for trees with unequal black-heights.
    """
    if t is None or t.is_empty():
        return _empty_stats()

    root = t.root
    stats = _node_stats_(root)
    stats.parent_links_consistent = stats.parent_links_consistent and root.parent is None
    if isinstance(root, ColoredNode):
        stats.root_is_black = not root.is_red()
    if not stats.black_height_uniform or not isinstance(root, ColoredNode):
        stats.black_height = -1
    return stats


def _empty_stats() -> Stats:
    return Stats(node_count          = 0,
                 height              = 0,
                 black_height        = 0,
                 least_value         = None,
                 greatest_value      = None,
                 is_search_tree      = True,
                 parent_links_consistent = True,
                 root_is_black       = True,
                 no_red_red          = True,
                 black_height_uniform = True,)


def _node_stats_(node: Optional[TreeNodeBase]) -> Stats:
    if node is None:
        return _empty_stats()

    left_stats = _node_stats_(node.left)
    right_stats = _node_stats_(node.right)
    colored = isinstance(node, ColoredNode)

    stats = _empty_stats()
    stats.node_count = 1 + left_stats.node_count + right_stats.node_count
    stats.height = 1 + max(left_stats.height, right_stats.height)
    stats.least_value = left_stats.least_value if node.left is not None else node.value
    stats.greatest_value = right_stats.greatest_value if node.right is not None else node.value

    # ---------- search tree: left <= node <= right -----------------------
    # Inserts send equals left, but a rotation can move an equal value to
    # the right of its twin, so only the non-strict order is invariant.
    order_ok = True
    if node.left is not None and left_stats.greatest_value > node.value:
        order_ok = False
    if node.right is not None and right_stats.least_value < node.value:
        order_ok = False
    stats.is_search_tree = order_ok and left_stats.is_search_tree and right_stats.is_search_tree

    links_ok = all(child.parent is node for child in (node.left, node.right) if child is not None)
    stats.parent_links_consistent = (
        links_ok
        and left_stats.parent_links_consistent
        and right_stats.parent_links_consistent
    )

    # ---------- red-black properties -------------------------------------
    if colored:
        red_red = node.is_red() and any(
            isinstance(c, ColoredNode) and c.is_red() for c in (node.left, node.right)
        )
        stats.no_red_red = not red_red and left_stats.no_red_red and right_stats.no_red_red
        stats.black_height_uniform = (
            left_stats.black_height_uniform
            and right_stats.black_height_uniform
            and left_stats.black_height == right_stats.black_height
        )
        stats.black_height = left_stats.black_height + (0 if node.is_red() else 1)
    else:
        stats.no_red_red = left_stats.no_red_red and right_stats.no_red_red
        stats.black_height_uniform = left_stats.black_height_uniform and right_stats.black_height_uniform

    return stats


def _log_invariant_violations(tree: OrderedTreeBase) -> None:
    stats = tree_stats_(tree)
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logger.error(f"Invariant failed after insert: {flag} is False")
