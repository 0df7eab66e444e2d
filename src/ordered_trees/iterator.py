"""Bounded in-order iterator"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, List, Optional

if TYPE_CHECKING:
    from ordered_trees.ordered_tree_base import TreeNodeBase


class BoundedIterator:
    """
    Ascending, lazily expanded in-order traversal restricted to the
    inclusive window [min_value, max_value]. Either bound may be None,
    meaning unbounded on that side.

    The stack holds the pending nodes, top being the next value in order.
    It is built from the root handed in at construction time, so the
    iterator is a snapshot: inserting into the tree while it is open gives
    undefined results.

    Duplicates are yielded once per occurrence, in sorted order.
    """
    __slots__ = ("min_value", "max_value", "_stack")

    def __init__(
        self,
        root: Optional[TreeNodeBase],
        min_value: Any = None,
        max_value: Any = None,
    ) -> None:
        self.min_value = min_value
        self.max_value = max_value
        self._stack: List[TreeNodeBase] = []
        self._push_left_spine(root)

    def _push_left_spine(self, node: Optional[TreeNodeBase]) -> None:
        """
        Push `node` and its left descendants. A node below `min_value` is
        skipped together with its left subtree (everything there is smaller
        still); the descent continues in its right subtree instead.
        """
        min_value = self.min_value
        while node is not None:
            if min_value is not None and node.value < min_value:
                node = node.right
            else:
                self._stack.append(node)
                node = node.left

    def has_next(self) -> bool:
        """
        True if the next in-order value lies inside the window. Once the
        top of the stack exceeds `max_value`, nothing after it can qualify.
        """
        if not self._stack:
            return False
        value = self._stack[-1].value
        if self.max_value is not None and value > self.max_value:
            return False
        if self.min_value is not None and value < self.min_value:
            return False
        return True

    def next(self) -> Any:
        """
        Return the next value in ascending order.

        Raises:
            StopIteration: If no value inside the window remains.
        """
        if not self.has_next():
            raise StopIteration("No more elements available")
        node = self._stack.pop()
        if node.right is not None:
            self._push_left_spine(node.right)
        return node.value

    __next__ = next

    def __iter__(self) -> "BoundedIterator":
        return self

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(min_value={self.min_value!r}, "
                f"max_value={self.max_value!r}, pending={len(self._stack)})")
