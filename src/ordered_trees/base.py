"""Shared types for ordered trees"""

from abc import ABC, abstractmethod
from enum import Enum

from typing import Any, TypeVar, Generic


class NullArgumentError(ValueError):
    """Raised when a required value or node argument is None."""


class InvalidRelationshipError(ValueError):
    """Raised when two nodes are not in the parent/child relationship an operation requires."""


class Balancing(str, Enum):
    """Closed set of balancing policies a tree class can be generated with."""
    NONE = "none"
    RED_BLACK = "red_black"


def _key_of(obj: Any) -> Any:
    return obj.key if isinstance(obj, Item) else obj


class Item:
    """
    Represents an item (a key-value pair) for insertion in ordered trees.

    Items are ordered by key only, so two items with equal keys are
    duplicates for the tree and both are kept. An item also compares
    against a bare key, which lets callers bound an iterator or look up
    an item with the key alone.
    """
    __slots__ = ("key", "value")  # Define slots for memory efficiency

    def __init__(
            self,
            key: Any,
            value: Any = None
    ):
        """
        Initialize an Item.

        Parameters:
            key (Any): The item's sort key. Must be comparable with other keys.
            value (Any): The item's payload.

        Raises:
            NullArgumentError: If key is None.
        """
        if key is None:
            raise NullArgumentError("Item(): key cannot be None")
        self.key = key
        self.value = value

    def short_key(self) -> str:
        """Create a short representation of the key for display purposes."""
        if isinstance(self.key, (bytes, bytearray)):
            s = self.key.hex()
        else:
            s = str(self.key)

        # elide the middle of long keys
        return s if len(s) <= 10 else f"{s[:3]}...{s[-3:]}"

    def __lt__(self, other: Any) -> bool:
        return self.key < _key_of(other)

    def __le__(self, other: Any) -> bool:
        return self.key <= _key_of(other)

    def __gt__(self, other: Any) -> bool:
        return self.key > _key_of(other)

    def __ge__(self, other: Any) -> bool:
        return self.key >= _key_of(other)

    def __eq__(self, other: object) -> bool:
        if other is None:
            return False
        return self.key == _key_of(other)

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}(key={self.key!r}, value={self.value!r})"

    def __str__(self):
        return self.short_key()


T = TypeVar("T")

class AbstractSortedCollection(ABC, Generic[T]):
    """
    Abstract base class for a sorted collection of comparable values.
    Duplicates are allowed and kept.
    """

    @abstractmethod
    def insert(self, value: T) -> None:
        """
        Insert a value into the collection.

        Parameters:
            value (T): The value to insert. Must not be None.

        Raises:
            NullArgumentError: If value is None.
        """
        pass

    @abstractmethod
    def contains(self, value: T) -> bool:
        """
        Check whether a value equal to `value` is stored in the collection.

        Parameters:
            value (T): The value to look for.

        Returns:
            bool: True if an equal value is stored, False otherwise.
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """Return the number of stored values, duplicates included."""
        pass

    @abstractmethod
    def is_empty(self) -> bool:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass
