"""Statistics and random builders for ordered trees."""
# pylint: skip-file

import logging
import time
from statistics import mean
from typing import Any, List, Optional, Tuple, Union
from pprint import pprint
from dataclasses import asdict
import numpy as np

from ordered_trees.base import Balancing, Item
from ordered_trees.factory import create_tree
from ordered_trees.ordered_tree_base import (
    OrderedTreeBase,
    Stats,
    TREE_FLAGS,
    tree_stats_,
    collect_values,
)


class InvariantError(Exception):
    """Raised when an ordered tree invariant is violated."""
    pass


def assert_invariants(t: OrderedTreeBase, stats: Stats) -> None:
    """Check all invariants, but only log ERROR messages on failures."""
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logging.error("Invariant failed: %s is False", flag)

    if not t.is_empty() and stats.node_count <= 0:
        logging.error(
            "Invariant failed: node_count=%d ≤ 0 for non-empty tree",
            stats.node_count
        )


def assert_tree_invariants_raise(t: OrderedTreeBase, stats: Optional[Stats] = None) -> None:
    """Check all invariants, raising InvariantError on the first failure."""
    if stats is None:
        stats = tree_stats_(t)

    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            raise InvariantError(f"Invariant failed: {flag} is False")

    if not t.is_empty():
        if stats.node_count <= 0:
            raise InvariantError(f"Invariant failed: node_count={stats.node_count} ≤ 0 for non-empty tree")
        if stats.least_value is None or stats.greatest_value is None:
            raise InvariantError("Invariant failed: least/greatest value is None for non-empty tree")
        if t.BALANCING is Balancing.RED_BLACK and stats.black_height <= 0:
            raise InvariantError(f"Invariant failed: black_height={stats.black_height} for red-black tree")


def create_ordered_tree(values, balancing: Union[Balancing, str] = Balancing.RED_BLACK) -> OrderedTreeBase:
    """Build a tree by inserting each value in the given order."""
    tree = create_tree(balancing)
    tree_insert = tree.insert
    for value in values:
        tree_insert(value)
    return tree


def random_values(
    n: int,
    space: Optional[int] = None,
    duplicates: bool = False,
    seed: Optional[int] = None,
) -> List[int]:
    """
    Draw n integer values from range(space).

    Without duplicates the values are distinct (a random permutation slice);
    with duplicates they are drawn uniformly with replacement.
    """
    if space is None:
        space = 1 << 24
    if not duplicates and space < n:
        raise ValueError(f"Value space too small! Required: {n}, Available: {space}")

    rng = np.random.default_rng(seed)
    if duplicates:
        drawn = rng.integers(0, space, size=n)
    else:
        drawn = rng.choice(space, size=n, replace=False)
    return [int(v) for v in drawn]


def random_tree_of_size(
    n: int,
    balancing: Union[Balancing, str] = Balancing.RED_BLACK,
    duplicates: bool = False,
    seed: Optional[int] = None,
) -> OrderedTreeBase:
    """Create a random tree with n integer values."""
    space = max(4, n // 2) if duplicates else 1 << 24
    return create_ordered_tree(random_values(n, space, duplicates, seed), balancing)


def random_item_tree(
    n: int,
    balancing: Union[Balancing, str] = Balancing.RED_BLACK,
    seed: Optional[int] = None,
) -> OrderedTreeBase:
    """Create a random tree of Items keyed by a small key space (so keys repeat)."""
    keys = random_values(n, space=max(4, n // 3), duplicates=True, seed=seed)
    return create_ordered_tree((Item(k, f"val_{i}") for i, k in enumerate(keys)), balancing)


def check_values_in_order(
    tree: OrderedTreeBase,
    expected_values: Optional[List[Any]] = None
) -> Tuple[List[Any], bool, bool]:
    """
    Collect the tree's values in order and compute:
      1. presence_ok: if `expected_values` is given, is the multiset of values identical?
                      otherwise always True.
      2. order_ok:    is the in-order sequence non-decreasing?

    Returns:
        (values, presence_ok, order_ok)
    """
    values = collect_values(tree)
    order_ok = all(a <= b for a, b in zip(values, values[1:]))

    presence_ok = True
    if expected_values is not None:
        presence_ok = values == sorted(expected_values)

    return values, presence_ok, order_ok


def check_equals_kept_left(tree: OrderedTreeBase) -> bool:
    """
    Return True if every node's right subtree holds only values strictly
    greater than the node's own value.

    Holds for unbalanced trees, where inserts send equal values left and
    nothing rotates. Red-black rotations may lift a duplicate above its
    twin, so this check is stricter than Stats.is_search_tree.
    """
    def _walk(node):
        # returns (ok, least value in subtree)
        if node is None:
            return True, None
        left_ok, left_least = _walk(node.left)
        right_ok, right_least = _walk(node.right)
        ok = left_ok and right_ok and (right_least is None or right_least > node.value)
        return ok, left_least if node.left is not None else node.value

    return _walk(tree.root)[0]


def repeated_experiment(
        size: int,
        repetitions: int,
        balancing: Union[Balancing, str] = Balancing.RED_BLACK,
    ) -> None:
    """
    Repeatedly builds random trees with `size` values, checks their
    invariants and logs average height, black-height and build time.
    """
    heights = []
    black_heights = []
    build_times = []
    for _ in range(repetitions):
        t0 = time.perf_counter()
        tree = random_tree_of_size(size, balancing)
        build_times.append(time.perf_counter() - t0)

        stats = tree_stats_(tree)
        assert_invariants(tree, stats)
        heights.append(stats.height)
        black_heights.append(stats.black_height)

    logging.info("n = %d, repetitions = %d, balancing = %s", size, repetitions, Balancing(balancing).value)
    logging.info("avg height       = %.2f (max %d)", mean(heights), max(heights))
    logging.info("avg black-height = %.2f", mean(black_heights))
    logging.info("avg build time   = %.6fs", mean(build_times))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    for n in (10, 100, 1000, 10_000):
        repeated_experiment(n, 20, Balancing.RED_BLACK)
        repeated_experiment(n, 20, Balancing.NONE)
    pprint(asdict(tree_stats_(random_tree_of_size(1000))))
