"""Utility functions for testing ordered tree invariants."""

from ordered_trees.base import Balancing
from ordered_trees.ordered_tree_base import (
    OrderedTreeBase,
    Stats,
    TREE_FLAGS,
)

def assert_tree_invariants_tc(tc, t: OrderedTreeBase, stats: Stats) -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False\n{t.print_structure()}"
        )

    if not t.is_empty():
        tc.assertGreater(
            stats.node_count, 0,
            f"Invariant failed: node_count={stats.node_count} ≤ 0 for non-empty tree"
        )
        tc.assertEqual(
            t.size(), stats.node_count,
            f"Invariant failed: size()={t.size()} ≠ node_count={stats.node_count}"
        )
        tc.assertIsNotNone(
            stats.least_value,
            "Invariant failed: least_value is None for non-empty tree"
        )
        tc.assertIsNotNone(
            stats.greatest_value,
            "Invariant failed: greatest_value is None for non-empty tree"
        )
        if t.BALANCING is Balancing.RED_BLACK:
            tc.assertGreater(
                stats.black_height, 0,
                f"Invariant failed: black_height={stats.black_height} for red-black tree"
            )
