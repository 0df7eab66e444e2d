#!/usr/bin/env python3
"""
Benchmarks for the ordered tree data structure.

This script measures:
 1. Full tree build times (random_tree_of_size) per balancing policy
 2. Tree statistics of a large random tree
 3. Per-insert cost into trees of various sizes
 4. Bounded iteration over a fixed-width window

Usage:
    python -m stats.benchmarks [--space S] [--sizes 100 1000 10000] [--trials T] [--window W]
"""
import argparse
import random
import time
import gc
from pprint import pprint
from dataclasses import asdict
from statistics import mean, variance

from ordered_trees.base import Balancing
from ordered_trees.ordered_tree_base import tree_stats_
from ordered_trees.profiling import PerformanceTracker
from stats.stats_ordered_tree import random_tree_of_size

POLICIES = (Balancing.RED_BLACK, Balancing.NONE)


def bench_build_tree(sizes: list[int]) -> None:
    """Measure random_tree_of_size for various sizes and both policies."""
    for balancing in POLICIES:
        for n in sizes:
            t0 = time.perf_counter()
            _ = random_tree_of_size(n, balancing)
            elapsed = time.perf_counter() - t0
            print(f"[bench] random_tree_of_size({n}, {balancing.value}): {elapsed:.4f}s")


def bench_tree_stats(n: int) -> None:
    """Build a single random tree per policy and print its stats."""
    for balancing in POLICIES:
        tree = random_tree_of_size(n, balancing)
        stats = tree_stats_(tree)
        print(f"[bench] random_tree_of_size({n}, {balancing.value}) stats:")
        pprint(asdict(stats))


def measure_single_insert(
    n: int,
    balancing: Balancing,
    space: int,
    trials: int = 200
) -> tuple[float, float, float, float]:
    """
    Measure per-insert cost into a tree of exactly `n` values,
    averaged over `trials` independent trees.
    Returns (mean_time_s, variance_time_s, contains_avg, contains_var).
    """
    trees = [random_tree_of_size(n, balancing) for _ in range(trials)]
    values = random.sample(range(1, space), k=trials)

    gc.collect()
    gc.disable()
    try:
        contains_times = []
        for tree, value in zip(trees, values):
            t0 = time.perf_counter()
            tree.contains(value)
            contains_times.append(time.perf_counter() - t0)
    finally:
        gc.enable()

    gc.collect()
    gc.disable()
    try:
        times = []
        for tree, value in zip(trees, values):
            t0 = time.perf_counter()
            tree.insert(value)
            times.append(time.perf_counter() - t0)
    finally:
        gc.enable()

    return mean(times), variance(times), mean(contains_times), variance(contains_times)


def bench_single_insert(sizes: list[int], space: int, trials: int) -> None:
    """Run measure_single_insert for each size and policy and print results."""
    for balancing in POLICIES:
        for n in sizes:
            avg, var, contains_avg, contains_var = measure_single_insert(n, balancing, space, trials)
            print(
                f"[bench] {balancing.value:<9} insert into size {n:<7} → avg {avg*1e6:8.2f} µs   σ²={var*1e12:8.2f} µs²"
            )
            print(
                f"[bench] {balancing.value:<9} contains in size {n:<7} → avg {contains_avg*1e6:8.2f} µs   σ²={contains_var*1e12:8.2f} µs²"
            )


def bench_bounded_iteration(n: int, window: int) -> None:
    """Iterate a window of `window` consecutive values from a tree of n values."""
    tree = random_tree_of_size(n, Balancing.RED_BLACK)
    low = tree.min_value()
    high = low + window
    t0 = time.perf_counter()
    count = sum(1 for _ in tree.iterator(low, high))
    elapsed = time.perf_counter() - t0
    print(f"[bench] bounded iteration over [{low}, {high}] in size {n}: {count} values in {elapsed*1e6:.2f} µs")


def main():
    parser = argparse.ArgumentParser(description="Ordered tree benchmarks")
    parser.add_argument("--space", type=int, default=1 << 24,
                        help="Value space for insert benchmarks")
    parser.add_argument("--sizes", nargs='+', type=int, default=[100, 1000, 10_000],
                        help="Tree sizes for build and single-insert benchmarks")
    parser.add_argument("--trials", type=int, default=100,
                        help="Number of trials for single-insert benchmarks")
    parser.add_argument("--window", type=int, default=1 << 16,
                        help="Width of the value window for the iteration benchmark")
    args = parser.parse_args()

    tracker = PerformanceTracker.get_instance()
    tracker.reset()
    tracker.enable()

    print("\n=== Full Tree Build ===")
    bench_build_tree(args.sizes)

    print("\n=== Tree Stats ===")
    bench_tree_stats(max(args.sizes))

    print("\n=== Single-Insert Benchmarks ===")
    bench_single_insert(args.sizes, args.space, args.trials)

    print("\n=== Bounded Iteration ===")
    bench_bounded_iteration(max(args.sizes), args.window)

    print("\n=== Method-Level Performance Breakdown ===")
    print(tracker.report())
    tracker.disable()
    tracker.reset()

if __name__ == "__main__":
    main()
