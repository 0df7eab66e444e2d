"""Timing and event counting for ordered tree operations."""

import time
import functools
from typing import Dict, List, Callable, Optional
from dataclasses import dataclass, field
import statistics
from collections import defaultdict, Counter

@dataclass
class MethodMetrics:
    """Timings collected for one tracked callable."""
    times: List[float] = field(default_factory=list)
    total_time: float = 0.0

    def add_measurement(self, elapsed: float) -> None:
        self.times.append(elapsed)
        self.total_time += elapsed

    @property
    def call_count(self) -> int:
        return len(self.times)

    @property
    def min_time(self) -> float:
        return min(self.times, default=0.0)

    @property
    def max_time(self) -> float:
        return max(self.times, default=0.0)

    @property
    def avg_time(self) -> float:
        return self.total_time / self.call_count if self.times else 0

    @property
    def median_time(self) -> float:
        return statistics.median(self.times) if self.times else 0

    def __str__(self) -> str:
        return (f"Calls: {self.call_count}, "
                f"Total: {self.total_time:.6f}s, "
                f"Avg: {self.avg_time:.6f}s, "
                f"Min: {self.min_time:.6f}s, "
                f"Max: {self.max_time:.6f}s, "
                f"Median: {self.median_time:.6f}s")


class PerformanceTracker:
    """
    Process-wide collector for two kinds of data:

    * timings of callables wrapped with @track_performance
      (tree insert, rotate, red-black fix-up);
    * counts of structural events reported with count_event(), such as
      "rotate.left", "rotate.right", "fixup.red_aunt", "fixup.zig_zag"
      and "fixup.zig_zig".

    Both are dropped by reset() and ignored while the tracker is disabled.
    The tracker starts disabled; call enable() to start collecting.
    """

    _instance = None

    @classmethod
    def get_instance(cls) -> 'PerformanceTracker':
        """Singleton accessor."""
        if cls._instance is None:
            cls._instance = PerformanceTracker()
        return cls._instance

    def __init__(self):
        self.metrics: Dict[str, MethodMetrics] = defaultdict(MethodMetrics)
        self.counters: Counter = Counter()
        self.enabled = False

    def add_measurement(self, method_name: str, elapsed: float) -> None:
        if self.enabled:
            self.metrics[method_name].add_measurement(elapsed)

    def increment(self, event: str, amount: int = 1) -> None:
        if self.enabled:
            self.counters[event] += amount

    def counter(self, event: str) -> int:
        """How often `event` was counted since the last reset."""
        return self.counters.get(event, 0)

    def reset(self) -> None:
        self.metrics.clear()
        self.counters.clear()

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def report(self, sort_by: str = 'total_time') -> str:
        """Render the timing table followed by the event table."""
        if not self.metrics and not self.counters:
            return "No performance data collected."

        lines = ["Performance Metrics:"]
        lines.extend(self._timing_lines(sort_by))
        if self.counters:
            lines.extend(self._counter_lines())
        return "\n".join(lines)

    def _timing_lines(self, sort_by: str) -> List[str]:
        rule = "-" * 80
        lines = [rule,
                 f"{'Method':<40} {'Calls':>8} {'Total (s)':>12} {'Avg (s)':>12} {'Median (s)':>12}",
                 rule]
        ranked = sorted(self.metrics.items(),
                        key=lambda kv: getattr(kv[1], sort_by),
                        reverse=True)
        for name, m in ranked:
            lines.append(f"{name:<40} {m.call_count:>8} {m.total_time:>12.6f} "
                         f"{m.avg_time:>12.6f} {m.median_time:>12.6f}")
        return lines

    def _counter_lines(self) -> List[str]:
        rule = "-" * 80
        lines = [rule, f"{'Event':<40} {'Count':>8}", rule]
        for event, count in self.counters.most_common():
            lines.append(f"{event:<40} {count:>8}")
        return lines


def track_performance(method: Optional[Callable] = None, *,
                      tag: Optional[str] = None) -> Callable:
    """
    Decorator recording the wall-clock time of each call in the tracker.

    Usable bare (@track_performance) or with a tag
    (@track_performance(tag="name")); the tag defaults to the
    function's qualified name.
    """
    def decorator(func):
        name = tag or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            tracker = PerformanceTracker.get_instance()
            if not tracker.enabled:
                return func(*args, **kwargs)
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                tracker.add_measurement(name, time.perf_counter() - start_time)
        return wrapper

    if method is None:
        return decorator
    return decorator(method)


def count_event(event: str, amount: int = 1) -> None:
    """Count a structural event on the shared tracker."""
    PerformanceTracker.get_instance().increment(event, amount)
