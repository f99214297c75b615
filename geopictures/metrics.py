"""Per-call timing and counters for picture construction."""

from __future__ import annotations

import time
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import DefaultDict, Iterator


@dataclass
class ConstructionMetrics:
    """Telemetry context handed explicitly to construction calls.

    Nothing here is process-global: callers that want numbers create a
    context, pass it in, and read it afterwards.
    """

    timings: DefaultDict[str, float] = field(default_factory=lambda: defaultdict(float))
    counters: DefaultDict[str, int] = field(default_factory=lambda: defaultdict(int))

    @contextmanager
    def measure(self, phase: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.timings[phase] += time.perf_counter() - start

    def increment(self, counter: str, amount: int = 1) -> None:
        self.counters[counter] += amount

    def merge(self, other: "ConstructionMetrics") -> None:
        for phase, seconds in other.timings.items():
            self.timings[phase] += seconds
        for counter, value in other.counters.items():
            self.counters[counter] += value

    def summary(self) -> str:
        timings = ", ".join(f"{phase}={seconds * 1000:.2f}ms" for phase, seconds in sorted(self.timings.items()))
        counters = ", ".join(f"{name}={value}" for name, value in sorted(self.counters.items()))
        return f"timings[{timings}] counters[{counters}]"


__all__ = ["ConstructionMetrics"]
