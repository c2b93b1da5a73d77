"""Monotonic clock abstraction and advisory per-phase timing targets."""

import time
from typing import Protocol

# Advisory budgets in milliseconds; logged against, never enforced
TIMING_TARGETS: dict[str, float] = {
    "extraction": 400,
    "tailoring": 600,
    "rendering": 800,
    "attachment": 200,
    "total": 2400,
}


class Clock(Protocol):
    def now_ms(self) -> float: ...


class MonotonicClock:
    """Wall-clock-independent milliseconds from time.perf_counter()."""

    def now_ms(self) -> float:
        return time.perf_counter() * 1000.0


def meets_target(phase: str, elapsed_ms: float) -> bool:
    return elapsed_ms <= TIMING_TARGETS[phase]
