"""Shared test configuration, pytest markers and fixtures."""

import pytest

from services.fingerprint_cache import FingerprintCache
from services.pipeline.capabilities import CapabilityRegistry


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: drives the FastAPI app end to end"
    )


class StepClock:
    """Deterministic clock: each reading advances by `step` milliseconds."""

    def __init__(self, step: float = 1.0) -> None:
        self.step = step
        self.current = 0.0

    def now_ms(self) -> float:
        self.current += self.step
        return self.current


@pytest.fixture
def cache():
    return FingerprintCache()


@pytest.fixture
def capabilities():
    registry = CapabilityRegistry()
    yield registry
    registry.clear()


@pytest.fixture
def step_clock():
    return StepClock()


@pytest.fixture
def slow_clock():
    """Every reading jumps 5 seconds, so any measured phase blows its budget."""
    return StepClock(step=5000.0)
