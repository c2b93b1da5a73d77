import pytest

from services.pipeline.timing import TIMING_TARGETS, MonotonicClock, meets_target


@pytest.mark.parametrize(
    "phase, elapsed, expected",
    [
        ("extraction", 400, True),
        ("extraction", 400.1, False),
        ("tailoring", 10, True),
        ("total", 2400, True),
        ("total", 2401, False),
    ],
)
def test_meets_target(phase, elapsed, expected):
    assert meets_target(phase, elapsed) is expected


def test_unknown_phase_raises():
    with pytest.raises(KeyError):
        meets_target("uploading", 1)


def test_targets_cover_every_phase():
    assert set(TIMING_TARGETS) == {"extraction", "tailoring", "rendering", "attachment", "total"}


def test_monotonic_clock_never_goes_backwards():
    clock = MonotonicClock()
    first = clock.now_ms()
    assert clock.now_ms() >= first
