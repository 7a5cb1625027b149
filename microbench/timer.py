"""Benchmark clock and the timer handle passed to timed benchmark bodies.

Usage:
    from microbench.timer import BenchmarkTimer, Clock, assert_timing

    clock = Clock()
    timer = BenchmarkTimer(clock)

    timer.start()
    do_work()
    timer.stop()

    assert_timing(clock)
    elapsed_ms = clock.elapsed()
"""

import time
from dataclasses import dataclass

from microbench.errors import (
    TimerNotStartedError,
    TimerNotStoppedError,
    TimerOrderError,
)


def now_ms() -> float:
    """Return a high-resolution monotonic timestamp in milliseconds."""
    return time.perf_counter() * 1000.0


@dataclass
class Clock:
    """Start and stop timestamps of a single timed invocation."""

    start: float | None = None
    stop: float | None = None

    def elapsed(self) -> float:
        """Return ``stop - start``.

        Raises:
            TimerNotStoppedError: If ``stop`` was never recorded.
            TimerNotStartedError: If ``start`` was never recorded.
        """
        if self.stop is None:
            raise TimerNotStoppedError()
        if self.start is None:
            raise TimerNotStartedError()
        return self.stop - self.start


class BenchmarkTimer:
    """Start/stop handle bound to one Clock.

    Repeated calls overwrite the previous timestamp. Whether the body used
    the timer correctly is checked by the runner, not here.
    """

    __slots__ = ("_clock",)

    def __init__(self, clock: Clock) -> None:
        self._clock = clock

    def start(self) -> None:
        """Record the start timestamp."""
        self._clock.start = now_ms()

    def stop(self) -> None:
        """Record the stop timestamp."""
        self._clock.stop = now_ms()


def assert_timing(clock: Clock, name: str | None = None) -> None:
    """Check that a clock was started and stopped, in that order.

    Args:
        clock: The clock filled in by a benchmark body.
        name: Benchmark name, included in the error message.

    Raises:
        TimerNotStoppedError: If ``stop`` was never recorded.
        TimerNotStartedError: If ``start`` was never recorded.
        TimerOrderError: If ``start`` is later than ``stop``.
    """
    if clock.stop is None:
        raise TimerNotStoppedError(name)
    if clock.start is None:
        raise TimerNotStartedError(name)
    if clock.start > clock.stop:
        raise TimerOrderError(name)
