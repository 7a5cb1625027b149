"""Runner for a single benchmark definition.

Usage:
    from microbench.runner import BenchmarkRunner

    timings = await BenchmarkRunner(definition).run()
"""

import asyncio
import inspect
from typing import Any

from microbench.definition import BenchmarkDefinition, TimedBody, UntimedBody
from microbench.timer import BenchmarkTimer, Clock, assert_timing, now_ms
from microbench.utils.logger import Logger

log = Logger.child("runner")


async def _settle(result: Any) -> None:
    if inspect.isawaitable(result):
        await result


class BenchmarkRunner:
    """Runs one definition ``runs`` times and returns the durations.

    Every invocation gets its own Clock, so concurrent invocations of the
    same body cannot overwrite each other's timestamps. Invocations are
    started together and all of them are awaited before the outcome is
    decided; the first failure (in invocation order) is then re-raised and
    no durations are returned.
    """

    def __init__(self, definition: BenchmarkDefinition) -> None:
        self.definition = definition

    @property
    def name(self) -> str:
        return self.definition.name

    async def run(self) -> list[float]:
        """Run all invocations concurrently.

        Returns:
            Exactly ``definition.runs`` durations in milliseconds.

        Raises:
            TimingError: If a timed body misused its timer.
            Exception: Whatever the body raised.
        """
        runs = self.definition.runs
        log.debug("Starting %s with %d run(s)", self.name, runs)

        outcomes = await asyncio.gather(
            *(self._invoke() for _ in range(runs)), return_exceptions=True
        )

        timings: list[float] = []
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
            timings.append(outcome)

        log.debug("Finished %s: %s", self.name, timings)
        return timings

    async def _invoke(self) -> float:
        """Run the body once and return its duration."""
        body = self.definition.body
        if isinstance(body, TimedBody):
            return await self._invoke_timed(body)
        if isinstance(body, UntimedBody):
            return await self._invoke_untimed(body)
        raise TypeError(f"Unknown benchmark body: {type(body).__name__}")

    async def _invoke_timed(self, body: TimedBody) -> float:
        clock = Clock()
        await _settle(body.func(BenchmarkTimer(clock)))
        assert_timing(clock, self.name)
        return clock.elapsed()

    async def _invoke_untimed(self, body: UntimedBody) -> float:
        clock = Clock()
        clock.start = now_ms()
        await _settle(body.func())
        clock.stop = now_ms()
        return clock.elapsed()
