"""Shared fixtures for microbench tests."""

import pytest

from microbench.output import MemorySink
from microbench.registry import Suite, default_suite
from microbench.utils.logger import Logger


@pytest.fixture(autouse=True)
def isolated_state():
    """Reset process-wide state touched by the harness."""
    default_suite.clear()
    yield
    default_suite.clear()
    Logger.reset()


@pytest.fixture
def suite() -> Suite:
    return Suite(name="test")


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


class ExitRecorder:
    """Exit collaborator that remembers what it was called with."""

    def __init__(self, sink: MemorySink | None = None) -> None:
        self.calls: list[int] = []
        self.lines_at_exit: list[str] | None = None
        self._sink = sink

    def __call__(self, status: int) -> None:
        self.calls.append(status)
        if self._sink is not None:
            self.lines_at_exit = list(self._sink.lines)


@pytest.fixture
def exit_recorder(sink: MemorySink) -> ExitRecorder:
    return ExitRecorder(sink)
