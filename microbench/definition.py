"""Benchmark definitions and the two shapes a benchmark body can take.

A body is either timed by itself (it receives a BenchmarkTimer and calls
``start``/``stop`` around the interesting part) or timed by the runner (it
takes no arguments and the whole call is measured). The shape is decided
once, at registration, and stored as a tag on the definition.
"""

import inspect
import math
import numbers
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar

from microbench.timer import BenchmarkTimer

TimedFunction = Callable[[BenchmarkTimer], Awaitable[None] | None]
UntimedFunction = Callable[[], Awaitable[None] | None]


@dataclass(frozen=True)
class TimedBody:
    """Body that drives the timer itself."""

    func: TimedFunction
    timed: ClassVar[bool] = True


@dataclass(frozen=True)
class UntimedBody:
    """Body measured from the outside, once per run."""

    func: UntimedFunction
    timed: ClassVar[bool] = False


BenchmarkBody = TimedBody | UntimedBody


@dataclass(frozen=True)
class BenchmarkDefinition:
    """A registered benchmark."""

    name: str
    body: BenchmarkBody
    runs: int = 1

    @property
    def timed(self) -> bool:
        """Whether the body receives a timer."""
        return self.body.timed


def normalize_runs(runs: Any) -> int:
    """Coerce a requested run count into a usable one.

    Finite real numbers >= 1 (including ``Fraction`` and ``Decimal``) are
    floored; anything else (missing, zero, negative, NaN, infinite,
    non-numeric) becomes a single run.

    Examples:
        >>> normalize_runs(3.7)
        3
        >>> normalize_runs(0)
        1
        >>> normalize_runs(float("inf"))
        1
    """
    if isinstance(runs, bool) or not isinstance(runs, numbers.Real | Decimal):
        return 1
    finite = runs.is_finite() if isinstance(runs, Decimal) else math.isfinite(runs)
    if not finite or runs < 1:
        return 1
    return math.floor(runs)


def is_anonymous(name: str | None) -> bool:
    """Return True for names that cannot identify a benchmark."""
    return not name or not name.strip() or name == "<lambda>"


def _takes_timer(func: Callable[..., Any]) -> bool:
    """Return True if ``func`` has at least one required positional parameter."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False

    for param in signature.parameters.values():
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ) and param.default is inspect.Parameter.empty:
            return True
    return False


def make_body(func: Any, timed: bool | None = None) -> BenchmarkBody:
    """Wrap a callable in the matching body variant.

    Args:
        func: A plain or coroutine function, or an already tagged body.
        timed: Force the variant. If None, an already tagged body keeps its
            tag and a bare callable is tagged timed when it takes a
            positional argument.

    Returns:
        A TimedBody or UntimedBody.

    Raises:
        TypeError: If ``func`` is not callable.
    """
    if isinstance(func, TimedBody | UntimedBody):
        if timed is None or timed == func.timed:
            return func
        func = func.func

    if not callable(func):
        raise TypeError(f"benchmark body must be callable, got {type(func).__name__}")

    if timed is None:
        timed = _takes_timer(func)
    return TimedBody(func) if timed else UntimedBody(func)
