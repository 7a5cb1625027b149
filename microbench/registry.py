"""Benchmark registry.

A Suite holds benchmark definitions in registration order. The order is
what the executor reports in, whatever order the benchmarks finish in.

Usage:
    from microbench.registry import Suite

    suite = Suite()

    @suite.bench
    def sort_small(timer):
        data = list(range(1000, 0, -1))
        timer.start()
        sorted(data)
        timer.stop()

    @suite.bench(runs=100)
    def build_dict():
        {i: i for i in range(10_000)}

    suite.bench({"name": "join", "func": lambda: ",".join("abc"), "runs": 10})

Module-level ``bench()`` registers on ``default_suite``, which is what
benchmark files loaded by the CLI use.
"""

from collections.abc import Callable, Iterator, Mapping
from typing import Any, TypeVar

from microbench.definition import (
    BenchmarkDefinition,
    TimedBody,
    UntimedBody,
    is_anonymous,
    make_body,
    normalize_runs,
)
from microbench.errors import InvalidDefinitionError
from microbench.utils.logger import Logger

F = TypeVar("F", bound=Callable[..., Any])

_MISSING: Any = object()

log = Logger.child("registry")


def _body_name(target: Any) -> str | None:
    if isinstance(target, TimedBody | UntimedBody):
        target = target.func
    return getattr(target, "__name__", None)


class Suite:
    """Ordered, append-only collection of benchmark definitions.

    Names are not required to be unique; two registrations under the same
    name are two benchmarks.

    Example:
        >>> suite = Suite()
        >>> suite.bench({"name": "noop", "func": lambda: None, "runs": 2.5})
        BenchmarkDefinition(name='noop', body=UntimedBody(...), runs=2)
        >>> suite.names()
        ['noop']
    """

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._definitions: list[BenchmarkDefinition] = []

    def bench(
        self,
        target: Any = _MISSING,
        *,
        name: str | None = None,
        runs: Any = None,
        timed: bool | None = None,
    ) -> Any:
        """Register a benchmark.

        Accepts a bare body (plain or coroutine function), a
        BenchmarkDefinition, or a mapping with ``name``, ``func`` and
        optional ``runs`` keys. Called without a target it returns a
        decorator; an explicit ``None`` target is rejected.

        Args:
            target: What to register.
            name: Overrides the name taken from the target.
            runs: Repeat count; normalized with ``normalize_runs``. A bare
                body defaults to one run.
            timed: Force the body variant (see ``make_body``).

        Returns:
            The registered function for bare bodies (so it can be used as a
            decorator), otherwise the stored BenchmarkDefinition.

        Raises:
            InvalidDefinitionError: If the benchmark has no usable name or
                its body is not callable.
        """
        if target is _MISSING:

            def decorator(func: F) -> F:
                self.bench(func, name=name, runs=runs, timed=timed)
                return func

            return decorator

        if isinstance(target, BenchmarkDefinition):
            definition = self._build(
                name or target.name,
                target.body,
                target.runs if runs is None else runs,
                timed,
            )
        elif isinstance(target, Mapping):
            definition = self._build(
                name or target.get("name"),
                target.get("func"),
                target.get("runs") if runs is None else runs,
                timed,
            )
        else:
            self._append(self._build(name or _body_name(target), target, runs, timed))
            return target

        self._append(definition)
        return definition

    def _build(
        self, name: str | None, func: Any, runs: Any, timed: bool | None
    ) -> BenchmarkDefinition:
        if name is None or is_anonymous(name):
            raise InvalidDefinitionError("the benchmark function must not be anonymous")

        try:
            body = make_body(func, timed)
        except TypeError as e:
            raise InvalidDefinitionError(str(e)) from e

        return BenchmarkDefinition(name=name, body=body, runs=normalize_runs(runs))

    def _append(self, definition: BenchmarkDefinition) -> None:
        self._definitions.append(definition)
        log.debug(
            "Registered benchmark %s (runs=%d, timed=%s) in suite %s",
            definition.name,
            definition.runs,
            definition.timed,
            self.name,
        )

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def snapshot(self) -> tuple[BenchmarkDefinition, ...]:
        """Return the registered definitions in registration order."""
        return tuple(self._definitions)

    def names(self) -> list[str]:
        """Return benchmark names in registration order."""
        return [definition.name for definition in self._definitions]

    def clear(self) -> None:
        """Remove every registered benchmark."""
        self._definitions.clear()

    def __len__(self) -> int:
        """Return number of registered benchmarks."""
        return len(self._definitions)

    def __iter__(self) -> Iterator[BenchmarkDefinition]:
        return iter(self.snapshot())

    def __contains__(self, name: object) -> bool:
        """Check if a benchmark name is registered."""
        return any(definition.name == name for definition in self._definitions)

    def __repr__(self) -> str:
        return f"Suite(name={self.name!r}, benchmarks={len(self)})"


default_suite = Suite()


def bench(
    target: Any = _MISSING,
    *,
    name: str | None = None,
    runs: Any = None,
    timed: bool | None = None,
) -> Any:
    """Register a benchmark on the default suite. See ``Suite.bench``."""
    return default_suite.bench(target, name=name, runs=runs, timed=timed)
