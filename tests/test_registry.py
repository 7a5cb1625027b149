"""Tests for benchmark registration."""

import functools
import math
from decimal import Decimal
from fractions import Fraction

import pytest

from microbench import registry as registry_module
from microbench.definition import (
    BenchmarkDefinition,
    TimedBody,
    UntimedBody,
    normalize_runs,
)
from microbench.errors import InvalidDefinitionError


@pytest.mark.parametrize(
    ("requested", "expected"),
    [
        (1, 1),
        (3, 3),
        (3.7, 3),
        (100.0, 100),
        (0, 1),
        (-4, 1),
        (0.5, 1),
        (math.nan, 1),
        (math.inf, 1),
        (None, 1),
        ("5", 1),
        (True, 1),
        (Fraction(5), 5),
        (Fraction(7, 2), 3),
        (Decimal("3.9"), 3),
        (Decimal("0.5"), 1),
        (Decimal("NaN"), 1),
        (Decimal("Infinity"), 1),
    ],
)
def test_normalize_runs(requested, expected):
    """Test that run counts are floored, with bad values becoming 1."""
    assert normalize_runs(requested) == expected


def test_bench_bare_function(suite):
    """Test registering a bare function uses its name and a single run."""

    def sort_small(timer):
        timer.start()
        timer.stop()

    returned = suite.bench(sort_small)

    assert returned is sort_small
    (definition,) = suite.snapshot()
    assert definition.name == "sort_small"
    assert definition.runs == 1
    assert isinstance(definition.body, TimedBody)


def test_bench_definition_mapping(suite):
    """Test registering a mapping normalizes runs."""
    definition = suite.bench({"name": "join", "func": lambda: None, "runs": 10.9})

    assert definition.name == "join"
    assert definition.runs == 10
    assert isinstance(definition.body, UntimedBody)
    assert suite.snapshot() == (definition,)


def test_bench_definition_object(suite):
    """Test registering a BenchmarkDefinition keeps its body and normalizes runs."""
    body = UntimedBody(lambda: None)
    stored = suite.bench(BenchmarkDefinition(name="obj", body=body, runs=-1))

    assert stored.body is body
    assert stored.runs == 1


def test_bench_as_decorator(suite):
    """Test both decorator forms."""

    @suite.bench
    def plain(timer):
        timer.start()
        timer.stop()

    @suite.bench(runs=3)
    async def repeated():
        pass

    assert callable(plain)
    assert suite.names() == ["plain", "repeated"]
    assert suite.snapshot()[1].runs == 3
    assert suite.snapshot()[1].timed is False


@pytest.mark.parametrize(
    "target",
    [
        lambda timer: None,
        {"name": "", "func": lambda: None},
        {"name": "   ", "func": lambda: None},
        {"func": lambda: None, "runs": 2},
        functools.partial(print, "x"),
    ],
)
def test_bench_rejects_anonymous(suite, target):
    """Test that anonymous benchmarks are rejected before being stored."""
    with pytest.raises(InvalidDefinitionError, match="anonymous"):
        suite.bench(target)

    assert len(suite) == 0


def test_bench_explicit_name_rescues_lambda(suite):
    """Test that a lambda can be registered under an explicit name."""
    suite.bench(lambda: None, name="noop")
    assert "noop" in suite


def test_bench_rejects_non_callable(suite):
    """Test that a body that cannot be called is rejected."""
    with pytest.raises(InvalidDefinitionError):
        suite.bench({"name": "broken", "func": 42})

    assert len(suite) == 0


def test_body_variant_detection(suite):
    """Test that the body variant is fixed at registration."""

    def takes_timer(b):
        pass

    def takes_nothing():
        pass

    def optional_arg(x=1):
        pass

    suite.bench(takes_timer)
    suite.bench(takes_nothing)
    suite.bench(optional_arg)
    suite.bench(takes_timer, name="forced", timed=False)
    suite.bench(TimedBody(takes_nothing), name="wrapped")

    timed = [d.timed for d in suite.snapshot()]
    assert timed == [True, False, False, False, True]


def test_duplicate_names_are_kept(suite):
    """Test that registration does not deduplicate by name."""

    def same():
        pass

    suite.bench(same)
    suite.bench(same)

    assert suite.names() == ["same", "same"]


def test_snapshot_is_a_copy(suite):
    """Test that snapshots do not change when the suite grows."""

    def first():
        pass

    def second():
        pass

    suite.bench(first)
    before = suite.snapshot()
    suite.bench(second)

    assert len(before) == 1
    assert len(suite.snapshot()) == 2
    assert isinstance(before, tuple)


def test_module_level_bench_uses_default_suite():
    """Test that module-level bench registers on the default suite."""

    def registered_globally():
        pass

    registry_module.bench(registered_globally, runs=2)

    assert registry_module.default_suite.names() == ["registered_globally"]
    assert registry_module.default_suite.snapshot()[0].runs == 2


def test_bench_rejects_explicit_none(suite):
    """Test that an explicit None body is rejected rather than treated as a decorator call."""
    with pytest.raises(InvalidDefinitionError):
        suite.bench(None)

    with pytest.raises(InvalidDefinitionError):
        suite.bench(None, name="missing_body")

    assert len(suite) == 0


def test_module_level_bench_rejects_explicit_none():
    """Test that module-level bench also rejects a None body."""
    with pytest.raises(InvalidDefinitionError):
        registry_module.bench(None)

    assert len(registry_module.default_suite) == 0
