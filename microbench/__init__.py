"""Microbench - lightweight in-process micro-benchmarks.

This package provides:
- bench / Suite: benchmark registration
- BenchmarkTimer: start/stop handle passed to timed bodies
- run_benchmarks / BenchmarkExecutor: concurrent execution with ordered reporting
- RunReport: programmatic access to the results of a run

Quick Start:
    import asyncio

    from microbench import bench, run_benchmarks

    @bench
    def for_increment(timer):
        timer.start()
        for _ in range(1_000_000):
            pass
        timer.stop()

    @bench(runs=100)
    def build_list():
        list(range(10_000))

    asyncio.run(run_benchmarks())
"""

__version__ = "0.1.0"

from microbench.config import RunOptions, Settings  # noqa: E402
from microbench.definition import (  # noqa: E402
    BenchmarkDefinition,
    TimedBody,
    UntimedBody,
)
from microbench.errors import (  # noqa: E402
    BenchmarkError,
    BenchmarkFileError,
    InvalidDefinitionError,
    TimerNotStartedError,
    TimerNotStoppedError,
    TimerOrderError,
    TimingError,
)
from microbench.executor import BenchmarkExecutor, run_benchmarks  # noqa: E402
from microbench.output import ConsoleSink, MemorySink, OutputSink  # noqa: E402
from microbench.registry import Suite, bench, default_suite  # noqa: E402
from microbench.results import BenchmarkRecord, BenchmarkStatus, RunReport  # noqa: E402
from microbench.timer import BenchmarkTimer  # noqa: E402

__all__ = [
    # Definitions
    "BenchmarkDefinition",
    "BenchmarkError",
    # Executor
    "BenchmarkExecutor",
    "BenchmarkFileError",
    "BenchmarkRecord",
    "BenchmarkStatus",
    "BenchmarkTimer",
    # Output
    "ConsoleSink",
    "InvalidDefinitionError",
    "MemorySink",
    "OutputSink",
    "RunOptions",
    "RunReport",
    "Settings",
    # Registry
    "Suite",
    "TimedBody",
    "TimerNotStartedError",
    "TimerNotStoppedError",
    "TimerOrderError",
    "TimingError",
    "UntimedBody",
    "__version__",
    "bench",
    "default_suite",
    "run_benchmarks",
]
