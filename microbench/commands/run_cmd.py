"""Run and list commands for benchmark files.

CLI Examples:
    microbench run bench_sorting.py                  # Run every benchmark
    microbench run bench_sorting.py --only '^sort'   # Only names starting with sort
    microbench run bench_sorting.py --skip slow      # Skip names containing slow
    microbench run bench_sorting.py --format json    # Append a JSON report
    microbench list bench_sorting.py                 # Show registered benchmarks
"""

import asyncio
import sys

import click
from pydantic import ValidationError

from microbench.config import Settings
from microbench.errors import BenchmarkFileError
from microbench.executor import run_benchmarks
from microbench.loader import load_benchmark_file
from microbench.output import ConsoleSink
from microbench.registry import Suite
from microbench.results import OutputFormat
from microbench.utils.logger import Logger


def _load(path: str) -> Suite:
    try:
        return load_benchmark_file(path)
    except BenchmarkFileError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)


def run_file(
    path: str,
    settings: Settings,
    only: str | None = None,
    skip: str | None = None,
    color: bool | None = None,
    fmt: str = "text",
) -> None:
    """Run the benchmarks of one file and exit non-zero if any failed."""
    log = Logger.get("cli")
    suite = _load(path)
    try:
        options = settings.run_options(only=only, skip=skip)
    except ValidationError as e:
        raise click.UsageError(f"Invalid filter pattern: {e.errors()[0]['msg']}") from e
    log.debug("Filters: only=%s skip=%s", options.only.pattern, options.skip.pattern)

    exit_status: list[int] = []
    report = asyncio.run(
        run_benchmarks(
            options,
            suite=suite,
            sink=ConsoleSink(color=color),
            on_exit=exit_status.append,
            color=settings.color if color is None else color,
        )
    )

    if fmt != "text":
        report.emit(sys.stdout, OutputFormat(fmt))

    if exit_status:
        sys.exit(exit_status[0])


def list_file(path: str) -> None:
    """List the benchmarks a file registers."""
    suite = _load(path)

    click.echo("Registered Benchmarks:")
    click.echo("-" * 50)

    if not len(suite):
        click.echo("  No benchmarks registered.")
        return

    for definition in suite:
        mode = "timed" if definition.timed else "untimed"
        click.echo(f"  {definition.name:<30} runs={definition.runs:<6} {mode}")

    click.echo("-" * 50)
    noun = "benchmark" if len(suite) == 1 else "benchmarks"
    click.echo(f"Total: {len(suite)} {noun} registered")
