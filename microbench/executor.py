"""Executor: selects, runs and reports the benchmarks of a suite.

Usage:
    import asyncio

    from microbench import bench, run_benchmarks

    @bench
    def sort_small(timer):
        data = list(range(1000, 0, -1))
        timer.start()
        sorted(data)
        timer.stop()

    asyncio.run(run_benchmarks(skip="slow"))

Every selected benchmark runs as its own task, all at once. Report lines
come out in registration order: a benchmark that finishes early waits for
its predecessors to be printed, but its timing work is not held back.
"""

import asyncio
import re

from microbench.config import RunOptions, color_enabled
from microbench.definition import BenchmarkDefinition
from microbench.output import ConsoleSink, ExitSignal, OutputSink, exit_process
from microbench.registry import Suite, default_suite
from microbench.report import ReportFormatter
from microbench.results import ResultEntry, ResultTable, RunReport, utc_now
from microbench.runner import BenchmarkRunner
from microbench.utils.logger import Logger

log = Logger.child("executor")

FAILURE_EXIT_STATUS = 1


class BenchmarkExecutor:
    """Runs a suite and writes its report to an output sink.

    Args:
        suite: Suite to run. Defaults to the module-level default suite.
        sink: Where report lines go. Defaults to a ConsoleSink.
        on_exit: Called with a non-zero status, after the summary line,
            when any benchmark failed. Defaults to ``exit_process``.
        formatter: Builds report lines. Defaults to a ReportFormatter
            colorized according to the environment.
    """

    def __init__(
        self,
        suite: Suite | None = None,
        sink: OutputSink | None = None,
        on_exit: ExitSignal | None = None,
        formatter: ReportFormatter | None = None,
    ) -> None:
        self.suite = suite if suite is not None else default_suite
        self.sink: OutputSink = sink if sink is not None else ConsoleSink()
        self.on_exit: ExitSignal = on_exit if on_exit is not None else exit_process
        self.formatter = (
            formatter if formatter is not None else ReportFormatter(color_enabled())
        )

    async def run(self, options: RunOptions | None = None) -> RunReport:
        """Run every selected benchmark and report the results.

        Args:
            options: Name filters. Defaults to selecting everything.

        Returns:
            RunReport describing the run.
        """
        options = options if options is not None else RunOptions()
        started = utc_now()

        candidates = self.suite.snapshot()
        selected = [d for d in candidates if options.selects(d.name)]
        table = ResultTable.for_names(
            [d.name for d in selected],
            [d.runs for d in selected],
            filtered=len(candidates) - len(selected),
        )
        log.info(
            "Running %d of %d benchmark(s) from suite %s",
            len(selected),
            len(candidates),
            self.suite.name,
        )

        self.sink.line(self.formatter.start(len(selected)))

        tasks = [
            asyncio.create_task(
                self._measure(index, definition, table),
                name=f"microbench:{definition.name}",
            )
            for index, definition in enumerate(selected)
        ]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        for definition, outcome in zip(selected, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                log.error(
                    "Benchmark task %s ended abnormally: %r", definition.name, outcome
                )

        for entry in table.sweep():
            self._write_entry(entry)

        self.sink.line(self.formatter.summary(table.meta))
        log.info(
            "Run finished: %d measured, %d filtered, failed=%s",
            table.meta.measured,
            table.meta.filtered,
            table.meta.failed,
        )

        report = RunReport.from_table(table, started)

        if table.meta.failed:
            asyncio.get_running_loop().call_soon(self.on_exit, FAILURE_EXIT_STATUS)
            # let the exit callback run once this reporting pass is over
            await asyncio.sleep(0)

        return report

    async def _measure(
        self, index: int, definition: BenchmarkDefinition, table: ResultTable
    ) -> None:
        try:
            timings = await BenchmarkRunner(definition).run()
        except Exception as e:
            table.record_failure(index, e)
            log.error("Benchmark %s failed: %s", definition.name, e, exc_info=e)
            return

        # no await from here on: the print chain must not interleave
        for entry in table.record_success(index, timings):
            self._write_entry(entry)

    def _write_entry(self, entry: ResultEntry) -> None:
        text, is_error = self.formatter.entry(entry)
        if is_error:
            self.sink.error(text)
        else:
            self.sink.line(text)


async def run_benchmarks(
    options: RunOptions | None = None,
    *,
    only: str | re.Pattern[str] | None = None,
    skip: str | re.Pattern[str] | None = None,
    suite: Suite | None = None,
    sink: OutputSink | None = None,
    on_exit: ExitSignal | None = None,
    color: bool | None = None,
) -> RunReport:
    """Run the registered benchmarks.

    Args:
        options: Name filters.
        only: Shortcut overriding ``options.only``.
        skip: Shortcut overriding ``options.skip``.
        suite: Suite to run (default suite if omitted).
        sink: Output sink (console if omitted).
        on_exit: Exit collaborator (``exit_process`` if omitted).
        color: Force color on or off (environment if omitted).

    Returns:
        RunReport describing the run.
    """
    if only is not None or skip is not None:
        base = options if options is not None else RunOptions()
        options = RunOptions(
            only=only if only is not None else base.only,
            skip=skip if skip is not None else base.skip,
        )

    formatter = ReportFormatter(color) if color is not None else None
    executor = BenchmarkExecutor(
        suite=suite, sink=sink, on_exit=on_exit, formatter=formatter
    )
    return await executor.run(options)
