"""Result bookkeeping for a benchmark run.

ResultTable holds one ResultEntry per selected benchmark and decides when an
entry may be printed: strictly in selection order, as soon as every earlier
entry has been printed. Benchmarks that finish early keep their timings
until their turn comes.

RunReport is the immutable summary handed back to callers once a run is
over, and can be emitted as JSON or YAML.

Usage:
    from microbench.results import ResultTable

    table = ResultTable.for_names(["a", "b"], runs=[1, 3])
    table.record_success(1, [1.0, 2.0, 3.0])   # -> [] ("a" not done yet)
    table.record_success(0, [0.5])            # -> [entry a, entry b]
"""

import json
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import TextIO

import yaml
from pydantic import BaseModel, ConfigDict, Field


def average(timings: Sequence[float]) -> float:
    """Arithmetic mean of a non-empty sequence of durations."""
    return sum(timings) / len(timings)


@dataclass
class ResultEntry:
    """Outcome of one selected benchmark."""

    name: str
    index: int
    runs: int = 1
    timings: list[float] | None = None
    printed: bool = False
    failed: bool = False
    error: BaseException | None = None

    @property
    def resolved(self) -> bool:
        """True once the runner produced timings."""
        return self.timings is not None


@dataclass
class RunMeta:
    """Counters for the whole run."""

    filtered: int = 0
    measured: int = 0
    failed: bool = False


@dataclass
class ResultTable:
    """Ordered result entries plus the reporting cursor."""

    entries: list[ResultEntry] = field(default_factory=list)
    meta: RunMeta = field(default_factory=RunMeta)
    _next: int = field(default=0, init=False, repr=False)

    @classmethod
    def for_names(
        cls, names: Sequence[str], runs: Sequence[int] | None = None, filtered: int = 0
    ) -> "ResultTable":
        """Create one entry per name, indexed by position."""
        run_counts = list(runs) if runs is not None else [1] * len(names)
        entries = [
            ResultEntry(name=name, index=i, runs=run_counts[i])
            for i, name in enumerate(names)
        ]
        return cls(entries=entries, meta=RunMeta(filtered=filtered))

    def record_success(self, index: int, timings: list[float]) -> list[ResultEntry]:
        """Store timings and return the entries that are now printable.

        The returned entries are already marked as printed and are in
        selection order. Must run without suspension between the update
        and the return.
        """
        entry = self.entries[index]
        entry.timings = timings
        self.meta.measured += 1
        return self._advance()

    def record_failure(self, index: int, error: BaseException) -> None:
        """Mark an entry and the run as failed."""
        entry = self.entries[index]
        entry.failed = True
        entry.error = error
        self.meta.failed = True

    def _advance(self) -> list[ResultEntry]:
        ready: list[ResultEntry] = []
        while self._next < len(self.entries):
            entry = self.entries[self._next]
            if entry.printed:
                self._next += 1
                continue
            if entry.timings is None:
                break
            entry.printed = True
            ready.append(entry)
            self._next += 1
        return ready

    def sweep(self) -> list[ResultEntry]:
        """Return every unprinted entry in order, marking each as printed.

        An entry left without timings or a recorded failure is unresolved;
        it fails the run.
        """
        pending = [entry for entry in self.entries if not entry.printed]
        for entry in pending:
            entry.printed = True
            if entry.timings is None and not entry.failed:
                self.meta.failed = True
        self._next = len(self.entries)
        return pending

    def __len__(self) -> int:
        return len(self.entries)


# -------------------------------------------------------------------------
# Run report
# -------------------------------------------------------------------------


class OutputFormat(Enum):
    """Supported formats for emitting a RunReport."""

    JSON = "json"
    YAML = "yaml"


class BenchmarkStatus(str, Enum):
    """Final state of one benchmark."""

    MEASURED = "measured"
    FAILED = "failed"
    UNRESOLVED = "unresolved"


def _describe(error: BaseException | None) -> str | None:
    if error is None:
        return None
    return str(error) or type(error).__name__


class BenchmarkRecord(BaseModel):
    """Outcome of one benchmark."""

    name: str = Field(..., min_length=1, description="Benchmark name")
    runs: int = Field(..., ge=1, description="Number of runs requested")
    status: BenchmarkStatus = Field(..., description="Final state")
    timings: list[float] = Field(
        default_factory=list, description="Per-run durations in milliseconds"
    )
    mean_ms: float | None = Field(None, description="Arithmetic mean of timings")
    error: str | None = Field(None, description="Failure message, if any")

    @classmethod
    def from_entry(cls, entry: ResultEntry) -> "BenchmarkRecord":
        if entry.failed:
            status = BenchmarkStatus.FAILED
        elif entry.timings is not None:
            status = BenchmarkStatus.MEASURED
        else:
            status = BenchmarkStatus.UNRESOLVED

        timings = list(entry.timings or [])
        return cls(
            name=entry.name,
            runs=entry.runs,
            status=status,
            timings=timings,
            mean_ms=average(timings) if timings else None,
            error=_describe(entry.error),
        )


class RunReport(BaseModel):
    """Summary of one completed run."""

    model_config = ConfigDict(frozen=True)

    passed: bool = Field(..., description="False if any benchmark failed")
    measured: int = Field(..., ge=0, description="Benchmarks measured successfully")
    filtered: int = Field(..., ge=0, description="Benchmarks excluded by only/skip")
    benchmarks: list[BenchmarkRecord] = Field(default_factory=list)
    timestamp_start: str = Field(..., description="ISO timestamp (UTC)")
    timestamp_end: str = Field(..., description="ISO timestamp (UTC)")
    microbench_version: str = Field("unknown")

    @classmethod
    def from_table(cls, table: ResultTable, timestamp_start: str) -> "RunReport":
        from microbench import __version__

        return cls(
            passed=not table.meta.failed,
            measured=table.meta.measured,
            filtered=table.meta.filtered,
            benchmarks=[BenchmarkRecord.from_entry(e) for e in table.entries],
            timestamp_start=timestamp_start,
            timestamp_end=datetime.now(UTC).isoformat(),
            microbench_version=__version__,
        )

    @property
    def failures(self) -> list[BenchmarkRecord]:
        """Records of benchmarks that failed."""
        return [b for b in self.benchmarks if b.status is BenchmarkStatus.FAILED]

    def get(self, name: str) -> BenchmarkRecord:
        """Return the first record with this name.

        Raises:
            KeyError: If no benchmark with this name ran.
        """
        for record in self.benchmarks:
            if record.name == name:
                return record
        raise KeyError(name)

    # -------------------------------------------------------------------------
    # Emission Methods
    # -------------------------------------------------------------------------

    def emit(
        self,
        output: str | Path | TextIO,
        format: OutputFormat = OutputFormat.JSON,
        indent: int = 2,
    ) -> None:
        """Emit the report to a file or stream.

        Args:
            output: File path or file-like object (e.g., sys.stdout).
            format: Output format.
            indent: Indentation level.
        """
        data = self.model_dump(mode="json")
        if format == OutputFormat.JSON:
            content = json.dumps(data, indent=indent) + "\n"
        elif format == OutputFormat.YAML:
            content = yaml.safe_dump(data, indent=indent, sort_keys=False)
        else:
            raise ValueError(f"Unknown format: {format}")

        self._write_output(output, content)

    def _write_output(self, output: str | Path | TextIO, content: str) -> None:
        if isinstance(output, str | Path):
            Path(output).write_text(content)
        else:
            output.write(content)
            if output is not sys.stdout and output is not sys.stderr:
                output.flush()

    def __len__(self) -> int:
        return len(self.benchmarks)


def utc_now() -> str:
    """Current time as an ISO string (UTC)."""
    return datetime.now(UTC).isoformat()

