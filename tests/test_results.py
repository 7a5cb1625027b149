"""Tests for result bookkeeping, report lines and the run report."""

import json
from io import StringIO

import yaml

from microbench.report import ReportFormatter
from microbench.results import (
    BenchmarkStatus,
    OutputFormat,
    ResultTable,
    RunMeta,
    RunReport,
    average,
    utc_now,
)


def test_average():
    """Test the arithmetic mean."""
    assert average([1.0, 2.0, 6.0]) == 3.0
    assert average([0.5]) == 0.5


def test_first_entry_prints_immediately():
    """Test that index 0 is printable as soon as it has timings."""
    table = ResultTable.for_names(["a", "b"])

    ready = table.record_success(0, [1.0])

    assert [e.name for e in ready] == ["a"]
    assert table.entries[0].printed


def test_later_entry_waits_for_predecessor():
    """Test that a finished entry is held until every earlier one is printed."""
    table = ResultTable.for_names(["a", "b", "c"])

    assert table.record_success(2, [3.0]) == []
    assert table.record_success(1, [2.0]) == []
    ready = table.record_success(0, [1.0])

    assert [e.name for e in ready] == ["a", "b", "c"]
    assert table.meta.measured == 3


def test_chain_stops_at_failed_entry():
    """Test that a failed entry blocks the chain until the sweep."""
    table = ResultTable.for_names(["a", "b", "c"])

    table.record_failure(1, RuntimeError("x"))
    assert table.record_success(2, [1.0]) == []
    assert [e.name for e in table.record_success(0, [1.0])] == ["a"]

    swept = table.sweep()
    assert [e.name for e in swept] == ["b", "c"]
    assert table.meta.failed
    assert table.sweep() == []


def test_sweep_marks_unresolved_as_failure():
    """Test that an entry with neither timings nor a failure fails the run."""
    table = ResultTable.for_names(["a", "b"])
    table.record_success(0, [1.0])

    swept = table.sweep()

    assert [e.name for e in swept] == ["b"]
    assert table.meta.failed


def test_each_entry_printed_once():
    """Test that entries returned by the chain are never swept again."""
    table = ResultTable.for_names(["a", "b"])
    printed = table.record_success(0, [1.0]) + table.record_success(1, [2.0])
    printed += table.sweep()

    assert [e.name for e in printed] == ["a", "b"]


def test_formatter_lines():
    """Test every line format without color."""
    fmt = ReportFormatter(color=False)
    table = ResultTable.for_names(["done", "broken", "lost"], runs=[1, 2, 1])
    table.record_success(0, [0.25])
    table.record_failure(1, ValueError())

    assert fmt.start(0) == "running 0 benchmarks ..."
    assert fmt.start(1) == "running 1 benchmark ..."
    assert fmt.result("x", [0.25]) == "benchmark x ... 0.25ms"
    assert fmt.result("x", [1.0, 2.0]) == "benchmark x ... 1.5ms (average over 2 runs)"
    assert fmt.entry(table.entries[0]) == ("benchmark done ... 0.25ms", False)
    assert fmt.entry(table.entries[1]) == ("benchmark broken ... failed", True)
    assert fmt.entry(table.entries[2]) == ("benchmark lost ... unresolved", True)
    assert (
        fmt.summary(RunMeta(filtered=3, measured=1, failed=True))
        == "benchmark result: FAIL. 1 measured; 3 filtered"
    )


def _report() -> RunReport:
    table = ResultTable.for_names(["fast", "slow", "bad"], runs=[1, 2, 1], filtered=1)
    table.record_success(0, [1.0])
    table.record_success(1, [2.0, 4.0])
    table.record_failure(2, ValueError())
    table.sweep()
    return RunReport.from_table(table, utc_now())


def test_run_report_from_table():
    """Test conversion of a finished table into a report."""
    report = _report()

    assert not report.passed
    assert report.measured == 2
    assert report.filtered == 1
    assert report.get("slow").mean_ms == 3.0
    assert report.get("fast").status is BenchmarkStatus.MEASURED
    assert report.get("bad").error == "ValueError"
    assert [r.name for r in report.failures] == ["bad"]
    assert len(report) == 3


def test_emit_json():
    """Test JSON emission."""
    output = StringIO()
    _report().emit(output, format=OutputFormat.JSON)

    data = json.loads(output.getvalue())
    assert data["passed"] is False
    assert data["benchmarks"][1]["timings"] == [2.0, 4.0]
    assert data["benchmarks"][2]["status"] == "failed"


def test_emit_yaml_to_file(tmp_path):
    """Test YAML emission to a path."""
    path = tmp_path / "report.yaml"
    _report().emit(path, format=OutputFormat.YAML)

    data = yaml.safe_load(path.read_text())
    assert data["measured"] == 2
    assert data["benchmarks"][0]["name"] == "fast"
