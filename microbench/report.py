"""Text lines written during a benchmark run."""

import click

from microbench.results import ResultEntry, RunMeta, average


class ReportFormatter:
    """Builds report lines, optionally colorized.

    Example:
        >>> fmt = ReportFormatter(color=False)
        >>> fmt.result("sort", [2.0, 4.0])
        'benchmark sort ... 3.0ms (average over 2 runs)'
    """

    def __init__(self, color: bool = False) -> None:
        self.color = color

    def red(self, text: str) -> str:
        return click.style(text, fg="red") if self.color else text

    def blue(self, text: str) -> str:
        return click.style(text, fg="blue") if self.color else text

    def start(self, count: int) -> str:
        noun = "benchmark" if count == 1 else "benchmarks"
        return f"running {count} {noun} ..."

    def result(self, name: str, timings: list[float]) -> str:
        """Report line for a measured benchmark."""
        if len(timings) == 1:
            return f"benchmark {name} ... " + self.blue(f"{timings[0]}ms")
        return (
            f"benchmark {name} ... "
            + self.blue(f"{average(timings)}ms")
            + f" (average over {len(timings)} runs)"
        )

    def failure(self, name: str) -> str:
        return f"benchmark {name} ... " + self.red("failed")

    def unresolved(self, name: str) -> str:
        return f"benchmark {name} ... unresolved"

    def entry(self, entry: ResultEntry) -> tuple[str, bool]:
        """Line for an entry and whether it has error severity."""
        if entry.failed:
            return self.failure(entry.name), True
        if entry.timings is not None:
            return self.result(entry.name, entry.timings), False
        return self.unresolved(entry.name), True

    def summary(self, meta: RunMeta) -> str:
        state = self.red("FAIL") if meta.failed else self.blue("DONE")
        return (
            f"benchmark result: {state}. "
            f"{meta.measured} measured; {meta.filtered} filtered"
        )
