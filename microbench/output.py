"""Collaborators the executor writes to: an output sink and a process exit.

Usage:
    from microbench.output import ConsoleSink, MemorySink, exit_process

    sink = ConsoleSink()
    sink.line("running 1 benchmark ...")
    sink.error("benchmark broken ... failed")
"""

import sys
from typing import Protocol, TextIO

import click


class OutputSink(Protocol):
    """Accepts report lines."""

    def line(self, text: str) -> None:
        """Write a normal line."""
        ...

    def error(self, text: str) -> None:
        """Write a line with error severity."""
        ...


class ExitSignal(Protocol):
    """Receives the process exit status when a run failed."""

    def __call__(self, status: int) -> object:
        ...


class ConsoleSink:
    """Writes lines to the terminal with ``click.echo``.

    Error lines go to the same stream as normal lines unless
    ``errors_to_stderr`` is set, so that report order survives piping.
    ANSI styling is stripped by click when the stream is not a terminal,
    unless ``color`` forces it on.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        errors_to_stderr: bool = False,
        color: bool | None = None,
    ) -> None:
        self._stream = stream
        self._errors_to_stderr = errors_to_stderr
        self._color = color

    def line(self, text: str) -> None:
        click.echo(text, file=self._stream, color=self._color)

    def error(self, text: str) -> None:
        if self._errors_to_stderr:
            click.echo(text, err=True, color=self._color)
        else:
            click.echo(text, file=self._stream, color=self._color)


class MemorySink:
    """Keeps every line in memory as ``(severity, text)`` pairs."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def line(self, text: str) -> None:
        self.records.append(("info", text))

    def error(self, text: str) -> None:
        self.records.append(("error", text))

    @property
    def lines(self) -> list[str]:
        """All lines in write order, regardless of severity."""
        return [text for _, text in self.records]

    @property
    def errors(self) -> list[str]:
        return [text for severity, text in self.records if severity == "error"]

    def clear(self) -> None:
        self.records.clear()


def exit_process(status: int) -> None:
    """Flush standard streams and exit with ``status``."""
    sys.stdout.flush()
    sys.stderr.flush()
    raise SystemExit(status)
