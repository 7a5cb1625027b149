#!/usr/bin/env python3
"""Microbench CLI - run micro-benchmarks from a benchmark file."""

import click

from microbench import __version__
from microbench.config import Settings
from microbench.utils.env import EnvVarError
from microbench.utils.logger import Logger, LogLevel

LOG_LEVELS = [level.value for level in LogLevel]


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: MICROBENCH_LOG_LEVEL or WARNING)",
)
@click.pass_context
def microbench(ctx, log_level):
    """Microbench command-line tool for in-process micro-benchmarks."""
    try:
        settings = Settings.from_env()
    except (EnvVarError, ValueError) as e:
        raise click.ClickException(f"Invalid environment: {e}") from e

    # Logs go to stderr; stdout carries the report
    Logger.configure(level=log_level or settings.log_level, timestamps=True)
    ctx.obj = settings


@microbench.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--only", default=None, help="Run only benchmarks whose name matches REGEX")
@click.option("--skip", default=None, help="Skip benchmarks whose name matches REGEX")
@click.option(
    "--color/--no-color",
    default=None,
    help="Colorize output (default: on unless NO_COLOR is set)",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json", "yaml"]),
    default="text",
    help="Also emit a structured report after the summary",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level for this run (overrides the group option)",
)
@click.pass_obj
def run(settings, file, only, skip, color, fmt, log_level):
    """Run the benchmarks registered by FILE."""
    from microbench.commands.run_cmd import run_file

    if log_level:
        Logger.set_level(log_level)
    run_file(file, settings, only=only, skip=skip, color=color, fmt=fmt)


@microbench.command(name="list")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def list_benchmarks(file):
    """List the benchmarks registered by FILE."""
    from microbench.commands.run_cmd import list_file

    list_file(file)


@microbench.command()
def version():
    """Display microbench version."""
    click.echo(f"microbench {__version__}")


if __name__ == "__main__":
    microbench()
