"""Run options and environment-driven settings.

Environment variables:
    MICROBENCH_LOG_LEVEL  Log level for the CLI (default WARNING).
    MICROBENCH_COLOR      Force color on or off (bool).
    NO_COLOR              Disables color when set and non-empty.
    MICROBENCH_ONLY       Default ``only`` pattern for the CLI.
    MICROBENCH_SKIP       Default ``skip`` pattern for the CLI.
"""

import re

from pydantic import BaseModel, ConfigDict, Field

from microbench.utils.env import env_is_set, get_env
from microbench.utils.logger import LogLevel

DEFAULT_ONLY = r"[^\s]"
DEFAULT_SKIP = r"^\s*$"


def color_enabled() -> bool:
    """Whether report lines should be colorized.

    MICROBENCH_COLOR wins when set; otherwise color is on unless NO_COLOR
    is set.
    """
    color = get_env("MICROBENCH_COLOR", as_type=bool, log=True)
    if color is None:
        return not env_is_set("NO_COLOR")
    return color


class RunOptions(BaseModel):
    """Name filters for a run.

    ``only`` must match a benchmark name and ``skip`` must not for the
    benchmark to be selected. Strings are compiled as regular expressions
    and matched with ``search``.
    """

    model_config = ConfigDict(frozen=True)

    only: re.Pattern[str] = Field(
        default_factory=lambda: re.compile(DEFAULT_ONLY),
        description="Pattern a name must match",
    )
    skip: re.Pattern[str] = Field(
        default_factory=lambda: re.compile(DEFAULT_SKIP),
        description="Pattern a name must not match",
    )

    def selects(self, name: str) -> bool:
        """Return True if the benchmark called ``name`` should run."""
        return self.only.search(name) is not None and self.skip.search(name) is None


class Settings(BaseModel):
    """Harness settings, usually read from the environment."""

    log_level: LogLevel = Field(LogLevel.WARNING, description="CLI log level")
    color: bool = Field(True, description="Colorize report lines")
    only: str | None = Field(None, description="Default only pattern")
    skip: str | None = Field(None, description="Default skip pattern")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Raises:
            EnvVarTypeError: If MICROBENCH_COLOR is not a boolean-like value.
            ValueError: If MICROBENCH_LOG_LEVEL is not a known level.
        """
        level = get_env("MICROBENCH_LOG_LEVEL", default="WARNING", log=True)
        return cls(
            log_level=LogLevel(level.upper()),
            color=color_enabled(),
            only=get_env("MICROBENCH_ONLY") or None,
            skip=get_env("MICROBENCH_SKIP") or None,
        )

    def run_options(self, only: str | None = None, skip: str | None = None) -> RunOptions:
        """Build RunOptions, explicit arguments taking precedence."""
        only = only or self.only
        skip = skip or self.skip

        filters: dict[str, str] = {}
        if only:
            filters["only"] = only
        if skip:
            filters["skip"] = skip
        return RunOptions.model_validate(filters)
