"""Exceptions raised by the benchmark harness.

Registration errors surface immediately to the caller of ``bench``. Timing
errors are raised by the runner when a benchmark body misuses its timer and
are contained by the executor, which marks only that benchmark as failed.
"""


class BenchmarkError(Exception):
    """Base exception for harness errors."""

    pass


class InvalidDefinitionError(BenchmarkError, ValueError):
    """Raised when a benchmark cannot be registered."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid benchmark definition: {reason}")


class TimingError(BenchmarkError):
    """Raised when a benchmark body did not drive its timer correctly."""

    message = "The benchmark timer was used incorrectly"

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        if name:
            super().__init__(f"{self.message} (benchmark '{name}')")
        else:
            super().__init__(self.message)


class TimerNotStartedError(TimingError):
    """Raised when ``timer.start()`` was never called."""

    message = "The benchmark timer's start method must be called"


class TimerNotStoppedError(TimingError):
    """Raised when ``timer.stop()`` was never called."""

    message = "The benchmark timer's stop method must be called"


class TimerOrderError(TimingError):
    """Raised when the timer was stopped before it was started."""

    message = (
        "The benchmark timer's start method must be called before its stop method"
    )


class BenchmarkFileError(BenchmarkError):
    """Raised when a benchmark file cannot be loaded."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load benchmark file '{path}': {reason}")
