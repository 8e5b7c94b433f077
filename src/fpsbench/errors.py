class FpsBenchError(RuntimeError):
    """Base error for every aborting failure of a benchmark run.

    Attributes:
        message: Human-readable description of the failure.
        operation: Step that failed (e.g. "checkout", "run").
        target: Identifier the step was working on (revision, benchmark).
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        target: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.target = target

    def annotate(self, *, operation: str | None = None, target: str | None = None):
        if operation is not None:
            self.operation = operation
        if target is not None:
            self.target = target
        return self

    def __str__(self) -> str:
        if self.operation and self.target:
            return f"{self.operation} failed for {self.target}: {self.message}"
        if self.operation:
            return f"{self.operation} failed: {self.message}"
        return self.message


class ConfigurationError(FpsBenchError):
    """Invalid or unreadable configuration, detected before any work."""


class CommandError(FpsBenchError):
    """An external command exited non-zero or could not be started."""

    def __init__(
        self,
        message: str,
        *,
        command: list[str] | None = None,
        returncode: int | None = None,
        operation: str | None = None,
        target: str | None = None,
    ) -> None:
        super().__init__(message, operation=operation, target=target)
        self.command = command or []
        self.returncode = returncode


class CheckoutError(CommandError):
    pass


class PatchError(CommandError):
    pass


class ArtifactError(FpsBenchError):
    """A scratch or report file could not be written."""


class RunError(CommandError):
    """A build/run failed. `output` holds the captured streams when the process ran."""

    def __init__(self, message: str, *, output=None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.output = output


class MetricError(FpsBenchError):
    pass


class NoMetricFound(MetricError):
    def __init__(self, message: str = "No fps line in log output.", **kwargs) -> None:
        super().__init__(message, **kwargs)


class MalformedMetric(MetricError):
    def __init__(self, fragment: str, **kwargs) -> None:
        self.fragment = fragment
        super().__init__(f"Cannot parse fps value {fragment!r}", **kwargs)


class ResultError(FpsBenchError):
    pass


class ResultMissing(ResultError):
    """A configured (benchmark, revision) pair has no recorded value."""


class ResultConflict(ResultError):
    """A value was recorded twice for the same pair."""


class UnknownResultKey(ResultError):
    """A benchmark or revision outside the configured lists was used as a key."""
