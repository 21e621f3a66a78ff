"""Models for Robot run results."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class Stats:
    """Aggregate test counts of a single Robot run.

    ``succeeded`` is the only success predicate used when deciding a verdict.
    """

    passed: int = 0
    failed: int = 0
    skipped: int = 0
    error_message: str | None = None

    @property
    def is_empty(self) -> bool:
        """Whether no test was counted at all."""
        return self.passed == 0 and self.failed == 0 and self.skipped == 0

    @property
    def succeeded(self) -> bool:
        """Whether at least one test passed and none failed."""
        return self.passed > 0 and self.failed == 0


@dataclass(frozen=True, kw_only=True)
class RunOutcome:
    """Verdict for one Robot run."""

    success: bool
    stats: Stats
    correlation_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class ProcessOutput:
    """Raw output captured from the Robot process."""

    stdout: str
    stderr: str = ""
    exit_code: int | None = None
