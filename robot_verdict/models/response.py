"""Payloads returned to HTTP and CLI callers."""

from typing import Any

from pydantic import Field

from robot_verdict.models.base import Model
from robot_verdict.models.result import RunOutcome, Stats


class StatsPayload(Model):
    """Test counts as exposed to callers."""

    passed: int = Field(..., alias="pass")
    failed: int = Field(..., alias="fail")
    skipped: int = Field(..., alias="skip")
    error_message: str | None = Field(default=None, alias="errorMessage")

    @classmethod
    def from_stats(cls, stats: Stats) -> "StatsPayload":
        """Build the payload from domain stats."""
        return cls(
            passed=stats.passed,
            failed=stats.failed,
            skipped=stats.skipped,
            error_message=stats.error_message,
        )


class OutcomePayload(Model):
    """Verdict of a run that produced a result, passed or failed."""

    success: bool
    stats: StatsPayload
    correlation_id: str | None = Field(default=None, alias="correlationId")

    @classmethod
    def from_outcome(cls, outcome: RunOutcome) -> "OutcomePayload":
        """Build the payload from a run outcome."""
        return cls(
            success=outcome.success,
            stats=StatsPayload.from_stats(outcome.stats),
            correlation_id=outcome.correlation_id,
        )

    def dump(self) -> dict[str, Any]:
        """Serialise with wire names, leaving out absent optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ExecutionFailurePayload(Model):
    """Body returned when the Robot process could not be run at all."""

    success: bool = False
    output: str
    stats: None = None
    error_message: str = Field(..., alias="errorMessage")

    def dump(self) -> dict[str, Any]:
        """Serialise with wire names; ``stats`` is kept as an explicit null."""
        return self.model_dump(by_alias=True)
