"""Run a Robot suite and compose its verdict."""

import logging
from dataclasses import replace
from http import HTTPStatus
from pathlib import Path
from typing import Any

from robot_verdict.extractors import FallbackExtractor, StructuredExtractor, TextExtractor
from robot_verdict.models.response import ExecutionFailurePayload, OutcomePayload
from robot_verdict.models.result import RunOutcome
from robot_verdict.runners.base import ProcessRunner, RunnerError

log = logging.getLogger(__name__)

# Tests ran and the verdict is valid, but at least one test failed.
PARTIAL_FAILURE_STATUS = HTTPStatus.FAILED_DEPENDENCY


class TestsFailed(Exception):
    """Raised when the run completed with failing tests."""

    __test__ = False

    def __init__(self, outcome: RunOutcome) -> None:
        super().__init__(f"{outcome.stats.failed} test(s) failed")
        self.outcome = outcome


class ExecutionFailure(Exception):
    """Raised when the Robot process could not be run at all."""

    def __init__(self, message: str, output: str) -> None:
        super().__init__(message)
        self.message = message
        self.output = output


def compose_outcome(console_text: str, report_path: Path) -> RunOutcome:
    """Build the verdict from the report, falling back to the console text.

    Args:
        console_text: Standard output of the Robot run
        report_path: Location of the ``output.xml`` written by the run

    Returns:
        The run outcome; successful only if a test passed and none failed

    """
    extractor = FallbackExtractor(
        primary=StructuredExtractor.from_path(report_path),
        fallback=TextExtractor(text=console_text),
    )

    stats = extractor.extract_stats()
    success = stats.succeeded

    if not success and stats.error_message is None:
        stats = replace(stats, error_message=extractor.extract_error_message())

    return RunOutcome(
        success=success,
        stats=stats,
        correlation_id=extractor.extract_correlation_id(),
    )


async def execute_robot_test(
    url: str,
    runner: ProcessRunner,
    report_path: Path,
    *,
    clear_stale_report: bool = True,
) -> RunOutcome:
    """Run the suites against ``url`` and return their verdict.

    Args:
        url: Target URL handed to the suites
        runner: Runner executing the Robot process
        report_path: Location where the run writes ``output.xml``
        clear_stale_report: Remove a report left by an earlier run first

    Returns:
        The outcome of a run that did not fail any test

    Raises:
        TestsFailed: If the run completed with failing tests
        ExecutionFailure: If the Robot process could not be run

    """
    if clear_stale_report:
        try:
            report_path.unlink(missing_ok=True)
        except OSError as e:
            log.warning("Cannot remove previous report %s: %s", report_path, e)

    try:
        output = await runner.run(url)
    except RunnerError as e:
        log.error("Error running Robot test: %s", e)
        raise ExecutionFailure(
            f"Error running Robot test: {e}", output=e.output or str(e)
        ) from e

    try:
        outcome = compose_outcome(output.stdout, report_path)
    except Exception as e:
        log.exception("Error composing Robot verdict")
        raise ExecutionFailure(
            f"Error running Robot test: {e}", output=output.stdout or str(e)
        ) from e

    log.info(
        "Robot run finished: success=%s pass=%d fail=%d skip=%d correlation_id=%s",
        outcome.success,
        outcome.stats.passed,
        outcome.stats.failed,
        outcome.stats.skipped,
        outcome.correlation_id,
    )

    return check_outcome(outcome)


def check_outcome(outcome: RunOutcome) -> RunOutcome:
    """Return ``outcome``, raising ``TestsFailed`` if any test failed."""
    if not outcome.success and outcome.stats.failed > 0:
        raise TestsFailed(outcome)
    return outcome


def to_response(
    result: RunOutcome | TestsFailed | ExecutionFailure,
) -> tuple[int, dict[str, Any]]:
    """Map a run result to an HTTP status and JSON payload."""
    if isinstance(result, TestsFailed):
        return PARTIAL_FAILURE_STATUS, OutcomePayload.from_outcome(result.outcome).dump()

    if isinstance(result, ExecutionFailure):
        payload = ExecutionFailurePayload(output=result.output, error_message=result.message)
        return HTTPStatus.INTERNAL_SERVER_ERROR, payload.dump()

    return HTTPStatus.OK, OutcomePayload.from_outcome(result).dump()
