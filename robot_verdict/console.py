"""Fallback extraction from the Robot console output.

Used when ``output.xml`` is missing, malformed or reports no tests. Every
function here returns an empty result rather than raising.
"""

import functools
import logging
import re
from collections.abc import Callable, Sequence
from typing import TypeVar

from robot_verdict.matching import (
    EXTRACTED_MARKER,
    UUID_PATTERN,
    find_uuid,
    is_noise,
    mentions_uuid,
)
from robot_verdict.models.result import Stats

log = logging.getLogger(__name__)

R = TypeVar("R")

SUMMARY_PATTERN = re.compile(r"(\d+) tests?, (\d+) passed, (\d+) failed")
PASS_MARKER = "| PASS |"
FAIL_MARKER = "| FAIL |"
FAILURE_BLOCK_PATTERN = re.compile(
    r"\| FAIL \|[ \t]*\r?\n(.*?)(?=^(?:-{10,}|={10,})|\Z)", re.DOTALL | re.MULTILINE
)
LOCATOR_NOT_FOUND_PATTERN = re.compile(r"Element with locator .* not found")
VALUE_FIELD_PATTERN = re.compile(r'"value":"' + UUID_PATTERN.pattern + '"', re.IGNORECASE)
UUID_VARIABLE_MARKER = "${uuid} ="


def _never_raise(default: R) -> Callable[[Callable[[str], R]], Callable[[str], R]]:
    def decorator(func: Callable[[str], R]) -> Callable[[str], R]:
        @functools.wraps(func)
        def wrapper(text: str) -> R:
            try:
                return func(text)
            except Exception:
                log.warning("Console extraction %s failed", func.__name__, exc_info=True)
                return default

        return wrapper

    return decorator


@_never_raise(Stats())
def parse_counts(text: str) -> Stats:
    """Derive test counts from the console output.

    The run summary line (``1 test, 1 passed, 0 failed``) is preferred; when
    absent the ``| PASS |`` and ``| FAIL |`` status markers are counted.
    """
    if (match := SUMMARY_PATTERN.search(text)) is not None:
        total, passed, failed = (int(group) for group in match.groups())
        return Stats(passed=passed, failed=failed, skipped=max(total - passed - failed, 0))

    passed = text.count(PASS_MARKER)
    failed = text.count(FAIL_MARKER)
    return Stats(passed=passed, failed=failed)


@_never_raise(None)
def extract_error_message(text: str) -> str | None:
    """Return the diagnostic printed under the first failed test."""
    if (match := FAILURE_BLOCK_PATTERN.search(text)) is not None:
        if message := match.group(1).strip():
            return message

    if (match := LOCATOR_NOT_FOUND_PATTERN.search(text)) is not None:
        return match.group(0)
    return None


@_never_raise(None)
def extract_correlation_id(text: str) -> str | None:
    """Return the correlation ID printed in the console output.

    Lines are searched in a fixed order of trust. Only the first matching line
    of each tier is tried; a tier whose line holds no UUID falls through to the
    next one.
    """
    lines = [line for line in text.splitlines() if not is_noise(line)]

    tiers: Sequence[Callable[[str], bool]] = (
        lambda line: EXTRACTED_MARKER in line,
        lambda line: VALUE_FIELD_PATTERN.search(line) is not None,
        lambda line: UUID_VARIABLE_MARKER in line,
        mentions_uuid,
    )
    for matches in tiers:
        line = next((line for line in lines if matches(line)), None)
        if line is not None and (uuid := find_uuid(line)) is not None:
            return uuid

    for line in lines:
        if (uuid := find_uuid(line)) is not None:
            return uuid
    return None
