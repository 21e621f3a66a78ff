"""Aggregate test counts from the total statistics of a report."""

from collections.abc import Sequence

from robot_verdict.models.report import StatEntry
from robot_verdict.models.result import Stats
from robot_verdict.report.reader import ALL_TESTS


def extract_statistics(entries: Sequence[StatEntry]) -> Stats:
    """Read pass/fail/skip counts of the first "All Tests" bucket.

    Absent, unparsable or negative counts read as 0. Later buckets with the
    same name are ignored.
    """
    for entry in entries:
        if entry.name == ALL_TESTS:
            return Stats(
                passed=parse_count(entry.pass_),
                failed=parse_count(entry.fail),
                skipped=parse_count(entry.skip),
            )
    return Stats()


def parse_count(value: str | None) -> int:
    """Parse a count attribute, defaulting to 0."""
    if value is None:
        return 0
    try:
        count = int(value.strip())
    except ValueError:
        return 0
    return max(count, 0)
