"""Locate the failure diagnostic of a report tree."""

from collections.abc import Iterable, Iterator

from robot_verdict.models.report import Keyword, Suite


def first_failure_message(root: Suite) -> str | None:
    """Return the first failure text in depth-first order.

    The first failure is taken as the root cause, matching the order in which
    Robot executed the suites.
    """
    return next(iter_failure_messages(root), None)


def iter_failure_messages(suite: Suite) -> Iterator[str]:
    """Yield the status text of every failed test and keyword.

    Each test is visited before its keywords and all tests of a suite before
    its child suites.
    """
    for test in suite.tests:
        if test.status is not None and test.status.is_failure and test.status.text:
            yield test.status.text
        yield from _keyword_failures(test.keywords)

    for child in suite.suites:
        yield from iter_failure_messages(child)


def _keyword_failures(keywords: Iterable[Keyword]) -> Iterator[str]:
    for keyword in keywords:
        status = keyword.status
        if status is not None and status.is_failure and status.text:
            yield status.text
        yield from _keyword_failures(keyword.keywords)
