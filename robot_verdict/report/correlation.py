"""Find the correlation ID a Robot suite logged while running.

Suites log the identifier they created, but UUID-shaped values show up in
plenty of other messages too. Every keyword message is ranked and the best
ranked message holding a UUID wins:

=====  ============================================================
 Tier  Message
=====  ============================================================
 100   contains ``Extracted UUID:``
  90   ``${uuid} = <uuid>`` logged by a ``Get Text`` keyword
  50   mentions ``UUID`` or ``uuid``
  10   contains a bare UUID
=====  ============================================================

Messages mentioning ``xpath`` or ``token=`` are never candidates.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from robot_verdict.matching import (
    EXTRACTED_MARKER,
    UUID_PATTERN,
    UUID_VARIABLE_PATTERN,
    find_uuid,
    is_noise,
    mentions_uuid,
)
from robot_verdict.models.report import Keyword, Suite

GET_TEXT_KEYWORD = "Get Text"


@dataclass(frozen=True, kw_only=True)
class CandidateMatch:
    """A message that may carry the correlation ID."""

    text: str
    priority: int


def find_correlation_id(root: Suite) -> str | None:
    """Return the UUID of the best ranked candidate message, if any."""
    for candidate in collect_candidates(root):
        if (uuid := find_uuid(candidate.text)) is not None:
            return uuid
    return None


def collect_candidates(root: Suite) -> Sequence[CandidateMatch]:
    """Collect candidate messages ranked by priority, highest first.

    The sort is stable, so equal priorities keep their discovery order.
    """
    candidates = list(_suite_candidates(root))
    candidates.sort(key=lambda candidate: candidate.priority, reverse=True)
    return candidates


def classify_message(text: str, keyword_name: str | None) -> int | None:
    """Return the priority of a message, or None if it is not a candidate."""
    if is_noise(text):
        return None
    if EXTRACTED_MARKER in text:
        return 100
    if keyword_name == GET_TEXT_KEYWORD and UUID_VARIABLE_PATTERN.search(text):
        return 90
    if mentions_uuid(text):
        return 50
    if UUID_PATTERN.search(text):
        return 10
    return None


def _suite_candidates(suite: Suite) -> Iterator[CandidateMatch]:
    for test in suite.tests:
        yield from _keyword_candidates(test.keywords)
    for child in suite.suites:
        yield from _suite_candidates(child)


def _keyword_candidates(keywords: Iterable[Keyword]) -> Iterator[CandidateMatch]:
    for keyword in keywords:
        for message in keyword.messages:
            priority = classify_message(message.text, keyword.name)
            if priority is not None:
                yield CandidateMatch(text=message.text, priority=priority)
        yield from _keyword_candidates(keyword.keywords)
