"""Load Robot Framework ``output.xml`` reports into a report tree."""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from robot_verdict.models.report import (
    Keyword,
    Message,
    ParsedReport,
    StatEntry,
    Status,
    Suite,
    Test,
)

log = logging.getLogger(__name__)

ALL_TESTS = "All Tests"
PREVIEW_LENGTH = 500

# Robot 4+ writes control structures in place of keywords, and Robot 7 adds
# VAR and RETURN elements; all of them can hold keywords or messages of their
# own.
KEYWORD_TAGS = frozenset(
    ["kw", "for", "iter", "if", "branch", "try", "while", "group", "var", "return"]
)


class ReportError(Exception):
    """Raised when a report cannot be used as the result source."""


class ReportUnavailable(ReportError):
    """Raised when the report file cannot be read."""


class ReportMalformed(ReportError):
    """Raised when the report is not a Robot report with total statistics."""


def read_report(path: Path) -> ParsedReport:
    """Read and parse the report at ``path``.

    Args:
        path: Location of ``output.xml``

    Returns:
        The parsed report tree and its total statistics

    Raises:
        ReportUnavailable: If the file cannot be read
        ReportMalformed: If the content is not a usable Robot report

    """
    try:
        content = path.read_bytes()
    except OSError as e:
        raise ReportUnavailable(f"Cannot read report at {path}: {e}") from e

    log.debug(
        "Report preview: %s...",
        content[:PREVIEW_LENGTH].decode("utf-8", errors="replace"),
    )
    return parse_report(content)


def parse_report(content: str | bytes) -> ParsedReport:
    """Parse report content already loaded in memory."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise ReportMalformed(f"Report is not well-formed XML: {e}") from e

    if root.tag != "robot":
        raise ReportMalformed(f"Unexpected root element <{root.tag}>")

    statistics = [_read_stat(stat) for stat in root.findall("./statistics/total/stat")]
    if not any(entry.name == ALL_TESTS for entry in statistics):
        raise ReportMalformed(f"Report has no '{ALL_TESTS}' statistics")

    suite = root.find("suite")
    return ParsedReport(
        root=_read_suite(suite) if suite is not None else None,
        statistics=statistics,
    )


def _read_stat(element: ET.Element) -> StatEntry:
    name = element.get("name") or (element.text or "").strip()
    return StatEntry(
        name=name,
        pass_=element.get("pass"),
        fail=element.get("fail"),
        skip=element.get("skip"),
    )


def _read_status(parent: ET.Element) -> Status | None:
    element = parent.find("status")
    if element is None:
        return None
    return Status(state=element.get("status", ""), text=element.text)


def _read_suite(element: ET.Element) -> Suite:
    return Suite(
        name=element.get("name"),
        suites=tuple(_read_suite(child) for child in element.findall("suite")),
        tests=tuple(_read_test(child) for child in element.findall("test")),
    )


def _read_test(element: ET.Element) -> Test:
    return Test(
        name=element.get("name"),
        status=_read_status(element),
        keywords=_read_keywords(element),
    )


def _read_keywords(parent: ET.Element) -> tuple[Keyword, ...]:
    return tuple(_read_keyword(child) for child in parent if child.tag in KEYWORD_TAGS)


def _read_keyword(element: ET.Element) -> Keyword:
    return Keyword(
        name=element.get("name"),
        status=_read_status(element),
        keywords=_read_keywords(element),
        messages=tuple(
            Message(text=msg.text or "", level=msg.get("level"))
            for msg in element.findall("msg")
        ),
    )
