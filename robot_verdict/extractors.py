"""Result extractors over the two sources a Robot run leaves behind."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from robot_verdict import console
from robot_verdict.models.report import ParsedReport
from robot_verdict.models.result import Stats
from robot_verdict.report.correlation import find_correlation_id
from robot_verdict.report.failures import first_failure_message
from robot_verdict.report.reader import ReportError, read_report
from robot_verdict.report.statistics import extract_statistics

log = logging.getLogger(__name__)


class ResultExtractor(ABC):
    """Source of test counts, failure diagnostic and correlation ID.

    Each method returns its empty value (zero stats or None) when the source
    holds no usable data.
    """

    @abstractmethod
    def extract_stats(self) -> Stats:
        """Return the test counts, with the failure diagnostic when known."""

    @abstractmethod
    def extract_error_message(self) -> str | None:
        """Return the diagnostic of the first failure."""

    @abstractmethod
    def extract_correlation_id(self) -> str | None:
        """Return the correlation ID logged by the suite."""


@dataclass(frozen=True, kw_only=True)
class StructuredExtractor(ResultExtractor):
    """Extractor over a parsed ``output.xml``.

    A ``None`` report stands for one that could not be read.
    """

    report: ParsedReport | None

    @classmethod
    def from_path(cls, path: Path) -> "StructuredExtractor":
        """Read the report at ``path``, degrading to an empty extractor."""
        try:
            report = read_report(path)
        except ReportError as e:
            log.warning("Structured report unusable, falling back to console: %s", e)
            report = None
        return cls(report=report)

    def extract_stats(self) -> Stats:
        """Counts of the "All Tests" bucket, plus the first failure if any."""
        if self.report is None:
            return Stats()

        stats = extract_statistics(self.report.statistics)
        if stats.failed > 0:
            return Stats(
                passed=stats.passed,
                failed=stats.failed,
                skipped=stats.skipped,
                error_message=self._first_failure(),
            )
        return stats

    def extract_error_message(self) -> str | None:
        """First failure text in depth-first order, when the report counts failures."""
        if self.report is None or extract_statistics(self.report.statistics).failed == 0:
            return None
        return self._first_failure()

    def _first_failure(self) -> str | None:
        if self.report is None or self.report.root is None:
            return None
        return first_failure_message(self.report.root)

    def extract_correlation_id(self) -> str | None:
        """Best ranked UUID logged by any keyword."""
        if self.report is None or self.report.root is None:
            return None
        return find_correlation_id(self.report.root)


@dataclass(frozen=True, kw_only=True)
class TextExtractor(ResultExtractor):
    """Extractor over the console output of the run."""

    text: str

    def extract_stats(self) -> Stats:
        """Counts from the summary line or status markers."""
        return console.parse_counts(self.text)

    def extract_error_message(self) -> str | None:
        """Diagnostic printed under the first failed test."""
        return console.extract_error_message(self.text)

    def extract_correlation_id(self) -> str | None:
        """Correlation ID printed on the console."""
        return console.extract_correlation_id(self.text)


@dataclass(frozen=True, kw_only=True)
class FallbackExtractor(ResultExtractor):
    """Try ``primary`` first and use ``fallback`` wherever it comes back empty."""

    primary: ResultExtractor
    fallback: ResultExtractor

    def extract_stats(self) -> Stats:
        """Primary counts, or fallback counts when primary counted nothing."""
        stats = self.primary.extract_stats()
        if stats.is_empty:
            log.info("Primary source reported no tests, using fallback counts")
            return self.fallback.extract_stats()
        return stats

    def extract_error_message(self) -> str | None:
        """Primary diagnostic, or the fallback one."""
        message = self.primary.extract_error_message()
        if message is None:
            return self.fallback.extract_error_message()
        return message

    def extract_correlation_id(self) -> str | None:
        """Primary correlation ID, or the fallback one."""
        correlation_id = self.primary.extract_correlation_id()
        if correlation_id is None:
            return self.fallback.extract_correlation_id()
        return correlation_id
