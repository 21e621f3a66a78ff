"""In-memory tree of a Robot Framework ``output.xml`` report."""

from collections.abc import Sequence
from dataclasses import dataclass, field

FAIL = "FAIL"
PASS = "PASS"


@dataclass(frozen=True, kw_only=True)
class Status:
    """Status of a test or keyword.

    ``state`` keeps the raw Robot value (PASS, FAIL, SKIP, NOT RUN).
    """

    state: str
    text: str | None = None

    @property
    def is_failure(self) -> bool:
        """Whether the node failed."""
        return self.state == FAIL


@dataclass(frozen=True, kw_only=True)
class Message:
    """A log message written by a keyword."""

    text: str
    level: str | None = None


@dataclass(frozen=True, kw_only=True)
class Keyword:
    """A keyword call, or a control structure read as an unnamed keyword."""

    name: str | None = None
    status: Status | None = None
    keywords: Sequence["Keyword"] = field(default_factory=tuple)
    messages: Sequence[Message] = field(default_factory=tuple)


@dataclass(frozen=True, kw_only=True)
class Test:
    """A single test case."""

    __test__ = False

    name: str | None = None
    status: Status | None = None
    keywords: Sequence[Keyword] = field(default_factory=tuple)


@dataclass(frozen=True, kw_only=True)
class Suite:
    """A test suite holding child suites and tests."""

    name: str | None = None
    suites: Sequence["Suite"] = field(default_factory=tuple)
    tests: Sequence[Test] = field(default_factory=tuple)


@dataclass(frozen=True, kw_only=True)
class StatEntry:
    """Raw attributes of one ``<stat>`` bucket of the total statistics."""

    name: str
    pass_: str | None = None
    fail: str | None = None
    skip: str | None = None


@dataclass(frozen=True, kw_only=True)
class ParsedReport:
    """A parsed report: the root suite plus the total statistics buckets."""

    root: Suite | None
    statistics: Sequence[StatEntry]
