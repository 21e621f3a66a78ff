"""Tests for the structured report reader."""

from pathlib import Path

import pytest

from robot_verdict.report.reader import (
    ReportError,
    ReportMalformed,
    ReportUnavailable,
    parse_report,
    read_report,
)
from robot_verdict.testing.payloads import (
    keyword,
    output_xml,
    robot_test,
    stat,
    suite,
)


class TestReadReport:
    """Tests for read_report function."""

    def test_reads_report_from_disk(self, tmp_path: Path) -> None:
        """Reads statistics and the suite tree from output.xml."""
        report_path = tmp_path / "output.xml"
        report_path.write_text(
            output_xml(
                root_suite=suite(tests=[robot_test("Login")]),
                stats=[stat(passed=1, failed=0, skipped=0)],
            ),
            encoding="utf-8",
        )

        report = read_report(report_path)

        assert report.root is not None
        assert report.root.name == "Tests"
        assert [t.name for t in report.root.tests] == ["Login"]
        assert report.statistics[0].name == "All Tests"
        assert report.statistics[0].pass_ == "1"

    def test_raises_unavailable_for_missing_file(self, tmp_path: Path) -> None:
        """Raises ReportUnavailable when the file does not exist."""
        with pytest.raises(ReportUnavailable, match="Cannot read report"):
            read_report(tmp_path / "output.xml")

    def test_raises_unavailable_for_directory(self, tmp_path: Path) -> None:
        """Raises ReportUnavailable when the path is a directory."""
        with pytest.raises(ReportUnavailable):
            read_report(tmp_path)

    def test_raises_malformed_for_truncated_file(self, tmp_path: Path) -> None:
        """Raises ReportMalformed when the run was cut short mid-write."""
        report_path = tmp_path / "output.xml"
        report_path.write_text(output_xml()[:120], encoding="utf-8")

        with pytest.raises(ReportMalformed, match="not well-formed"):
            read_report(report_path)

    def test_errors_share_base_class(self, tmp_path: Path) -> None:
        """Both failure modes can be caught as ReportError."""
        with pytest.raises(ReportError):
            read_report(tmp_path / "missing.xml")


class TestParseReport:
    """Tests for parse_report function."""

    def test_rejects_foreign_root_element(self) -> None:
        """Raises ReportMalformed for documents that are not Robot reports."""
        with pytest.raises(ReportMalformed, match="Unexpected root element"):
            parse_report("<testsuite name='junit'/>")

    def test_rejects_report_without_statistics(self) -> None:
        """Raises ReportMalformed when the statistics section is missing."""
        with pytest.raises(ReportMalformed, match="All Tests"):
            parse_report(f"<robot>{suite()}</robot>")

    def test_rejects_report_without_all_tests_bucket(self) -> None:
        """Raises ReportMalformed when only other buckets are present."""
        with pytest.raises(ReportMalformed, match="All Tests"):
            parse_report(output_xml(stats=[stat("Critical Tests")]))

    def test_reads_bucket_name_from_attribute(self) -> None:
        """Accepts buckets named by a name attribute."""
        report = parse_report(
            '<robot><statistics><total>'
            '<stat name="All Tests" pass="2" fail="1" skip="0"/>'
            "</total></statistics></robot>"
        )

        assert report.root is None
        assert report.statistics[0].name == "All Tests"
        assert report.statistics[0].fail == "1"

    def test_reads_nested_tree(self) -> None:
        """Builds suites, tests, keywords, statuses and messages."""
        report = parse_report(
            output_xml(
                root_suite=suite(
                    "Root",
                    suites=[
                        suite(
                            "Child",
                            tests=[
                                robot_test(
                                    "Checkout",
                                    state="FAIL",
                                    failure="boom",
                                    keywords=[
                                        keyword(
                                            "Open Browser",
                                            messages=["Opening browser"],
                                            keywords=[keyword("Inner")],
                                        )
                                    ],
                                )
                            ],
                        )
                    ],
                )
            )
        )

        assert report.root is not None
        child = report.root.suites[0]
        test = child.tests[0]
        assert child.name == "Child"
        assert test.status is not None
        assert test.status.is_failure
        assert test.status.text == "boom"
        open_browser = test.keywords[0]
        assert open_browser.name == "Open Browser"
        assert open_browser.messages[0].text == "Opening browser"
        assert open_browser.messages[0].level == "INFO"
        assert open_browser.keywords[0].name == "Inner"

    def test_reads_control_structures_as_keywords(self) -> None:
        """Keywords inside FOR loops and iterations are kept in the tree."""
        loop = keyword(
            "${item} IN [ @{items} ]",
            tag="for",
            keywords=[keyword("", tag="iter", keywords=[keyword("Click", messages=["clicked"])])],
        )
        report = parse_report(
            output_xml(root_suite=suite(tests=[robot_test(keywords=[loop])]))
        )

        assert report.root is not None
        for_node = report.root.tests[0].keywords[0]
        click = for_node.keywords[0].keywords[0]
        assert click.name == "Click"
        assert click.messages[0].text == "clicked"

    def test_reads_var_and_return_messages(self) -> None:
        """VAR and RETURN elements keep the messages they log."""
        assignment = keyword(
            "${uuid}",
            tag="var",
            messages=["${uuid} = 3fa85f64-5717-4562-b3fc-2c963f66afa6"],
        )
        returned = keyword("", tag="return", messages=["Returning ${uuid}"])
        report = parse_report(
            output_xml(root_suite=suite(tests=[robot_test(keywords=[assignment, returned])]))
        )

        assert report.root is not None
        var_node, return_node = report.root.tests[0].keywords
        assert var_node.name == "${uuid}"
        assert var_node.messages[0].text == "${uuid} = 3fa85f64-5717-4562-b3fc-2c963f66afa6"
        assert return_node.messages[0].text == "Returning ${uuid}"

    def test_ignores_non_keyword_children(self) -> None:
        """Arguments, tags and docs are not read as keywords."""
        report = parse_report(
            output_xml(
                root_suite=suite(
                    tests=[
                        '<test name="T"><kw name="Log"><arg>hello</arg>'
                        '<doc>Logs</doc><status status="PASS"/></kw>'
                        '<tag>smoke</tag><status status="PASS"/></test>'
                    ]
                )
            )
        )

        assert report.root is not None
        test = report.root.tests[0]
        assert len(test.keywords) == 1
        assert test.keywords[0].keywords == ()
