"""Tests for the console output fallback parser."""

from unittest.mock import patch

import pytest

from robot_verdict.console import (
    extract_correlation_id,
    extract_error_message,
    parse_counts,
)
from robot_verdict.models.result import Stats
from robot_verdict.testing.payloads import console_output

UUID_A = "3fa85f64-5717-4562-b3fc-2c963f66afa6"
UUID_B = "9b2d7c1e-0a4f-4e6b-8c3d-5f1a2b3c4d5e"
UUID_C = "11111111-2222-3333-4444-555555555555"


class TestParseCounts:
    """Tests for parse_counts function."""

    def test_reads_summary_line(self) -> None:
        """Uses the summary line printed by Robot."""
        text = console_output(tests=[("Login", "PASS", None)])

        assert parse_counts(text) == Stats(passed=1, failed=0, skipped=0)

    def test_derives_skipped_from_total(self) -> None:
        """Skipped tests are the ones neither passed nor failed."""
        text = console_output(
            tests=[("A", "PASS", None)],
            summary="5 tests, 2 passed, 1 failed, 2 skipped",
        )

        assert parse_counts(text) == Stats(passed=2, failed=1, skipped=2)

    def test_first_summary_line_wins(self) -> None:
        """Nested suites print several summaries; the first is used."""
        text = "1 test, 0 passed, 1 failed\n3 tests, 2 passed, 1 failed\n"

        assert parse_counts(text) == Stats(passed=0, failed=1, skipped=0)

    def test_counts_markers_without_summary(self) -> None:
        """Falls back to counting status markers."""
        text = (
            "Login                | PASS |\n"
            "Search               | PASS |\n"
            "Checkout             | FAIL |\n"
        )

        assert parse_counts(text) == Stats(passed=2, failed=1, skipped=0)

    def test_returns_zeros_for_unrelated_output(self) -> None:
        """Returns empty stats when nothing matches."""
        assert parse_counts("docker: Cannot connect to the Docker daemon").is_empty

    def test_never_raises(self) -> None:
        """Internal errors downgrade to empty stats."""
        with patch("robot_verdict.console.SUMMARY_PATTERN") as pattern:
            pattern.search.side_effect = RuntimeError("boom")

            assert parse_counts("1 test, 1 passed, 0 failed") == Stats()


class TestExtractErrorMessage:
    """Tests for extract_error_message function."""

    def test_reads_block_under_first_failure(self) -> None:
        """Returns the text between the FAIL marker and the separator."""
        text = console_output(
            tests=[
                ("Login", "PASS", None),
                ("Submit", "FAIL", "Element with locator 'id=submit' not found"),
                ("Logout", "FAIL", "Second failure"),
            ]
        )

        assert extract_error_message(text) == "Element with locator 'id=submit' not found"

    def test_keeps_multiline_messages(self) -> None:
        """Multi-line diagnostics are returned whole."""
        text = console_output(
            tests=[("Submit", "FAIL", "Several failures occurred:\n\n1) first\n\n2) second")]
        )

        assert extract_error_message(text) == (
            "Several failures occurred:\n\n1) first\n\n2) second"
        )

    def test_reads_until_end_of_text(self) -> None:
        """A block without a trailing separator runs to the end."""
        assert extract_error_message("Submit | FAIL |\nTimed out\n") == "Timed out"

    def test_falls_back_to_locator_diagnostic(self) -> None:
        """Finds a locator error when no FAIL block is present."""
        text = "[ WARN ] Element with locator 'css=.btn' not found after 5s\n"

        assert extract_error_message(text) == "Element with locator 'css=.btn' not found"

    def test_empty_block_falls_back_to_locator_diagnostic(self) -> None:
        """A FAIL marker with nothing under it does not yield a blank message."""
        text = (
            "Submit                | FAIL |\n"
            + "-" * 78
            + "\nElement with locator 'id=go' not found\n"
        )

        assert extract_error_message(text) == "Element with locator 'id=go' not found"

    def test_returns_none_without_failure(self) -> None:
        """Returns None for passing output."""
        assert extract_error_message(console_output(tests=[("A", "PASS", None)])) is None


class TestExtractCorrelationId:
    """Tests for extract_correlation_id function."""

    def test_prefers_extracted_marker(self) -> None:
        """The explicit marker beats every other line."""
        text = "\n".join(
            [
                f"id {UUID_C}",
                f'{{"value":"{UUID_B}"}}',
                f"Extracted UUID: {UUID_A}",
            ]
        )

        assert extract_correlation_id(text) == UUID_A

    def test_json_value_before_variable_assignment(self) -> None:
        """A JSON value field beats a variable assignment."""
        text = f"${{uuid}} = {UUID_B}\n" + f'response {{"value":"{UUID_A}"}}'

        assert extract_correlation_id(text) == UUID_A

    def test_variable_assignment_before_mentions(self) -> None:
        """A ${uuid} assignment beats a line mentioning UUID."""
        text = f"UUID field shows {UUID_B}\n${{uuid}} = {UUID_A}\n"

        assert extract_correlation_id(text) == UUID_A

    def test_mention_before_bare_uuid(self) -> None:
        """A line naming a UUID beats a bare UUID."""
        text = f"request {UUID_B}\ncreated uuid {UUID_A}\n"

        assert extract_correlation_id(text) == UUID_A

    def test_bare_uuid_as_last_resort(self) -> None:
        """Any UUID-shaped value is used when nothing else matches."""
        assert extract_correlation_id(f"Row 1: {UUID_A}\n") == UUID_A

    def test_tier_without_uuid_falls_through(self) -> None:
        """A marker line with no UUID yields to the next tier."""
        text = f"Extracted UUID: (none)\nrow 1 {UUID_A}\n"

        assert extract_correlation_id(text) == UUID_A

    @pytest.mark.parametrize(
        "line",
        [
            f"Extracted UUID: {UUID_A} token=abc",
            f"GET /session?token={UUID_A}",
            f"Click xpath=//div[@id='{UUID_A}']",
            f"uuid in xpath //tr[@data-uuid='{UUID_A}']",
        ],
    )
    def test_noise_lines_are_never_used(self, line: str) -> None:
        """Lines with tokens or locators are skipped by every tier."""
        assert extract_correlation_id(line) is None

    def test_returns_none_without_uuid(self) -> None:
        """Returns None when no UUID is printed."""
        assert extract_correlation_id(console_output(tests=[("A", "PASS", None)])) is None

    def test_is_idempotent(self) -> None:
        """Extracting twice yields the same result."""
        text = f"uuid {UUID_B}\nExtracted UUID: {UUID_A}\n"

        assert extract_correlation_id(text) == extract_correlation_id(text) == UUID_A
