"""Patterns shared by the report and console correlation-ID searches."""

import re

UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)
UUID_VARIABLE_PATTERN = re.compile(r"\$\{uuid\} = " + UUID_PATTERN.pattern, re.IGNORECASE)

EXTRACTED_MARKER = "Extracted UUID:"

# Locators and auth tokens routinely carry UUID-like values that are not the
# identifier we are after.
NOISE_MARKERS = ("xpath", "token=")


def find_uuid(text: str) -> str | None:
    """Return the first UUID-shaped substring of ``text``."""
    match = UUID_PATTERN.search(text)
    return match.group(0) if match else None


def is_noise(text: str) -> bool:
    """Whether ``text`` must never be used as a correlation-ID source."""
    return any(marker in text for marker in NOISE_MARKERS)


def mentions_uuid(text: str) -> bool:
    """Whether ``text`` names a UUID explicitly."""
    return "UUID" in text or "uuid" in text
