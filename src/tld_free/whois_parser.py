"""
WHOIS response classifier.

Registries answer in free-form text with no common grammar, so availability
and expiry are inferred from ordered tables of regular expressions. The first
matching rule wins. Append new patterns to the tables as new registry formats
turn up.
"""

import re
from dataclasses import dataclass
from typing import Callable

from .models import Verdict

# Explicit "not registered" markers. Checked first: some registries echo a
# "Domain Name:" line even for free names.
FREE_STATUS_PATTERNS = [
    re.compile(r"Status:[ \t]*free", re.IGNORECASE),
    re.compile(r"is free", re.IGNORECASE),
    re.compile(r"Status:[ \t]*available", re.IGNORECASE),
]

# Any one of these fields is evidence of a registration
REGISTERED_PATTERNS = [
    re.compile(r"^[ \t]*Domain Name:", re.MULTILINE),
    re.compile(r"^[ \t]*Name Server", re.MULTILINE),
    re.compile(r"^[ \t]*Registrar:", re.MULTILINE),
]

# (pattern, verdict) in priority order
AVAILABILITY_RULES: list[tuple[re.Pattern, Verdict]] = (
    [(pattern, Verdict.AVAILABLE) for pattern in FREE_STATUS_PATTERNS]
    + [(pattern, Verdict.TAKEN) for pattern in REGISTERED_PATTERNS]
)

# Used when no rule matches
DEFAULT_VERDICT = Verdict.AVAILABLE

# Labels of the line carrying the expiry date
EXPIRY_LINE_PATTERN = re.compile(
    r"Expiry Date|Expiration Date|Registry Expiry Date|Expiration Time|paid-till|^expires:",
    re.IGNORECASE,
)

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}


def _iso_date(match: re.Match) -> str | None:
    return match.group(0)


def _day_month_year(match: re.Match) -> str | None:
    day, month, year = match.groups()
    month_number = MONTHS.get(month.lower())
    if month_number is None:
        return None
    return f"{year}-{month_number:02d}-{int(day):02d}"


def _compact_date(match: re.Match) -> str | None:
    raw = match.group(0)
    return f"{raw[0:4]}-{raw[4:6]}-{raw[6:8]}"


# (pattern, converter to YYYY-MM-DD) in priority order
EXPIRY_DATE_FORMATS: list[tuple[re.Pattern, Callable[[re.Match], str | None]]] = [
    (re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII), _iso_date),  # 2025-03-01 (gTLDs)
    (re.compile(r"(\d{1,2})-([A-Za-z]{3})-(\d{4})", re.ASCII), _day_month_year),  # 01-Mar-2025 (.uk)
    (re.compile(r"\d{8}", re.ASCII), _compact_date),  # 20250301 (.br)
]


@dataclass(frozen=True)
class WhoisRecord:
    """What could be read from one WHOIS response."""

    verdict: Verdict
    expiry_date: str | None = None


def classify_availability(text: str) -> Verdict:
    """Apply AVAILABILITY_RULES to raw WHOIS text."""
    for pattern, verdict in AVAILABILITY_RULES:
        if pattern.search(text):
            return verdict
    return DEFAULT_VERDICT


def find_expiry_line(text: str) -> str | None:
    """Return the first line carrying an expiry label, if any."""
    for line in text.splitlines():
        if EXPIRY_LINE_PATTERN.search(line):
            return line
    return None


def extract_expiry_date(line: str) -> str | None:
    """
    Pull a date out of a single expiry line.

    Tries EXPIRY_DATE_FORMATS in order and returns the first date found,
    normalized to YYYY-MM-DD.
    """
    for pattern, convert in EXPIRY_DATE_FORMATS:
        match = pattern.search(line)
        if match:
            date = convert(match)
            if date is not None:
                return date
    return None


def classify(text: str) -> WhoisRecord:
    """
    Classify a raw WHOIS response.

    Returns:
        WhoisRecord with AVAILABLE or TAKEN. Taken records carry the
        expiry date when one of the known formats was found.
    """
    verdict = classify_availability(text)
    if verdict is not Verdict.TAKEN:
        return WhoisRecord(verdict=verdict)

    line = find_expiry_line(text)
    expiry_date = extract_expiry_date(line) if line is not None else None
    return WhoisRecord(verdict=verdict, expiry_date=expiry_date)
