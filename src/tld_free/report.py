"""
Output formatting for check results.
"""

import os
import sys
from typing import Iterable, Iterator, TextIO

from .models import DisplayFilter, DomainResult, Verdict

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[0;33m"
NC = "\033[0m"


def use_color(stream: TextIO | None = None) -> bool:
    """Colors are used on terminals unless NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream or sys.stdout
    return hasattr(stream, "isatty") and stream.isatty()


def should_display(result: DomainResult, display_filter: DisplayFilter) -> bool:
    """
    Whether a result passes the user's display filter.

    Timeouts count as taken: they are hidden by --available only.
    """
    if display_filter is DisplayFilter.AVAILABLE:
        return result.available
    if display_filter is DisplayFilter.TAKEN:
        return result.taken
    return True


def filter_results(
    results: Iterable[DomainResult], display_filter: DisplayFilter
) -> Iterator[DomainResult]:
    """Yield only the results that should be shown."""
    return (r for r in results if should_display(r, display_filter))


def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{NC}" if enabled else text


def format_result(result: DomainResult, color: bool = True) -> str:
    """Format a result as a single output line."""
    taken = _paint("taken", RED, color)
    avail = _paint("avail", GREEN, color)
    domain = result.domain

    if result.verdict is Verdict.TAKEN:
        if result.expiry_date:
            return f"[{taken}] {domain} - Exp Date: {_paint(result.expiry_date, YELLOW, color)}"
        return f"[{taken}] {domain} - No expiry date found"

    if result.verdict is Verdict.TIMEOUT:
        return f"[{_paint('timeout', YELLOW, color)}] {domain} - whois query timed out"

    if result.verdict is Verdict.LIKELY_TAKEN:
        return f"[{taken}] {domain} is reachable"

    if result.verdict is Verdict.LIKELY_AVAILABLE:
        return f"[{avail}] {domain} is not reachable, possibly available"

    return f"[{avail}] {domain}"
