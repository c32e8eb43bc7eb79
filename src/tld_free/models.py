"""
Data types shared across tld-free.

A run builds one Candidate per TLD, checks each one and produces exactly one
DomainResult per candidate.
"""

from dataclasses import dataclass
from enum import Enum


class TldFreeError(Exception):
    """Base class for errors raised by tld-free."""


class TldListError(TldFreeError):
    """The TLD store is missing, unreadable, or could not be refreshed."""


class ToolNotFoundError(TldFreeError):
    """A required lookup tool (whois or ping) is not installed."""


class WhoisTimeout(TldFreeError):
    """A single whois query did not finish before its deadline."""


class LookupMethod(Enum):
    """How candidates are looked up."""

    AUTO = "auto"  # whois if installed, otherwise ping
    WHOIS = "whois"
    PING = "ping"


class DisplayFilter(Enum):
    """Which results are shown to the user."""

    ALL = "all"
    TAKEN = "taken"
    AVAILABLE = "available"


class Verdict(Enum):
    """Classification outcome for one candidate domain."""

    AVAILABLE = "available"
    TAKEN = "taken"
    TIMEOUT = "timeout"  # whois did not answer in time
    LIKELY_TAKEN = "likely_taken"  # ping got a reply
    LIKELY_AVAILABLE = "likely_available"  # ping got no reply


AVAILABLE_VERDICTS = frozenset({Verdict.AVAILABLE, Verdict.LIKELY_AVAILABLE})


@dataclass(frozen=True)
class Candidate:
    """A base name combined with one TLD."""

    name: str
    tld: str

    @property
    def domain(self) -> str:
        return f"{self.name}.{self.tld}"


@dataclass(frozen=True)
class DomainResult:
    """Result of probing a single candidate."""

    domain: str
    verdict: Verdict
    expiry_date: str | None = None  # YYYY-MM-DD, only for TAKEN

    @property
    def available(self) -> bool:
        """True for confirmed or likely available domains."""
        return self.verdict in AVAILABLE_VERDICTS

    @property
    def taken(self) -> bool:
        """True for taken, likely taken and timed out domains."""
        return not self.available
