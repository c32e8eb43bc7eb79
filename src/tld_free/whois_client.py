"""
WHOIS / ping lookup client.

Chooses a lookup method once per run, then checks candidates strictly one at
a time: each query is started, waited on with a hard deadline, classified and
handed back before the next one begins.
"""

import logging
import os
import shutil
import subprocess
import sys
from typing import Iterable, Iterator

from .config import DEFAULT_WHOIS_TIMEOUT, PING_TIMEOUT
from .models import (
    Candidate,
    DomainResult,
    LookupMethod,
    ToolNotFoundError,
    Verdict,
    WhoisTimeout,
)
from .whois_parser import classify

logger = logging.getLogger(__name__)


# =============================================================================
# Tool discovery
# =============================================================================

def find_whois() -> str | None:
    """Path of the whois executable, or None."""
    return shutil.which("whois")


def find_ping() -> str | None:
    """
    Path of the system ping executable, or None.

    Looks in the OS default path first so a user-level ping wrapper earlier
    on PATH is not picked up.
    """
    return shutil.which("ping", path=os.defpath) or shutil.which("ping")


def resolve_lookup_method(requested: LookupMethod = LookupMethod.AUTO) -> LookupMethod:
    """
    Decide which lookup method to use for this run.

    An explicitly requested tool must be installed. AUTO prefers whois and
    falls back to ping with a warning.

    Raises:
        ToolNotFoundError: If the requested tool, or both tools for AUTO,
                           are missing.
    """
    if requested is LookupMethod.WHOIS:
        if not find_whois():
            raise ToolNotFoundError("whois is not installed on this system and --whois was specified")
        return LookupMethod.WHOIS

    if requested is LookupMethod.PING:
        if not find_ping():
            raise ToolNotFoundError("ping is not installed on this system and --ping was specified")
        return LookupMethod.PING

    if find_whois():
        return LookupMethod.WHOIS

    if find_ping():
        logger.warning("whois is not installed on this system, falling back to ping")
        return LookupMethod.PING

    raise ToolNotFoundError("Neither whois nor ping is installed on this system")


# =============================================================================
# Bounded WHOIS query
# =============================================================================

def query_whois(
    domain: str,
    timeout: float = DEFAULT_WHOIS_TIMEOUT,
    command: list[str] | None = None,
) -> str:
    """
    Run a single whois lookup with a hard deadline.

    Args:
        domain: Fully qualified domain to look up.
        timeout: Seconds to wait before the query is killed.
        command: Full argv to run instead of ["whois", domain].

    Returns:
        The query's standard output. Standard error is discarded.

    Raises:
        WhoisTimeout: If the query did not finish in time. The process is
                      killed and its partial output dropped.
        ToolNotFoundError: If the whois executable does not exist.
    """
    cmd = command if command is not None else ["whois", domain]

    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise WhoisTimeout(f"whois query for {domain} timed out after {timeout:g}s")
    except FileNotFoundError:
        raise ToolNotFoundError(f"{cmd[0]} not found")
    except OSError as e:
        raise ToolNotFoundError(f"Could not run {cmd[0]}: {e}") from e

    return result.stdout.decode("utf-8", errors="replace")


# =============================================================================
# Reachability check
# =============================================================================

def build_ping_command(ping: str, domain: str, timeout: int = PING_TIMEOUT) -> list[str]:
    """Build a single-echo ping command for the current platform."""
    if sys.platform == "win32":
        return [ping, "-n", "1", "-w", str(timeout * 1000), domain]
    if sys.platform == "darwin" or "bsd" in sys.platform:
        # BSD ping: -t is the overall timeout in seconds
        return [ping, "-c", "1", "-t", str(timeout), domain]
    # Linux ping: -W is the reply timeout in seconds (-t would set the TTL)
    return [ping, "-c", "1", "-W", str(timeout), domain]


def ping_domain(domain: str, timeout: int = PING_TIMEOUT) -> Verdict:
    """
    Guess availability from whether the domain answers a ping.

    A reply means the name resolves to a live host, so it is likely taken.
    No reply is only weak evidence that the domain is free.
    """
    ping = find_ping()
    if not ping:
        raise ToolNotFoundError("ping not found")

    cmd = build_ping_command(ping, domain, timeout)
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
            timeout=timeout + 3,
        )
    except subprocess.TimeoutExpired:
        return Verdict.LIKELY_AVAILABLE
    except OSError as e:
        raise ToolNotFoundError(f"Could not run {ping}: {e}") from e

    if result.returncode == 0:
        return Verdict.LIKELY_TAKEN
    return Verdict.LIKELY_AVAILABLE


# =============================================================================
# Sequential driver
# =============================================================================

def check_domain(
    candidate: Candidate,
    method: LookupMethod,
    timeout: float = DEFAULT_WHOIS_TIMEOUT,
) -> DomainResult:
    """Check one candidate with an already resolved lookup method."""
    domain = candidate.domain

    if method is LookupMethod.PING:
        return DomainResult(domain=domain, verdict=ping_domain(domain))

    if method is not LookupMethod.WHOIS:
        raise ValueError(f"Lookup method must be resolved before checking, got {method}")

    try:
        text = query_whois(domain, timeout=timeout)
    except WhoisTimeout as e:
        logger.debug("%s", e)
        return DomainResult(domain=domain, verdict=Verdict.TIMEOUT)

    logger.debug("whois %s:\n%s", domain, text)
    record = classify(text)
    return DomainResult(domain=domain, verdict=record.verdict, expiry_date=record.expiry_date)


def iter_check_domains(
    candidates: Iterable[Candidate],
    method: LookupMethod,
    timeout: float = DEFAULT_WHOIS_TIMEOUT,
) -> Iterator[DomainResult]:
    """
    Check candidates one after another, yielding each result as it is known.

    A timed out query only affects its own candidate; the run continues.
    """
    if method is LookupMethod.AUTO:
        raise ValueError("Resolve LookupMethod.AUTO with resolve_lookup_method() first")

    for candidate in candidates:
        yield check_domain(candidate, method, timeout=timeout)


def check_domains(
    candidates: Iterable[Candidate],
    method: LookupMethod,
    timeout: float = DEFAULT_WHOIS_TIMEOUT,
) -> list[DomainResult]:
    """
    Convenience function returning all results at once.

    Args:
        candidates: Candidates to check, in order
        method: WHOIS or PING (see resolve_lookup_method)
        timeout: Per-query whois timeout in seconds

    Returns:
        List of DomainResult objects, one per candidate
    """
    return list(iter_check_domains(candidates, method, timeout=timeout))
