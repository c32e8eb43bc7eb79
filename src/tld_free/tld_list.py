"""
TLD List Module

Reads the local TLD store, refreshes it from the IANA list of top-level
domains, and combines a base name with each TLD into candidates.

The IANA file is line-delimited: the first line is a comment header
("# Version 2024..., Last Updated ...") and every following line is a TLD.
"""

import logging
from datetime import datetime
from pathlib import Path

import httpx

from .config import get_tlds_file
from .models import Candidate, TldListError

logger = logging.getLogger(__name__)

# IANA list of all delegated top-level domains
IANA_TLD_URL = "https://data.iana.org/TLD/tlds-alpha-by-domain.txt"


def parse_tld_text(text: str) -> list[str]:
    """
    Parse the contents of a TLD store.

    Skips exactly the first line (the header) and returns every remaining
    non-empty line, stripped, in file order.
    """
    lines = text.splitlines()[1:]
    return [line.strip() for line in lines if line.strip()]


def load_tlds(tlds: list[str] | None = None, path: Path | None = None) -> list[str]:
    """
    Get the TLDs to check.

    Args:
        tlds: Explicit TLDs. Returned as-is (order kept, no validation).
        path: TLD store to read when no explicit TLDs are given
              (default: config.get_tlds_file()).

    Returns:
        Ordered list of TLD strings.

    Raises:
        TldListError: If the store has to be read and is missing or unreadable.
    """
    if tlds:
        return list(tlds)

    if path is None:
        path = get_tlds_file()

    try:
        text = path.read_text()
    except FileNotFoundError:
        raise TldListError(f"TLD list not found: {path} (run with --update to download it)")
    except (OSError, UnicodeDecodeError) as e:
        raise TldListError(f"Could not read TLD list {path}: {e}")

    return parse_tld_text(text)


def build_candidates(name: str, tlds: list[str]) -> list[Candidate]:
    """Combine a base name with every TLD, preserving order."""
    candidates = [Candidate(name=name, tld=tld) for tld in tlds]
    logger.info("Found %d domain names to use", len(candidates))
    return candidates


def backup_file_name(path: Path, now: datetime | None = None) -> Path:
    """
    Build the backup path for a TLD store.

    tlds.txt -> tlds_20250301_120000.txt, tlds -> tlds_20250301_120000
    """
    timestamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    if path.suffix:
        return path.with_name(f"{path.stem}_{timestamp}{path.suffix}")
    return path.with_name(f"{path.name}_{timestamp}")


def backup_tld_file(path: Path | None = None, now: datetime | None = None) -> Path:
    """
    Move the current TLD store to a timestamped backup next to it.

    Returns:
        The backup path.

    Raises:
        TldListError: If the store does not exist or cannot be moved.
    """
    if path is None:
        path = get_tlds_file()

    if not path.is_file():
        raise TldListError(f"File not found: {path}")

    backup = backup_file_name(path, now)
    try:
        path.rename(backup)
    except OSError as e:
        raise TldListError(f"Could not move {path} to {backup}: {e}")

    logger.info("Moved the current tlds file %s to its backup location %s", path, backup)
    return backup


def refresh_tld_list(path: Path | None = None, backup: bool = True) -> Path:
    """
    Download the IANA TLD list into the local store.

    Args:
        path: Store to write (default: config.get_tlds_file()).
        backup: Move the existing store aside before writing the new one.

    Returns:
        The path written.

    Raises:
        TldListError: If the backup or the download fails.
    """
    if path is None:
        path = get_tlds_file()

    not_updated = "Backup was not completed successfully. TLDs were not updated"
    if backup and not path.is_file():
        raise TldListError(f"File not found: {path}. {not_updated}")

    # The current store is only touched once the new list has arrived
    headers = {"User-Agent": "tld-free/1.0 (TLD list update)"}
    try:
        response = httpx.get(IANA_TLD_URL, headers=headers, timeout=30, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise TldListError(f"Could not download TLD list from {IANA_TLD_URL}: {e}")

    if backup:
        try:
            backup_tld_file(path)
        except TldListError as e:
            raise TldListError(f"{e}. {not_updated}")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(response.text)
    except OSError as e:
        raise TldListError(f"Could not write TLD list {path}: {e}")

    logger.info("Updated TLD list %s (%d TLDs)", path, len(parse_tld_text(response.text)))
    return path
