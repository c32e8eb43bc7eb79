"""
tld-free MCP Server

An MCP server exposing the TLD availability check:
- Domain names across many TLDs (via whois, with ping as a fallback)
"""

import json
import logging

from mcp.server.fastmcp import FastMCP

from . import __version__
from .config import get_whois_timeout, is_debug
from .models import DisplayFilter, LookupMethod, TldFreeError, Verdict
from .report import filter_results
from .tld_list import build_candidates, load_tlds
from .whois_client import check_domains, resolve_lookup_method

# Suppress httpx request logging by default
# Set TLD_FREE_DEBUG=1 to enable verbose HTTP logging
if not is_debug():
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

# Initialize the MCP server
mcp = FastMCP("tld-free")
mcp._mcp_server.version = __version__

METHODS = {m.value: m for m in LookupMethod}


@mcp.tool()
def version() -> str:
    """
    Get the version of the tld-free MCP server.

    Returns:
        Version string including server name and version number.
    """
    return f"tld-free MCP Server version {__version__}"


@mcp.tool()
def check_tlds(
    name: str,
    tlds: list[str] | None = None,
    method: str = "auto",
    onlyReportAvailable: bool = False,
    onlyReportTaken: bool = False
) -> str:
    """
    Check which TLDs are taken or available for a base name.

    Domains are checked one at a time; each whois query may take up to the
    configured timeout (10 seconds by default).

    Args:
        name: Base name without a TLD (e.g. "google")
        tlds: TLDs to check (default: every TLD in the local IANA list)
        method: Lookup method - "auto" (default, whois if installed, otherwise ping),
                "whois" (fails if whois is not installed),
                "ping" (reachability heuristic, results are only likely)
        onlyReportAvailable: If true, only return available domains
        onlyReportTaken: If true, only return taken and timed out domains

    Returns:
        JSON with available domains, taken domains (with expiry dates when known),
        timeouts and a summary.
    """
    if not name or not name.strip():
        return json.dumps({"error": "No domain name provided"})

    method = method.lower()
    if method not in METHODS:
        return json.dumps({"error": f"Invalid method '{method}'. Use 'auto', 'whois', or 'ping'"})

    if onlyReportAvailable and onlyReportTaken:
        return json.dumps({"error": "Cannot use onlyReportAvailable and onlyReportTaken together"})

    display_filter = DisplayFilter.ALL
    if onlyReportAvailable:
        display_filter = DisplayFilter.AVAILABLE
    elif onlyReportTaken:
        display_filter = DisplayFilter.TAKEN

    try:
        resolved = resolve_lookup_method(METHODS[method])
        tld_list = load_tlds(tlds)
    except TldFreeError as e:
        return json.dumps({"error": str(e)})

    candidates = build_candidates(name.strip(), tld_list)
    try:
        results = check_domains(candidates, resolved, timeout=get_whois_timeout())
    except TldFreeError as e:
        return json.dumps({"error": str(e)})

    available_list = []
    taken_list = []
    timeouts_list = []

    for r in filter_results(results, display_filter):
        if r.verdict is Verdict.TIMEOUT:
            timeouts_list.append(r.domain)
        elif r.available:
            available_list.append({"domain": r.domain, "verdict": r.verdict.value})
        else:
            entry = {"domain": r.domain, "verdict": r.verdict.value}
            if r.expiry_date:
                entry["expiryDate"] = r.expiry_date
            taken_list.append(entry)

    response = {}
    if display_filter is not DisplayFilter.TAKEN:
        response["available"] = available_list
    if display_filter is not DisplayFilter.AVAILABLE:
        response["taken"] = taken_list
        response["timeouts"] = timeouts_list

    response["method"] = resolved.value
    response["summary"] = {
        "checked": len(results),
        "available": sum(1 for r in results if r.available),
        "taken": sum(1 for r in results if r.taken and r.verdict is not Verdict.TIMEOUT),
        "timeouts": sum(1 for r in results if r.verdict is Verdict.TIMEOUT),
    }

    return json.dumps(response)


def main():
    """Run the MCP server over stdio."""
    mcp.run()
