"""
tld-free command-line interface.

Usage:
    tld-free google
    tld-free google --tlds com org net
    tld-free --taken --whois google
    tld-free --update google
"""

import argparse
import logging
import sys

from . import __version__
from .config import get_whois_timeout, is_debug
from .models import DisplayFilter, LookupMethod, TldFreeError
from .report import format_result, should_display, use_color
from .tld_list import build_candidates, load_tlds, refresh_tld_list
from .whois_client import iter_check_domains, resolve_lookup_method

logger = logging.getLogger(__name__)


class ArgumentParser(argparse.ArgumentParser):
    """Argument errors exit with status 1 instead of argparse's 2."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="tld-free",
        allow_abbrev=False,
        description="tld-free - Find available domains.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s google --tlds com org net
    %(prog)s --available myproject
    %(prog)s --update myproject

Environment:
    TLD_FREE_TLDS_FILE        Path of the local TLD list
    TLD_FREE_WHOIS_TIMEOUT    Seconds before a whois query is abandoned
    TLD_FREE_DEBUG            Enable debug logging
        """
    )
    parser.add_argument(
        "domain",
        nargs="?",
        metavar="DOMAIN",
        help="Base name to check, without a TLD"
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"Version: {__version__}",
        help="Display version"
    )
    parser.add_argument(
        "-u", "--update",
        action="store_true",
        help="Update the list of TLDs from IANA"
    )
    parser.add_argument(
        "--no-backup-tlds",
        action="store_true",
        help="Do not make a backup of the current TLD list when updating"
    )

    show = parser.add_mutually_exclusive_group()
    show.add_argument(
        "-t", "--taken",
        action="store_true",
        help="Only show taken domains"
    )
    show.add_argument(
        "-a", "--available",
        action="store_true",
        help="Only show available domains"
    )

    method = parser.add_mutually_exclusive_group()
    method.add_argument(
        "--whois",
        action="store_true",
        help="Force whois lookup (fail if whois is not installed)"
    )
    method.add_argument(
        "--ping",
        action="store_true",
        help="Force ping lookup"
    )

    parser.add_argument(
        "--tlds",
        nargs="+",
        metavar="TLD",
        help="Search only these TLDs"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        metavar="SECONDS",
        help="Seconds before a whois query is abandoned (default: 10)"
    )
    return parser


def setup_logging() -> None:
    """Log to stderr as 'LEVEL: message'."""
    debug = is_debug()
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_display_filter(args: argparse.Namespace) -> DisplayFilter:
    if args.taken:
        return DisplayFilter.TAKEN
    if args.available:
        return DisplayFilter.AVAILABLE
    return DisplayFilter.ALL


def get_lookup_method(args: argparse.Namespace) -> LookupMethod:
    if args.whois:
        return LookupMethod.WHOIS
    if args.ping:
        return LookupMethod.PING
    return LookupMethod.AUTO


def run(argv: list[str] | None = None) -> int:
    """Run the CLI and return the exit status."""
    try:
        return _run(argv)
    except KeyboardInterrupt:
        return 130


def _run(argv: list[str] | None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging()

    if not args.domain:
        logger.error("No domain provided")
        parser.print_help(sys.stderr)
        return 1

    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be greater than zero")

    display_filter = get_display_filter(args)
    timeout = args.timeout or get_whois_timeout()

    try:
        if args.update:
            refresh_tld_list(backup=not args.no_backup_tlds)

        method = resolve_lookup_method(get_lookup_method(args))
        tlds = load_tlds(args.tlds)
    except TldFreeError as e:
        logger.error("%s", e)
        return 1

    candidates = build_candidates(args.domain, tlds)
    color = use_color(sys.stdout)

    try:
        for result in iter_check_domains(candidates, method, timeout=timeout):
            if should_display(result, display_filter):
                print(format_result(result, color=color), flush=True)
    except TldFreeError as e:
        logger.error("%s", e)
        return 1

    return 0
