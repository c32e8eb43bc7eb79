"""
tld-free

Find which top-level domains are taken or available for a name, using whois
with a ping fallback. The MCP server is started with `tld-free-mcp`.
"""

__version__ = "0.1.0"


def main():
    """Main entry point for the CLI."""
    import sys

    from .cli import run
    sys.exit(run())
