"""
Configuration for tld-free.

Settings are read from, in order:
1. Environment variables (TLD_FREE_TLDS_FILE, TLD_FREE_WHOIS_TIMEOUT)
2. Config file (config.json in the config directory)
3. Built-in defaults
"""

import json
import os
from pathlib import Path

# Seconds a single whois query may run before it is killed
DEFAULT_WHOIS_TIMEOUT = 10.0

# Seconds ping waits for an echo reply
PING_TIMEOUT = 2

TLDS_FILE_NAME = "tlds.txt"


def get_config_dir() -> Path:
    """Get the config directory for this app."""
    if os.name == 'nt':  # Windows
        base = Path(os.environ.get('APPDATA', Path.home()))
    else:  # macOS, Linux
        base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))

    return base / 'tld-free'


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / 'config.json'


def load_config() -> dict:
    """Load config.json, returning an empty dict if missing or invalid."""
    try:
        config_file = get_config_file()
        if config_file.exists():
            config = json.loads(config_file.read_text())
            if isinstance(config, dict):
                return config
    except (json.JSONDecodeError, OSError):
        pass
    return {}


def get_tlds_file() -> Path:
    """
    Get the path of the local TLD store.

    Lookup order:
    1. Environment variable (TLD_FREE_TLDS_FILE)
    2. Config file key "tlds_file"
    3. tlds.txt in the config directory
    """
    if path := os.environ.get('TLD_FREE_TLDS_FILE'):
        return Path(path).expanduser()

    if path := load_config().get('tlds_file'):
        return Path(path).expanduser()

    return get_config_dir() / TLDS_FILE_NAME


def _parse_timeout(value) -> float | None:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return None
    return timeout if timeout > 0 else None


def get_whois_timeout() -> float:
    """
    Get the whois timeout in seconds.

    Lookup order:
    1. Environment variable (TLD_FREE_WHOIS_TIMEOUT)
    2. Config file key "whois_timeout"
    3. DEFAULT_WHOIS_TIMEOUT

    Invalid or non-positive values are ignored.
    """
    if timeout := _parse_timeout(os.environ.get('TLD_FREE_WHOIS_TIMEOUT')):
        return timeout

    if timeout := _parse_timeout(load_config().get('whois_timeout')):
        return timeout

    return DEFAULT_WHOIS_TIMEOUT


def is_debug() -> bool:
    """Verbose logging is enabled with TLD_FREE_DEBUG=1."""
    return bool(os.environ.get('TLD_FREE_DEBUG'))
