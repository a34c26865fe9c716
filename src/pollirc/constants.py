"""
Tunables for the pollirc client and its command-line driver.

Each numeric constant may be overridden through the environment variable named
next to it. Unparsable values are reported on stdout and ignored.
"""

import os
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T", int, float)


def _get_env(name: str, default: T, cast: Callable[[str], T], kind: str) -> T:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return cast(value)
    except ValueError:
        print(f"Warning: Invalid {kind} value for {name}='{value}', using default {default}")
        return default


def _get_env_int(name: str, default: int) -> int:
    """Read an integer override for ``name``, falling back to ``default``."""
    return _get_env(name, default, int, "integer")


def _get_env_float(name: str, default: float) -> float:
    return _get_env(name, default, float, "float")


# Socket I/O
READ_BUFFER_SIZE = _get_env_int(
    "POLLIRC_READ_BUFFER_SIZE", 4096
)  # Bytes per recv() call; bounds syscall size, not line length
DEFAULT_PORT = _get_env_int("POLLIRC_DEFAULT_PORT", 6667)  # Plain-text IRC port

# Wire format
LINE_TERMINATOR = b"\r\n"
LINE_ENCODING = "utf-8"

# Command-line driver timing
CONNECT_POLL_INTERVAL = _get_env_float(
    "POLLIRC_CONNECT_POLL_INTERVAL", 0.1
)  # Seconds between attempts to finish a pending connect
CONNECT_TIMEOUT = _get_env_float(
    "POLLIRC_CONNECT_TIMEOUT", 30.0
)  # Give up on a pending connect after this many seconds
POLL_INTERVAL = _get_env_float(
    "POLLIRC_POLL_INTERVAL", 0.5
)  # select() timeout for the driver's main loop
