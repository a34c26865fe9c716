"""Minimal non-blocking, poll-driven IRC client."""

from .errors import FramingError, InternalError, NotConnectedError  # noqa: F401
from .irc import (  # noqa: F401
    ConnectionState,
    IRCClient,
    IRCCommand,
    KeepAlive,
    OutgoingLine,
    parse_irc_message,
    reply_to_ping,
)

__version__ = "0.1.0"

__all__ = [
    "ConnectionState",
    "FramingError",
    "IRCClient",
    "IRCCommand",
    "InternalError",
    "KeepAlive",
    "NotConnectedError",
    "OutgoingLine",
    "parse_irc_message",
    "reply_to_ping",
]
