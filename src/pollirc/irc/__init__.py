"""IRC subsystem package.

Contains the connection lifecycle, line framing, outbound queue, tokenizer,
dispatcher and keep-alive modules, plus the ``IRCClient`` facade that ties
them together.
"""

from .client import IRCClient  # noqa: F401
from .connection import IRCConnection  # noqa: F401
from .dispatcher import IRCDispatcher  # noqa: F401
from .framing import LineFramer, frame_line  # noqa: F401
from .keepalive import KeepAlive, reply_to_ping  # noqa: F401
from .models import ConnectionState, IRCCommand, OutgoingLine  # noqa: F401
from .outbound import OutboundQueue  # noqa: F401
from .parser import parse_irc_message, serialize_irc_message  # noqa: F401

__all__ = [
    "ConnectionState",
    "IRCClient",
    "IRCCommand",
    "IRCConnection",
    "IRCDispatcher",
    "KeepAlive",
    "LineFramer",
    "OutboundQueue",
    "OutgoingLine",
    "frame_line",
    "parse_irc_message",
    "reply_to_ping",
    "serialize_irc_message",
]
