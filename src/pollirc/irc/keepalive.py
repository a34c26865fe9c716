"""Server PING handling."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from ..logs.logger import logger
from .models import IRCCommand
from .parser import serialize_irc_message

if TYPE_CHECKING:  # pragma: no cover
    from .client import CommandHandler, IRCClient


def reply_to_ping(client: IRCClient, command: IRCCommand) -> bool:
    """``on_command`` handler answering ``PING <token>`` with ``PONG <token>``.

    Returns whether a reply was queued.
    """
    if command.command.upper() != "PING":
        return False
    pong = IRCCommand(
        command="PONG", params=list(command.params), has_trailing=command.has_trailing
    )
    client.send(serialize_irc_message(pong))
    logger.log_event("irc", "ping_reply", level=logging.DEBUG, server=client.server)
    return True


class KeepAlive:
    """Command handler that answers pings and forwards every command.

    Install with ``client.on_command = KeepAlive(other_handler)``.
    """

    def __init__(self, handler: CommandHandler | None = None) -> None:
        self.handler = handler
        self.last_ping_from_server = 0.0
        self.pings_answered = 0

    def __call__(self, client: IRCClient, command: IRCCommand) -> None:
        if reply_to_ping(client, command):
            self.last_ping_from_server = time.time()
            self.pings_answered += 1
        if self.handler is not None:
            self.handler(client, command)

    def seconds_since_ping(self) -> float | None:
        if not self.last_ping_from_server:
            return None
        return time.time() - self.last_ping_from_server
