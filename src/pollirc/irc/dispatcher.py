"""Synchronous event dispatch for the client callbacks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..logs.logger import logger
from .models import OutgoingLine
from .parser import parse_irc_message

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient


class IRCDispatcher:
    """Invokes the handlers registered on the host client.

    Handlers run on the caller's thread, in the middle of ``read``/``connect``
    /``disconnect``. A failing inbound handler is logged and skipped so the
    remaining lines of the same read still get dispatched; ``OSError`` is the
    exception and always propagates.
    """

    def __init__(self, client: IRCClient):
        self.client = client

    def dispatch_line(self, line: str) -> bool:
        """Fire ``on_message`` then ``on_command`` for one framed line.

        Returns:
            Whether at least one handler was registered to receive the line.
        """
        client = self.client
        logger.log_event(
            "irc",
            "raw",
            level=logging.DEBUG,
            server=client.server,
            raw=line,
        )
        handled = False
        if client.on_message is not None:
            handled = True
            self._invoke("on_message", client.on_message, client, line)
        if client.on_command is not None:
            handled = True
            self._invoke("on_command", client.on_command, client, parse_irc_message(line))
        return handled

    def notify_connect(self) -> None:
        if self.client.on_connect is not None:
            self._invoke("on_connect", self.client.on_connect, self.client)

    def notify_disconnect(self) -> None:
        if self.client.on_disconnect is not None:
            self._invoke("on_disconnect", self.client.on_disconnect, self.client)

    def filter_outgoing(self, line: OutgoingLine) -> OutgoingLine:
        # Runs inside the caller's send(); errors propagate to that caller.
        if self.client.on_send is not None:
            self.client.on_send(self.client, line)
        return line

    def _invoke(self, name: str, handler: Callable[..., Any], *args: Any) -> None:
        try:
            handler(*args)
        except OSError:
            raise
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "irc",
                "handler_error",
                level=logging.ERROR,
                server=self.client.server,
                handler=name,
                error=str(e),
                error_type=type(e).__name__,
            )
