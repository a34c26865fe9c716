"""Poll-driven IRC client.

The caller owns the loop::

    client = IRCClient()
    client.on_connect = lambda irc: irc.send("NICK guest")
    while not client.connect(("irc.example.net", 6667)):
        time.sleep(0.1)
    while client.is_connected():
        client.poll_events()

Nothing here blocks except ``disconnect``, which switches the socket back to
blocking mode before closing it.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from typing import Any

from ..constants import LINE_ENCODING, READ_BUFFER_SIZE
from ..errors import NotConnectedError
from ..logs.logger import logger
from .connection import IRCConnection
from .dispatcher import IRCDispatcher
from .framing import LineFramer, frame_line
from .models import ConnectionState, IRCCommand, OutgoingLine
from .outbound import OutboundQueue

ClientHandler = Callable[["IRCClient"], Any]
MessageHandler = Callable[["IRCClient", str], Any]
CommandHandler = Callable[["IRCClient", IRCCommand], Any]
SendFilter = Callable[["IRCClient", OutgoingLine], Any]


class IRCClient:  # pylint: disable=too-many-instance-attributes
    def __init__(
        self,
        address: tuple[str, int] | None = None,
        *,
        read_buffer_size: int = READ_BUFFER_SIZE,
        encoding: str = LINE_ENCODING,
    ) -> None:
        self.connection = IRCConnection(address)
        self.framer = LineFramer(encoding)
        self.queue = OutboundQueue()
        # Framed lines not yet handed to the handlers.
        self.inbox: deque[str] = deque()
        self.dispatcher = IRCDispatcher(self)
        self.read_buffer_size = read_buffer_size
        self.encoding = encoding

        self.on_connect: ClientHandler | None = None
        self.on_disconnect: ClientHandler | None = None
        self.on_message: MessageHandler | None = None
        self.on_command: CommandHandler | None = None
        self.on_send: SendFilter | None = None

    @property
    def server(self) -> str:
        return self.connection.server

    @property
    def state(self) -> ConnectionState:
        return self.connection.state

    # Lifecycle -----------------------------------------------------------

    def connect_to(self, host: str, port: int) -> None:
        """Remember the server address for later ``connect()`` calls."""
        self.connection.address = (host, int(port))

    def connect(self, address: tuple[str, int] | None = None) -> bool:
        """Start or continue a non-blocking connect.

        Returns ``True`` once connected. ``on_connect`` fires on the call that
        completes the handshake, before this method returns.
        """
        was_connected = self.connection.is_connected()
        established = self.connection.connect(address)
        if established and not was_connected:
            logger.log_event("irc", "connect_established", server=self.server)
            self.dispatcher.notify_connect()
        return established

    def disconnect(self) -> bool:
        """Close the connection.

        ``on_disconnect`` fires before the socket closes when a connection had
        been established. The outbound queue is kept.

        Returns:
            ``False`` when there was no socket to close.
        """
        if not self.connection.is_open():
            logger.log_event("irc", "disconnect_noop", level=logging.DEBUG)
            return False
        self._teardown()
        return True

    def _teardown(self) -> None:
        was_connected = self.connection.state is ConnectionState.CONNECTED
        self.connection.set_blocking(True)
        try:
            if was_connected:
                self.dispatcher.notify_disconnect()
        finally:
            self.connection.close()
            self.framer.reset()
            self.inbox.clear()
            logger.log_event("irc", "disconnect", server=self.server)

    def is_connected(self) -> bool:
        return self.connection.is_connected()

    def is_connection_pending(self) -> bool:
        return self.connection.is_pending()

    def fileno(self) -> int:
        return self.connection.fileno()

    # Outbound ------------------------------------------------------------

    def send(self, line: str) -> bool:
        """Queue ``line`` after passing it through ``on_send``.

        Queueing works while disconnected. Raises ``FramingError`` if the
        (possibly rewritten) line contains CR or LF.
        """
        outgoing = self.dispatcher.filter_outgoing(OutgoingLine(str(line)))
        return self._enqueue(outgoing.text)

    def send_unmodifiable(self, line: str) -> bool:
        """Queue ``line`` as is, bypassing ``on_send``."""
        return self._enqueue(str(line))

    def _enqueue(self, text: str) -> bool:
        data = frame_line(text, self.encoding)
        logger.log_event(
            "irc", "send_queued", level=logging.DEBUG, server=self.server, line=text
        )
        return self.queue.append(data)

    def write(self) -> int:
        """Flush as much of the queue as the socket accepts without blocking.

        Returns:
            Number of bytes written by this call.
        """
        self._require_connection("write")
        written = self.queue.drain(self.connection.send)
        if written:
            logger.log_event(
                "irc", "write_flushed", level=logging.DEBUG, server=self.server, bytes=written
            )
        if self.queue:
            logger.log_event(
                "irc",
                "write_blocked",
                level=logging.DEBUG,
                server=self.server,
                pending=len(self.queue),
            )
        return written

    # Inbound -------------------------------------------------------------

    def receive(self, line: str) -> bool:
        """Dispatch ``line`` as if it had been read from the socket."""
        return self.dispatcher.dispatch_line(line)

    def read(self) -> int:
        """Read everything currently available and dispatch complete lines.

        End-of-stream tears the connection down (firing ``on_disconnect``).
        If a handler raises ``OSError``, the lines behind the failing one stay
        in ``inbox`` and are dispatched first by the next call.

        Returns:
            Number of lines dispatched.
        """
        self._require_connection("read")
        dispatched = self._dispatch_inbox()
        while self.connection.is_connected():
            try:
                data = self.connection.recv(self.read_buffer_size)
            except BlockingIOError:
                break
            if not data:
                logger.log_event("irc", "eof", server=self.server)
                self._teardown()
                break
            self.inbox.extend(self.framer.feed(data))
            dispatched += self._dispatch_inbox()
        return dispatched

    def _dispatch_inbox(self) -> int:
        dispatched = 0
        # A handler that disconnects clears the inbox through _teardown.
        while self.inbox and self.connection.is_connected():
            self.dispatcher.dispatch_line(self.inbox.popleft())
            dispatched += 1
        return dispatched

    def poll_events(self) -> None:
        """One pump: read and dispatch, then flush the queue."""
        self.read()
        if self.connection.is_connected():
            self.write()

    def _require_connection(self, operation: str) -> None:
        if not self.connection.is_connected():
            raise NotConnectedError(
                f"Cannot {operation}: not connected",
                data={"server": self.server, "state": self.state.name},
            )
