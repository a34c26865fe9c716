"""Non-blocking TCP connection lifecycle."""

from __future__ import annotations

import errno
import logging
import os
import select
import socket
from typing import NoReturn

from ..errors import NotConnectedError
from ..logs.logger import logger
from .models import ConnectionState

# connect_ex() results meaning "handshake started, not finished yet"
_CONNECT_IN_PROGRESS = frozenset(
    {errno.EINPROGRESS, errno.EALREADY, errno.EWOULDBLOCK, errno.EAGAIN}
)
_CONNECT_DONE = frozenset({0, errno.EISCONN})


class IRCConnection:
    """Owns the socket, the remote address and the explicit connection state.

    ``connect`` is meant to be called repeatedly: the first call starts a
    non-blocking handshake, later calls check whether it finished. Socket
    errors are raised to the caller unchanged after the socket is released.
    """

    def __init__(self, address: tuple[str, int] | None = None) -> None:
        self.address = address
        self.sock: socket.socket | None = None
        self.state = ConnectionState.DISCONNECTED
        self._sockaddr = None

    @property
    def server(self) -> str:
        if not self.address:
            return "unset"
        host, port = self.address
        return f"{host}:{port}"

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                server=self.server,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    def is_open(self) -> bool:
        return self.sock is not None and self.sock.fileno() != -1

    def is_connected(self) -> bool:
        return self.is_open() and self.state is ConnectionState.CONNECTED

    def is_pending(self) -> bool:
        return self.is_open() and self.state is ConnectionState.CONNECTING

    def fileno(self) -> int:
        return self.sock.fileno() if self.sock is not None else -1

    def connect(self, address: tuple[str, int] | None = None) -> bool:
        """Start or continue connecting.

        Returns:
            ``True`` when the connection is established (already, or on this
            call), ``False`` while the handshake is still in progress or no
            address is known.

        Raises:
            OSError: resolution, socket creation or the handshake failed.
        """
        if address is not None:
            self.address = (address[0], int(address[1]))
        if self.is_connected():
            return True
        if self.address is None:
            logger.log_event("irc", "connect_no_address", level=logging.WARNING)
            return False
        if self.is_pending():
            return self._finish_connect()
        self._open()
        return self._start_connect()

    def _open(self) -> None:
        host, port = self.address  # type: ignore[misc]
        family, socktype, proto, _, sockaddr = socket.getaddrinfo(
            host, port, type=socket.SOCK_STREAM
        )[0]
        self.sock = socket.socket(family, socktype, proto)
        self.sock.setblocking(False)
        self._sockaddr = sockaddr
        self._set_state(ConnectionState.DISCONNECTED)

    def _start_connect(self) -> bool:
        logger.log_event("irc", "connect_start", server=self.server)
        self._set_state(ConnectionState.CONNECTING)
        err = self.sock.connect_ex(self._sockaddr)  # type: ignore[union-attr]
        if err in _CONNECT_DONE:
            self._set_state(ConnectionState.CONNECTED)
            return True
        if err in _CONNECT_IN_PROGRESS:
            logger.log_event(
                "irc", "connect_pending", level=logging.DEBUG, server=self.server
            )
            return False
        self._fail(err)

    def _finish_connect(self) -> bool:
        _, writable, _ = select.select([], [self.sock], [], 0)
        if not writable:
            return False
        err = self.sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR)  # type: ignore[union-attr]
        if err:
            self._fail(err)
        self._set_state(ConnectionState.CONNECTED)
        return True

    def _fail(self, err: int) -> NoReturn:
        strerror = os.strerror(err)
        logger.log_event(
            "irc",
            "connect_failed",
            level=logging.ERROR,
            server=self.server,
            error=strerror,
            errno=err,
        )
        self.close()
        raise OSError(err, strerror)

    def set_blocking(self, flag: bool) -> None:
        if self.is_open():
            self.sock.setblocking(flag)  # type: ignore[union-attr]

    def close(self) -> ConnectionState:
        """Release the socket. Returns the state it had before closing."""
        previous = self.state
        sock, self.sock = self.sock, None
        self._set_state(ConnectionState.DISCONNECTED)
        if sock is not None:
            sock.close()
        return previous

    def recv(self, size: int) -> bytes:
        if not self.is_connected():
            raise NotConnectedError("Cannot read: not connected", data={"server": self.server})
        return self.sock.recv(size)  # type: ignore[union-attr]

    def send(self, data: memoryview | bytes) -> int:
        if not self.is_connected():
            raise NotConnectedError("Cannot write: not connected", data={"server": self.server})
        return self.sock.send(data)  # type: ignore[union-attr]
