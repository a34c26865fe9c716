from __future__ import annotations

import errno
import socket

import pytest

from pollirc.errors import NotConnectedError
from pollirc.irc import connection as connection_module
from pollirc.irc.connection import IRCConnection
from pollirc.irc.models import ConnectionState

from tests.fakes import FakeSocket

SOCKADDR = ("203.0.113.7", 6667)


@pytest.fixture
def sockets(monkeypatch):
    """Route socket creation to FakeSocket instances and stub DNS/select."""
    created: list[FakeSocket] = []
    state = {"connect_result": 0, "so_error": 0, "writable": True}

    def fake_getaddrinfo(host, port, *args, **kwargs):
        return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", SOCKADDR)]

    def fake_socket(family, socktype, proto):
        sock = FakeSocket(connect_result=state["connect_result"], so_error=state["so_error"])
        created.append(sock)
        return sock

    def fake_select(r, w, x, timeout):
        assert timeout == 0
        return [], (list(w) if state["writable"] else []), []

    monkeypatch.setattr(connection_module.socket, "getaddrinfo", fake_getaddrinfo)
    monkeypatch.setattr(connection_module.socket, "socket", fake_socket)
    monkeypatch.setattr(connection_module.select, "select", fake_select)

    class Sockets:
        pass

    helper = Sockets()
    helper.created = created
    helper.state = state
    return helper


def test_initial_state():
    conn = IRCConnection()
    assert conn.state is ConnectionState.DISCONNECTED
    assert conn.sock is None
    assert not conn.is_connected()
    assert not conn.is_pending()
    assert conn.fileno() == -1


def test_connect_without_address_returns_false(sockets, captured_events):
    conn = IRCConnection()
    assert conn.connect() is False
    assert sockets.created == []
    assert ("irc", "connect_no_address") in [(d, a) for d, a, _ in captured_events]


def test_immediate_connect(sockets):
    conn = IRCConnection()
    assert conn.connect(("irc.example.net", 6667)) is True
    sock = sockets.created[0]
    assert sock.blocking is False
    assert sock.connect_calls == [SOCKADDR]
    assert conn.state is ConnectionState.CONNECTED
    assert conn.is_connected()
    assert conn.server == "irc.example.net:6667"


def test_two_phase_connect(sockets):
    sockets.state["connect_result"] = errno.EINPROGRESS
    sockets.state["writable"] = False
    conn = IRCConnection(("irc.example.net", 6667))

    assert conn.connect() is False
    assert conn.is_pending()
    assert not conn.is_connected()

    # Still in progress: no new socket, no second connect_ex.
    assert conn.connect() is False
    assert len(sockets.created) == 1
    assert sockets.created[0].connect_calls == [SOCKADDR]

    sockets.state["writable"] = True
    assert conn.connect() is True
    assert conn.is_connected()
    assert not conn.is_pending()


def test_already_connected_is_a_noop(sockets):
    conn = IRCConnection(("irc.example.net", 6667))
    conn.connect()
    assert conn.connect() is True
    assert len(sockets.created) == 1
    assert sockets.created[0].connect_calls == [SOCKADDR]


def test_refused_while_pending_raises_and_releases_socket(sockets):
    sockets.state["connect_result"] = errno.EINPROGRESS
    sockets.state["so_error"] = errno.ECONNREFUSED
    conn = IRCConnection(("irc.example.net", 6667))
    assert conn.connect() is False

    with pytest.raises(ConnectionRefusedError):
        conn.connect()
    assert sockets.created[0].closed
    assert conn.sock is None
    assert conn.state is ConnectionState.DISCONNECTED


def test_immediate_failure_raises(sockets):
    sockets.state["connect_result"] = errno.EHOSTUNREACH
    conn = IRCConnection(("irc.example.net", 6667))
    with pytest.raises(OSError) as exc_info:
        conn.connect()
    assert exc_info.value.errno == errno.EHOSTUNREACH
    assert sockets.created[0].closed
    assert not conn.is_open()


def test_closed_socket_is_replaced_on_next_connect(sockets):
    conn = IRCConnection(("irc.example.net", 6667))
    conn.connect()
    conn.sock.close()  # closed behind our back
    assert not conn.is_connected()
    assert conn.connect() is True
    assert len(sockets.created) == 2


def test_new_address_is_used_for_next_socket(sockets):
    conn = IRCConnection(("old.example.net", 6667))
    conn.connect(("new.example.net", "7000"))
    assert conn.address == ("new.example.net", 7000)


def test_close_reports_previous_state(sockets):
    conn = IRCConnection(("irc.example.net", 6667))
    conn.connect()
    assert conn.close() is ConnectionState.CONNECTED
    assert conn.close() is ConnectionState.DISCONNECTED
    assert sockets.created[0].closed


def test_io_requires_connection():
    conn = IRCConnection(("irc.example.net", 6667))
    with pytest.raises(NotConnectedError):
        conn.recv(10)
    with pytest.raises(NotConnectedError):
        conn.send(b"x")
