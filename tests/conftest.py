import pytest

from pollirc.irc import IRCClient
from tests.fakes import FakeSocket, attach


@pytest.fixture
def fake_socket():
    return FakeSocket()


@pytest.fixture
def client():
    return IRCClient()


@pytest.fixture
def connected_client(client, fake_socket):
    attach(client, fake_socket)
    return client


@pytest.fixture
def captured_events(monkeypatch):
    """Record (domain, action, kwargs) of every structured log event."""
    from pollirc.logs.logger import logger as irc_logger

    seen = []
    original = irc_logger.log_event

    def capture(domain, action, *args, **kwargs):
        seen.append((domain, action, kwargs))
        original(domain, action, *args, **kwargs)

    monkeypatch.setattr(irc_logger, "log_event", capture)
    return seen
