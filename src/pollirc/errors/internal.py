"""Centralized internal error hierarchy.

Socket failures are never wrapped: ``OSError`` and its subclasses propagate to
the caller exactly as the socket layer raised them. The classes below cover
misuse of the client and violations of the line framing contract.

Classes:
  InternalError        – Base for all internal errors.
  NotConnectedError    – Socket I/O requested while no connection is established.
  FramingError         – Outbound line would break CRLF framing.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal client errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NotConnectedError(InternalError):
    """Raised when reading or writing without an established connection.

    Connecting is the caller's responsibility; the client never connects
    implicitly from ``read``/``write``/``poll_events``.
    """


class FramingError(InternalError, ValueError):
    """Raised when an outbound line contains a CR or LF character.

    The queue appends exactly one CRLF per line and performs no escaping, so
    an embedded terminator would split one logical line into several on the
    wire.
    """


__all__ = [
    "InternalError",
    "NotConnectedError",
    "FramingError",
]
