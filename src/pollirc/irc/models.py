"""Shared IRC data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    CONNECTED = auto()


@dataclass
class IRCCommand:
    """One tokenized protocol line.

    ``params`` holds the middle parameters in order followed by the trailing
    parameter, when the line carried a non-empty one.
    """

    command: str
    params: list[str] = field(default_factory=list)
    prefix: str | None = None
    raw: str = ""
    has_trailing: bool = False

    @property
    def trailing(self) -> str | None:
        if self.has_trailing and self.params:
            return self.params[-1]
        return None

    @property
    def nick(self) -> str | None:
        # nick!user@host
        if not self.prefix:
            return None
        return self.prefix.split("!", 1)[0].split("@", 1)[0]

    def as_list(self) -> list[str | None]:
        """Flat ``[prefix, command, *params]`` form."""
        return [self.prefix, self.command, *self.params]


@dataclass
class OutgoingLine:
    """Mutable holder handed to the send filter.

    Filters rewrite ``text`` in place; the client frames whatever ``text``
    holds once the filter returns.
    """

    text: str

    def __str__(self) -> str:
        return self.text
