"""Event logger for the client.

Every log line is an event named ``<domain>_<action>``. Its human text comes
from ``event_templates.json`` formatted with the event keywords, so call sites
stay short::

    logger.log_event("irc", "connect_start", server="irc.example.net:6667")

``server`` is reserved: it becomes the fixed-width ``[host:port]`` prefix.
With ``DEBUG`` set in the environment the remaining keywords are appended as
``key=value`` pairs after the event name.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

import colorlog

from .event_catalog import EVENT_TEMPLATES

EVENT_WIDTH = 32
PREFIX_WIDTH = 24


def _is_tty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):  # pragma: no cover
        return False


def debug_enabled() -> bool:
    return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")


def console_formatter(stream: TextIO) -> colorlog.ColoredFormatter:
    return colorlog.ColoredFormatter(
        "%(log_color)s%(levelname)-8s%(reset)s %(message)s",
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "magenta",
        },
        no_color=not _is_tty(stream),
    )


class IRCLogger:
    """Wraps one stdlib logger that does not propagate to the root logger."""

    def __init__(self, name: str = "pollirc", stream: TextIO | None = None) -> None:
        stream = stream or sys.stderr
        self.logger = logging.getLogger(name)
        self.logger.handlers.clear()
        self.logger.propagate = False
        self.logger.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)

        handler = logging.StreamHandler(stream)
        handler.setFormatter(console_formatter(stream))
        self.logger.addHandler(handler)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        event = f"{domain}_{action}".lower()
        text = human if human is not None else self._render(domain, action, kwargs)
        server = kwargs.pop("server", None)
        prefix = f"[{str(server or 'client').ljust(PREFIX_WIDTH)[:PREFIX_WIDTH]}]"

        if debug_enabled():
            name = event.ljust(EVENT_WIDTH) if len(event) <= EVENT_WIDTH else event[: EVENT_WIDTH - 1] + "…"
            message = f"{name} {prefix} {text}"
            if kwargs:
                message += " (" + ", ".join(f"{k}={v}" for k, v in kwargs.items()) + ")"
        else:
            message = f"{prefix} {text}"
        self.logger.log(level, message, exc_info=exc_info)

    @staticmethod
    def _render(domain: str, action: str, context: dict[str, object]) -> str:
        template = EVENT_TEMPLATES.get((domain, action))
        if not template:
            return f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
        try:
            return template.format(**context)
        except (KeyError, IndexError, ValueError):
            return template


logger = IRCLogger()
