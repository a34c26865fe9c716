"""Process-wide logging setup for the ``pollirc`` command.

``LoggerConfigurator`` puts a colorlog handler on the root logger. Structured
error reports go through ``log_structured_error``, which also counts them per
category so a summary can be printed when the process exits.
"""

import atexit
import logging
import os
import sys
import threading
import time
from collections import Counter
from typing import Any

import colorlog


class ErrorAggregator:
    """Counts errors per category and remembers the latest one of each."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.counts: Counter[str] = Counter()
        self.last: dict[str, dict[str, Any]] = {}

    def record_error(self, error_type: str, message: str, context: dict[str, Any] | None = None) -> None:
        with self.lock:
            self.counts[error_type] += 1
            self.last[error_type] = {
                "timestamp": time.time(),
                "message": message,
                "context": dict(context or {}),
            }

    def get_error_summary(self) -> dict[str, Any]:
        with self.lock:
            return {
                error_type: {"total_count": count, "last_occurrence": self.last[error_type]}
                for error_type, count in self.counts.items()
            }

    def clear(self) -> None:
        with self.lock:
            self.counts.clear()
            self.last.clear()

    def log_summary_report(self) -> None:
        summary = self.get_error_summary()
        if not summary:
            return
        logging.warning("Error summary for this session:")
        for error_type, stats in summary.items():
            logging.warning(
                "  %s: %d total, last: %s",
                error_type,
                stats["total_count"],
                stats["last_occurrence"]["message"],
            )


error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log one error line and record it in ``error_aggregator``.

    The line reads ``[TYPE] message | Exception: Name: text | Context: k=v``;
    the exception and context parts are omitted when not given.
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception is not None:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))
    logging.log(level, " | ".join(parts))
    error_aggregator.record_error(error_type, message, context)


def debug_from_env() -> bool:
    return os.environ.get("DEBUG", "").lower() in ("true", "1", "yes")


class LoggerConfigurator:
    """Configures the root logger; ``debug=None`` defers to ``$DEBUG``."""

    def __init__(self, debug: bool | None = None, stream=None):
        self.debug = debug_from_env() if debug is None else debug
        self.stream = stream if stream is not None else sys.stderr

    def build_formatter(self) -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message)s",
            datefmt="%H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
            stream=self.stream,
        )

    def configure(self) -> int:
        """Install the handler and return the level that was applied."""
        level = logging.DEBUG if self.debug else logging.INFO
        handler = logging.StreamHandler(self.stream)
        handler.setFormatter(self.build_formatter())

        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)
        # The event logger keeps its own handler; only its level follows.
        logging.getLogger("pollirc").setLevel(level)

        atexit.register(error_aggregator.log_summary_report)
        return level
