from __future__ import annotations

from ..logging_config import log_structured_error
from .internal import FramingError, InternalError, NotConnectedError

# First match wins; socket errors are all OSError subclasses.
_CATEGORIES: tuple[tuple[type[BaseException] | tuple[type[BaseException], ...], str], ...] = (
    ((NotConnectedError, OSError), "network"),
    (FramingError, "framing"),
    (InternalError, "internal"),
)


def error_category(error: BaseException) -> str:
    for kinds, category in _CATEGORIES:
        if isinstance(error, kinds):
            return category
    return "unknown"


def log_error(message: str, error: Exception, context: dict | None = None) -> None:
    """Report ``error`` under its category via ``log_structured_error``.

    Args:
        message: What the caller was doing when the error surfaced.
        error: The exception being reported. It is not re-raised.
        context: Extra ``key=value`` data for the log line.
    """
    log_structured_error(
        error_type=error_category(error),
        message=f"{message}: {error}",
        exception=error,
        context=context,
    )
