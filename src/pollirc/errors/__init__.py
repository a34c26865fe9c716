"""Error types and error reporting helpers."""

from .handling import log_error  # noqa: F401
from .internal import FramingError, InternalError, NotConnectedError  # noqa: F401

__all__ = ["InternalError", "NotConnectedError", "FramingError", "log_error"]
