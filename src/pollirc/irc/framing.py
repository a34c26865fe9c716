"""CRLF line framing for the inbound byte stream and outbound lines.

Inbound bytes are scanned one at a time with a single byte of lookback:

* ``LF`` preceded by ``CR`` completes the current line;
* ``CR`` is never stored, it only becomes the lookback byte;
* every other byte, a bare ``LF`` included, is line content.

A bare ``LF`` therefore never terminates a line: ``b"A\\nB\\r\\n"`` yields
``"A\\nB"``. Bytes that do not decode are replaced with U+FFFD.
"""

from __future__ import annotations

from ..constants import LINE_ENCODING, LINE_TERMINATOR
from ..errors import FramingError

CR = 0x0D
LF = 0x0A


class LineFramer:
    """Accumulates inbound bytes and emits complete lines.

    State survives between ``feed`` calls, so a line (or its CRLF) may be
    split across any number of reads.
    """

    def __init__(self, encoding: str = LINE_ENCODING) -> None:
        self.encoding = encoding
        self._buffer = bytearray()
        self._last_byte = 0

    @property
    def partial(self) -> bytes:
        """Bytes received so far for the line not yet terminated."""
        return bytes(self._buffer)

    def reset(self) -> None:
        self._buffer.clear()
        self._last_byte = 0

    def feed(self, data: bytes) -> list[str]:
        """Consume ``data`` and return the lines it completed, in order."""
        lines: list[str] = []
        for byte in data:
            if byte == LF and self._last_byte == CR:
                lines.append(self._buffer.decode(self.encoding, errors="replace"))
                self._buffer = bytearray()
                self._last_byte = 0
                continue
            if byte != CR:
                self._buffer.append(byte)
            self._last_byte = byte
        return lines


def frame_line(line: str, encoding: str = LINE_ENCODING) -> bytes:
    """Encode ``line`` and append the CRLF terminator.

    Raises:
        FramingError: ``line`` contains CR or LF.
    """
    if "\r" in line or "\n" in line:
        raise FramingError(
            "Outbound line must not contain CR or LF",
            data={"line": line},
        )
    return line.encode(encoding) + LINE_TERMINATOR
