"""FIFO of framed outbound lines with partial-write resumption."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable


class _PendingLine:
    __slots__ = ("data", "offset")

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    @property
    def remaining(self) -> memoryview:
        return memoryview(self.data)[self.offset :]

    def __len__(self) -> int:
        return len(self.data) - self.offset


class OutboundQueue:
    """Ordered framed lines awaiting transmission.

    Each item remembers how many of its bytes were already written, so a
    short ``send`` is resumed from the unwritten remainder on the next drain.
    """

    def __init__(self) -> None:
        self._items: deque[_PendingLine] = deque()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    @property
    def pending_bytes(self) -> int:
        return sum(len(item) for item in self._items)

    def append(self, data: bytes) -> bool:
        self._items.append(_PendingLine(data))
        return True

    def clear(self) -> None:
        self._items.clear()

    def drain(self, send: Callable[[memoryview], int]) -> int:
        """Write queued bytes with ``send`` until empty or the sink is full.

        ``send`` follows ``socket.send`` semantics: it returns the number of
        bytes accepted and raises ``BlockingIOError`` when nothing can be
        written right now. A return of ``0`` is treated the same way.

        Returns:
            Bytes written during this call.
        """
        written = 0
        while self._items:
            head = self._items[0]
            if not len(head):
                self._items.popleft()
                continue
            try:
                sent = send(head.remaining)
            except BlockingIOError:
                break
            if sent <= 0:
                break
            head.offset += sent
            written += sent
            if not len(head):
                self._items.popleft()
        return written
