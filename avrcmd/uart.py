"""Serial-line plumbing: a bounded character ring buffer and a line assembler."""

from __future__ import annotations

from typing import Optional

COMMAND_BUFFER_SIZE = 160


class RingBuffer:
    """A FIFO of characters that holds at most ``size - 1`` of them."""

    def __init__(self, size: int = COMMAND_BUFFER_SIZE) -> None:
        if size < 2:
            raise ValueError("a ring buffer needs a size of at least 2")
        self.size = size
        self._slots: list[str] = [""] * size
        self._head = 0
        self._tail = 0

    def add(self, char: str) -> bool:
        """Append ``char``; return False and drop it if the buffer is full."""
        if len(char) != 1:
            raise ValueError("exactly one character is added at a time")
        following = (self._head + 1) % self.size
        if following == self._tail:
            return False
        self._slots[self._head] = char
        self._head = following
        return True

    def read(self) -> Optional[str]:
        """Remove and return the oldest character, or None if the buffer is empty."""
        if self._head == self._tail:
            return None
        char = self._slots[self._tail]
        self._tail = (self._tail + 1) % self.size
        return char

    def is_empty(self) -> bool:
        """True when there is nothing to read."""
        return self._head == self._tail

    def is_full(self) -> bool:
        """True when another character would be dropped."""
        return (self._head + 1) % self.size == self._tail

    def __len__(self) -> int:
        return (self._head - self._tail) % self.size


class LineReader:
    """Assembles incoming characters into lines ending in a newline.

    Carriage returns are ignored. A line longer than ``maxlen - 1``
    characters is discarded whole, up to and including its newline.
    """

    def __init__(self, maxlen: int = COMMAND_BUFFER_SIZE) -> None:
        if maxlen < 1:
            raise ValueError("maxlen must be at least 1")
        self.maxlen = maxlen
        self._pending: list[str] = []
        self._discarding = False

    @property
    def pending(self) -> str:
        """Characters received since the last complete line."""
        return "".join(self._pending)

    def feed(self, text: str) -> list[str]:
        """Take in ``text`` and return the lines it completes, in order."""
        lines: list[str] = []
        for char in text:
            if char == "\r":
                continue
            if self._discarding:
                if char == "\n":
                    self._discarding = False
                    self._pending = []
                continue
            if char == "\n":
                lines.append("".join(self._pending))
                self._pending = []
            elif len(self._pending) < self.maxlen - 1:
                self._pending.append(char)
            else:
                self._discarding = True
                self._pending = []
        return lines