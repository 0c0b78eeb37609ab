"""
Read position over an immutable byte buffer.
"""
from typing import Optional


class Cursor:
    """
    Wraps a bytes buffer and a zero-based offset into it.
    The buffer is never copied; only the offset moves.
    """
    __slots__ = ("data", "pos")

    def __init__(self, data: bytes, pos: int = 0):
        self.data = data
        self.pos = pos

    def peek(self) -> Optional[int]:
        """Byte at the current offset, or None once the end is reached."""
        if self.pos >= len(self.data):
            return None
        return self.data[self.pos]

    def advance(self):
        if self.pos < len(self.data):
            self.pos += 1

    def take(self, n: int) -> bytes:
        """Returns the next n bytes and moves past them. Caller checks `remaining` first."""
        chunk = self.data[self.pos:self.pos + n]
        self.pos += len(chunk)
        return chunk

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos

    @property
    def exhausted(self) -> bool:
        return self.pos >= len(self.data)

    def __repr__(self):
        return f"Cursor(pos={self.pos}, size={len(self.data)})"
