from __future__ import annotations
import struct


class OutOfBounds(ValueError):
    pass


class ByteCursor:
    """
    Little-endian reader over a window of a shared backing buffer.
    Positions are relative to the window start (``base``); sub-cursors
    borrow the same buffer and never copy it.
    """
    __slots__ = ("buf", "base", "pos", "size")

    def __init__(self, data: bytes | bytearray | memoryview, base: int = 0, length: int | None = None):
        self.buf = data if isinstance(data, memoryview) else memoryview(data)
        if length is None:
            length = len(self.buf) - base
        if base < 0 or length < 0 or base + length > len(self.buf):
            raise OutOfBounds(f"window {base}+{length} outside buffer of {len(self.buf)}")
        self.base = base
        self.pos = 0
        self.size = length

    def length(self) -> int: return self.size
    def remaining(self) -> int: return self.size - self.pos
    def tell(self) -> int: return self.pos
    def eof(self) -> bool: return self.pos >= self.size

    def seek(self, pos: int) -> None:
        if not (0 <= pos <= self.size): raise OutOfBounds(f"seek to {pos} outside 0..{self.size}")
        self.pos = pos

    def skip(self, n: int) -> None: self.seek(self.pos + n)

    def _span(self, n: int) -> int:
        end = self.pos + n
        if n < 0 or end > self.size:
            raise OutOfBounds(f"underrun: need {n} at {self.pos}, window is {self.size}")
        return self.base + self.pos

    def take(self, n: int) -> bytes:
        start = self._span(n)
        out = self.buf[start:start + n].tobytes()
        self.pos += n
        return out

    def peek(self, n: int) -> bytes:
        start = self._span(n)
        return self.buf[start:start + n].tobytes()

    # byte-aligned little-endian reads
    def _unpack(self, fmt: str, n: int):
        val = struct.unpack_from(fmt, self.buf, self._span(n))[0]
        self.pos += n
        return val
    def u8(self) -> int:  return self._unpack("<B", 1)
    def s8(self) -> int:  return self._unpack("<b", 1)
    def u16(self) -> int: return self._unpack("<H", 2)
    def s16(self) -> int: return self._unpack("<h", 2)
    def u32(self) -> int: return self._unpack("<I", 4)
    def s32(self) -> int: return self._unpack("<i", 4)

    def fix(self) -> float:
        """16.16 fixed point as a float."""
        return self.s32() / 65536.0

    def cstring(self, n: int) -> str:
        """
        Fixed-width NUL-terminated string: always consumes ``n`` bytes,
        keeps only what precedes the first zero byte.
        """
        raw = self.take(n)
        return raw.split(b"\x00", 1)[0].decode("latin-1")

    def sub_cursor(self, offset: int, length: int | None = None) -> "ByteCursor":
        if length is None:
            length = self.size - offset
        if offset < 0 or length < 0 or offset + length > self.size:
            raise OutOfBounds(f"sub-cursor {offset}+{length} outside window of {self.size}")
        return ByteCursor(self.buf, self.base + offset, length)
