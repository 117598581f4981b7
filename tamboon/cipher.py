"""Byte rotation by 128 and binary stream wrappers that apply it."""

from __future__ import annotations

import io
from typing import BinaryIO

_TABLE = bytes((value + 128) & 0xFF for value in range(256))


def rot128(data) -> bytes:
    """Return ``data`` with 128 added to every byte, modulo 256.

    The transform is its own inverse.
    """
    return bytes(data).translate(_TABLE)


class Rot128Reader(io.RawIOBase):
    """A readable binary stream that rotates every byte read from ``raw``."""

    def __init__(self, raw: BinaryIO) -> None:
        super().__init__()
        self._raw = raw

    def readable(self) -> bool:
        return True

    def read(self, size: int | None = -1) -> bytes | None:
        """Read up to ``size`` bytes from the wrapped stream, rotated."""
        if size is None:
            size = -1
        data = self._raw.read(size)
        if data is None:
            return None
        return rot128(data)

    def readinto(self, buffer) -> int | None:
        view = memoryview(buffer).cast("B")
        data = self.read(len(view))
        if data is None:
            return None
        view[: len(data)] = data
        return len(data)


class Rot128Writer(io.RawIOBase):
    """A writable binary stream that rotates every byte before writing to ``raw``."""

    def __init__(self, raw: BinaryIO) -> None:
        super().__init__()
        self._raw = raw

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        """Rotate ``data`` and write it to the wrapped stream."""
        encoded = rot128(data)
        written = self._raw.write(encoded)
        return len(encoded) if written is None else written

    def flush(self) -> None:
        super().flush()
        flush = getattr(self._raw, "flush", None)
        if flush is not None:
            flush()