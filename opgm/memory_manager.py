"""Byte buffers that hide whether they live in memory, in a mapped file or nowhere."""

from __future__ import annotations

import io
import mmap
import os
import struct
import sys
from abc import ABC, abstractmethod
from typing import BinaryIO, Iterable, Optional, Union

_FORMAT_CHARS = frozenset("bBhHiIlLqQefd?")

Number = Union[int, float, bool]


def _layout(fmt: str, count: int) -> struct.Struct:
    if len(fmt) != 1 or fmt not in _FORMAT_CHARS:
        raise ValueError(f"unsupported element format {fmt!r}")
    if count < 0:
        raise ValueError("count must not be negative")
    return struct.Struct(f"<{count}{fmt}")


class MemoryManager(ABC):
    """A resizable byte buffer holding little-endian fixed-size values.

    Positions are byte offsets; ``fmt`` is a single :mod:`struct` format
    character such as ``"i"`` or ``"B"``.
    """

    @abstractmethod
    def __len__(self) -> int:
        """Size of the buffer in bytes."""

    @abstractmethod
    def resize(self, new_len: int) -> None:
        """Shrink or grow the buffer; new bytes are zero."""

    @abstractmethod
    def _buffer(self):
        """The readable buffer behind this manager."""

    def _writable_buffer(self):
        raise io.UnsupportedOperation(f"{type(self).__name__} is read-only")

    def _check(self, pos: int, size: int) -> None:
        if pos < 0 or pos + size > len(self):
            raise IndexError(
                f"range {pos}..{pos + size} outside buffer of {len(self)} bytes"
            )

    def read(self, fmt: str, pos: int) -> Number:
        """Read one value of type ``fmt`` at byte offset ``pos``."""
        return self.read_array(fmt, pos, 1)[0]

    def read_array(self, fmt: str, pos: int, count: int) -> list:
        """Read ``count`` consecutive values of type ``fmt`` from ``pos``."""
        layout = _layout(fmt, count)
        self._check(pos, layout.size)
        if layout.size == 0:
            return []
        return list(layout.unpack_from(self._buffer(), pos))

    def write_array(self, fmt: str, pos: int, values: Iterable[Number]) -> None:
        """Write ``values`` as consecutive values of type ``fmt`` at ``pos``."""
        values = list(values)
        layout = _layout(fmt, len(values))
        self._check(pos, layout.size)
        if layout.size == 0:
            return
        layout.pack_into(self._writable_buffer(), pos, *values)

    def close(self) -> None:
        """Release the resources held by the buffer."""

    def __enter__(self) -> MemoryManager:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class MemBuffer(MemoryManager):
    """A buffer held in memory."""

    def __init__(self, data: Union[bytes, bytearray, Iterable[int]] = b"") -> None:
        self._data = bytearray(data)

    def __len__(self) -> int:
        return len(self._data)

    def resize(self, new_len: int) -> None:
        if new_len < 0:
            raise ValueError("length must not be negative")
        if new_len < len(self._data):
            del self._data[new_len:]
        else:
            self._data.extend(bytes(new_len - len(self._data)))

    def _buffer(self):
        return self._data

    def _writable_buffer(self):
        return self._data


class MmapBuffer(MemoryManager):
    """A read-only memory mapped file."""

    def __init__(self, path: Union[str, os.PathLike]) -> None:
        with open(path, "rb") as file:
            size = os.fstat(file.fileno()).st_size
            self._mmap: Optional[mmap.mmap] = (
                mmap.mmap(file.fileno(), 0, access=mmap.ACCESS_READ) if size else None
            )

    def __len__(self) -> int:
        return 0 if self._mmap is None else len(self._mmap)

    def resize(self, new_len: int) -> None:
        raise io.UnsupportedOperation("a read-only mapping cannot be resized")

    def _buffer(self):
        return b"" if self._mmap is None else self._mmap

    def close(self) -> None:
        if self._mmap is not None:
            self._mmap.close()
            self._mmap = None


class MmapMutBuffer(MemoryManager):
    """A writable memory mapped file that can change its size."""

    def __init__(self, file: BinaryIO) -> None:
        self._file = file
        self._len = os.fstat(file.fileno()).st_size
        self._mmap: Optional[mmap.mmap] = self._map()

    @classmethod
    def from_file(cls, file: BinaryIO) -> MmapMutBuffer:
        """Map the whole of ``file``, which must be open for reading and writing."""
        return cls(file)

    def _map(self) -> Optional[mmap.mmap]:
        if self._len == 0:
            return None
        return mmap.mmap(self._file.fileno(), self._len, access=mmap.ACCESS_WRITE)

    def __len__(self) -> int:
        return self._len

    def resize(self, new_len: int) -> None:
        if new_len < 0:
            raise ValueError("length must not be negative")
        if self._mmap is not None:
            self._mmap.close()
            self._mmap = None
        self._len = new_len
        self._file.truncate(new_len)
        self._file.flush()
        self._mmap = self._map()

    def _buffer(self):
        return b"" if self._mmap is None else self._mmap

    def _writable_buffer(self):
        return bytearray() if self._mmap is None else self._mmap

    def close(self) -> None:
        if self._mmap is not None:
            self._mmap.close()
            self._mmap = None
        self._file.close()


class SinkBuffer(MemoryManager):
    """A buffer that discards everything written to it and cannot be read."""

    def __len__(self) -> int:
        return sys.maxsize

    def resize(self, new_len: int) -> None:
        if new_len < 0:
            raise ValueError("length must not be negative")

    def _buffer(self):
        raise io.UnsupportedOperation("a sink cannot be read")

    def read_array(self, fmt: str, pos: int, count: int) -> list:
        _layout(fmt, count)
        raise io.UnsupportedOperation("a sink cannot be read")

    def write_array(self, fmt: str, pos: int, values: Iterable[Number]) -> None:
        _layout(fmt, len(list(values)))


def open_mem(size: int) -> MemBuffer:
    """A zero-filled in-memory buffer of ``size`` bytes."""
    if size < 0:
        raise ValueError("size must not be negative")
    return MemBuffer(bytes(size))


def open_mmap(path: Union[str, os.PathLike]) -> MmapBuffer:
    """Map an existing file read-only."""
    return MmapBuffer(path)


def open_mmap_mut(path: Union[str, os.PathLike], size: int) -> MmapMutBuffer:
    """Create or truncate ``path``, set it to ``size`` zero bytes and map it."""
    if size < 0:
        raise ValueError("size must not be negative")
    file = open(path, "w+b")
    try:
        file.truncate(size)
        file.flush()
        return MmapMutBuffer.from_file(file)
    except BaseException:
        file.close()
        raise


def open_sink() -> SinkBuffer:
    """A buffer that swallows all writes."""
    return SinkBuffer()