"""
Interfaces and classes to read structured data.
"""
from __future__ import annotations

import io

from compdetect.lib.types import buf


class EOF(EOFError):
    """
    While reading from a `compdetect.lib.structures.StructReader`, less bytes were available than
    requested. The exception contains the data from the incomplete read.
    """
    def __init__(self, size: int, rest: buf = B''):
        super().__init__(F'Unexpected end of buffer; attempted to read {size} bytes, but got only {len(rest)}.')
        self.rest = rest
        self.size = size


class StructReader:
    """
    A read cursor over a byte buffer with the interface of a binary file object, extended by
    methods to read structured data. The cursor never advances past the end of the buffer, so
    `compdetect.lib.structures.StructReader.remaining_bytes` always reports how much of the
    buffer has not been consumed yet.
    """
    __slots__ = '_data', '_cursor', 'bigendian'

    def __init__(self, data: buf, bigendian: bool = False):
        self._data = memoryview(data)
        self._cursor = 0
        self.bigendian = bigendian

    def __len__(self):
        return len(self._data)

    @property
    def byteorder_name(self):
        return 'big' if self.bigendian else 'little'

    @property
    def eof(self) -> bool:
        return self._cursor >= len(self._data)

    @property
    def remaining_bytes(self) -> int:
        return len(self._data) - self._cursor

    def tell(self) -> int:
        return self._cursor

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if whence == io.SEEK_CUR:
            offset += self._cursor
        elif whence == io.SEEK_END:
            offset += len(self._data)
        elif whence != io.SEEK_SET:
            raise ValueError(F'invalid whence value {whence}')
        if offset < 0:
            raise ValueError('attempt to seek before the beginning of the buffer')
        self._cursor = min(offset, len(self._data))
        return self._cursor

    def seekrel(self, offset: int) -> int:
        return self.seek(offset, io.SEEK_CUR)

    def read(self, size: int | None = None) -> memoryview:
        beginning = self._cursor
        if size is None or size < 0:
            end = len(self._data)
        else:
            end = min(beginning + size, len(self._data))
        self._cursor = end
        return self._data[beginning:end]

    def read_exactly(self, size: int) -> memoryview:
        """
        Read bytes from the underlying buffer. Raises an exception of type
        `compdetect.lib.structures.EOF` when fewer data is available than requested.
        """
        data = self.read(size)
        if len(data) < size:
            raise EOF(size, data)
        return data

    def read_bytes(self, size: int) -> bytes:
        return bytes(self.read_exactly(size))

    def read_byte(self) -> int:
        cursor = self._cursor
        try:
            value = self._data[cursor]
        except IndexError:
            raise EOF(1) from None
        self._cursor = cursor + 1
        return value

    def read_integer(self, size: int, signed: bool = False) -> int:
        """
        Read an integer of the given size (in bits) from the buffer.
        """
        nbytes, rest = divmod(size, 8)
        if rest > 0:
            raise ValueError(F'cannot read {size} bits, only multiples of 8 are possible.')
        data = self.read_exactly(nbytes)
        return int.from_bytes(data, self.byteorder_name, signed=signed)

    def u16(self) -> int:
        return self.read_integer(16)

