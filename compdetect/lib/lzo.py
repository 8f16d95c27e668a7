#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
An implementation of LZO1X decompression for raw streams without the lzop container. We use the
article "[LZO stream format as understood by Linux's LZO decompressor][LZO]" as a reference since
no proper specification is available.

[LZO]: https://www.kernel.org/doc/html/latest/staging/lzo.html
"""
from __future__ import annotations

from compdetect.lib.structures import StructReader


class LZOError(Exception):
    pass


def decompress(src: StructReader) -> bytearray:
    """
    Decompress an LZO1X stream from the given reader. Decompression stops at the end of stream
    marker, which leaves the reader positioned directly after it. Raises a
    `compdetect.lib.lzo.LZOError` for invalid streams and `compdetect.lib.structures.EOF` when
    the input ends before the end of stream marker.
    """
    dst = bytearray()

    def integer() -> int:
        length = 0
        while True:
            byte = src.read_byte()
            if byte:
                return length + byte
            length += 0xFF
            if length > 0x100000:
                raise LZOError('Too many zeros in integer encoding.')

    def literal(count: int):
        dst.extend(src.read_exactly(count))

    def copy(distance: int, length: int):
        if distance > len(dst):
            raise LZOError(F'Distance {distance} > bufsize {len(dst)}')
        start = len(dst) - distance
        if distance >= length:
            dst.extend(dst[start:start + length])
        else:
            for k in range(start, start + length):
                dst.append(dst[k])

    state = 0
    first = src.read_byte()

    if first <= 0x11:
        src.seekrel(-1)
    else:
        count = first - 0x11
        literal(count)
        state = min(count, 4)

    while True:
        instruction = src.read_byte()
        if instruction < 0x10:
            if state == 0:
                length = instruction or integer() + 15
                state = length + 3
                literal(state)
                continue
            D = (instruction & 0b1100) >> 2
            H = src.read_byte()
            distance = (H << 2) + D + 1
            if state >= 4:
                copy(distance + 0x800, 3)
            else:
                copy(distance, 2)
            state = instruction & 0b0011
        elif instruction < 0x20:
            L = instruction & 0b0111
            H = instruction & 0b1000
            length = L or integer() + 7
            argument = src.u16()
            state = argument & 3
            distance = (H << 11) + (argument >> 2)
            if not distance:
                if length != 1:
                    raise LZOError(F'Invalid end of stream marker with length {length + 2}.')
                return dst
            copy(distance + 0x4000, length + 2)
        elif instruction < 0x40:
            L = instruction & 0b11111
            length = L or integer() + 31
            argument = src.u16()
            state = argument & 3
            distance = (argument >> 2) + 1
            copy(distance, length + 2)
        else:
            if instruction < 0x80:
                length = 3 + ((instruction >> 5) & 1)
            else:
                length = 5 + ((instruction >> 5) & 3)
            H = src.read_byte()
            D = (instruction & 0b11100) >> 2
            state = instruction & 3
            distance = (H << 3) + D + 1
            copy(distance, length)
        if state:
            literal(state)
