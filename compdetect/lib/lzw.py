#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
A variable width LZW decoder as used by the GIF, TIFF and PDF formats. The width of literal codes
and the order in which codes are packed into bytes are not stored in the compressed stream, so
both have to be provided by the caller.

The first two codes after the literals are reserved: `1 << literal_width` is the clear code that
resets the dictionary and the code after it marks the end of the stream. Codes start out one bit
wider than literals and grow by one bit whenever the dictionary fills up, up to a maximum width
of 12 bits. Input is consumed one byte at a time, so after decoding, the reader is positioned
directly after the byte that contained the end code.
"""
from __future__ import annotations

import enum
import itertools

from array import array
from enum import IntEnum

from compdetect.lib.structures import EOF, StructReader


class LZWError(ValueError):
    pass


class LZWOrder(str, enum.Enum):
    LSB = 'lsb'
    MSB = 'msb'


class LZW(IntEnum):
    MIN_LITERAL_WIDTH = 2
    MAX_LITERAL_WIDTH = 8
    MAX_WIDTH = 12
    INVALID = 0xFFFF


def decompress(reader: StructReader, order: LZWOrder, literal_width: int) -> bytearray:
    """
    Decompress an LZW stream from the given reader. Raises `compdetect.lib.lzw.LZWError` for
    invalid codes and when the input ends before the end code was read.
    """
    if literal_width not in range(LZW.MIN_LITERAL_WIDTH, LZW.MAX_LITERAL_WIDTH + 1):
        raise ValueError(F'Literal width must be between 2 and 8, got {literal_width}.')

    msb = LZWOrder(order) is LZWOrder.MSB
    size = 1 << LZW.MAX_WIDTH

    tab_suffix = bytearray(size)
    tab_prefix = array('H', itertools.repeat(0, size))

    clear = 1 << literal_width
    eof = hi = clear + 1
    width = literal_width + 1
    overflow = 1 << width
    last = LZW.INVALID

    bits = 0
    nbits = 0
    out = bytearray()

    while True:
        while nbits < width:
            try:
                byte = reader.read_byte()
            except EOF as E:
                raise LZWError(F'stream ended after {reader.tell()} bytes without an end code') from E
            if msb:
                bits |= byte << (24 - nbits)
            else:
                bits |= byte << nbits
            nbits += 8
        if msb:
            code = bits >> (32 - width)
            bits = (bits << width) & 0xFFFFFFFF
        else:
            code = bits & ((1 << width) - 1)
            bits >>= width
        nbits -= width

        if code < clear:
            out.append(code)
            if last != LZW.INVALID:
                tab_suffix[hi] = code
                tab_prefix[hi] = last
        elif code == clear:
            width = literal_width + 1
            hi = eof
            overflow = 1 << width
            last = LZW.INVALID
            continue
        elif code == eof:
            return out
        elif code <= hi:
            stack = bytearray()
            c = code
            if code == hi and last != LZW.INVALID:
                # the code is not yet in the table; it expands to the previous expansion
                # followed by the first character of the previous expansion.
                c = last
                while c >= clear:
                    c = tab_prefix[c]
                stack.append(c)
                c = last
            while c >= clear:
                stack.append(tab_suffix[c])
                c = tab_prefix[c]
            stack.append(c)
            stack.reverse()
            out.extend(stack)
            if last != LZW.INVALID:
                tab_suffix[hi] = c
                tab_prefix[hi] = last
        else:
            raise LZWError(F'invalid code {code} at input position {reader.tell()}, maximum was {hi}')

        last = code
        hi += 1
        if hi >= overflow:
            if width == LZW.MAX_WIDTH:
                last = LZW.INVALID
                hi -= 1
            else:
                width += 1
                overflow = 1 << width
