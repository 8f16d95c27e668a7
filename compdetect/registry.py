#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
The registry of decompression engines. Each engine is wrapped in a
`compdetect.registry.Descriptor` that normalizes it to a single contract: an attempt succeeds
only if the engine completes without errors, consumes the entire input buffer and produces a
nonempty output. Parameters that are not stored in the compressed stream, like the code width
and bit order of LZW, cannot be detected; every combination is registered as its own descriptor.
"""
from __future__ import annotations

import bz2 as bz2_
import fnmatch
import functools
import lzma as lzma_
import zlib as zlib_

from typing import Callable, Iterable, NamedTuple

from compdetect.lib import lzo as lzo_
from compdetect.lib import lzw as lzw_
from compdetect.lib.exceptions import EmptyOutput, IncompleteConsumption
from compdetect.lib.shared.cramjam import cramjam
from compdetect.lib.shared.lz4 import lz4 as lz4_frame
from compdetect.lib.shared.pyzstd import pyzstd
from compdetect.lib.shared.snappy import snappy
from compdetect.lib.structures import StructReader
from compdetect.lib.types import buf

__all__ = [
    'Descriptor',
    'DEFAULT',
    'lookup',
    'select',
]


class Descriptor(NamedTuple):
    """
    A named decompression attempt. The `decompress` callable receives a
    `compdetect.lib.structures.StructReader` over the input and returns the decompressed data;
    it must leave the reader positioned after the last byte that belongs to the compressed
    stream.
    """
    name: str
    decompress: Callable[[StructReader], buf]

    def attempt(self, data: buf) -> buf:
        """
        Decompress the given data. Any exception indicates that the data is not valid for this
        algorithm; in particular, `compdetect.lib.exceptions.IncompleteConsumption` is raised
        when the compressed stream ends before the input does and
        `compdetect.lib.exceptions.EmptyOutput` when the result is empty.
        """
        reader = StructReader(memoryview(data))
        result = self.decompress(reader)
        if (remaining := reader.remaining_bytes) > 0:
            raise IncompleteConsumption(remaining, reader.tell())
        if not result:
            raise EmptyOutput(self.name)
        return result


def _stream(reader: StructReader, engine: Callable, multistream: bool = False) -> bytearray:
    """
    Feed the remaining input of the reader to the decompressor objects produced by `engine`. The
    decompressor objects have to follow the interface of the standard library decompressors,
    i.e. provide the `eof` and `unused_data` properties. Unused data is returned to the reader.
    If `multistream` is set, concatenated streams are decompressed until the input is exhausted.
    """
    output = bytearray()
    while True:
        decompressor = engine()
        output.extend(decompressor.decompress(reader.read()))
        if not decompressor.eof:
            raise EOFError('compressed stream ended before the end of stream marker')
        reader.seekrel(-len(decompressor.unused_data or B''))
        if not multistream or reader.eof:
            return output


def _bzip2(reader: StructReader):
    return _stream(reader, bz2_.BZ2Decompressor, multistream=True)


def _deflate(reader: StructReader):
    return _stream(reader, lambda: zlib_.decompressobj(-15))


def _gzip(reader: StructReader):
    return _stream(reader, lambda: zlib_.decompressobj(0x10 | 15), multistream=True)


def _lz4(reader: StructReader):
    return _stream(reader, lz4_frame().LZ4FrameDecompressor, multistream=True)


def _lzma(reader: StructReader):
    return _stream(reader, lambda: lzma_.LZMADecompressor(lzma_.FORMAT_ALONE))


def _lzo(reader: StructReader):
    return lzo_.decompress(reader)


def _lzw(reader: StructReader, order: lzw_.LZWOrder, literal_width: int):
    return lzw_.decompress(reader, order, literal_width)


def _snappy_block(reader: StructReader):
    return snappy().uncompress(bytes(reader.read()))


def _snappy_stream(reader: StructReader):
    return bytes(cramjam().snappy.decompress(bytes(reader.read())))


def _xz(reader: StructReader):
    return _stream(reader, lambda: lzma_.LZMADecompressor(lzma_.FORMAT_XZ))


def _zlib(reader: StructReader):
    return _stream(reader, lambda: zlib_.decompressobj(15))


def _zstd(reader: StructReader):
    return _stream(reader, pyzstd().ZstdDecompressor)


def _lzw_descriptors() -> Iterable[Descriptor]:
    for order in lzw_.LZWOrder:
        for width in range(lzw_.LZW.MIN_LITERAL_WIDTH, lzw_.LZW.MAX_LITERAL_WIDTH + 1):
            yield Descriptor(
                F'lzw-{order.value}-{width}',
                functools.partial(_lzw, order=order, literal_width=width))


DEFAULT: tuple[Descriptor, ...] = (
    Descriptor('bzip2', _bzip2),
    Descriptor('deflate', _deflate),
    Descriptor('gzip', _gzip),
    Descriptor('lz4', _lz4),
    Descriptor('lzma', _lzma),
    Descriptor('lzo', _lzo),
    *_lzw_descriptors(),
    Descriptor('snappy-block', _snappy_block),
    Descriptor('snappy-stream', _snappy_stream),
    Descriptor('xz', _xz),
    Descriptor('zlib', _zlib),
    Descriptor('zstd', _zstd),
)
"""
The default registry in the order in which engines are attempted.
"""


def lookup(name: str, registry: Iterable[Descriptor] = DEFAULT) -> Descriptor:
    """
    Return the descriptor with the given name.
    """
    for descriptor in registry:
        if descriptor.name == name:
            return descriptor
    raise KeyError(name)


def select(patterns: Iterable[str], registry: Iterable[Descriptor] = DEFAULT) -> tuple[Descriptor, ...]:
    """
    Return all descriptors of the registry whose name matches any of the given wildcard patterns,
    in registry order. A `ValueError` is raised if one of the patterns matches nothing.
    """
    registry = tuple(registry)
    patterns = list(patterns)
    for pattern in patterns:
        if not any(fnmatch.fnmatchcase(d.name, pattern) for d in registry):
            names = ', '.join(d.name for d in registry)
            raise ValueError(F'the pattern {pattern!r} does not match any algorithm; pick from: {names}')
    return tuple(d for d in registry if any(fnmatch.fnmatchcase(d.name, p) for p in patterns))
