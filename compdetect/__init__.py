R"""
The compression detector identifies which compression algorithm, if any, was used to produce a
given blob of binary data. It attempts every known decompression algorithm at every offset of the
input, skipping unknown header bytes, until at least one algorithm decompresses the remaining data
completely and without errors.

The package exports `compdetect.scanner.Scanner`, which implements the search, and the registry of
decompression engines in `compdetect.registry`. A scan of a buffer looks like this:

    from compdetect import Scanner
    for result in Scanner().scan(data, limit=100):
        print(result.algorithm, result.offset, result.decompressed_size)

The command line interface is implemented in `compdetect.cli`.
"""
from __future__ import annotations

__version__ = '1.1.0'
__distribution__ = 'compression-detector'

from compdetect.registry import DEFAULT, Descriptor, lookup, select
from compdetect.scanner import DEFAULT_LIMIT, ScanResult, Scanner

__all__ = [
    'DEFAULT',
    'DEFAULT_LIMIT',
    'Descriptor',
    'ScanResult',
    'Scanner',
    'lookup',
    'select',
]
