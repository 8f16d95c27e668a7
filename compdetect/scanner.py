#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
The scanner attempts every registered decompression engine at every offset of the input, starting
at offset zero, until it finds an offset where at least one engine succeeds. All engines are
attempted at that offset and every success is reported, because more than one format can accept
the same byte stream. Offsets after the first successful one are not attempted.
"""
from __future__ import annotations

import concurrent.futures
import threading

from typing import Iterable, NamedTuple

from compdetect.lib.environment import Logger, LogLevel, logger
from compdetect.lib.exceptions import ImportMissing
from compdetect.lib.tools import exception_to_string, isbuffer
from compdetect.lib.types import buf
from compdetect.registry import DEFAULT, Descriptor

__all__ = [
    'DEFAULT_LIMIT',
    'ScanResult',
    'Scanner',
]

DEFAULT_LIMIT = 100
"""
The default number of leading offsets that are attempted.
"""


class ScanResult(NamedTuple):
    """
    A successful decompression of the input by the named algorithm, starting at the given offset.
    Since the entire remaining input has to be consumed, the compressed size is the size of the
    input minus the offset.
    """
    algorithm: str
    offset: int
    compressed_size: int
    decompressed_size: int


class Scanner:
    """
    Scans a buffer for the first offset at which any descriptor of the given registry succeeds.
    When `workers` is larger than one, the attempts for that many consecutive offsets are
    evaluated concurrently; the result is the same as for a sequential scan.
    """

    def __init__(self, registry: Iterable[Descriptor] | None = None, workers: int = 1):
        if workers < 1:
            raise ValueError(F'The number of workers must be positive, got {workers}.')
        self.registry: tuple[Descriptor, ...] = DEFAULT if registry is None else tuple(registry)
        self.workers = workers
        self.logger: Logger = logger(__name__)
        self._missing: set[str] = set()
        self._missing_lock = threading.Lock()

    def log_warn(self, *messages) -> bool:
        rv = self.logger.isEnabledFor(LogLevel.WARNING)
        if rv and messages:
            self.logger.warning(self._output(*messages))
        return rv

    def log_info(self, *messages) -> bool:
        rv = self.logger.isEnabledFor(LogLevel.INFO)
        if rv and messages:
            self.logger.info(self._output(*messages))
        return rv

    def log_debug(self, *messages) -> bool:
        rv = self.logger.isEnabledFor(LogLevel.DEBUG)
        if rv and messages:
            self.logger.debug(self._output(*messages))
        return rv

    @staticmethod
    def _output(*messages) -> str:
        def transform(message):
            if callable(message):
                message = message()
            if isinstance(message, BaseException):
                message = exception_to_string(message)
            if isinstance(message, str):
                return message
            if isbuffer(message):
                return bytes(message).hex().upper()
            return repr(message)
        return ' '.join(transform(msg) for msg in messages)

    @staticmethod
    def offsets(contents: buf, limit: int = DEFAULT_LIMIT) -> range:
        """
        The offsets that are eligible for a scan of the given contents. A negative limit means
        that every offset is attempted; offsets beyond the end of the contents never are.
        """
        size = len(contents)
        if limit < 0:
            return range(size)
        return range(min(limit, size))

    def probe(self, contents: buf, offset: int) -> list[ScanResult]:
        """
        Attempt every descriptor at the given offset and return all successful attempts in
        registry order.
        """
        view = memoryview(contents)[offset:]
        size = len(view)
        results: list[ScanResult] = []
        self.log_debug(F'start byte {offset} ({size})')
        for descriptor in self.registry:
            name = descriptor.name
            try:
                output = descriptor.attempt(view)
            except ImportMissing as E:
                with self._missing_lock:
                    if name in self._missing:
                        continue
                    self._missing.add(name)
                self.log_warn(F'unable to attempt {name}:', E)
                continue
            except Exception as E:
                self.log_debug(lambda: F'could not decompress from byte {offset} with {name}: {exception_to_string(E)}')
                continue
            if not output:
                continue
            self.log_info(F'successfully decompressed from byte {offset} with {name}: {size} -> {len(output)}')
            results.append(ScanResult(name, offset, size, len(output)))
        return results

    def scan(self, contents: buf, limit: int = DEFAULT_LIMIT) -> list[ScanResult]:
        """
        Return all successful decompressions at the smallest offset where at least one engine
        succeeds, or an empty list if there is no such offset among the first `limit` ones.
        """
        offsets = self.offsets(contents, limit)
        if self.workers > 1 and len(offsets) > 1:
            return self._scan_concurrent(contents, offsets)
        for offset in offsets:
            if results := self.probe(contents, offset):
                return results
        return []

    def _scan_concurrent(self, contents: buf, offsets: range) -> list[ScanResult]:
        workers = self.workers
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
            for k in range(0, len(offsets), workers):
                batch = offsets[k:k + workers]
                futures = {offset: pool.submit(self.probe, contents, offset) for offset in batch}
                merged = {offset: future.result() for offset, future in futures.items()}
                matches = [offset for offset, results in merged.items() if results]
                if matches:
                    return merged[min(matches)]
        return []
