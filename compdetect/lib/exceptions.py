"""
Exception types raised by the compression detector.
"""
from __future__ import annotations

from typing import Collection


class DetectorException(Exception):
    """
    Base class of all exceptions raised deliberately by the compression detector.
    """


class IncompleteConsumption(DetectorException):
    """
    A decompression engine finished before it consumed the entire input buffer.
    """
    def __init__(self, remaining: int, consumed: int):
        super().__init__(F'buffer still has {remaining} bytes (only read {consumed})')
        self.remaining = remaining
        self.consumed = consumed


class EmptyOutput(DetectorException):
    """
    A decompression engine did not produce any output.
    """
    def __init__(self, name: str):
        super().__init__(F'{name} decompression produced no output')
        self.name = name


class InputAcquisitionError(DetectorException):
    """
    An analysis target could not be read.
    """
    def __init__(self, target: str, reason: str):
        super().__init__(F'unable to read {target}: {reason}')
        self.target = target
        self.reason = reason


class ImportMissing(DetectorException, ImportError):
    """
    A third party library required by a decompression engine is not installed.
    """
    def __init__(self, missing: str, install: Collection[str] | None = None, info: str | None = None):
        install = ' '.join(sorted(install or (missing,)))
        message = F'missing module {missing}, install it with: pip install -U {install}'
        if info:
            message = F'{message}; {info}'
        super().__init__(message)
        self.missing = missing
        self.install = install
