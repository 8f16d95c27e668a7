"""
Output formats for scan results. Every analysis target produces a `compdetect.sinks.Report`
which is either a list of scan results or an error message; the sinks render a sequence of
reports as human readable text or as JSON.
"""
from __future__ import annotations

import json

from typing import IO, Iterable, NamedTuple

import colorama

from colorama import Fore, Style

from compdetect.scanner import ScanResult

__all__ = ['Report', 'TextSink', 'JSONSink']


class Report(NamedTuple):
    target: str
    results: list[ScanResult]
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def __json__(self) -> dict:
        if self.failed:
            return {'target': self.target, 'error': self.error}
        return {'target': self.target, 'results': [r._asdict() for r in self.results]}


class TextSink:
    """
    Writes a block of text for each report; one line per scan result, an explicit line when no
    compression was detected, and a failure line for targets that could not be analyzed.
    """

    def __init__(self, stream: IO[str], colors: bool = True):
        if colors:
            colorama.init()
        self.stream = stream
        self.colors = colors

    def _paint(self, color: str, text: str) -> str:
        if not self.colors:
            return text
        return F'{color}{text}{Style.RESET_ALL}'

    def write(self, report: Report):
        write = self.stream.write
        write(F'{self._paint(Fore.LIGHTWHITE_EX, report.target)}:\n')
        if report.failed:
            write(F'  {self._paint(Fore.LIGHTRED_EX, "failure")}: {report.error}\n')
            return
        if not report.results:
            write(F'  {self._paint(Fore.LIGHTYELLOW_EX, "no compression detected")}\n')
            return
        width = max(len(result.algorithm) for result in report.results)
        for result in report.results:
            write(
                F'  [{self._paint(Fore.LIGHTCYAN_EX, result.algorithm.ljust(width))}]'
                F' offset=0x{result.offset:02X}'
                F' compressed={result.compressed_size}'
                F' decompressed={result.decompressed_size}\n')

    def dump(self, reports: Iterable[Report]):
        for report in reports:
            self.write(report)


class JSONSink:
    """
    Writes all reports as a single JSON list.
    """

    def __init__(self, stream: IO[str], indent: int | None = 4):
        self.stream = stream
        self.indent = indent

    def dump(self, reports: Iterable[Report]):
        json.dump([report.__json__() for report in reports], self.stream, indent=self.indent)
        self.stream.write('\n')
