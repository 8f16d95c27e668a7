#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line interface of the compression detector. Each target is read into memory completely
and then scanned; a target of `-` is read from standard input. Targets that cannot be read are
reported and skipped, and the exit code is nonzero if this happened for any of them.
"""
from __future__ import annotations

import argparse
import logging
import sys

from argparse import RawDescriptionHelpFormatter
from typing import BinaryIO, Sequence

import compdetect

from compdetect.lib.environment import LogLevel, environment, logger
from compdetect.lib.exceptions import InputAcquisitionError
from compdetect.registry import DEFAULT, select
from compdetect.scanner import DEFAULT_LIMIT, Scanner
from compdetect.sinks import JSONSink, Report, TextSink

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def read_target(target: str, stdin: BinaryIO | None = None) -> bytes:
    """
    Read the entire contents of the given target, where `-` denotes standard input. Raises
    `compdetect.lib.exceptions.InputAcquisitionError` if the target cannot be read.
    """
    if target == '-':
        stream = stdin or sys.stdin.buffer
        try:
            return stream.read()
        except OSError as E:
            raise InputAcquisitionError('standard input', E.strerror or str(E)) from E
    try:
        with open(target, 'rb') as fd:
            return fd.read()
    except OSError as E:
        raise InputAcquisitionError(target, E.strerror or str(E)) from E


def argument_parser() -> argparse.ArgumentParser:
    argp = argparse.ArgumentParser(
        prog='compression-detector',
        formatter_class=RawDescriptionHelpFormatter,
        description=(
            'This tool attempts to determine the type of compression used in a file. Every known\n'
            'decompression algorithm is attempted at every offset, starting at the first byte,\n'
            'until one of them decompresses the remaining data without errors.'
        ),
    )
    argp.add_argument(
        'targets',
        metavar='file',
        nargs='*',
        help='Files to analyze; use - to read from standard input.'
    )
    argp.add_argument(
        '-s', '--strip-limit',
        type=int,
        metavar='N',
        default=None,
        help=(
            'Only strip off (at most) this many bytes from the front; use -1 for no limit. The '
            F'default is {DEFAULT_LIMIT} unless COMPDETECT_STRIP_LIMIT is set.')
    )
    argp.add_argument(
        '-a', '--algorithm',
        dest='algorithms',
        metavar='PATTERN',
        action='append',
        default=None,
        help='Only attempt algorithms matching this wildcard pattern; can be given multiple times.'
    )
    argp.add_argument(
        '-w', '--workers',
        type=int,
        metavar='N',
        default=None,
        help='Number of offsets to attempt concurrently; the default is 1.'
    )
    argp.add_argument(
        '-j', '--json',
        action='store_true',
        help='Output the results as JSON.'
    )
    argp.add_argument(
        '-l', '--list',
        action='store_true',
        help='List all available algorithms and exit.'
    )
    argp.add_argument(
        '-d', '--debug',
        action='store_true',
        help='Enable debug output.'
    )
    argp.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase verbosity; specify twice for debug output.'
    )
    argp.add_argument(
        '-Q', '--quiet',
        action='store_true',
        help='Disables all log output.'
    )
    argp.add_argument(
        '-V', '--version',
        action='store_true',
        help='Show the version and exit.'
    )
    return argp


def _log_level(args: argparse.Namespace) -> LogLevel:
    if args.quiet:
        return LogLevel.NONE
    if args.debug:
        return LogLevel.DEBUG
    if args.verbose:
        return LogLevel.FromVerbosity(args.verbose)
    return environment.verbosity.value or LogLevel.WARNING


def main(argv: Sequence[str] | None = None, stdin: BinaryIO | None = None, stdout=None) -> int:
    """
    Main routine of the compression detector; returns the exit code.
    """
    argp = argument_parser()
    args = argp.parse_args(argv)
    stdout = stdout or sys.stdout

    logging.getLogger(compdetect.__name__).setLevel(_log_level(args))
    log = logger(__name__)

    if args.version:
        print(compdetect.__version__, file=stdout)
        return EXIT_SUCCESS

    registry = DEFAULT
    if args.algorithms:
        try:
            registry = select(args.algorithms)
        except ValueError as E:
            argp.error(str(E))

    if args.list:
        for descriptor in registry:
            print(descriptor.name, file=stdout)
        return EXIT_SUCCESS

    if not args.targets:
        argp.error('at least one file is required')

    limit = args.strip_limit
    if limit is None:
        limit = environment.strip_limit.value
    if limit is None:
        limit = DEFAULT_LIMIT

    workers = args.workers
    if workers is None:
        workers = environment.workers.value
    if workers is None:
        workers = 1
    try:
        scanner = Scanner(registry, workers=workers)
    except ValueError as E:
        argp.error(str(E))

    if args.json:
        sink = JSONSink(stdout)
    else:
        sink = TextSink(stdout, colors=not environment.colorless.value and stdout.isatty())

    reports: list[Report] = []
    status = EXIT_SUCCESS

    for target in args.targets:
        try:
            contents = read_target(target, stdin)
        except InputAcquisitionError as E:
            log.error(str(E))
            reports.append(Report(target, [], E.reason))
            status = EXIT_FAILURE
            continue
        log.info(F'scanning {len(contents)} bytes from {target}')
        reports.append(Report(target, scanner.scan(contents, limit)))

    sink.dump(reports)
    return status


if __name__ == '__main__':
    sys.exit(main())
