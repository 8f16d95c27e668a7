#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import io
import json
import os
import tempfile
import zlib

from unittest import mock

import compdetect

from compdetect.cli import EXIT_FAILURE, EXIT_SUCCESS, main, read_target
from compdetect.lib.environment import environment
from compdetect.lib.exceptions import InputAcquisitionError
from compdetect.registry import DEFAULT

from . import TestBase


class TestCommandLine(TestBase):

    def setUp(self):
        super().setUp()
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name
        self.payload = B'\xFF\xFF\xFF' + zlib.compress(B'hello world')

    def tearDown(self):
        self._tmp.cleanup()
        super().tearDown()

    def write(self, name: str, data: bytes) -> str:
        path = os.path.join(self.root, name)
        with open(path, 'wb') as fd:
            fd.write(data)
        return path

    def run_main(self, *argv, stdin=None):
        stdout = io.StringIO()
        code = main(list(argv), stdin=stdin, stdout=stdout)
        return code, stdout.getvalue()

    def test_version(self):
        code, output = self.run_main('--version')
        self.assertEqual(code, EXIT_SUCCESS)
        self.assertEqual(output.strip(), compdetect.__version__)

    def test_list(self):
        code, output = self.run_main('--list')
        self.assertEqual(code, EXIT_SUCCESS)
        self.assertEqual(output.split(), [d.name for d in DEFAULT])

    def test_list_with_selection(self):
        code, output = self.run_main('--list', '-a', 'lzw-msb-*', '-a', 'zlib')
        self.assertEqual(code, EXIT_SUCCESS)
        self.assertEqual(output.split(), [F'lzw-msb-{w}' for w in range(2, 9)] + ['zlib'])

    def test_unknown_algorithm(self):
        with mock.patch('sys.stderr', io.StringIO()):
            with self.assertRaises(SystemExit) as context:
                self.run_main('-a', 'rar', 'x')
        self.assertEqual(context.exception.code, 2)

    def test_missing_targets(self):
        with mock.patch('sys.stderr', io.StringIO()):
            with self.assertRaises(SystemExit) as context:
                self.run_main()
        self.assertEqual(context.exception.code, 2)

    def test_text_report(self):
        path = self.write('sample.bin', self.payload)
        code, output = self.run_main(path)
        self.assertEqual(code, EXIT_SUCCESS)
        self.assertEqual(output.splitlines(), [
            F'{path}:',
            '  [zlib] offset=0x03 compressed=19 decompressed=11',
        ])

    def test_json_report(self):
        path = self.write('sample.bin', self.payload)
        code, output = self.run_main('--json', path)
        self.assertEqual(code, EXIT_SUCCESS)
        self.assertEqual(json.loads(output), [{
            'target': path,
            'results': [{
                'algorithm': 'zlib',
                'offset': 3,
                'compressed_size': 19,
                'decompressed_size': 11,
            }],
        }])

    def test_strip_limit(self):
        path = self.write('sample.bin', self.payload)
        code, output = self.run_main('-s', '2', path)
        self.assertEqual(code, EXIT_SUCCESS)
        self.assertIn('no compression detected', output)

    def test_strip_limit_from_environment(self):
        path = self.write('sample.bin', self.payload)
        with mock.patch.dict(os.environ, {'COMPDETECT_STRIP_LIMIT': '1'}):
            environment.reload()
            code, output = self.run_main(path)
        self.assertIn('no compression detected', output)
        with mock.patch.dict(os.environ, {'COMPDETECT_STRIP_LIMIT': '1'}):
            environment.reload()
            code, output = self.run_main('-s', '-1', path)
        environment.reload()
        self.assertIn('[zlib]', output)

    def test_workers(self):
        path = self.write('sample.bin', self.payload)
        code, output = self.run_main('-w', '4', '--json', path)
        self.assertEqual(code, EXIT_SUCCESS)
        self.assertEqual(json.loads(output)[0]['results'][0]['offset'], 3)

    def test_workers_must_be_positive(self):
        path = self.write('sample.bin', self.payload)
        for value in ('0', '-1'):
            with mock.patch('sys.stderr', io.StringIO()):
                with self.assertRaises(SystemExit, msg=value) as context:
                    self.run_main('-w', value, path)
            self.assertEqual(context.exception.code, 2)

    def test_standard_input(self):
        code, output = self.run_main('--json', '-', stdin=io.BytesIO(self.payload))
        self.assertEqual(code, EXIT_SUCCESS)
        report, = json.loads(output)
        self.assertEqual(report['target'], '-')
        self.assertEqual(report['results'][0]['algorithm'], 'zlib')

    def test_unreadable_target_continues(self):
        good = self.write('good.bin', self.payload)
        bad = os.path.join(self.root, 'does-not-exist.bin')
        code, output = self.run_main('--json', bad, good)
        self.assertEqual(code, EXIT_FAILURE)
        reports = json.loads(output)
        self.assertEqual(reports[0]['target'], bad)
        self.assertIn('error', reports[0])
        self.assertEqual(reports[1]['results'][0]['algorithm'], 'zlib')

    def test_read_target_error(self):
        with self.assertRaises(InputAcquisitionError) as context:
            read_target(os.path.join(self.root, 'nothing'))
        self.assertTrue(context.exception.reason)
