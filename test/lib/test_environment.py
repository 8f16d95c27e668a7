#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import io
import logging
import os

from unittest import mock

from compdetect.lib.environment import DetectorFormatter, EVBool, EVInt, EVLog, LogLevel, logger

from . import TestBase


class TestEnvironment(TestBase):

    def test_verbosity_levels(self):
        self.assertEqual(LogLevel.FromVerbosity(-1), LogLevel.DETACHED)
        self.assertEqual(LogLevel.FromVerbosity(0), LogLevel.WARNING)
        self.assertEqual(LogLevel.FromVerbosity(1), LogLevel.INFO)
        self.assertEqual(LogLevel.FromVerbosity(7), LogLevel.DEBUG)
        self.assertEqual(LogLevel.INFO.verbosity, 1)
        self.assertEqual(LogLevel.DETACHED.verbosity, -1)

    def test_integer_setting(self):
        with mock.patch.dict(os.environ, {'COMPDETECT_TEST_INT': '0x10'}):
            self.assertEqual(EVInt('TEST_INT').value, 16)
        with mock.patch.dict(os.environ, {'COMPDETECT_TEST_INT': 'many'}):
            self.assertIsNone(EVInt('TEST_INT').value)
        self.assertIsNone(EVInt('TEST_UNSET_INT').value)

    def test_boolean_setting(self):
        for value, expected in [('1', True), ('yes', True), ('off', False), ('0', False), ('', False)]:
            with mock.patch.dict(os.environ, {'COMPDETECT_TEST_BOOL': value}):
                self.assertEqual(EVBool('TEST_BOOL').value, expected, msg=value)

    def test_log_setting(self):
        with mock.patch.dict(os.environ, {'COMPDETECT_TEST_LOG': 'debug'}):
            self.assertEqual(EVLog('TEST_LOG').value, LogLevel.DEBUG)
        with mock.patch.dict(os.environ, {'COMPDETECT_TEST_LOG': '1'}):
            self.assertEqual(EVLog('TEST_LOG').value, LogLevel.INFO)
        with mock.patch.dict(os.environ, {'COMPDETECT_TEST_LOG': 'LOUD'}):
            self.assertIsNone(EVLog('TEST_LOG').value)

    def test_logger_format(self):
        logging.disable(logging.NOTSET)
        with mock.patch.object(logging.root, 'handlers', []):
            log = logger('compdetect.test.format')
        log.setLevel(logging.INFO)
        handler, = log.handlers
        stream = io.StringIO()
        handler.setStream(stream)
        log.info('hello')
        log.debug('hidden')
        output = stream.getvalue()
        self.assertIn('comment in compdetect.test.format: hello', output)
        self.assertNotIn('hidden', output)
        self.assertIs(logger('compdetect.test.format'), log)
        self.assertEqual(len(log.handlers), 1)

    def test_formatter_level_names(self):
        formatter = DetectorFormatter('{custom_level_name} in {name}: {message}', style='{')
        for level, expected in [
            (logging.DEBUG, 'verbose'),
            (logging.INFO, 'comment'),
            (logging.WARNING, 'warning'),
            (logging.ERROR, 'failure'),
        ]:
            record = logging.LogRecord('compdetect.scanner', level, __file__, 1, 'done', None, None)
            self.assertEqual(formatter.format(record), F'{expected} in compdetect.scanner: done')
