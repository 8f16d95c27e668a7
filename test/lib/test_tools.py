#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from compdetect.lib.tools import exception_to_string, isbuffer

from .. import TestBase


class TestTools(TestBase):

    def test_isbuffer(self):
        self.assertTrue(isbuffer(B'abc'))
        self.assertTrue(isbuffer(bytearray(3)))
        self.assertTrue(isbuffer(memoryview(B'abc')))
        self.assertFalse(isbuffer('abc'))
        self.assertFalse(isbuffer(None))

    def test_exception_without_arguments(self):
        self.assertEqual(exception_to_string(EOFError()), 'EOFError')

    def test_exception_picks_longest_message(self):
        error = OSError(2, 'No such file or directory')
        self.assertEqual(exception_to_string(error), 'No such file or directory')
        self.assertEqual(exception_to_string(ValueError(' padded ')), 'padded')
