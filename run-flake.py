#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Checks the package and its tests for style violations.
"""
import os.path
import sys

from inspect import stack
from glob import glob
from flake8.api import legacy as flake8

if __name__ != '__main__':
    raise ImportError('This script should not be imported.')

here = os.path.dirname(os.path.abspath(stack()[0][1]))

rules = flake8.get_style_guide(ignore=[
    'E128',  # continuation line under-indented for visual indent
    'W503',  # line break before binary operator
], max_line_length=140)

files = []
for folder in ('compdetect', 'test'):
    files.extend(glob(os.path.join(here, folder, '**', '*.py'), recursive=True))

report = rules.check_files(files)
errors = len(report.get_statistics('E')) + len(report.get_statistics('F'))

if errors:
    print(F'Found {errors} FLAKE8 violations in {len(files)} files.')
else:
    print(F'Success! No FLAKE8 violations were found in {len(files)} files.')

sys.exit(1 if errors else 0)
