#!/usr/bin/env python3
from __future__ import annotations

import re
import os
import setuptools
import pathlib
import sys

__minver__ = '3.8'
__github__ = 'https://github.com/tekkamanendless/compression-detector/'
__gitraw__ = 'https://raw.githubusercontent.com/tekkamanendless/compression-detector/'
__slogan__ = 'Determine the compression algorithm of a binary blob by brute force decompression.'
__topics__ = [
    'Development Status :: 4 - Beta',
    'Operating System :: OS Independent',
    'Programming Language :: Python :: 3 :: Only',
    'Topic :: Security',
    'Topic :: System :: Archiving :: Compression',
    'Topic :: Utilities',
]

__requirements__ = [
    'colorama',
    'cramjam',
    'lz4',
    'pyzstd',
    'python-snappy',
]


def get_config():
    sys.path.insert(0, str(pathlib.Path(__file__).parent.absolute()))

    import compdetect

    def get_setup_readme(filename: str | pathlib.Path | None = None):
        if filename is None:
            filename = pathlib.Path(__file__).parent.joinpath('README.md')
        with open(filename, 'r', encoding='UTF8') as README:
            def complete_link(match):
                link: str = match[1]
                if any(link.lower().endswith(xt) for xt in ('jpg', 'gif', 'png', 'svg')):
                    return F'({__gitraw__}master/{link})'
                else:
                    return F'({__github__}blob/master/{link})'
            readme = README.read()
            return re.sub(R'(?<=\])\((?!\w+://)(.*?)\)', complete_link, readme)

    return dict(
        name=compdetect.__distribution__,
        version=compdetect.__version__,
        description=__slogan__,
        long_description=get_setup_readme(),
        long_description_content_type='text/markdown',
        url=__github__,
        python_requires=F'>={__minver__}',
        classifiers=__topics__,
        packages=setuptools.find_packages(include=('compdetect*',)),
        install_requires=__requirements__,
        extras_require={'test': ['pytest', 'flake8']},
        entry_points={'console_scripts': [
            'compression-detector=compdetect.cli:main',
        ]},
    )


if __name__ == '__main__':
    os.chdir(pathlib.Path(__file__).parent)
    setuptools.setup(**get_config())
