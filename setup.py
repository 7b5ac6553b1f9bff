#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup
import re
import sys

# Can't just import allsat, because dependencies have to be satisfied
# first. So, we'll "grep" for the VERSION.

source = "allsat/__init__.py"

version = None
version_re = re.compile(r'''^\s*VERSION\s*=\s*['"]?([\d.]+)["']?.*$''')
with open(source) as f:
    for line in f:
        m = version_re.match(line)
        if m:
            version = m.group(1)
            break

if not version:
    sys.stderr.write("Can't find version in {0}\n".format(source))
    sys.exit(1)

PACKAGES = [
    'allsat',
    'pred_util',
]

setup(
    name='allsat',
    packages=PACKAGES,
    version=version,
    description='Check that every element of a sequence satisfies a predicate',
    python_requires='>=3.7',
    install_requires=[
        'docopt >= 0.6.2',
        'PyYAML >= 5.1',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'allsat=allsat:main'
        ]
    },
    classifiers=[],
)
