#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import re

from setuptools import find_packages, setup

# the package can't be imported here, its dependencies aren't installed yet
with open('erasenil/version.py') as fp:
    base_version, = re.findall(r"^BASE_VERSION = '([^']+)'", fp.read(), re.MULTILINE)

setup(
    name='erasenil',
    version=base_version,
    description='Default values for missing or null fields when decoding, omitted again when encoding',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache License 2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.10',
    packages=find_packages(exclude=('erasenil_tests', 'erasenil_tests.*')),
    install_requires=[
        'pydantic>=2.7,<3',
        'pydantic-core',
        'structlog',
        'typing_extensions',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
