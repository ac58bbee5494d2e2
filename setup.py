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

from setuptools import find_packages, setup

from ccdparams import __version__

install_requires = [
    'base58>=2.1',
    'colorama>=0.4',
    'configargparse>=1.5',
    'pydantic>=2.0,<3',
    'pyyaml>=6.0',
    'structlog>=22.1,<25',
    'twisted>=22.10',
    'typing_extensions>=4.6',
]

setup(
    name='ccdparams',
    version=__version__,
    description='HTTP service that serializes JSON smart contract parameters with a Concordium contract schema',
    author='Hathor Team',
    author_email='contact@hathor.network',
    license='Apache License 2.0',
    entry_points={
        'console_scripts': ['ccdparams=ccdparams.cli.main:main'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.11',
    packages=find_packages(exclude=('ccdparams_tests', 'ccdparams_tests.*')),
    package_data={
        'ccdparams.conf': ['*.yml'],
        'ccdparams._openapi': ['*.json'],
    },
    install_requires=install_requires,
    extras_require={
        'test': ['pytest>=7.0'],
    },
)
