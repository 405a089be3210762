#!/usr/bin/env python3
import re
from setuptools import setup, find_packages

with open('formbuilder/_version.py') as f:
    content = f.read()
    version = re.search('__version__ = \'(.+?)\'', content).group(1)
    description = re.search('__desc__ = \'(.+?)\'', content).group(1)

with open('README.md') as f:
    long_description = f.read()

setup(
    name='formbuilder',
    version=version,
    description=description,
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='BSD-3-Clause',
    packages=find_packages(include=['formbuilder', 'formbuilder.*']),
    include_package_data=True,
    python_requires='>=3.10',
    install_requires=[l.strip() for l in open('requirements.txt').readlines() if l.strip()],
    extras_require={
        'test': ['pytest'],
    },
)
