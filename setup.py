#!/usr/bin/python3
import io
import os

from setuptools import setup

VERSION = None

here = os.path.abspath(os.path.dirname(__file__))

with io.open(os.path.join(here, 'README.md'), encoding='utf-8') as f:
    long_description = '\n' + f.read()

about = {}
if not VERSION:
    with open(os.path.join(here, 'Cordlink', '__version__.py')) as f:
        exec(f.read(), about)
else:
    about['__version__'] = VERSION

setup(
  name='Cordlink',
  packages=['Cordlink', 'Cordlink.core'],
  version=about['__version__'],
  license='MIT',
  description='Credential resolution and session bootstrap for real-time chat platform clients',
  long_description=long_description,
  long_description_content_type="text/markdown",
  keywords=['discord', 'bot', 'gateway', 'session', 'authentication', 'mfa'],
  python_requires='>=3.10',
  install_requires=[
      'curl_cffi',
      'pydantic>=2',
      'python-dotenv',
      'requests',
  ],
  extras_require={
      'test': ['pytest'],
  },
  classifiers=[
    'Development Status :: 4 - Beta',
    'Intended Audience :: Developers',
    'License :: OSI Approved :: MIT License',
    'Programming Language :: Python :: 3.10',
    'Programming Language :: Python :: 3.11',
    'Programming Language :: Python :: 3.12',
  ],
)
