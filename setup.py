#!/usr/bin/env python3

from setuptools import setup
from pathlib import Path

classifiers = """
Development Status :: 3 - Alpha
Intended Audience :: Developers
Operating System :: OS Independent
Programming Language :: Python :: 3
Topic :: Software Development :: Libraries :: Python Modules
Topic :: System :: Filesystems
Topic :: Utilities
"""

__doc__ = """Functional helpers for lazy streams, including a lazy directory walker.

Sequences are pulled one item at a time and compose with
the `>>` pipelines of the stream package.
"""

# skip bare VCS urls, but keep "name @ url" requirements
requires = list(filter(
                lambda x: x and not x.startswith('#') \
                            and (not '+' in x or ' @ ' in x),
                (Path(__file__).parent/"requirements.txt")
                    .read_text()
                    .split('\n')
               ))

setup(
    name='streamkit',
    version='0.1.0',
    description=__doc__.split('\n', 1)[0],
    long_description = __doc__,
    keywords='stream iterator lazy directory walk',
    install_requires = requires,
    extras_require = {
        'test': ['pytest'],
    },
    entry_points={
        # make the scripts available as command line scripts
        "console_scripts": [
            "streamkit-walk = streamkit.cmd.walk:run",
        ]
    },
    packages=['streamkit', 'streamkit.cmd'],
    classifiers=list(filter(None, classifiers.split("\n"))),
    platforms=['any'],
    python_requires='>=3.9',
)
