#!/usr/bin/env python

from setuptools import setup

import urikit.info

with open('README.rst') as f:
    long_description = f.read()

setup(name=urikit.info.name,
      version=urikit.info.version,
      description=urikit.info.title,
      long_description=long_description,
      author="urikit authors",
      packages=['urikit'],
      python_requires='>=3.5',
      classifiers=['Development Status :: 3 - Alpha',
                   'Intended Audience :: Developers',
                   'Natural Language :: English',
                   'License :: OSI Approved :: BSD License',
                   'Operating System :: OS Independent',
                   'Programming Language :: Python',
                   'Programming Language :: Python :: 3',
                   'Topic :: Internet',
                   'Topic :: Software Development :: '
                   'Libraries :: Python Modules']
      )
