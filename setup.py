#!/usr/bin/env python

import dtdxml.info

from setuptools import setup


with open('README.rst') as f:
    long_description = f.read()

setup(name=dtdxml.info.name,
      version=dtdxml.info.version,
      description=dtdxml.info.title,
      long_description=long_description,
      author="the dtdxml authors",
      url=dtdxml.info.home,
      packages=['dtdxml'],
      python_requires='>=3.6',
      install_requires=['requests'],
      entry_points={
          'console_scripts': ['dtd2xml = dtdxml.dtd2xml:main']},
      classifiers=['Development Status :: 3 - Alpha',
                   'Intended Audience :: Developers',
                   'Natural Language :: English',
                   'License :: OSI Approved :: BSD License',
                   'Operating System :: OS Independent',
                   'Programming Language :: Python',
                   'Programming Language :: Python :: 3',
                   'Topic :: Text Processing :: Markup :: XML',
                   'Topic :: Software Development :: '
                   'Libraries :: Python Modules']
      )
