#! /usr/bin/env python
"""Runs unit tests on all dtdxml modules"""

import unittest
import logging

import test_dtd2xml
import test_dtd_builder
import test_dtd_loader
import test_dtd_parser
import test_dtd_structures
import test_dtd_writer


all_tests = unittest.TestSuite()
all_tests.addTest(test_dtd2xml.suite())
all_tests.addTest(test_dtd_builder.suite())
all_tests.addTest(test_dtd_loader.suite())
all_tests.addTest(test_dtd_parser.suite())
all_tests.addTest(test_dtd_structures.suite())
all_tests.addTest(test_dtd_writer.suite())


def suite():
    global all_tests
    return all_tests


def load_tests(loader, tests, pattern):
    return suite()


if __name__ == "__main__":
    logging.basicConfig(level=logging.ERROR)
    unittest.main()
