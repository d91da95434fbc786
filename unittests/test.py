#! /usr/bin/env python
"""Runs unit tests on all urikit modules"""

import unittest
import logging

import test_bitfield
import test_builder
import test_charclass
import test_enumeration
import test_paths
import test_rfc2396


all_tests = unittest.TestSuite()
all_tests.addTest(test_bitfield.suite())
all_tests.addTest(test_builder.suite())
all_tests.addTest(test_charclass.suite())
all_tests.addTest(test_enumeration.suite())
all_tests.addTest(test_paths.suite())
all_tests.addTest(test_rfc2396.suite())


def suite():
    global all_tests
    return all_tests


def load_tests(loader, tests, pattern):
    return suite()

if __name__ == "__main__":
    logging.basicConfig(level=logging.ERROR)
    unittest.main()
