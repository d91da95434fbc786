#! /usr/bin/env python

import logging
import unittest

from urikit.enumeration import Enumeration


def suite():
    loader = unittest.TestLoader()
    return unittest.TestSuite((
        loader.loadTestsFromTestCase(EnumerationTests),
    ))


class Fruit(Enumeration):
    decode = {
        'Apple': 0,
        'Pear': 1,
        'Orange': 2}


class EnumerationTests(unittest.TestCase):

    def test_constants(self):
        self.assertTrue(Fruit.Apple == 0)
        self.assertTrue(Fruit.Pear == 1)
        self.assertTrue(Fruit.Orange == 2)
        self.assertTrue(Fruit.values() == [0, 1, 2])
        self.assertTrue(Fruit.encode == {0: 'Apple', 1: 'Pear', 2: 'Orange'})

    def test_from_str(self):
        self.assertTrue(Fruit.from_str('Pear') == Fruit.Pear)
        self.assertTrue(Fruit.from_str(' Orange ') == Fruit.Orange)
        try:
            Fruit.from_str('pear')
            self.fail("from_str is case sensitive")
        except ValueError:
            pass

    def test_to_str(self):
        self.assertTrue(Fruit.to_str(Fruit.Apple) == 'Apple')
        self.assertTrue(Fruit.to_str(None) is None)
        self.assertTrue(Fruit.to_str(3) is None)

    def test_lists(self):
        self.assertTrue(Fruit.list_from_str(Fruit.from_str,
                                            "Apple Orange Pear Apple") ==
                        [Fruit.Apple, Fruit.Orange, Fruit.Pear, Fruit.Apple])
        self.assertTrue(Fruit.list_from_str(Fruit.from_str, "Pear|Apple",
                                            '|') == [Fruit.Pear, Fruit.Apple])
        self.assertTrue(Fruit.list_to_str([Fruit.Orange, Fruit.Apple]) ==
                        "Orange Apple")
        self.assertTrue(Fruit.list_to_str([], '|') == "")

    def test_ordinals(self):
        try:
            class Broken(Enumeration):
                decode = {
                    'One': 1,
                    'Two': 2}
            self.fail("values must start at 0")
        except ValueError:
            pass

    def test_clash(self):
        with self.assertLogs(level=logging.ERROR):
            class Clash(Enumeration):
                decode = {
                    'values': 0,
                    'Other': 1}
        # the existing attribute wins
        self.assertTrue(Clash.values() == [0, 1])
        self.assertTrue(Clash.from_str('values') == 0)
        self.assertTrue(Clash.Other == 1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    unittest.main()
