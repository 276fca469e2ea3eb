"""
Converter behavioral tests (strict whole-token conversion per element type).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from dashline.converters import converter, typename, unsigned


class TestConverters(TestCase):

    def testInteger(self):
        convert = converter(int)
        self.assertEqual(convert("42"), 42)
        self.assertEqual(convert("-7"), -7)
        self.assertEqual(convert("+3"), 3)
        self.assertEqual(convert("010"), 10)
        self.assertEqual(convert("0x1F"), 31)
        self.assertEqual(convert("0b101"), 5)
        for token in ("12abc", "1.5", "", "abc", "1_000", "0x"):
            with self.assertRaises(ValueError):
                convert(token)

    def testUnsigned(self):
        self.assertIs(converter(unsigned), unsigned)
        self.assertEqual(unsigned("0"), 0)
        self.assertEqual(unsigned("0xff"), 255)
        with self.assertRaises(ValueError):
            unsigned("-1")

    def testFloatingPoint(self):
        convert = converter(float)
        self.assertEqual(convert(".558"), 0.558)
        self.assertEqual(convert("0.89"), 0.89)
        self.assertEqual(convert("1e-3"), 0.001)
        self.assertEqual(convert("-2"), -2.0)
        self.assertEqual(convert("3."), 3.0)
        for token in ("abc", "inf", "nan", "1_0", "", ".", "1.2.3", "1e999", "-1e400"):
            with self.assertRaises(ValueError):
                convert(token)

    def testOnlyAsciiDigits(self):
        for type in (int, unsigned, float):
            with self.assertRaises(ValueError):
                converter(type)("\u0663\u0664")
        with self.assertRaises(ValueError):
            converter(float)("\u0661.5")

    def testText(self):
        convert = converter(str)
        self.assertEqual(convert("output.raw"), "output.raw")
        self.assertEqual(convert("-x"), "-x")
        with self.assertRaises(ValueError):
            convert("")

    def testClosedSet(self):
        for type in (bytes, complex, list, None):
            with self.assertRaises(TypeError):
                converter(type)
        with self.assertRaises(TypeError):
            converter([])

    def testTypename(self):
        self.assertEqual(typename(int), "integer")
        self.assertEqual(typename(unsigned), "unsigned integer")
        self.assertEqual(typename(float), "floating point")
        self.assertEqual(typename(str), "text")


if __name__ == "__main__":
    unittest.main()
