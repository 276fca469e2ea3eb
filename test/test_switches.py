"""
Switch handle behavioral tests (construction, validation, read-only state, value access).

Conventions
- Test method names follow CamelCase per project convention.
- Handles are built directly here; matching is covered by the parser tests.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from dashline import Parser, Switch, ValueSwitch, unsigned, StateError, ValueIndexError, FaultCode


class TestSwitch(TestCase):
    """Behavioral tests for boolean switch handles."""

    def testDefaults(self):
        s = Switch("v", "  Verbose output  ")
        self.assertEqual(s.flag, "v")
        self.assertEqual(s.descr, "Verbose output")
        self.assertFalse(s.required)
        self.assertFalse(s.present)
        self.assertFalse(s.errored)
        self.assertEqual(s.faults, ())

    def testFragment(self):
        self.assertEqual(Switch("v").fragment(), " [-v]")

    def testFlagMustBeAString(self):
        with self.assertRaises(TypeError):
            Switch(1)

    def testFlagMustBeOneCharacter(self):
        with self.assertRaises(ValueError):
            Switch("")
        with self.assertRaises(ValueError):
            Switch("vv")

    def testFlagCannotBeTheIntroducer(self):
        with self.assertRaises(ValueError):
            Switch("-")

    def testFlagCannotBeWhitespace(self):
        with self.assertRaises(ValueError):
            Switch(" ")
        with self.assertRaises(ValueError):
            Switch("\t")

    def testDescrMustBeAString(self):
        with self.assertRaises(TypeError):
            Switch("v", None)

    def testStateIsReadOnly(self):
        s = Switch("v")
        with self.assertRaises(AttributeError):
            s.present = True
        with self.assertRaises(AttributeError):
            s.flag = "w"

    def testRepr(self):
        self.assertEqual(
            repr(Switch("v", "Verbose output")),
            "switch(flag='v', descr='Verbose output', required=False, present=False, errored=False)"
        )


class TestValueSwitch(TestCase):
    """Behavioral tests for value-bearing switch handles."""

    def testFragment(self):
        self.assertEqual(ValueSwitch("s", "Spacing", 3, float).fragment(), " [-s x x x]")

    def testDefaults(self):
        s = ValueSwitch("i", "Input file")
        self.assertEqual(s.nargs, 1)
        self.assertIs(s.type, str)
        self.assertEqual(len(s), 1)

    def testNargsValidation(self):
        with self.assertRaises(ValueError):
            ValueSwitch("s", "Spacing", 0)
        with self.assertRaises(TypeError):
            ValueSwitch("s", "Spacing", "3")
        with self.assertRaises(TypeError):
            ValueSwitch("s", "Spacing", True)

    def testElementTypeIsClosed(self):
        for type in (int, unsigned, float, str):
            ValueSwitch("s", "Spacing", 1, type)
        with self.assertRaises(TypeError):
            ValueSwitch("s", "Spacing", 1, bytes)
        with self.assertRaises(TypeError):
            ValueSwitch("s", "Spacing", 1, lambda token: token)

    def testReadingUnmatchedSwitch(self):
        s = ValueSwitch("s", "Spacing", 3, float)
        with self.assertRaises(StateError) as context:
            s.value(0)
        self.assertEqual(context.exception.code, FaultCode.UNMATCHED_SWITCH)
        with self.assertRaises(StateError):
            s.values

    def testIndexOutOfRange(self):
        parser = Parser(["prog", "-s", "1", "2", "3"])
        s, _ = parser.add_value_switch("s", "Spacing", 3, float)

        for index in (3, -1, 10):
            with self.assertRaises(ValueIndexError) as context:
                s.value(index)
            self.assertEqual(context.exception.code, FaultCode.VALUE_OUT_OF_RANGE)
        with self.assertRaises(IndexError):
            s[3]

    def testSingleValueDefaultsToFirstSlot(self):
        parser = Parser(["prog", "-i", "in.vti", "-s", "1", "2", "3"])
        source, _ = parser.add_value_switch("i", "Input file")
        spacing, _ = parser.add_value_switch("s", "Spacing", 3, float)
        self.assertEqual(source.value(), "in.vti")
        self.assertEqual(spacing.value(), 1.0)

    def testIndexCheckedBeforeState(self):
        s = ValueSwitch("s", "Spacing", 2, float)
        with self.assertRaises(ValueIndexError):
            s.value(2)

    def testIndexMustBeAnInteger(self):
        parser = Parser(["prog", "-s", "1"])
        s, _ = parser.add_value_switch("s", "Scale", 1, float)
        with self.assertRaises(TypeError):
            s.value("0")
        with self.assertRaises(TypeError):
            s[0:1]

    def testReadingErroredSwitch(self):
        parser = Parser(["prog", "-s", "1", "x"])
        s, _ = parser.add_value_switch("s", "Scale", 2, float)
        self.assertTrue(s.present)
        with self.assertRaises(StateError):
            s.value(0)

    def testConvert(self):
        self.assertEqual(ValueSwitch("s", "Scale", 1, float).convert(".5"), 0.5)
        with self.assertRaises(ValueError):
            ValueSwitch("n", "Count", 1, int).convert("1.5")

    def testRepr(self):
        self.assertTrue(repr(ValueSwitch("s", "Scale", 2, float)).startswith("value-switch(flag='s', descr='Scale', nargs=2"))

    def testSwitchIsSettledOnce(self):
        parser = Parser(["prog", "-v"])
        s, _ = parser.add_switch("v")
        with self.assertRaises(RuntimeError):
            s._settle(False, [])


if __name__ == "__main__":
    unittest.main()
