# python
"""
Dispatcher tests (ordering, slots, built-in help/version routing).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase, mock

from cmdapp import ParseResult, Registry, Slot, dispatch


class TestDispatch(TestCase):

    def setUp(self):
        self.registry = Registry()
        self.help = self.registry.register(None, "help")
        self.version = self.registry.register(None, "version")
        self.slot = Slot()
        self.file = self.registry.register("f", "file", ".", self.slot)
        self.output = self.registry.register("o", "output", ".?", Slot())
        self.verbose = self.registry.register("v", "verbose", "*")
        self.calls = []

    def onOption(self, short, long, value, data):
        self.calls.append(("option", short, long, value, data))

    def onArgument(self, value, data):
        self.calls.append(("argument", value, data))

    def testOrderPreserved(self):
        dispatch([
            ParseResult(None, "first", 1),
            ParseResult(self.verbose, None, 2),
            ParseResult(self.file, "input.txt", 3),
            ParseResult(None, "last", 5),
        ], self.onOption, self.onArgument, "data")
        self.assertEqual(self.calls, [
            ("argument", "first", "data"),
            ("option", "v", "verbose", None, "data"),
            ("option", "f", "file", "input.txt", "data"),
            ("argument", "last", "data"),
        ])

    def testSlotWritten(self):
        dispatch([ParseResult(self.file, "a.txt", 1), ParseResult(self.file, "b.txt", 3)])
        self.assertEqual(self.slot.value, "b.txt")

    def testAbsentOptionalArgumentLeavesSlot(self):
        dispatch([ParseResult(self.output, None, 1)], self.onOption)
        self.assertIsNone(self.output.slot.value)
        self.assertEqual(self.calls, [("option", "o", "output", None, None)])

    def testMissingCallbacksAreSkipped(self):
        dispatch([ParseResult(None, "value", 1), ParseResult(self.file, "x", 2)])
        self.assertEqual(self.slot.value, "x")

    def testBuiltinHelpAndVersion(self):
        helper, versioner = mock.Mock(), mock.Mock()
        dispatch(
            [ParseResult(self.help, None, 1), ParseResult(self.version, None, 2)],
            self.onOption,
            helper=helper,
            versioner=versioner,
        )
        helper.assert_called_once_with()
        versioner.assert_called_once_with()
        self.assertEqual(self.calls, [])

    def testOverriddenHelpAndVersion(self):
        helper, versioner = mock.Mock(), mock.Mock()
        dispatch(
            [ParseResult(self.help, None, 1), ParseResult(self.version, None, 2)],
            self.onOption,
            override_help=True,
            override_version=True,
            helper=helper,
            versioner=versioner,
        )
        helper.assert_not_called()
        versioner.assert_not_called()
        self.assertEqual(self.calls, [
            ("option", None, "help", None, None),
            ("option", None, "version", None, None),
        ])


if __name__ == "__main__":
    unittest.main()
