# python
"""
Tokenizer tests (clustering, attached arguments, deferred arguments, end-of-options).

Conventions
- Test method names follow CamelCase per project convention.
- Arguments are given without the program name, as the parser passes them.
"""

from __future__ import annotations

import unittest
from unittest import TestCase, mock

from cmdapp import (
    ParseResult,
    Registry,
    ResourceExhaustedError,
    Slot,
    tokenize,
    MissingArgumentError,
    NotSeparableError,
    UnexpectedArgumentError,
    UnknownOptionError,
)
from cmdapp.options import _push


class TokenizerTestCase(TestCase):

    def setUp(self):
        self.registry = Registry()
        self.x = self.registry.register("x", "xray", "*")
        self.y = self.registry.register("y", "yankee", "*")
        self.z = self.registry.register("z", "zulu", "*")
        self.n = self.registry.register("n", "november")
        self.f = self.registry.register("f", "file", ".", Slot("FILE"))
        self.o = self.registry.register("o", "output", ".?", Slot())
        self.l = self.registry.register(None, "long")

    def tokenize(self, *args, eoo=True):
        results, state = tokenize(args, self.registry, eoo=eoo)
        return [tuple(result) for result in results], state


class TestClustering(TokenizerTestCase):
    """Short-flag clusters of multiflag options."""

    def testClusterRecordsEveryFlag(self):
        results, state = self.tokenize("-xyz")
        self.assertEqual(results, [(self.x, None, 1), (self.y, None, 1), (self.z, None, 1)])
        self.assertEqual(state.passed, {self.x, self.y, self.z})
        self.assertEqual(state.count, 3)

    def testClusterEquivalence(self):
        for args in (("-xyz",), ("-x", "-y", "-z"), ("-zxy",)):
            with self.subTest(args=args):
                _, state = self.tokenize(*args)
                self.assertEqual(state.passed, {self.x, self.y, self.z})
                self.assertTrue(all(map(state.was_passed, (self.x, self.y, self.z))))

    def testNonMultiflagInClusterIsNotSeparable(self):
        with self.assertRaises(NotSeparableError) as context:
            self.tokenize("-xn")
        self.assertIs(context.exception.options["option"], self.n)

    def testArgumentOptionInClusterIsNotSeparable(self):
        with self.assertRaises(NotSeparableError):
            self.tokenize("-xfvalue")

    def testUnknownOptionInCluster(self):
        with self.assertRaises(UnknownOptionError):
            self.tokenize("-xq")

    def testRepeatedFlagCounted(self):
        results, state = self.tokenize("-xx")
        self.assertEqual(len(results), 2)
        self.assertEqual(state.passed, {self.x})
        self.assertEqual(state.count, 2)


class TestArguments(TokenizerTestCase):
    """Attached, deferred, inline and optional arguments."""

    def testAttachedArgument(self):
        results, _ = self.tokenize("-fvalue")
        self.assertEqual(results, [(self.f, "value", 1)])

    def testAttachedAndSeparateAreIdentical(self):
        for args in (("-fvalue",), ("-f", "value"), ("--file", "value"), ("--file=value",)):
            with self.subTest(args=args):
                results, _ = self.tokenize(*args)
                self.assertEqual(results, [(self.f, "value", 1)])

    def testInlineEmptyValue(self):
        results, _ = self.tokenize("--file=")
        self.assertEqual(results, [(self.f, "", 1)])

    def testDashSuppliesArgument(self):
        results, _ = self.tokenize("-f", "-")
        self.assertEqual(results, [(self.f, "-", 1)])

    def testMissingArgumentAtEnd(self):
        with self.assertRaises(MissingArgumentError) as context:
            self.tokenize("-x", "-f")
        self.assertEqual(context.exception.options["index"], 2)

    def testOptionCannotSupplyArgument(self):
        with self.assertRaises(MissingArgumentError):
            self.tokenize("-f", "-x")

    def testOptionalArgumentConsumesNextToken(self):
        results, _ = self.tokenize("-o", "out.txt")
        self.assertEqual(results, [(self.o, "out.txt", 1)])

    def testOptionalArgumentAbsentAtEnd(self):
        results, state = self.tokenize("-o")
        self.assertEqual(results, [(self.o, None, 1)])
        self.assertTrue(state.was_passed(self.o))

    def testOptionalArgumentFollowedByOption(self):
        results, _ = self.tokenize("-o", "-x")
        self.assertEqual(results, [(self.o, None, 1), (self.x, None, 2)])

    def testUnexpectedAttachedArgument(self):
        with self.assertRaises(UnexpectedArgumentError):
            self.tokenize("-nvalue")

    def testUnexpectedInlineArgument(self):
        with self.assertRaises(UnexpectedArgumentError):
            self.tokenize("--november=value")


class TestPlainArguments(TokenizerTestCase):
    """Plain arguments, the stdin marker and the end-of-options marker."""

    def testPlainArgument(self):
        results, state = self.tokenize("input.txt")
        self.assertEqual(results, [(None, "input.txt", 1)])
        self.assertEqual(state.count, 0)

    def testDashIsPlainArgument(self):
        results, _ = self.tokenize("-")
        self.assertEqual(results, [(None, "-", 1)])

    def testOrderPreserved(self):
        results, _ = self.tokenize("a", "-x", "b", "--long", "c")
        self.assertEqual(results, [
            (None, "a", 1),
            (self.x, None, 2),
            (None, "b", 3),
            (self.l, None, 4),
            (None, "c", 5),
        ])

    def testEndOfOptionsEnabled(self):
        results, state = self.tokenize("-x", "--", "-x", "--")
        self.assertEqual(results, [(self.x, None, 1), (None, "-x", 3), (None, "--", 4)])
        self.assertEqual(state.count, 1)

    def testEndOfOptionsDisabled(self):
        results, _ = self.tokenize("-x", "--", "-x", eoo=False)
        self.assertEqual(results, [(self.x, None, 1), (None, "--", 2), (self.x, None, 3)])

    def testUnknownShortOption(self):
        with self.assertRaises(UnknownOptionError) as context:
            self.tokenize("-x", "-q")
        self.assertEqual(context.exception.options["index"], 2)
        self.assertIn("second position", context.exception.message)

    def testUnknownLongOption(self):
        with self.assertRaises(UnknownOptionError):
            self.tokenize("--nope")

    def testNonStringTokenRejected(self):
        with self.assertRaises(TypeError):
            self.tokenize("-x", 3)

    def testFreshStateEveryCall(self):
        _, first = self.tokenize("-x")
        _, second = self.tokenize("-y")
        self.assertEqual(first.passed, {self.x})
        self.assertEqual(second.passed, {self.y})


class ExhaustedList(list):
    """A list that can never grow."""

    def append(self, item, /):
        raise MemoryError


class TestResourceExhaustion(TokenizerTestCase):

    def testResultGrowthFailurePropagates(self):
        def push(sequence, item, /):
            return _push(ExhaustedList(sequence), item)

        with mock.patch("cmdapp.tokenizer._push", push):
            with self.assertRaises(ResourceExhaustedError):
                self.tokenize("-x", "input")

    def testPlainArgumentGrowthFailurePropagates(self):
        def push(sequence, item, /):
            return _push(ExhaustedList(sequence), item)

        with mock.patch("cmdapp.tokenizer._push", push):
            with self.assertRaises(MemoryError):
                self.tokenize("input")


class TestParseResult(TestCase):
    """ParseResult invariants."""

    def testEmptyResultRejected(self):
        with self.assertRaises(ValueError):
            ParseResult(None, None)

    def testIndexDefaultsToZero(self):
        self.assertEqual(ParseResult(None, "value").index, 0)


if __name__ == "__main__":
    unittest.main()
