# python
"""
Program metadata and help/version rendering tests.

Conventions
- Test method names follow CamelCase per project convention.
- Renderers print to a rich Console backed by StringIO (no terminal, no colors).
"""

from __future__ import annotations

import datetime
import io
import unittest
from unittest import TestCase

from rich.console import Console

from cmdapp import Program, Registry, Slot, render_help, render_version


def capture():
    return Console(file=io.StringIO(), width=80)


class TestProgram(TestCase):

    def testDefaults(self):
        program = Program()
        self.assertEqual(program.name, "cmdapp")
        self.assertIsNone(program.descr)
        self.assertEqual(program.authors, [])
        self.assertEqual(program.release, (0, 0, 0))

    def testWeakRenameKeepsExplicitName(self):
        program = Program("tool")
        program.rename("/usr/bin/other", weak=True)
        self.assertEqual(program.name, "tool")
        program.rename("other")
        self.assertEqual(program.name, "other")

    def testWeakRenameFillsMissingName(self):
        program = Program()
        program.rename("tool", weak=True)
        self.assertEqual(program.name, "tool")

    def testAuthorsAreCopied(self):
        program = Program("tool")
        program.author("Ada")
        program.authors.append("Mallory")
        self.assertEqual(program.authors, ["Ada"])

    def testInvalidValuesIgnored(self):
        program = Program("tool")
        program.version(1, 2, 3)
        program.version(-1, 0, 0)
        program.year(-5)
        program.author(None)
        program.info(None)
        program.synopsis(None)
        program.describe(None)
        self.assertEqual(program.release, (1, 2, 3))
        self.assertIsNone(program.since)
        self.assertEqual(program.authors, [])
        self.assertIsNone(program.notice)
        self.assertEqual(program.synopses, [])

    def testCopyrightSpansToCurrentYear(self):
        current = datetime.date.today().year
        program = Program("tool")
        program.year(2000)
        program.author("Ada")
        program.author("Grace")
        program.info("All rights reserved.")
        self.assertEqual(program.copyright, f"Copyright (C) 2000-{current} Ada, Grace. All rights reserved.")

    def testCopyrightCurrentYearOnly(self):
        current = datetime.date.today().year
        program = Program("tool")
        program.year(current)
        program.author("Ada")
        self.assertEqual(program.copyright, f"Copyright (C) {current} Ada.")

    def testCopyrightWithoutAuthorsKeepsPeriod(self):
        current = datetime.date.today().year
        program = Program("tool")
        program.year(current)
        program.info("All rights reserved.")
        self.assertEqual(program.copyright, f"Copyright (C) {current} . All rights reserved.")

    def testNonStringNameRejected(self):
        with self.assertRaises(TypeError):
            Program(42)


class TestRenderers(TestCase):

    def setUp(self):
        self.program = Program("tool", descr="Frobnicate files.")
        self.program.version(1, 2, 3)
        self.program.author("Ada")
        self.registry = Registry()
        self.registry.register(None, "help", descr="display this help")
        self.registry.register("f", "file", ".", Slot("FILE"), descr="read from FILE")
        self.registry.register("o", "output", ".?", Slot(), descr="write the result")
        self.registry.register("v", "verbose", "*")

    def testVersion(self):
        console = capture()
        render_version(self.program, console=console)
        self.assertEqual(console.file.getvalue(), "tool 1.2.3\nCopyright (C) Ada.\n")

    def testHelpSections(self):
        console = capture()
        render_help(self.program, self.registry, console=console)
        output = console.file.getvalue()
        self.assertIn("usage: tool [OPTION]...", output)
        self.assertIn("Frobnicate files.", output)
        self.assertIn("options:", output)
        self.assertIn("  -f, --file FILE", output)
        self.assertIn("  -o, --output [ARG]", output)
        self.assertIn("      --help", output)
        self.assertIn("display this help", output)
        self.assertIn("  -v, --verbose", output)

    def testHelpSynopses(self):
        self.program.synopsis("[OPTION]... FILE")
        self.program.synopsis("--version")
        console = capture()
        render_help(self.program, self.registry, console=console)
        output = console.file.getvalue()
        self.assertIn("usage: tool [OPTION]... FILE\n       tool --version", output)

    def testHelpWrapsLongDescriptions(self):
        self.registry.register("l", "long", descr="word " * 30)
        console = capture()
        render_help(self.program, self.registry, console=console)
        lines = console.file.getvalue().splitlines()
        self.assertTrue(all(len(line) <= 80 for line in lines))
        self.assertTrue(any(line.startswith(" " * 24 + "word") for line in lines))

    def testFancyHelpDrawsPanel(self):
        console = capture()
        render_help(self.program, self.registry, fancy=True, console=console)
        self.assertIn("TOOL HELP", console.file.getvalue())


if __name__ == "__main__":
    unittest.main()
