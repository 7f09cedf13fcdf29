"""
Usage formatter behavioral tests.

Scope
- Validate the usage line (app, command, signature, [options]).
- Validate the aligned option block (aliases, value labels, helpers last).
- Validate the application-level command listing.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest import TestCase

from argot import Flag, Option, command, lex, render, render_commands


LOUDLY = Flag("-l", "--loudly", descr="Say it loudly")
TIMES = Option("-n", "--number-of-times", metavar="times", descr="Bake this many times")
HELP = Flag("-h", "--help", descr="Show help information for this command", helper=True)


class TestRender(TestCase):
    """Behavioral tests for render()."""

    def testFullStatement(self):
        self.assertEqual(
            render("bake", "<food> [<drink>] ...", [LOUDLY, TIMES, HELP], app="baker"),
            "Usage: baker bake <food> [<drink>] ... [options]\n"
            "\n"
            "  -l, --loudly                     Say it loudly\n"
            "  -n, --number-of-times <times>    Bake this many times\n"
            "  -h, --help                       Show help information for this command",
        )

    def testHelpersAreListedLast(self):
        text = render("bake", "<food>", [HELP, LOUDLY], app="baker")
        self.assertLess(text.index("--loudly"), text.index("--help"))

    def testNoOptionsNoOptionsPlaceholder(self):
        self.assertEqual(render("bake", "<food>", [], app="baker"), "Usage: baker bake <food>")

    def testWithoutAppOrCommand(self):
        self.assertEqual(render(None, "<food>", [LOUDLY]), "Usage: <food> [options]\n\n  -l, --loudly    Say it loudly")

    def testDescriptionUnderTheUsageLine(self):
        self.assertEqual(
            render("recipe", "", [], app="baker", descr="Create a recipe interactively"),
            "Usage: baker recipe\n\nCreate a recipe interactively",
        )

    def testOptionWithoutDescrHasNoTrailingSpaces(self):
        self.assertEqual(render("x", "", [Flag("-q")]), "Usage: x [options]\n\n  -q")

    def testLexingTheStatementNeverRaises(self):
        words = lex(render("bake", "<food> [<drink>] ...", [LOUDLY, TIMES, HELP], app="baker"))
        self.assertIn("[<drink>]", words)

    def testRenderIsDeterministic(self):
        first = render("bake", "<food> ...", [LOUDLY, TIMES, HELP], app="baker")
        second = render("bake", "<food> ...", [LOUDLY, TIMES, HELP], app="baker")
        self.assertEqual(first, second)


class TestRenderCommands(TestCase):
    """Behavioral tests for render_commands()."""

    def testListing(self):
        @command(descr="Bake some food", signature="<food> ...")
        def bake(food):
            pass

        @command(descr="Create a recipe interactively")
        def recipe():
            pass

        app = SimpleNamespace(name="baker", descr="Bake things", commands=[bake, recipe], helpers=[HELP])
        self.assertEqual(
            render_commands(app),
            "Usage: baker <command> [options]\n"
            "\n"
            "Bake things\n"
            "\n"
            "Available commands:\n"
            "  bake      Bake some food\n"
            "  recipe    Create a recipe interactively\n"
            "\n"
            "  -h, --help    Show help information for this command",
        )

    def testEmptyListing(self):
        app = SimpleNamespace(name="baker", descr=None, commands=[], helpers=[])
        self.assertEqual(render_commands(app), "Usage: baker <command>\n\nAvailable commands:\n  (none)")


if __name__ == "__main__":
    unittest.main()
