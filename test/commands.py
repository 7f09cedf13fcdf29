"""
Commands module behavioral tests (declaration forms, binding, execution).

Scope
- Validate the three declaration forms (literal, decorator, chained options).
- Validate eager declaration checks (names, signatures, callbacks, aliases).
- Validate bind(): options first, then the signature; help short-circuit.
- Validate execute(): keyword delivery and the success contract.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Command, command, Flag, Option, tokenize, classify).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argot import (
    AmbiguousSignatureError,
    ArityError,
    Bindings,
    Command,
    Flag,
    HelpRequested,
    Option,
    Signature,
    UnknownOptionError,
    classify,
    command,
    flag,
    tokenize,
)


def _tokens(*words):
    return classify(tokenize(["baker", "bake", *words]), routed=True)


class TestDeclaration(TestCase):
    """Behavioral tests for Command construction."""

    def testLiteralForm(self):
        def on_bake(food):
            pass

        loudly = Flag("-l", "--loudly")
        bake = Command(on_bake, name="bake", descr="Bake some food", signature="<food> ...", options=[loudly])
        self.assertEqual(bake.name, "bake")
        self.assertEqual(bake.descr, "Bake some food")
        self.assertEqual(bake.signature, Signature.parse("<food> ..."))
        self.assertEqual(bake.options, (loudly,))

    def testDecoratorFormDerivesNameAndDescr(self):
        @command(signature="<food>")
        def bake_now(food):
            """
            Bake some food
            right now.

            Longer explanation that stays out of the listing.
            """

        self.assertIsInstance(bake_now, Command)
        self.assertEqual(bake_now.name, "bake-now")
        self.assertEqual(bake_now.descr, "Bake some food right now.")

    def testBareDecoratorForm(self):
        @command
        def recipe():
            pass

        self.assertEqual(recipe.name, "recipe")
        self.assertIsNone(recipe.descr)
        self.assertEqual(len(recipe.signature), 0)

    def testChainedOptionDeclarations(self):
        @command(signature="<food> ...")
        def bake(food):
            pass

        @bake.flag("-l", "--loudly", descr="Say it loudly")
        def loudly():
            pass

        @bake.option("-n", "--number-of-times", metavar="times")
        def times(value):
            pass

        self.assertIsInstance(loudly, Flag)
        self.assertIsInstance(times, Option)
        self.assertEqual(bake.options, (loudly, times))

    def testChainedAliasClashRejected(self):
        @command
        def bake():
            pass

        bake.flag("-l", "--loudly")(lambda: None)
        with self.assertRaises(ValueError):
            bake.flag("-l", "--lightly")(lambda: None)
        self.assertEqual(len(bake.options), 1)

    def testLiteralAliasClashRejected(self):
        with self.assertRaises(ValueError):
            Command(lambda: None, name="x", options=[Flag("-l"), Option("-l")])

    def testAmbiguousSignatureRejected(self):
        with self.assertRaises(AmbiguousSignatureError):
            Command(lambda a, b: None, name="x", signature="<a> ... <b>")

    def testCallbackMustAcceptParameters(self):
        with self.assertRaises(TypeError):
            Command(lambda: None, name="x", signature="<food>")

    def testCallbackNeedsDefaultsForOptionalParameters(self):
        with self.assertRaises(TypeError):
            Command(lambda food, drink: None, name="x", signature="<food> [<drink>]")
        Command(lambda food, drink="water": None, name="x", signature="<food> [<drink>]")

    def testHyphenatedParametersBecomeUnderscores(self):
        Command(lambda number_of_cakes: None, name="x", signature="<number-of-cakes>")

    def testInvalidNames(self):
        with self.assertRaises(ValueError):
            Command(lambda: None, name="two words")
        with self.assertRaises(TypeError):
            Command(lambda: None, name=3)

    def testCallbackMustBeCallable(self):
        with self.assertRaises(TypeError):
            Command("bake")

    def testCommandIsCallable(self):
        @command
        def double(value=2):
            return value * 2

        self.assertEqual(double(), 4)
        self.assertEqual(double(5), 10)

    def testRepr(self):
        @command(signature="<food>", descr="Bake")
        def bake(food):
            pass

        self.assertEqual(repr(bake), "command(name='bake', descr='Bake', signature=signature('<food>'))")


class TestBind(TestCase):
    """Behavioral tests for Command.bind()."""

    def setUp(self):
        self.calls = []

        @command(signature="<food> [<drink>]")
        def bake(food, drink="water"):
            pass

        @bake.flag("-l", "--loudly")
        def loudly():
            self.calls.append("loudly")

        @bake.option("-n", "--number-of-times", metavar="times")
        def times(value):
            self.calls.append(value)

        self.bake = bake

    def testOptionsThenSignature(self):
        bindings = self.bake.bind(_tokens("donut", "-n", "3", "coffee", "-l"))
        self.assertIsInstance(bindings, Bindings)
        self.assertEqual(dict(bindings.parameters), {"food": "donut", "drink": "coffee"})
        self.assertEqual(bindings.options["--number-of-times"], "3")
        self.assertTrue(bindings["-l"])
        self.assertEqual(self.calls, ["3", "loudly"])

    def testKeyedValueIsNotPositional(self):
        with self.assertRaises(ArityError):
            self.bake.bind(_tokens("-n", "3"))

    def testUnknownOptionRaisesBeforeArity(self):
        with self.assertRaises(UnknownOptionError):
            self.bake.bind(_tokens("-z"))

    def testIdenticalInputsGiveIdenticalBindings(self):
        first = self.bake.bind(_tokens("donut", "-n", "3", "coffee", "-l"))
        second = self.bake.bind(_tokens("donut", "-n", "3", "coffee", "-l"))
        self.assertEqual(dict(first.parameters), dict(second.parameters))
        self.assertEqual(dict(first.options), dict(second.options))
        self.assertEqual(repr(first), repr(second))

    def testHelpRequested(self):
        helper = flag("-h", "--help", helper=True)(lambda: None)
        outcome = self.bake.bind(_tokens("-h"), [helper])
        self.assertIsInstance(outcome, HelpRequested)
        self.assertEqual(self.calls, [])

    def testUsageIncludesHelpers(self):
        helper = Flag("-h", "--help", descr="Show help information for this command", helper=True)
        text = self.bake.usage(app="baker", helpers=[helper])
        self.assertTrue(text.startswith("Usage: baker bake <food> [<drink>] [options]"))
        self.assertTrue(text.endswith("-h, --help                       Show help information for this command"))

    def testUnroutedUsageOmitsTheCommandName(self):
        self.assertTrue(self.bake.usage(app="baker", routed=False).startswith("Usage: baker <food> [<drink>]"))


class TestExecute(TestCase):
    """Behavioral tests for Command.execute()."""

    def testParametersArriveAsKeywords(self):
        received = {}

        @command(signature="<number-of-cakes> [<flavor>]")
        def order(number_of_cakes, flavor="vanilla"):
            received.update(number=number_of_cakes, flavor=flavor)

        self.assertTrue(order.execute(Bindings({"number-of-cakes": "3"})))
        self.assertEqual(received, {"number": "3", "flavor": "vanilla"})

    def testOptionsArriveThroughKeywordOnlyParameters(self):
        received = {}

        @command(signature="<food> ...")
        def bake(food, *, loudly=False, number_of_times="1"):
            received.update(food=food, loudly=loudly, times=number_of_times)

        bake.flag("-l", "--loudly")(lambda: None)
        bake.option("-n", "--number-of-times")(lambda value: None)

        bake.execute(bake.bind(_tokens("donut", "bagel", "-l")))
        self.assertEqual(received, {"food": ("donut", "bagel"), "loudly": True, "times": "1"})

    def testSuccessContract(self):
        for result, expected in ((None, True), (True, True), (1, True), (False, False), (0, False)):
            with self.subTest(result=result):
                self.assertIs(Command(lambda: result, name="x").execute(Bindings()), expected)

    def testExecuteRequiresBindings(self):
        with self.assertRaises(TypeError):
            Command(lambda: None, name="x").execute({})


class TestBindings(TestCase):
    """Behavioral tests for the Bindings mapping."""

    def testParametersShadowOptions(self):
        bindings = Bindings({"food": "donut"}, {"food": True, "-l": True})
        self.assertEqual(bindings["food"], "donut")
        self.assertEqual(list(bindings), ["food", "-l"])
        self.assertEqual(len(bindings), 2)

    def testViewsAreReadOnly(self):
        bindings = Bindings({"food": "donut"})
        with self.assertRaises(TypeError):
            bindings.parameters["food"] = "bagel"  # type: ignore[index]


if __name__ == "__main__":
    unittest.main()
