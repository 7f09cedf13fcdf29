"""
Tests for the shared utilities.

This module verifies:
- The `Unset` sentinel (singleton identity, falsy semantics, copying, finality).
- coalesce() resolving only Unset.
- mirror() read-only properties handing out copies of builtin containers.
- pluralize() and ordinal() wording used in user-facing messages.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from argot.signatures import Signature
from argot.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the module-level instance on every call.
        """
        self.assertIs(UnsetType(), Unset)

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))

    def testNotEqualToNone(self) -> None:
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testUnionInIsinstance(self) -> None:
        """
        `str | Unset` is usable as an isinstance() target from either side.
        """
        self.assertTrue(isinstance("x", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance(Unset, Unset | str))
        self.assertFalse(isinstance(3, str | Unset))

    def testCopyDeepcopyPickle(self) -> None:
        """
        Copies and pickle round-trips preserve the identity of the sentinel.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Sub(UnsetType):  # NOQA: F-841
                pass


class CoalesceTest(TestCase):

    def testUnsetIsReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testOtherFalsyValuesArePreserved(self) -> None:
        for value in (None, 0, "", []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class MirrorTest(TestCase):
    """
    mirror() exposes "_name" read-only, copying builtin containers.
    """

    class Holder:
        names = mirror("names")
        table = mirror("table")
        signature = mirror("signature")

        def __init__(self) -> None:
            self._names = ["-l", "--loudly"]
            self._table = {"food": ["donut"]}
            self._signature = Signature.parse("<food>")

    def testListsBecomeTuples(self) -> None:
        self.assertEqual(self.Holder().names, ("-l", "--loudly"))

    def testDictsAreCopied(self) -> None:
        holder = self.Holder()
        holder.table["food"] = "bagel"
        self.assertEqual(holder.table, {"food": ("donut",)})

    def testDomainSequencesAreReturnedAsIs(self) -> None:
        holder = self.Holder()
        self.assertIs(holder.signature, holder._signature)

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.Holder().names = ()

    def testNameMustBeAString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


class RenameTest(TestCase):

    def testDirectAndDecoratorForms(self) -> None:
        function = rename(lambda: None, "handler")
        self.assertEqual(function.__name__, "handler")

        @rename("wrapper")
        def inner():
            pass

        self.assertEqual(inner.__qualname__, "wrapper")

    def testArgumentValidation(self) -> None:
        with self.assertRaises(TypeError):
            rename(42, "x")
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)
        with self.assertRaises(TypeError):
            rename()


class WordingTest(TestCase):
    """
    Wording helpers used in fault messages.
    """

    def testPluralize(self) -> None:
        self.assertEqual(pluralize("argument", 1), "argument")
        self.assertEqual(pluralize("argument", 0), "arguments")
        self.assertEqual(pluralize("alias", 2), "aliases")
        self.assertEqual(pluralize("entry", 2), "entries")
        self.assertEqual(pluralize("day", 2), "days")

    def testOrdinalWords(self) -> None:
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(2), "second")
        self.assertEqual(ordinal(10), "tenth")

    def testOrdinalSuffixes(self) -> None:
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(13), "13th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(111), "111th")
        self.assertEqual(ordinal(101), "101st")


if __name__ == "__main__":
    unittest.main()
