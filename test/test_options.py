# python
"""
Options behavioral tests (construction, normalization, factories).

Scope
- Validate names, dest and display derivation.
- Validate action/nargs normalization and their compatibility rules.
- Validate kinds, choices, defaults and presentation metadata.
- Validate immutability and replace().

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argosy import Action, Kind, Option, option, flag, argument


class TestOptionNames(TestCase):
    """Behavioral tests for names, dest and display."""

    def testSpaceSeparatedNames(self):
        spec = Option("o output")
        self.assertEqual(spec.names, ("o", "output"))
        self.assertEqual(spec.dest, "o")
        self.assertEqual(spec.display, "-o, --output")
        self.assertEqual(str(spec), "-o, --output")

    def testSeveralNameArguments(self):
        self.assertEqual(Option("dry-run", "n").names, ("dry-run", "n"))

    def testExplicitDest(self):
        self.assertEqual(Option("o output", dest="out").dest, "out")

    def testPositionalDisplayIsBare(self):
        self.assertEqual(Option("source", positional=True).display, "source")

    def testNamesRequired(self):
        with self.assertRaises(TypeError):
            Option()

    def testNamesRejected(self):
        for names in (("",), ("-o",), ("--output",), ("1abc",), ("o o",), ("a_b",)):
            with self.assertRaises(ValueError, msg=names):
                Option(*names)
        with self.assertRaises(TypeError):
            Option(1)

    def testDestRejected(self):
        with self.assertRaises(ValueError):
            Option("o", dest="  ")
        with self.assertRaises(TypeError):
            Option("o", dest=3)

    def testMatches(self):
        spec = Option("o output")
        self.assertTrue(spec.matches("o"))
        self.assertTrue(spec.matches("output"))
        self.assertFalse(spec.matches("out"))


class TestOptionBehavior(TestCase):
    """Behavioral tests for action and nargs normalization."""

    def testDefaults(self):
        spec = Option("o")
        self.assertIs(spec.action, Action.STORE)
        self.assertEqual(spec.nargs, 1)
        self.assertIsNone(spec.default)
        self.assertIs(spec.type, Kind.UNTYPED)
        self.assertEqual(spec.choices, ())
        self.assertFalse(spec.required)
        self.assertFalse(spec.positional)
        self.assertIsNone(spec.descr)
        self.assertEqual(spec.metavar, ())

    def testActionByName(self):
        self.assertIs(Option("v", action="store-true").action, Action.STORE_TRUE)
        with self.assertRaises(ValueError):
            Option("v", action="count")
        with self.assertRaises(TypeError):
            Option("v", action=3)

    def testNullaryActionsDefaultToZero(self):
        self.assertEqual(Option("v", action=Action.STORE_TRUE).nargs, 0)
        self.assertEqual(Option("v", action=Action.HELP).nargs, 0)

    def testCustomActionDefaultsToZero(self):
        def action(parser, option, args):
            return args

        spec = Option("x", action=action)
        self.assertIs(spec.action, action)
        self.assertEqual(spec.nargs, 0)

    def testNargsNormalization(self):
        self.assertEqual(Option("o", nargs="3").nargs, 3)
        self.assertEqual(Option("o", nargs="R").nargs, "r")
        for nargs in ("?", "*", "+", "r"):
            self.assertEqual(Option("o", nargs=nargs).nargs, nargs)

    def testNargsRejected(self):
        with self.assertRaises(ValueError):
            Option("o", nargs=-1)
        with self.assertRaises(ValueError):
            Option("o", nargs="many")
        with self.assertRaises(TypeError):
            Option("o", nargs=True)
        with self.assertRaises(TypeError):
            Option("o", nargs=1.5)

    def testIncompatibleActionAndArity(self):
        with self.assertRaises(TypeError):
            Option("v", action=Action.STORE_TRUE, nargs=1)
        with self.assertRaises(TypeError):
            Option("o", action=Action.STORE, nargs=0)

    def testAppendAllowsZero(self):
        self.assertEqual(Option("d", action=Action.APPEND, nargs=0).nargs, 0)


class TestOptionValues(TestCase):
    """Behavioral tests for kinds, choices and defaults."""

    def testKindFromBuiltin(self):
        self.assertIs(Option("n", type=int).type, Kind.INTEGER)
        self.assertIs(Option("n", type="uint").type, Kind.UNSIGNED)

    def testChoicesKeepOrder(self):
        self.assertEqual(Option("m", choices=["b", "a"]).choices, ("b", "a"))

    def testChoicesFromSetAreSorted(self):
        self.assertEqual(Option("m", choices={"b", "a"}).choices, ("a", "b"))

    def testChoicesRejected(self):
        with self.assertRaises(TypeError):
            Option("m", choices="ab")
        with self.assertRaises(TypeError):
            Option("m", choices=[1, 2])
        with self.assertRaises(ValueError):
            Option("m", choices=["a", "a"])

    def testDerivedDefaults(self):
        self.assertIs(Option("v", action=Action.STORE_TRUE).default, False)
        self.assertIs(Option("q", action=Action.STORE_FALSE).default, True)
        self.assertEqual(Option("o", default="x").default, "x")

    def testDefaultListIsCopied(self):
        spec = Option("o", nargs="*", default=["a"])
        spec.default.append("b")
        self.assertEqual(spec.default, ["a"])

    def testPresentationMetadata(self):
        spec = Option("o", descr="  output file  ", metavar="FILE")
        self.assertEqual(spec.descr, "output file")
        self.assertEqual(spec.metavar, ("FILE",))
        self.assertEqual(Option("p", nargs=2, metavar=("X", "Y")).metavar, ("X", "Y"))

    def testPresentationRejected(self):
        with self.assertRaises(ValueError):
            Option("o", descr=" ")
        with self.assertRaises(TypeError):
            Option("o", descr=1)
        with self.assertRaises(ValueError):
            Option("o", metavar=("",))
        with self.assertRaises(TypeError):
            Option("o", metavar=1)


class TestOptionImmutability(TestCase):
    """Behavioral tests for read-only fields, replace() and repr."""

    def testFieldsAreReadOnly(self):
        spec = Option("o")
        with self.assertRaises(AttributeError):
            spec.dest = "other"

    def testReplaceRevalidates(self):
        spec = Option("o output", dest="out")
        changed = spec.replace(nargs="+", required=True)
        self.assertEqual(changed.nargs, "+")
        self.assertTrue(changed.required)
        self.assertEqual(changed.dest, "out")
        self.assertEqual(spec.nargs, 1)
        with self.assertRaises(TypeError):
            spec.replace(nargs=0)

    def testReplaceFollowsDerivations(self):
        spec = Option("v").replace(action=Action.STORE_TRUE)
        self.assertEqual(spec.nargs, 0)
        self.assertIs(spec.default, False)

    def testReplaceNames(self):
        self.assertEqual(Option("o").replace(names="x extra").names, ("x", "extra"))

    def testRepr(self):
        self.assertTrue(repr(Option("o")).startswith("option(names=('o',), dest='o'"))


class TestFactories(TestCase):
    """Behavioral tests for option(), flag() and argument()."""

    def testOption(self):
        self.assertEqual(option("o", nargs=2).nargs, 2)

    def testFlag(self):
        spec = flag("v verbose")
        self.assertIs(spec.action, Action.STORE_TRUE)
        self.assertEqual(spec.nargs, 0)
        self.assertIs(spec.default, False)

    def testFlagWithOtherConstAction(self):
        spec = flag("q quiet", action=Action.STORE_FALSE)
        self.assertIs(spec.default, True)

    def testArgument(self):
        spec = argument("source")
        self.assertTrue(spec.positional)
        self.assertEqual(spec.nargs, 1)
        self.assertIs(spec.action, Action.STORE)

    def testArgumentWithArity(self):
        self.assertEqual(argument("files", nargs="+").nargs, "+")


if __name__ == "__main__":
    unittest.main()
