# python
"""
Namespace behavioral tests (storage, lookups, typed accessors).

Scope
- Validate set/get/exists/require/update semantics.
- Validate typed accessors and their failures.
- Validate mapping-style protocol and representation.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argosy import Namespace, InvalidTypeError, MissingOptionError


class TestNamespaceStorage(TestCase):
    """Behavioral tests for reading and writing values."""

    def testSetAndGet(self):
        namespace = Namespace().set("out", "file.txt")
        self.assertEqual(namespace.get("out"), "file.txt")
        self.assertEqual(namespace["out"], "file.txt")

    def testMissingKeyRaises(self):
        with self.assertRaises(KeyError):
            Namespace().get("out")
        with self.assertRaises(KeyError):
            Namespace()["out"]

    def testMissingKeyWithFallback(self):
        self.assertIsNone(Namespace().get("out", None))
        self.assertEqual(Namespace().get("out", "x"), "x")

    def testSetOverwrites(self):
        namespace = Namespace({"out": "a"}).set("out", "b")
        self.assertEqual(namespace["out"], "b")
        self.assertEqual(len(namespace), 1)

    def testSetRejectsNonStringKeys(self):
        with self.assertRaises(TypeError):
            Namespace().set(1, "x")

    def testExists(self):
        namespace = Namespace({"flag": False})
        self.assertTrue(namespace.exists("flag"))
        self.assertIn("flag", namespace)
        self.assertFalse(namespace.exists("other"))

    def testRequire(self):
        namespace = Namespace({"a": 1, "b": None})
        self.assertIs(namespace.require("a", "b"), namespace)
        with self.assertRaises(MissingOptionError) as context:
            namespace.require("a", "c", "d")
        self.assertEqual(str(context.exception), 'option "c" required')

    def testUpdateMergesNamespacesAndMappings(self):
        namespace = Namespace({"a": 1})
        namespace.update(Namespace({"b": 2})).update({"a": 3})
        self.assertEqual(namespace, {"a": 3, "b": 2})

    def testUpdateRejectsOtherTypes(self):
        with self.assertRaises(TypeError):
            Namespace().update([("a", 1)])


class TestNamespaceAccessors(TestCase):
    """Behavioral tests for the typed accessors."""

    def setUp(self):
        self.namespace = Namespace({
            "name": "world",
            "items": ["a", "b"],
            "flag": True,
            "spelled": "false",
            "count": "-12",
            "size": "12",
            "ratio": "0.5",
        })

    def testString(self):
        self.assertEqual(self.namespace.string("name"), "world")
        with self.assertRaises(InvalidTypeError):
            self.namespace.string("items")

    def testSequenceReturnsCopy(self):
        items = self.namespace.sequence("items")
        items.append("c")
        self.assertEqual(self.namespace["items"], ["a", "b"])
        with self.assertRaises(InvalidTypeError):
            self.namespace.sequence("name")

    def testBoolean(self):
        self.assertIs(self.namespace.boolean("flag"), True)
        self.assertIs(self.namespace.boolean("spelled"), False)
        with self.assertRaises(InvalidTypeError):
            self.namespace.boolean("name")

    def testNumbers(self):
        self.assertEqual(self.namespace.integer("count"), -12)
        self.assertEqual(self.namespace.unsigned("size"), 12)
        self.assertEqual(self.namespace.floating("ratio"), 0.5)

    def testNumberMismatches(self):
        with self.assertRaises(InvalidTypeError):
            self.namespace.unsigned("count")
        with self.assertRaises(InvalidTypeError):
            self.namespace.integer("ratio")
        with self.assertRaises(InvalidTypeError):
            self.namespace.integer("flag")

    def testAccessorOnMissingKey(self):
        with self.assertRaises(KeyError):
            self.namespace.string("absent")


class TestNamespaceProtocol(TestCase):
    """Behavioral tests for mapping-style access and representation."""

    def testIterationKeepsInsertionOrder(self):
        namespace = Namespace().set("b", 1).set("a", 2)
        self.assertEqual(list(namespace), ["b", "a"])
        self.assertEqual(list(namespace.keys()), ["b", "a"])
        self.assertEqual(list(namespace.values()), [1, 2])
        self.assertEqual(list(namespace.items()), [("b", 1), ("a", 2)])

    def testEquality(self):
        self.assertEqual(Namespace({"a": 1}), Namespace({"a": 1}))
        self.assertNotEqual(Namespace({"a": 1}), Namespace({"a": 2}))
        self.assertNotEqual(Namespace(), [])

    def testUnhashable(self):
        with self.assertRaises(TypeError):
            hash(Namespace())

    def testRepr(self):
        self.assertEqual(repr(Namespace({"out": "x", "n": None})), "namespace(out='x', n=None)")


if __name__ == "__main__":
    unittest.main()
