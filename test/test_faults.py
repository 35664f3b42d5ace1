# python
"""
Faults behavioral tests (codes, rendering, triggering).

Scope
- Validate FaultCode normalization and getdoc lookups.
- Validate fault options, __replace__ and rich rendering.
- Validate trigger() in library mode (raise/warn) and shell mode (render/exit).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
import warnings
from contextlib import redirect_stderr
from unittest import TestCase

from rich.console import Console

from argosy import (
    Parser,
    FaultCode,
    ParserException,
    ParserSignal,
    ParserWarning,
    InvalidOptionError,
    MissingOptionError,
    ShowHelpSignal,
    MultipleRemaindersWarning,
    trigger,
    getdoc,
)


def render(fault):
    console = Console(file=io.StringIO(), width=100, color_system=None)
    console.print(fault)
    return console.file.getvalue()


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode helpers."""

    def testNormalizeDefaultsToNumericValue(self):
        self.assertEqual(FaultCode.INVALID_OPTION.normalize(), "11111")

    def testGetDocWithoutHostMapping(self):
        self.assertIsNone(getdoc(FaultCode.MISSING_OPTION))

    def testGetDocRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(11111)


class TestFaults(TestCase):
    """Behavioral tests for fault construction and rendering."""

    def testHierarchy(self):
        self.assertTrue(issubclass(InvalidOptionError, ParserException))
        self.assertTrue(issubclass(ShowHelpSignal, ParserSignal))
        self.assertFalse(issubclass(ShowHelpSignal, ParserException))
        self.assertTrue(issubclass(MultipleRemaindersWarning, ParserWarning))
        self.assertTrue(issubclass(MultipleRemaindersWarning, Warning))

    def testMessageAndOptions(self):
        error = InvalidOptionError('invalid option "z"', code=FaultCode.INVALID_OPTION, input="z")
        self.assertEqual(str(error), 'invalid option "z"')
        self.assertEqual(error.message, 'invalid option "z"')
        self.assertEqual(error.options["input"], "z")
        with self.assertRaises(TypeError):
            error.options["input"] = "y"

    def testReplaceMergesOptions(self):
        error = MissingOptionError("boom", code=FaultCode.MISSING_OPTION, hint="old")
        replaced = error.__replace__(hint="new", shell=False)
        self.assertIsInstance(replaced, MissingOptionError)
        self.assertEqual(replaced.message, "boom")
        self.assertEqual(replaced.options["hint"], "new")
        self.assertEqual(replaced.options["code"], FaultCode.MISSING_OPTION)
        self.assertEqual(error.options["hint"], "old")

    def testRenderShowsHeaderMessageAndHint(self):
        parser = Parser(prog="tool")
        error = InvalidOptionError(
            'invalid option "z"',
            title="invalid option",
            code=FaultCode.INVALID_OPTION,
            parser=parser,
            hint="did you mean -x?",
        )
        output = render(error)
        self.assertIn("tool", output)
        self.assertIn("11111", output)
        self.assertIn("Invalid Option", output)
        self.assertIn('invalid option "z"', output)
        self.assertIn("did you mean -x?", output)

    def testRenderFancyUsesPanel(self):
        error = InvalidOptionError("bad", parser=Parser(prog="tool"), fancy=True)
        output = render(error)
        self.assertIn("╭", output)
        self.assertIn("bad", output)


class TestTrigger(TestCase):
    """Behavioral tests for trigger() in library and shell mode."""

    def testLibraryModeRaisesErrors(self):
        with self.assertRaises(InvalidOptionError):
            trigger(InvalidOptionError("bad"), shell=False)

    def testLibraryModeRaisesSignals(self):
        with self.assertRaises(ShowHelpSignal):
            trigger(ShowHelpSignal())

    def testLibraryModeWarns(self):
        with self.assertWarns(MultipleRemaindersWarning):
            trigger(MultipleRemaindersWarning("twice"))

    def testShellModeErrorExitsWithStatusOne(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            trigger(InvalidOptionError("bad option"), shell=True)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("bad option", stderr.getvalue())

    def testShellModeErrorShowsParserHelp(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(SystemExit):
            trigger(InvalidOptionError("bad option"), shell=True, parser=Parser(prog="tool"))
        self.assertIn("usage: tool", stderr.getvalue())

    def testShellModeSignalExitsWithStatusZero(self):
        with self.assertRaises(SystemExit) as context:
            trigger(ShowHelpSignal(), shell=True)
        self.assertEqual(context.exception.code, 0)

    def testShellModeWarningPrints(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr), warnings.catch_warnings():
            warnings.simplefilter("error")
            trigger(MultipleRemaindersWarning("twice"), shell=True)
        self.assertIn("twice", stderr.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("nope"))


if __name__ == "__main__":
    unittest.main()
