"""
Fault tests (codes, triggering, rendering).

Scope
- FaultCode normalization and host remapping through __main__.__codes__.
- trigger() contract: raising, chaining, warnings, option merging.
- Rich rendering of exceptions and warnings (plain and fancy).

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import sys
import unittest
import warnings
from unittest import TestCase, mock

from rich.console import Console

from argosy import (
    FaultCode,
    MalformedValueError,
    MissingValueError,
    ParserException,
    RedefinedArgumentWarning,
    UnknownArgumentError,
    trigger,
)


def _render(renderable):
    console = Console(color_system=None, force_terminal=False, width=120)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestFaultCode(TestCase):

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNKNOWN_ARGUMENT.normalize(), "10301")

    def testNormalizeHostMapping(self):
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__codes__", {FaultCode.MISSING_VALUE: "E-VALUE"}, create=True):
            self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "E-VALUE")
            self.assertEqual(FaultCode.MISSING_ARGUMENT.normalize(), "10303")

    def testCodesAreUnique(self):
        self.assertEqual(len({code.value for code in FaultCode}), len(FaultCode))


class TestTrigger(TestCase):

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))

    def testRaisesWithMergedOptions(self):
        with self.assertRaises(MissingValueError) as context:
            trigger(MissingValueError("needs a value", code=FaultCode.MISSING_VALUE), token="--n", prog="tool")
        self.assertEqual(context.exception.options["token"], "--n")
        self.assertEqual(context.exception.options["prog"], "tool")
        self.assertEqual(str(context.exception), "needs a value")

    def testChainsCause(self):
        cause = KeyError("n")
        with self.assertRaises(UnknownArgumentError) as context:
            trigger(UnknownArgumentError("unknown"), cause=cause)
        self.assertIs(context.exception.__cause__, cause)

    def testNoCauseSuppressesContext(self):
        with self.assertRaises(MalformedValueError) as context:
            try:
                raise LookupError("inner")
            except LookupError:
                trigger(MalformedValueError("bad"))
        self.assertIsNone(context.exception.__cause__)
        self.assertTrue(context.exception.__suppress_context__)

    def testWarningsAreEmitted(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            trigger(RedefinedArgumentWarning("replaced", code=FaultCode.REDEFINED_ARGUMENT))
        self.assertEqual(len(caught), 1)
        self.assertIsInstance(caught[0].message, RedefinedArgumentWarning)

    def testReplaceKeepsMessage(self):
        fault = ParserException("message", title="title")
        replaced = copy.replace(fault, hint="hint")
        self.assertIsNot(replaced, fault)
        self.assertEqual(replaced.message, "message")
        self.assertEqual(dict(replaced.options), {"title": "title", "hint": "hint"})

    def testOptionsAreReadOnly(self):
        fault = ParserException("message", title="title")
        with self.assertRaises(TypeError):
            fault.options["title"] = "other"


class TestRendering(TestCase):

    def setUp(self):
        self.fault = UnknownArgumentError(
            "unknown argument '--nope' at first position",
            title="unknown argument",
            code=FaultCode.UNKNOWN_ARGUMENT,
            hint="check the spelling",
            prog="tool",
            colorful=False,
        )

    def testPlain(self):
        output = _render(self.fault)
        self.assertIn("[ tool — 10301 | Unknown Argument ]", output)
        self.assertIn("unknown argument '--nope' at first position", output)
        self.assertIn("→ check the spelling", output)

    def testFancy(self):
        output = _render(copy.replace(self.fault, fancy=True))
        self.assertIn("tool", output)
        self.assertIn("unknown argument '--nope' at first position", output)
        self.assertIn("check the spelling", output)

    def testWarning(self):
        warning = RedefinedArgumentWarning(
            "argument 'dry_run' replaces already registered '--dry-run'",
            title="redefined argument",
            code=FaultCode.REDEFINED_ARGUMENT,
            hint="the last registration wins",
            prog="tool",
            colorful=False,
        )
        output = _render(warning)
        self.assertIn("[ tool — 12101 | Redefined Argument ]", output)
        self.assertIn("the last registration wins", output)

    def testColorfulRendersSameText(self):
        colorful = copy.replace(self.fault, colorful=True)
        self.assertEqual(_render(colorful), _render(self.fault))


if __name__ == "__main__":
    unittest.main()
