"""
Typed value and value store tests.

Scope
- TypedValue tagged access, payload validation, equality.
- coerce() rules for every declared type and their faults.
- ValueStore absent indicator, freezing and payload export.

Conventions
- Test method names follow CamelCase per project convention.
"""
import math
import unittest
from unittest import TestCase

from argosy import (
    INT64_MAX,
    INT64_MIN,
    ArgType,
    ArgumentSpec,
    FaultCode,
    IntegerOverflowError,
    MalformedBooleanError,
    MalformedFloatError,
    MalformedIntegerError,
    MalformedValueError,
    TypedValue,
    ValueStore,
    coerce,
)


class TestTypedValue(TestCase):

    def testTaggedAccess(self):
        value = TypedValue(ArgType.INT, 12398)
        self.assertEqual(value.integer, 12398)
        self.assertEqual(value.value, 12398)
        self.assertIs(value.type, ArgType.INT)

    def testWrongVariantRejected(self):
        value = TypedValue(ArgType.BOOL, False)
        for accessor in ("string", "integer", "float"):
            with self.subTest(accessor=accessor), self.assertRaises(TypeError):
                getattr(value, accessor)
        self.assertIs(value.boolean, False)

    def testPayloadMustMatchTag(self):
        with self.assertRaises(TypeError):
            TypedValue(ArgType.INT, True)
        with self.assertRaises(TypeError):
            TypedValue(ArgType.FLOAT, 1)
        with self.assertRaises(TypeError):
            TypedValue(ArgType.STRING, b"raw")
        with self.assertRaises(TypeError):
            TypedValue(ArgType.BOOL, 1)

    def testIntegerRange(self):
        self.assertEqual(TypedValue(ArgType.INT, INT64_MAX).integer, INT64_MAX)
        self.assertEqual(TypedValue(ArgType.INT, INT64_MIN).integer, INT64_MIN)
        with self.assertRaises(OverflowError):
            TypedValue(ArgType.INT, INT64_MAX + 1)

    def testEqualityIncludesTag(self):
        self.assertEqual(TypedValue(ArgType.INT, 1), TypedValue(int, 1))
        self.assertNotEqual(TypedValue(ArgType.INT, 1), TypedValue(ArgType.FLOAT, 1.0))
        self.assertNotEqual(TypedValue(ArgType.STRING, "1"), "1")

    def testImmutable(self):
        value = TypedValue(ArgType.STRING, "x")
        with self.assertRaises(AttributeError):
            value.value = "y"

    def testRepr(self):
        self.assertEqual(repr(TypedValue(ArgType.STRING, "x")), "TypedValue(STRING, 'x')")


class TestCoerce(TestCase):

    def setUp(self):
        self.string = ArgumentSpec("repo", "repository")
        self.integer = ArgumentSpec("--num-times", "count", type=ArgType.INT)
        self.float = ArgumentSpec("--ratio", "ratio", type=ArgType.FLOAT)
        self.boolean = ArgumentSpec("--do-it", "switch", type=ArgType.BOOL)

    def testStringVerbatim(self):
        for raw in ("/path/to/repo", "", " spaced ", "--looks-like-a-flag"):
            with self.subTest(raw=raw):
                self.assertEqual(coerce(self.string, raw), TypedValue(ArgType.STRING, raw))

    def testIntegers(self):
        self.assertEqual(coerce(self.integer, "12398").integer, 12398)
        self.assertEqual(coerce(self.integer, "-5").integer, -5)
        self.assertEqual(coerce(self.integer, "+7").integer, 7)
        self.assertEqual(coerce(self.integer, "9223372036854775807").integer, INT64_MAX)
        self.assertEqual(coerce(self.integer, "-9223372036854775808").integer, INT64_MIN)

    def testMalformedIntegers(self):
        for raw in ("", "1.0", "12a", " 5", "0x10", "1_000", "--"):
            with self.subTest(raw=raw), self.assertRaises(MalformedIntegerError) as context:
                coerce(self.integer, raw)
            self.assertIs(context.exception.code, FaultCode.MALFORMED_INTEGER)

    def testIntegerOverflow(self):
        with self.assertRaises(IntegerOverflowError) as context:
            coerce(self.integer, "9223372036854775808")
        self.assertIsInstance(context.exception, MalformedIntegerError)
        self.assertIs(context.exception.code, FaultCode.INTEGER_OVERFLOW)

    def testFloats(self):
        self.assertEqual(coerce(self.float, "3.14").float, 3.14)
        self.assertEqual(coerce(self.float, "1e3").float, 1000.0)
        self.assertEqual(coerce(self.float, "-2").float, -2.0)
        self.assertTrue(math.isinf(coerce(self.float, "inf").float))

    def testMalformedFloats(self):
        for raw in ("", "abc", " 1.0", "1.0 ", "1,5"):
            with self.subTest(raw=raw), self.assertRaises(MalformedFloatError):
                coerce(self.float, raw)

    def testBooleans(self):
        for raw in ("true", "yes", "1"):
            with self.subTest(raw=raw):
                self.assertIs(coerce(self.boolean, raw).boolean, True)
        for raw in ("false", "no", "0"):
            with self.subTest(raw=raw):
                self.assertIs(coerce(self.boolean, raw).boolean, False)

    def testBooleansAreCaseSensitive(self):
        for raw in ("True", "YES", "", "on", "2"):
            with self.subTest(raw=raw), self.assertRaises(MalformedBooleanError):
                coerce(self.boolean, raw)

    def testFaultContext(self):
        with self.assertRaises(MalformedValueError) as context:
            coerce(self.boolean, "maybe", token="--do-it", index=1)
        options = context.exception.options
        self.assertEqual(options["token"], "--do-it")
        self.assertEqual(options["value"], "maybe")
        self.assertEqual(options["index"], 1)
        self.assertIs(options["argument"], self.boolean)
        self.assertIn("'maybe'", str(context.exception))


class TestValueStore(TestCase):

    def setUp(self):
        self.store = ValueStore()

    def testAbsentKeyIsNone(self):
        self.assertIsNone(self.store.get("missing"))
        self.assertNotIn("missing", self.store)

    def testPutOverwrites(self):
        self.store.put("n", TypedValue(ArgType.INT, 1))
        self.store.put("n", TypedValue(ArgType.INT, 2))
        self.assertEqual(self.store.get("n"), TypedValue(ArgType.INT, 2))
        self.assertEqual(len(self.store), 1)

    def testOnlyTypedValues(self):
        with self.assertRaises(TypeError):
            self.store.put("n", 1)

    def testFrozen(self):
        self.store.put("n", TypedValue(ArgType.INT, 1))
        self.store.freeze()
        self.assertTrue(self.store.frozen)
        with self.assertRaises(RuntimeError):
            self.store.put("m", TypedValue(ArgType.INT, 2))
        with self.assertRaises(RuntimeError):
            self.store.clear()
        self.assertEqual(self.store.get("n").integer, 1)

    def testAsDict(self):
        self.store.put("repo", TypedValue(ArgType.STRING, "/r"))
        self.store.put("verbose", TypedValue(ArgType.BOOL, True))
        self.assertEqual(self.store.as_dict(), {"repo": "/r", "verbose": True})
        self.assertEqual(list(self.store), ["repo", "verbose"])


if __name__ == "__main__":
    unittest.main()
