"""
Typed values produced by parsing.

- TypedValue: tagged union over str, 64-bit signed int, 64-bit float and bool.
  The tag is an ArgType; variant accessors (.string, .integer, .float, .boolean)
  check the tag so a value can never be read as the wrong variant.
- coerce(spec, raw): convert a raw token according to the spec's declared type.
- ValueStore: canonical key -> TypedValue mapping filled during one parse pass
  and frozen once the parser locks.
"""
import re
from collections.abc import Mapping

from .arguments import ArgType
from .faults import *

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

TRUTHY = frozenset({"true", "yes", "1"})
FALSY = frozenset({"false", "no", "0"})

_payloads = {
    ArgType.STRING: str,
    ArgType.INT: int,
    ArgType.FLOAT: float,
    ArgType.BOOL: bool,
}


class TypedValue:
    """
    A single parsed value together with its tag.

    Exactly one variant is active; reading another one raises TypeError.

    Example
        >>> value = TypedValue(ArgType.INT, 12398)
        >>> value.integer
        12398
        >>> value.string
        Traceback (most recent call last):
        TypeError: typed value holds 'int', not 'string'
    """

    __slots__ = ("_type", "_value")

    def __init__(self, type, value, /):
        type = ArgType.of(type)
        expected = _payloads[type]
        # bool is an int subclass; only the BOOL variant may carry one.
        if not isinstance(value, expected) or (type is not ArgType.BOOL and isinstance(value, bool)):
            raise TypeError(f"{type.value} typed value requires a {expected.__name__} payload")
        if type is ArgType.INT and not INT64_MIN <= value <= INT64_MAX:
            raise OverflowError("int typed value must fit in a signed 64-bit integer")
        object.__setattr__(self, "_type", type)
        object.__setattr__(self, "_value", value)

    def _variant(self, type, label):
        if self._type is not type:
            raise TypeError(f"typed value holds {self._type.value!r}, not {label!r}")
        return self._value

    @property
    def type(self):
        return self._type

    @property
    def value(self):
        return self._value

    @property
    def string(self):
        return self._variant(ArgType.STRING, "string")

    @property
    def integer(self):
        return self._variant(ArgType.INT, "int")

    @property
    def float(self):
        return self._variant(ArgType.FLOAT, "float")

    @property
    def boolean(self):
        return self._variant(ArgType.BOOL, "bool")

    def __setattr__(self, name, value):
        raise AttributeError("typed value is immutable")

    def __eq__(self, other):
        if not isinstance(other, TypedValue):
            return NotImplemented
        return self._type is other._type and self._value == other._value

    def __hash__(self):
        return hash((self._type, self._value))

    def __reduce__(self):
        return type(self), (self._type, self._value)

    def __repr__(self):
        return f"TypedValue({self._type.name}, {self._value!r})"

    def __rich_repr__(self):
        yield self._type.name
        yield self._value


def _to_integer(raw):
    if not re.fullmatch(r"[+-]?[0-9]+", raw):
        raise ValueError(raw)
    return int(raw)


def coerce(spec, raw, /, **options):
    """
    Convert a raw token into a TypedValue of spec.type.

    Rules
    - STRING: the token verbatim.
    - INT: optional sign then ASCII digits, base 10, within the signed 64-bit range.
    - FLOAT: Python float syntax ("3.14", "1e-3", "inf", "nan") without
      surrounding whitespace.
    - BOOL: "true"/"yes"/"1" or "false"/"no"/"0", case-sensitive.

    Faults are surfaced through trigger() with the given options merged in, so
    callers can attach runtime flags and context (token, index, prog, ...).

    Raises
    - MalformedIntegerError / IntegerOverflowError / MalformedFloatError /
      MalformedBooleanError (all MalformedValueError) in library mode.
    """
    name = spec.name

    match spec.type:
        case ArgType.STRING:
            return TypedValue(ArgType.STRING, raw)

        case ArgType.INT:
            try:
                number = _to_integer(raw)
            except ValueError:
                return trigger(MalformedIntegerError(
                    "argument %r expects an integer but got %r" % (name, raw),
                    title="malformed integer",
                    code=FaultCode.MALFORMED_INTEGER,
                    hint="pass a base-10 whole number (for example: %s 42)" % name,
                    value=raw,
                    argument=spec,
                    **options
                ))
            if not INT64_MIN <= number <= INT64_MAX:
                return trigger(IntegerOverflowError(
                    "argument %r value %r does not fit in a signed 64-bit integer" % (name, raw),
                    title="integer overflow",
                    code=FaultCode.INTEGER_OVERFLOW,
                    hint="pass a number between %d and %d" % (INT64_MIN, INT64_MAX),
                    value=raw,
                    argument=spec,
                    **options
                ))
            return TypedValue(ArgType.INT, number)

        case ArgType.FLOAT:
            try:
                if raw != raw.strip():
                    raise ValueError(raw)
                number = float(raw)
            except ValueError:
                return trigger(MalformedFloatError(
                    "argument %r expects a number but got %r" % (name, raw),
                    title="malformed number",
                    code=FaultCode.MALFORMED_FLOAT,
                    hint="pass a decimal number (for example: %s 3.14)" % name,
                    value=raw,
                    argument=spec,
                    **options
                ))
            return TypedValue(ArgType.FLOAT, number)

        case ArgType.BOOL:
            if raw in TRUTHY:
                return TypedValue(ArgType.BOOL, True)
            if raw in FALSY:
                return TypedValue(ArgType.BOOL, False)
            return trigger(MalformedBooleanError(
                "argument %r requires a boolean value but got %r" % (name, raw),
                title="malformed boolean",
                code=FaultCode.MALFORMED_BOOLEAN,
                hint="use one of true/yes/1 or false/no/0 (case-sensitive)",
                value=raw,
                argument=spec,
                **options
            ))


class ValueStore(Mapping):
    """
    Canonical key -> TypedValue mapping owned by a parser.

    get(key) returns None for keys that were never populated. The store is
    written only by the parse engine through put(); freeze() closes it when the
    parser locks.
    """

    def __init__(self):
        self._values = {}
        self._frozen = False

    @property
    def frozen(self):
        return self._frozen

    def put(self, key, value, /):
        if self._frozen:
            raise RuntimeError("value store is frozen")
        if not isinstance(value, TypedValue):
            raise TypeError("value store only holds typed values")
        self._values[key] = value

    def clear(self):
        if self._frozen:
            raise RuntimeError("value store is frozen")
        self._values.clear()

    def freeze(self):
        self._frozen = True

    def as_dict(self):
        """
        Return a plain {key: payload} dict of the stored values.
        """
        return {key: value.value for key, value in self._values.items()}

    def __getitem__(self, key):
        return self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"ValueStore({self._values!r})"

    def __rich_repr__(self):
        yield from self._values.items()


__all__ = (
    "INT64_MIN",
    "INT64_MAX",
    "TypedValue",
    "ValueStore",
    "coerce",
)
