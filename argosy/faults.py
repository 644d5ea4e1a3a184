"""
Argosy faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue, grouped by
  domain (names, registry, parsing, warnings) so logs and searches stay predictable.
- ParserException / ParserWarning: base types carrying a message plus a read-only
  options mapping, able to render themselves with rich.
- trigger(): single entry point to surface a fault (raise/warn in library mode,
  print in shell mode).

UX goals
- Token-first messages: parsing faults always quote the offending token.
- Short lowercased titles, one-sentence bodies, a single hint.

Integration
- The normalizer, registry and values layers raise faults through trigger()
  with library defaults; the parser adds its runtime options (prog, shell, fancy,
  colorful) before triggering, so shell programs get a rendered diagnostic on
  stderr and exit status 1 instead of a traceback.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - names (101xx)
      • INVALID_NAME, NAME_TOO_LONG
    - registry (102xx)
      • ARGUMENT_NOT_FOUND, DUPLICATE_ARGUMENT, PARSER_LOCKED
    - parsing (103xx)
      • UNKNOWN_ARGUMENT, MISSING_VALUE, MISSING_ARGUMENT,
        MALFORMED_BOOLEAN, MALFORMED_INTEGER, INTEGER_OVERFLOW, MALFORMED_FLOAT
    - warnings (121xx)
      • REDEFINED_ARGUMENT
    """
    # --- name errors (101xx) ---
    INVALID_NAME        = 10101
    NAME_TOO_LONG       = 10102

    # --- registry errors (102xx) ---
    ARGUMENT_NOT_FOUND  = 10201
    DUPLICATE_ARGUMENT  = 10202
    PARSER_LOCKED       = 10203

    # --- parsing errors (103xx) ---
    UNKNOWN_ARGUMENT    = 10301
    MISSING_VALUE       = 10302
    MISSING_ARGUMENT    = 10303
    MALFORMED_BOOLEAN   = 10311
    MALFORMED_INTEGER   = 10312
    INTEGER_OVERFLOW    = 10313
    MALFORMED_FLOAT     = 10314

    # --- warnings (121xx) ---
    REDEFINED_ARGUMENT  = 12101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        replace numeric ids with its own labels; otherwise the number is used.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _renderer(fault, palette, kind):
    """
    Build the rich renderable shared by exceptions and warnings.

    Layout is "[ prog — code | Title ]", then the message, then "→ hint". When
    the 'fancy' option is set, the message and hint are wrapped in a Panel
    titled with the header.
    """
    main = __import__("__main__")
    options = fault.options

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), styles[style] if colorful else "")

    prog = options.get("prog") or getattr(main, "__prog__", "argosy")
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(code.normalize() if code is not None else "?", "code"),
        " | ",
        text(str(options.get("title", kind)).title(), kind + "-title"),
        " ]"
    )
    message = text(fault.message, kind + "-message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(options.get("hint"), "hint"))

    if options.get("fancy", False):
        return Panel(Group(message, hint), title=header, title_align="left")
    return Group(header, message, hint)


class ParserException(Exception):
    """
    Base class for every argosy error.

    The message is the human sentence; options holds the structured context
    (title, code, hint, token, key, ...) plus runtime flags merged in by
    trigger(). Options are exposed read-only.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        return _renderer(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, "error")

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from self.options.get("cause")
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class InvalidArgumentError(ParserException): ...
class ArgumentTooLongError(ParserException): ...
class ArgumentNotFoundError(ParserException): ...
class UnknownArgumentError(ArgumentNotFoundError): ...
class DuplicateArgumentError(ParserException): ...
class ParserLockedError(ParserException): ...
class MissingValueError(ParserException): ...
class MissingArgumentError(ParserException): ...
class MalformedValueError(ParserException): ...
class MalformedBooleanError(MalformedValueError): ...
class MalformedIntegerError(MalformedValueError): ...
class IntegerOverflowError(MalformedIntegerError): ...
class MalformedFloatError(MalformedValueError): ...


class ParserWarning(ABC, Warning):
    """
    Base class for argosy warnings; same shape as ParserException.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        return _renderer(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "warning-title": "bold #FFC2E0",
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, "warning")

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RedefinedArgumentWarning(ParserWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    - library mode raises exceptions (chained to options["cause"] when given)
      and emits warnings; shell mode prints through the rich console and exits
      with status 1 on exceptions.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ParserException",
    "InvalidArgumentError",
    "ArgumentTooLongError",
    "ArgumentNotFoundError",
    "UnknownArgumentError",
    "DuplicateArgumentError",
    "ParserLockedError",
    "MissingValueError",
    "MissingArgumentError",
    "MalformedValueError",
    "MalformedBooleanError",
    "MalformedIntegerError",
    "IntegerOverflowError",
    "MalformedFloatError",
    "ParserWarning",
    "RedefinedArgumentWarning",
    "trigger",
)
