"""
Argosy parse engine.

ArgumentParser owns one Registry and one ValueStore. Callers register
arguments, call parse() once, then read the typed results:

    from argosy import ArgumentParser, ArgType

    parser = ArgumentParser("tool")
    parser.add_argument("--num-times", "how many times to run", type=ArgType.INT)
    parser.add_argument("--verbose", "chatty output", action="store_true")
    parser.parse(["--num-times", "3", "--verbose"])
    parser.get("num_times").integer   # 3
    parser["verbose"]                 # True

Parsing is a single left-to-right pass:
- each token is normalized and resolved against the registry;
- a "store" argument consumes the next token, coerced to its declared type;
- any other action records a boolean True without consuming a token;
- a repeated argument overwrites the earlier value (last occurrence wins).

A successful pass locks the parser: further register() or parse() calls fail
with ParserLockedError. A failed pass raises a typed fault, leaves the values
stored so far in place, and keeps the parser active.

Runtime flags
- shell: render faults with rich on stderr and exit(1) instead of raising.
- fancy: wrap rendered faults in a panel.
- colorful: colour rendered faults.
- redefine: collision policy of the registry (see argosy.registry).
"""
import enum
import os.path
import shlex
import sys
from collections.abc import Iterable

from .arguments import STORE, ArgType, ArgumentSpec
from .faults import *
from .names import normalize
from .registry import Registry
from .utils import *
from .values import TypedValue, ValueStore, coerce


class State(enum.Enum):
    ACTIVE = "active"
    LOCKED = "locked"


def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def _tokenize(prompt):
    """
    Turn a parse() input into a list of tokens.

    - Unset: sys.argv[1:] (the program name is excluded).
    - str: shell-like string split with shlex.split.
    - Iterable[str]: used as is, in order.
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


class ArgumentParser:
    """
    Registry + value store + the parse pass that connects them.

    Parameters
    - prog: Unset | str
      Program name shown in rendered faults; defaults to __prog__ in __main__,
      then to the basename of sys.argv[0].
    - redefine: bool
      True lets a later registration replace a colliding one (with a warning);
      False rejects it with DuplicateArgumentError.
    - shell, fancy, colorful: fault rendering flags (see module docstring).
    """

    def __init__(self, prog=Unset, /, *, redefine=True, shell=False, fancy=False, colorful=True):
        if not isinstance(prog, str | Unset):
            raise TypeError("parser 'prog' must be a string")
        self._prog = coalesce(prog, getattr(__import__("__main__"), "__prog__", None))
        if self._prog is None:
            self._prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "argosy"
        self._registry = Registry(redefine=redefine)
        self._store = ValueStore()
        self._state = State.ACTIVE
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

    prog = mirror("prog")
    registry = mirror("registry")
    store = mirror("store")
    state = mirror("state")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    @property
    def locked(self):
        return self._state is State.LOCKED

    def _options(self, **context):
        return {
            "prog": self._prog,
            "shell": self._shell,
            "fancy": self._fancy,
            "colorful": self._colorful,
        } | context

    def _ensure_active(self, action):
        if self._state is State.LOCKED:
            trigger(ParserLockedError(
                "cannot %s once arguments have been parsed" % action,
                title="parser locked",
                code=FaultCode.PARSER_LOCKED,
                hint="create a new parser to parse another argument list",
                **self._options()
            ))

    def register(self, spec, /):
        """
        Register a prebuilt ArgumentSpec and return its canonical key.
        """
        self._ensure_active("register %r" % (getattr(spec, "name", spec),))
        return self._registry.register(spec, **self._options())

    def add_argument(
            self,
            name,
            help,
            /,
            default=Unset,
            action=STORE,
            metavar=Unset,
            type=ArgType.STRING,
            *,
            required=False,
    ):
        """
        Build an ArgumentSpec from the given metadata, register it and return
        its canonical key.
        """
        return self.register(ArgumentSpec(
            name,
            help,
            default=default,
            action=action,
            metavar=metavar,
            type=type,
            required=required,
        ))

    def lookup(self, key, /):
        """
        Return the ArgumentSpec registered under the canonical key.

        Raises ArgumentNotFoundError when nothing is registered under key.
        """
        return self._registry.lookup(key, **self._options())

    def get(self, key, /):
        """
        Return the TypedValue parsed for key, or None when it was never populated.
        """
        return self._store.get(key)

    def resolve(self, key, /):
        """
        Return the parsed payload for key, falling back to the spec's default.

        The default string is coerced to the declared type; None is returned when
        the argument was not parsed and has no default.

        Raises ArgumentNotFoundError when key is not registered.
        """
        spec = self.lookup(key)
        if (value := self._store.get(key)) is not None:
            return value.value
        if spec.default is None:
            return None
        return coerce(spec, spec.default, **self._options(token=spec.name)).value

    def __getitem__(self, key):
        return self._store[key].value

    def __contains__(self, key):
        return key in self._store

    def parse(self, tokens=Unset, /):
        """
        Parse tokens into the value store and lock the parser.

        Parameters
        - tokens: Unset (read sys.argv[1:]), a shell-like str, or an iterable of str.

        Returns
        - ValueStore: the populated, now frozen, store.

        Raises
        - ParserLockedError: a previous parse succeeded.
        - InvalidArgumentError / ArgumentTooLongError: a token cannot be normalized.
        - UnknownArgumentError: a token resolves to no registered argument.
        - MissingValueError: a "store" argument is the last token.
        - MalformedValueError subclasses: a value cannot be coerced.
        - MissingArgumentError: a required argument never appeared.
        """
        self._ensure_active("parse again")
        tokens = _tokenize(tokens)
        self._store.clear()

        index = 0
        while index < len(tokens):
            token = tokens[index]
            position = index + 1

            key = normalize(token, **self._options(index=position))

            try:
                spec = self._registry.lookup(key)
            except ArgumentNotFoundError as error:
                trigger(UnknownArgumentError(
                    "unknown argument %r at %s position" % (token, _ordinal(position)),
                    title="unknown argument",
                    code=FaultCode.UNKNOWN_ARGUMENT,
                    hint="check the spelling; registered arguments are %s" % (
                        ", ".join(repr(known.name) for known in self._registry.values()) or "none"
                    ),
                    **self._options(token=token, key=key, index=position, cause=error)
                ))

            if spec.stores:
                index += 1
                if index >= len(tokens):
                    trigger(MissingValueError(
                        "argument %r at %s position requires a value" % (token, _ordinal(position)),
                        title="missing value",
                        code=FaultCode.MISSING_VALUE,
                        hint="pass the value after a space (for example: %s <%s>)" % (
                            token, spec.metavar or spec.type.value
                        ),
                        **self._options(token=token, key=key, index=position, argument=spec)
                    ))
                value = coerce(spec, tokens[index], **self._options(token=token, key=key, index=position))
            else:
                value = TypedValue(ArgType.BOOL, True)

            self._store.put(key, value)
            index += 1

        for key, spec in self._registry.items():
            if spec.required and key not in self._store:
                trigger(MissingArgumentError(
                    "required argument %r was not given" % spec.name,
                    title="missing argument",
                    code=FaultCode.MISSING_ARGUMENT,
                    hint="add %s to the command line" % spec.name,
                    **self._options(key=key, argument=spec)
                ))

        self._registry.lock()
        self._store.freeze()
        self._state = State.LOCKED
        return self._store

    def __repr__(self):
        return f"ArgumentParser(prog={self._prog!r}, state={self._state.value!r}, arguments={list(self._registry)!r})"

    def __rich_repr__(self):
        yield "prog", self._prog
        yield "state", self._state
        yield "registry", self._registry
        yield "store", self._store


__all__ = (
    "State",
    "ArgumentParser",
)
