r"""
Argosy argument specifications.

Overview
- ArgType: the four value types a stored argument can be coerced to
  (STRING, INT, FLOAT, BOOL).
- ArgumentSpec: immutable declaration of one argument (name, help, default,
  action, metavar, type, required).

- Introspection & representation
  • SpecType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties.

Metadata (sanitized on construction)
- name: non-empty string, kept exactly as given ("--num-times"). Its canonical
  key is derived by argosy.names.normalize() at registration time.
- help: non-empty string (trimmed).
- default: Unset | str, becomes None when omitted.
- action: non-empty string; "store" consumes the following token, any other
  marker records a boolean True on presence.
- metavar: Unset | str, becomes None when omitted. Display only.
- type: ArgType, or a name/builtin accepted by ArgType.of().
- required: bool.

Example
    >>> spec = ArgumentSpec("--num-times", "how many times", type=ArgType.INT)
    >>> spec.action
    'store'
"""
import enum
import functools
import operator
import re

from .utils import *

STORE = "store"


class ArgType(enum.Enum):
    """
    Declared value type of an argument.
    """
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"

    @classmethod
    def of(cls, object, /):
        """
        Resolve an ArgType from a member, a member name, or a builtin type.

        - ArgType.INT, "int", "INT", int -> ArgType.INT
        - str -> STRING, float -> FLOAT, bool -> BOOL
        """
        if isinstance(object, cls):
            return object
        if isinstance(object, str):
            try:
                return cls[object.upper()]
            except KeyError:
                try:
                    return cls(object.lower())
                except ValueError:
                    raise ValueError(f"{object!r} is not a valid argument type") from None
        builtins = {str: cls.STRING, int: cls.INT, float: cls.FLOAT, bool: cls.BOOL}
        try:
            return builtins[object]
        except (KeyError, TypeError):
            raise TypeError("argument type must be an ArgType, its name, or one of str/int/float/bool") from None


class SpecType(type):
    """
    Metaclass for argument specifications.

    Responsibilities
    - Derive __typename__ from the class name ("ArgumentSpec" -> "argument-spec")
      for use in validation messages.
    - Expose every name in __introspectable__ as a read-only property backed
      by the private "_name" field.
    - Provide __repr__/__rich_repr__ driven by __introspectable__, and
      value-based __eq__/__hash__ over the same fields.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__eq__")
        def __eq__(self, other):
            if type(other) is not type(self):
                return NotImplemented
            return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())
        self.__eq__ = __eq__

        @rename("__hash__")
        def __hash__(self):
            return hash(tuple(self.__rich_repr__()))
        self.__hash__ = __hash__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize ArgumentSpec metadata in place.

    Raises
    - TypeError: a field has the wrong type.
    - ValueError: a string field is empty after trimming, or a type name is unknown.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")

    if not isinstance(help := metadata["help"], str):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    elif not (help := help.strip()):
        raise ValueError(f"{cls.__typename__} 'help' cannot be empty")
    metadata["help"] = help

    if not isinstance(default := metadata["default"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'default' must be a string")
    metadata["default"] = coalesce(default)

    if not isinstance(action := metadata["action"], str):
        raise TypeError(f"{cls.__typename__} 'action' must be a string")
    elif not (action := action.strip()):
        raise ValueError(f"{cls.__typename__} 'action' cannot be empty")
    metadata["action"] = action

    if not isinstance(metavar := metadata["metavar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif isinstance(metavar, str) and not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = coalesce(metavar)

    metadata["type"] = ArgType.of(metadata["type"])

    if not isinstance(metadata["required"], bool):
        raise TypeError(f"{cls.__typename__} 'required' must be a boolean")


class ArgumentSpec(metaclass=SpecType):
    """
    Immutable declaration of a single argument.

    The spec is only ever reached through its canonical key, which the registry
    derives from 'name'. Fields listed in __introspectable__ are read-only
    attributes; two specs with the same fields compare equal.
    """

    __introspectable__ = (
        "name",
        "help",
        "default",
        "action",
        "metavar",
        "type",
        "required",
    )

    __slots__ = tuple("_" + name for name in __introspectable__)

    def __new__(
            cls,
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
        metadata = {
            "name": name,
            "help": help,
            "default": default,
            "action": action,
            "metavar": metavar,
            "type": type,
            "required": required,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        # Fields are written once here; __setattr__ is closed afterwards.
        for field, value in metadata.items():
            object.__setattr__(self, "_" + field, value)
        return self

    @property
    def stores(self):
        """
        True when the argument consumes the token following its flag.
        """
        return self._action == STORE

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__typename__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__typename__} is immutable")

    def __reduce__(self):
        return _restore, (tuple(self.__rich_repr__()),)


def _restore(fields, /):
    fields = dict(fields)
    return ArgumentSpec(
        fields.pop("name"),
        fields.pop("help"),
        **{name: value for name, value in fields.items() if value is not None},
    )


__all__ = (
    "STORE",
    "ArgType",
    "ArgumentSpec",
)
