"""
Argosy utilities (internal helpers)

Scope
- Small building blocks shared by the arguments, values, registry and parser layers.
- Exposed through __all__ but aimed at the library itself rather than its users.

Overview
- UnsetType / Unset
  • Singleton sentinel meaning "not provided", distinct from None.
  • Falsey, printable as "Unset", and sealed against subclassing.

- coalesce(value, default=None)
  • Replace Unset with a concrete default; None and other falsey values pass through.

- rename(callable, name) / @rename("name")
  • Give generated accessors a readable __name__/__qualname__.

- mirror("attr")
  • Read-only property exposing the private backing field self._attr.

Quick examples
    >>> coalesce(Unset, "--flag")
    '--flag'
    >>> coalesce(None, "--flag") is None
    True
"""
import builtins
import functools
from typing import final


@final
class UnsetType:
    """
    Sentinel type for parameters that were not provided.

    Argument metadata such as 'default' or 'metavar' accepts None from callers
    in some positions, so the constructors use Unset to tell "omitted" apart
    from "explicitly empty". A single instance, Unset, exists per process.
    """

    def __or__(self, other, /):
        # Allows `str | Unset` in isinstance() checks.
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        return type(self), ()

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return object unless it is Unset, in which case return default.

    Falsey values (None, 0, "", False) are kept as they are; only the sentinel
    is replaced.
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set __name__/__qualname__ on a callable, or build a decorator that does.

    - rename(callable, name) -> callable, renamed in place.
    - rename(name) -> decorator applying that name later.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def mirror(name, /):
    """
    Define a read-only property reading the private attribute "_{name}".

    Every value mirrored by the library is immutable already (strings, enum
    members, booleans, None), so the getter hands it back unchanged.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return getattr(self, "_" + name)

    return property(getter)


Unset = UnsetType()
"""
Sentinel for "not provided".

Use it as a parameter default when None would be ambiguous, then materialize a
concrete value with coalesce(value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
