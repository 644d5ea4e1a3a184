"""
Argument name normalization.

A user-facing spelling such as "--num-times" is folded into the canonical key
"num_times" used by both the registry and the value store:
- a dash at index 0 or 1 is dropped (the position is checked, not whether the
  dash belongs to a contiguous prefix, so "a-b" folds to "ab");
- every other dash becomes an underscore;
- all other characters are kept in order.
"""
from .faults import *

MAX_NAME_LENGTH = 512


def normalize(raw, /, **options):
    """
    Fold a raw argument name or flag token into its canonical key.

    options are runtime flags/context merged into any triggered fault.

    Raises
    - TypeError: raw is not a string.
    - InvalidArgumentError: raw is empty, or folds to an empty key ("-", "--").
    - ArgumentTooLongError: raw is longer than MAX_NAME_LENGTH characters.

    Examples
    - normalize("--num-times") -> "num_times"
    - normalize("repo")        -> "repo"
    """
    if not isinstance(raw, str):
        raise TypeError("normalize() argument must be a string")

    if not raw:
        trigger(InvalidArgumentError(
            "argument name cannot be empty",
            title="invalid argument name",
            code=FaultCode.INVALID_NAME,
            hint="give the argument a name such as --verbose or path",
            name=raw,
            **options
        ))

    if len(raw) > MAX_NAME_LENGTH:
        trigger(ArgumentTooLongError(
            "argument name of %d characters exceeds the %d character limit" % (len(raw), MAX_NAME_LENGTH),
            title="argument name too long",
            code=FaultCode.NAME_TOO_LONG,
            hint="shorten the name to at most %d characters" % MAX_NAME_LENGTH,
            name=raw,
            **options
        ))

    key = "".join(
        ("_" if index >= 2 else "") if char == "-" else char
        for index, char in enumerate(raw)
    )

    if not key:
        trigger(InvalidArgumentError(
            "argument name %r has nothing left once its leading dashes are removed" % raw,
            title="invalid argument name",
            code=FaultCode.INVALID_NAME,
            hint="add at least one character after the dashes (for example: --name)",
            name=raw,
            **options
        ))

    return key


__all__ = (
    "MAX_NAME_LENGTH",
    "normalize",
)
