"""
Argument registry: canonical key -> ArgumentSpec.

The registry is created empty, filled by register(), and locked by the parser
after a successful parse; a locked registry refuses further registrations.

Collision policy
- Two names that normalize to the same key ("--dry-run" and "dry_run") collide.
- redefine=True (default): the later spec replaces the earlier one and a
  RedefinedArgumentWarning is emitted.
- redefine=False: DuplicateArgumentError is raised and the earlier spec is kept.
"""
from collections.abc import Mapping

from .arguments import ArgumentSpec
from .faults import *
from .names import normalize


class Registry(Mapping):

    def __init__(self, *, redefine=True):
        self._specs = {}
        self._locked = False
        self._redefine = bool(redefine)

    @property
    def locked(self):
        return self._locked

    @property
    def redefine(self):
        return self._redefine

    def lock(self):
        self._locked = True

    def register(self, spec, /, **options):
        """
        Register spec under the canonical key of spec.name and return that key.

        options are runtime flags/context merged into any triggered fault.

        Raises
        - TypeError: spec is not an ArgumentSpec.
        - ParserLockedError: the registry is locked.
        - InvalidArgumentError / ArgumentTooLongError: from normalize().
        - DuplicateArgumentError: the key is taken and redefine is False.
        """
        if not isinstance(spec, ArgumentSpec):
            raise TypeError("register() argument must be an argument spec")

        if self._locked:
            trigger(ParserLockedError(
                "cannot register %r once arguments have been parsed" % spec.name,
                title="parser locked",
                code=FaultCode.PARSER_LOCKED,
                hint="register every argument before calling parse()",
                argument=spec,
                **options
            ))

        key = normalize(spec.name, **options)

        if (previous := self._specs.get(key)) is not None:
            if not self._redefine:
                trigger(DuplicateArgumentError(
                    "argument %r collides with already registered %r" % (spec.name, previous.name),
                    title="duplicate argument",
                    code=FaultCode.DUPLICATE_ARGUMENT,
                    hint="both names map to %r; rename one of them" % key,
                    key=key,
                    argument=spec,
                    previous=previous,
                    **options
                ))
            trigger(RedefinedArgumentWarning(
                "argument %r replaces already registered %r" % (spec.name, previous.name),
                title="redefined argument",
                code=FaultCode.REDEFINED_ARGUMENT,
                hint="both names map to %r; the last registration wins" % key,
                key=key,
                argument=spec,
                previous=previous,
                **options
            ))

        self._specs[key] = spec
        return key

    def lookup(self, key, /, **options):
        """
        Return the spec registered under key.

        Raises
        - ArgumentNotFoundError: nothing is registered under key.
        """
        try:
            return self._specs[key]
        except KeyError:
            return trigger(ArgumentNotFoundError(
                "no argument is registered under %r" % key,
                title="argument not found",
                code=FaultCode.ARGUMENT_NOT_FOUND,
                hint="look arguments up by their canonical key (for example: num_times for --num-times)",
                key=key,
                **options
            ))

    def __getitem__(self, key):
        return self._specs[key]

    def __iter__(self):
        return iter(self._specs)

    def __len__(self):
        return len(self._specs)

    def __repr__(self):
        return f"Registry({list(self._specs)!r}, locked={self._locked!r})"

    def __rich_repr__(self):
        yield from self._specs.items()
        yield "locked", self._locked


__all__ = (
    "Registry",
)
