"""Route variable kinds and their validators.

Each kind maps to a pure predicate over the raw segment text. The
handler receives the raw captured string and performs any typed
parsing itself.

Built-in kinds for route segments like ``{id:int}``::

    str    any non-empty segment
    int    one or more ASCII digits
    float  digits with an optional fractional part
    uuid   canonical 8-4-4-4-12 hex form
"""

import re
from collections.abc import Callable, Iterator
from typing import TypeAlias

from rip.errors import DuplicateVariableKind

VariableValidator: TypeAlias = Callable[[str], bool]


def regex_type(pattern: str) -> VariableValidator:
    """Build a validator that accepts segments fully matching *pattern*."""
    compiled = re.compile(pattern)

    def check(value: str) -> bool:
        return compiled.fullmatch(value) is not None

    return check


BUILTIN_TYPES: dict[str, VariableValidator] = {
    "str": bool,
    "int": regex_type(r"[0-9]+"),
    "float": regex_type(r"[0-9]+(?:\.[0-9]+)?"),
    "uuid": regex_type(r"[0-9a-fA-F]{8}-(?:[0-9a-fA-F]{4}-){3}[0-9a-fA-F]{12}"),
}


class VariableTypeRegistry:
    """Append-only mapping of variable kind -> validator.

    Populated during startup. Lookups after the app freezes are
    read-only, so no locking is needed.
    """

    __slots__ = ("_validators",)

    def __init__(self, *, builtins: bool = True) -> None:
        self._validators: dict[str, VariableValidator] = dict(BUILTIN_TYPES) if builtins else {}

    def register(self, kind: str, validator: VariableValidator) -> None:
        """Register *validator* under *kind*.

        Raises ``DuplicateVariableKind`` if *kind* is already known.
        """
        if kind in self._validators:
            msg = f"Route variable kind {kind!r} is already registered"
            raise DuplicateVariableKind(msg)
        self._validators[kind] = validator

    def is_valid(self, kind: str, value: str) -> bool:
        """Run the validator for *kind* against *value*.

        Raises ``KeyError`` if *kind* is not registered.
        """
        return bool(self._validators[kind](value))

    def __contains__(self, kind: object) -> bool:
        return kind in self._validators

    def __iter__(self) -> Iterator[str]:
        return iter(self._validators)

    def __len__(self) -> int:
        return len(self._validators)
