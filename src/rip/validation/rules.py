"""Built-in format validators for query parameters.

A format validator pairs a predicate with the message surfaced to the
client when the predicate rejects a value::

    FormatValidator(str.isalpha, "Must contain letters only")

Parameterized validators are factory functions that return one::

    def max_length(n: int) -> FormatValidator:
        return FormatValidator(lambda v: len(v) <= n, f"Must be at most {n} characters")

Format validators run after the parameter's kind check, so a validator
attached to an ``int`` parameter only ever sees integer text.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormatValidator:
    """A predicate over raw parameter text plus its error message."""

    predicate: Callable[[str], bool]
    message: str

    def is_valid(self, value: str) -> bool:
        return bool(self.predicate(value))

    def __call__(self, value: str) -> str | None:
        """Return the error message, or ``None`` if *value* is valid."""
        if self.is_valid(value):
            return None
        return self.message


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int) -> FormatValidator:
    """String must be at most *n* characters."""
    return FormatValidator(lambda value: len(value) <= n, f"Must be at most {n} characters")


def min_length(n: int) -> FormatValidator:
    """String must be at least *n* characters."""
    return FormatValidator(lambda value: len(value) >= n, f"Must be at least {n} characters")


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------


def matches(pattern: str, message: str | None = None) -> FormatValidator:
    """Value must fully match the given regex pattern."""
    compiled = re.compile(pattern)
    return FormatValidator(
        lambda value: compiled.fullmatch(value) is not None,
        message or f"Must match pattern: {pattern}",
    )


# ---------------------------------------------------------------------------
# Choice and range
# ---------------------------------------------------------------------------


def one_of(*choices: str) -> FormatValidator:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)
    options = ", ".join(sorted(allowed))
    return FormatValidator(lambda value: value in allowed, f"Must be one of: {options}")


def between(low: float, high: float) -> FormatValidator:
    """Numeric value must lie within ``[low, high]``."""

    def check(value: str) -> bool:
        try:
            number = float(value)
        except ValueError:
            return False
        return low <= number <= high

    return FormatValidator(check, f"Must be between {low:g} and {high:g}")
