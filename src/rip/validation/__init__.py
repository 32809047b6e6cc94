"""Query parameter schemas and validation.

Usage::

    from rip.validation import QueryParameter, one_of

    class ListItems(Resource):
        method = "GET"
        produces = ("application/json",)
        query = (
            QueryParameter("page", kind="int", default="1"),
            QueryParameter("order", default="asc", validator=one_of("asc", "desc")),
        )

    # ResourceContext.query_parameters == {"page": "1", "order": "asc"}

Values are checked against the parameter's kind, then its optional
format validator, and handed to the resource as raw strings.
"""

import math
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from rip.errors import ConfigurationError, DefaultValueMisconfigured, QueryParameterInvalid
from rip.validation.rules import FormatValidator, between, matches, max_length, min_length, one_of

__all__ = [
    "QUERY_KINDS",
    "FormatValidator",
    "QueryParameter",
    "between",
    "matches",
    "max_length",
    "min_length",
    "one_of",
    "validate_query",
]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_BOOL_WORDS = frozenset({"true", "false", "1", "0", "yes", "no", "on", "off"})


def _is_str(value: str) -> bool:
    return True


def _is_int(value: str) -> bool:
    return _INT_RE.fullmatch(value) is not None


def _is_float(value: str) -> bool:
    try:
        return math.isfinite(float(value))
    except ValueError:
        return False


def _is_bool(value: str) -> bool:
    return value.lower() in _BOOL_WORDS


QUERY_KINDS: dict[str, Callable[[str], bool]] = {
    "str": _is_str,
    "int": _is_int,
    "float": _is_float,
    "bool": _is_bool,
}


@dataclass(frozen=True, slots=True)
class QueryParameter:
    """Declared query parameter of a resource.

    An absent (or empty) parameter takes ``default``. The default is
    checked against ``kind`` only when a request needs it; a default
    that violates its own kind answers that request with a 500.
    ``required`` parameters have no default and answer a 400 instead.
    """

    name: str
    kind: str = "str"
    default: str = ""
    validator: FormatValidator | None = None
    required: bool = False
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            msg = "Query parameter name cannot be empty"
            raise ConfigurationError(msg)
        if self.kind not in QUERY_KINDS:
            kinds = ", ".join(sorted(QUERY_KINDS))
            msg = f"Query parameter {self.name!r} has unknown kind {self.kind!r} (expected one of: {kinds})"
            raise ConfigurationError(msg)

    def accepts(self, value: str) -> bool:
        """Whether *value* parses under this parameter's kind."""
        return QUERY_KINDS[self.kind](value)


def validate_query(
    parameters: Sequence[QueryParameter],
    query: Mapping[str, str],
) -> dict[str, str]:
    """Validate *query* against declared *parameters*.

    Returns a name -> value mapping holding exactly the declared
    parameters. Undeclared query keys are ignored.

    Raises:
        QueryParameterInvalid: A supplied value fails its kind or
            format validator, or a required parameter is missing.
        DefaultValueMisconfigured: A missing parameter's default does
            not satisfy its own kind.
    """
    values: dict[str, str] = {}
    for param in parameters:
        value = query.get(param.name) or ""
        if not value:
            if param.required:
                msg = f"Query parameter {param.name} is required"
                raise QueryParameterInvalid(msg)
            value = param.default
            if not param.accepts(value):
                msg = f"Query parameter {param.name} default value must be of kind {param.kind}"
                raise DefaultValueMisconfigured(msg)
        elif not param.accepts(value):
            msg = f"Query parameter {param.name} must be of kind {param.kind}"
            raise QueryParameterInvalid(msg)

        if param.validator is not None:
            error = param.validator(value)
            if error is not None:
                msg = f"Invalid query parameter {param.name}: {error}"
                raise QueryParameterInvalid(msg)

        values[param.name] = value
    return values
