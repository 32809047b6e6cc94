"""PathSegment and RouteMatch frozen dataclasses, plus pattern/path splitting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rip.errors import MalformedPath, MalformedPattern

if TYPE_CHECKING:
    from rip.routing.endpoint import Endpoint

DEFAULT_KIND = "str"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal:   ``/users``      (is_variable=False)
    Variable:  ``/{id:int}``   (is_variable=True, name="id", kind="int")
    Shorthand: ``/{slug}``     (is_variable=True, name="slug", kind="str")
    """

    value: str
    is_variable: bool = False
    name: str | None = None
    kind: str | None = None

    def __str__(self) -> str:
        if self.is_variable:
            return f"{{{self.name}:{self.kind}}}"
        return self.value


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful tree lookup.

    ``endpoint`` is ``None`` when the path resolves to an intermediate
    node that no pattern terminates on.
    """

    endpoint: Endpoint | None
    variables: dict[str, str] = field(default_factory=dict)


def parse_pattern(pattern: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        "/"                    -> []
        "/users"               -> [PathSegment("users")]
        "/users/{id:int}"      -> [PathSegment("users"), PathSegment("{id:int}", True, "id", "int")]

    Raises ``MalformedPattern`` for patterns that are not ``/``-rooted,
    contain empty segments, or carry broken ``{...}`` syntax.
    """
    if not pattern.startswith("/"):
        msg = f"Route pattern {pattern!r} must start with '/'"
        raise MalformedPattern(msg)
    if pattern == "/":
        return []

    segments: list[PathSegment] = []
    for part in pattern[1:].split("/"):
        if not part:
            msg = f"Route pattern {pattern!r} contains an empty segment"
            raise MalformedPattern(msg)
        if part.startswith("{") or part.endswith("}"):
            segments.append(_parse_variable(part, pattern))
        elif "{" in part or "}" in part:
            msg = f"Route pattern {pattern!r}: variables must span a whole segment, got {part!r}"
            raise MalformedPattern(msg)
        else:
            segments.append(PathSegment(value=part))
    return segments


def _parse_variable(part: str, pattern: str) -> PathSegment:
    if not (part.startswith("{") and part.endswith("}")):
        msg = f"Route pattern {pattern!r}: unbalanced braces in {part!r}"
        raise MalformedPattern(msg)
    inner = part[1:-1]
    name, sep, kind = inner.partition(":")
    if not sep:
        kind = DEFAULT_KIND
    if not name.isidentifier():
        msg = f"Route pattern {pattern!r}: invalid variable name {name!r}"
        raise MalformedPattern(msg)
    if not kind or "{" in kind or "}" in kind:
        msg = f"Route pattern {pattern!r}: invalid variable kind {kind!r}"
        raise MalformedPattern(msg)
    return PathSegment(value=part, is_variable=True, name=name, kind=kind)


def split_path(path: str) -> list[str]:
    """Split a concrete request path into its segments.

    ``"/"`` is the root and yields no segments. Repeated slashes and
    trailing slashes are rejected with ``MalformedPath``.
    """
    if not path.startswith("/"):
        msg = f"Path {path!r} must start with '/'"
        raise MalformedPath(msg)
    if path == "/":
        return []
    parts = path[1:].split("/")
    if any(not part for part in parts):
        msg = f"Malformed path {path!r}: empty segment or trailing slash"
        raise MalformedPath(msg)
    return parts
