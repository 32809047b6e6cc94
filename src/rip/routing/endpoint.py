"""Endpoint — the ordered set of resources registered under one pattern."""

from collections.abc import Iterable
from dataclasses import dataclass

from rip.negotiation import AcceptHeader, MediaType, essence_of
from rip.resource import Resource, check_resource


@dataclass(frozen=True, slots=True)
class ResourceMatch:
    """The resource chosen for a request and the negotiated media types."""

    resource: type[Resource]
    content_type_in: str | None
    content_type_out: str


class Endpoint:
    """Binds one route pattern to an ordered list of resources.

    Registration order is significant: when several resources could
    serve a request, the one registered first wins, regardless of how
    specific its media-type match is.
    """

    __slots__ = ("_resources", "pattern")

    def __init__(self, pattern: str, resources: Iterable[type[Resource]] = ()) -> None:
        self.pattern = pattern
        self._resources: list[type[Resource]] = []
        for res in resources:
            self.add_resource(res)

    def __repr__(self) -> str:
        names = ", ".join(f"{r.method} {r.__name__}" for r in self._resources)
        return f"Endpoint({self.pattern!r}, [{names}])"

    @property
    def resources(self) -> tuple[type[Resource], ...]:
        return tuple(self._resources)

    @property
    def methods(self) -> frozenset[str]:
        return frozenset(r.method for r in self._resources)

    def add_resource(self, resource: type[Resource]) -> None:
        """Append *resource*. Raises ``ConfigurationError`` if it is invalid."""
        self._resources.append(check_resource(resource))

    def find_matching_resource(
        self,
        method: str,
        content_type: MediaType | None,
        accept: AcceptHeader,
    ) -> ResourceMatch | None:
        """Pick the first resource, in registration order, that serves the request.

        A resource qualifies when:

        1. its ``method`` equals *method* exactly;
        2. the request Content-Type is one of its ``consumes`` types, or
           the request carries no Content-Type at all;
        3. one of its ``produces`` types is acceptable under *accept*.
        """
        for res in self._resources:
            if res.method != method:
                continue

            content_type_in: str | None = None
            if content_type is not None:
                content_type_in = next(
                    (d for d in res.consumes if essence_of(d) == content_type.essence),
                    None,
                )
                if content_type_in is None:
                    continue

            content_type_out = accept.best_match(res.produces)
            if content_type_out is None:
                continue

            return ResourceMatch(res, content_type_in, content_type_out)
        return None
