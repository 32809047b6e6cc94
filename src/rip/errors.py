"""rip exception hierarchy.

Shared across Router, App, dispatcher, and resources so every module
raises and catches the same types.

Two families:

- ``ConfigurationError`` — raised while the app is being built. These
  abort startup and are never caught by the library.
- ``HTTPError`` — raised while a request is being resolved. The
  dispatcher catches these and answers with ``status`` and ``detail``.
"""

from dataclasses import dataclass


class RipError(Exception):
    """Base for all rip-specific errors."""


class ConfigurationError(RipError):
    """Raised when app configuration is invalid.

    Raised during registration, before the app starts serving.
    """


class AmbiguousRegistration(ConfigurationError):
    """A pattern is registered twice, or two patterns disagree on the
    variable segment at the same tree position."""


class UnregisteredVariableKind(ConfigurationError):
    """A route pattern uses a variable kind the registry does not know."""


class DuplicateVariableKind(ConfigurationError):
    """A route variable kind is registered twice."""


class MalformedPattern(ConfigurationError):
    """A route pattern does not follow the ``/segment/{name:kind}`` grammar."""


@dataclass(frozen=True, slots=True)
class HTTPError(RipError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, negotiation, validation, or resources. The
    ASGI handler catches these and renders a ``text/plain`` response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


# -- 400: client input faults --


class RouteNotFound(HTTPError):  # noqa: N818
    """400 — no registered route matches the request path."""

    def __init__(self, detail: str = "Route not found") -> None:
        super().__init__(status=400, detail=detail)


class MalformedPath(HTTPError):  # noqa: N818
    """400 — the request path has empty segments or a trailing slash."""

    def __init__(self, detail: str = "Malformed path") -> None:
        super().__init__(status=400, detail=detail)


class InvalidContentTypeHeader(HTTPError):  # noqa: N818
    """400 — the Content-Type header is not a single ``type/subtype``."""

    def __init__(self, detail: str = "Invalid Content-Type header") -> None:
        super().__init__(status=400, detail=detail)


class InvalidAcceptHeader(HTTPError):  # noqa: N818
    """400 — an Accept header element is structurally invalid."""

    def __init__(self, detail: str = "Invalid Accept header") -> None:
        super().__init__(status=400, detail=detail)


class NoAcceptableMediaType(HTTPError):  # noqa: N818
    """400 — the Accept header yields no usable media range."""

    def __init__(self, detail: str = "No valid Accept header was given") -> None:
        super().__init__(status=400, detail=detail)


class NoMatchingResource(HTTPError):  # noqa: N818
    """400 — no resource on the endpoint accepts this method and media types."""

    def __init__(self, detail: str = "No available resource for this Content-Type") -> None:
        super().__init__(status=400, detail=detail)


class BodyNotAllowed(HTTPError):  # noqa: N818
    """400 — a body was sent but no input media type was negotiated."""

    def __init__(self, detail: str = "Body is not allowed for this resource") -> None:
        super().__init__(status=400, detail=detail)


class QueryParameterInvalid(HTTPError):  # noqa: N818
    """400 — a query parameter fails its kind or format validator."""

    def __init__(self, detail: str = "Invalid query parameter") -> None:
        super().__init__(status=400, detail=detail)


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413 — the request body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, detail: str = "Request body too large") -> None:
        super().__init__(status=413, detail=detail)


# -- 500: server-side contract violations --


class NoEndpointOnRoute(HTTPError):  # noqa: N818
    """500 — the path resolves to a tree node that owns no endpoint."""

    def __init__(self, detail: str = "No endpoint found for this route") -> None:
        super().__init__(status=500, detail=detail)


class DefaultValueMisconfigured(HTTPError):  # noqa: N818
    """500 — a query parameter's default value violates its own kind."""

    def __init__(self, detail: str = "Query parameter default value is misconfigured") -> None:
        super().__init__(status=500, detail=detail)


class ResourceInstantiationFailure(HTTPError):  # noqa: N818
    """500 — a resource factory did not produce a resource instance."""

    def __init__(self, detail: str = "Resource factory must instantiate a valid Resource") -> None:
        super().__init__(status=500, detail=detail)
