"""Resources — method- and media-type-scoped units of request execution.

A resource is a class. Its class attributes declare what it can handle;
the dispatcher builds a fresh instance for every request through
``factory()`` and calls ``execute()`` on it, so nothing an instance
stores can leak into another request.

Usage::

    from rip import App, Resource, ResourceResult

    class GetItem(Resource):
        method = "GET"
        produces = ("application/json",)

        def execute(self, context):
            return {"id": context.route_variables["id"]}

    class ReplaceItem(Resource):
        method = "PUT"
        consumes = ("application/json",)
        produces = ("application/json",)

        async def execute(self, context):
            item = context.json()
            return item, 200

    app = App()
    app.endpoint("/items/{id:int}", GetItem, ReplaceItem)

Plain functions can be turned into resources with ``@resource``::

    @resource("GET", produces=("text/plain",))
    def ping(context):
        return "pong"
"""

from __future__ import annotations

import inspect
import json as json_module
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from rip.errors import ConfigurationError
from rip.http.headers import Headers
from rip.validation import QueryParameter


@dataclass(frozen=True, slots=True)
class ResourceContext:
    """Everything a resource needs to serve one request.

    Built by the dispatcher after negotiation and query validation.
    ``content_type_in`` is ``None`` when the request declared no body
    type; ``body`` is then guaranteed to be empty.
    """

    method: str
    path: str
    route_variables: Mapping[str, str]
    query_parameters: Mapping[str, str]
    headers: Headers
    content_type_in: str | None
    content_type_out: str
    body: bytes = b""
    request_id: str = "o"

    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """The body parsed as JSON."""
        return json_module.loads(self.body)


@dataclass(frozen=True, slots=True)
class ResourceResult:
    """Explicit resource outcome: status, body, and extra headers."""

    status: int = 200
    body: str | bytes = b""
    headers: tuple[tuple[str, str], ...] = field(default=())


class Resource:
    """Base class for resource handlers.

    Subclasses set:

    - ``method`` — exact, case-sensitive HTTP verb.
    - ``consumes`` — accepted request media types. Empty means the
      resource takes no body.
    - ``produces`` — response media types, in preference order.
      Must not be empty.
    - ``query`` — declared ``QueryParameter`` schema.

    and implement ``execute(context)`` (sync or async). Sync resources
    run in a worker thread.
    """

    method: ClassVar[str] = "GET"
    consumes: ClassVar[tuple[str, ...]] = ()
    produces: ClassVar[tuple[str, ...]] = ()
    query: ClassVar[tuple[QueryParameter, ...]] = ()

    @classmethod
    def factory(cls) -> Resource | None:
        """Build the per-request instance. Override for custom wiring."""
        return cls()

    def execute(self, context: ResourceContext) -> Any:
        raise NotImplementedError

    @classmethod
    def describe(cls) -> dict[str, Any]:
        """Capabilities as a JSON-serializable dict (documentation endpoint)."""
        return {
            "resource": cls.__name__,
            "method": cls.method,
            "consumes": list(cls.consumes),
            "produces": list(cls.produces),
            "query": [
                {
                    "name": param.name,
                    "kind": param.kind,
                    "default": param.default,
                    "required": param.required,
                    "description": param.description,
                }
                for param in cls.query
            ],
        }


def check_resource(candidate: object) -> type[Resource]:
    """Validate a resource class at registration time.

    Raises ``ConfigurationError`` for non-resources, an empty method,
    or an empty ``produces`` set.
    """
    if not (isinstance(candidate, type) and issubclass(candidate, Resource)):
        msg = f"{candidate!r} is not a Resource subclass"
        raise ConfigurationError(msg)
    if not candidate.method:
        msg = f"Resource {candidate.__name__} must declare an HTTP method"
        raise ConfigurationError(msg)
    if not candidate.produces:
        msg = f"Resource {candidate.__name__} must produce at least one media type"
        raise ConfigurationError(msg)
    return candidate


def resource(
    method: str,
    *,
    produces: tuple[str, ...],
    consumes: tuple[str, ...] = (),
    query: tuple[QueryParameter, ...] = (),
) -> Callable[[Callable[[ResourceContext], Any]], type[Resource]]:
    """Turn a function taking a ``ResourceContext`` into a Resource class."""

    def decorator(func: Callable[[ResourceContext], Any]) -> type[Resource]:
        if inspect.iscoroutinefunction(func):

            async def execute(self: Resource, context: ResourceContext) -> Any:
                return await func(context)

        else:

            def execute(self: Resource, context: ResourceContext) -> Any:
                return func(context)

        namespace = {
            "method": method,
            "consumes": tuple(consumes),
            "produces": tuple(produces),
            "query": tuple(query),
            "execute": execute,
            "__module__": func.__module__,
            "__doc__": func.__doc__,
            "__qualname__": func.__qualname__,
        }
        return type(func.__name__, (Resource,), namespace)

    return decorator
