"""rip — REST In Peace.

The request-resolution core of a REST server: a typed route tree,
content negotiation across competing resources, and query parameter
validation, served over ASGI.

Basic usage::

    from rip import App, Resource

    class GetItem(Resource):
        method = "GET"
        produces = ("application/json",)

        def execute(self, context):
            return {"id": context.route_variables["id"]}

    app = App()
    app.endpoint("/items/{id:int}", GetItem)

    app.run()
"""

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Endpoint",
    "HTTPError",
    "QueryParameter",
    "Resource",
    "ResourceContext",
    "ResourceResult",
    "Response",
    "RipError",
    "regex_type",
    "resource",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import rip`` fast while providing a clean top-level API.
    """
    if name == "App":
        from rip.app import App

        return App

    if name == "AppConfig":
        from rip.config import AppConfig

        return AppConfig

    if name == "Endpoint":
        from rip.routing.endpoint import Endpoint

        return Endpoint

    if name in ("Resource", "ResourceContext", "ResourceResult", "resource"):
        from rip import resource as _resource

        return getattr(_resource, name)

    if name == "QueryParameter":
        from rip.validation import QueryParameter

        return QueryParameter

    if name == "Response":
        from rip.http.response import Response

        return Response

    if name == "regex_type":
        from rip.routing.types import regex_type

        return regex_type

    if name in ("ConfigurationError", "HTTPError", "RipError"):
        from rip import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
