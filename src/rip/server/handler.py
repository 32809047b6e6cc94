"""ASGI handler — resolves one request to exactly one resource.

Pipeline, in order; the first failure short-circuits into an error
response:

1. documentation bypass (``AppConfig.docs_path``)
2. route tree lookup -> endpoint + route variables
3. Content-Type and Accept parsing
4. resource selection by method and media types
5. body read (fully buffered) and body check
6. fresh resource instance from its factory
7. query parameter validation
8. execution and rendering

Every request yields exactly one response; no request-time failure
escapes ``handle_request``.
"""

import logging
from dataclasses import replace

from rip._internal.asgi import Receive, Scope, Send
from rip._internal.invoke import invoke
from rip.config import AppConfig
from rip.errors import (
    BodyNotAllowed,
    HTTPError,
    NoAcceptableMediaType,
    NoEndpointOnRoute,
    NoMatchingResource,
    ResourceInstantiationFailure,
)
from rip.http.request import Request, read_body
from rip.http.response import Response
from rip.negotiation import parse_accept, parse_content_type
from rip.resource import Resource, ResourceContext
from rip.routing.router import Router
from rip.server.debug import NO_REQUEST_ID, Stopwatch, generate_request_id, log_request_dump
from rip.server.docs import render_documentation
from rip.server.errors import handle_http_error, handle_internal_error
from rip.server.render import render
from rip.server.sender import send_response
from rip.validation import validate_query

logger = logging.getLogger("rip.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    config: AppConfig,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    stopwatch = Stopwatch()
    request_id = generate_request_id() if config.log_request_id else NO_REQUEST_ID
    request = Request.from_asgi(scope, request_id=request_id)

    logger.info("[%s] Request %s %s", request_id, request.method, request.path)
    if config.log_request_dump:
        log_request_dump(request)

    try:
        response = await dispatch(request, receive, router=router, config=config)
    except HTTPError as exc:
        response = handle_http_error(exc, request)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=config.debug)

    if config.log_request_id:
        response = response.with_header("X-Request-Id", request_id)

    await send_response(response, send)

    logger.info(
        "[%s] Response %d %s (%d bytes)",
        request_id,
        response.status,
        response.content_type or "-",
        len(response.body_bytes),
    )
    if config.log_request_duration:
        logger.info("[%s] Response duration: %.2f ms", request_id, stopwatch.elapsed_ms)


async def dispatch(
    request: Request,
    receive: Receive,
    *,
    router: Router,
    config: AppConfig,
) -> Response:
    """Resolve *request* to a resource, execute it, and render the result.

    Raises ``HTTPError`` subclasses for every client or configuration
    fault; anything else escaping a resource propagates unchanged.
    """
    if config.docs_path is not None and request.path == config.docs_path:
        return render_documentation(router)

    match = router.find(request.path)
    endpoint = match.endpoint
    if endpoint is None:
        raise NoEndpointOnRoute(f"No endpoint found for route {request.path}")

    content_type = parse_content_type(request.content_type)
    accept_header = request.accept
    if accept_header is None:
        accept_header = config.default_accept
    accept = parse_accept(accept_header)
    if not accept:
        raise NoAcceptableMediaType()

    if not endpoint.resources:
        raise NoEndpointOnRoute(f"No resource found on route {request.path}")

    selected = endpoint.find_matching_resource(request.method, content_type, accept)
    if selected is None:
        raise NoMatchingResource(
            f"No available resource for {request.method} {request.path} "
            f"with Content-Type {request.content_type or '-'} and Accept {accept_header}"
        )

    body = await read_body(receive, limit=config.max_content_length)
    if selected.content_type_in is None and body:
        raise BodyNotAllowed()
    request = replace(request, body=body)

    instance = selected.resource.factory()
    if not isinstance(instance, Resource):
        raise ResourceInstantiationFailure(
            f"Factory of {selected.resource.__name__} returned {type(instance).__name__}, "
            f"not a Resource"
        )

    query_parameters = validate_query(selected.resource.query, request.query)

    context = ResourceContext(
        method=request.method,
        path=request.path,
        route_variables=match.variables,
        query_parameters=query_parameters,
        headers=request.headers,
        content_type_in=selected.content_type_in,
        content_type_out=selected.content_type_out,
        body=request.body,
        request_id=request.request_id,
    )
    result = await invoke(instance.execute, context)
    return render(result, content_type=selected.content_type_out)
