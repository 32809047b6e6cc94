"""Result rendering — maps resource return values to Response objects.

The resource's negotiated output type becomes the response content
type. isinstance-based dispatch, no magic, fully predictable.
"""

import json as json_module
from typing import Any

from rip.http.response import Response
from rip.negotiation import essence_of
from rip.resource import ResourceResult


def is_json(content_type: str) -> bool:
    """Whether *content_type* is ``application/json`` or a ``+json`` suffix type."""
    essence = essence_of(content_type)
    return essence.endswith("/json") or essence.endswith("+json")


def render(value: Any, *, content_type: str) -> Response:
    """Convert a resource's return value to a Response.

    Dispatch order:

    1. ``Response``              -> pass through
    2. ``ResourceResult``        -> status, body, headers as given
    3. ``None``                  -> 204, empty body
    4. ``str`` / ``bytes``       -> 200, body as given
    5. ``dict`` / ``list``       -> 200, JSON (JSON output types only)
    6. ``(value, int)``          -> render value, override status
    7. ``(value, int, dict)``    -> render value, override status + headers
    """
    match value:
        case Response():
            return value
        case ResourceResult():
            return Response(
                body=value.body,
                status=value.status,
                content_type=content_type,
                headers=value.headers,
            )
        case None:
            return Response(status=204, content_type=content_type)
        case str() | bytes():
            return Response(body=value, content_type=content_type)
        case dict() | list():
            if not is_json(content_type):
                msg = (
                    f"Cannot render {type(value).__name__} as {content_type!r}. "
                    f"Return str or bytes for non-JSON output types."
                )
                raise TypeError(msg)
            return Response(
                body=json_module.dumps(value, default=str),
                content_type=content_type,
            )
        case (inner, int() as status):
            return render(inner, content_type=content_type).with_status(status)
        case (inner, int() as status, dict() as headers):
            return (
                render(inner, content_type=content_type)
                .with_status(status)
                .with_headers(headers)
            )
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, bytes, dict, list, None, ResourceResult, or Response."
            )
            raise TypeError(msg)
