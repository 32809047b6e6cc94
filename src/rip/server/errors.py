"""Error handling pipeline for rip requests.

Maps HTTPError exceptions and unexpected failures to ``text/plain``
Response objects. Every failure is logged with the request id, so the
log line and the client-visible message can be correlated.
"""

import logging
import traceback

from rip.errors import HTTPError
from rip.http.request import Request
from rip.http.response import Response, plain_text

logger = logging.getLogger("rip.server")


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a Response carrying its status and detail."""
    detail = exc.detail or f"Error {exc.status}"
    level = logging.ERROR if exc.status >= 500 else logging.WARNING
    logger.log(
        level,
        "[%s] %d %s %s: %s",
        request.request_id,
        exc.status,
        request.method,
        request.path,
        detail,
    )

    response = plain_text(detail, exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Handle unexpected exceptions (usually raised by a resource) as 500 errors."""
    logger.exception("[%s] 500 %s %s", request.request_id, request.method, request.path)

    if debug:
        body = "".join(traceback.format_exception(exc))
        return plain_text(body, 500)
    return plain_text("Internal Server Error", 500)
