"""Request diagnostics: identifiers, dumps, and timing."""

import json
import logging
import secrets
import time

from rip.http.request import Request

logger = logging.getLogger("rip.server")

NO_REQUEST_ID = "o"


def generate_request_id() -> str:
    """A short, URL-safe identifier used to correlate log lines."""
    return secrets.token_urlsafe(9)


def log_request_dump(request: Request) -> None:
    logger.info("[%s] === Request dump ===", request.request_id)
    logger.info("%s", json.dumps(request.dump(), indent=2, sort_keys=True))
    logger.info("[%s] === End of request dump ===", request.request_id)


class Stopwatch:
    """Elapsed wall time in milliseconds since creation."""

    __slots__ = ("_start",)

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000
