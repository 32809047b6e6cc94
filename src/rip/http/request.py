"""Immutable HTTP request.

The body is read in full from the ASGI ``receive`` channel (see
``read_body``) before the request reaches a resource, so a ``Request``
is plain frozen data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rip._internal.asgi import Receive
from rip.errors import PayloadTooLarge
from rip.http.headers import Headers
from rip.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable, fully buffered HTTP request."""

    method: str
    path: str
    headers: Headers
    query: QueryParams
    body: bytes = b""
    request_id: str = "o"
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def accept(self) -> str | None:
        """The Accept header value."""
        return self.headers.get("accept")

    @property
    def url(self) -> str:
        """Request path plus query string."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    def dump(self) -> dict[str, Any]:
        """JSON-serializable snapshot used by request dump logging."""
        return {
            "method": self.method,
            "url": self.url,
            "http_version": self.http_version,
            "headers": self.headers.to_dict(),
            "client": list(self.client) if self.client else None,
            "content_length": len(self.body),
        }

    @classmethod
    def from_asgi(
        cls,
        scope: dict[str, Any],
        body: bytes = b"",
        request_id: str = "o",
    ) -> Request:
        """Create a Request from an ASGI scope and the buffered body."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            body=body,
            request_id=request_id,
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
        )


async def read_body(receive: Receive, *, limit: int | None = None) -> bytes:
    """Drain the ASGI ``receive`` channel into a single bytes object.

    Raises ``PayloadTooLarge`` once more than *limit* bytes arrive.
    """
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        chunk = message.get("body", b"")
        if chunk:
            size += len(chunk)
            if limit is not None and size > limit:
                msg = f"Request body exceeds {limit} bytes"
                raise PayloadTooLarge(msg)
            chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)
