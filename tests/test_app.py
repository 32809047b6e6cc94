"""Tests for rip.app — App lifecycle, registration, and request resolution."""

import json
import logging
from typing import Any

import pytest

from rip.app import App
from rip.config import AppConfig
from rip.errors import AmbiguousRegistration, DuplicateVariableKind, HTTPError, UnregisteredVariableKind
from rip.resource import Resource, ResourceContext, ResourceResult, resource
from rip.routing.types import regex_type
from rip.testing import TestClient
from rip.validation import QueryParameter, one_of

JSON = {"Accept": "application/json"}


class GetItem(Resource):
    method = "GET"
    produces = ("application/json",)
    query = (
        QueryParameter("fields", default="all", validator=one_of("all", "id")),
        QueryParameter("limit", kind="int", default="10"),
    )

    def execute(self, context: ResourceContext) -> dict[str, Any]:
        return {
            "id": context.route_variables["id"],
            "fields": context.query_parameters["fields"],
            "limit": context.query_parameters["limit"],
        }


class GetItemText(Resource):
    method = "GET"
    produces = ("text/plain",)

    async def execute(self, context: ResourceContext) -> str:
        return f"item {context.route_variables['id']}"


class ReplaceItem(Resource):
    method = "PUT"
    consumes = ("application/json",)
    produces = ("application/json",)

    async def execute(self, context: ResourceContext) -> Any:
        if context.content_type_in is None:
            return {"replaced": None}
        return {"replaced": context.json()}, 201


class DeleteItem(Resource):
    method = "DELETE"
    produces = ("application/json",)

    def execute(self, context: ResourceContext) -> None:
        return None


class BrokenDefault(Resource):
    method = "GET"
    produces = ("application/json",)
    query = (QueryParameter("page", kind="int", default="first"),)

    def execute(self, context: ResourceContext) -> dict[str, str]:
        return {}


class NoInstance(Resource):
    method = "GET"
    produces = ("application/json",)

    @classmethod
    def factory(cls) -> Resource | None:
        return None


class Explodes(Resource):
    method = "GET"
    produces = ("text/plain",)

    def execute(self, context: ResourceContext) -> str:
        raise RuntimeError("kaboom")


class Teapot(HTTPError):
    def __init__(self) -> None:
        super().__init__(status=418, detail="I'm a teapot", headers=(("X-Brew", "tea"),))


class Brews(Resource):
    method = "GET"
    produces = ("text/plain",)

    async def execute(self, context: ResourceContext) -> str:
        raise Teapot()


class Created(Resource):
    method = "POST"
    consumes = ("text/plain",)
    produces = ("text/plain",)

    def execute(self, context: ResourceContext) -> ResourceResult:
        return ResourceResult(status=201, body=context.text().upper(), headers=(("Location", "/x/1"),))


@resource("GET", produces=("application/json",))
def whoami(context: ResourceContext) -> dict[str, str]:
    return {"slug": context.route_variables["slug"]}


def _app(config: AppConfig | None = None) -> App:
    app = App(config)
    app.route_variable_type("slug", regex_type(r"[a-z0-9-]+"))
    app.endpoint("/items/{id:int}", GetItem, GetItemText, ReplaceItem, DeleteItem)
    app.endpoint("/broken", BrokenDefault)
    app.endpoint("/factory", NoInstance)
    app.endpoint("/explodes", Explodes)
    app.endpoint("/teapot", Brews)
    app.endpoint("/created", Created)
    app.endpoint("/users/{slug:slug}", whoami)
    return app


class TestAppRegistration:
    def test_endpoint_returns_endpoint(self) -> None:
        app = App()
        endpoint = app.endpoint("/items/{id:int}", GetItem, ReplaceItem)
        assert endpoint.pattern == "/items/{id:int}"
        assert endpoint.resources == (GetItem, ReplaceItem)
        assert app.router.endpoints == [endpoint]

    def test_duplicate_pattern(self) -> None:
        app = App()
        app.endpoint("/items", GetItem)
        with pytest.raises(AmbiguousRegistration):
            app.endpoint("/items", GetItemText)

    def test_unregistered_kind(self) -> None:
        app = App()
        with pytest.raises(UnregisteredVariableKind):
            app.endpoint("/users/{name:slug}", whoami)

    def test_duplicate_kind(self) -> None:
        app = App()
        with pytest.raises(DuplicateVariableKind):
            app.route_variable_type("int", regex_type(r"\d+"))

    def test_frozen_after_first_request(self) -> None:
        app = App()
        app._ensure_frozen()
        with pytest.raises(RuntimeError, match="Cannot modify the app"):
            app.endpoint("/late", GetItem)
        with pytest.raises(RuntimeError, match="Cannot modify the app"):
            app.route_variable_type("late", regex_type(r"x"))

    def test_print_router_tree(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="rip.app")
        app = App()
        app.endpoint("/items/{id:int}", GetItem)
        app.print_router_tree()
        assert "{id:int}  [GET GetItem]" in caplog.text


class TestResolution:
    async def test_route_variable_reaches_resource(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/items/42", headers=JSON)
        assert response.status == 200
        assert response.content_type == "application/json"
        assert json.loads(response.text) == {"id": "42", "fields": "all", "limit": "10"}

    async def test_negotiates_second_resource(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/items/7", headers={"Accept": "text/plain"})
        assert response.status == 200
        assert response.content_type == "text/plain"
        assert response.text == "item 7"

    async def test_quality_ordering(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get(
                "/items/7", headers={"Accept": "text/plain;q=0.5, application/json;q=0.9"}
            )
        assert response.content_type == "application/json"

    async def test_wildcard_accept_picks_first_registered(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/items/7", headers={"Accept": "*/*"})
        assert response.content_type == "application/json"

    async def test_custom_variable_kind(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/users/jane-doe", headers=JSON)
        assert json.loads(response.text) == {"slug": "jane-doe"}

    async def test_query_parameters(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/items/1?fields=id&limit=5", headers=JSON)
        assert json.loads(response.text) == {"id": "1", "fields": "id", "limit": "5"}

    async def test_body_with_content_type(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.put(
                "/items/1",
                headers={"Accept": "application/json", "Content-Type": "application/json"},
                body=b'{"name": "rip"}',
            )
        assert response.status == 201
        assert json.loads(response.text) == {"replaced": {"name": "rip"}}

    async def test_no_content_type_no_body(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.put("/items/1", headers=JSON)
        assert response.status == 200
        assert json.loads(response.text) == {"replaced": None}

    async def test_none_is_no_content(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.delete("/items/1", headers=JSON)
        assert response.status == 204
        assert response.body_bytes == b""
        assert response.content_type is None

    async def test_resource_result(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.post(
                "/created",
                headers={"Accept": "text/plain", "Content-Type": "text/plain"},
                body=b"hello",
            )
        assert response.status == 201
        assert response.text == "HELLO"
        assert response.header("location") == "/x/1"


class TestClientErrors:
    @pytest.mark.parametrize(
        ("path", "detail"),
        [
            ("/nothing", "Could not find route for /nothing"),
            ("/items/abc", "Could not find route for /items/abc: 'abc' is not a valid int"),
            ("/items/42/", "Malformed path '/items/42/': empty segment or trailing slash"),
            ("/items//42", "Malformed path '/items//42': empty segment or trailing slash"),
        ],
    )
    async def test_route_errors(self, path: str, detail: str) -> None:
        async with TestClient(_app()) as client:
            response = await client.get(path, headers=JSON)
        assert response.status == 400
        assert response.content_type == "text/plain; charset=utf-8"
        assert response.text == detail

    async def test_missing_accept(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/items/42")
        assert response.status == 400
        assert response.text == "No valid Accept header was given"

    async def test_invalid_accept(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/items/42", headers={"Accept": "*/json"})
        assert response.status == 400

    async def test_invalid_content_type(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.put(
                "/items/42", headers={"Accept": "*/*", "Content-Type": "json"}, body=b"{}"
            )
        assert response.status == 400

    async def test_unacceptable_output(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/items/42", headers={"Accept": "image/png"})
        assert response.status == 400
        assert response.text.startswith("No available resource for GET /items/42")

    async def test_unknown_method_is_no_matching_resource(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.request("PATCH", "/items/42", headers=JSON)
        assert response.status == 400

    async def test_method_is_case_sensitive(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.request("get", "/items/42", headers=JSON)
        assert response.status == 400
        assert response.text.startswith("No available resource for get /items/42")

    async def test_unsupported_content_type(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.put(
                "/items/42", headers={"Accept": "*/*", "Content-Type": "text/xml"}, body=b"<a/>"
            )
        assert response.status == 400

    async def test_body_without_content_type(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.put("/items/42", headers=JSON, body=b'{"name": "rip"}')
        assert response.status == 400
        assert response.text == "Body is not allowed for this resource"

    async def test_invalid_query_kind(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/items/42?limit=ten", headers=JSON)
        assert response.status == 400
        assert response.text == "Query parameter limit must be of kind int"

    async def test_invalid_query_format(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/items/42?fields=name", headers=JSON)
        assert response.status == 400
        assert response.text == "Invalid query parameter fields: Must be one of: all, id"

    async def test_http_error_from_resource(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/teapot", headers={"Accept": "text/plain"})
        assert response.status == 418
        assert response.text == "I'm a teapot"
        assert response.header("X-Brew") == "tea"

    async def test_payload_too_large(self) -> None:
        app = _app(AppConfig(max_content_length=4))
        async with TestClient(app) as client:
            response = await client.post(
                "/created",
                headers={"Accept": "text/plain", "Content-Type": "text/plain"},
                body=b"too long",
            )
        assert response.status == 413


class TestServerErrors:
    async def test_intermediate_node(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/items", headers=JSON)
        assert response.status == 500
        assert response.text == "No endpoint found for route /items"

    async def test_misconfigured_default(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/broken", headers=JSON)
        assert response.status == 500
        assert response.text == "Query parameter page default value must be of kind int"

    async def test_factory_returning_none(self) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/factory", headers=JSON)
        assert response.status == 500
        assert "not a Resource" in response.text

    async def test_unhandled_exception(self, caplog: pytest.LogCaptureFixture) -> None:
        async with TestClient(_app()) as client:
            response = await client.get("/explodes", headers={"Accept": "text/plain"})
        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert "kaboom" in caplog.text

    async def test_unhandled_exception_debug(self) -> None:
        async with TestClient(_app(AppConfig(debug=True))) as client:
            response = await client.get("/explodes", headers={"Accept": "text/plain"})
        assert response.status == 500
        assert "RuntimeError: kaboom" in response.text


class TestConfig:
    async def test_default_accept(self) -> None:
        app = _app(AppConfig(default_accept="text/plain"))
        async with TestClient(app) as client:
            response = await client.get("/items/3")
        assert response.status == 200
        assert response.text == "item 3"

    async def test_docs_path_bypasses_router(self) -> None:
        app = _app(AppConfig(docs_path="/_docs"))
        async with TestClient(app) as client:
            response = await client.get("/_docs")
        assert response.status == 200
        assert response.content_type == "application/json"
        docs = json.loads(response.text)
        patterns = [endpoint["pattern"] for endpoint in docs["endpoints"]]
        assert "/items/{id:int}" in patterns
        items = docs["endpoints"][patterns.index("/items/{id:int}")]
        assert [r["method"] for r in items["resources"]] == ["GET", "GET", "PUT", "DELETE"]

    async def test_request_id_header(self) -> None:
        app = _app(AppConfig(log_request_id=True))
        async with TestClient(app) as client:
            first = await client.get("/items/1", headers=JSON)
            second = await client.get("/nothing", headers=JSON)
        assert first.header("X-Request-Id")
        assert second.header("X-Request-Id")
        assert first.header("X-Request-Id") != second.header("X-Request-Id")

    async def test_no_request_id_by_default(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="rip.server")
        async with TestClient(_app()) as client:
            response = await client.get("/items/1", headers=JSON)
        assert response.header("X-Request-Id") is None
        assert "[o] Request GET /items/1" in caplog.text

    async def test_request_dump_and_duration(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="rip.server")
        app = _app(AppConfig(log_request_dump=True, log_request_duration=True))
        async with TestClient(app) as client:
            await client.get("/items/1?limit=2", headers=JSON)
        assert "=== Request dump ===" in caplog.text
        assert '"url": "/items/1?limit=2"' in caplog.text
        assert "Response duration:" in caplog.text


class TestLifespan:
    async def test_startup_freezes_and_shutdown_acks(self) -> None:
        app = _app()
        incoming = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return incoming.pop(0)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]
        with pytest.raises(RuntimeError):
            app.endpoint("/late", GetItem)
