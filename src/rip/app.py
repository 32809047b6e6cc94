"""rip application class.

Mutable during setup (variable kinds, endpoints).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import logging
import threading

from rip._internal.asgi import Receive, Scope, Send
from rip.config import AppConfig
from rip.resource import Resource
from rip.routing.endpoint import Endpoint
from rip.routing.router import Router
from rip.routing.types import VariableTypeRegistry, VariableValidator
from rip.server.handler import handle_request

logger = logging.getLogger("rip.app")


class App:
    """The rip application.

    Mutable during setup, frozen once serving starts::

        app = App(AppConfig(log_request_id=True))
        app.route_variable_type("slug", regex_type(r"[a-z0-9-]+"))
        app.endpoint("/articles/{slug:slug}", GetArticle, UpdateArticle)

    Registration errors (``AmbiguousRegistration``, ``MalformedPattern``,
    ``UnregisteredVariableKind``, ...) are raised immediately and are
    meant to abort startup.

    Thread safety:
        The setup phase is single-threaded. The freeze transition uses a
        Lock + double-check so exactly one thread freezes the app, even
        when several ASGI workers receive their first request at once.
        After the freeze, the route tree and variable registry are only
        ever read.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_router",
        "_types",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._types: VariableTypeRegistry = VariableTypeRegistry()
        self._router: Router = Router(self._types)
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Registration --

    def route_variable_type(self, kind: str, validator: VariableValidator) -> None:
        """Register a route variable kind usable as ``{name:kind}``.

        Must be called before any pattern that uses *kind*.
        """
        self._check_not_frozen()
        self._types.register(kind, validator)
        logger.debug("New route variable kind: %s", kind)

    def endpoint(self, pattern: str, *resources: type[Resource]) -> Endpoint:
        """Register *resources* under *pattern*.

        Resources are tried in the order given; the first one whose
        method and media types fit the request serves it.
        """
        self._check_not_frozen()
        endpoint = self._router.register(pattern, resources)
        logger.info("New endpoint: %s", pattern)
        return endpoint

    @property
    def router(self) -> Router:
        return self._router

    def print_router_tree(self) -> None:
        """Log the route tree (debug aid)."""
        logger.info("=== Router tree ===")
        for line in self._router.format_tree().splitlines():
            logger.info("%s", line)
        logger.info("=== End of router tree ===")

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the app and serve it with pounce."""
        self._ensure_frozen()

        from rip.server.dev import run_server

        _host = host or self.config.host
        _port = port or self.config.port
        logger.info("=== Listening on %s:%d", _host, _port)
        run_server(
            self,
            _host,
            _port,
            workers=self.config.workers,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            config=self.config,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol: freeze at startup, ack shutdown."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                self._ensure_frozen()
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Freeze the route tree. MUST only be called while holding _freeze_lock."""
        self._router.compile()
        self._frozen = True
        logger.debug("App frozen with %d endpoint(s)", len(self._router.endpoints))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register variable kinds and endpoints before calling app.run()."
            )
            raise RuntimeError(msg)
