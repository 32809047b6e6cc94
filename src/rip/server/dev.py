"""Serve a rip App with pounce.

The transport (accept loop, HTTP parsing, response writing) belongs
to the ASGI server; rip only supplies the ASGI callable.
"""


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    log_level: str = "info",
    app_path: str | None = None,
) -> None:
    """Start a pounce server with the given rip App.

    Args:
        app: ASGI callable (rip App instance).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count.
        reload: Enable auto-reload on file changes.
        log_level: Log level (debug, info, warning, error, critical).
        app_path: Optional ``"module:attribute"`` import string. When
            provided, pounce reimports the app on each reload cycle.

    Requires the ``server`` extra (``pip install rip-rest[server]``).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        reload=reload,
        log_level=log_level,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
