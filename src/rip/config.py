"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, log_request_id=True, docs_path="/_docs")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 1

    # Documentation endpoint, served instead of routing when the path matches
    docs_path: str | None = None

    # Accept value assumed when the request sends none.
    # None means a missing Accept header is rejected with a 400.
    default_accept: str | None = None

    # Limits
    max_content_length: int = 16 * 1024 * 1024  # 16 MB

    # Diagnostics
    log_request_id: bool = False
    log_request_dump: bool = False
    log_request_duration: bool = False
    log_level: str = "info"
