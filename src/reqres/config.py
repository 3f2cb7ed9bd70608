"""
=============================================================================
LAYER CONFIGURATION
=============================================================================

Centralized settings for the request and response wrappers.

Every component takes an optional `config` argument and falls back to
HTTPConfig() when none is given, so the defaults below are what an
application gets out of the box.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │   Priority (highest to lowest):                                     │
    │                                                                     │
    │   1. Values passed in code                                          │
    │      └── HTTPConfig(strict_send=False)                              │
    │                                                                     │
    │   2. Environment variables                                          │
    │      └── REQRES_STRICT_SEND=false  +  HTTPConfig.from_env()         │
    │                                                                     │
    │   3. Default values (in this dataclass)                             │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import logging
import os
from dataclasses import dataclass


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {name}: {raw!r}")


@dataclass
class HTTPConfig:
    """
    Settings shared by RequestContext, ResponseBuilder and the WSGI adapter.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    RESPONSE
    - http_version, strict_send

    REQUEST BODY
    - keep_whitespace_body, body_encoding, max_body_size

    LOGGING
    - log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # RESPONSE
    # ─────────────────────────────────────────────────────────────────────

    http_version: str = "HTTP/1.0"
    """
    Protocol token written at the start of every status line.
    "HTTP/1.0 200 OK" by default.
    """

    strict_send: bool = True
    """
    Reject a second send(), send_headers() or redirect() on the same
    response with ResponseAlreadySentError. When False, a repeated send
    writes to the transport again.
    """

    # ─────────────────────────────────────────────────────────────────────
    # REQUEST BODY
    # ─────────────────────────────────────────────────────────────────────

    keep_whitespace_body: bool = False
    """
    When False, a body made only of whitespace is reported as absent
    (get_body() returns None). When True it is returned as-is.
    """

    body_encoding: str = "utf-8"
    """Encoding used to decode a body reader that yields bytes."""

    max_body_size: int = 10 * 1024 * 1024  # 10 MB
    """Largest body the WSGI adapter reads from wsgi.input."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Level applied to the "reqres" logger by configure_logging()."""

    @classmethod
    def from_env(cls) -> "HTTPConfig":
        """
        Create configuration from environment variables.

            REQRES_HTTP_VERSION           Status line protocol (HTTP/1.0)
            REQRES_STRICT_SEND            Reject duplicate sends (true)
            REQRES_KEEP_WHITESPACE_BODY   Keep whitespace-only bodies (false)
            REQRES_BODY_ENCODING          Body decoding (utf-8)
            REQRES_MAX_BODY_SIZE          Max body bytes (10485760)
            REQRES_LOG_LEVEL              Logging level (INFO)
        """
        return cls(
            http_version=os.getenv("REQRES_HTTP_VERSION", "HTTP/1.0"),
            strict_send=_env_bool("REQRES_STRICT_SEND", True),
            keep_whitespace_body=_env_bool("REQRES_KEEP_WHITESPACE_BODY", False),
            body_encoding=os.getenv("REQRES_BODY_ENCODING", "utf-8"),
            max_body_size=int(os.getenv("REQRES_MAX_BODY_SIZE", str(10 * 1024 * 1024))),
            log_level=os.getenv("REQRES_LOG_LEVEL", "INFO"),
        )

    def validate(self) -> None:
        """Fail fast on settings that would break at first use."""
        if self.http_version not in ("HTTP/1.0", "HTTP/1.1"):
            raise ValueError(f"Unsupported http_version: {self.http_version}")

        if self.max_body_size < 0:
            raise ValueError("max_body_size must be >= 0")

        try:
            "".encode(self.body_encoding)
        except LookupError:
            raise ValueError(f"Unknown body_encoding: {self.body_encoding}")

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log_level: {self.log_level}")


def configure_logging(config: HTTPConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("reqres").setLevel(level)
