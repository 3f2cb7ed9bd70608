"""
=============================================================================
REQRES - Thin HTTP Request/Response Wrappers
=============================================================================

A small layer that sits under an application's controller code:

    RequestContext   wraps what the host knows about the inbound request
    ResponseBuilder  collects status, headers and body and writes them out

It does no routing, sessions, templating or connection handling. Those
belong to the host server or framework.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    reqres/
    ├── __init__.py          # This file - package exports
    ├── config.py            # HTTPConfig dataclass, logging setup
    ├── errors.py            # Exception hierarchy
    ├── wsgi.py              # WSGI environ → RequestContext, WSGI app wrapper
    └── http/
        ├── request.py       # RequestContext
        ├── response.py      # ResponseBuilder
        ├── transport.py     # Transport ABC, BufferedTransport
        └── status_codes.py  # HTTPStatus registry

=============================================================================
QUICK START
=============================================================================

    from reqres import WSGIApplication

    def handler(request, response):
        if request.get_param("legacy"):
            response.redirect("/new", 301)
            return
        response.set_header("Content-Type", "text/plain")
        response.set_body(f"Hello {request.get_param('name', 'world')}")

    application = WSGIApplication(handler)

=============================================================================
"""

__version__ = "1.0.0"

from .config import HTTPConfig, configure_logging
from .errors import (
    ReqresError,
    RequestMethodNotSetError,
    InvalidStatusCodeError,
    InvalidRedirectStatusCodeError,
    ResponseAlreadySentError,
    RequestBodyTooLargeError,
    InvalidHeaderError,
)
from .http import (
    RequestContext,
    BodyState,
    ResponseBuilder,
    Transport,
    BufferedTransport,
    HTTPStatus,
    REDIRECT_STATUSES,
)
from .wsgi import WSGIApplication, request_from_environ

__all__ = [
    "__version__",

    # Configuration
    "HTTPConfig",
    "configure_logging",

    # Errors
    "ReqresError",
    "RequestMethodNotSetError",
    "InvalidStatusCodeError",
    "InvalidRedirectStatusCodeError",
    "ResponseAlreadySentError",
    "RequestBodyTooLargeError",
    "InvalidHeaderError",

    # HTTP
    "RequestContext",
    "BodyState",
    "ResponseBuilder",
    "Transport",
    "BufferedTransport",
    "HTTPStatus",
    "REDIRECT_STATUSES",

    # WSGI
    "WSGIApplication",
    "request_from_environ",
]
