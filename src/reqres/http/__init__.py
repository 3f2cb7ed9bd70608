"""
=============================================================================
HTTP REQUEST / RESPONSE WRAPPERS
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST CONTEXT (request.py)                                        │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Read access to one inbound request                                  │
    │   • URI with and without query string                               │
    │   • Header lookup (exact, HTTP_*, injected header source)           │
    │   • Query / body / custom parameters and their merged view          │
    │   • Lazy single-read body                                           │
    │   • Client IP, HTTPS and Ajax checks                                │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ RESPONSE BUILDER (response.py)                                      │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Status, headers and body written to a Transport                     │
    │   • Registry-validated status codes                                 │
    │   • Override / keep-existing header merging                         │
    │   • send(), send_headers(), redirect()                              │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ TRANSPORT (transport.py)         STATUS CODES (status_codes.py)     │
    │ Outbound sink + memory buffer    Fixed registry + redirect set      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import RequestContext, BodyState
from .response import ResponseBuilder
from .status_codes import HTTPStatus, REDIRECT_STATUSES, is_known_status, lookup_status
from .transport import Transport, BufferedTransport

__all__ = [
    # Request
    "RequestContext",
    "BodyState",

    # Response
    "ResponseBuilder",

    # Transport
    "Transport",
    "BufferedTransport",

    # Status codes
    "HTTPStatus",
    "REDIRECT_STATUSES",
    "is_known_status",
    "lookup_status",
]
