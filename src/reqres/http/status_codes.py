"""
=============================================================================
HTTP STATUS CODE REGISTRY
=============================================================================

The fixed table of status codes a response is allowed to carry.

Any code not listed here is rejected by ResponseBuilder.set_status(). The
table is deliberately closed: it includes a few historical and vendor codes
(306 Switch Proxy, 449 Retry With, 450, 509) and leaves out several newer
ones (308, 429, 451, ...). Applications relying on a code outside the table
must pick the nearest registered one.

=============================================================================
REGISTRY LAYOUT
=============================================================================

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  1xx   │ 100, 101, 102                                             │
    │  2xx   │ 200 - 207                                                 │
    │  3xx   │ 300 - 307                                                 │
    │  4xx   │ 400 - 418, 422 - 426, 449, 450                            │
    │  5xx   │ 500 - 507, 509, 510                                       │
    └────────┴───────────────────────────────────────────────────────────┘

Only three codes count as REDIRECT-CLASS for ResponseBuilder.redirect():

    301 Moved Permanently
    302 Found
    307 Temporary Redirect

303 and 305 are in the 3xx range but are not accepted as redirect targets.

=============================================================================
"""

from enum import IntEnum
from typing import Any


class HTTPStatus(IntEnum):
    """
    Registered HTTP status codes.

    Members compare equal to plain integers, so a stored status can be
    checked against literals:

        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    # 1xx INFORMATIONAL
    CONTINUE = 100
    SWITCHING_PROTOCOLS = 101
    PROCESSING = 102

    # 2xx SUCCESS
    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NON_AUTHORITATIVE_INFORMATION = 203
    NO_CONTENT = 204
    RESET_CONTENT = 205
    PARTIAL_CONTENT = 206
    MULTI_STATUS = 207

    # 3xx REDIRECTION
    MULTIPLE_CHOICES = 300
    MOVED_PERMANENTLY = 301
    FOUND = 302
    SEE_OTHER = 303
    NOT_MODIFIED = 304
    USE_PROXY = 305
    SWITCH_PROXY = 306             # Obsolete, kept for older clients
    TEMPORARY_REDIRECT = 307

    # 4xx CLIENT ERRORS
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    PAYMENT_REQUIRED = 402
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    NOT_ACCEPTABLE = 406
    PROXY_AUTHENTICATION_REQUIRED = 407
    REQUEST_TIMEOUT = 408
    CONFLICT = 409
    GONE = 410
    LENGTH_REQUIRED = 411
    PRECONDITION_FAILED = 412
    REQUEST_ENTITY_TOO_LARGE = 413
    REQUEST_URI_TOO_LONG = 414
    UNSUPPORTED_MEDIA_TYPE = 415
    REQUESTED_RANGE_NOT_SATISFIABLE = 416
    EXPECTATION_FAILED = 417
    IM_A_TEAPOT = 418
    UNPROCESSABLE_ENTITY = 422
    LOCKED = 423
    FAILED_DEPENDENCY = 424
    UNORDERED_COLLECTION = 425
    UPGRADE_REQUIRED = 426
    RETRY_WITH = 449                # Microsoft extension
    BLOCKED_BY_PARENTAL_CONTROLS = 450  # Microsoft extension

    # 5xx SERVER ERRORS
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504
    HTTP_VERSION_NOT_SUPPORTED = 505
    VARIANT_ALSO_NEGOTIATES = 506
    INSUFFICIENT_STORAGE = 507
    BANDWIDTH_LIMIT_EXCEEDED = 509
    NOT_EXTENDED = 510

    @property
    def phrase(self) -> str:
        """Reason phrase written after the code in the status line."""
        return _STATUS_PHRASES[self]

    @property
    def is_informational(self) -> bool:
        return 100 <= self < 200

    @property
    def is_success(self) -> bool:
        return 200 <= self < 300

    @property
    def is_redirect(self) -> bool:
        """
        True for any 3xx code.

        Note this is wider than REDIRECT_STATUSES, which is what
        ResponseBuilder.redirect() actually accepts.
        """
        return 300 <= self < 400

    @property
    def is_client_error(self) -> bool:
        return 400 <= self < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self < 600

    @property
    def is_error(self) -> bool:
        return self >= 400


_STATUS_PHRASES = {
    HTTPStatus.CONTINUE: "Continue",
    HTTPStatus.SWITCHING_PROTOCOLS: "Switching Protocols",
    HTTPStatus.PROCESSING: "Processing",

    HTTPStatus.OK: "OK",
    HTTPStatus.CREATED: "Created",
    HTTPStatus.ACCEPTED: "Accepted",
    HTTPStatus.NON_AUTHORITATIVE_INFORMATION: "Non-Authoritative Information",
    HTTPStatus.NO_CONTENT: "No Content",
    HTTPStatus.RESET_CONTENT: "Reset Content",
    HTTPStatus.PARTIAL_CONTENT: "Partial Content",
    HTTPStatus.MULTI_STATUS: "Multi-Status",

    HTTPStatus.MULTIPLE_CHOICES: "Multiple Choices",
    HTTPStatus.MOVED_PERMANENTLY: "Moved Permanently",
    HTTPStatus.FOUND: "Found",
    HTTPStatus.SEE_OTHER: "See Other",
    HTTPStatus.NOT_MODIFIED: "Not Modified",
    HTTPStatus.USE_PROXY: "Use Proxy",
    HTTPStatus.SWITCH_PROXY: "Switch Proxy",
    HTTPStatus.TEMPORARY_REDIRECT: "Temporary Redirect",

    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.UNAUTHORIZED: "Unauthorized",
    HTTPStatus.PAYMENT_REQUIRED: "Payment Required",
    HTTPStatus.FORBIDDEN: "Forbidden",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HTTPStatus.NOT_ACCEPTABLE: "Not Acceptable",
    HTTPStatus.PROXY_AUTHENTICATION_REQUIRED: "Proxy Authentication Required",
    HTTPStatus.REQUEST_TIMEOUT: "Request Timeout",
    HTTPStatus.CONFLICT: "Conflict",
    HTTPStatus.GONE: "Gone",
    HTTPStatus.LENGTH_REQUIRED: "Length Required",
    HTTPStatus.PRECONDITION_FAILED: "Precondition Failed",
    HTTPStatus.REQUEST_ENTITY_TOO_LARGE: "Request Entity Too Large",
    HTTPStatus.REQUEST_URI_TOO_LONG: "Request-URI Too Long",
    HTTPStatus.UNSUPPORTED_MEDIA_TYPE: "Unsupported Media Type",
    HTTPStatus.REQUESTED_RANGE_NOT_SATISFIABLE: "Requested Range Not Satisfiable",
    HTTPStatus.EXPECTATION_FAILED: "Expectation Failed",
    HTTPStatus.IM_A_TEAPOT: "I'm a teapot",
    HTTPStatus.UNPROCESSABLE_ENTITY: "Unprocessable Entity",
    HTTPStatus.LOCKED: "Locked",
    HTTPStatus.FAILED_DEPENDENCY: "Failed Dependency",
    HTTPStatus.UNORDERED_COLLECTION: "Unordered Collection",
    HTTPStatus.UPGRADE_REQUIRED: "Upgrade Required",
    HTTPStatus.RETRY_WITH: "Retry With",
    HTTPStatus.BLOCKED_BY_PARENTAL_CONTROLS: "Blocked by Windows Parental Controls",

    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
    HTTPStatus.NOT_IMPLEMENTED: "Not Implemented",
    HTTPStatus.BAD_GATEWAY: "Bad Gateway",
    HTTPStatus.SERVICE_UNAVAILABLE: "Service Unavailable",
    HTTPStatus.GATEWAY_TIMEOUT: "Gateway Timeout",
    HTTPStatus.HTTP_VERSION_NOT_SUPPORTED: "HTTP Version Not Supported",
    HTTPStatus.VARIANT_ALSO_NEGOTIATES: "Variant Also Negotiates",
    HTTPStatus.INSUFFICIENT_STORAGE: "Insufficient Storage",
    HTTPStatus.BANDWIDTH_LIMIT_EXCEEDED: "Bandwidth Limit Exceeded",
    HTTPStatus.NOT_EXTENDED: "Not Extended",
}


# Statuses accepted by ResponseBuilder.redirect() and refused by
# ResponseBuilder.send_headers().
REDIRECT_STATUSES = frozenset({
    HTTPStatus.MOVED_PERMANENTLY,
    HTTPStatus.FOUND,
    HTTPStatus.TEMPORARY_REDIRECT,
})


def lookup_status(code: Any) -> HTTPStatus:
    """
    Resolve a status code to its registry member.

    Accepts HTTPStatus members, plain integers and digit strings ("404").

    Raises:
        ValueError: If the code is not in the registry.
        TypeError: If the value cannot be read as an integer code.
    """
    if isinstance(code, bool):
        raise TypeError(f"Not a status code: {code!r}")
    if isinstance(code, str):
        code = code.strip()
        if not code.isdigit():
            raise ValueError(f"Not a status code: {code!r}")
        code = int(code)
    if not isinstance(code, int):
        raise TypeError(f"Not a status code: {code!r}")
    return HTTPStatus(code)


def is_known_status(code: Any) -> bool:
    """Check whether a code is registered, without raising."""
    try:
        lookup_status(code)
    except (TypeError, ValueError):
        return False
    return True
