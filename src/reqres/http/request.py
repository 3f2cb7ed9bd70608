"""
=============================================================================
REQUEST CONTEXT
=============================================================================

Read-only view over one inbound request, built from what the host hands us.

The host (WSGI server, CGI runner, test harness) supplies:

    ┌─────────────────────────────────────────────────────────────────────┐
    │  environ        CGI-style metadata                                  │
    │                 REQUEST_METHOD, REQUEST_URI, REMOTE_ADDR, HTTPS,    │
    │                 HTTP_* headers                                      │
    │  query_params   decoded query string   {"page": "1"}                │
    │  body_params    decoded form body      {"name": "Joe"}              │
    │  body_reader    callable returning the raw body (read once)         │
    │  header_source  optional callable returning every request header    │
    └─────────────────────────────────────────────────────────────────────┘

Nothing is read from process globals, so a context is fully determined by
its constructor arguments.

=============================================================================
PARAMETER OVERLAY
=============================================================================

Three parameter sources are merged into one view. Later sources win:

    query_params  ──►  body_params  ──►  custom params (set_param)
       {a: 1}            {a: 2}              {a: 3}
                                                │
                                                ▼
                                      get_param("a") == 3

The per-source maps stay untouched, so get_param_get("a") is still 1.

=============================================================================
BODY CACHE
=============================================================================

The body reader is called at most once. The outcome is remembered as one
of three states:

    NOT_READ  ──get_body()──►  ABSENT              (nothing useful)
                          └─►  PRESENT(body)

An empty read is ABSENT. A whitespace-only read is ABSENT too unless
HTTPConfig.keep_whitespace_body is set.

=============================================================================
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Union

from ..config import HTTPConfig
from ..errors import RequestMethodNotSetError


logger = logging.getLogger(__name__)


BodyReader = Callable[[], Union[str, bytes, None]]
HeaderSource = Callable[[], Mapping[str, str]]


class BodyState(Enum):
    """Where the body cache stands."""

    NOT_READ = "not_read"
    ABSENT = "absent"
    PRESENT = "present"


@dataclass
class RequestContext:
    """
    One inbound request.

    Build it once at the start of request handling and discard it at the
    end. Only set_param() and the lazy body read change its state.
    environ, query_params and body_params are read-only views.

    Example:
        request = RequestContext(
            environ={"REQUEST_METHOD": "GET", "REQUEST_URI": "/users?page=2"},
            query_params={"page": "2"},
        )
        request.get_request_uri()     # "/users"
        request.get_param("page")     # "2"
    """

    environ: Mapping[str, Any] = field(default_factory=dict)
    query_params: Mapping[str, Any] = field(default_factory=dict)
    body_params: Mapping[str, Any] = field(default_factory=dict)
    body_reader: Optional[BodyReader] = field(default=None, repr=False)
    header_source: Optional[HeaderSource] = field(default=None, repr=False)
    config: HTTPConfig = field(default_factory=HTTPConfig, repr=False)

    _custom_params: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    _params: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    _body_state: BodyState = field(default=BodyState.NOT_READ, init=False, repr=False)
    _body: Optional[str] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        # Read-only snapshots: neither the host nor a caller can change them
        # after the overlay below is built.
        self.environ = MappingProxyType(dict(self.environ or {}))
        self.query_params = MappingProxyType(dict(self.query_params or {}))
        self.body_params = MappingProxyType(dict(self.body_params or {}))
        if self.config is None:
            self.config = HTTPConfig()

        self._params = {}
        self._params.update(self.query_params)
        self._params.update(self.body_params)

    # =========================================================================
    # URI AND TRANSPORT
    # =========================================================================

    def get_request_uri(self) -> str:
        """
        Request path without the query string.

            REQUEST_URI="/contact-us?ref=nav"  →  "/contact-us"
            (missing)                          →  "/"
        """
        return self.get_raw_request_uri().split("?", 1)[0]

    def get_raw_request_uri(self) -> str:
        """Request target as received, query string included."""
        if "REQUEST_URI" in self.environ:
            return self.environ["REQUEST_URI"]
        return "/"

    def is_https_request(self) -> bool:
        """True when the host flagged the request as HTTPS (any value but "off")."""
        https = self.environ.get("HTTPS")
        if not https or https == "off":
            return False
        return True

    # =========================================================================
    # HEADERS
    # =========================================================================

    def get_header(self, name: str, default: Any = None) -> Any:
        """
        Look up a request header.

        Lookup order:
            1. environ[name]                     (exact key)
            2. environ["HTTP_" + NAME]           ("X-Foo" → "HTTP_X_FOO")
            3. header_source()[name]             (if a source was injected)
            4. case-insensitive scan of header_source()

        Args:
            name: Header name in any case, dashes or underscores
            default: Returned when the name is empty or nothing matches

        Returns:
            Header value or default
        """
        if not name:
            return default

        if name in self.environ:
            return self.environ[name]

        cgi_name = "HTTP_" + name.replace("-", "_").upper()
        if cgi_name in self.environ:
            return self.environ[cgi_name]

        if self.header_source is not None:
            headers = self.header_source()
            if name in headers:
                return headers[name]
            wanted = name.lower()
            for key, value in headers.items():
                if key.lower() == wanted:
                    return value

        return default

    def is_xml_http_request(self) -> bool:
        """Is this an Ajax request (X-Requested-With: XMLHttpRequest)?"""
        return self.get_header("X-Requested-With") == "XMLHttpRequest"

    # =========================================================================
    # METHOD
    # =========================================================================

    def get_request_method(self) -> str:
        """
        Return REQUEST_METHOD verbatim.

        Raises:
            RequestMethodNotSetError: If the host did not supply a method.
        """
        if "REQUEST_METHOD" in self.environ:
            return self.environ["REQUEST_METHOD"]

        raise RequestMethodNotSetError('Request method not present in key: "REQUEST_METHOD"')

    def is_get(self) -> bool:
        return self.get_request_method().upper() == "GET"

    def is_post(self) -> bool:
        return self.get_request_method().upper() == "POST"

    def is_put(self) -> bool:
        return self.get_request_method().upper() == "PUT"

    def is_delete(self) -> bool:
        return self.get_request_method().upper() == "DELETE"

    # =========================================================================
    # PARAMETERS
    # =========================================================================

    def set_param(self, name: str, value: Any) -> "RequestContext":
        """
        Add a custom parameter.

        Custom values win over query and body values in get_param().

        Returns:
            Self for method chaining
        """
        self._custom_params[name] = value
        self._params[name] = value
        return self

    def get_params(self) -> Dict[str, Any]:
        """All parameters merged: query, then body, then custom."""
        return dict(self._params)

    def get_get_params(self) -> Dict[str, Any]:
        return dict(self.query_params)

    def get_post_params(self) -> Dict[str, Any]:
        return dict(self.body_params)

    def get_user_params(self) -> Dict[str, Any]:
        """Parameters added with set_param()."""
        return dict(self._custom_params)

    def get_param_get(self, name: str, default: Any = None) -> Any:
        return self.query_params.get(name, default)

    def get_param_post(self, name: str, default: Any = None) -> Any:
        return self.body_params.get(name, default)

    def get_param_custom(self, name: str, default: Any = None) -> Any:
        return self._custom_params.get(name, default)

    def get_param(self, name: str, default: Any = None) -> Any:
        """
        Look up a parameter in the merged view.

        Example:
            # ?a=get, form a=post, set_param("a", "custom")
            request.get_param("a")        # "custom"
            request.get_param_get("a")    # "get"
        """
        return self._params.get(name, default)

    # =========================================================================
    # BODY
    # =========================================================================

    @property
    def body_state(self) -> BodyState:
        return self._body_state

    def get_body(self) -> Optional[str]:
        """
        Raw request body, or None when there is none.

        The reader runs on first call only; the outcome (including "no
        body") is cached for the lifetime of the request.
        """
        if self._body_state is BodyState.NOT_READ:
            self._read_body()

        if self._body_state is BodyState.PRESENT:
            return self._body
        return None

    def get_raw_body(self) -> Optional[str]:
        """Alias for get_body()."""
        return self.get_body()

    def _read_body(self) -> None:
        raw = self.body_reader() if self.body_reader is not None else None

        if isinstance(raw, bytes):
            raw = raw.decode(self.config.body_encoding, errors="replace")

        if not raw:
            self._body_state = BodyState.ABSENT
        elif not raw.strip() and not self.config.keep_whitespace_body:
            self._body_state = BodyState.ABSENT
        else:
            self._body_state = BodyState.PRESENT
            self._body = raw

        logger.debug(f"Request body read: {self._body_state.value}")

    # =========================================================================
    # CLIENT
    # =========================================================================

    def get_ip(self) -> Optional[str]:
        """
        Client IP address.

        Priority:
            1. X-Forwarded-For  (set by proxies, returned verbatim)
            2. Client-IP
            3. REMOTE_ADDR      (transport peer)
        """
        if "HTTP_X_FORWARDED_FOR" in self.environ:
            return self.environ["HTTP_X_FORWARDED_FOR"]
        if "HTTP_CLIENT_IP" in self.environ:
            return self.environ["HTTP_CLIENT_IP"]
        return self.environ.get("REMOTE_ADDR")

    def get_client_ip(self) -> Optional[str]:
        """Alias for get_ip()."""
        return self.get_ip()
