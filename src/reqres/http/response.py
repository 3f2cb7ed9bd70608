"""
=============================================================================
RESPONSE BUILDER
=============================================================================

Accumulates a status, headers and a body, then writes them to a Transport.

=============================================================================
RESPONSE LIFECYCLE
=============================================================================

    ┌──────────┐   set_status / set_header / set_body   ┌──────────┐
    │  Unsent  │ ─────────────────────────────────────► │  Unsent  │
    └──────────┘                                        └────┬─────┘
                                                             │
                          send() | send_headers() | redirect()
                                                             │
                                                             ▼
                                                        ┌──────────┐
                                                        │   Sent   │
                                                        └──────────┘

A second send-family call raises ResponseAlreadySentError unless
HTTPConfig.strict_send is False.

=============================================================================
STATUS VALIDATION
=============================================================================

Every status assignment goes through the registry in status_codes.py:

    response.set_status(404)   # OK, stored as HTTPStatus.NOT_FOUND
    response.set_status(999)   # InvalidStatusCodeError, status unchanged

=============================================================================
REDIRECTS
=============================================================================

301, 302 and 307 can only be sent through redirect():

    response.redirect("/login")          # 302 + Location, no body
    response.redirect("/new", 301)       # permanent
    response.redirect("/x", 200)         # InvalidRedirectStatusCodeError

    response.set_status(301)
    response.send_headers()              # InvalidRedirectStatusCodeError

redirect() does not end request processing. The caller stops its handler
after calling it.

=============================================================================
"""

import logging
from typing import Any, Dict, Optional

from ..config import HTTPConfig
from ..errors import (
    InvalidHeaderError,
    InvalidRedirectStatusCodeError,
    InvalidStatusCodeError,
    ResponseAlreadySentError,
)
from .status_codes import HTTPStatus, REDIRECT_STATUSES, lookup_status
from .transport import BufferedTransport, Transport


logger = logging.getLogger(__name__)


def _check_header(name: str, value: Any) -> None:
    if any(c in str(name) or c in str(value) for c in ("\r", "\n")):
        raise InvalidHeaderError(
            f"Header \"{name}\" contains a line break",
            header_name=str(name),
        )


class ResponseBuilder:
    """
    One outbound response.

    Setters return self, so a response can be built fluently:

        (ResponseBuilder(transport)
            .set_status(201)
            .set_header("Content-Type", "application/json")
            .set_body('{"id": 7}')
            .send())
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        config: Optional[HTTPConfig] = None,
    ):
        """
        Args:
            transport: Where send-family methods write. Defaults to a new
                       BufferedTransport.
            config: Layer settings (status line protocol, duplicate send
                    policy). Defaults to HTTPConfig().
        """
        self.config = config or HTTPConfig()
        self.transport = transport if transport is not None else BufferedTransport()
        self._headers: Dict[str, str] = {}
        self._body: str = ""
        self._status: HTTPStatus = HTTPStatus.OK
        self._sent = False

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    def get_headers(self) -> Dict[str, str]:
        return dict(self._headers)

    def get_body(self) -> str:
        return self._body

    def get_status(self) -> HTTPStatus:
        return self._status

    @property
    def sent(self) -> bool:
        """Whether a send-family method has written to the transport."""
        return self._sent

    @property
    def status_line(self) -> str:
        """
        Status line for the current status.

            "HTTP/1.0 200 OK"
        """
        return f"{self.config.http_version} {int(self._status)} {self._status.phrase}"

    # =========================================================================
    # SETTERS
    # =========================================================================

    def set_headers(self, headers: Dict[str, Any], override: bool = True) -> "ResponseBuilder":
        """
        Set several headers at once.

        Args:
            headers: Header name → value
            override: True replaces the whole header map. False only adds
                      names that are not set yet; existing values are kept.

        Example:
            response.set_headers({"A": "1"}, override=False)
            response.set_headers({"A": "2", "B": "3"}, override=False)
            response.get_headers()   # {"A": "1", "B": "3"}
        """
        for name, value in headers.items():
            _check_header(name, value)

        if override:
            self._headers = dict(headers)
        else:
            merged = dict(headers)
            merged.update(self._headers)
            self._headers = merged
        return self

    def set_header(self, name: str, value: Any, override: bool = True) -> "ResponseBuilder":
        """Set one header. With override=False an existing value is kept."""
        _check_header(name, value)
        if not override and name in self._headers:
            return self

        self._headers[name] = value
        return self

    def set_body(self, body: str) -> "ResponseBuilder":
        self._body = body
        return self

    def set_status(self, status: Any) -> "ResponseBuilder":
        """
        Set the status code.

        Args:
            status: HTTPStatus member, integer, or digit string

        Raises:
            InvalidStatusCodeError: If the code is not registered. The
                                    current status is left unchanged.
        """
        try:
            self._status = lookup_status(status)
        except (TypeError, ValueError):
            raise InvalidStatusCodeError(
                f'Status code of "{status}" is invalid.',
                status_code=status,
            ) from None

        logger.debug(f"Response status set to {int(self._status)}")
        return self

    # =========================================================================
    # SENDING
    # =========================================================================

    def send(self) -> None:
        """
        Write the full response: status line, headers, then body.

        Body data already written to the transport is discarded first.

        Raises:
            InvalidRedirectStatusCodeError: If the status is 301, 302 or 307.
            ResponseAlreadySentError: On a repeated send (strict mode).
        """
        self._ensure_unsent()
        self.transport.clear_output()
        self.send_headers()
        self.transport.write(self._body)
        logger.debug(f"Response sent: {int(self._status)}, {len(self._body)} chars")

    def send_headers(self) -> None:
        """
        Write the status line and every header.

        Raises:
            InvalidRedirectStatusCodeError: If the status is 301, 302 or 307.
            ResponseAlreadySentError: On a repeated send (strict mode).
        """
        self._ensure_unsent()

        if self._status in REDIRECT_STATUSES:
            raise InvalidRedirectStatusCodeError(
                "You cannot send a redirect using a regular response. "
                "Use response.redirect(url, status)",
                status_code=int(self._status),
            )

        self._write_head()

    def clean_headers(self) -> None:
        """
        Drop headers staged on the transport.

        The builder's own header map is not touched.
        """
        self.transport.clear_headers()

    def redirect(self, url: str, status: Any = HTTPStatus.FOUND) -> None:
        """
        Send a redirect: status line and headers, no body.

        The status is stored before it is checked, so a failed call with a
        registered non-redirect code (e.g. 200) still leaves that code set.

        Args:
            url: Value for the Location header
            status: 301, 302 (default) or 307

        Raises:
            InvalidStatusCodeError: If status is not registered at all.
            InvalidRedirectStatusCodeError: If status is not 301, 302 or 307.
            ResponseAlreadySentError: On a repeated send (strict mode).
        """
        self._ensure_unsent()
        self.set_status(status)

        if self._status not in REDIRECT_STATUSES:
            raise InvalidRedirectStatusCodeError(
                f'Invalid redirect status specified: "{status}"',
                status_code=int(self._status),
            )

        self.set_header("Location", url)
        self.clean_headers()
        self._write_head()
        logger.debug(f"Redirect {int(self._status)} to {url}")

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _ensure_unsent(self) -> None:
        # A transport shared with another writer may already carry a response.
        if (self._sent or self.transport.headers_sent) and self.config.strict_send:
            logger.warning("Duplicate send attempted on a response")
            raise ResponseAlreadySentError("Response has already been sent")

    def _write_head(self) -> None:
        self.transport.set_status_line(self.status_line)
        for name, value in self._headers.items():
            self.transport.add_header(name, str(value))
        self._sent = True
