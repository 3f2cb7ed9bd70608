"""
=============================================================================
WSGI ADAPTER
=============================================================================

Glue between a WSGI server and the request/response wrappers.

    WSGI server                    reqres                       Application
    ───────────                    ──────                       ───────────
    environ ─────► request_from_environ() ─► RequestContext ─┐
                                                             ├─► handler(request, response)
    start_response ◄── BufferedTransport ◄── ResponseBuilder ┘

=============================================================================
ENVIRON MAPPING
=============================================================================

    REQUEST_URI     kept if the server sets it, otherwise rebuilt from
                    SCRIPT_NAME + PATH_INFO [+ "?" + QUERY_STRING]
    HTTPS           kept if set, otherwise "on" when wsgi.url_scheme is https
    QUERY_STRING    parsed into query params (last value wins)
    wsgi.input      read once, at most CONTENT_LENGTH bytes
    form bodies     application/x-www-form-urlencoded is parsed into body
                    params; other content types are left to get_body()

Only string-valued keys are copied into the request environ. Server
objects (wsgi.input, wsgi.errors, ...) stay out of it.

=============================================================================
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, quote

from .config import HTTPConfig
from .errors import RequestBodyTooLargeError
from .http.request import RequestContext
from .http.response import ResponseBuilder
from .http.status_codes import HTTPStatus
from .http.transport import BufferedTransport


logger = logging.getLogger(__name__)


Handler = Callable[[RequestContext, ResponseBuilder], None]
StartResponse = Callable[[str, List[Tuple[str, str]]], Any]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Characters left unescaped when rebuilding REQUEST_URI from PATH_INFO.
_PATH_SAFE = "/:@!$&'()*+,;=-._~"


class _InputReader:
    """Reads wsgi.input once and keeps the bytes."""

    def __init__(self, environ: Mapping[str, Any], max_size: int):
        self._stream = environ.get("wsgi.input")
        self._length = _content_length(environ)
        self._max_size = max_size
        self._data: Optional[bytes] = None

    def __call__(self) -> bytes:
        if self._data is None:
            self._data = self._read()
        return self._data

    def _read(self) -> bytes:
        if self._stream is None or self._length <= 0:
            return b""

        if self._length > self._max_size:
            raise RequestBodyTooLargeError(
                f"Request body too large: {self._length} bytes",
                content_length=self._length,
            )

        return self._stream.read(self._length)


def _content_length(environ: Mapping[str, Any]) -> int:
    try:
        return int(environ.get("CONTENT_LENGTH") or 0)
    except ValueError:
        return 0


def _request_uri(environ: Mapping[str, Any]) -> str:
    path = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
    # PEP 3333 carries the raw path bytes as latin-1 code points.
    try:
        raw_path = path.encode("latin-1")
    except UnicodeEncodeError:
        raw_path = path.encode("utf-8")
    uri = quote(raw_path, safe=_PATH_SAFE) or "/"

    query = environ.get("QUERY_STRING", "")
    if query:
        uri += "?" + query
    return uri


def _header_source(environ: Mapping[str, Any]) -> Callable[[], Dict[str, str]]:
    def headers() -> Dict[str, str]:
        result = {}
        for key, value in environ.items():
            if key.startswith("HTTP_"):
                result[key[5:].replace("_", "-").title()] = value
            elif key in ("CONTENT_TYPE", "CONTENT_LENGTH") and value:
                result[key.replace("_", "-").title()] = value
        return result

    return headers


def request_from_environ(
    environ: Mapping[str, Any],
    config: Optional[HTTPConfig] = None,
) -> RequestContext:
    """
    Build a RequestContext from a PEP 3333 environ.

    Args:
        environ: The WSGI environ dictionary.
        config: Layer settings. Defaults to HTTPConfig().

    Returns:
        RequestContext for this request.

    Raises:
        RequestBodyTooLargeError: For form posts whose CONTENT_LENGTH
                                  exceeds config.max_body_size.
    """
    config = config or HTTPConfig()

    cgi = {key: value for key, value in environ.items() if isinstance(value, str)}
    if "REQUEST_URI" not in cgi:
        cgi["REQUEST_URI"] = _request_uri(environ)
    if "HTTPS" not in cgi and environ.get("wsgi.url_scheme") == "https":
        cgi["HTTPS"] = "on"

    query_params = dict(parse_qsl(environ.get("QUERY_STRING", ""), keep_blank_values=True))

    reader = _InputReader(environ, config.max_body_size)

    body_params: Dict[str, str] = {}
    content_type = environ.get("CONTENT_TYPE", "")
    if content_type.split(";")[0].strip().lower() == FORM_CONTENT_TYPE:
        raw = reader().decode(config.body_encoding, errors="replace")
        body_params = dict(parse_qsl(raw, keep_blank_values=True))

    return RequestContext(
        environ=cgi,
        query_params=query_params,
        body_params=body_params,
        body_reader=reader,
        header_source=_header_source(environ),
        config=config,
    )


class WSGIApplication:
    """
    Run a handler(request, response) function as a WSGI application.

    The handler fills in the response. If it returns without sending,
    the response is sent for it. A handler that raises gets a plain
    500 Internal Server Error in its place.

    Example:
        def hello(request, response):
            response.set_body("Hello")

        application = WSGIApplication(hello)
        # gunicorn mymodule:application
    """

    def __init__(self, handler: Handler, config: Optional[HTTPConfig] = None):
        self.handler = handler
        self.config = config or HTTPConfig()

    def __call__(self, environ: Dict[str, Any], start_response: StartResponse) -> Iterable[bytes]:
        transport = BufferedTransport(encoding=self.config.body_encoding)

        try:
            request = request_from_environ(environ, self.config)
            response = ResponseBuilder(transport, self.config)

            self.handler(request, response)
            if not response.sent:
                response.send()

        except RequestBodyTooLargeError as e:
            logger.warning(f"Rejected request: {e}")
            transport = self._error_transport(HTTPStatus.REQUEST_ENTITY_TOO_LARGE)

        except Exception as e:
            logger.exception(f"Handler error: {e}")
            transport = self._error_transport(HTTPStatus.INTERNAL_SERVER_ERROR)

        body = transport.body
        headers = transport.header_list
        if not any(name.lower() == "content-length" for name, _ in headers):
            headers.append(("Content-Length", str(len(body))))

        start_response(transport.status, headers)
        return [body]

    def _error_transport(self, status: HTTPStatus) -> BufferedTransport:
        transport = BufferedTransport(encoding=self.config.body_encoding)
        (ResponseBuilder(transport, self.config)
            .set_status(status)
            .set_header("Content-Type", "text/plain; charset=utf-8")
            .set_body(status.phrase)
            .send())
        return transport
