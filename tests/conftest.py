"""
pytest configuration and fixtures.
"""

import io
from typing import Any, Callable, Dict
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from reqres import HTTPConfig
from reqres.http import BufferedTransport, ResponseBuilder


@pytest.fixture
def sample_environ() -> Dict[str, str]:
    """CGI-style metadata for a typical GET request."""
    return {
        "REQUEST_METHOD": "GET",
        "REQUEST_URI": "/api/users?page=1&limit=10",
        "REMOTE_ADDR": "127.0.0.1",
        "HTTP_HOST": "localhost:8080",
        "HTTP_USER_AGENT": "pytest",
        "HTTP_ACCEPT": "application/json",
    }


@pytest.fixture
def transport() -> BufferedTransport:
    """In-memory transport that records what a response writes."""
    return BufferedTransport()


@pytest.fixture
def response(transport: BufferedTransport) -> ResponseBuilder:
    """Fresh response writing to the `transport` fixture."""
    return ResponseBuilder(transport)


@pytest.fixture
def lenient_config() -> HTTPConfig:
    """Config that allows repeated sends and keeps whitespace bodies."""
    return HTTPConfig(strict_send=False, keep_whitespace_body=True)


@pytest.fixture
def wsgi_environ() -> Callable[..., Dict[str, Any]]:
    """Factory for PEP 3333 environ dictionaries."""

    def make(
        method: str = "GET",
        path: str = "/",
        query: str = "",
        body: bytes = b"",
        content_type: str = "",
        **extra: Any,
    ) -> Dict[str, Any]:
        environ = {
            "REQUEST_METHOD": method,
            "SCRIPT_NAME": "",
            "PATH_INFO": path,
            "QUERY_STRING": query,
            "SERVER_NAME": "localhost",
            "SERVER_PORT": "8080",
            "SERVER_PROTOCOL": "HTTP/1.1",
            "REMOTE_ADDR": "127.0.0.1",
            "wsgi.version": (1, 0),
            "wsgi.url_scheme": "http",
            "wsgi.input": io.BytesIO(body),
            "wsgi.errors": io.StringIO(),
            "wsgi.multithread": False,
            "wsgi.multiprocess": False,
            "wsgi.run_once": False,
        }
        if body:
            environ["CONTENT_LENGTH"] = str(len(body))
        if content_type:
            environ["CONTENT_TYPE"] = content_type
        environ.update(extra)
        return environ

    return make


class StartResponseRecorder:
    """Stand-in for a WSGI server's start_response."""

    def __init__(self):
        self.status = None
        self.headers = None
        self.calls = 0

    def __call__(self, status, headers):
        self.status = status
        self.headers = dict(headers)
        self.calls += 1


@pytest.fixture
def start_response() -> StartResponseRecorder:
    return StartResponseRecorder()
