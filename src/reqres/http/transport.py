"""
=============================================================================
OUTBOUND TRANSPORT
=============================================================================

The sink a ResponseBuilder writes to.

ResponseBuilder never formats bytes for a socket itself. It hands the
status line, each header and the body to a Transport, which is whatever
the host uses to get a response out: a WSGI start_response, a CGI stdout,
or the in-memory buffer below.

    ResponseBuilder                 Transport
    ───────────────                 ─────────
    send_headers()  ──────────►     set_status_line("HTTP/1.0 200 OK")
                    ──────────►     add_header("Content-Type", "text/html")
    send()          ──────────►     clear_output()
                    ──────────►     ... headers as above ...
                    ──────────►     write("<h1>Hi</h1>")
    clean_headers() ──────────►     clear_headers()

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple, Union


class Transport(ABC):
    """
    Abstract outbound transport.

    Implementations must accept calls in any order; ResponseBuilder only
    guarantees the status line is set before headers on its own paths.
    """

    @abstractmethod
    def set_status_line(self, line: str) -> None:
        """Stage the status line, e.g. "HTTP/1.0 404 Not Found"."""

    @abstractmethod
    def add_header(self, name: str, value: str) -> None:
        """Stage one header."""

    @abstractmethod
    def write(self, data: Union[str, bytes]) -> None:
        """Write body data."""

    @abstractmethod
    def clear_headers(self) -> None:
        """Discard every staged header."""

    @abstractmethod
    def clear_output(self) -> None:
        """Discard body data written but not yet delivered."""

    @property
    @abstractmethod
    def headers_sent(self) -> bool:
        """Whether a response has already started on this transport."""


class BufferedTransport(Transport):
    """
    Transport that keeps everything in memory.

    Used by the WSGI adapter (which hands the buffer to start_response)
    and by tests that need to inspect what a response wrote.

    Example:
        transport = BufferedTransport()
        ResponseBuilder(transport).set_body("hi").send()
        transport.to_bytes()
        # b"HTTP/1.0 200 OK\\r\\n\\r\\nhi"
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self.status_line: Optional[str] = None
        self._headers: List[Tuple[str, str]] = []
        self._chunks: List[bytes] = []

    # ─────────────────────────────────────────────────────────────────────
    # Transport interface
    # ─────────────────────────────────────────────────────────────────────

    def set_status_line(self, line: str) -> None:
        self.status_line = line

    def add_header(self, name: str, value: str) -> None:
        # A header staged twice keeps only its last value.
        self._headers = [(n, v) for n, v in self._headers if n.lower() != name.lower()]
        self._headers.append((name, str(value)))

    def write(self, data: Union[str, bytes]) -> None:
        if isinstance(data, str):
            data = data.encode(self.encoding)
        self._chunks.append(data)

    def clear_headers(self) -> None:
        self._headers = []

    def clear_output(self) -> None:
        self._chunks = []

    @property
    def headers_sent(self) -> bool:
        return self.status_line is not None

    # ─────────────────────────────────────────────────────────────────────
    # Inspection
    # ─────────────────────────────────────────────────────────────────────

    @property
    def status(self) -> Optional[str]:
        """
        Status line without the protocol token, as WSGI expects it.

            "HTTP/1.0 404 Not Found"  →  "404 Not Found"
        """
        if self.status_line is None:
            return None
        return self.status_line.split(" ", 1)[1]

    @property
    def status_code(self) -> Optional[int]:
        if self.status is None:
            return None
        return int(self.status.split(" ", 1)[0])

    @property
    def header_list(self) -> List[Tuple[str, str]]:
        return list(self._headers)

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)

    def to_bytes(self) -> bytes:
        """
        Serialize what was staged as a raw HTTP message.

            HTTP/1.0 200 OK\\r\\n
            Name: Value\\r\\n
            \\r\\n
            body
        """
        lines = [self.status_line or ""]
        for name, value in self._headers:
            lines.append(f"{name}: {value}")
        lines.append("")

        header_bytes = "\r\n".join(lines).encode("utf-8") + b"\r\n"
        return header_bytes + self.body
