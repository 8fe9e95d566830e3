"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Turns the bytes of one accepted connection into a structured HTTPRequest.

=============================================================================
READING A REQUEST LINE BY LINE
=============================================================================

The parser works on a *line-oriented stream* (``sock.makefile("rb")``),
not on a pre-collected buffer. It pulls exactly what the protocol says
it needs and never reads past the end of the request:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        PARSING FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   readline()  →  "POST /api/users HTTP/1.1\r\n"                     │
    │                   ──┬─ ─────┬──── ────┬───                          │
    │                  method    path    version (kept, unused)           │
    │                                                                      │
    │   readline()  →  "Host: localhost:3000\r\n"       ┐                 │
    │   readline()  →  "Content-Type: application/json" │ headers, split  │
    │   readline()  →  "Content-Length: 42\r\n"         ┘ on first ": "   │
    │   readline()  →  "\r\n"                 ← blank line: stop          │
    │                                                                      │
    │   read(42)    →  b'{"name": "Zoë", ...}'  ← body, exactly           │
    │                                             Content-Length bytes    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
BODY: ABSENT IS NOT EMPTY
=============================================================================

    No Content-Length header             →  body is None
    Content-Length: banana               →  body is None
    Content-Length: 0                    →  body is b""
    Content-Length: 42                   →  body is the next 42 bytes

The create handler relies on the difference: None answers "No body
provided", while b"" is a body that fails to parse as JSON.

=============================================================================
LIMITS
=============================================================================

A client that streams an endless header line or a thousand headers
would otherwise grow memory without bound. Each limit maps to its own
status code so the client can tell them apart:

    line longer than max_line_size      →  400 Bad Request
    more than max_headers header lines  →  431 Request Header Fields Too Large
    Content-Length above max_body_size  →  413 Payload Too Large

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, BinaryIO
import io
import re

from .status_codes import HTTPStatus


class HTTPParseError(Exception):
    """
    Raised when a request cannot be parsed.

    Carries the status code the server should answer with, so the
    connection handler can turn it straight into a response.
    """

    def __init__(self, message: str, status_code: HTTPStatus = HTTPStatus.BAD_REQUEST):
        super().__init__(message)
        self.status_code = HTTPStatus(status_code)


@dataclass
class HTTPRequest:
    """
    A parsed HTTP request.

    Attributes:
        method:      Request method exactly as sent ("GET", "POST", ...).
        path:        Request target exactly as sent. Query strings are not
                     split off; "/api/users?x=1" is its own path.
        version:     Protocol version ("HTTP/1.1"), "" when omitted.
        headers:     Header name → value. Names keep the case the client
                     used, so "content-length" and "Content-Length" are
                     different keys.
        body:        Raw body bytes, or None when no usable Content-Length
                     was sent.
        path_params: Filled in by the router (``{"id": 3}``).
        client_address: (ip, port) of the peer, for logging.
    """

    method: str
    path: str
    version: str = "HTTP/1.1"
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    path_params: Dict[str, object] = field(default_factory=dict)
    client_address: tuple = ("", 0)

    @property
    def has_body(self) -> bool:
        return self.body is not None

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Exact-case header lookup."""
        return self.headers.get(name, default)


class RequestParser:
    """
    Reads one HTTP request from a binary stream.

    Usage:
        with sock.makefile("rb") as rfile:
            request = RequestParser().parse_stream(rfile)

    parse_stream() returns None when the peer closed the connection
    without sending anything, which is normal (port scanners, health
    probes, browsers opening speculative connections).
    """

    HEADER_SEPARATOR = ": "
    BLANK_LINES = (b"\r\n", b"\n")
    DIGITS = re.compile(r"[0-9]+")

    def __init__(
        self,
        max_line_size: int = 8192,
        max_headers: int = 100,
        max_body_size: int = 10 * 1024 * 1024,
    ):
        self.max_line_size = max_line_size
        self.max_headers = max_headers
        self.max_body_size = max_body_size

    def parse_stream(
        self,
        rfile: BinaryIO,
        client_address: tuple = ("", 0),
    ) -> Optional[HTTPRequest]:
        """
        Parse a single request from ``rfile``.

        Args:
            rfile: Readable binary stream positioned at the request line.
            client_address: Peer (ip, port), copied onto the request.

        Returns:
            The parsed request, or None if the stream ended before a
            request line arrived.

        Raises:
            HTTPParseError: Malformed request line, a limit exceeded, or
                            a body shorter than its Content-Length.
        """
        # ─────────────────────────────────────────────────────────────────
        # REQUEST LINE
        # ─────────────────────────────────────────────────────────────────
        request_line = self._readline(rfile)
        if not request_line:
            return None

        method, path, version = self._parse_request_line(request_line)

        # ─────────────────────────────────────────────────────────────────
        # HEADERS
        # ─────────────────────────────────────────────────────────────────
        headers = self._parse_headers(rfile)

        # ─────────────────────────────────────────────────────────────────
        # BODY
        # ─────────────────────────────────────────────────────────────────
        body = None
        content_length = self._content_length(headers)
        if content_length is not None:
            body = rfile.read(content_length) if content_length else b""
            if len(body) < content_length:
                raise HTTPParseError(
                    f"Incomplete body: expected {content_length} bytes, got {len(body)}"
                )

        return HTTPRequest(
            method=method,
            path=path,
            version=version,
            headers=headers,
            body=body,
            client_address=client_address,
        )

    def parse(self, data: bytes, client_address: tuple = ("", 0)) -> Optional[HTTPRequest]:
        """Parse a request held entirely in memory."""
        return self.parse_stream(io.BytesIO(data), client_address)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _readline(self, rfile: BinaryIO) -> bytes:
        # readline(limit) returns at most limit bytes; if it stopped
        # without reaching a newline and there is more to come, the line
        # was too long.
        line = rfile.readline(self.max_line_size + 1)
        if len(line) > self.max_line_size:
            raise HTTPParseError(f"Line exceeds {self.max_line_size} bytes")
        return line

    def _parse_request_line(self, line: bytes) -> tuple:
        """
        ``METHOD SP PATH SP VERSION``, split on any run of whitespace.

        The version is optional (HTTP/0.9 style "GET /"); method and path
        are not.
        """
        parts = line.decode("utf-8", errors="replace").split()
        if len(parts) < 2:
            raise HTTPParseError(f"Invalid request line: {line!r}")

        method, path = parts[0], parts[1]
        version = parts[2] if len(parts) > 2 else ""
        return method, path, version

    def _parse_headers(self, rfile: BinaryIO) -> Dict[str, str]:
        """
        Read ``Name: value`` lines up to the blank line.

        Lines without ": " are skipped. A stream that ends before the
        blank line simply ends the header block.
        """
        headers: Dict[str, str] = {}
        count = 0

        while True:
            raw = self._readline(rfile)
            if not raw or raw in self.BLANK_LINES:
                break

            count += 1
            if count > self.max_headers:
                raise HTTPParseError(
                    f"More than {self.max_headers} header lines",
                    status_code=HTTPStatus.REQUEST_HEADER_FIELDS_TOO_LARGE,
                )

            line = raw.decode("utf-8", errors="replace")
            name, sep, value = line.partition(self.HEADER_SEPARATOR)
            if not sep:
                continue  # malformed, skip
            headers[name] = value.rstrip()

        return headers

    def _content_length(self, headers: Dict[str, str]) -> Optional[int]:
        """
        Body length from the Content-Length header.

        Returns None when the header is missing or is not a non-negative
        decimal integer.
        """
        raw = headers.get("Content-Length")
        if raw is None or not self.DIGITS.fullmatch(raw.strip()):
            return None

        length = int(raw)
        if length > self.max_body_size:
            raise HTTPParseError(
                f"Request body too large: {length} bytes",
                status_code=HTTPStatus.PAYLOAD_TOO_LARGE,
            )
        return length


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def parse_request(data: bytes, client_address: tuple = ("", 0)) -> Optional[HTTPRequest]:
    """
    Parse an in-memory request with default limits.

        request = parse_request(b"GET /api/users HTTP/1.1\\r\\n\\r\\n")
    """
    return RequestParser().parse(data, client_address)
