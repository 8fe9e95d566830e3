"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Builds the JSON responses the user server writes back on the socket.

=============================================================================
RESPONSE ANATOMY
=============================================================================

Every response the server sends has the same fixed shape:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   HTTP/1.1 201 Created\r\n                  ← status line           │
    │   Content-Type: application/json\r\n        ┐                       │
    │   Content-Length: 131\r\n                   │ fixed headers,        │
    │   Connection: close\r\n                     │ always in this order  │
    │   Date: Sun, 18 Oct 2026 12:00:00 GMT\r\n   ┘                       │
    │   \r\n                                      ← blank line            │
    │   {                                         ┐                       │
    │     "id": 3,                                │ pretty-printed JSON   │
    │     ...                                     │ (or nothing at all)   │
    │   }                                         ┘                       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Content-Length counts BYTES, not characters. "Zoë" is three characters
but four bytes in UTF-8, and a client that trusts a character count
would cut the body short.

=============================================================================
BUILDER PATTERN
=============================================================================

    response = (ResponseBuilder()
        .status(HTTPStatus.CREATED)
        .json(user)
        .build())

The convenience functions at the bottom (ok, created, not_found, ...)
are one-line wrappers around the builder for the common cases.

=============================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Dict, Any
import json

from .status_codes import HTTPStatus


JSON_CONTENT_TYPE = "application/json"


@dataclass
class HTTPResponse:
    """
    An HTTP response ready to be serialized onto the socket.

    Handlers return this; the server calls to_bytes() and sendall()s the
    result.
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """``HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE``"""
        return f"{self.version} {self.status} {self.status.phrase}"

    @property
    def json(self) -> Any:
        """Decoded body, or None for an empty one. Mostly for tests and logs."""
        if not self.body:
            return None
        return json.loads(self.body.decode("utf-8"))

    def to_bytes(self, now: Optional[datetime] = None) -> bytes:
        """
        Serialize to wire format.

        Content-Length and Date are filled in here when the handler did
        not set them, so they always describe the bytes actually sent.

        Args:
            now: Timestamp for the Date header (defaults to current UTC).

        Returns:
            Status line, headers, blank line and body as one bytes object.
        """
        response_headers = dict(self.headers)

        if "Content-Length" not in response_headers:
            response_headers["Content-Length"] = str(len(self.body))

        if "Date" not in response_headers:
            response_headers["Date"] = format_http_date(now or datetime.now(timezone.utc))

        lines = [self.status_line]
        for name, value in response_headers.items():
            lines.append(f"{name}: {value}")
        lines.append("")

        header_bytes = "\r\n".join(lines).encode("utf-8") + b"\r\n"
        return header_bytes + self.body


class ResponseBuilder:
    """
    Fluent builder for HTTPResponse.

    The header order of a built response is fixed:

        Content-Type → Content-Length → Connection → Date

    Content-Length and Date are computed by build() from the final body,
    so calling json() twice never leaves a stale length behind.
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: Dict[str, str] = {}
        self._body: bytes = b""
        self._date: Optional[datetime] = None

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        self._status = HTTPStatus(status)
        return self

    def header(self, name: str, value: str) -> "ResponseBuilder":
        self._headers[name] = value
        return self

    def json(self, data: Any) -> "ResponseBuilder":
        """
        Set a pretty-printed JSON body.

        Args:
            data: Any JSON-serializable value. None means "no body": the
                  body stays empty instead of becoming the literal null.

        Returns:
            Self for method chaining
        """
        if data is None:
            self._body = b""
        else:
            self._body = json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False).encode("utf-8")
        return self

    def date(self, when: datetime) -> "ResponseBuilder":
        """Pin the Date header (tests use this for byte-exact output)."""
        self._date = when
        return self

    def build(self) -> HTTPResponse:
        headers = {
            "Content-Type": JSON_CONTENT_TYPE,
            "Content-Length": str(len(self._body)),
            "Connection": "close",
            "Date": format_http_date(self._date or datetime.now(timezone.utc)),
        }
        headers.update(self._headers)

        return HTTPResponse(
            status=self._status,
            headers=headers,
            body=self._body,
        )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date (RFC 7231).

    Format: Day, DD Mon YYYY HH:MM:SS GMT
    Example: Sun, 18 Oct 2026 12:00:00 GMT

    HTTP dates are always GMT. Aware datetimes in another zone are
    converted first; naive ones are assumed to already be UTC.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)

    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )


def build_response(status: HTTPStatus, data: Any = None) -> HTTPResponse:
    """
    Build a JSON response from a status and an optional value.

    This is the single entry point the route handlers go through; the
    helpers below only pick the status.
    """
    return ResponseBuilder().status(status).json(data).build()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
#     return ok(users)
#     return not_found("User not found")
#
# =============================================================================

def ok(data: Any) -> HTTPResponse:
    """200 OK with a JSON body."""
    return build_response(HTTPStatus.OK, data)


def created(data: Any) -> HTTPResponse:
    """201 Created with the new resource as the body."""
    return build_response(HTTPStatus.CREATED, data)


def no_content() -> HTTPResponse:
    """204 No Content. Still carries Content-Length: 0."""
    return build_response(HTTPStatus.NO_CONTENT)


def error_response(status: HTTPStatus, message: str) -> HTTPResponse:
    """Any error status with the ``{"error": message}`` body shape."""
    return build_response(status, {"error": message})


def bad_request(message: str = "Bad Request") -> HTTPResponse:
    return error_response(HTTPStatus.BAD_REQUEST, message)


def not_found(message: str = "Not Found") -> HTTPResponse:
    return error_response(HTTPStatus.NOT_FOUND, message)


def request_timeout(message: str = "Request timeout") -> HTTPResponse:
    return error_response(HTTPStatus.REQUEST_TIMEOUT, message)


def internal_error(message: str = "Internal Server Error") -> HTTPResponse:
    """
    500 Internal Server Error.

    Keep the message generic; the traceback goes to the log, not the client.
    """
    return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, message)
