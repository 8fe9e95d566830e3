"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes the user server can emit, with their reason phrases.

=============================================================================
WHERE THEY SHOW UP
=============================================================================

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  2xx   │ 200 OK          - GET /api/users, GET /api/users/:id      │
    │        │ 201 Created     - POST /api/users                         │
    │        │ 204 No Content  - DELETE /api/users/:id                   │
    ├────────┼───────────────────────────────────────────────────────────┤
    │  4xx   │ 400 Bad Request - missing / invalid JSON body,            │
    │        │                   unreadable request line                 │
    │        │ 404 Not Found   - unknown user, unknown endpoint          │
    │        │ 408 Timeout     - client never finished its request       │
    │        │ 413 Too Large   - Content-Length above the limit          │
    │        │ 431 Too Large   - too many header lines                   │
    ├────────┼───────────────────────────────────────────────────────────┤
    │  5xx   │ 500 Internal    - a handler raised                        │
    └────────┴───────────────────────────────────────────────────────────┘

The first digit is the category; the phrase after the number is purely
informational and clients are free to ignore it.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes.

    IntEnum so a member compares equal to its number
    (``HTTPStatus.OK == 200``) and formats as one in f-strings,
    which is exactly what the status line needs.
    """

    # 2xx SUCCESS
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # 4xx CLIENT ERRORS
    BAD_REQUEST = 400
    NOT_FOUND = 404
    REQUEST_TIMEOUT = 408
    PAYLOAD_TOO_LARGE = 413
    REQUEST_HEADER_FIELDS_TOO_LARGE = 431

    # 5xx SERVER ERRORS
    INTERNAL_SERVER_ERROR = 500

    def __str__(self) -> str:
        return str(self.value)

    @property
    def phrase(self) -> str:
        """
        Reason phrase for the status line.

            HTTP/1.1 404 Not Found
                     ─── ─────────
                      │      └── phrase
                      └───────── code
        """
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def is_server_error(self) -> bool:
        """5xx. The access line for these is logged at WARNING."""
        return 500 <= self < 600


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.CREATED: "Created",
    HTTPStatus.NO_CONTENT: "No Content",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.REQUEST_TIMEOUT: "Request Timeout",
    HTTPStatus.PAYLOAD_TOO_LARGE: "Payload Too Large",
    HTTPStatus.REQUEST_HEADER_FIELDS_TOO_LARGE: "Request Header Fields Too Large",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
