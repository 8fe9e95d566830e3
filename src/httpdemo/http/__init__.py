"""
=============================================================================
HTTP PROTOCOL PIECES
=============================================================================

Everything between the raw socket and the user handlers:

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST PARSER (request.py)                                         │
    │   b"POST /api/users HTTP/1.1\r\n..."  →  HTTPRequest(...)           │
    ├─────────────────────────────────────────────────────────────────────┤
    │ ROUTER (router.py)                                                  │
    │   ("GET", "/api/users/2")  →  get_user(request), id=2               │
    ├─────────────────────────────────────────────────────────────────────┤
    │ RESPONSE BUILDER (response.py)                                      │
    │   ok({"id": 2, ...})  →  b"HTTP/1.1 200 OK\r\n..."                  │
    ├─────────────────────────────────────────────────────────────────────┤
    │ STATUS CODES (status_codes.py)                                      │
    │   HTTPStatus.NOT_FOUND  →  404, "Not Found"                         │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import HTTPRequest, RequestParser, HTTPParseError, parse_request
from .response import (
    HTTPResponse,
    ResponseBuilder,
    build_response,
    format_http_date,
    ok,                  # 200 OK
    created,             # 201 Created
    no_content,          # 204 No Content
    error_response,
    bad_request,         # 400 Bad Request
    not_found,           # 404 Not Found
    request_timeout,     # 408 Request Timeout
    internal_error,      # 500 Internal Server Error
)
from .router import Router, Route, RouteMatch
from .status_codes import HTTPStatus

__all__ = [
    # Request parsing
    "HTTPRequest",
    "RequestParser",
    "HTTPParseError",
    "parse_request",

    # Response building
    "HTTPResponse",
    "ResponseBuilder",
    "build_response",
    "format_http_date",
    "ok",
    "created",
    "no_content",
    "error_response",
    "bad_request",
    "not_found",
    "request_timeout",
    "internal_error",

    # Routing
    "Router",
    "Route",
    "RouteMatch",

    # Status codes
    "HTTPStatus",
]
