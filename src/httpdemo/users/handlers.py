"""
=============================================================================
USER ROUTE HANDLERS
=============================================================================

The five things the toy server knows how to do:

    ┌──────────────┬──────────────────────────────┬───────────────────────┐
    │ Handler      │ Success                      │ Failure               │
    ├──────────────┼──────────────────────────────┼───────────────────────┤
    │ list_users   │ 200 [user, ...]              │ (never)               │
    │ get_user     │ 200 user                     │ 404 User not found    │
    │ create_user  │ 201 new user                 │ 400 No body provided  │
    │              │                              │ 400 Invalid JSON      │
    │ delete_user  │ 204 (empty body)             │ 404 User not found    │
    │ not_found    │ (never)                      │ 404 Endpoint not found│
    └──────────────┴──────────────────────────────┴───────────────────────┘

Handlers receive a request whose path_params the router already filled
in and converted, so request.path_params["id"] is always an int here.

=============================================================================
"""

import json
import logging
import math

from ..http.request import HTTPRequest
from ..http.response import (
    HTTPResponse,
    ok,
    created,
    no_content,
    bad_request,
    not_found,
)
from .store import UserStore


logger = logging.getLogger(__name__)


USER_NOT_FOUND = "User not found"
ENDPOINT_NOT_FOUND = "Endpoint not found"
NO_BODY = "No body provided"
INVALID_JSON = "Invalid JSON"


def _reject_constant(name: str):
    # NaN, Infinity, -Infinity: accepted by json.loads, but not JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


def _finite_float(text: str) -> float:
    # 1e999 overflows to inf, which could never be written back out
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


class UserHandler:
    """
    Route handlers bound to one UserStore.

    The store is passed in rather than looked up globally, so every
    server (and every test) gets its own isolated set of users.

    Usage:
        handler = UserHandler(UserStore())
        router.get("/api/users")(handler.list_users)
    """

    def __init__(self, store: UserStore):
        self.store = store

    def list_users(self, request: HTTPRequest) -> HTTPResponse:
        """GET /api/users"""
        return ok([user.to_dict() for user in self.store.all()])

    def get_user(self, request: HTTPRequest) -> HTTPResponse:
        """GET /api/users/:id"""
        user = self.store.get(request.path_params["id"])
        if user is None:
            return not_found(USER_NOT_FOUND)
        return ok(user.to_dict())

    def create_user(self, request: HTTPRequest) -> HTTPResponse:
        """
        POST /api/users

        Body: ``{"name": ..., "email": ..., "role": ...}``, role optional.

        An absent body (no usable Content-Length) and an empty one are
        different failures: the first is "No body provided", the second
        fails to parse like any other non-JSON payload. A body that parses
        but is not an object (a list, a number) is also "Invalid JSON".
        So is anything json.loads only accepts leniently: NaN, Infinity and
        numbers that overflow a float. Nesting too deep to decode counts too.
        """
        if request.body is None:
            return bad_request(NO_BODY)

        try:
            data = json.loads(
                request.body.decode("utf-8"),
                parse_constant=_reject_constant,
                parse_float=_finite_float,
            )
        except (ValueError, RecursionError) as e:
            logger.debug(f"Rejected create body: {e}")
            return bad_request(INVALID_JSON)

        if not isinstance(data, dict):
            return bad_request(INVALID_JSON)

        user = self.store.create(
            name=data.get("name"),
            email=data.get("email"),
            role=data.get("role"),
        )
        return created(user.to_dict())

    def delete_user(self, request: HTTPRequest) -> HTTPResponse:
        """DELETE /api/users/:id"""
        if not self.store.delete(request.path_params["id"]):
            return not_found(USER_NOT_FOUND)
        return no_content()

    def endpoint_not_found(self, request: HTTPRequest) -> HTTPResponse:
        """Fallback for anything the route table doesn't claim."""
        return not_found(ENDPOINT_NOT_FOUND)
