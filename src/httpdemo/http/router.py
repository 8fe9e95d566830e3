"""
=============================================================================
URL ROUTER
=============================================================================

A declarative route table: an ordered list of (method, pattern, handler)
entries, searched top to bottom, first match wins.

=============================================================================
ROUTE PATTERNS
=============================================================================

1. STATIC SEGMENTS: exact string match

   Pattern: /api/users
   Matches: /api/users
   Doesn't match: /api/users/, /api/users?page=1, /API/users

2. PARAMETERS (:name): one path segment, kept as a string

   Pattern: /files/:name
   Matches: /files/report → {"name": "report"}

3. TYPED PARAMETERS (:name<int>): one or more decimal digits, converted

   Pattern: /api/users/:id<int>
   Matches: /api/users/42 → {"id": 42}
   Doesn't match: /api/users/abc, /api/users/-1, /api/users/4.2

   A segment that fails the type never reaches the handler. It simply
   doesn't match, and the request keeps falling through the table.

=============================================================================
PATTERN COMPILATION
=============================================================================

    Pattern:  /api/users/:id<int>
                 │     │     │
                 ▼     ▼     ▼
    Regex:    ^/api/users/(?P<id>[0-9]+)$
                          ────────────
                          named capture, then int() on the way out

Paths are compared exactly as the client sent them. No trailing-slash
stripping, no query-string splitting, no case folding.

=============================================================================
INTERVIEW QUESTIONS ABOUT ROUTING
=============================================================================

Q: "Why does route order matter?"
A: "First match wins. /api/users/:id<int> and /api/users can't collide,
   but a catch-all registered first would swallow everything after it."

Q: "Why convert path parameters in the router instead of the handler?"
A: "The handler can trust its input. int('abc') never has to be caught
   in every handler that takes an id."

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Dict, Any, List
import re

from .request import HTTPRequest
from .response import HTTPResponse, not_found


Handler = Callable[[HTTPRequest], HTTPResponse]


# Converter name → (regex for one segment, function applied to the capture)
CONVERTERS: Dict[str, tuple] = {
    "str": (r"[^/]+", str),
    "int": (r"[0-9]+", int),
}

_PARAM_PATTERN = re.compile(r"^:(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?:<(?P<type>[a-z]+)>)?$")


@dataclass
class Route:
    """
    One entry of the route table.

        Route(method="GET", path="/api/users/:id<int>", handler=get_user)
    """

    method: str
    path: str
    handler: Handler
    name: Optional[str] = None

    _pattern: Optional[re.Pattern] = field(default=None, repr=False)
    _converters: Dict[str, Callable[[str], Any]] = field(default_factory=dict, repr=False)

    def match(self, method: str, path: str) -> Optional[Dict[str, Any]]:
        """Typed path parameters if this route matches, else None."""
        if method != self.method:
            return None

        found = self._pattern.match(path)
        if not found:
            return None

        return {
            name: self._converters[name](value)
            for name, value in found.groupdict().items()
        }


@dataclass
class RouteMatch:
    """A matched route and the parameters it extracted."""

    route: Route
    params: Dict[str, Any]


class Router:
    """
    Ordered route table with decorator-style registration.

        router = Router()

        @router.get("/api/users/:id<int>")
        def get_user(request):
            return ok(store.get(request.path_params["id"]))

    Anything no route claims is answered by the fallback handler, a 404
    unless one is passed in. There is no 405: a known path with the wrong
    method is as unknown as any other path.
    """

    def __init__(self, fallback: Optional[Handler] = None):
        self._routes: List[Route] = []
        self._fallback = fallback or (lambda request: not_found())

    # =========================================================================
    # ROUTE REGISTRATION
    # =========================================================================

    def add_route(
        self,
        method: str,
        path: str,
        handler: Handler,
        name: Optional[str] = None,
    ) -> Route:
        """
        Append a route to the end of the table.

        Args:
            method: HTTP method, matched exactly (upper-cased here).
            path: Pattern, e.g. "/api/users/:id<int>".
            handler: Called with the request; path_params already set.
            name: Optional label, shown by print_routes().

        Returns:
            The registered Route.

        Raises:
            ValueError: Unknown converter in the pattern.
        """
        pattern, converters = self._compile_pattern(path)
        route = Route(
            method=method.upper(),
            path=path,
            handler=handler,
            name=name,
            _pattern=pattern,
            _converters=converters,
        )
        self._routes.append(route)
        return route

    def _compile_pattern(self, path: str) -> tuple:
        """
        Compile a path pattern into an anchored regex.

        Input:  "/api/users/:id<int>"

        Step 1: Split by "/"
                ["", "api", "users", ":id<int>"]

        Step 2: Process each segment
                "api"        → api                  (static, escaped)
                "users"      → users                (static, escaped)
                ":id<int>"   → (?P<id>[0-9]+)       (typed param)

        Step 3: Join with "/" and anchor
                ^/api/users/(?P<id>[0-9]+)$

        Returns:
            (compiled regex, {param name: converter function})
        """
        converters: Dict[str, Callable[[str], Any]] = {}
        regex_parts = []

        for segment in path.split("/"):
            param = _PARAM_PATTERN.match(segment)
            if param is None:
                regex_parts.append(re.escape(segment))
                continue

            param_name = param.group("name")
            type_name = param.group("type") or "str"
            if type_name not in CONVERTERS:
                raise ValueError(f"Unknown path parameter type '{type_name}' in {path}")

            regex, convert = CONVERTERS[type_name]
            converters[param_name] = convert
            regex_parts.append(f"(?P<{param_name}>{regex})")

        return re.compile("^" + "/".join(regex_parts) + "$"), converters

    # =========================================================================
    # ROUTE MATCHING
    # =========================================================================

    def match(self, method: str, path: str) -> Optional[RouteMatch]:
        """First route (in registration order) accepting method and path."""
        for route in self._routes:
            params = route.match(method, path)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Route a parsed request.

        Path parameters are injected into request.path_params before the
        handler runs.
        """
        found = self.match(request.method, request.path)
        if found is None:
            return self._fallback(request)

        request.path_params = found.params
        return found.route.handler(request)

    def dispatch(self, method: str, path: str, body: Optional[bytes] = None) -> HTTPResponse:
        """
        Route a (method, path, body) triple without a socket in sight.

            response = router.dispatch("POST", "/api/users", b'{"name": "Zoë"}')
        """
        return self.handle(HTTPRequest(method=method, path=path, body=body))

    # =========================================================================
    # DECORATOR-STYLE ROUTE REGISTRATION
    # =========================================================================

    def route(self, method: str, path: str, name: Optional[str] = None) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            self.add_route(method, path, handler, name)
            return handler
        return decorator

    def get(self, path: str, name: Optional[str] = None) -> Callable[[Handler], Handler]:
        return self.route("GET", path, name)

    def post(self, path: str, name: Optional[str] = None) -> Callable[[Handler], Handler]:
        return self.route("POST", path, name)

    def delete(self, path: str, name: Optional[str] = None) -> Callable[[Handler], Handler]:
        return self.route("DELETE", path, name)

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def routes(self) -> List[Route]:
        return list(self._routes)

    def print_routes(self) -> None:
        """
        Print the route table, in match order.

            Registered Routes:
            ------------------------------------------------------------
              GET      /api/users/:id<int>
              DELETE   /api/users/:id<int>
              GET      /api/users
              POST     /api/users
            ------------------------------------------------------------
        """
        print("\nRegistered Routes:")
        print("-" * 60)
        for route in self._routes:
            print(f"  {route.method:8} {route.path}")
        print("-" * 60)
