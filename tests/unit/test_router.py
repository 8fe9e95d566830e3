"""
Unit tests for URL router.
"""

import pytest

from httpdemo.http.router import Router, Route, RouteMatch
from httpdemo.http.request import HTTPRequest
from httpdemo.http.response import HTTPResponse, ResponseBuilder, HTTPStatus


def dummy_handler(request: HTTPRequest) -> HTTPResponse:
    """Echo the path and params back."""
    return ResponseBuilder().json({
        "path": request.path,
        "params": request.path_params,
    }).build()


class TestRouter:
    """Tests for Router class."""

    def test_add_route(self):
        """Test adding routes."""
        router = Router()
        route = router.add_route("get", "/api/users", dummy_handler, name="list")

        assert isinstance(route, Route)
        assert router.routes() == [route]
        assert route.method == "GET"
        assert route.name == "list"

    def test_match_static_path(self):
        """Test matching static paths."""
        router = Router()
        router.add_route("GET", "/api/users", dummy_handler)

        match = router.match("GET", "/api/users")

        assert isinstance(match, RouteMatch)
        assert match.params == {}

    def test_static_path_is_exact(self):
        """Test that near misses don't match."""
        router = Router()
        router.add_route("GET", "/api/users", dummy_handler)

        for path in ("/api/users/", "/api/users?x=1", "/API/users", "/api/usersx", "/x/api/users"):
            assert router.match("GET", path) is None, path

    def test_string_param(self):
        """Test an untyped parameter captures one segment as text."""
        router = Router()
        router.add_route("GET", "/files/:name", dummy_handler)

        assert router.match("GET", "/files/report").params == {"name": "report"}
        assert router.match("GET", "/files/a/b") is None

    def test_int_param_converted(self):
        """Test a typed parameter arrives as an int."""
        router = Router()
        router.add_route("GET", "/api/users/:id<int>", dummy_handler)

        match = router.match("GET", "/api/users/42")

        assert match.params == {"id": 42}
        assert isinstance(match.params["id"], int)

    @pytest.mark.parametrize("path", [
        "/api/users/abc",
        "/api/users/-1",
        "/api/users/4.2",
        "/api/users/",
        "/api/users/1/",
        "/api/users/1?x=1",
    ])
    def test_int_param_rejects(self, path: str):
        """Test that non-digit segments fall through."""
        router = Router()
        router.add_route("GET", "/api/users/:id<int>", dummy_handler)

        assert router.match("GET", path) is None

    def test_unknown_converter(self):
        """Test that a typo in a converter fails at registration."""
        router = Router()

        with pytest.raises(ValueError):
            router.add_route("GET", "/api/users/:id<uuid>", dummy_handler)

    def test_method_is_exact(self):
        """Test that the method must match exactly."""
        router = Router()
        router.add_route("GET", "/api/users", dummy_handler)

        assert router.match("POST", "/api/users") is None
        assert router.match("get", "/api/users") is None

    def test_first_match_wins(self):
        """Test that registration order decides between overlapping routes."""
        router = Router()
        first = router.add_route("GET", "/files/:name", dummy_handler)
        router.add_route("GET", "/files/readme", dummy_handler)

        assert router.match("GET", "/files/readme").route is first

    def test_handle_injects_params(self):
        """Test that handle() sets path_params before calling the handler."""
        router = Router()
        router.add_route("GET", "/api/users/:id<int>", dummy_handler)

        response = router.handle(HTTPRequest(method="GET", path="/api/users/7"))

        assert response.status == HTTPStatus.OK
        assert response.json == {"path": "/api/users/7", "params": {"id": 7}}

    def test_default_fallback_is_404(self):
        """Test the built-in fallback."""
        response = Router().dispatch("GET", "/nowhere")

        assert response.status == HTTPStatus.NOT_FOUND

    def test_custom_fallback(self):
        """Test a fallback handler passed to the constructor."""
        router = Router(fallback=lambda request: ResponseBuilder().status(404).json({"error": request.path}).build())

        assert router.dispatch("DELETE", "/foo").json == {"error": "/foo"}

    def test_dispatch_passes_body(self):
        """Test that dispatch() builds a request with the given body."""
        router = Router()
        router.add_route("POST", "/echo", lambda request: ResponseBuilder().json({"body": request.body.decode()}).build())

        assert router.dispatch("POST", "/echo", b"hi").json == {"body": "hi"}


class TestRouterDecorators:
    """Tests for decorator-style registration."""

    def test_decorators_register_in_order(self):
        router = Router()

        @router.get("/a")
        def a(request):
            return ResponseBuilder().build()

        @router.post("/b")
        def b(request):
            return ResponseBuilder().build()

        @router.delete("/c/:id<int>")
        def c(request):
            return ResponseBuilder().build()

        assert [(r.method, r.path) for r in router.routes()] == [
            ("GET", "/a"),
            ("POST", "/b"),
            ("DELETE", "/c/:id<int>"),
        ]

    def test_decorator_returns_handler(self):
        """Test that the decorated function is left unchanged."""
        router = Router()
        decorated = router.get("/x")(dummy_handler)

        assert decorated is dummy_handler

    def test_print_routes(self, capsys):
        router = Router()
        router.add_route("GET", "/api/users", dummy_handler)

        router.print_routes()

        assert "GET      /api/users" in capsys.readouterr().out
