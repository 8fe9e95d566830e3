"""
Unit tests for HTTP response building.
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from httpdemo.http.response import (
    HTTPResponse,
    ResponseBuilder,
    HTTPStatus,
    build_response,
    ok,
    created,
    no_content,
    bad_request,
    not_found,
    request_timeout,
    internal_error,
    format_http_date,
)


PINNED = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)


class TestHTTPResponse:
    """Tests for HTTPResponse class."""

    def test_status_line(self):
        """Test status line generation."""
        assert HTTPResponse(status=HTTPStatus.OK).status_line == "HTTP/1.1 200 OK"
        assert HTTPResponse(status=HTTPStatus.NOT_FOUND).status_line == "HTTP/1.1 404 Not Found"
        assert HTTPResponse(status=HTTPStatus.NO_CONTENT).status_line == "HTTP/1.1 204 No Content"

    def test_to_bytes_sets_content_length_and_date(self):
        """Test that missing Content-Length and Date are filled in."""
        response = HTTPResponse(body=b"hello world")

        result = response.to_bytes(now=PINNED)

        assert b"Content-Length: 11\r\n" in result
        assert b"Date: Sun, 18 Oct 2026 12:00:00 GMT\r\n" in result
        assert result.endswith(b"\r\n\r\nhello world")

    def test_json_property(self):
        """Test decoding the body back."""
        assert HTTPResponse(body=b'{"a": 1}').json == {"a": 1}
        assert HTTPResponse().json is None


class TestResponseBuilder:
    """Tests for ResponseBuilder class."""

    def test_exact_wire_format(self):
        """Test the complete serialized response, byte for byte."""
        response = (ResponseBuilder()
            .status(HTTPStatus.CREATED)
            .json({"id": 3})
            .date(PINNED)
            .build())

        body = b'{\n  "id": 3\n}'
        assert response.to_bytes() == (
            b"HTTP/1.1 201 Created\r\n"
            b"Content-Type: application/json\r\n"
            b"Content-Length: " + str(len(body)).encode() + b"\r\n"
            b"Connection: close\r\n"
            b"Date: Sun, 18 Oct 2026 12:00:00 GMT\r\n"
            b"\r\n" + body
        )

    def test_header_order(self):
        """Test the fixed header order."""
        response = ResponseBuilder().json([]).build()

        assert list(response.headers) == [
            "Content-Type",
            "Content-Length",
            "Connection",
            "Date",
        ]

    def test_content_length_counts_bytes(self):
        """Test that non-ASCII text is measured in UTF-8 bytes."""
        response = ResponseBuilder().json({"name": "Zoë"}).build()

        assert "Zoë".encode("utf-8") in response.body
        assert int(response.headers["Content-Length"]) == len(response.body)
        assert len(response.body) == len(response.body.decode("utf-8")) + 1

    def test_json_is_pretty_printed(self):
        """Test two-space indentation."""
        response = ResponseBuilder().json({"a": [1, 2]}).build()

        assert response.body.decode("utf-8") == json.dumps({"a": [1, 2]}, indent=2)

    def test_none_gives_empty_body(self):
        """Test that None means no body rather than 'null'."""
        response = ResponseBuilder().json(None).build()

        assert response.body == b""
        assert response.headers["Content-Length"] == "0"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_floats_rejected(self, value):
        """Test that the body is never the non-JSON NaN/Infinity literals."""
        with pytest.raises(ValueError):
            ResponseBuilder().json({"value": value})

    def test_custom_header_appended(self):
        """Test that extra headers come after the fixed ones."""
        response = ResponseBuilder().header("X-Trace", "abc").build()

        assert list(response.headers)[-1] == "X-Trace"
        assert response.headers["X-Trace"] == "abc"


class TestConvenienceFunctions:
    """Tests for response convenience functions."""

    def test_ok(self):
        response = ok([{"id": 1}])

        assert response.status == HTTPStatus.OK
        assert response.json == [{"id": 1}]

    def test_created(self):
        response = created({"id": 3})

        assert response.status == HTTPStatus.CREATED
        assert response.json == {"id": 3}

    def test_no_content(self):
        response = no_content()

        assert response.status == HTTPStatus.NO_CONTENT
        assert response.body == b""
        assert response.headers["Content-Length"] == "0"

    @pytest.mark.parametrize("factory, status, message", [
        (bad_request, HTTPStatus.BAD_REQUEST, "Invalid JSON"),
        (not_found, HTTPStatus.NOT_FOUND, "User not found"),
        (request_timeout, HTTPStatus.REQUEST_TIMEOUT, "Request timeout"),
        (internal_error, HTTPStatus.INTERNAL_SERVER_ERROR, "Internal Server Error"),
    ])
    def test_error_body_shape(self, factory, status, message):
        """Test that errors are {"error": message}."""
        response = factory(message)

        assert response.status == status
        assert response.json == {"error": message}

    def test_build_response_accepts_int_status(self):
        """Test that a plain int is coerced to HTTPStatus."""
        response = build_response(404, {"error": "x"})

        assert response.status is HTTPStatus.NOT_FOUND


class TestFormatHttpDate:
    """Tests for format_http_date."""

    def test_utc(self):
        assert format_http_date(PINNED) == "Sun, 18 Oct 2026 12:00:00 GMT"

    def test_offset_converted_to_gmt(self):
        """Test that an aware non-UTC datetime is converted first."""
        local = datetime(2026, 10, 18, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))

        assert format_http_date(local) == "Sun, 18 Oct 2026 12:00:00 GMT"

    def test_zero_padding(self):
        assert format_http_date(datetime(2026, 1, 5, 3, 4, 5)) == "Mon, 05 Jan 2026 03:04:05 GMT"
