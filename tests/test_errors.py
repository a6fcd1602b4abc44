"""Tests for courier.errors and courier.dispatch.errors."""

import pytest

from courier.config import DispatchConfig
from courier.dispatch.errors import (
    handle_internal_error,
    handle_not_found,
    http_error_response,
)
from courier.errors import (
    ConfigurationError,
    CourierError,
    HTTPError,
    NotFound,
    PatternError,
)
from courier.http.request import Request
from courier.http.response import Response


class TestHierarchy:
    def test_pattern_error_is_configuration_error(self) -> None:
        assert issubclass(PatternError, ConfigurationError)
        assert issubclass(ConfigurationError, CourierError)

    def test_not_found_is_http_error(self) -> None:
        exc = NotFound()
        assert isinstance(exc, HTTPError)
        assert exc.status == 404
        assert str(exc) == "404: Not Found"

    def test_http_error_str_without_detail(self) -> None:
        assert str(HTTPError(418)) == "418"

    def test_http_error_is_raisable(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            raise HTTPError(409, "conflict")
        assert exc_info.value.detail == "conflict"


class TestHttpErrorResponse:
    def test_status_detail_headers(self) -> None:
        response = http_error_response(HTTPError(429, "Slow down", headers=(("Retry-After", "5"),)))
        assert response.status == 429
        assert response.text == "Slow down"
        assert response.header("Retry-After") == "5"

    def test_default_detail(self) -> None:
        assert http_error_response(HTTPError(418)).text == "Error 418"


class TestHandlers:
    async def test_not_found_without_hook(self) -> None:
        response = await handle_not_found(
            NotFound(), Request.build("GET", "/x"), None, DispatchConfig()
        )
        assert response.status == 404

    async def test_not_found_async_hook(self) -> None:
        async def hook(request: Request) -> Response:
            return Response(f"missing {request.path}")

        response = await handle_not_found(
            NotFound(), Request.build("GET", "/x"), hook, DispatchConfig()
        )
        assert response.status == 404
        assert response.text == "missing /x"

    async def test_internal_error_debug_body(self) -> None:
        response = await handle_internal_error(
            KeyError("order_id"),
            Request.build("GET", "/x"),
            None,
            DispatchConfig(debug=True, error_body="Broken"),
        )
        assert response.status == 500
        assert response.text.startswith("Broken")
        assert "KeyError" in response.text
