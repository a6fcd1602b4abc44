"""Tests for courier.dispatch.negotiation — return value normalization."""

import json

import pytest

from courier.dispatch.negotiation import negotiate
from courier.http.response import Redirect, Response


class TestNegotiate:
    def test_response_passthrough(self) -> None:
        response = Response("hi", status=201)
        assert negotiate(response) is response

    def test_string_is_html(self) -> None:
        response = negotiate("<p>hi</p>")
        assert response.status == 200
        assert response.content_type.startswith("text/html")

    def test_bytes(self) -> None:
        response = negotiate(b"\x00\x01")
        assert response.content_type == "application/octet-stream"

    def test_dict_is_json(self) -> None:
        response = negotiate({"id": 1, "name": "Zoë"})
        assert response.content_type.startswith("application/json")
        assert json.loads(response.text) == {"id": 1, "name": "Zoë"}

    def test_list_is_json(self) -> None:
        assert json.loads(negotiate([1, 2]).text) == [1, 2]

    def test_none_is_no_content(self) -> None:
        response = negotiate(None)
        assert response.status == 204
        assert response.body == ""

    def test_redirect(self) -> None:
        response = negotiate(Redirect("/login", status=303, headers=(("X-Why", "auth"),)))
        assert response.status == 303
        assert response.header("Location") == "/login"
        assert response.header("X-Why") == "auth"

    def test_tuple_with_status(self) -> None:
        assert negotiate(("created", 201)).status == 201

    def test_tuple_with_headers(self) -> None:
        response = negotiate(({"ok": True}, 202, {"X-Job": "9"}))
        assert response.status == 202
        assert response.header("x-job") == "9"

    def test_unknown_type(self) -> None:
        with pytest.raises(TypeError, match="Cannot convert object"):
            negotiate(object())
