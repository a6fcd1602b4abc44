"""Tests for courier.testing — TestClient and assertion helpers."""

import pytest

from courier.dispatch.dispatcher import Dispatcher
from courier.http.response import Redirect, Response
from courier.testing import TestClient, assert_json, assert_redirect, assert_status


def _dispatcher() -> Dispatcher:
    d = Dispatcher()
    d.get("/orders", lambda request: {"page": request.query.get("page")})
    d.post("/orders", lambda request: (request.json(), 201))
    d.put("/orders/:id", lambda request, params: f"{params['id']}:{request.form()['qty']}")
    d.delete("/orders/:id", lambda: Redirect("/orders", status=303))
    d.get("/set", lambda: Response("set").with_cookie("theme", "dark"))
    d.get("/clear", lambda: Response("clear").without_cookie("theme"))
    d.get("/theme", lambda request: request.cookies.get("theme", "none"))
    return d


class TestClientMethods:
    async def test_get_with_query(self) -> None:
        async with TestClient(_dispatcher()) as client:
            assert_json(await client.get("/orders?page=2"), {"page": "2"})

    async def test_post_json(self) -> None:
        async with TestClient(_dispatcher()) as client:
            response = await client.post("/orders", json={"qty": 1})
            assert_status(response, 201)
            assert_json(response, {"qty": 1})

    async def test_put_form(self) -> None:
        async with TestClient(_dispatcher()) as client:
            response = await client.put("/orders/4", form={"qty": "2"})
            assert response.text == "4:2"

    async def test_delete_redirect(self) -> None:
        async with TestClient(_dispatcher()) as client:
            assert_redirect(await client.delete("/orders/4"), "/orders", status=303)

    async def test_cookie_jar(self) -> None:
        async with TestClient(_dispatcher()) as client:
            await client.get("/set")
            assert (await client.get("/theme")).text == "dark"
            await client.get("/clear")
            assert (await client.get("/theme")).text == "none"

    async def test_enter_freezes(self) -> None:
        d = _dispatcher()
        async with TestClient(d):
            assert d.frozen is True
        with pytest.raises(RuntimeError):
            d.get("/late", lambda: "late")


class TestAssertions:
    def test_assert_status_message(self) -> None:
        with pytest.raises(AssertionError, match="Expected status 200, got 404"):
            assert_status(Response.error(404, "Not Found"), 200)

    def test_assert_redirect_rejects_non_redirect(self) -> None:
        with pytest.raises(AssertionError, match="Expected a redirect"):
            assert_redirect(Response("ok"), "/")

    def test_assert_json_rejects_html(self) -> None:
        with pytest.raises(AssertionError, match="Expected a JSON response"):
            assert_json(Response("<p>"), {})
