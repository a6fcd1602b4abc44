"""Tests for courier.server — ASGI adapter and response sender."""

from typing import Any

from courier.dispatch.dispatcher import Dispatcher
from courier.http.request import Request
from courier.http.response import Response
from courier.server.asgi import ASGIAdapter, read_body, request_from_scope
from courier.server.sender import send_response


def _scope(method: str = "GET", path: str = "/", **extra: Any) -> dict[str, Any]:
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": path,
        "query_string": b"",
        "headers": [],
        **extra,
    }


class _Recorder:
    def __init__(self, messages: list[dict[str, Any]] | None = None) -> None:
        self.incoming = list(messages or [{"type": "http.request", "body": b""}])
        self.sent: list[dict[str, Any]] = []

    async def receive(self) -> dict[str, Any]:
        return self.incoming.pop(0)

    async def send(self, message: dict[str, Any]) -> None:
        self.sent.append(message)

    def header(self, name: bytes) -> bytes | None:
        for key, value in self.sent[0]["headers"]:
            if key == name:
                return value
        return None


class TestRequestFromScope:
    def test_headers_query_and_cookies(self) -> None:
        scope = _scope(
            path="/orders",
            query_string=b"page=2",
            headers=[(b"cookie", b"session_token=abc"), (b"x-requested-with", b"XMLHttpRequest")],
        )
        request = request_from_scope(scope, b"body")
        assert request.query["page"] == "2"
        assert request.cookies == {"session_token": "abc"}
        assert request.is_ajax is True
        assert request.body == b"body"

    def test_raw_path_preferred(self) -> None:
        scope = _scope(path="/files/100%25", raw_path=b"/files/100%2525")
        assert request_from_scope(scope).path == "/files/100%2525"

    def test_path_used_without_raw_path(self) -> None:
        assert request_from_scope(_scope(path="/files/a b")).path == "/files/a b"


class TestReadBody:
    async def test_joins_chunks(self) -> None:
        recorder = _Recorder(
            [
                {"type": "http.request", "body": b"ab", "more_body": True},
                {"type": "http.request", "body": b"cd", "more_body": False},
            ]
        )
        assert await read_body(recorder.receive) == b"abcd"

    async def test_stops_on_disconnect(self) -> None:
        recorder = _Recorder([{"type": "http.disconnect"}])
        assert await read_body(recorder.receive) == b""


class TestSendResponse:
    async def test_headers_and_cookies(self) -> None:
        recorder = _Recorder()
        response = Response("hi").with_header("X-Trace", "1").with_cookie("sid", "abc")
        await send_response(response, recorder.send)

        start, body = recorder.sent
        assert start["status"] == 200
        assert recorder.header(b"x-trace") == b"1"
        assert recorder.header(b"set-cookie").startswith(b"sid=abc")
        assert recorder.header(b"content-length") == b"2"
        assert body["body"] == b"hi"

    async def test_no_body_for_204(self) -> None:
        recorder = _Recorder()
        await send_response(Response("ignored", status=204), recorder.send)
        assert recorder.sent[1]["body"] == b""
        assert recorder.header(b"content-length") == b"0"


class TestASGIAdapter:
    async def test_dispatches_http(self) -> None:
        d = Dispatcher()

        @d.route("/orders/:id", methods=["PUT"])
        def update(request: Request, params: dict[str, str]) -> dict[str, Any]:
            return {"id": params["id"], "qty": request.json()["qty"]}

        recorder = _Recorder([{"type": "http.request", "body": b'{"qty": 3}'}])
        await ASGIAdapter(d)(_scope("PUT", "/orders/9"), recorder.receive, recorder.send)

        assert recorder.sent[0]["status"] == 200
        assert recorder.sent[1]["body"] == b'{"id": "9", "qty": 3}'

    async def test_not_found(self) -> None:
        recorder = _Recorder()
        await ASGIAdapter(Dispatcher())(_scope(path="/missing"), recorder.receive, recorder.send)
        assert recorder.sent[0]["status"] == 404

    async def test_params_decoded_once(self) -> None:
        d = Dispatcher()
        d.get("/files/:name", lambda request, params: params["name"])
        scope = _scope(path="/files/a/b%25", raw_path=b"/files/a%2Fb%2525")

        recorder = _Recorder()
        await ASGIAdapter(d)(scope, recorder.receive, recorder.send)

        assert recorder.sent[0]["status"] == 200
        assert recorder.sent[1]["body"] == b"a/b%25"

    async def test_lifespan_freezes(self) -> None:
        d = Dispatcher()
        recorder = _Recorder([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        await ASGIAdapter(d)({"type": "lifespan"}, recorder.receive, recorder.send)
        assert [m["type"] for m in recorder.sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]
        assert d.frozen is True

    async def test_websocket_ignored(self) -> None:
        recorder = _Recorder()
        await ASGIAdapter(Dispatcher())({"type": "websocket"}, recorder.receive, recorder.send)
        assert recorder.sent == []
