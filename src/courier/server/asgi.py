"""ASGI adapter — serves a Dispatcher over ASGI 3.

The only component that touches raw ASGI directly. Converts the scope
and body messages to a ``Request``, dispatches it, and sends the
resulting ``Response`` back through ``send()``.
"""

import logging
from collections.abc import MutableMapping
from typing import Any

from courier._internal.asgi import Receive, Scope, Send
from courier.dispatch.dispatcher import Dispatcher
from courier.http.headers import Headers
from courier.http.query import QueryParams
from courier.http.request import Request
from courier.server.sender import send_response

logger = logging.getLogger("courier.server")


async def read_body(receive: Receive) -> bytes:
    """Collect every ``http.request`` body chunk."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        body = message.get("body", b"")
        if body:
            chunks.append(body)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def request_from_scope(scope: MutableMapping[str, Any], body: bytes = b"") -> Request:
    """Build a Request from an ASGI HTTP scope.

    The path comes from ``raw_path`` when the server provides it, so
    percent-escapes reach the route table undecoded and are decoded once
    there. ``path`` (already decoded by the server) is the fallback.
    """
    raw_path = scope.get("raw_path")
    path = raw_path.decode("latin-1").partition("?")[0] if raw_path else scope["path"]
    headers = Headers(
        (name.decode("latin-1"), value.decode("latin-1"))
        for name, value in scope.get("headers", ())
    )
    return Request(
        method=scope["method"],
        path=path or "/",
        query=QueryParams(scope.get("query_string", b"")),
        headers=headers,
        body=body,
    )


class ASGIAdapter:
    """ASGI 3 application wrapping a ``Dispatcher``.

    Usage::

        dispatcher = Dispatcher()
        ...
        app = ASGIAdapter(dispatcher)   # serve with any ASGI server

    Lifespan startup freezes the dispatcher, so setup mistakes surface
    before the first request. Scopes other than ``http`` and
    ``lifespan`` are ignored.
    """

    __slots__ = ("dispatcher",)

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            logger.debug("Ignoring unsupported ASGI scope %r", scope["type"])
            return

        body = await read_body(receive)
        request = request_from_scope(scope, body)
        result = await self.dispatcher.dispatch(request)
        logger.debug(
            "%s %s -> %d (%s)", request.method, request.path, result.status, result.outcome
        )
        await send_response(result.response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self.dispatcher.freeze()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
