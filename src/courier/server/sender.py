"""ASGI response sending — translates courier Responses to ASGI messages."""

import logging

from courier._internal.asgi import Send
from courier.http.response import Response

logger = logging.getLogger("courier.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def raw_headers(response: Response, body_length: int) -> list[tuple[bytes, bytes]]:
    """Encode content type, headers, cookies and length as ASGI header pairs."""
    headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    headers.extend(
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
    )
    headers.extend(
        (b"set-cookie", cookie.to_header_value().encode("latin-1")) for cookie in response.cookies
    )
    headers.append((b"content-length", str(body_length).encode("latin-1")))
    return headers


async def send_response(response: Response, send: Send) -> None:
    """Translate a courier Response into ASGI send() calls."""
    body = response.body_bytes if _body_allowed(response.status) else b""
    if response.body and not body:
        logger.debug("Dropping body of %d response", response.status)

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers(response, len(body)),
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
