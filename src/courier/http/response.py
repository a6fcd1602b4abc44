"""Outgoing responses and redirects.

``Response`` is frozen; every ``with_*`` call returns a modified copy, so
middleware and hooks can decorate a response without affecting the one
they were given.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from courier.http.cookies import SetCookie

_JSON = "application/json; charset=utf-8"
_TEXT = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """Status, body, content type, extra headers and cookie directives."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()
    cookies: tuple[SetCookie, ...] = ()

    @classmethod
    def json(cls, data: Any, status: int = 200) -> Response:
        """JSON-encode *data*; values ``json`` cannot encode go through ``str``."""
        body = json_module.dumps(data, ensure_ascii=False, default=str)
        return cls(body=body, status=status, content_type=_JSON)

    @classmethod
    def error(cls, status: int, detail: str) -> Response:
        return cls(body=detail, status=status, content_type=_TEXT)

    def with_status(self, status: int) -> Response:
        return replace(self, status=status)

    def with_content_type(self, content_type: str) -> Response:
        return replace(self, content_type=content_type)

    def with_header(self, name: str, value: str) -> Response:
        """Append a header; existing headers with the same name are kept."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        return replace(self, headers=self.headers + tuple(headers.items()))

    def with_cookie(self, name: str, value: str, **attributes: Any) -> Response:
        """Attach a ``Set-Cookie``; *attributes* are ``SetCookie`` fields."""
        return self._add_cookie(SetCookie(name, value, **attributes))

    def without_cookie(self, name: str, path: str = "/") -> Response:
        """Attach a directive that deletes *name* on the client."""
        return self._add_cookie(SetCookie.expired(name, path))

    def _add_cookie(self, cookie: SetCookie) -> Response:
        return replace(self, cookies=(*self.cookies, cookie))

    def header(self, name: str) -> str | None:
        """First value of header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body


@dataclass(frozen=True, slots=True)
class Redirect:
    """Handler or middleware result that sends the client to *url*."""

    url: str
    status: int = 302
    headers: tuple[tuple[str, str], ...] = ()
