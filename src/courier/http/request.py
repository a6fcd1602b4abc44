"""Immutable dispatch request.

Frozen metadata plus the raw body. Middleware never mutates a request;
each ``with_*`` call returns a new one (copy-on-write), so an earlier
version held elsewhere is never aliased.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any
from urllib.parse import urlsplit

from courier.http.cookies import parse_cookies
from courier.http.headers import Headers
from courier.http.query import QueryParams
from courier.http.response import Response

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable request entering the dispatcher.

    Construct directly, or use ``Request.build()`` to split a URL into
    path and query::

        request = Request.build("GET", "/orders/42?expand=items")
        request.path              # "/orders/42"
        request.query["expand"]   # "items"

    Cookies are parsed once at creation time from the ``Cookie`` header.
    ``state`` carries data attached by middleware (the session, the
    authenticated user id) and is read-only; use ``with_state()``.
    ``finalizers`` are response-side callbacks added by middleware.
    """

    method: str
    path: str
    query: QueryParams = field(default_factory=QueryParams)
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""
    path_params: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    state: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    cookies: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    finalizers: tuple[Callable[[Request, Response], Response], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        if not self.cookies and "cookie" in self.headers:
            cookies = parse_cookies(self.headers.get("cookie", ""))
            object.__setattr__(self, "cookies", MappingProxyType(cookies))

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def is_ajax(self) -> bool:
        """True if sent by ``XMLHttpRequest`` / ``fetch`` with the marker header."""
        return self.headers.get("x-requested-with") == "XMLHttpRequest"

    @property
    def url(self) -> str:
        """Path plus query string."""
        if self.query.raw:
            return f"{self.path}?{self.query.raw}"
        return self.path

    # -- Body access --

    def text(self) -> str:
        """Decode the body as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body)

    def form(self) -> QueryParams:
        """Parse an ``application/x-www-form-urlencoded`` body.

        Raises:
            ValueError: If the Content-Type is not URL-encoded form data.
        """
        ct = (self.content_type or "application/x-www-form-urlencoded").split(";")[0]
        if ct.strip().lower() != "application/x-www-form-urlencoded":
            msg = f"Cannot parse {ct!r} body as form data"
            raise ValueError(msg)
        return QueryParams(self.body)

    # -- Copy-on-write transformations --

    def with_path_params(self, params: Mapping[str, str]) -> Request:
        """Return a new Request carrying the matched path parameters."""
        return replace(self, path_params=MappingProxyType(dict(params)))

    def with_state(self, **values: Any) -> Request:
        """Return a new Request with *values* merged into ``state``."""
        return replace(self, state=MappingProxyType({**self.state, **values}))

    def with_header(self, name: str, value: str) -> Request:
        """Return a new Request with an additional header."""
        return replace(self, headers=self.headers.with_header(name, value))

    def with_finalizer(self, finalizer: Callable[[Request, Response], Response]) -> Request:
        """Return a new Request that also applies *finalizer* to its response.

        The dispatcher calls each finalizer as ``finalizer(request, response)``
        in the order added, on handler responses and on middleware halts.
        """
        return replace(self, finalizers=(*self.finalizers, finalizer))

    # -- Factory --

    @classmethod
    def build(
        cls,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | str = b"",
    ) -> Request:
        """Create a Request from a method and a URL or path.

        The query string is split off into ``query`` and any fragment is
        dropped, so ``path`` is ready for route matching.
        """
        parts = urlsplit(url)
        if isinstance(body, str):
            body = body.encode("utf-8")
        return cls(
            method=method,
            path=parts.path or "/",
            query=QueryParams(parts.query),
            headers=Headers(headers or {}),
            body=body,
        )
