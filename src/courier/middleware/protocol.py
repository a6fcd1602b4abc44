"""Middleware protocol and the Halt short-circuit.

A middleware step is any callable matching::

    def my_step(request: Request) -> Request | Halt | None: ...
    async def my_step(request: Request) -> Request | Halt | None: ...

No base class required. The pipeline checks the return value, not the
lineage. Returning a (possibly new) ``Request`` continues the chain,
``None`` continues with the request unchanged, and a ``Halt`` stops
dispatch with the halt's own result.
"""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeAlias

from courier.http.request import Request
from courier.http.response import Redirect, Response

StepResult: TypeAlias = "Request | Halt | None"


@dataclass(frozen=True, slots=True)
class Halt:
    """A deliberate short-circuit carrying its own result.

    ``result`` is anything a handler may return (``Response``,
    ``Redirect``, ``str``, ``dict``, ...). It is normalized exactly like a
    handler's return value and the matched handler never runs.
    ``request`` is filled in by the pipeline with the request the halting
    step received.

    Usage::

        def require_login(request: Request) -> Request | Halt:
            if "user_id" not in request.state.get("session", {}):
                return Halt.redirect("/login")
            return request
    """

    result: Any
    reason: str = ""
    request: Request | None = field(default=None, repr=False, compare=False)

    @classmethod
    def redirect(cls, url: str, *, status: int = 302, reason: str = "") -> Halt:
        """Halt with a redirect to *url*."""
        return cls(Redirect(url, status=status), reason=reason or f"redirect to {url}")

    @classmethod
    def reject(cls, status: int, detail: str = "") -> Halt:
        """Halt with a plain-text error response."""
        return cls(Response.error(status, detail or str(status)), reason=detail)


class MiddlewareStep(Protocol):
    """Protocol for courier middleware steps.

    Accepts both functions and callable objects::

        # Function step
        def tag_ajax(request: Request) -> Request:
            return request.with_state(ajax=request.is_ajax)

        # Class step
        class RequireToken:
            async def __call__(self, request: Request) -> Request | Halt:
                ...
    """

    def __call__(self, request: Request) -> StepResult | Awaitable[StepResult]: ...
