"""Courier exception hierarchy.

Shared across the route table, pipeline, dispatcher, and navigation
controller so every module raises and catches the same types.
"""

from dataclasses import dataclass


class CourierError(Exception):
    """Base for all courier-specific errors."""


class ConfigurationError(CourierError):
    """Raised when routes, middleware, or hooks are configured incorrectly.

    Always surfaces during setup, never while handling a request.
    """


class PatternError(ConfigurationError):
    """Raised when a route template cannot be compiled.

    Fatal at startup: a malformed template can never match anything
    correctly, so registration refuses it instead of guessing.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(CourierError):
    """An error that maps directly to an HTTP status code.

    Raised by the route table, middleware, or handlers. The dispatcher
    catches these and turns them into a response with the same status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request method and path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
