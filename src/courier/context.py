"""Request-scoped context via ContextVar.

Provides ``request_var``: the request currently being dispatched in this
task or thread. The dispatcher sets it before matching and resets it
after the result is produced, so code deep inside a handler can reach
the request without threading it through every call.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local across
    threads. No locks needed.
"""

from contextvars import ContextVar

from courier.http.request import Request

request_var: ContextVar[Request] = ContextVar("courier_request")
"""The current request. Set by the dispatcher for the length of a dispatch."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a dispatch.
    """
    return request_var.get()
