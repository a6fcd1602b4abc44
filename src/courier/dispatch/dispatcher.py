"""The dispatcher — the single boundary between requests and handlers.

Mutable during setup (routes, middleware, hooks). Frozen on the first
``dispatch()``: the route table is compiled and the middleware list is
captured as an immutable pipeline.

One dispatch moves through::

    Received -> Matching -> (NotFound | Matched) -> MiddlewareRunning
             -> (Halted | Passed) -> HandlerRunning -> Responded

and always ends with exactly one ``DispatchResult``. No exception raised
by routing, middleware, or a handler escapes ``dispatch()``.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from courier._internal.invoke import invoke_positional
from courier._internal.types import ErrorHandler, Handler
from courier.config import DispatchConfig
from courier.context import request_var
from courier.dispatch.errors import (
    handle_internal_error,
    handle_not_found,
    http_error_response,
)
from courier.dispatch.negotiation import negotiate
from courier.errors import HTTPError, NotFound
from courier.http.request import Request
from courier.http.response import Response
from courier.middleware.pipeline import Pipeline
from courier.middleware.protocol import Halt, MiddlewareStep
from courier.routing.route import Route, RouteMatch
from courier.routing.table import RouteTable

logger = logging.getLogger("courier.dispatch")


class Outcome(StrEnum):
    """How a dispatch ended."""

    HANDLED = "handled"
    NOT_FOUND = "not_found"
    HALTED = "halted"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """The single result of one ``dispatch()`` call.

    ``request`` is the last version of the request the dispatcher saw:
    the one the handler received, or the one the halting middleware step
    received. ``match`` is ``None`` when no route matched.
    """

    response: Response
    outcome: Outcome
    request: Request
    match: RouteMatch | None = None

    @property
    def status(self) -> int:
        return self.response.status

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        return self.response.headers

    @property
    def body(self) -> str | bytes:
        return self.response.body


class Dispatcher:
    """Routes requests through middleware to handlers.

    Usage::

        dispatcher = Dispatcher()

        @dispatcher.route("/orders/{id}")
        def show_order(request, params):
            return {"id": params["id"]}

        result = await dispatcher.dispatch(Request.build("GET", "/orders/42"))
        result.status  # 200

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread compiles the table, after which
        the table and pipeline are read-only and dispatches may run in
        parallel.
    """

    __slots__ = (
        "_error_handler",
        "_freeze_lock",
        "_frozen",
        "_middleware_list",
        "_not_found_handler",
        "_pipeline",
        "_table",
        "config",
    )

    def __init__(
        self,
        table: RouteTable | None = None,
        middleware: Iterable[MiddlewareStep] = (),
        *,
        config: DispatchConfig | None = None,
    ) -> None:
        self.config: DispatchConfig = config or DispatchConfig()
        self._table = table if table is not None else RouteTable()
        self._middleware_list: list[MiddlewareStep] = list(middleware)
        self._not_found_handler: ErrorHandler | None = None
        self._error_handler: ErrorHandler | None = None
        self._pipeline = Pipeline()
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Route registration --

    @property
    def table(self) -> RouteTable:
        return self._table

    def register(self, method: str, template: str, handler: Handler, **kwargs: Any) -> Route:
        """Register a route on the underlying table."""
        self._check_not_frozen()
        return self._table.register(method, template, handler, **kwargs)

    def get(self, template: str, handler: Handler, **kwargs: Any) -> Route:
        return self.register("GET", template, handler, **kwargs)

    def post(self, template: str, handler: Handler, **kwargs: Any) -> Route:
        return self.register("POST", template, handler, **kwargs)

    def put(self, template: str, handler: Handler, **kwargs: Any) -> Route:
        return self.register("PUT", template, handler, **kwargs)

    def delete(self, template: str, handler: Handler, **kwargs: Any) -> Route:
        return self.register("DELETE", template, handler, **kwargs)

    def route(
        self,
        template: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            template: Route template. Use ``:param`` or ``{param}``.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name for ``table.url_for()``.
            options: Per-route options stored on the route.
        """
        self._check_not_frozen()
        return self._table.route(template, methods=methods, name=name, options=options)

    # -- Middleware --

    def use(self, step: MiddlewareStep) -> None:
        """Append a step to the middleware pipeline."""
        self._check_not_frozen()
        self._middleware_list.append(step)

    @property
    def pipeline(self) -> Pipeline:
        """The frozen pipeline (empty until the first dispatch)."""
        return self._pipeline

    # -- Hooks --

    def not_found(self, func: ErrorHandler) -> ErrorHandler:
        """Register the not-found hook via decorator.

        Called as ``()``, ``(request)`` or ``(request, exc)``. A returned
        200 is turned into a 404.
        """
        self._check_not_frozen()
        self._not_found_handler = func
        return func

    def error(self, func: ErrorHandler) -> ErrorHandler:
        """Register the unhandled-fault hook via decorator.

        Called as ``()``, ``(request)`` or ``(request, exc)``. A returned
        200 is turned into a 500.
        """
        self._check_not_frozen()
        self._error_handler = func
        return func

    # -- Freezing --

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Compile the table and capture the pipeline now.

        ``dispatch()`` freezes implicitly; servers call this at startup.
        """
        self._ensure_frozen()

    # -- Dispatch --

    async def dispatch(self, request: Request) -> DispatchResult:
        """Match, run middleware, invoke the handler, normalize the result."""
        self._ensure_frozen()
        token = request_var.set(request)
        try:
            return await self._dispatch(request)
        finally:
            request_var.reset(token)

    async def _dispatch(self, request: Request) -> DispatchResult:
        try:
            match = self._table.match(request.method, request.path)
        except NotFound as exc:
            response = await handle_not_found(exc, request, self._not_found_handler, self.config)
            return DispatchResult(response, Outcome.NOT_FOUND, request)

        request = request.with_path_params(match.path_params)
        request_var.set(request)

        try:
            passed = await self._pipeline.run(request)
            if isinstance(passed, Halt):
                request = passed.request or request
                response = self._finalize(request, negotiate(passed.result))
                return DispatchResult(response, Outcome.HALTED, request, match)

            request = passed
            request_var.set(request)
            result = await invoke_positional(
                match.route.handler, request, dict(match.path_params)
            )
            response = self._finalize(request, negotiate(result))

        except NotFound as exc:
            response = await handle_not_found(exc, request, self._not_found_handler, self.config)
            return DispatchResult(response, Outcome.NOT_FOUND, request, match)
        except HTTPError as exc:
            logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
            return DispatchResult(http_error_response(exc), Outcome.HALTED, request, match)
        except Exception as exc:
            response = await handle_internal_error(exc, request, self._error_handler, self.config)
            return DispatchResult(response, Outcome.FAILED, request, match)

        return DispatchResult(response, Outcome.HANDLED, request, match)

    @staticmethod
    def _finalize(request: Request, response: Response) -> Response:
        for finalizer in request.finalizers:
            response = finalizer(request, response)
        return response

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._table.compile()
            self._pipeline = Pipeline(self._middleware_list)
            self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the dispatcher after it has started dispatching. "
                "Register routes, middleware, and hooks before the first request."
            )
            raise RuntimeError(msg)
