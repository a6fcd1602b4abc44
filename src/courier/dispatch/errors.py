"""Error handling for dispatch.

Maps ``NotFound``, other ``HTTPError`` exceptions and unexpected
failures to Response objects, using the registered hooks or minimal
defaults. Nothing in this module lets an exception escape: a hook that
itself fails is logged and replaced by the generic fallback.
"""

import logging
from collections.abc import Callable
from typing import Any

from courier._internal.invoke import invoke_positional
from courier.config import DispatchConfig
from courier.dispatch.negotiation import negotiate
from courier.errors import HTTPError, NotFound
from courier.http.request import Request
from courier.http.response import Response

logger = logging.getLogger("courier.dispatch")


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> Response:
    """Invoke a registered hook with introspected arguments.

    Hooks may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async hooks.
    """
    result = await invoke_positional(handler, request, exc)
    return negotiate(result)


def _fallback_internal_error(exc: Exception, config: DispatchConfig) -> Response:
    if config.debug:
        detail = f"{config.error_body}\n\n{type(exc).__name__}: {exc}"
        return Response.error(500, detail)
    return Response.error(500, config.error_body)


async def handle_not_found(
    exc: NotFound,
    request: Request,
    handler: Callable[..., Any] | None,
    config: DispatchConfig,
) -> Response:
    """Produce the 404 response, via the not-found hook if registered."""
    logger.debug("404 %s %s", request.method, request.path)

    if handler is None:
        return Response.error(404, config.not_found_body)

    try:
        response = await call_error_handler(handler, request, exc)
    except Exception as hook_exc:
        logger.exception("Not-found hook failed for %s %s", request.method, request.path)
        return _fallback_internal_error(hook_exc, config)

    # Keep the 404 unless the hook chose its own non-200 status
    if response.status == 200:
        response = response.with_status(404)
    return response


def http_error_response(exc: HTTPError) -> Response:
    """Map a deliberate ``HTTPError`` to a plain response."""
    resp = Response.error(exc.status, exc.detail or f"Error {exc.status}")
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


async def handle_internal_error(
    exc: Exception,
    request: Request,
    handler: Callable[..., Any] | None,
    config: DispatchConfig,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    if handler is not None:
        try:
            response = await call_error_handler(handler, request, exc)
        except Exception:
            logger.exception("Error hook failed for %s %s", request.method, request.path)
        else:
            return response.with_status(500) if response.status == 200 else response

    return _fallback_internal_error(exc, config)
