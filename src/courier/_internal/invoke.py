"""Invoke helpers — call sync or async callables uniformly.

Route handlers, middleware steps, and hooks can be ``def`` or
``async def``. Any code that calls a user-provided callable must handle
both cases. This module keeps the sync/async check and the positional
arity rule in exactly one place.

Usage::

    from courier._internal.invoke import invoke, invoke_positional

    result = await invoke(step, request)
    result = await invoke_positional(handler, request, params)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: returns immediately, no await needed
        def show(request, params):
            return f"order {params['id']}"

        # async: returns coroutine, awaited automatically
        async def show(request, params):
            order = await fetch(params["id"])
            return {"id": order.id}
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


def positional_arity(func: Any) -> int | None:
    """Return how many positional arguments *func* accepts.

    Returns ``None`` when the callable takes ``*args`` (accepts any
    number) or its signature cannot be inspected (some builtins).
    """
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return None

    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


async def invoke_positional(func: Any, *args: Any) -> Any:
    """Call *func* with as many leading *args* as it accepts.

    Handlers and hooks may declare zero, one, or two parameters::

        def index(): ...                     # called as index()
        def show(request): ...               # called as show(request)
        def update(request, params): ...     # called as update(request, params)
    """
    arity = positional_arity(func)
    if arity is not None:
        args = args[:arity]
    return await invoke(func, *args)
