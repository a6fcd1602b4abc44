"""Courier — route matching and request dispatch for server and browser.

One engine, two front ends: a ``Dispatcher`` serves requests (directly or
over ASGI), and a ``NavigationController`` drives the same dispatcher
from link clicks and history events.

Basic usage::

    from courier import Dispatcher, Request

    dispatcher = Dispatcher()

    @dispatcher.route("/orders/{id}")
    def show_order(request, params):
        return {"id": params["id"]}

    result = await dispatcher.dispatch(Request.build("GET", "/orders/42"))

Serving over ASGI::

    from courier.server.asgi import ASGIAdapter
    app = ASGIAdapter(dispatcher)
"""

__version__ = "0.1.0"
__all__ = [
    "ASGIAdapter",
    "ConfigurationError",
    "CourierError",
    "DispatchConfig",
    "DispatchResult",
    "Dispatcher",
    "Halt",
    "HTTPError",
    "MiddlewareStep",
    "NavigationConfig",
    "NavigationController",
    "NotFound",
    "Outcome",
    "PatternError",
    "Pipeline",
    "Redirect",
    "Request",
    "Response",
    "RouteTable",
    "compile_pattern",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import courier`` fast while providing a clean top-level API.
    """
    if name in ("Dispatcher", "DispatchResult", "Outcome"):
        from courier.dispatch import dispatcher as _dispatcher

        return getattr(_dispatcher, name)

    if name in ("DispatchConfig", "NavigationConfig"):
        from courier import config as _config

        return getattr(_config, name)

    if name == "Request":
        from courier.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from courier.http import response as _resp

        return getattr(_resp, name)

    if name in ("RouteTable", "compile_pattern"):
        from courier import routing as _routing

        return getattr(_routing, name)

    if name in ("Halt", "MiddlewareStep", "Pipeline"):
        from courier import middleware as _mw

        return getattr(_mw, name)

    if name == "NavigationController":
        from courier.navigation.controller import NavigationController

        return NavigationController

    if name == "ASGIAdapter":
        from courier.server.asgi import ASGIAdapter

        return ASGIAdapter

    if name == "get_request":
        from courier.context import get_request

        return get_request

    if name in ("CourierError", "ConfigurationError", "HTTPError", "NotFound", "PatternError"):
        from courier import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
