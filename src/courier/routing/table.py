"""Ordered route table with first-match-wins lookup.

Routes are registered during setup and frozen with ``compile()`` before
the first request. The first route (for the request method, in
registration order) whose pattern matches wins.

A parameterless route whose raw template equals the path is found by a
dict lookup first; only the routes registered before it are scanned,
so the shortcut never changes which route wins.

There is no specificity ranking. Register literal routes before the
parameterized routes that would also match them::

    table.get("/orders/new", new_order_form)   # claims /orders/new
    table.get("/orders/:id", show_order)       # everything else
"""

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from courier._internal.types import Handler
from courier.errors import ConfigurationError, NotFound
from courier.routing.pattern import compile_pattern
from courier.routing.route import Route, RouteMatch

METHODS: frozenset[str] = frozenset({"GET", "POST", "PUT", "DELETE"})


class RouteTable:
    """Ordered collection of routes.

    Usage::

        table = RouteTable()
        table.register("GET", "/orders/{id}", show_order)
        table.compile()
        match = table.match("GET", "/orders/42")
        match.path_params  # {"id": "42"}
    """

    __slots__ = ("_by_method", "_compiled", "_names", "_routes", "_static")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        # method -> routes in registration order
        self._by_method: dict[str, list[Route]] = {}
        # (method, template) -> (position in _by_method[method], route)
        self._static: dict[tuple[str, str], tuple[int, Route]] = {}
        self._names: dict[str, Route] = {}
        self._compiled = False

    # -- Registration --

    def register(
        self,
        method: str,
        template: str,
        handler: Handler,
        *,
        name: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Route:
        """Add a route. Must be called before ``compile()``.

        Raises:
            ConfigurationError: Unsupported method or duplicate route name.
            PatternError: The template is malformed.
            RuntimeError: The table is already compiled.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        method = method.upper()
        if method not in METHODS:
            allowed = ", ".join(sorted(METHODS))
            msg = f"Unsupported method {method!r} for {template!r}. Use one of: {allowed}"
            raise ConfigurationError(msg)

        if name is not None and name in self._names:
            msg = f"Duplicate route name {name!r} ({template!r})"
            raise ConfigurationError(msg)

        route = Route(
            method=method,
            pattern=compile_pattern(template),
            handler=handler,
            name=name,
            options=MappingProxyType(dict(options or {})),
        )
        self._routes.append(route)
        same_method = self._by_method.setdefault(method, [])
        if route.pattern.is_static:
            self._static.setdefault((method, template), (len(same_method), route))
        same_method.append(route)
        if name is not None:
            self._names[name] = route
        return route

    def get(self, template: str, handler: Handler, **kwargs: Any) -> Route:
        """Register a GET route."""
        return self.register("GET", template, handler, **kwargs)

    def post(self, template: str, handler: Handler, **kwargs: Any) -> Route:
        """Register a POST route."""
        return self.register("POST", template, handler, **kwargs)

    def put(self, template: str, handler: Handler, **kwargs: Any) -> Route:
        """Register a PUT route."""
        return self.register("PUT", template, handler, **kwargs)

    def delete(self, template: str, handler: Handler, **kwargs: Any) -> Route:
        """Register a DELETE route."""
        return self.register("DELETE", template, handler, **kwargs)

    def route(
        self,
        template: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a handler via decorator.

        Args:
            template: Route template. Use ``:param`` or ``{param}``.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name for ``url_for()``. Only one route
                may carry a given name, so multi-method registrations
                attach it to the first method.
            options: Per-route options stored on every created route.
        """

        def decorator(func: Handler) -> Handler:
            for i, method in enumerate(methods or ["GET"]):
                self.register(
                    method,
                    template,
                    func,
                    name=name if i == 0 else None,
                    options=options,
                )
            return func

        return decorator

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._compiled = True

    # -- Introspection --

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def routes(self) -> list[Route]:
        """All registered routes in registration order."""
        return list(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def url_for(self, name: str, **params: object) -> str:
        """Build the path for the route registered under *name*.

        Raises ``KeyError`` for an unknown name or a missing parameter.
        """
        return self._names[name].pattern.build(params)

    # -- Lookup --

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against the table.

        *path* must already be stripped of query string and fragment.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route for *method* matches *path*.
        """
        method = method.upper()
        candidates = self._by_method.get(method, [])

        static = self._static.get((method, path))
        if static is not None:
            position, static_route = static
            candidates = candidates[:position]

        for route in candidates:
            params = route.pattern.match(path)
            if params is not None:
                return RouteMatch(route=route, path_params=params)

        if static is not None:
            return RouteMatch(route=static_route, path_params={})

        raise NotFound(f"No route matches {method} {path!r}")

    def find(self, method: str, path: str) -> RouteMatch | None:
        """Like ``match()`` but returns ``None`` instead of raising."""
        try:
            return self.match(method, path)
        except NotFound:
            return None
