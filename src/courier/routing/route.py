"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from courier.routing.pattern import RoutePattern


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created at registration time and owned by the ``RouteTable``.
    ``options`` is free-form per-route data (page title, required role)
    that the table stores but never interprets.
    """

    method: str
    pattern: RoutePattern
    handler: Callable[..., Any]
    name: str | None = None
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def template(self) -> str:
        """The raw template string the route was registered with."""
        return self.pattern.template


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
