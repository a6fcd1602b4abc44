"""Routing — template compilation and an ordered, first-match-wins route table.

Routes are registered during setup and frozen before the first dispatch.
"""

from courier.routing.pattern import PathSegment, RoutePattern, compile_pattern
from courier.routing.route import Route, RouteMatch
from courier.routing.table import METHODS, RouteTable

__all__ = [
    "METHODS",
    "PathSegment",
    "Route",
    "RouteMatch",
    "RoutePattern",
    "RouteTable",
    "compile_pattern",
]
