"""Route template compilation.

A template is a ``/``-delimited string whose segments are literals or
named parameters, written either ``:name`` or ``{name}``::

    "/orders"               -> [PathSegment("orders")]
    "/orders/:id"           -> [PathSegment("orders"), PathSegment(":id", is_param=True, ...)]
    "/orders/{id}/items"    -> [..., PathSegment("{id}", is_param=True, ...), PathSegment("items")]

Rules applied uniformly on server and client:

- Empty segments are dropped, so ``/`` has zero segments and ``//a``
  behaves like ``/a``.
- Trailing slashes are significant: ``/orders`` and ``/orders/`` are
  different patterns, and each only matches paths with the same shape.
- No wildcards or optional segments: a pattern only matches paths with
  exactly as many segments as it has.
- Malformed templates raise ``PatternError`` at compile time.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import quote, unquote

from courier.errors import PatternError

_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route template.

    Static:  ``orders``  (is_param=False)
    Param:   ``:id`` or ``{id}``  (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


def split_path(path: str) -> tuple[list[str], bool]:
    """Split *path* into non-empty segments plus its trailing-slash flag.

    The root path ``/`` (and the empty string) has no segments and no
    trailing slash.
    """
    parts = [p for p in path.split("/") if p]
    return parts, bool(parts) and path.endswith("/")


def _parse_segment(part: str, template: str) -> PathSegment:
    if "{" in part or "}" in part:
        if not (part.startswith("{") and part.endswith("}")) or part.count("{") != 1:
            msg = f"Unbalanced braces in segment {part!r} of route template {template!r}"
            raise PatternError(msg)
        name = part[1:-1]
        if not _NAME.match(name):
            msg = f"Invalid parameter name {name!r} in route template {template!r}"
            raise PatternError(msg)
        return PathSegment(value=part, is_param=True, param_name=name)

    if part.startswith(":"):
        name = part[1:]
        if not _NAME.match(name):
            msg = f"Invalid parameter name {name!r} in route template {template!r}"
            raise PatternError(msg)
        return PathSegment(value=part, is_param=True, param_name=name)

    if part.startswith("<") and part.endswith(">"):
        msg = (
            f"Route template {template!r} uses <param> syntax. "
            f"Write parameters as {{param}} or :param instead."
        )
        raise PatternError(msg)

    return PathSegment(value=part)


@dataclass(frozen=True, slots=True)
class RoutePattern:
    """An immutable compiled route template.

    Created by ``compile_pattern()``. Holds no mutable state, so two
    patterns compiled from the same template are equal and agree on
    every path.
    """

    template: str
    segments: tuple[PathSegment, ...]
    param_names: tuple[str, ...]
    trailing_slash: bool = False

    @property
    def is_static(self) -> bool:
        """True if the template has no parameter segments."""
        return not self.param_names

    def match(self, path: str) -> dict[str, str] | None:
        """Match *path* against this pattern.

        Returns the bound parameters (URL-decoded) on success, or ``None``.
        Literal segments are compared case-sensitively against the raw
        path segment.
        """
        parts, trailing = split_path(path)
        if len(parts) != len(self.segments) or trailing != self.trailing_slash:
            return None

        params: dict[str, str] = {}
        for seg, part in zip(self.segments, parts, strict=True):
            if seg.is_param:
                params[seg.param_name or ""] = unquote(part)
            elif seg.value != part:
                return None
        return params

    def build(self, params: Mapping[str, object] | None = None) -> str:
        """Substitute *params* into the template and return a path.

        Raises ``KeyError`` if a parameter is missing.
        """
        params = params or {}
        parts: list[str] = []
        for seg in self.segments:
            if seg.is_param:
                parts.append(quote(str(params[seg.param_name or ""]), safe=""))
            else:
                parts.append(seg.value)
        path = "/" + "/".join(parts)
        if self.trailing_slash:
            path += "/"
        return path


def compile_pattern(template: str) -> RoutePattern:
    """Compile a route template into a ``RoutePattern``.

    Raises ``PatternError`` for templates that do not start with ``/``,
    have unbalanced braces, invalid or duplicate parameter names, or use
    ``<param>`` syntax.
    """
    if not template.startswith("/"):
        msg = f"Route template {template!r} must start with '/'"
        raise PatternError(msg)

    parts, trailing = split_path(template)
    segments = tuple(_parse_segment(part, template) for part in parts)

    names: list[str] = []
    for seg in segments:
        if seg.param_name is None:
            continue
        if seg.param_name in names:
            msg = f"Duplicate parameter {seg.param_name!r} in route template {template!r}"
            raise PatternError(msg)
        names.append(seg.param_name)

    return RoutePattern(
        template=template,
        segments=segments,
        param_names=tuple(names),
        trailing_slash=trailing,
    )
