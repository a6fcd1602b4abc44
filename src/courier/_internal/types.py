"""Shared type aliases used across courier modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: called with (), (request) or (request, params)
Handler: TypeAlias = Callable[..., Any]

# Not-found / error hook: called with (), (request) or (request, exc)
ErrorHandler: TypeAlias = Callable[..., Any]

# Event listener: receives the dispatched event object
Listener: TypeAlias = Callable[[Any], Any]
