"""Middleware — Protocol-based steps, no inheritance required.

A middleware step is any callable matching:
    def step(request: Request) -> Request | Halt | None

Built-in middleware:
    AuthMiddleware -- Redirect unauthenticated requests to the login page
    CSRFMiddleware -- CSRF token protection (requires SessionMiddleware)
    SessionMiddleware -- Signed cookie sessions with an idle timeout
"""

from courier.middleware.auth import AuthConfig, AuthMiddleware
from courier.middleware.csrf import CSRFConfig, CSRFMiddleware, get_csrf_token
from courier.middleware.pipeline import Pipeline
from courier.middleware.protocol import Halt, MiddlewareStep
from courier.middleware.sessions import SessionConfig, SessionMiddleware, get_session

__all__ = [
    "AuthConfig",
    "AuthMiddleware",
    "CSRFConfig",
    "CSRFMiddleware",
    "Halt",
    "MiddlewareStep",
    "Pipeline",
    "SessionConfig",
    "SessionMiddleware",
    "get_csrf_token",
    "get_session",
]
