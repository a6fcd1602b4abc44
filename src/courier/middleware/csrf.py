"""CSRF protection middleware — token-based, session-backed.

Ensures every session carries a random token and validates it on
state-changing requests (POST, PUT, DELETE). Rejects with 403 if the
token is missing or does not match.

Requires ``SessionMiddleware`` — the token lives in the session. When a
session has no token yet, a fresh one is generated and attached to the
request's session copy; the handler that renders the form persists it
with ``SessionMiddleware.save()``.

Usage::

    dispatcher.use(SessionMiddleware(SessionConfig(secret_key="...")))
    dispatcher.use(CSRFMiddleware(CSRFConfig()))

Clients send the token back in the ``X-CSRF-Token`` header or in the
``csrf_token`` form field.
"""

import secrets
from dataclasses import dataclass

from courier.errors import ConfigurationError
from courier.http.request import Request
from courier.middleware.protocol import Halt

# Methods that mutate state and need CSRF protection
_UNSAFE_METHODS: frozenset[str] = frozenset({"POST", "PUT", "DELETE"})


def get_csrf_token(request: Request) -> str:
    """Return the CSRF token attached to *request*.

    Raises ``LookupError`` if ``CSRFMiddleware`` did not run.
    """
    token = request.state.get("csrf_token")
    if token is None:
        msg = (
            "No CSRF token available. Ensure CSRFMiddleware is added "
            "after SessionMiddleware."
        )
        raise LookupError(msg)
    return token


# -- Configuration --


@dataclass(frozen=True, slots=True)
class CSRFConfig:
    """CSRF middleware configuration.

    Attributes:
        field_name: Form field name for the token.
        header_name: HTTP header name for AJAX requests.
        session_key: Key used to store the token in the session.
        token_length: Length of the random token in bytes (hex-encoded).
        exempt_paths: Paths that skip validation (e.g. webhooks).
    """

    field_name: str = "csrf_token"
    header_name: str = "X-CSRF-Token"
    session_key: str = "csrf_token"
    token_length: int = 32
    exempt_paths: frozenset[str] = frozenset()


# -- Middleware --


class CSRFMiddleware:
    """Token-based CSRF protection step.

    On every request:
    1. Loads the session token, or generates one into a new session copy.
    2. Exposes it as ``request.state["csrf_token"]``.
    3. On unsafe methods, compares the submitted token in constant time.
    """

    __slots__ = ("_config",)

    def __init__(self, config: CSRFConfig | None = None) -> None:
        self._config = config or CSRFConfig()

    def __call__(self, request: Request) -> Request | Halt:
        session = request.state.get("session")
        if session is None:
            msg = (
                "CSRFMiddleware requires SessionMiddleware. "
                "Add SessionMiddleware before CSRFMiddleware."
            )
            raise ConfigurationError(msg)

        cfg = self._config
        token = session.get(cfg.session_key)
        if not token:
            token = secrets.token_hex(cfg.token_length)
            session = {**session, cfg.session_key: token}

        if request.method in _UNSAFE_METHODS and request.path not in cfg.exempt_paths:
            submitted = self._submitted_token(request)
            if submitted is None:
                return Halt.reject(403, "CSRF token missing")
            if not secrets.compare_digest(submitted.encode(), token.encode()):
                return Halt.reject(403, "CSRF token invalid")

        return request.with_state(session=session, csrf_token=token)

    def _submitted_token(self, request: Request) -> str | None:
        """Read the token from the header first, then the form body."""
        submitted = request.headers.get(self._config.header_name)
        if submitted is not None:
            return submitted

        ct = request.content_type or ""
        if "application/x-www-form-urlencoded" in ct:
            return request.form().get(self._config.field_name)
        return None
