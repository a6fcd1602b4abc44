"""Session middleware — signed cookie sessions with an idle timeout.

Session data is serialized as JSON and signed using ``itsdangerous``.
The step verifies the cookie and attaches the session dict to the
request as ``request.state["session"]``; later steps and handlers read
it from there.

While the idle timeout is on, every request with a live session gets the
cookie rewritten through a response finalizer, which records the
activity. Handlers that change the session write it back explicitly::

    sessions = SessionMiddleware(SessionConfig(secret_key="..."))

    def login(request):
        session = {**get_session(request), "user_id": 7}
        return sessions.save(Redirect("/dashboard"), session)
"""

import logging
from dataclasses import dataclass
from time import time
from typing import Any

from itsdangerous import BadData, URLSafeTimedSerializer

from courier.dispatch.negotiation import negotiate
from courier.errors import ConfigurationError
from courier.http.request import Request
from courier.http.response import Response
from courier.middleware.protocol import Halt

logger = logging.getLogger("courier.middleware")


def get_session(request: Request) -> dict[str, Any]:
    """Return a copy of the request's session dict.

    Raises ``LookupError`` if ``SessionMiddleware`` did not run for this
    request.
    """
    session = request.state.get("session")
    if session is None:
        msg = (
            "No session on this request. Ensure SessionMiddleware runs "
            "before any step or handler that reads the session."
        )
        raise LookupError(msg)
    return dict(session)


# -- Configuration --


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Session middleware configuration.

    ``secret_key`` is required — sessions are signed, not encrypted.
    ``idle_timeout_seconds`` ends a session that has seen no request for
    that long (30 minutes by default); ``None`` disables the check.
    """

    secret_key: str
    cookie_name: str = "courier_session"
    max_age: int = 86400  # 24 hours
    path: str = "/"
    secure: bool = False
    httponly: bool = True
    samesite: str = "strict"
    idle_timeout_seconds: int | None = 30 * 60
    last_seen_at_key: str = "__last_seen_at"


# -- Middleware --


class SessionMiddleware:
    """Signed cookie session step.

    Missing, tampered, or expired-signature cookies yield an empty
    session. A validly signed session whose last activity is older than
    the idle timeout halts with 401 and deletes the cookie.
    """

    __slots__ = ("_config", "_serializer")

    def __init__(self, config: SessionConfig) -> None:
        if not config.secret_key:
            msg = "SessionConfig.secret_key must not be empty."
            raise ConfigurationError(msg)

        self._config = config
        self._serializer = URLSafeTimedSerializer(config.secret_key)

    @property
    def config(self) -> SessionConfig:
        return self._config

    def _load_session(self, request: Request) -> dict[str, Any]:
        """Deserialize and verify the session cookie."""
        cookie_value = request.cookies.get(self._config.cookie_name)
        if not cookie_value:
            return {}

        try:
            data = self._serializer.loads(cookie_value, max_age=self._config.max_age)
        except BadData:
            logger.debug("Rejected session cookie with bad or expired signature")
            return {}

        if not isinstance(data, dict):
            return {}
        return data

    def _is_idle(self, session: dict[str, Any], now: float) -> bool:
        cfg = self._config
        if cfg.idle_timeout_seconds is None or cfg.last_seen_at_key not in session:
            return False
        try:
            last_seen = float(session[cfg.last_seen_at_key])
        except (TypeError, ValueError):
            return True
        return now - last_seen > cfg.idle_timeout_seconds

    def __call__(self, request: Request) -> Request | Halt:
        """Attach the verified session, or halt if it went idle."""
        session = self._load_session(request)
        now = time()

        if self._is_idle(session, now):
            response = Response.error(401, "Session expired").without_cookie(
                self._config.cookie_name, path=self._config.path
            )
            return Halt(response, reason="session idle timeout")

        if not session or self._config.idle_timeout_seconds is None:
            return request.with_state(session=session)

        session[self._config.last_seen_at_key] = now
        return request.with_state(session=session).with_finalizer(self._refresh)

    def _refresh(self, request: Request, response: Response) -> Response:
        """Re-sign the session so the new last-seen time reaches the client.

        Responses that already set or delete the session cookie are left alone.
        """
        name = self._config.cookie_name
        session = request.state.get("session")
        if not session or any(cookie.name == name for cookie in response.cookies):
            return response
        return self._set_cookie(response, session)

    def dumps(self, session: dict[str, Any]) -> str:
        """Sign *session* into a cookie value."""
        data = dict(session)
        if self._config.idle_timeout_seconds is not None:
            data.setdefault(self._config.last_seen_at_key, time())
        return self._serializer.dumps(data)

    def save(self, result: Any, session: dict[str, Any]) -> Response:
        """Normalize *result* and set the signed session cookie on it."""
        return self._set_cookie(negotiate(result), session)

    def _set_cookie(self, response: Response, session: dict[str, Any]) -> Response:
        cfg = self._config
        return response.with_cookie(
            name=cfg.cookie_name,
            value=self.dumps(session),
            max_age=cfg.max_age,
            path=cfg.path,
            secure=cfg.secure,
            httponly=cfg.httponly,
            samesite=cfg.samesite,
        )
