"""Authentication guard — redirect anonymous traffic to the login page.

Runs after ``SessionMiddleware``. A request whose session carries the
configured user key passes through with ``state["user_id"]`` set; any
other request halts with a redirect (or a 401 for AJAX requests, which
cannot follow a redirect to an HTML login form).

Usage::

    dispatcher.use(SessionMiddleware(SessionConfig(secret_key="...")))
    dispatcher.use(AuthMiddleware(AuthConfig(exempt_paths=frozenset({"/login"}))))
"""

from dataclasses import dataclass

from courier.errors import ConfigurationError
from courier.http.request import Request
from courier.middleware.protocol import Halt


@dataclass(frozen=True, slots=True)
class AuthConfig:
    """Authentication guard configuration.

    Attributes:
        login_path: Where anonymous page requests are redirected.
        session_key: Session entry that identifies the logged-in user.
        exempt_paths: Exact paths reachable without a session (the login
            page itself, public assets). ``login_path`` is always exempt.
        exempt_prefixes: Path prefixes reachable without a session.
    """

    login_path: str = "/login"
    session_key: str = "user_id"
    exempt_paths: frozenset[str] = frozenset()
    exempt_prefixes: tuple[str, ...] = ()


class AuthMiddleware:
    """Halt unauthenticated requests before they reach a handler."""

    __slots__ = ("_config",)

    def __init__(self, config: AuthConfig | None = None) -> None:
        self._config = config or AuthConfig()

    def _is_exempt(self, path: str) -> bool:
        cfg = self._config
        if path == cfg.login_path or path in cfg.exempt_paths:
            return True
        return any(path.startswith(prefix) for prefix in cfg.exempt_prefixes)

    def __call__(self, request: Request) -> Request | Halt:
        if self._is_exempt(request.path):
            return request

        session = request.state.get("session")
        if session is None:
            msg = (
                "AuthMiddleware requires SessionMiddleware. "
                "Add SessionMiddleware before AuthMiddleware."
            )
            raise ConfigurationError(msg)

        user_id = session.get(self._config.session_key)
        if not user_id:
            if request.is_ajax:
                return Halt.reject(401, "Authentication required")
            return Halt.redirect(self._config.login_path, reason="not authenticated")

        return request.with_state(user_id=user_id)
