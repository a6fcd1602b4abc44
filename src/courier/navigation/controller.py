"""Client-side navigation on top of the shared dispatcher.

The controller translates browser events into dispatches:

- a click on an in-app link whose path matches a GET route is
  intercepted (default prevented) and turned into ``navigate()``;
- ``popstate`` (back/forward) re-dispatches the current location
  without touching history;
- ``navigate()`` pushes or replaces a history entry, then dispatches.

Routes, middleware and hooks are the same objects the server uses.
Overlapping navigations are neither queued nor cancelled. By default
the navigation that resolves last sets ``current_route``; with
``NavigationConfig(discard_stale=True)`` only the most recently started
one may.
"""

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin, urlsplit

from courier.config import NavigationConfig
from courier.dispatch.dispatcher import Dispatcher, DispatchResult, Outcome
from courier.http.request import Request
from courier.navigation.events import ClickEvent, Event, EventTarget
from courier.navigation.history import History
from courier.routing.route import RouteMatch

logger = logging.getLogger("courier.navigation")

# Halts that redirect again and again stop here
MAX_REDIRECTS = 10

_EXTERNAL_SCHEMES = frozenset({"mailto", "tel", "javascript", "data", "ftp", "file"})


@dataclass(slots=True)
class NavigationState:
    """What the controller knows about the page it is showing."""

    path: str | None = None
    match: RouteMatch | None = None
    generation: int = 0


class NavigationController:
    """Drives a ``Dispatcher`` from history and click events.

    Usage::

        window, document = EventTarget(), EventTarget()
        history = MemoryHistory(window)
        nav = NavigationController(dispatcher, history, window=window, document=document)
        await nav.start()
        await nav.navigate("/customers/7", replace=True)
        nav.current_route.path_params  # {"id": "7"}
    """

    __slots__ = ("_active", "_tasks", "config", "dispatcher", "document", "history", "state", "window")

    def __init__(
        self,
        dispatcher: Dispatcher,
        history: History,
        *,
        window: EventTarget,
        document: EventTarget,
        config: NavigationConfig | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.history = history
        self.window = window
        self.document = document
        self.config: NavigationConfig = config or NavigationConfig()
        self.state = NavigationState()
        self._tasks: set[asyncio.Task[Any]] = set()

        window.add_event_listener("popstate", self._on_popstate)
        document.add_event_listener("click", self._on_click)
        self._active = True

    # -- Public API --

    @property
    def current_route(self) -> RouteMatch | None:
        return self.state.match

    @property
    def current_path(self) -> str | None:
        return self.state.path

    @property
    def pending(self) -> int:
        """Number of event-triggered navigations still running."""
        return len(self._tasks)

    async def start(self) -> DispatchResult:
        """Dispatch the location the page was loaded with."""
        return await self._dispatch_location()

    async def navigate(self, path: str, *, replace: bool = False) -> DispatchResult:
        """Navigate to the in-app *path* (may carry a query string).

        Pushes a history entry, or replaces the current one when
        *replace* is true, then dispatches the new location.
        """
        return await self._navigate(path, replace=replace, redirects=0)

    def stop(self) -> None:
        """Unsubscribe from window and document and forget the page state."""
        self.window.remove_event_listener("popstate", self._on_popstate)
        self.document.remove_event_listener("click", self._on_click)
        self.state = NavigationState()
        self._active = False

    async def settle(self) -> None:
        """Wait for every event-triggered navigation to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def url_for_path(self, path: str) -> str:
        """Browser URL of the in-app *path* under ``config.root``."""
        root = self.config.root.rstrip("/") + "/"
        return root + path.lstrip("/")

    def app_path(self, url: str) -> str:
        """In-app path (with query) of a browser *url*; fragment dropped."""
        parts = urlsplit(url)
        path = parts.path or "/"
        root = self.config.root.rstrip("/")
        if root and (path == root or path.startswith(root + "/")):
            path = path[len(root) :] or "/"
        if parts.query:
            return f"{path}?{parts.query}"
        return path

    # -- Event listeners --

    def _on_popstate(self, event: Event) -> None:
        logger.debug("popstate to %s", self.history.location)
        self._spawn(self._dispatch_location())

    def _on_click(self, event: Event) -> None:
        if not isinstance(event, ClickEvent):
            return
        path = self._intercepted_path(event)
        if path is None:
            return
        if self.dispatcher.table.find("GET", urlsplit(path).path) is None:
            return
        event.prevent_default()
        self._spawn(self.navigate(path))

    def _intercepted_path(self, event: ClickEvent) -> str | None:
        """In-app path for a click the controller should handle, else None."""
        href = event.href
        if not href or href.startswith("#"):
            return None
        if event.target not in (None, "", "_self"):
            return None
        if event.download or event.modified or event.button != 0:
            return None

        parts = urlsplit(href)
        if parts.scheme.lower() in _EXTERNAL_SCHEMES:
            return None
        if parts.scheme or parts.netloc:
            if not self._same_origin(parts.scheme, parts.netloc):
                return None
            href = parts._replace(scheme="", netloc="").geturl() or "/"

        url = urljoin(self.history.location, href)
        root = self.config.root.rstrip("/")
        path = urlsplit(url).path
        if root and not (path == root or path.startswith(root + "/")):
            return None
        return self.app_path(url)

    def _same_origin(self, scheme: str, netloc: str) -> bool:
        if self.config.origin is None:
            return False
        origin = urlsplit(self.config.origin)
        if netloc.lower() != origin.netloc.lower():
            return False
        return not scheme or scheme.lower() == origin.scheme.lower()

    # -- Internal --

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _navigate(self, path: str, *, replace: bool, redirects: int) -> DispatchResult:
        url = self.url_for_path(path)
        if replace:
            self.history.replace_state(None, url)
        else:
            self.history.push_state(None, url)
        return await self._dispatch_location(redirects=redirects)

    async def _dispatch_location(self, *, redirects: int = 0) -> DispatchResult:
        self.state.generation += 1
        generation = self.state.generation

        request = Request.build("GET", self.app_path(self.history.location))
        result = await self.dispatcher.dispatch(request)

        if not self._active:
            return result
        if self.config.discard_stale and generation != self.state.generation:
            logger.debug("Discarding stale navigation to %s", request.path)
            return result

        self._apply(result, request.path)

        location = result.response.header("Location")
        if result.outcome is Outcome.HALTED and location and 300 <= result.status < 400:
            if urlsplit(location).netloc:
                logger.warning("Not following off-app redirect from %s to %s", request.path, location)
                return result
            if redirects >= MAX_REDIRECTS:
                logger.warning("Too many redirects navigating to %s", request.path)
                return result
            logger.debug("Redirecting %s to %s", request.path, location)
            return await self._navigate(location, replace=True, redirects=redirects + 1)
        return result

    def _apply(self, result: DispatchResult, path: str) -> None:
        match result.outcome:
            case Outcome.HANDLED:
                self.state.path = path
                self.state.match = result.match
            case Outcome.NOT_FOUND:
                logger.warning("No route matched for path: %s", path)
                self.state.path = path
                self.state.match = None
            case Outcome.FAILED:
                logger.error("Navigation to %s failed with %d", path, result.status)
            case Outcome.HALTED:
                pass
