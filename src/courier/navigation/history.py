"""Session history: the protocol the controller needs and an in-memory version.

The controller never keeps its own copy of the entry stack. It asks the
``History`` collaborator for the current location and tells it to push
or replace entries.
"""

from typing import Any, Protocol

from courier.navigation.events import EventTarget, PopStateEvent


class History(Protocol):
    """The subset of ``window.history`` / ``window.location`` courier uses."""

    @property
    def location(self) -> str:
        """Current URL: path, query string and fragment."""
        ...

    def push_state(self, state: Any, url: str) -> None: ...

    def replace_state(self, state: Any, url: str) -> None: ...


class MemoryHistory:
    """History kept in a list, for headless use and tests.

    ``push_state`` and ``replace_state`` never fire events, matching the
    browser. ``back``, ``forward`` and ``go`` move the cursor and fire a
    ``PopStateEvent`` on *window* when the entry changes.

    Usage::

        window = EventTarget()
        history = MemoryHistory(window, initial="/orders")
        history.push_state(None, "/orders/42")
        history.back()          # fires popstate, location is "/orders"
    """

    __slots__ = ("_entries", "_index", "window")

    def __init__(self, window: EventTarget | None = None, initial: str = "/") -> None:
        self.window = window if window is not None else EventTarget()
        self._entries: list[tuple[Any, str]] = [(None, initial)]
        self._index = 0

    @property
    def location(self) -> str:
        return self._entries[self._index][1]

    @property
    def state(self) -> Any:
        return self._entries[self._index][0]

    @property
    def length(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[str]:
        """URLs of all entries, oldest first."""
        return [url for _, url in self._entries]

    def push_state(self, state: Any, url: str) -> None:
        """Add an entry after the current one, dropping any forward entries."""
        del self._entries[self._index + 1 :]
        self._entries.append((state, url))
        self._index += 1

    def replace_state(self, state: Any, url: str) -> None:
        """Overwrite the current entry."""
        self._entries[self._index] = (state, url)

    def go(self, delta: int) -> None:
        """Move *delta* entries. Out-of-range moves are ignored."""
        index = self._index + delta
        if delta == 0 or not 0 <= index < len(self._entries):
            return
        self._index = index
        self.window.dispatch_event(PopStateEvent(state=self.state))

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)
