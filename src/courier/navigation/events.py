"""Browser-style event targets and the events the controller listens to.

``EventTarget`` stands in for ``window`` and ``document``. Listeners are
called synchronously, in subscription order, from ``dispatch_event()``
the way a browser delivers DOM events. A listener that needs to do async
work schedules a task and returns.
"""

from dataclasses import dataclass, field
from typing import Any

from courier._internal.types import Listener


@dataclass
class Event:
    """A dispatched event. Listeners may call ``prevent_default()``."""

    type: str
    default_prevented: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass
class ClickEvent(Event):
    """A click on a link.

    Carries the attributes of the clicked ``<a>`` element (``href``,
    ``target``, ``download``) and the state of the mouse button and
    modifier keys. ``href`` is ``None`` when the click did not land on
    a link.
    """

    type: str = "click"
    href: str | None = None
    target: str | None = None
    download: bool = False
    button: int = 0
    ctrl_key: bool = False
    meta_key: bool = False
    shift_key: bool = False
    alt_key: bool = False

    @property
    def modified(self) -> bool:
        """True if any modifier key was held."""
        return self.ctrl_key or self.meta_key or self.shift_key or self.alt_key


@dataclass
class PopStateEvent(Event):
    """Fired on the window when the active history entry changes."""

    type: str = "popstate"
    state: Any = None


class EventTarget:
    """Minimal ``addEventListener`` / ``dispatchEvent`` implementation.

    Usage::

        window = EventTarget()
        window.add_event_listener("popstate", on_popstate)
        window.dispatch_event(PopStateEvent())
    """

    __slots__ = ("_listeners",)

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def add_event_listener(self, type: str, listener: Listener) -> None:
        """Subscribe *listener*. Adding the same listener twice is a no-op."""
        listeners = self._listeners.setdefault(type, [])
        if listener not in listeners:
            listeners.append(listener)

    def remove_event_listener(self, type: str, listener: Listener) -> None:
        """Unsubscribe *listener*. Unknown listeners are ignored."""
        listeners = self._listeners.get(type, [])
        if listener in listeners:
            listeners.remove(listener)

    def dispatch_event(self, event: Event) -> bool:
        """Deliver *event* to every listener for its type.

        Returns ``False`` if a listener called ``prevent_default()``.
        """
        for listener in list(self._listeners.get(event.type, ())):
            listener(event)
        return not event.default_prevented

    def listener_count(self, type: str) -> int:
        """Number of listeners subscribed to *type*."""
        return len(self._listeners.get(type, ()))
