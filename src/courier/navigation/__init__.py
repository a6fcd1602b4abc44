"""Client-side navigation: link interception, history, back/forward.

Public API:
    NavigationController -- drives a Dispatcher from browser-style events
    NavigationState -- current path, route match and navigation counter
    MemoryHistory -- in-memory History implementation
    History -- protocol for history collaborators
    EventTarget, Event, ClickEvent, PopStateEvent -- event plumbing
"""

from courier.navigation.controller import NavigationController, NavigationState
from courier.navigation.events import ClickEvent, Event, EventTarget, PopStateEvent
from courier.navigation.history import History, MemoryHistory

__all__ = [
    "ClickEvent",
    "Event",
    "EventTarget",
    "History",
    "MemoryHistory",
    "NavigationController",
    "NavigationState",
    "PopStateEvent",
]
