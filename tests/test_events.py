"""Tests for courier.navigation.events and courier.navigation.history."""

from courier.navigation.events import ClickEvent, Event, EventTarget, PopStateEvent
from courier.navigation.history import MemoryHistory


class TestEventTarget:
    def test_listeners_called_in_order(self) -> None:
        target = EventTarget()
        calls: list[str] = []
        target.add_event_listener("click", lambda e: calls.append("a"))
        target.add_event_listener("click", lambda e: calls.append("b"))
        target.dispatch_event(ClickEvent(href="/"))
        assert calls == ["a", "b"]

    def test_same_listener_added_once(self) -> None:
        target = EventTarget()
        calls: list[Event] = []
        target.add_event_listener("popstate", calls.append)
        target.add_event_listener("popstate", calls.append)
        assert target.listener_count("popstate") == 1
        target.dispatch_event(PopStateEvent())
        assert len(calls) == 1

    def test_remove_listener(self) -> None:
        target = EventTarget()
        calls: list[Event] = []
        target.add_event_listener("click", calls.append)
        target.remove_event_listener("click", calls.append)
        target.remove_event_listener("click", calls.append)
        target.dispatch_event(ClickEvent())
        assert calls == []

    def test_only_matching_type(self) -> None:
        target = EventTarget()
        calls: list[Event] = []
        target.add_event_listener("click", calls.append)
        target.dispatch_event(PopStateEvent())
        assert calls == []

    def test_prevent_default_reported(self) -> None:
        target = EventTarget()
        target.add_event_listener("click", lambda e: e.prevent_default())
        event = ClickEvent(href="/")
        assert target.dispatch_event(event) is False
        assert event.default_prevented is True

    def test_click_modified(self) -> None:
        assert ClickEvent(shift_key=True).modified is True
        assert ClickEvent().modified is False


class TestMemoryHistory:
    def test_initial_entry(self) -> None:
        history = MemoryHistory(initial="/orders")
        assert history.location == "/orders"
        assert history.length == 1

    def test_push_drops_forward_entries(self) -> None:
        history = MemoryHistory()
        history.push_state(None, "/a")
        history.push_state(None, "/b")
        history.back()
        history.push_state(None, "/c")
        assert history.entries == ["/", "/a", "/c"]

    def test_replace_overwrites_current(self) -> None:
        history = MemoryHistory()
        history.push_state({"n": 1}, "/a")
        history.replace_state({"n": 2}, "/b")
        assert history.entries == ["/", "/b"]
        assert history.state == {"n": 2}

    def test_push_and_replace_fire_nothing(self) -> None:
        window = EventTarget()
        events: list[Event] = []
        window.add_event_listener("popstate", events.append)
        history = MemoryHistory(window)
        history.push_state(None, "/a")
        history.replace_state(None, "/b")
        assert events == []

    def test_back_and_forward_fire_popstate(self) -> None:
        window = EventTarget()
        events: list[Event] = []
        window.add_event_listener("popstate", events.append)
        history = MemoryHistory(window)
        history.push_state("second", "/a")

        history.back()
        assert history.location == "/"
        history.forward()
        assert history.location == "/a"

        assert [e.type for e in events] == ["popstate", "popstate"]
        assert isinstance(events[1], PopStateEvent)
        assert events[1].state == "second"

    def test_out_of_range_ignored(self) -> None:
        window = EventTarget()
        events: list[Event] = []
        window.add_event_listener("popstate", events.append)
        history = MemoryHistory(window)
        history.back()
        history.forward()
        history.go(5)
        assert events == []
        assert history.location == "/"
