"""Tests for the EventBus domain event dispatch system."""

from kickoff.events import EventBus
from kickoff.events.domain_events import GoalScoredEvent, KickEvent, PeriodResetEvent
from kickoff.types import Team


class TestEventBus:
    """Test suite for EventBus functionality."""

    def test_emit_reaches_subscriber(self) -> None:
        """Verify events are delivered to subscribed handlers."""
        bus = EventBus()
        received_events: list = []

        bus.subscribe(GoalScoredEvent, received_events.append)

        event = GoalScoredEvent(team=Team.RED, frame=100, last_touch_id=7)
        bus.emit(event)

        assert len(received_events) == 1
        assert received_events[0] is event

    def test_no_subscribers_no_crash(self) -> None:
        bus = EventBus()
        bus.emit(PeriodResetEvent(frame=5))

        assert not bus.has_subscribers(PeriodResetEvent)

    def test_handlers_run_in_registration_order(self) -> None:
        bus = EventBus()
        results: list = []

        bus.subscribe(KickEvent, lambda e: results.append(("h1", e.player_id)))
        bus.subscribe(KickEvent, lambda e: results.append(("h2", e.player_id)))
        bus.emit(KickEvent(player_id=4, team=Team.BLUE, power=12.0, frame=1))

        assert results == [("h1", 4), ("h2", 4)]

    def test_dispatch_is_by_exact_type(self) -> None:
        bus = EventBus()
        goals: list = []
        bus.subscribe(GoalScoredEvent, goals.append)

        bus.emit(KickEvent(player_id=4, team=Team.BLUE, power=12.0, frame=1))

        assert goals == []

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        received: list = []
        bus.subscribe(GoalScoredEvent, received.append)

        assert bus.unsubscribe(GoalScoredEvent, received.append)
        assert not bus.unsubscribe(GoalScoredEvent, received.append)

        bus.emit(GoalScoredEvent(team=Team.BLUE, frame=1))
        assert received == []

    def test_clear_subscribers(self) -> None:
        bus = EventBus()
        bus.subscribe(GoalScoredEvent, lambda e: None)
        bus.subscribe(KickEvent, lambda e: None)
        bus.clear_subscribers()

        assert not bus.has_subscribers(GoalScoredEvent)
        assert not bus.has_subscribers(KickEvent)

    def test_handler_may_unsubscribe_during_emit(self) -> None:
        bus = EventBus()
        calls: list = []

        def once(event):
            calls.append(event.frame)
            bus.unsubscribe(PeriodResetEvent, once)

        bus.subscribe(PeriodResetEvent, once)
        bus.emit(PeriodResetEvent(frame=1))
        bus.emit(PeriodResetEvent(frame=2))

        assert calls == [1]
