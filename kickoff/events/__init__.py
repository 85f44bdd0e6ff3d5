"""Simulation events and the synchronous bus that dispatches them."""

from kickoff.events.domain_events import GoalScoredEvent, KickEvent, PeriodResetEvent
from kickoff.events.event_bus import EventBus

__all__ = [
    "EventBus",
    "GoalScoredEvent",
    "KickEvent",
    "PeriodResetEvent",
]
