"""Events raised by the simulation step.

Events are frozen dataclasses carrying everything a handler needs, so
collaborators (match orchestration, audio, logging) never reach back into
simulation state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from kickoff.types import Team


@dataclass(frozen=True)
class GoalScoredEvent:
    """The ball crossed a goal line inside the goal band.

    Attributes:
        team: Team credited with the goal
        frame: Simulation frame when the goal was detected
        last_touch_id: Player who last owned the ball before the goal, if any
    """

    team: Team
    frame: int
    last_touch_id: Optional[int] = None


@dataclass(frozen=True)
class KickEvent:
    """A player kicked the ball."""

    player_id: int
    team: Team
    power: float
    frame: int


@dataclass(frozen=True)
class PeriodResetEvent:
    """Entities were returned to the kickoff layout without a goal."""

    frame: int
