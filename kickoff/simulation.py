"""Per-frame simulation step.

``step`` advances an explicit ``SimulationState`` by one frame:

1. pick the user's active player (hysteresis)
2. for each player in roster order: tick the kick cooldown, decide an
   action (user input for the active player, AI for everyone else), apply
   any kick, integrate movement
3. move the ball and resolve the pitch edges; a goal resets every entity
   and ends the frame
4. resolve player-ball contacts

State is mutated in place and also returned, together with the events the
frame produced. ``Simulation`` wraps the step with a seeded RNG and an
``EventBus`` for collaborators.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from kickoff.ai import Action, Hold, Kick, Steer, decide_action
from kickoff.config import DEFAULT_CONFIG, GameConfig
from kickoff.entities import Ball, Player, create_ball
from kickoff.events import EventBus, GoalScoredEvent, KickEvent, PeriodResetEvent
from kickoff.formation import build_kickoff_roster, kickoff_active_id
from kickoff.input import ControlIntent, FrameInput, map_input
from kickoff.math_utils import Vector2
from kickoff.physics import SoccerPhysics
from kickoff.selection import select_active_player
from kickoff.types import USER_TEAM, Team

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """Everything that changes from frame to frame."""

    players: List[Player]
    ball: Ball
    active_player_id: int
    frame: int = 0
    user_team: Team = USER_TEAM
    last_touch_id: Optional[int] = None
    last_scoring_team: Optional[Team] = None

    def get_player(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def team_players(self, team: Team) -> List[Player]:
        return [p for p in self.players if p.team is team]


@dataclass
class StepResult:
    """Outcome of one frame."""

    state: SimulationState
    goal: Optional[GoalScoredEvent] = None
    kicks: List[KickEvent] = field(default_factory=list)


def kickoff_state(config: GameConfig = DEFAULT_CONFIG, user_team: Team = USER_TEAM) -> SimulationState:
    """Build a fresh state in the kickoff layout."""
    players = build_kickoff_roster(config)
    return SimulationState(
        players=players,
        ball=create_ball(config),
        active_player_id=kickoff_active_id(players, user_team),
        user_team=user_team,
    )


def reset_positions(
    state: SimulationState,
    config: GameConfig = DEFAULT_CONFIG,
    scoring_team: Optional[Team] = None,
) -> None:
    """Recreate every entity in the kickoff layout. The frame counter is kept."""
    state.players = build_kickoff_roster(config)
    state.ball = create_ball(config)
    state.active_player_id = kickoff_active_id(state.players, state.user_team)
    state.last_touch_id = None
    state.last_scoring_team = scoring_team


def user_action(player: Player, ball: Ball, intent: ControlIntent, config: GameConfig = DEFAULT_CONFIG) -> Action:
    """Turn the user's intent into an action for the active player.

    A kick with no direction held goes straight toward the opposing goal.
    """
    if (
        intent.wants_kick
        and player.cooldown == 0
        and player.can_reach_ball(ball, config.control.kick_slop)
    ):
        kick_direction = intent.direction
        if kick_direction.is_zero():
            kick_direction = Vector2(player.team.attack_direction, 0.0)
        return Kick(
            direction=intent.direction,
            kick_direction=kick_direction,
            power=player.kick_power,
            cooldown=config.control.kick_cooldown,
            additive=True,
        )
    if intent.direction.is_zero():
        return Hold()
    return Steer(intent.direction)


def step(
    state: SimulationState,
    frame_input: Optional[FrameInput] = None,
    config: GameConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
    physics: Optional[SoccerPhysics] = None,
    autopilot: bool = False,
) -> StepResult:
    """Advance ``state`` by one frame.

    Args:
        state: Simulation state, mutated in place
        frame_input: Signals held this frame (None = nothing held)
        config: Match configuration
        rng: Random source for kick variance
        physics: Resolver to reuse across frames
        autopilot: Let the AI drive the user's active player as well

    Returns:
        StepResult with the (same) state and the events of this frame
    """
    rng = rng if rng is not None else random.Random(0)
    physics = physics or SoccerPhysics(config)
    intent = map_input(frame_input or FrameInput())
    result = StepResult(state=state)

    ball = state.ball
    players = state.players

    state.active_player_id = select_active_player(
        players, ball, state.active_player_id, state.user_team, config.control.hysteresis_margin
    )

    for player in players:
        player.cooldown = max(0, player.cooldown - 1)

        if player.player_id == state.active_player_id and not autopilot:
            action = user_action(player, ball, intent, config)
        else:
            action = decide_action(player, ball, players, config, rng)

        if isinstance(action, Kick):
            physics.apply_kick(player, ball, action)
            state.last_touch_id = player.player_id
            result.kicks.append(
                KickEvent(
                    player_id=player.player_id,
                    team=player.team,
                    power=action.power,
                    frame=state.frame,
                )
            )

        physics.move_player(player, action.direction)

    scoring_team = physics.update_ball(ball)
    if scoring_team is not None:
        result.goal = GoalScoredEvent(team=scoring_team, frame=state.frame, last_touch_id=state.last_touch_id)
        logger.info("Goal for %s at frame %d", scoring_team.display_name, state.frame)
        reset_positions(state, config, scoring_team)
        state.frame += 1
        return result

    owner_id = physics.resolve_ball_contacts(players, ball)
    if owner_id is not None:
        state.last_touch_id = owner_id

    state.frame += 1
    return result


class Simulation:
    """Stateful wrapper around ``step`` for a host loop.

    Example:
        >>> sim = Simulation(seed=7)
        >>> sim.events.subscribe(GoalScoredEvent, print)
        >>> sim.step(FrameInput.of(Signal.RIGHT))
    """

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        seed: Optional[int] = None,
        event_bus: Optional[EventBus] = None,
        autopilot: bool = False,
    ):
        """Initialize the simulation in the kickoff layout.

        Args:
            config: Match configuration (validated here)
            seed: Random seed for kick variance (None defaults to 0 for reproducibility)
            event_bus: Bus to publish events on; a private one is created if omitted
            autopilot: Let the AI drive the user's active player as well
        """
        config.validate()
        self.config = config
        self.autopilot = autopilot
        self.events = event_bus or EventBus()
        self._rng = random.Random(seed if seed is not None else 0)
        self._physics = SoccerPhysics(config)
        self.state = kickoff_state(config)

    @property
    def players(self) -> List[Player]:
        return self.state.players

    @property
    def ball(self) -> Ball:
        return self.state.ball

    @property
    def frame(self) -> int:
        return self.state.frame

    def step(self, frame_input: Optional[FrameInput] = None) -> StepResult:
        """Run one frame and publish its events."""
        result = step(
            self.state,
            frame_input,
            config=self.config,
            rng=self._rng,
            physics=self._physics,
            autopilot=self.autopilot,
        )
        for kick in result.kicks:
            self.events.emit(kick)
        if result.goal is not None:
            self.events.emit(result.goal)
        return result

    def reset(self) -> None:
        """Return every entity to the kickoff layout (period boundary, no score change)."""
        reset_positions(self.state, self.config)
        self.events.emit(PeriodResetEvent(frame=self.state.frame))

    def snapshot(self) -> Dict[str, Any]:
        """Get current state as a snapshot dict for rendering."""
        ball = self.state.ball
        return {
            "frame": self.state.frame,
            "active_player_id": self.state.active_player_id,
            "ball": {
                "x": ball.position.x,
                "y": ball.position.y,
                "vx": ball.velocity.x,
                "vy": ball.velocity.y,
                "radius": ball.radius,
                "owner_id": ball.owner_id,
            },
            "players": [
                {
                    "id": p.player_id,
                    "jersey": p.jersey_number,
                    "team": p.team.value,
                    "role": p.role.value,
                    "x": p.position.x,
                    "y": p.position.y,
                    "vx": p.velocity.x,
                    "vy": p.velocity.y,
                    "radius": p.radius,
                    "cooldown": p.cooldown,
                }
                for p in self.state.players
            ],
        }
