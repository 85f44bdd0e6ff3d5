"""Role-based decisions for computer-controlled players.

Each role is a small decision function that looks at the player, the ball
and the roster and returns one tagged action. The simulation step applies
the action; nothing here mutates state.

Goalkeepers hug their goal line until the ball comes close, then rush it
and clear it upfield. Defenders and forwards chase a loose ball inside their
active range, shoot when close enough to goal, dribble otherwise, and fall
back to a ball-relative formation point when out of range or when a
teammate has the ball.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from kickoff.config import DEFAULT_CONFIG, GameConfig
from kickoff.entities import Ball, Player
from kickoff.formation import formation_target, goalkeeper_home_x, opposing_goal_x
from kickoff.math_utils import Vector2, angle_between, clamp, direction_to
from kickoff.types import PlayerRole, Team

# Goalkeepers stop adjusting within this distance of their lane target.
GK_SETTLE_DISTANCE = 2.0
# Outfield players stop adjusting within this distance of their formation point.
FORMATION_SETTLE_DISTANCE = 10.0


@dataclass(frozen=True)
class Hold:
    """Stay put; friction slows the player down."""

    direction: Vector2 = field(default_factory=Vector2)


@dataclass(frozen=True)
class Steer:
    """Move in a user-chosen direction."""

    direction: Vector2


@dataclass(frozen=True)
class Chase:
    """Run at the ball."""

    direction: Vector2


@dataclass(frozen=True)
class Dribble:
    """Carry the ball toward the opposing goal without kicking."""

    direction: Vector2


@dataclass(frozen=True)
class ReturnToFormation:
    """Move toward a formation point."""

    direction: Vector2
    target: Vector2


@dataclass(frozen=True)
class Kick:
    """Strike the ball.

    Attributes:
        direction: Movement direction for the kicker this frame
        kick_direction: Unit vector the ball is sent along
        power: Magnitude of the ball velocity change
        cooldown: Frames before this player may kick again
        additive: Add to the ball's velocity instead of replacing it
    """

    direction: Vector2
    kick_direction: Vector2
    power: float
    cooldown: int
    additive: bool = False


Action = Union[Hold, Steer, Chase, Dribble, ReturnToFormation, Kick]


def team_has_ball(player: Player, ball: Ball, players: Sequence[Player]) -> bool:
    """Whether the ball's current owner plays for ``player``'s team."""
    if ball.owner_id is None:
        return False
    for other in players:
        if other.player_id == ball.owner_id:
            return other.team is player.team
    return False


def _varied_angle(base: float, spread: float, rng: random.Random) -> float:
    # Uniform in [-spread/2, spread/2)
    return base + (rng.random() - 0.5) * spread


def decide_goalkeeper(
    player: Player,
    ball: Ball,
    config: GameConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> Action:
    """Goalkeeper: guard the line, rush and clear close balls."""
    ai = config.ai
    mid_y = config.pitch.mid_y

    dist_to_ball = player.distance_to(ball.position)
    if dist_to_ball < ai.gk_close_range:
        chase = direction_to(player.position, ball.position)
        if player.cooldown == 0 and player.can_reach_ball(ball, ai.kick_slop):
            rng = rng or random.Random()
            clear_angle = 0.0 if player.team is Team.BLUE else math.pi
            angle = _varied_angle(clear_angle, ai.gk_clear_variance, rng)
            return Kick(
                direction=chase,
                kick_direction=Vector2.from_angle(angle),
                power=player.kick_power,
                cooldown=ai.gk_cooldown,
            )
        return Chase(chase)

    target = Vector2(
        goalkeeper_home_x(player.team, config),
        clamp(ball.position.y, mid_y - ai.gk_vertical_band, mid_y + ai.gk_vertical_band),
    )
    offset = target - player.position
    if offset.length() > GK_SETTLE_DISTANCE:
        return ReturnToFormation(offset.normalize(), target)
    return Hold()


def active_range(role: PlayerRole, config: GameConfig = DEFAULT_CONFIG) -> float:
    if role is PlayerRole.DEFENDER:
        return config.ai.defender_range
    if role is PlayerRole.FORWARD:
        return config.ai.forward_range
    return 0.0


def decide_outfield(
    player: Player,
    ball: Ball,
    players: Sequence[Player],
    config: GameConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> Action:
    """Defender or forward: chase, shoot, dribble, or hold formation."""
    ai = config.ai
    dist_to_ball = player.distance_to(ball.position)

    if dist_to_ball < active_range(player.role, config) and not team_has_ball(player, ball, players):
        chase = direction_to(player.position, ball.position)
        if not player.can_reach_ball(ball, ai.kick_slop) or player.cooldown != 0:
            return Chase(chase)

        goal = Vector2(opposing_goal_x(player.team, config), config.pitch.mid_y)
        goal_angle = angle_between(player.position, goal)
        if abs(goal.x - player.position.x) < ai.shoot_distance:
            rng = rng or random.Random()
            angle = _varied_angle(goal_angle, ai.shot_variance, rng)
            return Kick(
                direction=chase,
                kick_direction=Vector2.from_angle(angle),
                power=player.kick_power * ai.shot_power_multiplier,
                cooldown=ai.shot_cooldown,
            )
        return Dribble(Vector2.from_angle(goal_angle))

    target = formation_target(player, ball, config)
    offset = target - player.position
    if offset.length() > FORMATION_SETTLE_DISTANCE:
        return ReturnToFormation(offset.normalize(), target)
    return Hold()


def decide_action(
    player: Player,
    ball: Ball,
    players: Sequence[Player],
    config: GameConfig = DEFAULT_CONFIG,
    rng: Optional[random.Random] = None,
) -> Action:
    """Dispatch to the decision function for ``player``'s role."""
    if player.role is PlayerRole.GOALKEEPER:
        return decide_goalkeeper(player, ball, config, rng)
    return decide_outfield(player, ball, players, config, rng)
