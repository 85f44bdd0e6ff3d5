"""Player and ball entities.

Entities are plain data; every behaviour lives in the selector, the AI
module and the physics resolver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from kickoff.config import DEFAULT_CONFIG, GameConfig
from kickoff.math_utils import Vector2
from kickoff.types import PlayerRole, Team


@dataclass
class Entity:
    """Base shape shared by players and the ball."""

    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2)
    radius: float = 0.0
    mass: float = 1.0  # reserved for impulse weighting

    def distance_to(self, other_pos: Vector2) -> float:
        """Calculate distance to another position."""
        return Vector2.distance_between(self.position, other_pos)

    def speed(self) -> float:
        return self.velocity.length()


@dataclass
class Player(Entity):
    """A player on either team."""

    player_id: int = 0
    jersey_number: int = 0
    team: Team = Team.BLUE
    role: PlayerRole = PlayerRole.FORWARD
    max_speed: float = 0.0
    kick_power: float = 0.0
    cooldown: int = 0  # frames until the next kick is allowed

    def can_reach_ball(self, ball: Ball, slop: float) -> bool:
        """Whether the ball is within kicking distance."""
        return self.distance_to(ball.position) < self.radius + ball.radius + slop


@dataclass
class Ball(Entity):
    """The ball. ``owner_id`` is the last player in contact, advisory only."""

    owner_id: Optional[int] = None


def create_player(
    player_id: int,
    team: Team,
    role: PlayerRole,
    jersey_number: int,
    x: float,
    y: float,
    config: GameConfig = DEFAULT_CONFIG,
) -> Player:
    """Create a player at rest with role-derived speed and kick power."""
    physics = config.physics
    speed = physics.sprint_speed if role is PlayerRole.FORWARD else physics.player_speed
    return Player(
        position=Vector2(x, y),
        velocity=Vector2(0.0, 0.0),
        radius=physics.player_radius,
        mass=physics.player_mass,
        player_id=player_id,
        jersey_number=jersey_number,
        team=team,
        role=role,
        max_speed=speed,
        kick_power=physics.kick_strength,
        cooldown=0,
    )


def create_ball(config: GameConfig = DEFAULT_CONFIG) -> Ball:
    """Create a ball centred on the pitch, at rest and unowned."""
    return Ball(
        position=Vector2(config.pitch.mid_x, config.pitch.mid_y),
        velocity=Vector2(0.0, 0.0),
        radius=config.physics.ball_radius,
        mass=config.physics.ball_mass,
        owner_id=None,
    )
