"""Arcade physics for players and the ball.

Simplified, deterministic and lightweight: velocity impulses with
exponential friction, hard walls for players, bouncy walls for the ball,
goal mouths on both vertical edges and a fixed push on player-ball contact.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from kickoff.ai import Kick
from kickoff.config import DEFAULT_CONFIG, GameConfig
from kickoff.entities import Ball, Player
from kickoff.math_utils import Vector2, clamp, direction_to
from kickoff.types import Team

logger = logging.getLogger(__name__)


class SoccerPhysics:
    """Physics resolver for the arcade pitch."""

    def __init__(self, config: GameConfig = DEFAULT_CONFIG):
        """Initialize the resolver.

        Args:
            config: Pitch geometry and physics tunables
        """
        self.config = config
        self.pitch = config.pitch
        self.params = config.physics

    def move_player(self, player: Player, direction: Vector2) -> None:
        """Advance a player by one frame.

        The movement direction is applied as a weighted impulse, then
        friction, then the speed cap; the new position is clamped so the
        player's circle stays on the pitch.
        """
        velocity = player.velocity
        if not direction.is_zero():
            velocity.x += direction.x * self.params.move_weight
            velocity.y += direction.y * self.params.move_weight

        velocity.scale_inplace(self.params.player_friction)

        speed = player.speed()
        if speed > player.max_speed:
            velocity.scale_inplace(player.max_speed / speed)

        player.position.add_inplace(velocity)
        self.clamp_to_pitch(player)

    def clamp_to_pitch(self, player: Player) -> None:
        r = player.radius
        player.position.update(
            clamp(player.position.x, r, self.pitch.width - r),
            clamp(player.position.y, r, self.pitch.height - r),
        )

    def apply_kick(self, player: Player, ball: Ball, kick: Kick) -> None:
        """Send the ball along ``kick.kick_direction`` and start the cooldown."""
        impulse = kick.kick_direction.normalize() * kick.power
        if kick.additive:
            ball.velocity.add_inplace(impulse)
        else:
            ball.velocity.update(impulse.x, impulse.y)
        ball.owner_id = None
        player.cooldown = kick.cooldown

    def update_ball(self, ball: Ball) -> Optional[Team]:
        """Move the ball one frame and resolve the pitch edges.

        Returns:
            The scoring team if the ball crossed a goal line inside the goal
            band, otherwise None. The caller is responsible for the reset.
        """
        velocity = ball.velocity
        velocity.scale_inplace(self.params.ball_friction)
        ball.position.add_inplace(velocity)

        bounce = self.params.wall_bounciness
        r = ball.radius
        height = self.pitch.height
        width = self.pitch.width

        if ball.position.y < r:
            ball.position.y = r
            velocity.y *= -bounce
        if ball.position.y > height - r:
            ball.position.y = height - r
            velocity.y *= -bounce

        if ball.position.x < 0:
            if self.pitch.in_goal_band(ball.position.y):
                logger.debug("Ball crossed left goal line at y=%.1f", ball.position.y)
                return Team.RED
            ball.position.x = r
            velocity.x *= -bounce
        if ball.position.x > width:
            if self.pitch.in_goal_band(ball.position.y):
                logger.debug("Ball crossed right goal line at y=%.1f", ball.position.y)
                return Team.BLUE
            ball.position.x = width - r
            velocity.x *= -bounce

        return None

    def resolve_ball_contacts(self, players: Sequence[Player], ball: Ball) -> Optional[int]:
        """Push the ball away from every overlapping player.

        Every contact contributes its own impulse. Ownership goes to the
        closest overlapping player, ties to the one listed first.

        Returns:
            The id of the new owner, or None if nobody touched the ball.
        """
        owner: Optional[Player] = None
        owner_dist = float("inf")

        for player in players:
            d = player.distance_to(ball.position)
            if d >= player.radius + ball.radius:
                continue
            push = direction_to(player.position, ball.position) * self.params.contact_impulse
            ball.velocity.add_inplace(push)
            if d < owner_dist:
                owner = player
                owner_dist = d

        if owner is None:
            return None
        ball.owner_id = owner.player_id
        return owner.player_id
