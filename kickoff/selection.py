"""Active-player selection with hysteresis."""

from __future__ import annotations

from typing import Optional, Sequence

from kickoff.entities import Ball, Player
from kickoff.types import Team


def select_active_player(
    players: Sequence[Player],
    ball: Ball,
    active_id: int,
    team: Team,
    hysteresis_margin: float,
) -> int:
    """Choose which of ``team``'s players the user controls this frame.

    The active player keeps control unless the teammate closest to the ball
    is closer by more than ``hysteresis_margin``. If ``active_id`` is not on
    the roster, the closest teammate is returned. Equal distances resolve to
    the player listed first.

    Returns:
        The id of the player to control, or ``active_id`` unchanged when the
        team has no players at all.
    """
    closest: Optional[Player] = None
    closest_dist = float("inf")
    active: Optional[Player] = None

    for player in players:
        if player.team is not team:
            continue
        d = player.distance_to(ball.position)
        if d < closest_dist:
            closest = player
            closest_dist = d
        if player.player_id == active_id:
            active = player

    if closest is None:
        return active_id
    if active is None:
        return closest.player_id

    active_dist = active.distance_to(ball.position)
    if closest.player_id != active.player_id and closest_dist < active_dist - hysteresis_margin:
        return closest.player_id
    return active.player_id
