"""Kickoff layout and dynamic formation targets.

The kickoff layout is fixed: one goalkeeper, two defenders and two forwards
per side, mirrored left/right. Ids are assigned in layout order with the
blue team first, so the same layout always yields the same ids.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from kickoff.config import DEFAULT_CONFIG, GameConfig
from kickoff.entities import Ball, Player, create_player
from kickoff.math_utils import Vector2
from kickoff.types import PlayerRole, Team

TEAM_SIZE = 5

# Jersey number of the blue player who takes control at every kickoff.
KICKOFF_ACTIVE_JERSEY = 9


@dataclass(frozen=True)
class SpawnSpec:
    team: Team
    role: PlayerRole
    jersey_number: int
    x: float
    y: float


# (role, blue jersey, red jersey, distance from own goal line, offset from mid-height)
_LAYOUT: Tuple[Tuple[PlayerRole, int, int, float, float], ...] = (
    (PlayerRole.GOALKEEPER, 1, 1, 50.0, 0.0),
    (PlayerRole.DEFENDER, 2, 2, 180.0, -80.0),
    (PlayerRole.DEFENDER, 3, 3, 180.0, 80.0),
    (PlayerRole.FORWARD, 7, 10, 300.0, -60.0),
    (PlayerRole.FORWARD, 9, 11, 300.0, 60.0),
)

# Formation x = base + ball_fraction * span, measured from the team's own goal line.
_FORMATION_DEPTH = {
    PlayerRole.DEFENDER: (150.0, 250.0),
    PlayerRole.FORWARD: (300.0, 350.0),
}

_FORMATION_WIDTH = {
    PlayerRole.DEFENDER: 120.0,
    PlayerRole.FORWARD: 100.0,
}


def build_kickoff_layout(config: GameConfig = DEFAULT_CONFIG) -> List[SpawnSpec]:
    """Build the kickoff layout for both teams.

    Returns a deterministic list with all blue players first.
    """
    width = config.pitch.width
    mid_y = config.pitch.mid_y

    spawns: List[SpawnSpec] = []
    for team in (Team.BLUE, Team.RED):
        for role, blue_jersey, red_jersey, depth, y_offset in _LAYOUT:
            if team is Team.BLUE:
                spawns.append(SpawnSpec(team, role, blue_jersey, depth, mid_y + y_offset))
            else:
                spawns.append(SpawnSpec(team, role, red_jersey, width - depth, mid_y + y_offset))
    return spawns


def build_kickoff_roster(config: GameConfig = DEFAULT_CONFIG) -> List[Player]:
    """Create all ten players at their kickoff coordinates."""
    return [
        create_player(
            player_id=i,
            team=spec.team,
            role=spec.role,
            jersey_number=spec.jersey_number,
            x=spec.x,
            y=spec.y,
            config=config,
        )
        for i, spec in enumerate(build_kickoff_layout(config))
    ]


def kickoff_active_id(players: List[Player], team: Team = Team.BLUE) -> int:
    """Id of the forward who takes control at kickoff."""
    for player in players:
        if player.team is team and player.jersey_number == KICKOFF_ACTIVE_JERSEY:
            return player.player_id
    # Fall back to the first forward if the layout ever changes.
    forwards = [p for p in players if p.team is team and p.role is PlayerRole.FORWARD]
    return forwards[0].player_id


def goalkeeper_home_x(team: Team, config: GameConfig = DEFAULT_CONFIG) -> float:
    offset = config.ai.gk_home_offset
    return offset if team is Team.BLUE else config.pitch.width - offset


def opposing_goal_x(team: Team, config: GameConfig = DEFAULT_CONFIG) -> float:
    return config.pitch.width if team is Team.BLUE else 0.0


def formation_target(player: Player, ball: Ball, config: GameConfig = DEFAULT_CONFIG) -> Vector2:
    """Where an outfield player should stand when not contesting the ball.

    Depth follows the ball's horizontal fraction across the pitch, so the
    whole team shifts up when attacking. Players alternate above and below
    mid-height by id parity, and the line drifts toward the ball vertically.
    """
    width = config.pitch.width
    mid_y = config.pitch.mid_y
    ball_fraction = ball.position.x / width

    base, span = _FORMATION_DEPTH.get(player.role, (0.0, 0.0))
    if player.team is Team.BLUE:
        x = base + ball_fraction * span
    else:
        x = width - (base + (1 - ball_fraction) * span)

    y_offset = _FORMATION_WIDTH.get(player.role, 100.0)
    y = mid_y - y_offset if player.player_id % 2 == 0 else mid_y + y_offset
    y += (ball.position.y - mid_y) * config.ai.ball_tracking

    return Vector2(x, y)
