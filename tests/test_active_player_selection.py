"""Tests for hysteresis-based active-player selection."""

from kickoff.entities import create_ball, create_player
from kickoff.math_utils import Vector2
from kickoff.selection import select_active_player
from kickoff.types import PlayerRole, Team

MARGIN = 40.0


def _ball_at(x, y):
    ball = create_ball()
    ball.position = Vector2(x, y)
    return ball


def _blue(player_id, x, y):
    return create_player(player_id, Team.BLUE, PlayerRole.FORWARD, player_id + 1, x, y)


def test_switches_when_clearly_closer():
    players = [_blue(0, 100, 100), _blue(1, 300, 100)]
    ball = _ball_at(290, 100)

    assert select_active_player(players, ball, 0, Team.BLUE, MARGIN) == 1


def test_keeps_control_inside_margin():
    # Active is 50 away, the other player 20 away: 20 < 50 - 40 is false
    players = [_blue(0, 350, 100), _blue(1, 320, 100)]
    ball = _ball_at(300, 100)

    assert select_active_player(players, ball, 0, Team.BLUE, MARGIN) == 0


def test_switches_just_past_margin():
    players = [_blue(0, 351, 100), _blue(1, 310, 100)]
    ball = _ball_at(300, 100)

    assert select_active_player(players, ball, 0, Team.BLUE, MARGIN) == 1


def test_active_closest_stays():
    players = [_blue(0, 300, 100), _blue(1, 500, 100)]
    ball = _ball_at(300, 110)

    assert select_active_player(players, ball, 0, Team.BLUE, MARGIN) == 0


def test_opponents_are_ignored():
    players = [
        _blue(0, 100, 100),
        create_player(5, Team.RED, PlayerRole.FORWARD, 10, 300, 100),
    ]
    ball = _ball_at(300, 100)

    assert select_active_player(players, ball, 0, Team.BLUE, MARGIN) == 0


def test_missing_active_picks_closest():
    players = [_blue(0, 100, 100), _blue(1, 250, 100)]
    ball = _ball_at(300, 100)

    assert select_active_player(players, ball, 42, Team.BLUE, MARGIN) == 1


def test_empty_team_returns_active_id():
    players = [create_player(5, Team.RED, PlayerRole.FORWARD, 10, 300, 100)]

    assert select_active_player(players, _ball_at(0, 0), 3, Team.BLUE, MARGIN) == 3


def test_tie_goes_to_first_listed():
    players = [_blue(0, 700, 100), _blue(1, 290, 100), _blue(2, 310, 100)]
    ball = _ball_at(300, 100)

    assert select_active_player(players, ball, 0, Team.BLUE, MARGIN) == 1


def test_always_returns_team_member():
    players = [_blue(0, 100, 100), _blue(1, 700, 400)]
    for x, y in [(0, 0), (400, 250), (800, 500), (650, 380)]:
        chosen = select_active_player(players, _ball_at(x, y), 0, Team.BLUE, MARGIN)
        assert chosen in (0, 1)
