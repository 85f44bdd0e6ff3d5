"""Tests for the kickoff layout and formation targets."""

import pytest

from kickoff.entities import create_ball, create_player
from kickoff.formation import (
    TEAM_SIZE,
    build_kickoff_layout,
    build_kickoff_roster,
    formation_target,
    goalkeeper_home_x,
    kickoff_active_id,
    opposing_goal_x,
)
from kickoff.math_utils import Vector2
from kickoff.types import PlayerRole, Team


class TestKickoffLayout:
    def test_ten_players_blue_first(self):
        roster = build_kickoff_roster()

        assert len(roster) == 2 * TEAM_SIZE
        assert [p.player_id for p in roster] == list(range(10))
        assert all(p.team is Team.BLUE for p in roster[:5])
        assert all(p.team is Team.RED for p in roster[5:])

    def test_roles_per_team(self):
        roster = build_kickoff_roster()
        for team in (Team.BLUE, Team.RED):
            roles = [p.role for p in roster if p.team is team]
            assert roles.count(PlayerRole.GOALKEEPER) == 1
            assert roles.count(PlayerRole.DEFENDER) == 2
            assert roles.count(PlayerRole.FORWARD) == 2

    def test_jersey_numbers(self):
        roster = build_kickoff_roster()
        assert [p.jersey_number for p in roster[:5]] == [1, 2, 3, 7, 9]
        assert [p.jersey_number for p in roster[5:]] == [1, 2, 3, 10, 11]

    def test_coordinates_are_mirrored(self):
        layout = build_kickoff_layout()
        blue, red = layout[:5], layout[5:]

        assert (blue[0].x, blue[0].y) == (50.0, 250.0)
        assert (red[0].x, red[0].y) == (750.0, 250.0)
        assert (blue[1].x, blue[1].y) == (180.0, 170.0)
        assert (blue[2].x, blue[2].y) == (180.0, 330.0)
        assert (blue[3].x, blue[3].y) == (300.0, 190.0)
        assert (blue[4].x, blue[4].y) == (300.0, 310.0)
        for b, r in zip(blue, red):
            assert r.x == pytest.approx(800.0 - b.x)
            assert r.y == b.y

    def test_players_start_at_rest(self):
        for player in build_kickoff_roster():
            assert player.velocity == Vector2(0, 0)
            assert player.cooldown == 0

    def test_forwards_are_faster(self):
        roster = build_kickoff_roster()
        for player in roster:
            expected = 5.0 if player.role is PlayerRole.FORWARD else 3.5
            assert player.max_speed == expected
            assert player.kick_power == 12.0

    def test_active_player_is_blue_nine(self):
        roster = build_kickoff_roster()
        active_id = kickoff_active_id(roster)
        active = roster[active_id]

        assert active.team is Team.BLUE
        assert active.jersey_number == 9

    def test_layout_is_deterministic(self):
        assert build_kickoff_layout() == build_kickoff_layout()


class TestGoalGeometry:
    def test_goalkeeper_home(self):
        assert goalkeeper_home_x(Team.BLUE) == 40.0
        assert goalkeeper_home_x(Team.RED) == 760.0

    def test_opposing_goal(self):
        assert opposing_goal_x(Team.BLUE) == 800.0
        assert opposing_goal_x(Team.RED) == 0.0


class TestFormationTarget:
    def _ball_at(self, x, y):
        ball = create_ball()
        ball.position = Vector2(x, y)
        return ball

    def test_blue_defender_with_ball_at_centre(self):
        defender = create_player(1, Team.BLUE, PlayerRole.DEFENDER, 2, 180, 170)
        target = formation_target(defender, self._ball_at(400, 250))

        assert target.x == pytest.approx(275.0)
        # Odd id sits below mid-height
        assert target.y == pytest.approx(370.0)

    def test_red_defender_is_mirrored(self):
        defender = create_player(6, Team.RED, PlayerRole.DEFENDER, 2, 620, 170)
        target = formation_target(defender, self._ball_at(400, 250))

        assert target.x == pytest.approx(525.0)
        assert target.y == pytest.approx(130.0)

    def test_red_forward(self):
        forward = create_player(8, Team.RED, PlayerRole.FORWARD, 10, 500, 190)
        target = formation_target(forward, self._ball_at(400, 250))

        assert target.x == pytest.approx(325.0)
        assert target.y == pytest.approx(150.0)

    def test_line_follows_the_ball(self):
        defender = create_player(2, Team.BLUE, PlayerRole.DEFENDER, 3, 180, 330)
        target = formation_target(defender, self._ball_at(0, 350))

        assert target.x == pytest.approx(150.0)
        assert target.y == pytest.approx(250.0 - 120.0 + 100.0 * 0.3)

    def test_team_pushes_up_when_ball_advances(self):
        forward = create_player(3, Team.BLUE, PlayerRole.FORWARD, 7, 300, 190)
        deep = formation_target(forward, self._ball_at(100, 250))
        high = formation_target(forward, self._ball_at(700, 250))

        assert high.x > deep.x
