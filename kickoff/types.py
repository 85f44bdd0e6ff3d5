"""Shared enums for teams and player roles."""

from __future__ import annotations

from enum import Enum


class Team(Enum):
    """The two sides of a match. BLUE defends the left edge."""

    BLUE = "BLUE"
    RED = "RED"

    @property
    def attack_direction(self) -> int:
        """+1 when attacking toward +x, -1 otherwise."""
        return 1 if self is Team.BLUE else -1

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class PlayerRole(Enum):
    """Player roles."""

    GOALKEEPER = "GK"
    DEFENDER = "DEF"
    FORWARD = "FWD"


# The user always controls the left-hand team.
USER_TEAM = Team.BLUE
