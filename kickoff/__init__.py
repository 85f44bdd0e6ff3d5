"""Kickoff: a 5v5 arcade soccer simulation.

Components:
- Simulation / step: deterministic per-frame engine
- select_active_player: hysteresis-based control switching
- decide_action: role-based AI for computer-controlled players
- SoccerPhysics: movement, walls, goals and ball contact
- InputState / map_input: device-agnostic user input
- ArcadeMatch: score, quarter clock, commentary and sound cues
"""

from kickoff.ai import Chase, Dribble, Hold, Kick, ReturnToFormation, Steer, decide_action
from kickoff.config import DEFAULT_CONFIG, GameConfig
from kickoff.entities import Ball, Player, create_ball, create_player
from kickoff.events import EventBus, GoalScoredEvent, KickEvent, PeriodResetEvent
from kickoff.input import FrameInput, InputState, Signal, map_input
from kickoff.match import ArcadeMatch
from kickoff.physics import SoccerPhysics
from kickoff.selection import select_active_player
from kickoff.simulation import Simulation, SimulationState, StepResult, kickoff_state, step
from kickoff.types import PlayerRole, Team

__all__ = [
    # Configuration
    "DEFAULT_CONFIG",
    "GameConfig",
    # Entities
    "Ball",
    "Player",
    "PlayerRole",
    "Team",
    "create_ball",
    "create_player",
    # Simulation
    "Simulation",
    "SimulationState",
    "StepResult",
    "kickoff_state",
    "step",
    "SoccerPhysics",
    "select_active_player",
    # AI
    "Chase",
    "Dribble",
    "Hold",
    "Kick",
    "ReturnToFormation",
    "Steer",
    "decide_action",
    # Input
    "FrameInput",
    "InputState",
    "Signal",
    "map_input",
    # Events
    "EventBus",
    "GoalScoredEvent",
    "KickEvent",
    "PeriodResetEvent",
    # Match
    "ArcadeMatch",
]
