"""Match configuration.

All tunables are named constants fixed at construction time. The pitch is
measured in screen units with the origin at the top-left corner, x to the
right and y downward.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict

from kickoff.exceptions import ConfigurationError

# Pitch geometry
DEFAULT_PITCH_WIDTH = 800.0
DEFAULT_PITCH_HEIGHT = 500.0
DEFAULT_GOAL_WIDTH = 120.0
DEFAULT_GOAL_TOLERANCE = 5.0  # extra band either side of the goal mouth

# Entity geometry
DEFAULT_PLAYER_RADIUS = 12.0
DEFAULT_PLAYER_MASS = 5.0
DEFAULT_BALL_RADIUS = 6.0
DEFAULT_BALL_MASS = 1.0

# Physics
DEFAULT_BALL_FRICTION = 0.96
DEFAULT_PLAYER_FRICTION = 0.85
DEFAULT_WALL_BOUNCINESS = 0.5
DEFAULT_KICK_STRENGTH = 12.0
DEFAULT_PLAYER_SPEED = 3.5
DEFAULT_SPRINT_SPEED = 5.0
DEFAULT_MOVE_WEIGHT = 0.5
DEFAULT_CONTACT_IMPULSE = 1.5

# Control
DEFAULT_HYSTERESIS_MARGIN = 40.0
DEFAULT_USER_KICK_SLOP = 15.0
DEFAULT_USER_KICK_COOLDOWN = 10
DEFAULT_JOYSTICK_MAX_RADIUS = 40.0
DEFAULT_JOYSTICK_THRESHOLD = 10.0

# AI
DEFAULT_AI_KICK_SLOP = 5.0
DEFAULT_GK_CLOSE_RANGE = 60.0
DEFAULT_GK_HOME_OFFSET = 40.0
DEFAULT_GK_VERTICAL_BAND = 80.0
DEFAULT_GK_COOLDOWN = 20
DEFAULT_GK_CLEAR_VARIANCE = 0.5  # full width of the uniform angle spread (radians)
DEFAULT_DEFENDER_RANGE = 200.0
DEFAULT_FORWARD_RANGE = 250.0
DEFAULT_SHOOT_DISTANCE = 300.0
DEFAULT_SHOT_POWER_MULTIPLIER = 1.1
DEFAULT_SHOT_VARIANCE = 0.2
DEFAULT_SHOT_COOLDOWN = 30
DEFAULT_BALL_TRACKING = 0.3  # how far formation points follow the ball vertically

# Match rules
DEFAULT_QUARTER_SECONDS = 60
DEFAULT_QUARTERS = 4
DEFAULT_FRAME_RATE = 60  # Hz


@dataclass(frozen=True)
class PitchGeometry:
    """Immutable pitch dimensions."""

    width: float = DEFAULT_PITCH_WIDTH
    height: float = DEFAULT_PITCH_HEIGHT
    goal_width: float = DEFAULT_GOAL_WIDTH
    goal_tolerance: float = DEFAULT_GOAL_TOLERANCE

    @property
    def mid_x(self) -> float:
        return self.width / 2

    @property
    def mid_y(self) -> float:
        return self.height / 2

    @property
    def goal_y_min(self) -> float:
        """Lower bound of the scoring band (exclusive)."""
        return self.mid_y - self.goal_width / 2 - self.goal_tolerance

    @property
    def goal_y_max(self) -> float:
        """Upper bound of the scoring band (exclusive)."""
        return self.mid_y + self.goal_width / 2 + self.goal_tolerance

    def in_goal_band(self, y: float) -> bool:
        return self.goal_y_min < y < self.goal_y_max


@dataclass(frozen=True)
class PhysicsParams:
    """Arcade physics tunables, all per frame."""

    ball_friction: float = DEFAULT_BALL_FRICTION
    player_friction: float = DEFAULT_PLAYER_FRICTION
    wall_bounciness: float = DEFAULT_WALL_BOUNCINESS
    kick_strength: float = DEFAULT_KICK_STRENGTH
    player_speed: float = DEFAULT_PLAYER_SPEED
    sprint_speed: float = DEFAULT_SPRINT_SPEED
    move_weight: float = DEFAULT_MOVE_WEIGHT
    contact_impulse: float = DEFAULT_CONTACT_IMPULSE
    player_radius: float = DEFAULT_PLAYER_RADIUS
    player_mass: float = DEFAULT_PLAYER_MASS
    ball_radius: float = DEFAULT_BALL_RADIUS
    ball_mass: float = DEFAULT_BALL_MASS


@dataclass(frozen=True)
class ControlParams:
    """User control tunables."""

    hysteresis_margin: float = DEFAULT_HYSTERESIS_MARGIN
    kick_slop: float = DEFAULT_USER_KICK_SLOP
    kick_cooldown: int = DEFAULT_USER_KICK_COOLDOWN
    joystick_max_radius: float = DEFAULT_JOYSTICK_MAX_RADIUS
    joystick_threshold: float = DEFAULT_JOYSTICK_THRESHOLD


@dataclass(frozen=True)
class AIParams:
    """Decision thresholds for computer-controlled players."""

    kick_slop: float = DEFAULT_AI_KICK_SLOP
    gk_close_range: float = DEFAULT_GK_CLOSE_RANGE
    gk_home_offset: float = DEFAULT_GK_HOME_OFFSET
    gk_vertical_band: float = DEFAULT_GK_VERTICAL_BAND
    gk_cooldown: int = DEFAULT_GK_COOLDOWN
    gk_clear_variance: float = DEFAULT_GK_CLEAR_VARIANCE
    defender_range: float = DEFAULT_DEFENDER_RANGE
    forward_range: float = DEFAULT_FORWARD_RANGE
    shoot_distance: float = DEFAULT_SHOOT_DISTANCE
    shot_power_multiplier: float = DEFAULT_SHOT_POWER_MULTIPLIER
    shot_variance: float = DEFAULT_SHOT_VARIANCE
    shot_cooldown: int = DEFAULT_SHOT_COOLDOWN
    ball_tracking: float = DEFAULT_BALL_TRACKING


@dataclass(frozen=True)
class MatchRules:
    """Clock settings used by the match orchestrator."""

    quarter_seconds: int = DEFAULT_QUARTER_SECONDS
    quarters: int = DEFAULT_QUARTERS
    frame_rate: int = DEFAULT_FRAME_RATE


_SECTIONS = {
    "pitch": PitchGeometry,
    "physics": PhysicsParams,
    "control": ControlParams,
    "ai": AIParams,
    "rules": MatchRules,
}


@dataclass(frozen=True)
class GameConfig:
    """Complete configuration for a match.

    Grouped into sections so each component only reads what it needs.
    Instances are frozen: the simulation never mutates its configuration.
    """

    pitch: PitchGeometry = field(default_factory=PitchGeometry)
    physics: PhysicsParams = field(default_factory=PhysicsParams)
    control: ControlParams = field(default_factory=ControlParams)
    ai: AIParams = field(default_factory=AIParams)
    rules: MatchRules = field(default_factory=MatchRules)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a nested dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        """Create config from a nested dictionary, ignoring unknown keys."""
        sections = {}
        for name, section_cls in _SECTIONS.items():
            values = data.get(name) or {}
            sections[name] = section_cls(
                **{k: v for k, v in values.items() if k in section_cls.__dataclass_fields__}
            )
        return cls(**sections)

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ConfigurationError: If any parameters are invalid
        """
        if self.pitch.width <= 0 or self.pitch.height <= 0:
            raise ConfigurationError("Pitch dimensions must be positive")

        if not 0 < self.pitch.goal_width < self.pitch.height:
            raise ConfigurationError(
                f"goal_width must be in (0, pitch height), got {self.pitch.goal_width}"
            )

        for name in ("ball_friction", "player_friction", "wall_bounciness"):
            value = getattr(self.physics, name)
            if value < 0 or value > 1:
                raise ConfigurationError(f"{name} must be in [0, 1], got {value}")

        if self.physics.player_speed <= 0 or self.physics.sprint_speed <= 0:
            raise ConfigurationError("Player speeds must be positive")

        if self.physics.player_radius <= 0 or self.physics.ball_radius <= 0:
            raise ConfigurationError("Entity radii must be positive")

        if self.control.hysteresis_margin < 0:
            raise ConfigurationError("hysteresis_margin must be non-negative")

        if self.control.kick_cooldown < 0:
            raise ConfigurationError("kick_cooldown must be non-negative")

        for name in ("gk_cooldown", "shot_cooldown"):
            if getattr(self.ai, name) < 0:
                raise ConfigurationError(f"{name} must be non-negative")

        if self.rules.quarters < 1 or self.rules.quarter_seconds < 1:
            raise ConfigurationError("A match needs at least one quarter of one second")

        if self.rules.frame_rate < 1:
            raise ConfigurationError("frame_rate must be positive")


DEFAULT_CONFIG = GameConfig()
