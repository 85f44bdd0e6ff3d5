"""Device-agnostic input mapping.

Keyboard keys, a virtual joystick and a touch action button all fan into the
same five logical signals. Downstream code only ever sees a ``FrameInput``
and the ``ControlIntent`` derived from it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Set, Tuple

from kickoff.config import DEFAULT_JOYSTICK_MAX_RADIUS, DEFAULT_JOYSTICK_THRESHOLD
from kickoff.math_utils import Vector2


class Signal(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ACTION = "action"


# Key names follow the DOM ``KeyboardEvent.code`` convention.
KEY_BINDINGS: Dict[str, Signal] = {
    "ArrowUp": Signal.UP,
    "KeyW": Signal.UP,
    "ArrowDown": Signal.DOWN,
    "KeyS": Signal.DOWN,
    "ArrowLeft": Signal.LEFT,
    "KeyA": Signal.LEFT,
    "ArrowRight": Signal.RIGHT,
    "KeyD": Signal.RIGHT,
    "Space": Signal.ACTION,
    "KeyK": Signal.ACTION,
}


@dataclass(frozen=True)
class FrameInput:
    """Signals held during one frame."""

    signals: FrozenSet[Signal] = frozenset()

    @classmethod
    def of(cls, *signals: Signal) -> FrameInput:
        return cls(frozenset(signals))

    def held(self, signal: Signal) -> bool:
        return signal in self.signals


@dataclass(frozen=True)
class ControlIntent:
    """What the user wants the active player to do this frame."""

    direction: Vector2 = field(default_factory=Vector2)
    wants_kick: bool = False


def clamp_joystick(
    dx: float, dy: float, max_radius: float = DEFAULT_JOYSTICK_MAX_RADIUS
) -> Tuple[float, float]:
    """Clamp a joystick offset to ``max_radius``."""
    dist = math.sqrt(dx * dx + dy * dy)
    if dist > max_radius:
        ratio = max_radius / dist
        return dx * ratio, dy * ratio
    return dx, dy


def joystick_signals(
    dx: float,
    dy: float,
    max_radius: float = DEFAULT_JOYSTICK_MAX_RADIUS,
    threshold: float = DEFAULT_JOYSTICK_THRESHOLD,
) -> FrozenSet[Signal]:
    """Synthesize direction signals from a joystick offset (screen axes, y down)."""
    dx, dy = clamp_joystick(dx, dy, max_radius)
    signals: Set[Signal] = set()
    if dx > threshold:
        signals.add(Signal.RIGHT)
    if dx < -threshold:
        signals.add(Signal.LEFT)
    if dy > threshold:
        signals.add(Signal.DOWN)
    if dy < -threshold:
        signals.add(Signal.UP)
    return frozenset(signals)


def map_input(frame_input: FrameInput) -> ControlIntent:
    """Translate held signals into a unit-or-zero direction and a kick flag.

    When opposite directions are both held, down beats up and right beats left.
    """
    dx = 0.0
    dy = 0.0
    if frame_input.held(Signal.UP):
        dy = -1.0
    if frame_input.held(Signal.DOWN):
        dy = 1.0
    if frame_input.held(Signal.LEFT):
        dx = -1.0
    if frame_input.held(Signal.RIGHT):
        dx = 1.0

    direction = Vector2(dx, dy).normalize()
    return ControlIntent(direction=direction, wants_kick=frame_input.held(Signal.ACTION))


class InputState:
    """Live held-input tracker fed by the host's event handling.

    Keyboard keys, the joystick and the touch button are tracked separately
    so releasing one device never cancels another.
    """

    def __init__(
        self,
        bindings: Optional[Dict[str, Signal]] = None,
        joystick_max_radius: float = DEFAULT_JOYSTICK_MAX_RADIUS,
        joystick_threshold: float = DEFAULT_JOYSTICK_THRESHOLD,
    ) -> None:
        self._bindings = dict(bindings or KEY_BINDINGS)
        self._joystick_max_radius = joystick_max_radius
        self._joystick_threshold = joystick_threshold
        self._keys: Set[str] = set()
        self._joystick: FrozenSet[Signal] = frozenset()
        self._joystick_offset: Tuple[float, float] = (0.0, 0.0)
        self._touch_action = False

    def key_down(self, key: str) -> None:
        self._keys.add(key)

    def key_up(self, key: str) -> None:
        self._keys.discard(key)

    def set_joystick(self, dx: float, dy: float) -> None:
        self._joystick_offset = clamp_joystick(dx, dy, self._joystick_max_radius)
        self._joystick = joystick_signals(
            dx, dy, self._joystick_max_radius, self._joystick_threshold
        )

    def release_joystick(self) -> None:
        self._joystick_offset = (0.0, 0.0)
        self._joystick = frozenset()

    def set_touch_action(self, pressed: bool) -> None:
        self._touch_action = pressed

    def clear(self) -> None:
        self._keys.clear()
        self.release_joystick()
        self._touch_action = False

    @property
    def joystick_offset(self) -> Tuple[float, float]:
        """Clamped joystick offset, for drawing the thumb."""
        return self._joystick_offset

    def held_keys(self) -> Iterable[str]:
        return tuple(self._keys)

    def snapshot(self) -> FrameInput:
        """Freeze the currently held signals for one frame."""
        signals = {self._bindings[k] for k in self._keys if k in self._bindings}
        signals |= self._joystick
        if self._touch_action:
            signals.add(Signal.ACTION)
        return FrameInput(frozenset(signals))
