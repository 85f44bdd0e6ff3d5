"""Synthesized sound cues using pygame.mixer.

Every cue is a short tone rendered once into a 16-bit mono buffer. If the
mixer cannot be initialised (no audio device), the sink stays silent.
"""

import logging
import math
from array import array
from typing import Dict, Iterable, Optional, Tuple

import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050
AMPLITUDE = 32767

# (frequency Hz, start seconds, duration seconds, volume)
Note = Tuple[float, float, float, float]

KICK_NOTES: Tuple[Note, ...] = ((150.0, 0.0, 0.1, 0.3),)
WHISTLE_NOTES: Tuple[Note, ...] = ((2000.0, 0.0, 0.25, 0.15), (2100.0, 0.3, 0.35, 0.15))
GOAL_NOTES: Tuple[Note, ...] = tuple(
    (freq, i * 0.1, 1.0, 0.1) for i, freq in enumerate((523.25, 659.25, 783.99, 1046.50))
)
AMBIENCE_NOTES: Tuple[Note, ...] = tuple(
    (freq, i * 0.5, 0.45, 0.05) for i, freq in enumerate((261.63, 329.63, 392.0, 329.63))
)


def render_notes(notes: Iterable[Note], sample_rate: int = SAMPLE_RATE) -> array:
    """Mix decaying sine notes into a signed 16-bit sample buffer."""
    notes = list(notes)
    total = max(int(start * sample_rate) + int(duration * sample_rate) for _, start, duration, _ in notes)
    samples = [0.0] * total
    for freq, start, duration, volume in notes:
        offset = int(start * sample_rate)
        count = int(duration * sample_rate)
        for i in range(count):
            t = i / sample_rate
            envelope = math.exp(-4.0 * t / duration)
            samples[offset + i] += volume * envelope * math.sin(2 * math.pi * freq * t)
    return array("h", (int(max(-1.0, min(1.0, s)) * AMPLITUDE) for s in samples))


class PygameAudio:
    """Audio sink that plays synthesized cues through pygame.mixer."""

    def __init__(self, muted: bool = False) -> None:
        self.muted = muted
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._ambience_channel: Optional[pygame.mixer.Channel] = None
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        except pygame.error as e:
            logger.warning("Audio disabled, mixer unavailable: %s", e)
            return

        for name, notes in (
            ("kick", KICK_NOTES),
            ("whistle", WHISTLE_NOTES),
            ("goal", GOAL_NOTES),
            ("ambience", AMBIENCE_NOTES),
        ):
            self._sounds[name] = pygame.mixer.Sound(buffer=render_notes(notes).tobytes())

    def _play(self, name: str) -> None:
        sound = self._sounds.get(name)
        if sound is not None and not self.muted:
            sound.play()

    def play_kick(self) -> None:
        self._play("kick")

    def play_goal(self) -> None:
        self._play("goal")

    def play_whistle(self) -> None:
        self._play("whistle")

    def start_ambience(self) -> None:
        sound = self._sounds.get("ambience")
        if sound is None or self.muted or self._ambience_channel is not None:
            return
        self._ambience_channel = sound.play(loops=-1)

    def stop_ambience(self) -> None:
        if self._ambience_channel is not None:
            self._ambience_channel.stop()
            self._ambience_channel = None
