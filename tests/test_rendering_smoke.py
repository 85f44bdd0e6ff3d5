"""Smoke tests for the pygame renderer and sound synthesis (no window, no device)."""

import pytest

pygame = pytest.importorskip("pygame")

from kickoff.match import ArcadeMatch  # noqa: E402
from rendering.pitch_renderer import PitchRenderer  # noqa: E402
from rendering.sound import GOAL_NOTES, KICK_NOTES, SAMPLE_RATE, render_notes  # noqa: E402


def test_draws_a_frame_without_font():
    surface = pygame.Surface((800, 610))
    match = ArcadeMatch(seed=1)
    match.start()
    match.update()

    PitchRenderer(surface).draw(match)

    # Centre spot and ball sit on the kickoff point
    assert surface.get_at((400, 250))[:3] != (0, 0, 0)


def test_render_notes_length_and_range():
    samples = render_notes(KICK_NOTES)
    assert len(samples) == 2205
    assert max(abs(s) for s in samples) <= 32767

    chord = render_notes(GOAL_NOTES)
    assert len(chord) == 6615 + SAMPLE_RATE
