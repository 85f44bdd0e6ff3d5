"""Match orchestration: score, quarter clock, commentary log and sound cues.

The match owns the scoreboard, the four-quarter clock and pause/resume, and
triggers commentary and audio. It listens to the simulation's events and
never changes how a frame is simulated.

The clock is frame-driven: one second elapses every ``frame_rate`` frames
of play, so a paused match or a slow host simply runs the clock slower.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from kickoff.audio import AudioSink, NullAudio
from kickoff.commentary import CommentaryKind, CommentaryRequest, ImmediateCommentary
from kickoff.config import DEFAULT_CONFIG, GameConfig
from kickoff.events import GoalScoredEvent, KickEvent
from kickoff.input import FrameInput
from kickoff.simulation import Simulation, StepResult
from kickoff.types import Team

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommentaryLogEntry:
    """One line in the on-screen commentary feed."""

    entry_id: str
    text: str
    timestamp: int  # seconds elapsed in the quarter when the event happened
    kind: CommentaryKind


class ArcadeMatch:
    """A four-quarter match between the user (Blue) and the computer (Red)."""

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        seed: Optional[int] = None,
        audio: Optional[AudioSink] = None,
        commentary: Any = None,
        autopilot: bool = False,
    ):
        """Initialize a match that has not kicked off yet.

        Args:
            config: Match configuration
            seed: Random seed for the simulation
            audio: Sound cue sink (silent if omitted)
            commentary: Object with ``submit(request)`` and ``poll()``;
                defaults to canned lines delivered on the next frame
            autopilot: Let the AI drive the user's player too
        """
        self.config = config
        self.rules = config.rules
        self.simulation = Simulation(config, seed=seed, autopilot=autopilot)
        self.audio = audio or NullAudio()
        self.commentary = commentary if commentary is not None else ImmediateCommentary()

        self.score: Dict[Team, int] = {Team.BLUE: 0, Team.RED: 0}
        self.quarter = 1
        self.time_remaining = self.rules.quarter_seconds
        self.has_started = False
        self.is_playing = False
        self.game_over = False
        self.log: List[CommentaryLogEntry] = []

        self._frames_this_second = 0
        self._next_entry_id = 1

        self.simulation.events.subscribe(GoalScoredEvent, self._on_goal)
        self.simulation.events.subscribe(KickEvent, self._on_kick)

    # ------------------------------------------------------------------
    # Flow control
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Kick off a new match from quarter one with a clean scoreboard."""
        self.has_started = True
        self.is_playing = True
        self.game_over = False
        self.quarter = 1
        self.time_remaining = self.rules.quarter_seconds
        self._frames_this_second = 0
        self.score = {Team.BLUE: 0, Team.RED: 0}
        self.log = []
        self.simulation.reset()

        self.audio.play_whistle()
        self.audio.start_ambience()
        self._comment("Quarter 1 of the Creative Cup is under way!", CommentaryKind.START)
        logger.info("Match started")

    def pause(self) -> None:
        if not self.is_playing:
            return
        self.is_playing = False
        self.audio.stop_ambience()

    def resume(self) -> None:
        """Resume a paused quarter. Ignored between quarters or after the match."""
        if self.is_playing or not self.has_started or self.game_over or self.time_remaining <= 0:
            logger.debug("resume() ignored: nothing to resume")
            return
        self.is_playing = True
        self.audio.start_ambience()

    @property
    def can_start_next_quarter(self) -> bool:
        return (
            self.has_started
            and not self.is_playing
            and not self.game_over
            and self.time_remaining == 0
            and self.quarter < self.rules.quarters
        )

    def next_quarter(self) -> None:
        """Start the next quarter after the previous one has ended."""
        if not self.can_start_next_quarter:
            logger.debug("next_quarter() ignored in quarter %d", self.quarter)
            return
        self.quarter += 1
        self.time_remaining = self.rules.quarter_seconds
        self._frames_this_second = 0
        self.simulation.reset()
        self.is_playing = True

        self.audio.play_whistle()
        self.audio.start_ambience()
        self._comment(f"Quarter {self.quarter} kicks off!", CommentaryKind.START)

    # ------------------------------------------------------------------
    # Per-frame update
    # ------------------------------------------------------------------

    def update(self, frame_input: Optional[FrameInput] = None) -> Optional[StepResult]:
        """Advance the match by one frame.

        Finished commentary lines are collected every frame, even while
        paused. The simulation and clock only advance while playing.

        Returns:
            The simulation step result, or None if the match is not playing
        """
        self._collect_commentary()
        if not self.is_playing:
            return None

        result = self.simulation.step(frame_input)

        self._frames_this_second += 1
        if self._frames_this_second >= self.rules.frame_rate:
            self._frames_this_second = 0
            self.time_remaining -= 1
            if self.time_remaining <= 0:
                self.time_remaining = 0
                self._end_quarter()

        return result

    @property
    def winner(self) -> Optional[Team]:
        """Team ahead on the scoreboard, None for a draw."""
        blue, red = self.score[Team.BLUE], self.score[Team.RED]
        if blue > red:
            return Team.BLUE
        if red > blue:
            return Team.RED
        return None

    def score_line(self) -> str:
        return f"Blue {self.score[Team.BLUE]} - Red {self.score[Team.RED]}"

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_goal(self, event: GoalScoredEvent) -> None:
        self.score[event.team] += 1
        self.audio.play_goal()
        logger.info("Goal for %s, %s", event.team.display_name, self.score_line())

        if event.team is Team.BLUE:
            context = "The user's Blue team scores a brilliant goal!"
        else:
            context = "The computer's Red team hits back with a goal!"
        self._comment(f"{event.team.display_name} score!", CommentaryKind.GOAL, context)

    def _on_kick(self, event: KickEvent) -> None:
        self.audio.play_kick()

    def _end_quarter(self) -> None:
        self.is_playing = False
        self.audio.play_whistle()
        self.audio.stop_ambience()

        if self.quarter < self.rules.quarters:
            logger.info("End of quarter %d, %s", self.quarter, self.score_line())
            self._comment(
                f"End of quarter {self.quarter}! Play resumes after a short break.",
                CommentaryKind.HALFTIME,
            )
            return

        self.game_over = True
        winner = self.winner
        verdict = f"{winner.display_name} win!" if winner is not None else "It ends in a draw!"
        logger.info("Full time, %s", self.score_line())
        self._comment(
            f"Full time! {verdict}",
            CommentaryKind.END,
            f"Final score: {self.score_line()}",
        )

    # ------------------------------------------------------------------
    # Commentary
    # ------------------------------------------------------------------

    def _comment(self, text: str, kind: CommentaryKind, context: str = "") -> None:
        entry_id = str(self._next_entry_id)
        self._next_entry_id += 1
        full_context = (
            f"Current score: {self.score_line()}. Quarter {self.quarter}, "
            f"{self.time_remaining} seconds remaining. {context}"
        ).strip()
        self.commentary.submit(
            CommentaryRequest(
                request_id=entry_id,
                event=text,
                kind=kind,
                context=full_context,
                timestamp=self.rules.quarter_seconds - self.time_remaining,
            )
        )

    def _collect_commentary(self) -> None:
        for line in self.commentary.poll():
            self.log.append(
                CommentaryLogEntry(
                    entry_id=line.request_id,
                    text=line.text,
                    timestamp=line.timestamp,
                    kind=line.kind,
                )
            )

    def snapshot(self) -> Dict[str, Any]:
        """Simulation snapshot plus scoreboard and clock."""
        snapshot = self.simulation.snapshot()
        snapshot.update(
            {
                "score": {team.value: goals for team, goals in self.score.items()},
                "quarter": self.quarter,
                "time_remaining": self.time_remaining,
                "is_playing": self.is_playing,
                "game_over": self.game_over,
            }
        )
        return snapshot
