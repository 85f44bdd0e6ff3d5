"""Pitch rendering for the arcade match.

This module draws the pitch, players, ball, scoreboard and commentary
ticker onto a pygame surface. It only reads match state.
"""

from typing import Optional, Tuple

import pygame

from kickoff.commentary import SPOKEN_KINDS
from kickoff.entities import Ball, Player
from kickoff.match import ArcadeMatch
from kickoff.types import Team

Color = Tuple[int, int, int]

PITCH_COLOR: Color = (52, 211, 153)
PITCH_STRIPE_COLOR: Color = (16, 185, 129)
LINE_COLOR: Color = (220, 245, 235)
BLUE_TEAM_COLOR: Color = (59, 130, 246)
RED_TEAM_COLOR: Color = (239, 68, 68)
BALL_COLOR: Color = (255, 255, 255)
ACTIVE_RING_COLOR: Color = (251, 191, 36)
SHADOW_COLOR: Color = (30, 90, 60)
TEXT_COLOR: Color = (255, 255, 255)
HIGHLIGHT_TEXT_COLOR: Color = (253, 224, 71)
HUD_BACKGROUND: Color = (17, 24, 39)

GOAL_DEPTH = 25
CENTER_CIRCLE_RADIUS = 50
STRIPE_COUNT = 10
HUD_HEIGHT = 40
TICKER_LINES = 3


class PitchRenderer:
    """Renders an ``ArcadeMatch`` onto a pygame surface.

    The pitch occupies the top of the surface; the scoreboard and the
    commentary ticker sit in a strip below it.

    Attributes:
        screen: Pygame surface to render to
        font: Font for jersey numbers and the HUD (None = skip text)
    """

    def __init__(self, screen: pygame.Surface, font: Optional[pygame.font.Font] = None) -> None:
        self.screen = screen
        self.font = font

    def draw(self, match: ArcadeMatch) -> None:
        """Draw one complete frame."""
        sim = match.simulation
        pitch = match.config.pitch
        self.draw_pitch(int(pitch.width), int(pitch.height), int(pitch.goal_width))
        for player in sim.players:
            self.draw_player(player, player.player_id == sim.state.active_player_id)
        self.draw_ball(sim.ball)
        self.draw_hud(match, int(pitch.height))

    def draw_pitch(self, width: int, height: int, goal_width: int) -> None:
        stripe = width // STRIPE_COUNT
        for i in range(STRIPE_COUNT):
            color = PITCH_COLOR if i % 2 == 0 else PITCH_STRIPE_COLOR
            pygame.draw.rect(self.screen, color, (i * stripe, 0, stripe + 1, height))

        pygame.draw.rect(self.screen, LINE_COLOR, (0, 0, width, height), 2)
        pygame.draw.line(self.screen, LINE_COLOR, (width // 2, 0), (width // 2, height), 2)
        pygame.draw.circle(self.screen, LINE_COLOR, (width // 2, height // 2), CENTER_CIRCLE_RADIUS, 2)
        pygame.draw.circle(self.screen, LINE_COLOR, (width // 2, height // 2), 3)

        goal_top = height // 2 - goal_width // 2
        for x in (0, width - GOAL_DEPTH):
            net = pygame.Rect(x, goal_top, GOAL_DEPTH, goal_width)
            pygame.draw.rect(self.screen, LINE_COLOR, net, 2)
            for gx in range(net.left, net.right, 5):
                pygame.draw.line(self.screen, LINE_COLOR, (gx, net.top), (gx, net.bottom), 1)
            for gy in range(net.top, net.bottom, 5):
                pygame.draw.line(self.screen, LINE_COLOR, (net.left, gy), (net.right, gy), 1)

    def draw_player(self, player: Player, active: bool) -> None:
        x, y = int(player.position.x), int(player.position.y)
        r = int(player.radius)
        pygame.draw.ellipse(self.screen, SHADOW_COLOR, (x - r + 2, y - r // 2 + 4, 2 * r, r))
        color = BLUE_TEAM_COLOR if player.team is Team.BLUE else RED_TEAM_COLOR
        pygame.draw.circle(self.screen, color, (x, y), r)

        if self.font is not None:
            label = self.font.render(str(player.jersey_number), True, TEXT_COLOR)
            self.screen.blit(label, label.get_rect(center=(x, y)))

        if active:
            pygame.draw.circle(self.screen, ACTIVE_RING_COLOR, (x, y), r + 5, 2)
            # Indicator arrow above the player
            tip_y = y - r - 8
            pygame.draw.polygon(
                self.screen,
                ACTIVE_RING_COLOR,
                [(x, tip_y), (x - 5, tip_y - 8), (x + 5, tip_y - 8)],
            )

    def draw_ball(self, ball: Ball) -> None:
        x, y = int(ball.position.x), int(ball.position.y)
        r = int(ball.radius)
        pygame.draw.circle(self.screen, SHADOW_COLOR, (x + 2, y + 3), r)
        pygame.draw.circle(self.screen, BALL_COLOR, (x, y), r)

    def draw_hud(self, match: ArcadeMatch, top: int) -> None:
        width = self.screen.get_width()
        height = self.screen.get_height() - top
        pygame.draw.rect(self.screen, HUD_BACKGROUND, (0, top, width, height))
        if self.font is None:
            return

        minutes, seconds = divmod(match.time_remaining, 60)
        status = "FULL TIME" if match.game_over else f"QUARTER {match.quarter}/{match.rules.quarters}"
        scoreboard = (
            f"BLUE {match.score[Team.BLUE]}  -  {match.score[Team.RED]} RED"
            f"    {minutes:02d}:{seconds:02d}    {status}"
        )
        if match.has_started and not match.is_playing and not match.game_over:
            scoreboard += "    [P] resume  [N] next quarter"
        elif not match.has_started or match.game_over:
            scoreboard += "    [ENTER] kick off"
        self._blit_line(scoreboard, 8, top + 8)

        for i, entry in enumerate(match.log[-TICKER_LINES:]):
            # Lines the host would read aloud stand out from the rest
            color = HIGHLIGHT_TEXT_COLOR if entry.kind in SPOKEN_KINDS else TEXT_COLOR
            self._blit_line(f"{entry.timestamp:>3}s  {entry.text}", 8, top + HUD_HEIGHT + i * 20, color)

    def _blit_line(self, text: str, x: int, y: int, color: Color = TEXT_COLOR) -> None:
        surface = self.font.render(text, True, color)
        self.screen.blit(surface, (x, y))
