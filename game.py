"""Interactive pygame host for the arcade match.

Keyboard: arrows/WASD move, Space/K kicks. A left-button drag anywhere on
the pitch acts as a virtual joystick anchored where the drag started, and
the right button is the touch kick button.
"""

import logging
from typing import Dict, Optional, Tuple

import pygame

from kickoff.commentary import CommentaryService
from kickoff.config import DEFAULT_CONFIG, GameConfig
from kickoff.input import InputState
from kickoff.match import ArcadeMatch
from rendering.pitch_renderer import PitchRenderer
from rendering.sound import PygameAudio

logger = logging.getLogger(__name__)

HUD_STRIP_HEIGHT = 110

# pygame key constant -> key name used by kickoff.input.KEY_BINDINGS
PYGAME_KEY_NAMES: Dict[int, str] = {
    pygame.K_UP: "ArrowUp",
    pygame.K_DOWN: "ArrowDown",
    pygame.K_LEFT: "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
    pygame.K_w: "KeyW",
    pygame.K_s: "KeyS",
    pygame.K_a: "KeyA",
    pygame.K_d: "KeyD",
    pygame.K_SPACE: "Space",
    pygame.K_k: "KeyK",
}


class ArcadeSoccerGame:
    """Window, event pump and frame loop around an ``ArcadeMatch``.

    Attributes:
        match: The match being played
        input_state: Held keys, joystick and touch button
        commentary: Background commentary worker
        screen: Pygame display surface
        clock: Pygame clock for frame rate
        renderer: Draws the match every frame
    """

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        seed: Optional[int] = None,
        autopilot: bool = False,
        muted: bool = False,
    ) -> None:
        self.config = config
        self.input_state = InputState(
            joystick_max_radius=config.control.joystick_max_radius,
            joystick_threshold=config.control.joystick_threshold,
        )
        self.commentary = CommentaryService()
        self.audio = PygameAudio(muted=muted)
        self.match = ArcadeMatch(
            config,
            seed=seed,
            audio=self.audio,
            commentary=self.commentary,
            autopilot=autopilot,
        )
        self.clock: pygame.time.Clock = pygame.time.Clock()
        self.screen: Optional[pygame.Surface] = None
        self.renderer: Optional[PitchRenderer] = None
        self._joystick_anchor: Optional[Tuple[int, int]] = None

    def setup_game(self) -> bool:
        """Open the window. Returns False if no display is available."""
        size = (int(self.config.pitch.width), int(self.config.pitch.height) + HUD_STRIP_HEIGHT)
        try:
            self.screen = pygame.display.set_mode(size)
            pygame.display.set_caption("Kickoff - 5v5 Arcade Soccer")
        except pygame.error as e:
            logger.error("Couldn't set the display mode: %s", e)
            return False

        font = pygame.font.Font(None, 22) if pygame.font.get_init() else None
        self.renderer = PitchRenderer(self.screen, font)
        self.commentary.start()
        return True

    def handle_events(self) -> bool:
        """Handle user input and other events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            elif event.type == pygame.KEYDOWN:
                if event.key in PYGAME_KEY_NAMES:
                    self.input_state.key_down(PYGAME_KEY_NAMES[event.key])
                elif event.key == pygame.K_RETURN:
                    if not self.match.has_started or self.match.game_over:
                        self.match.start()
                elif event.key == pygame.K_p:
                    if self.match.is_playing:
                        self.match.pause()
                    else:
                        self.match.resume()
                elif event.key == pygame.K_n:
                    self.match.next_quarter()
                elif event.key == pygame.K_ESCAPE:
                    return False
            elif event.type == pygame.KEYUP:
                if event.key in PYGAME_KEY_NAMES:
                    self.input_state.key_up(PYGAME_KEY_NAMES[event.key])
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    self._joystick_anchor = event.pos
                elif event.button == 3:
                    self.input_state.set_touch_action(True)
            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1:
                    self._joystick_anchor = None
                    self.input_state.release_joystick()
                elif event.button == 3:
                    self.input_state.set_touch_action(False)
            elif event.type == pygame.MOUSEMOTION and self._joystick_anchor is not None:
                ax, ay = self._joystick_anchor
                self.input_state.set_joystick(event.pos[0] - ax, event.pos[1] - ay)
            elif event.type == pygame.WINDOWFOCUSLOST:
                # Key-up events are lost while unfocused.
                self.input_state.clear()
                self._joystick_anchor = None
        return True

    def render(self) -> None:
        self.renderer.draw(self.match)
        if self._joystick_anchor is not None:
            ax, ay = self._joystick_anchor
            dx, dy = self.input_state.joystick_offset
            radius = int(self.config.control.joystick_max_radius)
            pygame.draw.circle(self.screen, (255, 255, 255), (ax, ay), radius, 2)
            pygame.draw.circle(self.screen, (255, 255, 255), (int(ax + dx), int(ay + dy)), 12)
        pygame.display.flip()

    def run(self) -> None:
        """Run the frame loop until the window is closed."""
        if not self.setup_game():
            return

        logger.info("Controls: arrows/WASD move, SPACE/K kick, ENTER start, P pause, N next quarter, ESC quit")

        try:
            while self.handle_events():
                self.match.update(self.input_state.snapshot())
                self.render()
                self.clock.tick(self.config.rules.frame_rate)
        finally:
            self.audio.stop_ambience()
            self.commentary.stop()

        logger.info("Final score: %s", self.match.score_line())


def main(seed: Optional[int] = None, autopilot: bool = False, muted: bool = False) -> None:
    """Entry point for the interactive game."""
    pygame.init()
    game = ArcadeSoccerGame(seed=seed, autopilot=autopilot, muted=muted)
    try:
        game.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    main()
