"""Main entry point for the arcade soccer game.

This module provides command-line options to run the match:
- Windowed mode (default): pygame window with keyboard and mouse controls
- Headless mode: full match simulated faster than realtime, stats logged
"""

import argparse
import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
)

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 60


def run_windowed(seed=None, autopilot: bool = False, muted: bool = False):
    """Run the interactive pygame game."""
    import game

    game.main(seed=seed, autopilot=autopilot, muted=muted)


def run_headless(max_frames: int, stats_interval: int, seed=None, autopilot: bool = True):
    """Run a match in headless mode (no window, no sound, canned commentary).

    The match is started immediately and every quarter break is skipped, so
    ``max_frames`` caps the whole match rather than a single quarter.

    Args:
        max_frames: Maximum number of frames to simulate
        stats_interval: Log stats every N frames
        seed: Optional random seed for deterministic behavior
        autopilot: Let the AI drive the user's team as well

    Returns:
        The finished (or interrupted) match
    """
    from kickoff.match import ArcadeMatch

    match = ArcadeMatch(seed=seed, autopilot=autopilot)
    match.start()

    frames = 0
    kicks = 0
    logged_entries = 0
    while frames < max_frames and not match.game_over:
        if match.can_start_next_quarter:
            match.next_quarter()
        result = match.update()
        if result is None:
            break
        frames += 1
        kicks += len(result.kicks)

        for entry in match.log[logged_entries:]:
            logger.info("[Q%d %3ds] %s", match.quarter, entry.timestamp, entry.text)
        logged_entries = len(match.log)

        if stats_interval > 0 and frames % stats_interval == 0:
            ball = match.simulation.ball
            logger.info(
                "Frame %d | Q%d %02d:%02d | %s | kicks %d | ball (%.0f, %.0f)",
                frames,
                match.quarter,
                *divmod(match.time_remaining, 60),
                match.score_line(),
                kicks,
                ball.position.x,
                ball.position.y,
            )

    # Pick up lines produced by the final frame
    match.pause()
    match.update()
    for entry in match.log[logged_entries:]:
        logger.info("[Q%d %3ds] %s", match.quarter, entry.timestamp, entry.text)

    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("MATCH SUMMARY")
    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("Frames simulated: %d", frames)
    logger.info("Kicks: %d", kicks)
    logger.info("Score: %s", match.score_line())
    if match.game_over:
        winner = match.winner
        logger.info("Result: %s", f"{winner.display_name} win" if winner else "Draw")
    else:
        logger.info("Result: stopped in quarter %d", match.quarter)
    logger.info("=" * SEPARATOR_WIDTH)
    return match


def main():
    """Parse command-line arguments and run the appropriate mode."""
    parser = argparse.ArgumentParser(
        description="Kickoff - 5v5 Arcade Soccer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play in a window (default)
  python main.py

  # Simulate a whole match headless, AI on both sides
  python main.py --headless --max-frames 20000 --stats-interval 600

  # Reproducible run
  python main.py --headless --seed 42
        """,
    )

    parser.add_argument(
        "--headless", action="store_true", help="Run in headless mode (no window, stats only)"
    )

    parser.add_argument(
        "--max-frames",
        type=int,
        default=20000,
        help="Maximum frames to simulate in headless mode (default: 20000)",
    )

    parser.add_argument(
        "--stats-interval",
        type=int,
        default=600,
        help="Log stats every N frames in headless mode (default: 600)",
    )

    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )

    parser.add_argument(
        "--autopilot",
        action="store_true",
        help="Let the AI control the Blue team in windowed mode (always on when headless)",
    )

    parser.add_argument("--mute", action="store_true", help="Disable sound in windowed mode")

    args = parser.parse_args()

    if args.max_frames < 1:
        parser.error("--max-frames must be at least 1")

    if args.headless:
        logger.info("Starting headless match...")
        logger.info(
            "Configuration: up to %d frames, stats every %d frames",
            args.max_frames,
            args.stats_interval,
        )
        run_headless(args.max_frames, args.stats_interval, seed=args.seed)
    else:
        try:
            run_windowed(seed=args.seed, autopilot=args.autopilot, muted=args.mute)
        except ImportError as e:
            logger.error("Error: Required dependencies not installed: %s", e)
            logger.error("Install with: pip install -e .")
            sys.exit(1)


if __name__ == "__main__":
    main()
