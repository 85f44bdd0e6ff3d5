"""
Commentary Generator

Produces one short spoken line per match event using Gemini. Without an API
key the event text is used as is; canned lines cover failed requests.
Generation never raises.
"""

import logging
import random
from enum import Enum
from typing import Dict, List, Optional

from kickoff.commentary.client import GeminiClient
from kickoff.exceptions import CommentaryError, CommentaryRateLimitError

logger = logging.getLogger(__name__)


class CommentaryKind(Enum):
    GOAL = "goal"
    START = "start"
    HALFTIME = "halftime"
    END = "end"
    GENERIC = "generic"


# Kinds worth an AI-generated line; the rest are logged verbatim.
AI_KINDS = frozenset({CommentaryKind.GOAL, CommentaryKind.START, CommentaryKind.END})

# Kinds read aloud by the host.
SPOKEN_KINDS = frozenset(
    {CommentaryKind.GOAL, CommentaryKind.START, CommentaryKind.END, CommentaryKind.HALFTIME}
)

FALLBACK_MESSAGES: Dict[CommentaryKind, List[str]] = {
    CommentaryKind.GOAL: [
        "Goal! What a finish!",
        "A thunderous strike and it's in the net!",
        "Straight past the defence and into the goal!",
        "The crowd is on its feet! Goal!",
        "The keeper had no chance with that one!",
        "A fantastic goal! The stadium erupts!",
    ],
    CommentaryKind.START: [
        "The whistle blows and we are under way!",
        "Both teams charge forward from the kickoff!",
        "Here we go, the tension is building!",
        "And we're off!",
    ],
    CommentaryKind.END: [
        "That's full time! What a battle that was.",
        "The referee blows the final whistle.",
        "Every player gave everything out there tonight!",
        "Win or lose, that was a cracking game.",
    ],
    CommentaryKind.HALFTIME: [
        "That's the end of the quarter. A short break before we resume.",
        "A breather after a fierce spell of play.",
    ],
}

SYSTEM_PROMPT = """You are an energetic, passionate commentator for a 5-a-side arcade soccer match.
Rules:
1. Always call the teams exactly "Blue" and "Red".
2. Never use markdown such as **bold** or *italics*.
3. No hashtags or special characters (~, -, @, ^, *). Only plain words and ! ? . ,
4. The line will be read aloud: make it natural spoken English.
5. One short, punchy sentence, at most 12 words.
Good examples: "Goal! Blue smash in a stunning long-range strike!", "What a save from the Red keeper!"
"""


def build_prompt(event: str, context: str) -> str:
    return f'Situation: "{event}".\nContext: "{context}".'


class CommentaryGenerator:
    """
    One-line commentary with an offline fallback.

    Usage:
        generator = CommentaryGenerator()          # uses GEMINI_API_KEY if set
        line = await generator.generate("Blue score!", CommentaryKind.GOAL, "Blue 1 - Red 0")
    """

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        rng: Optional[random.Random] = None,
        use_ai: bool = True,
    ):
        """
        Args:
            client: Gemini client. Created from the environment when omitted.
            rng: Random source for picking fallback lines.
            use_ai: Set False to never call Gemini (event text is used as is).
        """
        self._rng = rng or random.Random()
        self._client = client
        if self._client is None and use_ai:
            try:
                self._client = GeminiClient()
            except CommentaryError:
                logger.info("No Gemini API key configured, using built-in commentary")
                self._client = None

    @property
    def online(self) -> bool:
        return self._client is not None

    async def close(self):
        if self._client is not None:
            await self._client.close()

    def fallback(self, event: str, kind: CommentaryKind) -> str:
        """Pick a canned line for ``kind``, or return ``event`` unchanged."""
        messages = FALLBACK_MESSAGES.get(kind)
        if not messages:
            return event
        return self._rng.choice(messages)

    async def generate(self, event: str, kind: CommentaryKind, context: str = "") -> str:
        """Generate a spoken line for an event.

        Returns ``event`` unchanged when offline or for kinds not sent to the
        model, and a canned line for ``kind`` when the client fails.
        """
        if kind not in AI_KINDS:
            return event
        if self._client is None:
            return event

        try:
            result = await self._client.generate(system=SYSTEM_PROMPT, user=build_prompt(event, context))
        except CommentaryRateLimitError:
            logger.warning("Gemini quota exceeded, switching to built-in commentary")
            return self.fallback(event, kind)
        except CommentaryError as e:
            logger.error(f"Commentary generation failed: {e}")
            return self.fallback(event, kind)

        text = result.text.strip()
        logger.debug(f"Commentary generated in {result.latency_ms:.0f}ms")
        return text or self.fallback(event, kind)
