"""
Match commentary.

Gemini-backed one-line commentary with canned fallback lines, run off the
simulation thread.
"""

from kickoff.commentary.client import GeminiClient, GenerationResult
from kickoff.commentary.generator import (
    AI_KINDS,
    FALLBACK_MESSAGES,
    SPOKEN_KINDS,
    CommentaryGenerator,
    CommentaryKind,
)
from kickoff.commentary.service import (
    CommentaryLine,
    CommentaryRequest,
    CommentaryService,
    ImmediateCommentary,
)

__all__ = [
    "AI_KINDS",
    "FALLBACK_MESSAGES",
    "SPOKEN_KINDS",
    "CommentaryGenerator",
    "CommentaryKind",
    "CommentaryLine",
    "CommentaryRequest",
    "CommentaryService",
    "GeminiClient",
    "GenerationResult",
    "ImmediateCommentary",
]
