"""
Commentary Service

Runs the generator on its own asyncio loop in a daemon thread so that
network latency never touches the simulation frame. Requests are submitted
fire-and-forget; finished lines are drained with ``poll()`` once per frame.
"""

import asyncio
import concurrent.futures
import logging
import queue
import threading
from dataclasses import dataclass
from typing import List, Optional

from kickoff.commentary.generator import CommentaryGenerator, CommentaryKind

logger = logging.getLogger(__name__)


def _log_failure(future: concurrent.futures.Future) -> None:
    if not future.cancelled() and future.exception() is not None:
        logger.error("Commentary request failed", exc_info=future.exception())


@dataclass(frozen=True)
class CommentaryRequest:
    """An event the match wants commentary for."""
    request_id: str
    event: str
    kind: CommentaryKind
    context: str = ""
    timestamp: int = 0  # seconds elapsed in the quarter


@dataclass(frozen=True)
class CommentaryLine:
    """A finished line ready for the commentary log."""
    request_id: str
    text: str
    kind: CommentaryKind
    timestamp: int


class CommentaryService:
    """
    Background commentary worker.

    Usage:
        service = CommentaryService()
        service.submit(CommentaryRequest("1", "Blue score!", CommentaryKind.GOAL))
        ...
        for line in service.poll():   # once per frame
            log.append(line)
        service.stop()
    """

    def __init__(self, generator: Optional[CommentaryGenerator] = None):
        self._generator = generator
        self._results: "queue.Queue[CommentaryLine]" = queue.Queue()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever, name="commentary", daemon=True
        )
        self._thread.start()
        logger.debug("Commentary worker started")

    def submit(self, request: CommentaryRequest) -> None:
        """Queue a request; returns immediately."""
        if not self.running:
            self.start()
        future = asyncio.run_coroutine_threadsafe(self._handle(request), self._loop)
        future.add_done_callback(_log_failure)

    async def _handle(self, request: CommentaryRequest) -> None:
        if self._generator is None:
            # Created on the worker loop so the HTTP client binds to it.
            self._generator = CommentaryGenerator()
        text = await self._generator.generate(request.event, request.kind, request.context)
        self._results.put(
            CommentaryLine(
                request_id=request.request_id,
                text=text,
                kind=request.kind,
                timestamp=request.timestamp,
            )
        )

    def poll(self) -> List[CommentaryLine]:
        """Return every line finished since the last call, without blocking."""
        lines = []
        while True:
            try:
                lines.append(self._results.get_nowait())
            except queue.Empty:
                return lines

    def stop(self, timeout: float = 2.0) -> None:
        """Close the generator and stop the worker thread."""
        if not self.running:
            return
        if self._generator is not None:
            future = asyncio.run_coroutine_threadsafe(self._generator.close(), self._loop)
            try:
                future.result(timeout)
            except concurrent.futures.TimeoutError as e:
                logger.warning(f"Timed out closing commentary client: {e!r}")
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout)
        if self._thread.is_alive():
            # Daemon thread; the loop is left to exit with the process.
            logger.warning("Commentary worker did not stop within %.1fs", timeout)
        else:
            self._loop.close()
        self._thread = None
        self._loop = None
        logger.debug("Commentary worker stopped")


class ImmediateCommentary:
    """
    Synchronous stand-in used for headless runs: event text as is,
    available on the next ``poll()``.
    """

    def __init__(self):
        self._pending: List[CommentaryLine] = []

    def submit(self, request: CommentaryRequest) -> None:
        self._pending.append(
            CommentaryLine(request.request_id, request.event, request.kind, request.timestamp)
        )

    def poll(self) -> List[CommentaryLine]:
        lines, self._pending = self._pending, []
        return lines

    def stop(self) -> None:
        self._pending = []
