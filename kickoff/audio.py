"""Audio collaborator contract.

The simulation and match only ever *notify* audio; calls are fire-and-forget
and must never raise into the frame loop. ``NullAudio`` is used headless;
``rendering.sound.PygameAudio`` synthesizes the real sounds.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class AudioSink(Protocol):
    """Receives sound cues from the match."""

    def play_kick(self) -> None: ...

    def play_goal(self) -> None: ...

    def play_whistle(self) -> None: ...

    def start_ambience(self) -> None: ...

    def stop_ambience(self) -> None: ...


class NullAudio:
    """Silent audio sink."""

    def play_kick(self) -> None:
        pass

    def play_goal(self) -> None:
        pass

    def play_whistle(self) -> None:
        pass

    def start_ambience(self) -> None:
        pass

    def stop_ambience(self) -> None:
        pass
