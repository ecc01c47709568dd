"""
Playback surface interface for Hear Lingo.

The video element is an external collaborator. The engine only needs to read
the current time, seek, pause, and be told about time updates, play and
pause; PlaybackTimeSource is that narrow port. SimulatedPlayback is an
in-memory implementation for headless use and tests.
"""

import logging
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

TIME_UPDATE = "timeupdate"
PLAY = "play"
PAUSE = "pause"

EVENTS = (TIME_UPDATE, PLAY, PAUSE)


class PlaybackTimeSource:
    """
    Base interface for a playback surface.

    Subclasses provide ``current_time``, ``paused``, ``seek`` and ``pause``
    and call ``emit`` when the underlying player reports an event.
    Time-update listeners receive the current time; play and pause
    listeners are called without arguments.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {event: [] for event in EVENTS}

    @property
    def current_time(self) -> float:
        raise NotImplementedError

    @property
    def paused(self) -> bool:
        raise NotImplementedError

    def seek(self, seconds: float) -> None:
        raise NotImplementedError

    def pause(self) -> None:
        raise NotImplementedError

    def subscribe(self, event: str, callback: Callable) -> Callable[[], None]:
        """
        Register ``callback`` for ``event``.

        Returns:
            A function that removes the registration
        """
        if event not in self._listeners:
            raise ValueError(f"Unknown playback event: {event}")
        self._listeners[event].append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners[event]:
                self._listeners[event].remove(callback)

        return unsubscribe

    def emit(self, event: str) -> None:
        """Deliver ``event`` to its listeners."""
        for callback in list(self._listeners[event]):
            if event == TIME_UPDATE:
                callback(self.current_time)
            else:
                callback()


class SimulatedPlayback(PlaybackTimeSource):
    """
    In-memory playback clock.

    Mirrors an HTML video element closely enough for the engine: seeking
    fires a time update, play/pause fire their events only on an actual
    state change.
    """

    def __init__(self, current_time: float = 0.0, paused: bool = True, duration: float = float('inf')):
        super().__init__()
        self._current_time = current_time
        self._paused = paused
        self.duration = duration
        self.seeks: List[float] = []

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def paused(self) -> bool:
        return self._paused

    def seek(self, seconds: float) -> None:
        self._current_time = min(max(0.0, seconds), self.duration)
        self.seeks.append(self._current_time)
        logger.debug(f"Seek to {self._current_time:.3f}s")
        self.emit(TIME_UPDATE)

    def play(self) -> None:
        if self._paused:
            self._paused = False
            self.emit(PLAY)

    def pause(self) -> None:
        if not self._paused:
            self._paused = True
            self.emit(PAUSE)

    def advance(self, seconds: float) -> None:
        """Move the clock forward as playback would, firing a time update."""
        self.tick(self._current_time + seconds)

    def tick(self, current_time: float) -> None:
        """Report a time update at ``current_time`` without recording a seek."""
        self._current_time = min(max(0.0, current_time), self.duration)
        self.emit(TIME_UPDATE)
