"""
A/B repeat for Hear Lingo.

LoopController keeps playback inside a user-chosen window. It is Idle until a
window with at least one bound is submitted, then Armed: on every time
update, falling behind the start or running past the end seeks back to the
start (0 when no start was given).
"""

import enum
import logging
from typing import Callable, List, Optional, Tuple

from .models import LoopWindow
from .playback import TIME_UPDATE, PlaybackTimeSource
from .utils import format_seconds_to_mmss, parse_time_input

logger = logging.getLogger(__name__)


class LoopState(str, enum.Enum):
    IDLE = "idle"
    ARMED = "armed"


class LoopController:
    """
    State machine enforcing a LoopWindow on a playback source.

    Args:
        source: Playback surface to seek; may be attached later
    """

    def __init__(self, source: Optional[PlaybackTimeSource] = None):
        self.window = LoopWindow()
        self.source: Optional[PlaybackTimeSource] = None
        self._unsubscribers: List[Callable[[], None]] = []
        self._seeking = False
        if source is not None:
            self.attach(source)

    @property
    def state(self) -> LoopState:
        return LoopState.ARMED if self.window.armed else LoopState.IDLE

    @property
    def armed(self) -> bool:
        return self.window.armed

    def attach(self, source: PlaybackTimeSource) -> None:
        """Start receiving time updates from ``source``."""
        self.detach()
        self.source = source
        self._unsubscribers.append(source.subscribe(TIME_UPDATE, self.on_tick))

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self.source = None

    def submit(self, start_text: Optional[str], end_text: Optional[str]) -> bool:
        """
        Arm the loop with a new window.

        Each bound is "SS" or "MM:SS"; anything else leaves that bound unset.
        A submission with both bounds unset changes nothing.

        Returns:
            True if the loop is armed with the submitted window
        """
        start = parse_time_input(start_text)
        end = parse_time_input(end_text)

        if start is None and end is None:
            logger.debug(f"Ignoring loop submission {start_text!r}/{end_text!r}")
            return False

        self.window = LoopWindow(start_seconds=start, end_seconds=end, armed=True)
        logger.info(f"Loop armed: start={start}, end={end}")
        return True

    def stop(self) -> None:
        """Disarm the loop, keeping the window values for display."""
        if self.window.armed:
            logger.info("Loop stopped")
        self.window.armed = False

    def target_for(self, current_time: float) -> Optional[float]:
        """
        Where playback should jump to from ``current_time``, or None to stay.

        Example:
            >>> loop = LoopController()
            >>> loop.submit("10", "00:20")
            True
            >>> [loop.target_for(t) for t in (5, 15, 25)]
            [10.0, None, 10.0]
        """
        if not self.window.armed:
            return None

        start = self.window.start_seconds
        end = self.window.end_seconds

        if start is not None and current_time < start:
            return start
        if end is not None and current_time > end:
            # overrun always restarts the window
            return start if start is not None else 0.0
        return None

    def on_tick(self, current_time: float) -> Optional[float]:
        """
        Handle a time update, seeking the source if playback left the window.

        Returns:
            The seek target, or None if no seek was needed
        """
        # the seek below fires its own time update
        if self._seeking:
            return None

        target = self.target_for(current_time)
        if target is None:
            return None

        logger.debug(f"Loop seek {current_time:.3f}s -> {target:.3f}s")
        if self.source is not None:
            self._seeking = True
            try:
                self.source.seek(target)
            finally:
                self._seeking = False
        return target

    def display_values(self) -> Tuple[str, str]:
        """Window bounds as MM:SS strings, empty for unset bounds."""
        return (
            format_seconds_to_mmss(self.window.start_seconds, default=""),
            format_seconds_to_mmss(self.window.end_seconds, default=""),
        )
