"""
Transcript panel state for Hear Lingo.

Couples a CueIndex to a playback source: tracks the active cue, opens the
panel on pause and closes it on play, asks the view to scroll the active cue
into view while the panel is open on a paused video, and turns cue clicks
into seeks. Rendering is left to the caller (see ``rows`` and ``on_scroll``).
"""

import logging
from typing import Callable, Iterator, List, NamedTuple, Optional

from .cue_index import CueIndex
from .models import Cue
from .playback import PAUSE, PLAY, TIME_UPDATE, PlaybackTimeSource
from .utils import format_seconds_to_mmss

logger = logging.getLogger(__name__)

ScrollCallback = Callable[[int, Cue], None]


class PanelRow(NamedTuple):
    """One rendered cue."""
    cue: Cue
    active: bool
    timestamp: str  # MM:SS of the cue start


class TranscriptPanel:
    """
    Synchronizes the transcript panel with playback.

    Args:
        source: Playback surface
        index: Cues of the selected track
        on_scroll: Called with (position, cue) when the active cue should be
            scrolled into view
    """

    def __init__(
        self,
        source: PlaybackTimeSource,
        index: Optional[CueIndex] = None,
        on_scroll: Optional[ScrollCallback] = None,
    ):
        self.source = source
        self.index = index if index is not None else CueIndex()
        self.on_scroll = on_scroll
        self.is_open = source.paused
        self.current_time = source.current_time
        self.highlighted_index: Optional[int] = self.index.active_index_at(self.current_time)
        self.scroll_target: Optional[int] = None
        self._unsubscribers: List[Callable[[], None]] = []

    def attach(self) -> None:
        """
        Subscribe to the source's time-update, play and pause events.

        A panel attached to a paused video is already open, so the active cue
        is scrolled into view right away.
        """
        self.detach()
        self._unsubscribers = [
            self.source.subscribe(TIME_UPDATE, self.on_time_update),
            self.source.subscribe(PLAY, self.on_play),
            self.source.subscribe(PAUSE, self.on_pause),
        ]
        if self.is_open and self.source.paused:
            self._scroll_active_into_view()

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def set_index(self, index: CueIndex) -> None:
        """Show another track's cues."""
        self.index = index
        self.highlighted_index = index.active_index_at(self.current_time)
        self.scroll_target = None
        if self.is_open and self.source.paused:
            self._scroll_active_into_view()

    def on_time_update(self, current_time: float) -> None:
        self.current_time = current_time
        self.highlighted_index = self.index.active_index_at(current_time)
        if self.is_open and self.source.paused:
            self._scroll_active_into_view()

    def on_play(self) -> None:
        self._set_open(False)

    def on_pause(self) -> None:
        self._set_open(True)

    def toggle(self) -> None:
        """
        Toggle the panel from its header button.

        Opening the panel on a playing video pauses it first; otherwise the
        panel just flips visibility.
        """
        if not self.is_open and not self.source.paused:
            self.source.pause()
            self._set_open(True)
        else:
            self._set_open(not self.is_open)

    def click(self, position: Optional[int]) -> None:
        """
        Handle a click in the cue list.

        Args:
            position: Index of the clicked cue, or None for panel whitespace.
                Positions outside the cue list count as whitespace too.
        """
        if position is None or not 0 <= position < len(self.index):
            return

        cue = self.index[position]
        logger.debug(f"Cue {position} clicked, seeking to {cue.start_seconds:.3f}s")
        self.source.seek(cue.start_seconds)
        self.current_time = cue.start_seconds
        self.highlighted_index = self.index.active_index_at(self.current_time)

    def rows(self) -> Iterator[PanelRow]:
        """Cues with their highlight state, in display order."""
        for cue in self.index:
            yield PanelRow(
                cue=cue,
                active=cue.contains(self.current_time),
                timestamp=format_seconds_to_mmss(cue.start_seconds),
            )

    def _set_open(self, is_open: bool) -> None:
        if is_open == self.is_open:
            return
        self.is_open = is_open
        if is_open and self.source.paused:
            self._scroll_active_into_view()

    def _scroll_active_into_view(self) -> None:
        position = self.index.active_index_at(self.source.current_time)
        if position is None:
            return
        self.scroll_target = position
        if self.on_scroll is not None:
            self.on_scroll(position, self.index[position])
