"""
Transcript session for Hear Lingo.

Ties the pieces together for one page view: navigation selects the video,
the cache provides its caption tracks and cues, the default (or chosen)
track's cues feed the transcript panel, and the loop controller runs
alongside on the same playback source.
"""

import logging
from typing import List, Optional, Union

from .cache import TrackSelectionCache, choose_default_track
from .cue_index import CueIndex
from .exceptions import HearLingoError, NoCaptionsAvailable
from .loop import LoopController
from .models import CaptionTrack
from .panel import ScrollCallback, TranscriptPanel
from .playback import PlaybackTimeSource
from .youtube import extract_video_id, is_valid_youtube_url

logger = logging.getLogger(__name__)

STATUS_IDLE = "idle"
STATUS_LOADING = "loading"
STATUS_READY = "ready"
STATUS_NO_CAPTIONS = "no_captions"
STATUS_ERROR = "error"
STATUS_DETACHED = "detached"


class TranscriptSession:
    """
    Interactive transcript for the video shown in a page.

    Args:
        source: Playback surface of the page's video
        cache: Caption cache backed by a payload source
        on_scroll: Forwarded to the transcript panel
    """

    def __init__(
        self,
        source: PlaybackTimeSource,
        cache: TrackSelectionCache,
        on_scroll: Optional[ScrollCallback] = None,
    ):
        self.source = source
        self.cache = cache
        self.on_scroll = on_scroll
        self.loop = LoopController(source)

        self.video_identity: Optional[str] = None
        self.tracks: List[CaptionTrack] = []
        self.selected_track: Optional[CaptionTrack] = None
        self.panel: Optional[TranscriptPanel] = None
        self.status = STATUS_IDLE
        self.error_message: Optional[str] = None
        # bumped on every navigation and track choice; only the latest may write
        self._selection = 0

    async def on_navigate(self, url: str) -> None:
        """
        React to the page moving to ``url``.

        Leaving the watch page detaches the panel. Opening another video
        replaces all caption state; reopening the same video only reloads if
        the previous attempt failed.
        """
        if not is_valid_youtube_url(url):
            logger.info(f"Not a watch page, detaching transcript: {url[:100]}")
            self._next_selection()
            self._drop_panel()
            self.video_identity = None
            self.tracks = []
            self.selected_track = None
            self._set_status(STATUS_DETACHED)
            return

        video_identity = extract_video_id(url)
        if video_identity == self.video_identity and self.status != STATUS_ERROR:
            return

        if video_identity == self.video_identity:
            # an error is terminal for its request; navigation is the fresh attempt
            self.cache.invalidate()

        selection = self._next_selection()
        self.video_identity = video_identity
        self.tracks = []
        self.selected_track = None
        self._drop_panel()
        self._set_status(STATUS_LOADING)

        try:
            tracks = await self.cache.track_list_for(video_identity)
            if selection != self._selection:
                return
            self.tracks = tracks

            track = choose_default_track(tracks, self.cache.default_language)
            if track is None:
                raise NoCaptionsAvailable(video_identity)

            await self._show_track(selection, video_identity, track)
        except NoCaptionsAvailable as e:
            if selection == self._selection:
                self._set_status(STATUS_NO_CAPTIONS, str(e))
        except HearLingoError as e:
            if selection == self._selection:
                logger.error(f"Failed to load transcript for {video_identity}: {str(e)}")
                self._set_status(STATUS_ERROR, str(e))

    async def select_track(self, choice: Union[CaptionTrack, str]) -> None:
        """
        Switch the panel to another caption track.

        When switches overlap, the track chosen last is shown, whichever
        fetch finishes first.

        Args:
            choice: A track of the current video, its display name, or its source URL

        Raises:
            LookupError: If no video is shown or ``choice`` names none of its tracks
        """
        video_identity = self.video_identity
        if video_identity is None:
            raise LookupError("No video is shown, there are no caption tracks to select")
        track = self.find_track(choice)
        selection = self._next_selection()

        try:
            await self._show_track(selection, video_identity, track)
        except HearLingoError as e:
            if selection == self._selection:
                logger.error(f"Failed to load track {track.display_name!r}: {str(e)}")
                self._set_status(STATUS_ERROR, str(e))

    def find_track(self, choice: Union[CaptionTrack, str]) -> CaptionTrack:
        for track in self.tracks:
            if choice == track or choice in (track.display_name, track.source_url):
                return track
        raise LookupError(f"No caption track matching {choice!r}")

    def close(self) -> None:
        """Stop listening to the playback source."""
        self._drop_panel()
        self.loop.detach()

    def _next_selection(self) -> int:
        self._selection += 1
        return self._selection

    async def _show_track(self, selection: int, video_identity: str, track: CaptionTrack) -> None:
        cues = await self.cache.cues_for(track, video_identity)
        if selection != self._selection:
            logger.debug(f"Dropping cues of track {track.display_name!r}, a newer selection was made")
            return

        index = CueIndex.build(cues)
        self.selected_track = track

        if self.panel is None:
            self.panel = TranscriptPanel(self.source, index, on_scroll=self.on_scroll)
            self.panel.attach()
        else:
            self.panel.set_index(index)

        logger.info(f"Showing {len(index)} cues of track {track.display_name!r}")
        self._set_status(STATUS_READY)

    def _drop_panel(self) -> None:
        if self.panel is not None:
            self.panel.detach()
            self.panel = None

    def _set_status(self, status: str, error_message: Optional[str] = None) -> None:
        self.status = status
        self.error_message = error_message
