"""
Caption track and cue caching for Hear Lingo.

One CacheEntry is live at a time, keyed by the video identity. It holds the
video's caption track list and, per selected track, the parsed cues, so
switching languages back and forth never refetches. Navigating to another
video replaces the entry wholesale.

Each cached value lives in a Slot that is pending, resolved or errored:

- concurrent callers asking for a pending key await the same fetch task
- a fetch that finishes after its entry was replaced is not written back
  (its generation is no longer live)
- errors are stored and re-raised; nothing is retried until the entry is
  invalidated
"""

import asyncio
import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .exceptions import NoCaptionsAvailable
from .models import CaptionTrack, Cue
from .timedtext import TimedTextParser

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


class SlotState(str, enum.Enum):
    """Lifecycle of a cached value."""

    PENDING = "pending"
    RESOLVED = "resolved"
    ERROR = "error"


@dataclass
class Slot:
    """A cached value, the error that replaced it, or the fetch producing it."""

    state: SlotState = SlotState.PENDING
    value: Any = None
    error: Optional[BaseException] = None
    task: Optional["asyncio.Task[Any]"] = None


@dataclass
class CacheEntry:
    """Everything cached for one video identity."""

    video_identity: str
    generation: int
    track_list: Optional[Slot] = None
    cues: Dict[str, Slot] = field(default_factory=dict)


def choose_default_track(
    tracks: List[CaptionTrack],
    language: str = DEFAULT_LANGUAGE,
) -> Optional[CaptionTrack]:
    """
    Pick the track shown when a video is opened.

    Prefers the first track in ``language``, falls back to the first track,
    and returns None for an empty list.

    Example:
        >>> fr = CaptionTrack("u2", ".fr", "fr", "French")
        >>> en = CaptionTrack("u1", ".en", "en", "English")
        >>> choose_default_track([fr, en]).language_code
        'en'
    """
    for track in tracks:
        if track.language_code == language:
            return track
    return tracks[0] if tracks else None


class TrackSelectionCache:
    """
    Cache of caption tracks and cues for the currently displayed video.

    ``source`` provides the raw payloads and must expose two coroutines:
    ``fetch_track_list_payload(video_identity)`` and
    ``fetch_cue_payload(source_url)`` (see AsyncYouTubeSource).
    """

    def __init__(
        self,
        source: Any,
        parser: Optional[TimedTextParser] = None,
        default_language: str = DEFAULT_LANGUAGE,
    ):
        self.source = source
        self.parser = parser or TimedTextParser()
        self.default_language = default_language
        self._entry: Optional[CacheEntry] = None
        self._generation = 0

    @property
    def live_identity(self) -> Optional[str]:
        return self._entry.video_identity if self._entry else None

    @property
    def generation(self) -> int:
        return self._generation

    def invalidate(self) -> None:
        """Drop the live entry; pending fetches for it will be ignored."""
        if self._entry is not None:
            logger.info(f"Discarding caption cache for video {self._entry.video_identity}")
        self._entry = None

    def _entry_for(self, video_identity: str) -> CacheEntry:
        entry = self._entry
        if entry is None or entry.video_identity != video_identity:
            self.invalidate()
            self._generation += 1
            entry = CacheEntry(video_identity=video_identity, generation=self._generation)
            self._entry = entry
            logger.debug(f"New caption cache entry for {video_identity} (generation {entry.generation})")
        return entry

    def _is_live(self, entry: CacheEntry) -> bool:
        return self._entry is entry

    async def _load(
        self,
        entry: CacheEntry,
        slot: Slot,
        fetch: Callable[[], Awaitable[str]],
        parse: Callable[[str], Any],
        description: str,
    ) -> Any:
        """Fetch and parse one payload, writing the outcome into ``slot`` if its entry is still live."""
        try:
            value = parse(await fetch())
        except Exception as e:
            if self._is_live(entry):
                slot.state = SlotState.ERROR
                slot.error = e
                logger.error(f"Failed to load {description}: {str(e)}")
            else:
                logger.warning(f"Ignoring failure for stale {description} (generation {entry.generation})")
            raise

        if self._is_live(entry):
            slot.state = SlotState.RESOLVED
            slot.value = value
        else:
            logger.warning(f"Discarding stale {description} (generation {entry.generation})")
        return value

    @staticmethod
    async def _await_slot(slot: Slot) -> Any:
        if slot.state is SlotState.RESOLVED:
            return slot.value
        if slot.state is SlotState.ERROR:
            raise slot.error
        # shield: one cancelled caller must not cancel the fetch others wait on
        return await asyncio.shield(slot.task)

    async def track_list_for(self, video_identity: str) -> List[CaptionTrack]:
        """
        Get the caption tracks of a video, fetching them at most once.

        Args:
            video_identity: YouTube video ID of the displayed video

        Returns:
            Caption tracks, auto-generated ones excluded

        Raises:
            FetchError: If the watch page could not be fetched
            ParseError: If the track list could not be parsed
        """
        entry = self._entry_for(video_identity)
        slot = entry.track_list

        if slot is None:
            slot = Slot()
            entry.track_list = slot
            slot.task = asyncio.ensure_future(self._load(
                entry,
                slot,
                lambda: self.source.fetch_track_list_payload(video_identity),
                self.parser.parse_track_list,
                f"caption tracks for {video_identity}",
            ))

        return await self._await_slot(slot)

    async def cues_for(self, track: CaptionTrack, video_identity: Optional[str] = None) -> List[Cue]:
        """
        Get the cues of a caption track, fetching them at most once per video.

        Args:
            track: Track from the live video's track list
            video_identity: Video the track belongs to, checked against the
                live one when given

        Returns:
            Cues in document order

        Raises:
            LookupError: If no video is live, or ``video_identity`` is not it
            FetchError: If the timed-text document could not be fetched
            ParseError: If the timed-text document could not be parsed
        """
        entry = self._entry
        if entry is None:
            raise LookupError("No video is loaded in the caption cache")
        if video_identity is not None and video_identity != entry.video_identity:
            raise LookupError(
                f"Video {video_identity} is no longer displayed (live: {entry.video_identity})"
            )

        slot = entry.cues.get(track.source_url)

        if slot is None:
            slot = Slot()
            entry.cues[track.source_url] = slot
            slot.task = asyncio.ensure_future(self._load(
                entry,
                slot,
                lambda: self.source.fetch_cue_payload(track.source_url),
                self.parser.parse_cue_list,
                f"cues for track {track.display_name!r}",
            ))
        else:
            logger.debug(f"Using cached cues for track {track.display_name!r}")

        return await self._await_slot(slot)

    async def default_track_for(self, video_identity: str) -> CaptionTrack:
        """
        Resolve the track list and pick the default track.

        Raises:
            NoCaptionsAvailable: If the video has no usable tracks
        """
        tracks = await self.track_list_for(video_identity)
        track = choose_default_track(tracks, self.default_language)
        if track is None:
            raise NoCaptionsAvailable(video_identity)
        logger.info(f"Selected default track {track.display_name!r} ({track.language_code})")
        return track

    def track_list_state(self, video_identity: str) -> Optional[SlotState]:
        """State of the track list for ``video_identity``, or None if nothing is cached."""
        entry = self._entry
        if entry is None or entry.video_identity != video_identity or entry.track_list is None:
            return None
        return entry.track_list.state

    def cues_state(self, track: CaptionTrack) -> Optional[SlotState]:
        """State of the cues for ``track`` in the live entry, or None if nothing is cached."""
        if self._entry is None:
            return None
        slot = self._entry.cues.get(track.source_url)
        return slot.state if slot else None
