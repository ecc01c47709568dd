"""
Hear Lingo - Interactive YouTube Transcript Engine

A library for overlaying a synchronized, clickable transcript on a video
player, with language switching and A/B repeat.

Features:
- Discover the caption tracks of a YouTube video (auto-generated ones skipped)
- Parse timed-text documents into cues
- O(log n) lookup of the cue active at a playback time
- Per-video caching of tracks and cues with stale-response protection
- Loop (A/B repeat) control with SS / MM:SS input

Example usage:
    >>> import asyncio
    >>> from hearlingo import (
    ...     AsyncYouTubeSource, SimulatedPlayback, TrackSelectionCache, TranscriptSession,
    ... )
    >>>
    >>> playback = SimulatedPlayback()
    >>> session = TranscriptSession(playback, TrackSelectionCache(AsyncYouTubeSource()))
    >>> asyncio.run(session.on_navigate("https://www.youtube.com/watch?v=VIDEO_ID_11"))
    >>> for row in session.panel.rows():
    ...     print(row.timestamp, row.cue.text)
"""

import logging

__version__ = "0.1.0"
__author__ = "Hear Lingo Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core utility functions
from .utils import (
    format_seconds_to_mmss,
    format_mmss_to_seconds,
    parse_time_input,
    strip_markup,
)

# Errors
from .exceptions import HearLingoError, FetchError, ParseError, NoCaptionsAvailable

# Data models
from .models import CaptionTrack, Cue, LoopWindow, ClientConfig

# Timed-text parsing
from .timedtext import parse_track_list, parse_cue_list, TimedTextParser

# Main classes
from .cue_index import CueIndex
from .cache import TrackSelectionCache, CacheEntry, Slot, SlotState, choose_default_track
from .loop import LoopController, LoopState
from .playback import PlaybackTimeSource, SimulatedPlayback
from .panel import TranscriptPanel, PanelRow
from .session import TranscriptSession

# YouTube utilities
from .youtube import (
    YouTubeClient,
    AsyncYouTubeSource,
    is_valid_youtube_url,
    extract_video_id,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Time helpers
    "format_seconds_to_mmss",
    "format_mmss_to_seconds",
    "parse_time_input",
    "strip_markup",

    # Errors
    "HearLingoError",
    "FetchError",
    "ParseError",
    "NoCaptionsAvailable",

    # Parsing
    "parse_track_list",
    "parse_cue_list",
    "TimedTextParser",

    # Main classes
    "CueIndex",
    "TrackSelectionCache",
    "LoopController",
    "PlaybackTimeSource",
    "SimulatedPlayback",
    "TranscriptPanel",
    "TranscriptSession",
    "YouTubeClient",
    "AsyncYouTubeSource",

    # Cache internals
    "CacheEntry",
    "Slot",
    "SlotState",
    "choose_default_track",

    # Models
    "CaptionTrack",
    "Cue",
    "LoopWindow",
    "ClientConfig",
    "LoopState",
    "PanelRow",

    # YouTube utilities
    "is_valid_youtube_url",
    "extract_video_id",
]
