"""
Data models for Hear Lingo.

Defines the core data structures used throughout the package.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CaptionTrack:
    """One language/variant option for a video's transcript."""
    source_url: str
    track_id: str  # vssId, e.g. ".en" or "a.en"
    language_code: str
    display_name: str
    is_auto_generated: bool = False


@dataclass(frozen=True)
class Cue:
    """A timed transcript fragment."""
    start_seconds: float
    duration_seconds: float
    text: Optional[str] = None  # may contain simple markup

    @property
    def end_seconds(self) -> float:
        return self.start_seconds + self.duration_seconds

    def contains(self, time: float) -> bool:
        """Check whether ``time`` falls inside [start, start + duration)."""
        return self.start_seconds <= time < self.end_seconds


@dataclass
class LoopWindow:
    """Playback window enforced by the loop controller."""
    start_seconds: Optional[float] = None
    end_seconds: Optional[float] = None
    armed: bool = False

    @property
    def is_empty(self) -> bool:
        return self.start_seconds is None and self.end_seconds is None


@dataclass
class ClientConfig:
    """Configuration for caption fetch operations."""
    cookies_path: Optional[str] = None  # Netscape cookies file for credentialed requests
    timeout: int = 30
    verify_ssl: bool = True
    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )
    default_language: str = "en"
    watch_url_template: str = "https://www.youtube.com/watch?v={video_id}"
