"""
YouTube module for Hear Lingo.

Provides YouTube-specific functionality: watch URL validation, video ID
extraction, and fetching of caption payloads.
"""

from .client import (
    YouTubeClient,
    AsyncYouTubeSource,
    is_valid_youtube_url,
    extract_video_id,
)

__all__ = [
    'YouTubeClient',
    'AsyncYouTubeSource',
    'is_valid_youtube_url',
    'extract_video_id',
]
