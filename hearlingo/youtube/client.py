"""
YouTube client for Hear Lingo.

Fetches the two caption payloads the transcript panel needs: the watch page
(which embeds the caption track list) and the per-track timed-text document.
Requests are credentialed with the user's cookies, loaded through yt-dlp's
cookie jar so the usual Netscape cookies.txt exports work unchanged.
"""

import asyncio
import logging
import re
from typing import List, Optional

import requests
from yt_dlp.cookies import YoutubeDLCookieJar

from ..exceptions import FetchError
from ..models import CaptionTrack, ClientConfig, Cue
from ..timedtext import parse_cue_list, parse_track_list

logger = logging.getLogger(__name__)

# Exactly the watch page forms the transcript panel attaches to
STANDARD_WATCH_REGEX = re.compile(r'^https://www\.youtube\.com/watch\?v=[\w-]{11}$')
SHORT_WATCH_REGEX = re.compile(r'^https://youtu\.be/[\w-]{11}$')

YOUTUBE_ID_REGEX = re.compile(r'^(https?://)?(www\.|m\.)?(youtube\.com/watch\?(?:[^#\s]*&)?v=|youtu\.be/)([\w-]{11})')


def is_valid_youtube_url(url: str) -> bool:
    """
    Check if the provided URL is a YouTube watch page the panel can attach to.

    Args:
        url: URL to check

    Returns:
        True if URL is a canonical watch or short URL, False otherwise

    Example:
        >>> is_valid_youtube_url("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
        True
        >>> is_valid_youtube_url("https://www.youtube.com/results?search_query=x")
        False
    """
    return bool(STANDARD_WATCH_REGEX.match(url) or SHORT_WATCH_REGEX.match(url))


def extract_video_id(url: str) -> Optional[str]:
    """
    Extract the YouTube video ID (the video identity) from a URL.

    Args:
        url: YouTube URL

    Returns:
        YouTube video ID or None if not found

    Example:
        >>> extract_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42")
        'dQw4w9WgXcQ'
    """
    match = YOUTUBE_ID_REGEX.match(url)
    return match.group(4) if match else None


class YouTubeClient:
    """
    Client for fetching caption payloads from YouTube.

    All requests share one requests.Session so cookies set by the watch page
    are sent along with the timed-text requests.
    """

    def __init__(
        self,
        cookies_path: Optional[str] = None,
        timeout: int = 30,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None,
        watch_url_template: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize YouTube client.

        Args:
            cookies_path: Optional path to cookies file for authentication
            timeout: Request timeout in seconds (default: 30)
            verify_ssl: Whether to verify SSL certificates (default: True)
            user_agent: User-Agent header sent with every request
            watch_url_template: Watch page URL with a ``{video_id}`` placeholder
            session: Pre-built session to use instead of creating one
        """
        defaults = ClientConfig()
        self.cookies_path = cookies_path
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.watch_url_template = watch_url_template or defaults.watch_url_template
        self.session = session or requests.Session()
        self.session.headers['User-Agent'] = user_agent or defaults.user_agent

        if cookies_path:
            self._load_cookies(cookies_path)

    @classmethod
    def from_config(cls, config: ClientConfig) -> "YouTubeClient":
        return cls(
            cookies_path=config.cookies_path,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
            user_agent=config.user_agent,
            watch_url_template=config.watch_url_template,
        )

    def _load_cookies(self, cookies_path: str) -> None:
        jar = YoutubeDLCookieJar(cookies_path)
        jar.load()
        self.session.cookies.update(jar)
        logger.info(f"Loaded {len(jar)} cookies from {cookies_path}")

    def watch_url(self, video_id: str) -> str:
        return self.watch_url_template.format(video_id=video_id)

    def _get_text(self, url: str) -> str:
        """
        GET ``url`` and return the body text.

        Raises:
            FetchError: On a non-success response or a transport failure
        """
        try:
            response = self.session.get(url, timeout=self.timeout, verify=self.verify_ssl)
        except requests.RequestException as e:
            logger.error(f"Request to {url[:100]} failed: {str(e)}")
            raise FetchError(url, message=f"Request failed: {str(e)}") from e

        if not response.ok:
            logger.error(f"Request to {url[:100]} returned {response.status_code}")
            raise FetchError(url, status_code=response.status_code)

        return response.text

    def fetch_watch_page(self, video_id: str) -> str:
        """
        Fetch the watch page HTML for a video.

        Args:
            video_id: YouTube video ID

        Returns:
            Watch page HTML, embedding the caption track list

        Raises:
            FetchError: If the page cannot be fetched
        """
        logger.info(f"Fetching caption tracks for YouTube video: {video_id}")
        return self._get_text(self.watch_url(video_id))

    def fetch_timed_text(self, source_url: str) -> str:
        """
        Fetch the timed-text XML document of a caption track.

        Args:
            source_url: CaptionTrack.source_url, used verbatim

        Returns:
            Timed-text XML

        Raises:
            FetchError: If the document cannot be fetched
        """
        logger.info(f"Fetching subtitles from: {source_url[:100]}...")
        return self._get_text(source_url)

    def get_caption_tracks(self, video_id: str) -> List[CaptionTrack]:
        """Fetch and parse the caption track list of a video."""
        return parse_track_list(self.fetch_watch_page(video_id))

    def get_cues(self, track: CaptionTrack) -> List[Cue]:
        """Fetch and parse the cues of a caption track."""
        return parse_cue_list(self.fetch_timed_text(track.source_url))


class AsyncYouTubeSource:
    """
    Caption payload source for the event loop.

    Runs the blocking YouTubeClient calls in a worker thread so the loop stays
    free to deliver playback ticks while a fetch is in flight.
    """

    def __init__(self, client: Optional[YouTubeClient] = None):
        self.client = client or YouTubeClient()

    async def fetch_track_list_payload(self, video_id: str) -> str:
        return await asyncio.to_thread(self.client.fetch_watch_page, video_id)

    async def fetch_cue_payload(self, source_url: str) -> str:
        return await asyncio.to_thread(self.client.fetch_timed_text, source_url)
