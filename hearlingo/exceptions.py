"""
Exception types for Hear Lingo.

Every error raised by the engine derives from HearLingoError and carries a
human-readable message suitable for showing in the transcript panel.
"""

from typing import Optional

TRACK_LIST_STAGE = "trackList"
CUE_LIST_STAGE = "cueList"


class HearLingoError(Exception):
    """Base class for all Hear Lingo errors."""


class FetchError(HearLingoError):
    """A caption payload could not be fetched (non-success response or transport failure)."""

    def __init__(self, url: str, status_code: Optional[int] = None, message: Optional[str] = None):
        self.url = url
        self.status_code = status_code
        if message is None:
            message = f"Failed to fetch {url}, response code: {status_code}"
        super().__init__(message)


class ParseError(HearLingoError):
    """A caption payload was fetched but could not be parsed."""

    def __init__(self, stage: str, cause: object):
        self.stage = stage
        self.cause = cause
        super().__init__(f"Failed to parse {stage}: {cause}")


class NoCaptionsAvailable(HearLingoError):
    """The video has no (non auto-generated) caption tracks."""

    def __init__(self, video_identity: str):
        self.video_identity = video_identity
        super().__init__(f"No captions available for video {video_identity}")
