"""
Shared utility functions for Hear Lingo.

Provides common utilities used across multiple modules, primarily
conversion between seconds and the MM:SS form shown to and typed by users.
"""

import html
import math
import re
from typing import Optional, TypeVar

T = TypeVar("T")

# "SS" (bare seconds, optional fraction) and "MM:SS" (seconds 0-59)
SECONDS_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)$')
MMSS_PATTERN = re.compile(r'^(\d+):([0-5]?\d(?:\.\d+)?)$')

_TAG_PATTERN = re.compile(r'<[^>]+>')


def format_seconds_to_mmss(seconds: float, default: Optional[T] = None):
    """
    Convert seconds to MM:SS format.

    Fractional seconds are truncated. Minutes are not wrapped into hours,
    so a two hour offset is rendered as "120:00".

    Args:
        seconds: Time in seconds
        default: Value returned when ``seconds`` is not a finite number

    Returns:
        Timestamp string in MM:SS format, or ``default``

    Example:
        >>> format_seconds_to_mmss(90.5)
        '01:30'
    """
    if seconds is None or not math.isfinite(seconds):
        return default

    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes:02d}:{secs:02d}"


def format_mmss_to_seconds(time: str) -> float:
    """
    Convert MM:SS (or bare SS) format to seconds.

    Args:
        time: Timestamp string in MM:SS or SS format

    Returns:
        Time in seconds as float

    Raises:
        ValueError: If ``time`` matches neither format

    Example:
        >>> format_mmss_to_seconds("01:30")
        90.0
        >>> format_mmss_to_seconds("42")
        42.0
    """
    seconds = parse_time_input(time)
    if seconds is None:
        raise ValueError(f"Invalid time value: {time!r}")
    return seconds


def parse_time_input(text: Optional[str]) -> Optional[float]:
    """
    Parse a free-form loop bound typed by the user.

    Returns None instead of raising when the text is empty or does not
    match SS / MM:SS, so callers can treat it as an unset bound.
    """
    if text is None:
        return None

    text = text.strip()
    if not text:
        return None

    match = SECONDS_PATTERN.match(text)
    if match:
        return float(match.group(1))

    match = MMSS_PATTERN.match(text)
    if match:
        return int(match.group(1)) * 60 + float(match.group(2))

    return None


def strip_markup(text: Optional[str]) -> str:
    """
    Reduce cue text to plain text.

    Timed-text payloads carry HTML entities (``&#39;``) and occasional
    formatting tags inside cue text; both are removed here.

    Example:
        >>> strip_markup("it&#39;s <b>here</b>")
        "it's here"
    """
    if not text:
        return ""
    return html.unescape(_TAG_PATTERN.sub('', text)).strip()
