"""
Timed-text package.

Provides parsing of the caption track list embedded in the watch page and of
the per-track timed-text XML documents.
"""

from .parser import (
    extract_track_list_json,
    parse_track_list,
    parse_cue_list,
    TimedTextParser,
)

__all__ = [
    "extract_track_list_json",
    "parse_track_list",
    "parse_cue_list",
    "TimedTextParser",
]
