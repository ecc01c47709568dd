"""
Timed-text parsing for Hear Lingo.

Turns the two payloads the host page produces into typed records:

- the watch page HTML, which embeds the caption track list as a JSON
  fragment inside the ``ytInitialPlayerResponse`` script
- the per-track timed-text XML document (``<transcript><text .../></transcript>``)

Parsing is lenient per field and strict per document: a missing or garbled
``start``/``dur`` attribute becomes 0, but a document without the expected
structure raises ParseError.
"""

import json
import logging
import math
from typing import Any, Dict, List, Optional
from xml.etree import ElementTree

from ..exceptions import CUE_LIST_STAGE, TRACK_LIST_STAGE, ParseError
from ..models import CaptionTrack, Cue

logger = logging.getLogger(__name__)

PLAYER_RESPONSE_MARKER = 'var ytInitialPlayerResponse'
TRACK_LIST_START_MARKER = 'captions":'
TRACK_LIST_END_MARKER = ',"videoDetails'
SCRIPT_END_MARKER = '</script>'

AUTO_GENERATED_PREFIX = 'a.'


def _player_response_script(document: str) -> str:
    """
    Narrow the document to the ytInitialPlayerResponse script body.

    Other scripts on the watch page can also contain ``captions":``; when the
    player response script is absent the whole document is searched.
    """
    start = document.find(PLAYER_RESPONSE_MARKER)
    if start == -1:
        return document

    end = document.find(SCRIPT_END_MARKER, start)
    return document[start:end] if end != -1 else document[start:]


def extract_track_list_json(document: str) -> str:
    """
    Slice the embedded caption JSON out of a watch page.

    Args:
        document: Watch page HTML (or any text holding the marker pair)

    Returns:
        The JSON text between ``captions":`` and the last ``,"videoDetails``

    Raises:
        ParseError: If either marker is missing
    """
    content = _player_response_script(document)

    start_index = content.find(TRACK_LIST_START_MARKER)
    end_index = content.rfind(TRACK_LIST_END_MARKER)

    if start_index == -1:
        raise ParseError(TRACK_LIST_STAGE, f"marker {TRACK_LIST_START_MARKER!r} not found")
    if end_index == -1:
        raise ParseError(TRACK_LIST_STAGE, f"marker {TRACK_LIST_END_MARKER!r} not found")

    json_start = start_index + len(TRACK_LIST_START_MARKER)
    if end_index < json_start:
        raise ParseError(TRACK_LIST_STAGE, "markers are out of order")

    return content[json_start:end_index]


def _track_from_dict(data: Dict[str, Any]) -> CaptionTrack:
    track_id = data.get('vssId') or ''
    name = data.get('name') or {}
    display_name = name.get('simpleText')
    if display_name is None:
        # some responses use runs instead of simpleText
        display_name = ''.join(run.get('text', '') for run in name.get('runs', []))

    return CaptionTrack(
        source_url=data['baseUrl'],
        track_id=track_id,
        language_code=data.get('languageCode', ''),
        display_name=display_name,
        is_auto_generated=track_id.startswith(AUTO_GENERATED_PREFIX) or data.get('kind') == 'asr',
    )


def parse_track_list(raw: str) -> List[CaptionTrack]:
    """
    Parse the caption track list embedded in a watch page.

    Auto-generated tracks are dropped from the result.

    Args:
        raw: Watch page HTML

    Returns:
        List of CaptionTrack in payload order

    Raises:
        ParseError: If the markers are missing, the slice is not JSON, or
            the JSON does not have the track-list shape

    Example:
        >>> html = 'x"captions":{"playerCaptionsTracklistRenderer":{"captionTracks":[]}},"videoDetails":{}'
        >>> parse_track_list(html)
        []
    """
    fragment = extract_track_list_json(raw)

    try:
        captions_data = json.loads(fragment)
    except ValueError as e:
        raise ParseError(TRACK_LIST_STAGE, e) from e

    if not isinstance(captions_data, dict):
        raise ParseError(TRACK_LIST_STAGE, "captions payload is not an object")

    renderer = captions_data.get('playerCaptionsTracklistRenderer')
    if not isinstance(renderer, dict):
        raise ParseError(TRACK_LIST_STAGE, "playerCaptionsTracklistRenderer missing")

    raw_tracks = renderer.get('captionTracks') or []
    if not isinstance(raw_tracks, list):
        raise ParseError(TRACK_LIST_STAGE, "captionTracks is not a list")

    tracks = []
    for entry in raw_tracks:
        try:
            track = _track_from_dict(entry)
        except (KeyError, TypeError, AttributeError) as e:
            raise ParseError(TRACK_LIST_STAGE, f"malformed caption track: {e!r}") from e

        # remove auto generated captions
        if track.is_auto_generated:
            logger.debug(f"Skipping auto-generated track {track.track_id}")
            continue
        tracks.append(track)

    logger.debug(f"Parsed {len(tracks)} caption tracks ({len(raw_tracks) - len(tracks)} auto-generated skipped)")
    return tracks


def _parse_seconds(value: Optional[str]) -> float:
    """Parse a numeric attribute, defaulting to 0 for absent or garbled values."""
    if value is None:
        return 0.0
    try:
        seconds = float(value)
    except ValueError:
        return 0.0
    if not math.isfinite(seconds) or seconds < 0:
        return 0.0
    return seconds


def parse_cue_list(raw: str) -> List[Cue]:
    """
    Parse a timed-text XML document into cues.

    Cues are returned in document order; the parser does not re-sort.

    Args:
        raw: Timed-text XML, e.g.
            ``<transcript><text start="1.5" dur="2.0">Hi</text></transcript>``

    Returns:
        List of Cue

    Raises:
        ParseError: If the document is not XML or has no transcript element
    """
    try:
        root = ElementTree.fromstring(raw)
    except ElementTree.ParseError as e:
        raise ParseError(CUE_LIST_STAGE, e) from e

    transcript = root if root.tag == 'transcript' else root.find('.//transcript')
    if transcript is None:
        raise ParseError(CUE_LIST_STAGE, "transcript element not found")

    cues = []
    for text_el in transcript.iter('text'):
        content = ''.join(text_el.itertext())
        cues.append(Cue(
            start_seconds=_parse_seconds(text_el.get('start')),
            duration_seconds=_parse_seconds(text_el.get('dur')),
            text=content or None,
        ))

    logger.debug(f"Parsed {len(cues)} cues")
    return cues


class TimedTextParser:
    """
    Parser for the caption track list and timed-text payloads.

    Thin object wrapper around parse_track_list / parse_cue_list so it can
    be injected where a parser instance is expected.
    """

    def parse_track_list(self, raw: str) -> List[CaptionTrack]:
        return parse_track_list(raw)

    def parse_cue_list(self, raw: str) -> List[Cue]:
        return parse_cue_list(raw)
