"""Shared fixtures for the hearlingo test suite."""

import asyncio
import json
from typing import Dict, List, Optional, Tuple, Union

import pytest

from hearlingo.models import CaptionTrack, Cue

VIDEO_A = "AAAAAAAAAAA"
VIDEO_B = "BBBBBBBBBBB"

CAPTIONS_JSON = (
    '{"playerCaptionsTracklistRenderer":{"captionTracks":['
    '{"baseUrl":"u1","vssId":"a.en","languageCode":"en","name":{"simpleText":"English (auto)"}},'
    '{"baseUrl":"u2","vssId":".fr","languageCode":"fr","name":{"simpleText":"French"}}'
    ']}}'
)


def watch_page(captions_json: str) -> str:
    """A trimmed-down watch page embedding ``captions_json`` like YouTube does."""
    return (
        '<!DOCTYPE html><html><head>'
        '<script>var ytcfg = {"INNERTUBE_API_KEY":"k"};</script>'
        '</head><body>'
        '<script nonce="x">var ytInitialPlayerResponse = {"responseContext":{},'
        '"playabilityStatus":{"status":"OK"},'
        '"captions":' + captions_json + ',"videoDetails":{"videoId":"AAAAAAAAAAA","title":"t"}};'
        'var meta = document.createElement(\'meta\');</script>'
        '</body></html>'
    )


def tracks_json(*tracks: Tuple[str, str, str, str]) -> str:
    """Build a captions JSON fragment from (baseUrl, vssId, languageCode, name) tuples."""
    return json.dumps({
        "playerCaptionsTracklistRenderer": {
            "captionTracks": [
                {"baseUrl": url, "vssId": vss, "languageCode": lang, "name": {"simpleText": name}}
                for url, vss, lang, name in tracks
            ]
        }
    })


def timedtext(*cues: Tuple[float, float, str]) -> str:
    """Build a timed-text XML document from (start, dur, text) tuples."""
    body = "".join(f'<text start="{start}" dur="{dur}">{text}</text>' for start, dur, text in cues)
    return f'<?xml version="1.0" encoding="utf-8" ?><transcript>{body}</transcript>'


EN_FR_PAGE = watch_page(tracks_json(
    ("https://yt/timedtext?lang=fr", ".fr", "fr", "French"),
    ("https://yt/timedtext?lang=en", ".en", "en", "English"),
    ("https://yt/timedtext?lang=en&kind=asr", "a.en", "en", "English (auto-generated)"),
))

EN_XML = timedtext((0.0, 2.0, "Hello"), (2.0, 2.5, "world"), (5.0, 1.0, "again"))
FR_XML = timedtext((0.0, 2.0, "Bonjour"), (2.0, 2.5, "le monde"))


class FakeSource:
    """
    Async payload source serving canned payloads.

    Payloads that are exceptions are raised. ``hold(key)`` makes fetches of
    ``key`` wait until the returned event is set; it must be called from
    inside the running event loop.
    """

    def __init__(
        self,
        track_pages: Optional[Dict[str, Union[str, Exception]]] = None,
        cue_payloads: Optional[Dict[str, Union[str, Exception]]] = None,
    ):
        self.track_pages = dict(track_pages or {})
        self.cue_payloads = dict(cue_payloads or {})
        self.calls: List[Tuple[str, str]] = []
        self.gates: Dict[str, asyncio.Event] = {}

    def hold(self, key: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[key] = event
        return event

    async def _serve(self, kind: str, key: str, payloads: Dict[str, Union[str, Exception]]) -> str:
        self.calls.append((kind, key))
        if key in self.gates:
            await self.gates[key].wait()
        payload = payloads[key]
        if isinstance(payload, Exception):
            raise payload
        return payload

    async def fetch_track_list_payload(self, video_id: str) -> str:
        return await self._serve("tracks", video_id, self.track_pages)

    async def fetch_cue_payload(self, source_url: str) -> str:
        return await self._serve("cues", source_url, self.cue_payloads)

    def count(self, kind: str) -> int:
        return sum(1 for call_kind, _ in self.calls if call_kind == kind)


@pytest.fixture
def fake_source():
    return FakeSource(
        track_pages={
            VIDEO_A: EN_FR_PAGE,
            VIDEO_B: watch_page(tracks_json(("https://yt/b?lang=de", ".de", "de", "German"))),
        },
        cue_payloads={
            "https://yt/timedtext?lang=en": EN_XML,
            "https://yt/timedtext?lang=fr": FR_XML,
            "https://yt/b?lang=de": timedtext((1.0, 1.0, "Hallo")),
        },
    )


@pytest.fixture
def english_track():
    return CaptionTrack("https://yt/timedtext?lang=en", ".en", "en", "English")


@pytest.fixture
def french_track():
    return CaptionTrack("https://yt/timedtext?lang=fr", ".fr", "fr", "French")


@pytest.fixture
def sample_cues():
    return [
        Cue(0.0, 2.0, "one"),
        Cue(2.0, 1.5, "two"),
        Cue(4.0, 2.0, "three"),  # gap between 3.5 and 4.0
        Cue(6.0, 0.0, "zero"),
        Cue(6.0, 3.0, "four"),
    ]
