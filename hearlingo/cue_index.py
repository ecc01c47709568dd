"""
Cue lookup for Hear Lingo.

Maps a continuous playback time to the active cue of a track. Lookups run on
every time-update tick, so they are O(log n) binary searches over the cues
ordered by start time.
"""

import bisect
import itertools
import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .models import Cue

logger = logging.getLogger(__name__)


def _is_sorted(cues: Sequence[Cue]) -> bool:
    return all(cues[i].start_seconds <= cues[i + 1].start_seconds for i in range(len(cues) - 1))


class CueIndex:
    """
    Ordered, immutable collection of cues for one track.

    Cues may overlap or have zero duration. When cues overlap, lookups
    return *some* cue containing the time (whichever the binary search probes
    first), not necessarily the earliest-starting one.

    The index is never patched: switching tracks builds a new one.
    """

    def __init__(self, cues: Sequence[Cue] = ()):
        self._cues: Tuple[Cue, ...] = tuple(cues)
        self._starts: List[float] = [cue.start_seconds for cue in self._cues]
        # _max_ends[i] is the latest end among cues[0..i]
        self._max_ends: List[float] = list(itertools.accumulate((cue.end_seconds for cue in self._cues), max))

    @classmethod
    def build(cls, cues: Iterable[Cue]) -> "CueIndex":
        """
        Build an index from parsed cues.

        Cues normally arrive ordered by start time. Out-of-order input is
        stable-sorted by start time, since the binary search depends on it.
        """
        cues = list(cues)
        if not _is_sorted(cues):
            logger.warning(f"Cue sequence of {len(cues)} cues is out of order, sorting by start time")
            cues.sort(key=lambda cue: cue.start_seconds)
        return cls(cues)

    @property
    def cues(self) -> Tuple[Cue, ...]:
        return self._cues

    def __len__(self) -> int:
        return len(self._cues)

    def __iter__(self) -> Iterator[Cue]:
        return iter(self._cues)

    def __getitem__(self, index: int) -> Cue:
        return self._cues[index]

    def _binary_search(self, time: float) -> Optional[int]:
        low = 0
        high = len(self._cues) - 1

        while low <= high:
            mid = (low + high) // 2
            cue = self._cues[mid]

            if cue.contains(time):
                return mid
            # a zero-length cue starting exactly at `time` never contains it,
            # but a following cue with the same start may
            if cue.start_seconds <= time:
                low = mid + 1
            else:
                high = mid - 1

        return None

    def active_index_at(self, time: float) -> Optional[int]:
        """
        Find the position of a cue containing ``time``.

        A cue contains ``time`` when ``start <= time < start + duration``.

        Args:
            time: Playback time in seconds

        Returns:
            Index of a containing cue, or None if no cue is active
        """
        position = self._binary_search(time)
        if position is not None:
            return position

        # A long cue overlapping later ones can be skipped by the search.
        # Walk back from the last cue starting at or before `time` while an
        # earlier cue still ends after it; without overlaps this stops at once.
        position = bisect.bisect_right(self._starts, time) - 1
        while position >= 0 and self._max_ends[position] > time:
            if self._cues[position].contains(time):
                return position
            position -= 1

        return None

    def active_cue_at(self, time: float) -> Optional[Cue]:
        """
        Return a cue active at ``time``, or None.

        Example:
            >>> index = CueIndex.build([Cue(0.0, 2.0, "a"), Cue(2.0, 2.0, "b")])
            >>> index.active_cue_at(2.5).text
            'b'
        """
        position = self.active_index_at(time)
        return self._cues[position] if position is not None else None
