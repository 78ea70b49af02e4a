"""
Data models for playback queue notifications
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from models.track import QueueTrack


class QueueIndexError(IndexError):
    """Queue index out of range, or navigation on an empty queue"""
    pass


class RepeatMode(Enum):
    """Repeat mode"""
    NONE = "none"
    ALL = "all"    # Repeat list
    ONE = "one"    # Repeat one


@dataclass(frozen=True)
class TracksAdded:
    """Tracks appended at `start`"""
    start: int
    tracks: Tuple[QueueTrack, ...]


@dataclass(frozen=True)
class TrackRemoved:
    index: int


@dataclass(frozen=True)
class TracksRemoved:
    """Tracks removed at the given positions (before removal, ascending)"""
    indexes: Tuple[int, ...]


@dataclass(frozen=True)
class TrackLoaded:
    """Loader filled in the track now at `index`"""
    index: int
    track: QueueTrack


@dataclass(frozen=True)
class QueueSnapshot:
    """Queue state observers start from before following the event stream"""
    tracks: Tuple[QueueTrack, ...]
    current_index: int
    shuffle: bool
    repeat_mode: RepeatMode
    adding_tracks: bool

    @property
    def current_track(self):
        if 0 <= self.current_index < len(self.tracks):
            return self.tracks[self.current_index]
        return None
