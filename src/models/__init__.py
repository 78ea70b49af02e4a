"""
Data Models Module
"""

from .track import QueueTrack, TrackMetadata, UNKNOWN_ALBUM, UNKNOWN_ARTIST
from .queue_events import (
    QueueIndexError,
    QueueSnapshot,
    RepeatMode,
    TrackLoaded,
    TrackRemoved,
    TracksAdded,
    TracksRemoved,
)

__all__ = [
    'QueueTrack',
    'TrackMetadata',
    'UNKNOWN_ARTIST',
    'UNKNOWN_ALBUM',
    'QueueIndexError',
    'QueueSnapshot',
    'RepeatMode',
    'TrackLoaded',
    'TrackRemoved',
    'TracksAdded',
    'TracksRemoved',
]
