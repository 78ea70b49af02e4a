# -*- coding: utf-8 -*-
"""
Event Types Module

Re-exports EventType and the event payloads for consumers of the queue
notifications, so they do not need to import from the core layer.

Usage Example:
    from app.events import EventType

    # Subscribe to an event
    container.event_bus.subscribe(EventType.CURRENT_TRACK_CHANGED, on_current_track_changed)
"""

from core.event_bus import EventType
from models.queue_events import (
    QueueSnapshot,
    RepeatMode,
    TrackLoaded,
    TrackRemoved,
    TracksAdded,
    TracksRemoved,
)

__all__ = [
    "EventType",
    "QueueSnapshot",
    "RepeatMode",
    "TrackLoaded",
    "TrackRemoved",
    "TracksAdded",
    "TracksRemoved",
]
