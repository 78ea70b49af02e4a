"""
Playback Queue Core Module
"""

from .event_bus import EventBus, EventType
from .shuffle_bag import ShuffleBag

__all__ = [
    'EventBus',
    'EventType',
    'ShuffleBag',
]
