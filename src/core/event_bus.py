# -*- coding: utf-8 -*-
"""
Event Bus Module - Publish-Subscribe Pattern Implementation

Carries playback queue notifications to any consumer (UI layer, tests).

Design Notes:
- This is a pure Python implementation, does not depend on any UI framework
- Instances are created by AppContainerFactory and passed to the services that publish
"""

from typing import Dict, Callable, Any, Optional
from enum import Enum
import threading
import uuid
import logging
from concurrent.futures import ThreadPoolExecutor

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Event type enumeration"""

    # Current track events
    CURRENT_TRACK_CHANGED = "current_track_changed"
    CURRENT_INDEX_CHANGED = "current_index_changed"
    MEDIA_ART_CHANGED = "media_art_changed"

    # Queue content events
    TRACKS_ADDED = "tracks_added"
    TRACK_REMOVED = "track_removed"
    TRACKS_REMOVED = "tracks_removed"
    QUEUE_CLEARED = "queue_cleared"

    # Mode events
    SHUFFLE_CHANGED = "shuffle_changed"
    REPEAT_MODE_CHANGED = "repeat_mode_changed"

    # Loading events
    ADDING_TRACKS_CHANGED = "adding_tracks_changed"
    TRACK_LOADED = "track_loaded"
    TRACKS_LOADED = "tracks_loaded"


class EventBus:
    """
    Event Bus

    Provides publish-subscribe pattern event system, supports asynchronous event handling.

    Usage example:
        event_bus = EventBus()

        # Subscribe to event
        def on_current_track_changed(track):
            logger.info("Now playing: %s", track.display_title)

        sub_id = event_bus.subscribe(EventType.CURRENT_TRACK_CHANGED, on_current_track_changed)

        # Publish event
        event_bus.publish_sync(EventType.CURRENT_TRACK_CHANGED, track)

        # Unsubscribe
        event_bus.unsubscribe(sub_id)
    """

    def __init__(self, max_workers: int = 4):
        self._subscribers: Dict[EventType, Dict[str, Callable]] = {}
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._sub_lock = threading.Lock()

    def subscribe(
        self,
        event_type: EventType,
        callback: Callable[[Any], None]
    ) -> str:
        """
        Subscribe to event

        Args:
            event_type: Event type
            callback: Callback function, receiving event data as an argument

        Returns:
            str: Subscription ID, used for unsubscription
        """
        subscription_id = str(uuid.uuid4())

        with self._sub_lock:
            if event_type not in self._subscribers:
                self._subscribers[event_type] = {}
            self._subscribers[event_type][subscription_id] = callback

        return subscription_id

    def unsubscribe(self, subscription_id: str) -> bool:
        """
        Unsubscribe

        Args:
            subscription_id: The ID returned when subscribing

        Returns:
            bool: Whether the unsubscription was successful
        """
        with self._sub_lock:
            for event_type in self._subscribers:
                if subscription_id in self._subscribers[event_type]:
                    del self._subscribers[event_type][subscription_id]
                    return True
        return False

    def publish(self, event_type: EventType, data: Any = None) -> None:
        """
        Publish event asynchronously

        The callback function will be executed asynchronously in the thread pool.

        Args:
            event_type: Event type
            data: Event data
        """
        with self._sub_lock:
            callbacks = list(self._subscribers.get(event_type, {}).values())
            if callbacks and self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers, thread_name_prefix="EventBus"
                )
            executor = self._executor

        for callback in callbacks:
            executor.submit(self._safe_call, event_type, callback, data)

    def publish_sync(self, event_type: EventType, data: Any = None) -> None:
        """
        Publish event synchronously

        All callbacks will be executed in the current thread, in subscription order.

        Args:
            event_type: Event type
            data: Event data
        """
        with self._sub_lock:
            callbacks = list(self._subscribers.get(event_type, {}).values())

        for callback in callbacks:
            self._safe_call(event_type, callback, data)

    def _safe_call(self, event_type: EventType, callback: Callable, data: Any) -> None:
        """Safely call a callback function"""
        try:
            callback(data)
        except Exception as e:
            logger.error("Event callback error for %s: %s", event_type.value, e, exc_info=True)

    def subscriber_count(self, event_type: EventType) -> int:
        with self._sub_lock:
            return len(self._subscribers.get(event_type, {}))

    def clear(self) -> None:
        """Clear all subscriptions"""
        with self._sub_lock:
            self._subscribers.clear()

    def shutdown(self) -> None:
        """Shutdown the event bus"""
        with self._sub_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
