# -*- coding: utf-8 -*-
"""
Protocols Definition Module

Defines the interface protocols (Protocol) for the services held by the application container.
Uses Protocol instead of ABC to support structural subtyping checks.

Design Decisions:
- Default to using Protocol + @runtime_checkable
- Runtime checks are performed as one-time assertions during container assembly or testing
"""

from __future__ import annotations

from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Iterable,
    List,
    Optional,
    Protocol,
    Tuple,
    runtime_checkable,
)

if TYPE_CHECKING:
    from models.queue_events import QueueSnapshot, RepeatMode
    from models.track import QueueTrack


# =============================================================================
# Event Bus Protocol
# =============================================================================

@runtime_checkable
class IEventBus(Protocol):
    """Event Bus Interface

    Provides a publish-subscribe pattern event system.
    """

    def subscribe(
        self,
        event_type: Enum,
        callback: Callable[[Any], None]
    ) -> str:
        """Subscribe to an event

        Args:
            event_type: Event type enumeration
            callback: Callback function

        Returns:
            Subscription ID, used to unsubscribe
        """
        ...

    def unsubscribe(self, subscription_id: str) -> bool:
        """Unsubscribe from an event"""
        ...

    def publish(self, event_type: Enum, data: Any = None) -> None:
        """Publish an event on the worker pool"""
        ...

    def publish_sync(self, event_type: Enum, data: Any = None) -> None:
        """Publish an event in the calling thread"""
        ...


# Re-export collaborator interfaces from core.ports
from core.ports.loader import ITrackLoader  # noqa: E402
from core.ports.media_art import IMediaArtResolver  # noqa: E402


# =============================================================================
# Configuration Service Protocol
# =============================================================================

@runtime_checkable
class IConfigService(Protocol):
    """Configuration Service Interface"""

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value

        Args:
            key: Configuration key, supports dot-separated nested keys
            default: Default value

        Returns:
            Configuration value
        """
        ...

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value"""
        ...

    def save(self) -> bool:
        """Save configuration to file"""
        ...


# =============================================================================
# Playback Queue Protocol
# =============================================================================

@runtime_checkable
class IPlaybackQueue(Protocol):
    """Playback Queue Interface"""

    @property
    def tracks(self) -> List["QueueTrack"]:
        ...

    @property
    def current_index(self) -> int:
        ...

    @property
    def current_track(self) -> Optional["QueueTrack"]:
        ...

    @property
    def shuffle(self) -> bool:
        ...

    @property
    def repeat_mode(self) -> "RepeatMode":
        ...

    @property
    def adding_tracks(self) -> bool:
        ...

    @property
    def current_file_path(self) -> str:
        ...

    @property
    def current_title(self) -> str:
        ...

    @property
    def current_artist(self) -> str:
        ...

    @property
    def current_album(self) -> str:
        ...

    @property
    def current_media_art(self) -> Optional[str]:
        ...

    @property
    def not_played_indices(self) -> Tuple[int, ...]:
        ...

    @property
    def total_duration(self) -> int:
        ...

    def __len__(self) -> int:
        ...

    def has_file_path(self, file_path: str) -> bool:
        ...

    def add_track(self, file_path: str) -> int:
        ...

    def add_tracks(
        self,
        file_paths: Iterable[str],
        clear_queue: bool = False,
        set_as_current: int = -1,
    ) -> int:
        ...

    def remove_track(self, index: int) -> None:
        ...

    def remove_tracks(self, indexes: Iterable[int]) -> None:
        ...

    def clear(self) -> None:
        ...

    def set_shuffle(self, shuffle: bool) -> None:
        ...

    def set_repeat_mode(self, mode: Any) -> None:
        ...

    def cycle_repeat_mode(self) -> "RepeatMode":
        ...

    def reset_not_played_tracks(self) -> None:
        ...

    def set_current_index(self, index: int) -> None:
        ...

    def next(self) -> int:
        ...

    def previous(self) -> None:
        ...

    def advance_on_end_of_track(self) -> bool:
        ...

    def snapshot(self) -> "QueueSnapshot":
        ...


__all__ = [
    "IEventBus",
    "IConfigService",
    "IPlaybackQueue",
    "ITrackLoader",
    "IMediaArtResolver",
]
