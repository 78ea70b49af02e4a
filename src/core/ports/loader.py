# -*- coding: utf-8 -*-
"""
Track Loader Port Interface

Defines the interface of the component that resolves queued file paths into
track metadata in the background.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from models.track import TrackMetadata


# callback(track_id, metadata or None when nothing could be resolved)
LoadCallback = Callable[[str, Optional["TrackMetadata"]], None]


@runtime_checkable
class ITrackLoader(Protocol):
    """Track Loader Interface

    Completions may arrive in any order and on any thread. Each request is
    answered exactly once, failures included.
    Current implementation: ThreadPoolTrackLoader
    """

    def load(self, track_id: str, file_path: str, callback: LoadCallback) -> None:
        """Resolve a file path in the background

        Args:
            track_id: Identifier of the queued track, passed back to the callback
            file_path: File path or URL to resolve
            callback: Called once with the result
        """
        ...
