"""
Playback Queue Module

Manages the ordered list of queued tracks, the current position, shuffle and
repeat modes, and the background loading of track metadata.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple, Union
import logging
import threading

from core.event_bus import EventBus, EventType
from core.ports.loader import ITrackLoader
from core.ports.media_art import IMediaArtResolver
from core.shuffle_bag import RandomIndex, ShuffleBag
from models.queue_events import (
    QueueIndexError,
    QueueSnapshot,
    RepeatMode,
    TrackLoaded,
    TrackRemoved,
    TracksAdded,
    TracksRemoved,
)
from models.track import QueueTrack, TrackMetadata

logger = logging.getLogger(__name__)

_Events = List[Tuple[EventType, Any]]

_NEXT_REPEAT_MODE = {
    RepeatMode.NONE: RepeatMode.ALL,
    RepeatMode.ALL: RepeatMode.ONE,
    RepeatMode.ONE: RepeatMode.NONE,
}


class PlaybackQueue:
    """
    Playback Queue

    Holds the tracks in playback order and the index of the current track.
    Edits elsewhere in the queue shift the current index so it keeps
    pointing at the same track. Every change is published on the event bus
    after the internal lock has been released.

    Example:
        queue = PlaybackQueue(event_bus, loader=loader)

        queue.add_tracks(["/music/a.flac", "/music/b.flac"])
        queue.set_shuffle(True)

        # Track finished playing
        if not queue.advance_on_end_of_track():
            player.stop()
    """

    def __init__(
        self,
        event_bus: EventBus,
        loader: Optional[ITrackLoader] = None,
        media_art: Optional[IMediaArtResolver] = None,
        random_index: Optional[RandomIndex] = None,
    ):
        self._event_bus = event_bus
        self._loader = loader
        self._media_art = media_art

        # The queue is owned by one thread; the lock covers loader callbacks
        self._lock = threading.RLock()

        self._tracks: List[QueueTrack] = []
        self._tracks_by_id: Dict[str, QueueTrack] = {}
        self._current_index: int = -1
        self._published_media_art: Optional[str] = None

        self._shuffle: bool = False
        self._repeat_mode: RepeatMode = RepeatMode.NONE
        self._not_played = ShuffleBag(random_index)

        # Loader requests not answered yet (track ids)
        self._outstanding: Set[str] = set()
        self._adding_tracks: bool = False

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def tracks(self) -> List[QueueTrack]:
        """Get queued tracks"""
        with self._lock:
            return self._tracks.copy()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tracks)

    @property
    def current_index(self) -> int:
        with self._lock:
            return self._current_index

    @property
    def current_track(self) -> Optional[QueueTrack]:
        """Get current track"""
        with self._lock:
            return self._current_track_locked()

    @property
    def current_file_path(self) -> str:
        track = self.current_track
        return track.file_path if track else ""

    @property
    def current_title(self) -> str:
        track = self.current_track
        return track.display_title if track else ""

    @property
    def current_artist(self) -> str:
        track = self.current_track
        return track.artist if track else ""

    @property
    def current_album(self) -> str:
        track = self.current_track
        return track.album if track else ""

    @property
    def current_media_art(self) -> Optional[str]:
        track = self.current_track
        return track.media_art if track else None

    @property
    def shuffle(self) -> bool:
        with self._lock:
            return self._shuffle

    @property
    def repeat_mode(self) -> RepeatMode:
        with self._lock:
            return self._repeat_mode

    @property
    def adding_tracks(self) -> bool:
        """Whether the loader is still resolving added tracks"""
        with self._lock:
            return self._adding_tracks

    @property
    def not_played_indices(self) -> Tuple[int, ...]:
        """Indexes not played in the current shuffle cycle"""
        with self._lock:
            return self._not_played.indices

    @property
    def total_duration(self) -> int:
        """Sum of track durations in seconds"""
        with self._lock:
            return sum(track.duration for track in self._tracks)

    def has_file_path(self, file_path: str) -> bool:
        """Whether a track with this file path is queued"""
        with self._lock:
            return any(track.file_path == file_path for track in self._tracks)

    def snapshot(self) -> QueueSnapshot:
        """Copy of the queue state to seed an observer"""
        with self._lock:
            return QueueSnapshot(
                tracks=tuple(replace(track) for track in self._tracks),
                current_index=self._current_index,
                shuffle=self._shuffle,
                repeat_mode=self._repeat_mode,
                adding_tracks=self._adding_tracks,
            )

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def add_track(self, file_path: str) -> int:
        """Append one track, returns its index"""
        return self.add_tracks([file_path])

    def add_tracks(
        self,
        file_paths: Iterable[str],
        clear_queue: bool = False,
        set_as_current: int = -1,
    ) -> int:
        """
        Append tracks to the end of the queue

        Args:
            file_paths: File paths (or URLs) to enqueue
            clear_queue: Empty the queue first
            set_as_current: Index to make current after the append, -1 to keep;
                honoured even when file_paths is empty

        Returns:
            int: Index of the first added track
        """
        file_paths = list(file_paths)
        events: _Events = []
        to_load: List[Tuple[str, str]] = []

        with self._lock:
            new_length = (0 if clear_queue else len(self._tracks)) + len(file_paths)
            if set_as_current >= new_length:
                raise QueueIndexError(
                    f"queue index {set_as_current} out of range (length {new_length})"
                )

            if clear_queue:
                self._clear_locked(events)

            start = len(self._tracks)
            new_tracks = [QueueTrack.pending_for(path) for path in file_paths]

            if new_tracks:
                self._tracks.extend(new_tracks)
                for track in new_tracks:
                    self._tracks_by_id[track.id] = track
                if self._shuffle:
                    self._not_played.add(range(start, len(self._tracks)))

                events.append((EventType.TRACKS_ADDED, TracksAdded(start, tuple(new_tracks))))
                logger.debug("Added %d tracks at %d", len(new_tracks), start)

            if set_as_current >= 0:
                self._set_current_locked(set_as_current, events)
            elif new_tracks and self._current_index == -1:
                self._set_current_locked(0, events)

            if new_tracks and self._loader is not None:
                self._outstanding.update(track.id for track in new_tracks)
                to_load = [(track.id, track.file_path) for track in new_tracks]
                if not self._adding_tracks:
                    self._adding_tracks = True
                    events.append((EventType.ADDING_TRACKS_CHANGED, True))

        self._publish(events)

        for track_id, file_path in to_load:
            self._request_load(track_id, file_path)

        return start

    def remove_track(self, index: int) -> None:
        """
        Remove track from queue

        Args:
            index: Queue index

        Raises:
            QueueIndexError: If index is out of range
        """
        events: _Events = []
        with self._lock:
            self._check_index_locked(index)
            previous_index = self._current_index
            removed_current = self._remove_at_locked(index)
            events.append((EventType.TRACK_REMOVED, TrackRemoved(index)))
            self._after_removal_locked(previous_index, removed_current, events)
        self._publish(events)

    def remove_tracks(self, indexes: Iterable[int]) -> None:
        """
        Remove the tracks at the given positions

        The result is the same as removing them one by one in ascending
        order, each later index shifted down by the removals before it.

        Raises:
            QueueIndexError: If any index is out of range; nothing is removed
        """
        events: _Events = []
        with self._lock:
            unique = sorted(set(indexes))
            for index in unique:
                self._check_index_locked(index)
            if not unique:
                return

            previous_index = self._current_index
            removed_current = False
            for offset, index in enumerate(unique):
                if self._remove_at_locked(index - offset):
                    removed_current = True

            events.append((EventType.TRACKS_REMOVED, TracksRemoved(tuple(unique))))
            self._after_removal_locked(previous_index, removed_current, events)
        self._publish(events)

    def clear(self) -> None:
        """Clear queue"""
        events: _Events = []
        with self._lock:
            self._clear_locked(events)
        self._publish(events)

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------

    def set_shuffle(self, shuffle: bool) -> None:
        """Turn shuffle on or off; turning it on starts a fresh cycle"""
        with self._lock:
            if shuffle == self._shuffle:
                return
            self._shuffle = shuffle
            if shuffle:
                self._not_played.reset(len(self._tracks))
            else:
                self._not_played.clear()
        self._event_bus.publish_sync(EventType.SHUFFLE_CHANGED, shuffle)

    def set_repeat_mode(self, mode: Union[RepeatMode, str]) -> None:
        mode = RepeatMode(mode)
        with self._lock:
            if mode == self._repeat_mode:
                return
            self._repeat_mode = mode
        self._event_bus.publish_sync(EventType.REPEAT_MODE_CHANGED, mode)

    def cycle_repeat_mode(self) -> RepeatMode:
        """Cycle None -> All -> One -> None"""
        with self._lock:
            mode = _NEXT_REPEAT_MODE[self._repeat_mode]
        self.set_repeat_mode(mode)
        return mode

    def reset_not_played_tracks(self) -> None:
        """Start a new shuffle cycle over the whole queue"""
        with self._lock:
            self._not_played.reset(len(self._tracks))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def set_current_index(self, index: int) -> None:
        """
        Make the track at index current

        Raises:
            QueueIndexError: If index is out of range
        """
        events: _Events = []
        with self._lock:
            self._check_index_locked(index)
            self._set_current_locked(index, events)
        self._publish(events)

    def next(self) -> int:
        """
        Next track (user request)

        Wraps around at the end of the queue and ignores the repeat mode.

        Returns:
            int: The new current index
        """
        events: _Events = []
        with self._lock:
            self._require_current_locked()
            count = len(self._tracks)
            if self._shuffle:
                if len(self._not_played) <= 1:
                    self._not_played.reset(count)
                index = self._not_played.take_next(self._current_index, count, refill=True)
            elif self._current_index == count - 1:
                index = 0
            else:
                index = self._current_index + 1
            self._set_current_locked(index, events)
        self._publish(events)
        return index

    def advance_on_end_of_track(self) -> bool:
        """
        Move on after the current track finished playing

        Returns:
            bool: True if playback continues (possibly with the same track),
                  False if playback should stop
        """
        events: _Events = []
        with self._lock:
            self._require_current_locked()
            count = len(self._tracks)

            if self._repeat_mode == RepeatMode.ONE:
                return True

            if self._shuffle:
                index = self._not_played.take_next(
                    self._current_index, count, refill=self._repeat_mode == RepeatMode.ALL
                )
                if index is None:
                    return False
            elif self._current_index == count - 1:
                if self._repeat_mode != RepeatMode.ALL:
                    return False
                index = 0
            else:
                index = self._current_index + 1

            self._set_current_locked(index, events)
        self._publish(events)
        return True

    def previous(self) -> None:
        """Previous track; does nothing while shuffle is on"""
        events: _Events = []
        with self._lock:
            if self._shuffle:
                return
            self._require_current_locked()
            if self._current_index == 0:
                index = len(self._tracks) - 1
            else:
                index = self._current_index - 1
            self._set_current_locked(index, events)
        self._publish(events)

    # ------------------------------------------------------------------
    # Loader results
    # ------------------------------------------------------------------

    def _on_track_loaded(self, track_id: str, metadata: Optional[TrackMetadata]) -> None:
        """Apply a loader result; may be called from any thread"""
        with self._lock:
            track = self._tracks_by_id.get(track_id)
            file_path = track.file_path if track is not None else None

        media_art = None
        if file_path is not None:
            media_art = self._find_media_art(metadata, file_path)

        events: _Events = []
        with self._lock:
            if track_id not in self._outstanding:
                logger.debug("Ignoring unexpected load result for track %s", track_id)
                return
            try:
                track = self._tracks_by_id.get(track_id)
                if track is None:
                    logger.debug("Discarding load result for removed track %s", track_id)
                else:
                    self._apply_result_locked(track, metadata, media_art, events)
            finally:
                self._outstanding.discard(track_id)
                self._check_loaded_locked(events)
        self._publish(events)

    def _apply_result_locked(
        self,
        track: QueueTrack,
        metadata: Optional[TrackMetadata],
        media_art: Optional[str],
        events: _Events,
    ) -> None:
        if metadata is None:
            track.mark_unresolved()
        else:
            try:
                track.apply_metadata(metadata)
            except (TypeError, ValueError) as e:
                logger.warning("Invalid metadata for %s: %s", track.file_path, e)
                track.mark_unresolved()
        track.media_art = media_art

        index = next(i for i, t in enumerate(self._tracks) if t is track)
        events.append((EventType.TRACK_LOADED, TrackLoaded(index, track)))
        if index == self._current_index:
            self._current_changed_locked(events)

    def _check_loaded_locked(self, events: _Events) -> None:
        if self._adding_tracks and not self._outstanding:
            self._adding_tracks = False
            events.append((EventType.ADDING_TRACKS_CHANGED, False))
            events.append((EventType.TRACKS_LOADED, None))
            logger.debug("All queued tracks loaded")

    def _request_load(self, track_id: str, file_path: str) -> None:
        try:
            self._loader.load(track_id, file_path, self._on_track_loaded)
        except Exception as e:
            logger.warning("Failed to request loading of %s: %s", file_path, e)
            self._on_track_loaded(track_id, None)

    def _find_media_art(self, metadata: Optional[TrackMetadata], file_path: str) -> Optional[str]:
        if self._media_art is None:
            return None
        artist = (metadata.artist or "") if metadata else ""
        album = (metadata.album or "") if metadata else ""
        try:
            return self._media_art.find_media_art(artist, album, file_path)
        except Exception as e:
            logger.warning("Media art lookup failed for %s: %s", file_path, e)
            return None

    # ------------------------------------------------------------------
    # Internals (lock held)
    # ------------------------------------------------------------------

    def _current_track_locked(self) -> Optional[QueueTrack]:
        if 0 <= self._current_index < len(self._tracks):
            return self._tracks[self._current_index]
        return None

    def _check_index_locked(self, index: int) -> None:
        if not 0 <= index < len(self._tracks):
            raise QueueIndexError(
                f"queue index {index} out of range (length {len(self._tracks)})"
            )

    def _require_current_locked(self) -> None:
        if not self._tracks:
            raise QueueIndexError("queue is empty")

    def _set_current_locked(self, index: int, events: _Events) -> None:
        if index != self._current_index:
            self._current_index = index
            events.append((EventType.CURRENT_INDEX_CHANGED, index))
        self._current_changed_locked(events)

    def _current_changed_locked(self, events: _Events) -> None:
        track = self._current_track_locked()
        events.append((EventType.CURRENT_TRACK_CHANGED, track))
        media_art = track.media_art if track else None
        if media_art != self._published_media_art:
            self._published_media_art = media_art
            events.append((EventType.MEDIA_ART_CHANGED, media_art))

    def _remove_at_locked(self, index: int) -> bool:
        """Remove one track, returns True if it was the current one"""
        track = self._tracks.pop(index)
        self._tracks_by_id.pop(track.id, None)
        self._not_played.remove_index(index)

        if index < self._current_index:
            self._current_index -= 1
            return False
        if index > self._current_index:
            return False

        if not self._tracks:
            self._current_index = -1
        elif self._current_index >= len(self._tracks):
            # The removed track was the last one
            self._current_index = len(self._tracks) - 1
        return True

    def _after_removal_locked(
        self, previous_index: int, removed_current: bool, events: _Events
    ) -> None:
        if self._current_index != previous_index:
            events.append((EventType.CURRENT_INDEX_CHANGED, self._current_index))
        if removed_current:
            self._current_changed_locked(events)

    def _clear_locked(self, events: _Events) -> None:
        self._tracks.clear()
        self._tracks_by_id.clear()
        self._not_played.clear()
        events.append((EventType.QUEUE_CLEARED, None))
        if self._current_index != -1:
            self._current_index = -1
            events.append((EventType.CURRENT_INDEX_CHANGED, -1))
            self._current_changed_locked(events)

    def _publish(self, events: _Events) -> None:
        for event_type, data in events:
            self._event_bus.publish_sync(event_type, data)
