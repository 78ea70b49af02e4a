"""
Queue track data model
"""

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Optional
import uuid


UNKNOWN_ARTIST = "Unknown artist"
UNKNOWN_ALBUM = "Unknown album"


@dataclass(frozen=True)
class TrackMetadata:
    """Metadata resolved by a track loader for one file path"""

    title: str = ""
    artist: Optional[str] = None
    album: Optional[str] = None
    duration: int = 0  # seconds


@dataclass
class QueueTrack:
    """
    Queue track data model

    Represents one item of the playback queue. A track starts out pending,
    with only its file path known, and is filled in once by the loader.
    """

    file_path: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    title: str = ""
    duration: int = 0  # seconds
    artist: str = UNKNOWN_ARTIST
    album: str = UNKNOWN_ALBUM

    # Values reported by the loader before placeholder substitution
    raw_artist: str = ""
    raw_album: str = ""

    # Cover path or handle
    media_art: Optional[str] = None

    pending: bool = True
    load_failed: bool = False

    @classmethod
    def pending_for(cls, file_path: str) -> 'QueueTrack':
        """Create a pending track; any string is accepted as a file path"""
        return cls(file_path=file_path)

    def apply_metadata(self, metadata: TrackMetadata) -> None:
        """
        Fill in resolved metadata

        Missing artist or album are replaced by placeholders; the raw
        values stay empty so callers can tell the two apart.

        Args:
            metadata: Result reported by the loader

        Raises:
            ValueError, TypeError: If the duration is not a number; the
                track is left unchanged
        """
        duration = max(0, int(metadata.duration or 0))
        self.title = metadata.title or ""
        self.duration = duration
        self.raw_artist = metadata.artist or ""
        self.raw_album = metadata.album or ""
        self.artist = self.raw_artist or UNKNOWN_ARTIST
        self.album = self.raw_album or UNKNOWN_ALBUM
        self.pending = False
        self.load_failed = False

    def mark_unresolved(self) -> None:
        """The loader found no metadata; placeholders are kept"""
        self.pending = False
        self.load_failed = True

    @property
    def has_artist(self) -> bool:
        return bool(self.raw_artist)

    @property
    def has_album(self) -> bool:
        return bool(self.raw_album)

    @property
    def display_title(self) -> str:
        """Title, or the file name while no title is known"""
        if self.title:
            return self.title
        return PurePath(self.file_path).name or self.file_path

    @property
    def duration_str(self) -> str:
        """Formatted duration string (mm:ss)"""
        minutes = self.duration // 60
        seconds = self.duration % 60
        return f"{minutes}:{seconds:02d}"

    @property
    def duration_long_str(self) -> str:
        """Formatted duration string (hh:mm:ss)"""
        hours = self.duration // 3600
        minutes = (self.duration % 3600) // 60
        seconds = self.duration % 60

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'id': self.id,
            'file_path': self.file_path,
            'title': self.title,
            'duration': self.duration,
            'artist': self.artist,
            'album': self.album,
            'raw_artist': self.raw_artist,
            'raw_album': self.raw_album,
            'media_art': self.media_art,
            'pending': self.pending,
            'load_failed': self.load_failed,
        }
