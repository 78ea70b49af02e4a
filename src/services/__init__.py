"""
Service Layer Module
"""

from .config_service import ConfigService
from .playback_queue import PlaybackQueue
from .track_loader_service import ThreadPoolTrackLoader, resolve_from_file_name
from .media_art_service import DirectoryMediaArtResolver

__all__ = [
    'ConfigService',
    'PlaybackQueue',
    'ThreadPoolTrackLoader',
    'resolve_from_file_name',
    'DirectoryMediaArtResolver',
]
