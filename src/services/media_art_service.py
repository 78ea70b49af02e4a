"""
Media Art Service Module

Finds cover images for queued tracks.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)


DEFAULT_FILE_NAMES = ('cover', 'folder', 'front', 'albumart', 'album')
DEFAULT_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.webp')


class DirectoryMediaArtResolver:
    """
    Directory Media Art Resolver

    Looks for art set explicitly for the (artist, album) pair first, then for
    an image such as `cover.jpg` in the directory of the track. Directory
    results are cached, including misses.

    Usage example:
        resolver = DirectoryMediaArtResolver()
        art = resolver.find_media_art("Artist", "Album", "/music/album/01.flac")
    """

    def __init__(
        self,
        file_names: Iterable[str] = DEFAULT_FILE_NAMES,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ):
        self._file_names = [name.lower() for name in file_names]
        self._extensions = {ext.lower() if ext.startswith('.') else f".{ext.lower()}"
                            for ext in extensions}
        self._overrides: Dict[Tuple[str, str], str] = {}
        self._directories: Dict[str, Optional[str]] = {}
        self._lock = threading.Lock()

    def set_media_art(self, artist: str, album: str, media_art: str) -> None:
        """Use media_art for every track of this album"""
        with self._lock:
            self._overrides[(artist, album)] = media_art

    def find_media_art(self, artist: str, album: str, file_path: str) -> Optional[str]:
        with self._lock:
            override = self._overrides.get((artist, album)) if artist and album else None
        if override:
            return override

        directory = Path(file_path).parent
        if not str(file_path) or not directory.is_dir():
            return None

        key = str(directory)
        with self._lock:
            if key in self._directories:
                return self._directories[key]

        found = self._find_in_directory(directory)
        with self._lock:
            self._directories[key] = found
        return found

    def clear_cache(self) -> None:
        with self._lock:
            self._directories.clear()

    def _find_in_directory(self, directory: Path) -> Optional[str]:
        candidates = {}
        for entry in directory.iterdir():
            if not entry.is_file() or entry.suffix.lower() not in self._extensions:
                continue
            stem = entry.stem.lower()
            if stem in self._file_names:
                candidates.setdefault(stem, entry)

        # Configured order decides between e.g. cover.jpg and folder.png
        for name in self._file_names:
            if name in candidates:
                logger.debug("Found media art %s", candidates[name])
                return str(candidates[name])
        return None
