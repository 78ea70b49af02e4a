"""
Track Loader Service Module

Resolves queued file paths into track metadata on a background thread pool.
"""

from __future__ import annotations

import concurrent.futures
import logging
import weakref
from pathlib import Path
from typing import Callable, Optional

from core.ports.loader import LoadCallback
from models.track import TrackMetadata

logger = logging.getLogger(__name__)

Resolver = Callable[[str], Optional[TrackMetadata]]


def resolve_from_file_name(file_path: str) -> Optional[TrackMetadata]:
    """
    Fallback resolver without tag reading

    Returns:
        Metadata titled after the file name, or None if the file does not exist
    """
    path = Path(file_path)
    if not path.is_file():
        return None
    return TrackMetadata(title=path.stem)


class ThreadPoolTrackLoader:
    """
    Thread Pool Track Loader

    Runs the resolver for each request on a worker thread and reports the
    result through the request's callback. A resolver that raises counts as
    "no metadata".

    Example:
        loader = ThreadPoolTrackLoader(resolve_from_file_name, max_workers=4)
        loader.load(track.id, track.file_path, on_loaded)
    """

    def __init__(self, resolver: Resolver = resolve_from_file_name, max_workers: int = 4):
        self._resolver = resolver
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="TrackLoader"
        )
        self._shutdown = False
        self._finalizer = weakref.finalize(self, self._shutdown_executor, self._executor)

    @staticmethod
    def _shutdown_executor(
        executor: concurrent.futures.ThreadPoolExecutor,
        wait: bool = False,
    ) -> None:
        """Shutdown the executor."""
        executor.shutdown(wait=wait, cancel_futures=True)

    def shutdown(self, wait: bool = True) -> None:
        """Shutdown the loader; requests not started yet are dropped."""
        if self._shutdown:
            return
        self._shutdown = True
        if self._finalizer.alive:
            self._finalizer.detach()
        self._shutdown_executor(self._executor, wait=wait)

    def load(self, track_id: str, file_path: str, callback: LoadCallback) -> None:
        """Queue a resolution request"""
        if self._shutdown:
            raise RuntimeError("Track loader is shut down")
        self._executor.submit(self._run, track_id, file_path, callback)

    def _run(self, track_id: str, file_path: str, callback: LoadCallback) -> None:
        try:
            metadata = self._resolver(file_path)
        except Exception as e:
            logger.warning("Failed to resolve %s: %s", file_path, e)
            metadata = None

        if metadata is None:
            logger.debug("No metadata for %s", file_path)

        try:
            callback(track_id, metadata)
        except Exception as e:
            logger.error("Load callback failed for %s: %s", file_path, e, exc_info=True)
