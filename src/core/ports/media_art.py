# -*- coding: utf-8 -*-
"""
Media Art Port Interface
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class IMediaArtResolver(Protocol):
    """Media Art Resolver Interface

    Current implementation: DirectoryMediaArtResolver
    """

    def find_media_art(self, artist: str, album: str, file_path: str) -> Optional[str]:
        """Find cover art for a track

        Args:
            artist: Artist as tagged, empty if unknown
            album: Album as tagged, empty if unknown
            file_path: Track file path

        Returns:
            Path (or other handle) of the artwork, None if there is none
        """
        ...
