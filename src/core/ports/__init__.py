# -*- coding: utf-8 -*-
"""
Ports Interfaces Package

Defines the interfaces between the playback queue and its external collaborators
(track metadata loader, media art lookup).

Design Principles:
- Use Protocol to define interfaces, supporting structural subtyping.
- The queue depends on these interfaces rather than concrete implementations.
- Facilitates replacing with fake/mock during testing.
"""

from core.ports.loader import ITrackLoader, LoadCallback
from core.ports.media_art import IMediaArtResolver

__all__ = [
    "ITrackLoader",
    "LoadCallback",
    "IMediaArtResolver",
]
