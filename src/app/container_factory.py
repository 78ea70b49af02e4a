# -*- coding: utf-8 -*-
"""
Container Factory Module

Responsible for creating and assembling all application dependencies.

This is the **only** instance creation point (Composition Root) for the application.
All service instance creation should be done here, not within individual services.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from app.container import AppContainer
    from core.ports.loader import ITrackLoader
    from core.ports.media_art import IMediaArtResolver
    from core.shuffle_bag import RandomIndex
    from services.config_service import ConfigService
    from services.playback_queue import PlaybackQueue
    from services.track_loader_service import Resolver

logger = logging.getLogger(__name__)


class AppContainerFactory:
    """Application Container Factory

    Creates and assembles all application dependencies.

    Usage Example:
        # In main.py
        container = AppContainerFactory.create(config_path)

        # In tests
        container = AppContainerFactory.create_for_testing(config_path, loader=fake_loader)
    """

    @staticmethod
    def create(
        config_path: Optional[str] = None,
        resolver: Optional["Resolver"] = None,
    ) -> "AppContainer":
        """Create Application Container

        Creates all service instances in dependency order and assembles them into the container.

        Args:
            config_path: Configuration file path, None for the per-user file
            resolver: Metadata resolver for the track loader, defaults to file-name titles

        Returns:
            A configured AppContainer instance
        """
        from core.event_bus import EventBus
        from services.config_service import ConfigService
        from services.media_art_service import DirectoryMediaArtResolver
        from services.track_loader_service import ThreadPoolTrackLoader, resolve_from_file_name

        logger.info("Creating application container...")

        # === 1. Infrastructure Layer ===
        config = ConfigService(config_path)
        event_bus = EventBus()

        # === 2. Queue collaborators ===
        media_art = DirectoryMediaArtResolver(
            file_names=config.get("media_art.file_names", []),
            extensions=config.get("media_art.extensions", []),
        )
        loader = ThreadPoolTrackLoader(
            resolver or resolve_from_file_name,
            max_workers=int(config.get("loader.max_workers", 4)),
        )

        container = AppContainerFactory._assemble(config, event_bus, loader, media_art, None)
        logger.info("Application container creation complete")
        return container

    @staticmethod
    def create_for_testing(
        config_path: Optional[str] = None,
        loader: Optional["ITrackLoader"] = None,
        media_art: Optional["IMediaArtResolver"] = None,
        random_index: Optional["RandomIndex"] = None,
    ) -> "AppContainer":
        """Create a container for testing

        Collaborators are injected as given; missing ones stay None.
        """
        from core.event_bus import EventBus
        from services.config_service import ConfigService

        logger.info("Creating test application container...")

        config = ConfigService(config_path)
        event_bus = EventBus()
        return AppContainerFactory._assemble(config, event_bus, loader, media_art, random_index)

    @staticmethod
    def _assemble(config, event_bus, loader, media_art, random_index) -> "AppContainer":
        from app.container import AppContainer
        from services.playback_queue import PlaybackQueue

        queue = PlaybackQueue(
            event_bus,
            loader=loader,
            media_art=media_art,
            random_index=random_index,
        )
        AppContainerFactory._restore_modes(config, queue)
        subscriptions = AppContainerFactory._remember_modes(config, event_bus)

        return AppContainer(
            config=config,
            event_bus=event_bus,
            queue=queue,
            _loader=loader,
            _media_art=media_art,
            _subscriptions=subscriptions,
        )

    @staticmethod
    def _restore_modes(config: "ConfigService", queue: "PlaybackQueue") -> None:
        """Apply saved shuffle and repeat settings"""
        queue.set_shuffle(bool(config.get("queue.shuffle", False)))
        try:
            queue.set_repeat_mode(config.get("queue.repeat_mode", "none"))
        except ValueError:
            logger.warning("Invalid repeat mode in configuration: %r", config.get("queue.repeat_mode"))

    @staticmethod
    def _remember_modes(config: "ConfigService", event_bus) -> List[str]:
        """Write shuffle and repeat changes back into the configuration"""
        from core.event_bus import EventType

        if not config.get("queue.remember_modes", True):
            return []

        return [
            event_bus.subscribe(
                EventType.SHUFFLE_CHANGED,
                lambda shuffle: config.set("queue.shuffle", bool(shuffle)),
            ),
            event_bus.subscribe(
                EventType.REPEAT_MODE_CHANGED,
                lambda mode: config.set("queue.repeat_mode", mode.value),
            ),
        ]
