# -*- coding: utf-8 -*-
"""
Application Container Module

Defines the dependency container for the application, holding all service instances centrally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
    from app.protocols import IConfigService, IEventBus, IPlaybackQueue


@dataclass
class AppContainer:
    """Application Dependency Container

    Holds all service instances centrally, serving as the composition root for dependency injection.

    Usage Example:
        container = AppContainerFactory.create()
        container.queue.add_tracks(paths)
        ...
        container.cleanup()
    """

    config: "IConfigService"
    event_bus: "IEventBus"
    queue: "IPlaybackQueue"

    # === Internal Service References ===
    _loader: Any = field(default=None, repr=False)
    _media_art: Any = field(default=None, repr=False)
    _subscriptions: List[str] = field(default_factory=list, repr=False)

    def cleanup(self) -> None:
        """Clean up all resources

        Should be called when the application exits.
        """
        if self._loader and hasattr(self._loader, 'shutdown'):
            self._loader.shutdown()

        for subscription_id in self._subscriptions:
            self.event_bus.unsubscribe(subscription_id)
        self._subscriptions.clear()

        if self.config.get("queue.remember_modes", True):
            self.config.save()

        if self.event_bus and hasattr(self.event_bus, 'shutdown'):
            self.event_bus.shutdown()
