"""
Test Configuration File

Unified setup for Python path, avoiding sys.path.insert in each test file.
Provides the event bus, fake loader and queue fixtures shared by the tests.
"""

import sys
from pathlib import Path

import pytest

# Add the src directory to the Python path
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


class FakeLoader:
    """Loader whose requests are completed by the test"""

    def __init__(self):
        self.requests = []  # (track_id, file_path, callback)

    def load(self, track_id, file_path, callback):
        self.requests.append((track_id, file_path, callback))

    def complete(self, file_path, metadata):
        """Answer the oldest open request for file_path"""
        for request in self.requests:
            if request[1] == file_path:
                self.requests.remove(request)
                track_id, _, callback = request
                callback(track_id, metadata)
                return track_id
        raise AssertionError(f"no open request for {file_path}")

    def complete_all(self, metadata=None):
        while self.requests:
            track_id, _, callback = self.requests.pop(0)
            callback(track_id, metadata)


class EventRecorder:
    """Records every event published on a bus, in order"""

    def __init__(self, event_bus):
        from core.event_bus import EventType

        self.events = []
        for event_type in EventType:
            event_bus.subscribe(
                event_type,
                lambda data, event_type=event_type: self.events.append((event_type, data)),
            )

    def of(self, event_type):
        return [data for recorded_type, data in self.events if recorded_type == event_type]

    def types(self):
        return [event_type for event_type, _ in self.events]

    def clear(self):
        self.events.clear()


def first_index(n):
    """Deterministic random source: always the lowest candidate"""
    return 0


@pytest.fixture
def event_bus():
    from core.event_bus import EventBus

    bus = EventBus()
    yield bus
    bus.shutdown()


@pytest.fixture
def recorder(event_bus):
    return EventRecorder(event_bus)


@pytest.fixture
def fake_loader():
    return FakeLoader()


@pytest.fixture
def queue(event_bus):
    """Queue without loader, shuffle picks the lowest candidate"""
    from services.playback_queue import PlaybackQueue

    return PlaybackQueue(event_bus, random_index=first_index)


@pytest.fixture
def make_queue(event_bus):
    """Build a queue holding the given file paths"""
    from services.playback_queue import PlaybackQueue

    def _make(paths, current=0, **kwargs):
        kwargs.setdefault("random_index", first_index)
        q = PlaybackQueue(event_bus, **kwargs)
        if paths:
            q.add_tracks(paths, set_as_current=current)
        return q

    return _make
