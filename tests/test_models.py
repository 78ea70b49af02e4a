"""
Queue Track Model Tests
"""


class TestQueueTrack:
    """Queue track tests"""

    def test_pending_track_placeholders(self):
        from models.track import QueueTrack, UNKNOWN_ALBUM, UNKNOWN_ARTIST

        track = QueueTrack.pending_for("/music/x.mp3")

        assert track.file_path == "/music/x.mp3"
        assert track.title == ""
        assert track.artist == UNKNOWN_ARTIST == "Unknown artist"
        assert track.album == UNKNOWN_ALBUM == "Unknown album"
        assert track.duration == 0
        assert track.media_art is None
        assert track.pending is True
        assert not track.has_artist
        assert not track.has_album

    def test_any_string_is_accepted(self):
        from models.track import QueueTrack

        track = QueueTrack.pending_for("")
        assert track.file_path == ""
        assert track.pending

    def test_ids_are_unique(self):
        from models.track import QueueTrack

        a = QueueTrack.pending_for("same.mp3")
        b = QueueTrack.pending_for("same.mp3")

        assert a.id != b.id
        assert a != b

    def test_apply_metadata(self):
        from models.track import QueueTrack, TrackMetadata

        track = QueueTrack.pending_for("/music/song.flac")
        track.apply_metadata(TrackMetadata(title="Song", artist="Artist", album="Album", duration=215))

        assert track.title == "Song"
        assert track.artist == "Artist"
        assert track.album == "Album"
        assert track.duration == 215
        assert track.has_artist and track.has_album
        assert not track.pending
        assert not track.load_failed

    def test_apply_metadata_substitutes_placeholders(self):
        from models.track import QueueTrack, TrackMetadata

        track = QueueTrack.pending_for("/music/song.flac")
        track.apply_metadata(TrackMetadata(title="Song", artist=None, album="", duration=-3))

        assert track.artist == "Unknown artist"
        assert track.album == "Unknown album"
        assert track.raw_artist == ""
        assert not track.has_artist
        assert not track.has_album
        assert track.duration == 0

    def test_apply_metadata_last_write_wins(self):
        from models.track import QueueTrack, TrackMetadata

        track = QueueTrack.pending_for("a.mp3")
        track.apply_metadata(TrackMetadata(title="First"))
        track.apply_metadata(TrackMetadata(title="Second", artist="B"))

        assert track.title == "Second"
        assert track.artist == "B"

    def test_apply_metadata_invalid_duration_leaves_track_unchanged(self):
        import pytest
        from models.track import QueueTrack, TrackMetadata

        track = QueueTrack.pending_for("a.mp3")

        with pytest.raises(ValueError):
            track.apply_metadata(TrackMetadata(title="Song", artist="A", duration="3:20"))

        assert track.title == ""
        assert track.artist == "Unknown artist"
        assert track.pending

    def test_mark_unresolved(self):
        from models.track import QueueTrack

        track = QueueTrack.pending_for("x.mp3")
        track.mark_unresolved()

        assert not track.pending
        assert track.load_failed
        assert track.artist == "Unknown artist"
        assert track.album == "Unknown album"

    def test_display_title(self):
        from models.track import QueueTrack, TrackMetadata

        track = QueueTrack.pending_for("/music/dir/Some Song.ogg")
        assert track.display_title == "Some Song.ogg"

        track.apply_metadata(TrackMetadata(title="Real Title"))
        assert track.display_title == "Real Title"

    def test_duration_strings(self):
        from models.track import QueueTrack

        track = QueueTrack(file_path="a.mp3", duration=65)
        assert track.duration_str == "1:05"
        assert track.duration_long_str == "1:05"

        track.duration = 3725
        assert track.duration_str == "62:05"
        assert track.duration_long_str == "1:02:05"

    def test_to_dict(self):
        from models.track import QueueTrack

        track = QueueTrack.pending_for("a.mp3")
        data = track.to_dict()

        assert data["id"] == track.id
        assert data["file_path"] == "a.mp3"
        assert data["artist"] == "Unknown artist"
        assert data["pending"] is True


class TestQueueSnapshot:

    def test_current_track(self):
        from models.queue_events import QueueSnapshot, RepeatMode
        from models.track import QueueTrack

        tracks = (QueueTrack.pending_for("a"), QueueTrack.pending_for("b"))
        snapshot = QueueSnapshot(tracks, 1, False, RepeatMode.NONE, False)
        assert snapshot.current_track is tracks[1]

        empty = QueueSnapshot((), -1, False, RepeatMode.NONE, False)
        assert empty.current_track is None

    def test_repeat_mode_values(self):
        from models.queue_events import RepeatMode

        assert RepeatMode("all") is RepeatMode.ALL
        assert [mode.value for mode in RepeatMode] == ["none", "all", "one"]

    def test_queue_index_error_is_index_error(self):
        from models.queue_events import QueueIndexError

        assert issubclass(QueueIndexError, IndexError)
