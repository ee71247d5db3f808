"""
Unit tests for RecordingManager.
"""
import pytest

from edifm.core.exceptions import DatabaseError, NotFoundError, ValidationError


class TestRecordingManagerCreate:
    """Test RecordingManager.create() method."""

    def test_create_recording(self, recording_manager, db_session):
        """Test creating a recording with full metadata."""
        recording = recording_manager.create({
            "filename": "blue_in_green.mp3",
            "title": "Blue in Green",
            "artist": "Miles Davis",
            "link": "https://example.org/blue",
        })
        db_session.commit()

        assert recording.id is not None
        assert recording.display_name == "Miles Davis - Blue in Green"
        assert recording.link == "https://example.org/blue"

    def test_create_minimal_recording(self, recording_manager):
        """Test only the filename is required."""
        recording = recording_manager.create({"filename": "untitled.ogg"})

        assert recording.title == ""
        assert recording.artist == ""
        assert recording.link is None
        assert recording.display_name == "untitled.ogg"

    def test_create_duplicate_filename_raises(self, recording_manager, recordings):
        """Test filenames are unique."""
        with pytest.raises(DatabaseError, match="already exists"):
            recording_manager.create({"filename": "so_what.mp3"})

    def test_create_without_filename_raises(self, recording_manager):
        """Test a missing filename raises ValidationError."""
        with pytest.raises(ValidationError):
            recording_manager.create({"title": "Nameless"})

    def test_create_with_tags(self, recording_manager, db_session):
        """Test tags passed at creation are linked."""
        recording = recording_manager.create({
            "filename": "ageispolis.flac",
            "tags": ["ambient", "Electronic"],
        })
        db_session.commit()

        assert {t.name for t in recording_manager.tags_of(recording.id)} == {
            "ambient",
            "electronic",
        }


class TestRecordingManagerGet:
    """Test RecordingManager lookups."""

    def test_get_existing(self, recording_manager, recordings):
        """Test get returns the recording."""
        r1, _ = recordings
        assert recording_manager.get(r1.id).title == "So What"

    def test_get_missing_raises(self, recording_manager):
        """Test get raises NotFoundError for an unknown id."""
        with pytest.raises(NotFoundError, match="Recording"):
            recording_manager.get(999)

    def test_get_by_filename(self, recording_manager, recordings):
        """Test lookup by filename."""
        _, r2 = recordings
        assert recording_manager.get_by_filename("windowlicker.mp3").id == r2.id
        assert recording_manager.get_by_filename("missing.mp3") is None

    def test_tags_of_missing_raises(self, recording_manager):
        """Test tags_of on an unknown id raises NotFoundError."""
        with pytest.raises(NotFoundError):
            recording_manager.tags_of(999)

    def test_get_all(self, recording_manager, recordings):
        """Test get_all returns every recording."""
        assert len(recording_manager.get_all()) == 2


class TestRecordingManagerUpdate:
    """Test RecordingManager.update() method."""

    def test_update_fields(self, recording_manager, recordings, db_session):
        """Test scalar fields are updated."""
        r1, _ = recordings
        recording_manager.update(r1, {"title": "So What (Live)"})
        db_session.commit()

        assert recording_manager.get(r1.id).title == "So What (Live)"

    def test_update_clears_link(self, recording_manager, recordings, db_session):
        """Test link can be cleared by passing None."""
        _, r2 = recordings
        recording_manager.update(r2.id, {"link": None})
        db_session.commit()

        assert recording_manager.get(r2.id).link is None

    def test_update_replaces_tags(self, recording_manager, tag_manager, recordings, db_session):
        """Test passing tags replaces the tag set."""
        r1, _ = recordings
        tag_manager.link("recording", r1.id, "bebop")
        recording_manager.update(r1, {"tags": ["modal"]})
        db_session.commit()

        assert {t.name for t in recording_manager.tags_of(r1.id)} == {"modal"}
