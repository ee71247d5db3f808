"""
Unit tests for PlayLog.

Tests the append-only play log and its newest-play lookup.
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from edifm.core.exceptions import ReferentialIntegrityError, ValidationError
from edifm.core.logging_manager import StationLogger
from edifm.database.managers import PlayLog
from edifm.database.models import Play


class TestPlayLogAppend:
    """Test PlayLog.append() method."""

    def test_append_then_latest(self, play_log, programs, recordings, db_session):
        """Test the appended play is the latest play."""
        p1, _ = programs
        r1, _ = recordings

        play = play_log.append(p1.id, r1.id)
        db_session.commit()

        latest = play_log.latest()
        assert latest.id == play.id
        assert latest.program_id == p1.id
        assert latest.recording_id == r1.id

    def test_append_sets_started_at(self, play_log, programs, recordings):
        """Test started_at is stamped at append time."""
        p1, _ = programs
        r1, _ = recordings
        before = datetime.now(timezone.utc)

        play = play_log.append(p1.id, r1.id)

        started_at = play.started_at
        if started_at.tzinfo is None:
            started_at = started_at.replace(tzinfo=timezone.utc)
        assert started_at >= before.replace(microsecond=0)

    def test_ids_strictly_increase(self, play_log, programs, recordings, db_session):
        """Test each append gets a distinct, larger id."""
        p1, p2 = programs
        r1, r2 = recordings

        ids = [
            play_log.append(p1.id, r1.id).id,
            play_log.append(p2.id, r2.id).id,
            play_log.append(p1.id, r2.id).id,
        ]
        db_session.commit()

        assert len(set(ids)) == 3
        assert ids == sorted(ids)

    def test_same_pair_can_air_twice(self, play_log, programs, recordings):
        """Test repeating a program/recording pair makes a new play."""
        p1, _ = programs
        r1, _ = recordings

        first = play_log.append(p1.id, r1.id)
        second = play_log.append(p1.id, r1.id)

        assert second.id > first.id
        assert play_log.count() == 2

    def test_append_missing_program_raises(self, play_log, recordings, db_session):
        """Test a missing program is rejected and nothing is written."""
        r1, _ = recordings

        with pytest.raises(ReferentialIntegrityError, match="Program 999"):
            play_log.append(999, r1.id)

        assert play_log.count() == 0
        assert play_log.latest() is None

    def test_append_missing_recording_raises(self, play_log, programs):
        """Test a missing recording is rejected."""
        p1, _ = programs

        with pytest.raises(ReferentialIntegrityError, match="Recording 42"):
            play_log.append(p1.id, 42)

        assert play_log.count() == 0

    def test_failed_append_keeps_earlier_plays(
        self, play_log, programs, recordings, db_session
    ):
        """Test a rejected append leaves the log untouched."""
        p1, _ = programs
        r1, _ = recordings
        play = play_log.append(p1.id, r1.id)
        db_session.commit()

        with pytest.raises(ReferentialIntegrityError):
            play_log.append(p1.id, 999)

        assert play_log.latest().id == play.id

    def test_append_invalid_id_raises(self, play_log):
        """Test non-numeric identifiers raise ValidationError."""
        with pytest.raises(ValidationError):
            play_log.append("abc", 1)


class TestPlayLogLatest:
    """Test PlayLog.latest() and recent() methods."""

    def test_latest_empty_log(self, play_log):
        """Test latest returns None when nothing has aired."""
        assert play_log.latest() is None

    def test_latest_is_highest_id(self, play_log, programs, recordings, db_session):
        """Test latest ignores started_at and follows id order."""
        p1, p2 = programs
        r1, r2 = recordings
        db_session.add(Play(
            program_id=p1.id,
            recording_id=r1.id,
            started_at=datetime(2030, 1, 1, tzinfo=timezone.utc),
        ))
        db_session.flush()
        newest = play_log.append(p2.id, r2.id)

        assert play_log.latest().id == newest.id

    def test_recent_newest_first(self, play_log, programs, recordings):
        """Test recent returns plays newest first up to the limit."""
        p1, p2 = programs
        r1, r2 = recordings
        plays = [
            play_log.append(p1.id, r1.id),
            play_log.append(p1.id, r2.id),
            play_log.append(p2.id, r1.id),
        ]

        assert [p.id for p in play_log.recent(2)] == [plays[2].id, plays[1].id]

    def test_recent_rejects_zero_limit(self, play_log):
        """Test a non-positive limit raises ValidationError."""
        with pytest.raises(ValidationError):
            play_log.recent(0)


class TestPlayLogLogging:
    """Test what PlayLog writes to its logger."""

    def test_append_logs_play_ids(self, db_session, programs, recordings):
        """A successful append is logged with the play's ids."""
        p1, _ = programs
        r1, _ = recordings
        mock_logger = MagicMock(spec=StationLogger)

        play = PlayLog(db_session, logger=mock_logger).append(p1.id, r1.id)

        mock_logger.log_info.assert_called_once_with(
            "Play appended",
            {"play_id": play.id, "program_id": p1.id, "recording_id": r1.id},
        )

    def test_rejected_append_logs_warning(self, db_session, recordings):
        """A rejected append is logged as a warning with the requested ids."""
        r1, _ = recordings
        mock_logger = MagicMock(spec=StationLogger)

        with pytest.raises(ReferentialIntegrityError):
            PlayLog(db_session, logger=mock_logger).append(999, r1.id)

        mock_logger.log_warning.assert_called_once_with(
            "Play rejected", {"program_id": 999, "recording_id": r1.id}
        )
        mock_logger.log_info.assert_not_called()
