#!/usr/bin/env python3
"""
play_log.py
--------------------
Append-only log of plays.

The streaming side appends one play every time a recording starts. The
newest row (highest id) is what is on air; there is no separate
"current" pointer to keep in sync.

Key Features:
    - append(): foreign-key checked insert, id assigned by the storage engine
    - latest(): newest play or None for an empty log
    - recent(): newest-first history

Usage:
    plays = PlayLog(session, logger)

    play = plays.append(program.id, recording.id)
    assert plays.latest().id == play.id
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from edifm.core.exceptions import ReferentialIntegrityError, ValidationError
from edifm.core.logging_manager import play_context, safe_logger
from edifm.core.validators import DataValidator
from edifm.database.decorators import handle_db_errors, log_database_operation
from edifm.database.models import Play, Program, Recording
from .base_manager import BaseManager


class PlayLog(BaseManager):
    """
    Manages the plays table.

    This manager never updates or deletes plays.
    """

    @handle_db_errors
    @log_database_operation("append_play")
    def append(self, program_id: int, recording_id: int) -> Play:
        """
        Record that a recording started airing under a program.

        Args:
            program_id: ID of an existing program
            recording_id: ID of an existing recording

        Returns:
            The persisted Play with its id and started_at assigned

        Raises:
            ReferentialIntegrityError: If the program or recording does not
                exist; no play is written
        """
        program_id = DataValidator.normalize_id(program_id)
        recording_id = DataValidator.normalize_id(recording_id)

        missing = []
        if not self._exists_id(Program, program_id):
            missing.append(f"Program {program_id}")
        if not self._exists_id(Recording, recording_id):
            missing.append(f"Recording {recording_id}")
        if missing:
            safe_logger(self.logger).log_warning(
                "Play rejected",
                play_context(program_id=program_id, recording_id=recording_id),
            )
            raise ReferentialIntegrityError(
                f"Cannot append play: {' and '.join(missing)} does not exist"
            )

        def _do_append() -> Play:
            play = Play(program_id=program_id, recording_id=recording_id)
            with self.session.begin_nested():
                self.session.add(play)
            return play

        try:
            play = self._execute_with_retry(_do_append)
        except IntegrityError as e:
            # Referenced row vanished between the check and the insert
            raise ReferentialIntegrityError(f"Cannot append play: {e.orig}") from e

        safe_logger(self.logger).log_info("Play appended", play_context(play))
        return play

    @handle_db_errors
    @log_database_operation("latest_play")
    def latest(self) -> Optional[Play]:
        """
        Get the newest play.

        Returns:
            Play with the highest id, or None when nothing has aired yet
        """
        stmt = select(Play).order_by(Play.id.desc()).limit(1)
        return self.session.execute(stmt).scalars().first()

    @handle_db_errors
    @log_database_operation("recent_plays")
    def recent(self, limit: int = 5) -> List[Play]:
        """
        Get the newest plays, newest first.

        Args:
            limit: Maximum number of plays to return

        Raises:
            ValidationError: If limit is not positive
        """
        if limit < 1:
            raise ValidationError("limit must be at least 1")

        stmt = select(Play).order_by(Play.id.desc()).limit(limit)
        return list(self.session.execute(stmt).scalars().all())

    @handle_db_errors
    @log_database_operation("count_plays")
    def count(self) -> int:
        """Total number of plays in the log."""
        return self._count(Play)
