#!/usr/bin/env python3
"""
now_playing.py
--------------------
The "what is on air right now" query consumed by the web layer.

The current broadcast is the newest play resolved against its program,
its recording, and both tag sets. An empty play log means the station
is off air, which is a normal result (None), not an error.

Usage:
    query = NowPlayingQuery(session, logger)
    broadcast = query.current_broadcast()
    if broadcast is None:
        render_off_air()
    else:
        render(broadcast.to_dict())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

# --- Third party imports ---
from sqlalchemy.orm import Session

# --- Local imports ---
from edifm.core.exceptions import IntegrityViolationError, NotFoundError
from edifm.core.logging_manager import StationLogger, safe_logger
from edifm.database.decorators import handle_db_errors, log_database_operation
from edifm.database.managers import PlayLog, ProgramManager, RecordingManager
from edifm.database.models import Play, Program, Recording, Tag


@dataclass(frozen=True)
class Broadcast:
    """
    Snapshot of what is airing.

    Attributes:
        play: The newest play
        program: Program the play aired under
        recording: Recording that aired
        program_tags: Tags of the program
        recording_tags: Tags of the recording
    """

    play: Play
    program: Program
    recording: Recording
    program_tags: FrozenSet[Tag]
    recording_tags: FrozenSet[Tag]

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view for templates and JSON responses."""
        return {
            "play": self.play.to_dict(),
            "program": self.program.to_dict(),
            "recording": self.recording.to_dict(),
            "program_tags": sorted(tag.name for tag in self.program_tags),
            "recording_tags": sorted(tag.name for tag in self.recording_tags),
        }


class NowPlayingQuery:
    """
    Read-only composite query over the play log and catalogs.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[StationLogger] = None) -> None:
        self.session = session
        self.logger = logger
        self.plays = PlayLog(session, logger)
        self.programs = ProgramManager(session, logger)
        self.recordings = RecordingManager(session, logger)

    @handle_db_errors
    @log_database_operation("current_broadcast")
    def current_broadcast(self) -> Optional[Broadcast]:
        """
        Resolve the newest play into a Broadcast.

        Returns:
            Broadcast snapshot, or None when nothing has ever aired

        Raises:
            IntegrityViolationError: If the newest play references a program
                or recording that no longer exists
        """
        play = self.plays.latest()
        if play is None:
            safe_logger(self.logger).log_debug("Play log empty, station off air")
            return None

        try:
            program = self.programs.get(play.program_id)
            recording = self.recordings.get(play.recording_id)
            program_tags = self.programs.tags_of(program.id)
            recording_tags = self.recordings.tags_of(recording.id)
        except NotFoundError as e:
            error = IntegrityViolationError(
                f"Play {play.id} references missing {e.entity} {e.entity_id}"
            )
            safe_logger(self.logger).log_error(
                error, {"operation": "current_broadcast"}, play=play
            )
            raise error from e

        return Broadcast(
            play=play,
            program=program,
            recording=recording,
            program_tags=frozenset(program_tags),
            recording_tags=frozenset(recording_tags),
        )
