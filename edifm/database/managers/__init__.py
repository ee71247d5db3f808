"""
Entity Managers
---------------

One manager per table group, all sharing BaseManager helpers.

Managers:
    - TagManager: Tag vocabulary and the program/recording tag edges
    - ProgramManager: Program catalog
    - RecordingManager: Recording catalog
    - PlayLog: Append-only play history

Usage:
    from edifm.database.managers import PlayLog, TagManager

    with db.session_scope() as session:
        plays = PlayLog(session, logger)
        plays.append(program_id, recording_id)
"""
from .base_manager import BaseManager, HasId
from .tag_manager import TagManager
from .program_manager import ProgramManager
from .recording_manager import RecordingManager
from .play_log import PlayLog

__all__ = [
    "BaseManager",
    "HasId",
    "TagManager",
    "ProgramManager",
    "RecordingManager",
    "PlayLog",
]
