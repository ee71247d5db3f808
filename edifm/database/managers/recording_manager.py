#!/usr/bin/env python3
"""
recording_manager.py
--------------------
Manages Recording entities (the station audio library).

Usage:
    recording_mgr = RecordingManager(session, logger)

    rec = recording_mgr.create({"filename": "blue_in_green.ogg",
                                "title": "Blue in Green", "artist": "Miles Davis"})
    tags = recording_mgr.tags_of(rec.id)
"""
from typing import Any, Dict, List, Optional, Set

from edifm.core.exceptions import DatabaseError, ValidationError
from edifm.core.logging_manager import safe_logger
from edifm.core.validators import DataValidator
from edifm.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from edifm.database.models import Recording, Tag, TaggableType
from .base_manager import BaseManager
from .tag_manager import TagManager


class RecordingManager(BaseManager):
    """Manages Recording table operations."""

    @handle_db_errors
    @log_database_operation("recording_exists")
    def exists(self, recording_id: int) -> bool:
        """Check if a recording with the given id exists."""
        return self._exists_id(Recording, recording_id)

    @handle_db_errors
    @log_database_operation("get_recording")
    def get(self, recording_id: int) -> Recording:
        """
        Retrieve a recording by ID.

        Raises:
            NotFoundError: If no recording has this id
        """
        return self._require(Recording, recording_id)

    @handle_db_errors
    @log_database_operation("find_recording")
    def find(self, recording_id: int) -> Optional[Recording]:
        """Retrieve a recording by ID, or None if absent."""
        return self._get_by_id(Recording, recording_id)

    @handle_db_errors
    @log_database_operation("get_recording_by_filename")
    def get_by_filename(self, filename: str) -> Optional[Recording]:
        """Retrieve a recording by its audio file name."""
        normalized = DataValidator.normalize_string(filename)
        if not normalized:
            return None
        return self.session.query(Recording).filter_by(filename=normalized).first()

    @handle_db_errors
    @log_database_operation("get_all_recordings")
    def get_all(self, order_by: str = "id") -> List[Recording]:
        """Retrieve all recordings."""
        return self._get_all(Recording, order_by=order_by)

    @handle_db_errors
    @log_database_operation("create_recording")
    @validate_metadata(["filename"])
    def create(self, metadata: Dict[str, Any]) -> Recording:
        """
        Create a new recording.

        Args:
            metadata: Dictionary with keys:
                - filename: Audio file name (required, unique)
                - title, artist: Optional track metadata
                - link: Optional external URL
                - tags: Optional list of tag names

        Returns:
            Created Recording object

        Raises:
            ValidationError: If filename is missing
            DatabaseError: If a recording with this filename exists
        """
        filename = DataValidator.normalize_string(metadata["filename"])
        if not filename:
            raise ValidationError("Recording filename cannot be empty")

        if self.get_by_filename(filename):
            raise DatabaseError(f"Recording already exists: {filename}")

        recording = Recording(
            filename=filename,
            title=DataValidator.normalize_string(metadata.get("title")) or "",
            artist=DataValidator.normalize_string(metadata.get("artist")) or "",
            link=DataValidator.normalize_string(metadata.get("link")),
        )
        self.session.add(recording)
        self.session.flush()

        if metadata.get("tags"):
            TagManager(self.session, self.logger).set_tags(
                TaggableType.RECORDING, recording.id, metadata["tags"]
            )

        safe_logger(self.logger).log_debug(
            f"Created recording: {filename}", {"recording_id": recording.id}
        )
        return recording

    @handle_db_errors
    @log_database_operation("update_recording")
    def update(self, recording: Recording, metadata: Dict[str, Any]) -> Recording:
        """
        Update an existing recording.

        ``tags`` in metadata replaces the tag set; ``link`` may be set to None.
        """
        recording = self._resolve_object(recording, Recording)

        self._update_scalar_fields(recording, metadata, [
            ("filename", DataValidator.normalize_string),
            ("title", DataValidator.normalize_string),
            ("artist", DataValidator.normalize_string),
            ("link", DataValidator.normalize_string, True),
        ])

        if "tags" in metadata:
            TagManager(self.session, self.logger).set_tags(
                TaggableType.RECORDING, recording.id, metadata["tags"] or [], incremental=False
            )

        self.session.flush()
        return recording

    @handle_db_errors
    @log_database_operation("recording_tags")
    def tags_of(self, recording_id: int) -> Set[Tag]:
        """
        Get the tags of a recording.

        Raises:
            NotFoundError: If no recording has this id
        """
        return TagManager(self.session, self.logger).list_for(
            TaggableType.RECORDING, recording_id
        )
