#!/usr/bin/env python3
"""
program_manager.py
--------------------
Manages Program entities (the station schedule).

Programs are daily time windows (e.g. "Late Night Jazz", 22:00-02:00).
Reads are the main use; create/update exist for the management process
that maintains the schedule.

Key Features:
    - Lookup by id raising NotFoundError
    - Tag set of a program via the program_tags edge table
    - Programs scheduled at a given time of day (midnight-aware)

Usage:
    program_mgr = ProgramManager(session, logger)

    program = program_mgr.create({"name": "Breakfast", "starts_at": "06:00", "ends_at": "09:00"})
    tags = program_mgr.tags_of(program.id)
    on_now = program_mgr.get_scheduled_at(time(7, 30))
"""
from datetime import time
from typing import Any, Dict, List, Optional, Set

from edifm.core.exceptions import ValidationError
from edifm.core.logging_manager import safe_logger
from edifm.core.validators import DataValidator
from edifm.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)
from edifm.database.models import Program, Tag, TaggableType
from .base_manager import BaseManager
from .tag_manager import TagManager


class ProgramManager(BaseManager):
    """Manages Program table operations."""

    @handle_db_errors
    @log_database_operation("program_exists")
    def exists(self, program_id: int) -> bool:
        """Check if a program with the given id exists."""
        return self._exists_id(Program, program_id)

    @handle_db_errors
    @log_database_operation("get_program")
    def get(self, program_id: int) -> Program:
        """
        Retrieve a program by ID.

        Args:
            program_id: The program ID

        Returns:
            Program object

        Raises:
            NotFoundError: If no program has this id
        """
        return self._require(Program, program_id)

    @handle_db_errors
    @log_database_operation("find_program")
    def find(self, program_id: int) -> Optional[Program]:
        """Retrieve a program by ID, or None if absent."""
        return self._get_by_id(Program, program_id)

    @handle_db_errors
    @log_database_operation("get_all_programs")
    def get_all(self, order_by: str = "starts_at") -> List[Program]:
        """
        Retrieve all programs.

        Args:
            order_by: Column to order by ("starts_at", "name", "id")

        Returns:
            List of Program objects
        """
        return self._get_all(Program, order_by=order_by)

    @handle_db_errors
    @log_database_operation("create_program")
    @validate_metadata(["name", "starts_at", "ends_at"])
    def create(self, metadata: Dict[str, Any]) -> Program:
        """
        Create a new program.

        Args:
            metadata: Dictionary with keys:
                - name: Program name (required)
                - starts_at: "HH:MM[:SS]" or time (required)
                - ends_at: "HH:MM[:SS]" or time (required)
                - tags: Optional list of tag names

        Returns:
            Created Program object

        Raises:
            ValidationError: If a field is missing or malformed
        """
        name = DataValidator.normalize_string(metadata["name"])
        if not name:
            raise ValidationError("Program name cannot be empty")

        program = Program(
            name=name,
            starts_at=DataValidator.normalize_time(metadata["starts_at"]),
            ends_at=DataValidator.normalize_time(metadata["ends_at"]),
        )
        self.session.add(program)
        self.session.flush()

        if metadata.get("tags"):
            TagManager(self.session, self.logger).set_tags(
                TaggableType.PROGRAM, program.id, metadata["tags"]
            )

        safe_logger(self.logger).log_debug(
            f"Created program: {name}", {"program_id": program.id}
        )
        return program

    @handle_db_errors
    @log_database_operation("update_program")
    def update(self, program: Program, metadata: Dict[str, Any]) -> Program:
        """
        Update an existing program.

        Args:
            program: Program object or ID
            metadata: Fields to change (name, starts_at, ends_at) and
                optionally ``tags`` which replaces the tag set

        Returns:
            Updated Program object

        Raises:
            NotFoundError: If an ID names no program
        """
        program = self._resolve_object(program, Program)

        self._update_scalar_fields(program, metadata, [
            ("name", DataValidator.normalize_string),
            ("starts_at", DataValidator.normalize_time),
            ("ends_at", DataValidator.normalize_time),
        ])

        if "tags" in metadata:
            TagManager(self.session, self.logger).set_tags(
                TaggableType.PROGRAM, program.id, metadata["tags"] or [], incremental=False
            )

        self.session.flush()
        return program

    @handle_db_errors
    @log_database_operation("program_tags")
    def tags_of(self, program_id: int) -> Set[Tag]:
        """
        Get the tags of a program.

        Raises:
            NotFoundError: If no program has this id
        """
        return TagManager(self.session, self.logger).list_for(
            TaggableType.PROGRAM, program_id
        )

    @handle_db_errors
    @log_database_operation("get_scheduled_programs")
    def get_scheduled_at(self, at: Any) -> List[Program]:
        """
        Get programs whose daily window contains a time of day.

        Args:
            at: time, datetime, or "HH:MM[:SS]" string

        Returns:
            Matching programs ordered by start time

        Notes:
            - Bounds are inclusive
            - Windows ending before they start wrap past midnight
        """
        at_time: Optional[time] = DataValidator.normalize_time(at)
        if at_time is None:
            raise ValidationError("A time of day is required")

        return [p for p in self.get_all() if p.is_scheduled_at(at_time)]
