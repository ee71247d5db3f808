#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the EDIFM station project.

This module defines the hierarchy of exceptions raised by the station
data layer.

Exception Hierarchy:
    Exception (built-in)
    ├── DatabaseError - Base for all database-related errors
    │   ├── NotFoundError - Requested entity does not exist
    │   ├── ReferentialIntegrityError - Write references a missing row
    │   └── IntegrityViolationError - Stored data breaks an invariant
    └── ValidationError - Data validation failures

Usage:
    from edifm.core.exceptions import NotFoundError, ReferentialIntegrityError

    try:
        play = db.plays.append(program_id, recording_id)
    except ReferentialIntegrityError as e:
        logger.error(f"Rejected play: {e}")
"""


class DatabaseError(Exception):
    """
    Base exception for database-related errors.

    Raised when database operations fail due to connection issues,
    query errors, integrity violations, or other database problems.

    This is the parent class for all database-specific exceptions.
    Catch this to handle any database error, or catch specific
    subclasses for more granular error handling.

    Examples:
        >>> raise DatabaseError("Connection to database failed")
        >>> raise DatabaseError("Tag already exists: jazz")

    See Also:
        NotFoundError, ReferentialIntegrityError, IntegrityViolationError
    """

    pass


class NotFoundError(DatabaseError):
    """
    Exception for lookups of entities that do not exist.

    Recoverable: the caller decides on a fallback (a 404 page,
    a default value, and so on).

    Attributes:
        entity: Name of the entity type that was looked up
        entity_id: Identifier that was not found

    Examples:
        >>> raise NotFoundError("Program", 42)
    """

    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"No {entity} found with id: {entity_id}")


class ReferentialIntegrityError(DatabaseError):
    """
    Exception for writes that reference a nonexistent row.

    Raised when appending a play or creating a tag edge that points
    at a program, recording or tag that does not exist. The write is
    rejected and nothing is persisted.

    Examples:
        >>> raise ReferentialIntegrityError("Program 999 does not exist")
    """

    pass


class IntegrityViolationError(DatabaseError):
    """
    Exception for stored data that breaks a schema invariant.

    Raised at read time when a play points at a program or recording
    that is gone. This means the data was corrupted or rows were
    deleted out of band; it is never masked.

    Examples:
        >>> raise IntegrityViolationError("Play 7 references missing Recording 3")
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Raised when input data fails validation checks:
    - Missing required fields
    - Empty names
    - Malformed times of day
    - Unknown taggable entity types

    Examples:
        >>> raise ValidationError("Required field 'name' missing or empty")
        >>> raise ValidationError("Invalid time of day: '25:00'")
    """

    pass
