#!/usr/bin/env python3
"""
EDIFM Station Database Package
------------------------------

Data layer for the station's now-playing state:
- ORM models for tags, programs, recordings and plays
- Entity managers (tag store, catalogs, play log)
- The now-playing query consumed by the web layer
- Schema management via Alembic
"""

from .manager import StationDB
from edifm.core.exceptions import (
    DatabaseError,
    IntegrityViolationError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from .now_playing import Broadcast, NowPlayingQuery
from .decorators import (
    log_database_operation,
    handle_db_errors,
    validate_metadata,
)

__version__ = "1.0.0"

__all__ = [
    # Main manager
    "StationDB",
    # Query
    "Broadcast",
    "NowPlayingQuery",
    # Exceptions
    "DatabaseError",
    "IntegrityViolationError",
    "NotFoundError",
    "ReferentialIntegrityError",
    "ValidationError",
    # Decorators
    "log_database_operation",
    "handle_db_errors",
    "validate_metadata",
]
