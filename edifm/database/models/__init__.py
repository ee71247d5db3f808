"""
Database Models Package
------------------------

SQLAlchemy ORM models for the station database.

This package provides a modular organization of database models:
- base: Declarative base with constraint naming convention
- enums: Enumeration types
- associations: Tag edge tables (program_tags, recording_tags)
- entities: Tag
- catalog: Program, Recording
- plays: Play

Usage:
    from edifm.database.models import Play, Program, Recording, Tag
"""
# Base classes
from .base import Base

# Enumerations
from .enums import TaggableType

# Association tables (for direct usage if needed)
from .associations import program_tags, recording_tags

# Entity models
from .entities import Tag

# Catalog models
from .catalog import Program, Recording

# Play log
from .plays import Play

__all__ = [
    # Base
    "Base",
    # Enums
    "TaggableType",
    # Association tables
    "program_tags",
    "recording_tags",
    # Tags
    "Tag",
    # Catalog
    "Program",
    "Recording",
    # Play log
    "Play",
]
