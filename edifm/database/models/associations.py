"""
Association Tables
-------------------

Many-to-many edge tables between tags and the catalogs.

- program_tags: Program <-> Tag
- recording_tags: Recording <-> Tag

Both point into the same tags table but are independent relations:
tagging a program never tags a recording and vice versa. The composite
primary keys forbid duplicate (entity, tag) pairs.
"""
# --- Third party imports ---
from sqlalchemy import Column, ForeignKey, Integer, Table

# --- Local imports ---
from .base import Base

program_tags = Table(
    "program_tags",
    Base.metadata,
    Column(
        "program_id",
        Integer,
        ForeignKey("programs.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)

recording_tags = Table(
    "recording_tags",
    Base.metadata,
    Column(
        "recording_id",
        Integer,
        ForeignKey("recordings.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)
