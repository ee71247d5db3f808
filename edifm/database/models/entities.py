"""
Entity Models
--------------

Shared tagging vocabulary.

Models:
    - Tag: Keyword label applicable to both programs and recordings
"""

# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import TYPE_CHECKING, List

# --- Third party imports ---
from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from .associations import program_tags, recording_tags
from .base import Base

if TYPE_CHECKING:
    from .catalog import Program, Recording


class Tag(Base):
    """
    Keyword tag shared by programs and recordings.

    A program and a recording tagged "jazz" point at the same Tag row
    through two separate edge tables.

    Attributes:
        id: Primary key
        name: The tag text (unique, normalized lowercase)

    Relationships:
        programs: Many-to-many with Program (via program_tags)
        recordings: Many-to-many with Recording (via recording_tags)
    """

    __tablename__ = "tags"
    __table_args__ = (CheckConstraint("name != ''", name="non_empty_name"),)

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )

    # ---- Relationships ----
    programs: Mapped[List["Program"]] = relationship(
        "Program", secondary=program_tags, back_populates="tags"
    )
    recordings: Mapped[List["Recording"]] = relationship(
        "Recording", secondary=recording_tags, back_populates="tags"
    )

    # ---- Computed properties ----
    @property
    def usage_count(self) -> int:
        """Number of programs and recordings carrying this tag."""
        return len(self.programs) + len(self.recordings)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"

    def __str__(self) -> str:
        return self.name
