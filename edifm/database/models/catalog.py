"""
Catalog Models
--------------

Programs on the station schedule and the recordings that air in them.

Models:
    - Program: Daily scheduled block with a start and end time of day
    - Recording: Audio file with title/artist metadata

Both carry tags through their own edge table. Neither may be deleted
while a play still references it (plays FKs are RESTRICT).
"""

# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import time
from typing import TYPE_CHECKING, Any, Dict, List, Optional

# --- Third party imports ---
from sqlalchemy import CheckConstraint, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from .associations import program_tags, recording_tags
from .base import Base

if TYPE_CHECKING:
    from .entities import Tag
    from .plays import Play


class Program(Base):
    """
    A scheduled program.

    Programs repeat daily between ``starts_at`` and ``ends_at``. When
    ``ends_at`` is earlier than ``starts_at`` the window runs past
    midnight (e.g. 22:00 -> 02:00).

    Attributes:
        id: Primary key
        name: Program name
        starts_at: Time of day the program begins
        ends_at: Time of day the program ends

    Relationships:
        tags: Many-to-many with Tag (via program_tags)
        plays: One-to-many with Play
    """

    __tablename__ = "programs"
    __table_args__ = (CheckConstraint("name != ''", name="non_empty_name"),)

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    starts_at: Mapped[time] = mapped_column(Time, nullable=False)
    ends_at: Mapped[time] = mapped_column(Time, nullable=False)

    # ---- Relationships ----
    tags: Mapped[List["Tag"]] = relationship(
        "Tag", secondary=program_tags, back_populates="programs"
    )
    plays: Mapped[List["Play"]] = relationship(
        "Play", back_populates="program", passive_deletes="all"
    )

    # ---- Computed properties ----
    @property
    def wraps_midnight(self) -> bool:
        """Whether the program window crosses midnight."""
        return self.ends_at < self.starts_at

    def is_scheduled_at(self, at: time) -> bool:
        """
        Check whether a time of day falls inside the program window.

        Bounds are inclusive on both ends.
        """
        if self.wraps_midnight:
            return at >= self.starts_at or at <= self.ends_at
        return self.starts_at <= at <= self.ends_at

    def to_dict(self) -> Dict[str, Any]:
        """Serialize scalar fields for the web layer."""
        return {
            "id": self.id,
            "name": self.name,
            "starts_at": self.starts_at.isoformat(),
            "ends_at": self.ends_at.isoformat(),
        }

    def __repr__(self) -> str:
        return (
            f"<Program(id={self.id}, name='{self.name}', "
            f"{self.starts_at}-{self.ends_at})>"
        )

    def __str__(self) -> str:
        return self.name


class Recording(Base):
    """
    An audio recording in the station library.

    Attributes:
        id: Primary key
        filename: Audio file name on the streaming host (unique)
        title: Track title
        artist: Performing artist
        link: Optional external link (artist page, store, ...)

    Relationships:
        tags: Many-to-many with Tag (via recording_tags)
        plays: One-to-many with Play
    """

    __tablename__ = "recordings"
    __table_args__ = (
        CheckConstraint("filename != ''", name="non_empty_filename"),
    )

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(String(1024), unique=True, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    artist: Mapped[str] = mapped_column(Text, nullable=False, default="")
    link: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ---- Relationships ----
    tags: Mapped[List["Tag"]] = relationship(
        "Tag", secondary=recording_tags, back_populates="recordings"
    )
    plays: Mapped[List["Play"]] = relationship(
        "Play", back_populates="recording", passive_deletes="all"
    )

    # ---- Computed properties ----
    @property
    def display_name(self) -> str:
        """'Artist - Title', falling back to the filename."""
        if self.artist and self.title:
            return f"{self.artist} - {self.title}"
        return self.title or self.filename

    def to_dict(self) -> Dict[str, Any]:
        """Serialize scalar fields for the web layer."""
        return {
            "id": self.id,
            "filename": self.filename,
            "title": self.title,
            "artist": self.artist,
            "link": self.link,
        }

    def __repr__(self) -> str:
        return f"<Recording(id={self.id}, filename='{self.filename}')>"

    def __str__(self) -> str:
        return self.display_name
