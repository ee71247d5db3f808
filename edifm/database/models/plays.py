"""
Play Log Model
--------------

Append-only history of what aired.

Models:
    - Play: One recording airing under one program

The most recent play (highest id) is what is on air. Ids come from the
storage engine's autoincrement; on SQLite the table is declared with
AUTOINCREMENT so an id is never handed out twice.
"""

# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict

# --- Third party imports ---
from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

# --- Local imports ---
from .base import Base

if TYPE_CHECKING:
    from .catalog import Program, Recording


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Play(Base):
    """
    A single broadcast event.

    Attributes:
        id: Primary key, strictly increasing in insertion order
        program_id: FK to the program the recording aired under
        recording_id: FK to the recording that aired
        started_at: UTC timestamp of the append

    Relationships:
        program: Many-to-one with Program
        recording: Many-to-one with Recording
    """

    __tablename__ = "plays"
    __table_args__ = ({"sqlite_autoincrement": True},)

    # ---- Primary fields ----
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    program_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("programs.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    recording_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("recordings.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    # ---- Relationships ----
    program: Mapped["Program"] = relationship("Program", back_populates="plays")
    recording: Mapped["Recording"] = relationship("Recording", back_populates="plays")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize scalar fields for the web layer."""
        return {
            "id": self.id,
            "program_id": self.program_id,
            "recording_id": self.recording_id,
            "started_at": self.started_at.isoformat() if self.started_at else None,
        }

    def __repr__(self) -> str:
        return (
            f"<Play(id={self.id}, program_id={self.program_id}, "
            f"recording_id={self.recording_id})>"
        )
