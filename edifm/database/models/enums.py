"""
Enumeration Types
------------------

Enum classes for the station database models.

Enums:
    - TaggableType: Entity kinds that can carry tags (program, recording)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List, Union

# --- Local imports ---
from edifm.core.exceptions import ValidationError


class TaggableType(str, Enum):
    """
    Enumeration of taggable entity types.
    - PROGRAM: Scheduled program (program_tags edge table)
    - RECORDING: Audio recording (recording_tags edge table)
    """

    PROGRAM = "program"
    RECORDING = "recording"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available taggable type choices."""
        return [entity_type.value for entity_type in cls]

    @classmethod
    def coerce(cls, value: Union[str, "TaggableType"]) -> "TaggableType":
        """
        Convert a string or enum member to a TaggableType.

        Raises:
            ValidationError: If the value names no taggable type
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unknown taggable type: {value!r} (expected one of {cls.choices()})"
            )

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        return self.value.title()
