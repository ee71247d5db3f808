#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities for station operations.

Provides type-safe conversion, validation, and normalization functions
used by the entity managers before anything reaches the database.
"""
from __future__ import annotations

import re
from datetime import datetime, time
from typing import Any, Dict, List, Optional

from .exceptions import ValidationError

_WHITESPACE = re.compile(r"\s+")
_TIME_FORMATS = ("%H:%M:%S", "%H:%M")


class DataValidator:
    """Centralized data validation for database operations."""

    @staticmethod
    def validate_required_fields(
        data: Dict[str, Any], required_fields: List[str]
    ) -> None:
        """
        Validate that required fields are present and non-empty.

        Args:
            data: Data dictionary to validate
            required_fields: List of required field names

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(data, dict):
            raise ValidationError(
                f"Expected a metadata dict, got {type(data).__name__}"
            )
        for field in required_fields:
            if field not in data or data[field] in (None, ""):
                raise ValidationError(f"Required field '{field}' missing or empty")

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Normalize string value.

        Strips surrounding whitespace and collapses internal runs of
        whitespace to a single space.

        Args:
            value: Value to normalize

        Returns:
            Normalized string or None if empty
        """
        if value is None:
            return None
        normalized = _WHITESPACE.sub(" ", str(value)).strip()
        return normalized or None

    @staticmethod
    def normalize_tag(value: Any) -> Optional[str]:
        """Normalize a tag name (string normalization plus lowercasing)."""
        normalized = DataValidator.normalize_string(value)
        return normalized.lower() if normalized else None

    @staticmethod
    def normalize_time(value: Any) -> Optional[time]:
        """
        Normalize various time-of-day inputs to a time object.

        Args:
            value: "HH:MM" / "HH:MM:SS" string, time, or datetime

        Returns:
            Normalized time (second precision) or None

        Raises:
            ValidationError: If a string cannot be parsed
        """
        if value is None:
            return None
        if isinstance(value, datetime):
            value = value.time()
        if isinstance(value, time):
            return value.replace(microsecond=0, tzinfo=None)
        if isinstance(value, str):
            text = value.strip()
            for fmt in _TIME_FORMATS:
                try:
                    return datetime.strptime(text, fmt).time()
                except ValueError:
                    continue
            raise ValidationError(f"Invalid time of day: '{value}'")
        raise ValidationError(f"Cannot convert {type(value).__name__} to time of day")

    @staticmethod
    def normalize_id(value: Any) -> int:
        """
        Convert an identifier to int.

        Args:
            value: int or numeric string

        Returns:
            Integer identifier

        Raises:
            ValidationError: If the value is not an integer identifier
        """
        if isinstance(value, bool):
            raise ValidationError(f"Invalid identifier: {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid identifier: {value!r}")
