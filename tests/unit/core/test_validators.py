"""Tests for DataValidator normalization helpers."""
from datetime import datetime, time

import pytest

from edifm.core.exceptions import ValidationError
from edifm.core.validators import DataValidator


class TestValidateRequiredFields:
    """Tests for DataValidator.validate_required_fields()."""

    def test_all_present(self):
        """No error when every field has a value."""
        DataValidator.validate_required_fields({"a": 1, "b": "x"}, ["a", "b"])

    @pytest.mark.parametrize("data", [{}, {"name": None}, {"name": ""}])
    def test_missing_or_empty(self, data):
        """Absent, None and empty-string values are rejected."""
        with pytest.raises(ValidationError, match="'name'"):
            DataValidator.validate_required_fields(data, ["name"])


class TestNormalizeString:
    """Tests for DataValidator.normalize_string() and normalize_tag()."""

    def test_collapses_whitespace(self):
        assert DataValidator.normalize_string("  Late \t  Lounge\n") == "Late Lounge"

    def test_empty_becomes_none(self):
        assert DataValidator.normalize_string("   ") is None
        assert DataValidator.normalize_string(None) is None

    def test_tag_is_lowercased(self):
        assert DataValidator.normalize_tag("  Free  JAZZ ") == "free jazz"

    def test_empty_tag_is_none(self):
        assert DataValidator.normalize_tag("") is None


class TestNormalizeTime:
    """Tests for DataValidator.normalize_time()."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("06:00", time(6, 0)),
            (" 23:59:59 ", time(23, 59, 59)),
            (time(12, 30, 5, 999), time(12, 30, 5)),
            (datetime(2026, 10, 19, 7, 45), time(7, 45)),
        ],
    )
    def test_accepted_inputs(self, value, expected):
        """Strings, times and datetimes normalize to a second-precision time."""
        assert DataValidator.normalize_time(value) == expected

    def test_none(self):
        assert DataValidator.normalize_time(None) is None

    @pytest.mark.parametrize("value", ["24:00", "noon", "6", ""])
    def test_rejects_malformed_strings(self, value):
        with pytest.raises(ValidationError):
            DataValidator.normalize_time(value)

    def test_rejects_other_types(self):
        with pytest.raises(ValidationError, match="int"):
            DataValidator.normalize_time(600)


class TestNormalizeId:
    """Tests for DataValidator.normalize_id()."""

    def test_int_and_numeric_string(self):
        assert DataValidator.normalize_id(3) == 3
        assert DataValidator.normalize_id("42") == 42

    @pytest.mark.parametrize("value", [None, "abc", True, 1.5j])
    def test_rejects_non_identifiers(self, value):
        with pytest.raises(ValidationError):
            DataValidator.normalize_id(value)


class TestValidateRequiredFieldsTypes:
    """Tests for non-dict input to validate_required_fields()."""

    @pytest.mark.parametrize("data", ["name", None, ["name"]])
    def test_rejects_non_dict(self, data):
        with pytest.raises(ValidationError, match="metadata dict"):
            DataValidator.validate_required_fields(data, ["name"])
