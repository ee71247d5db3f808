"""Tests for database operation decorators."""
import pytest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from edifm.core.exceptions import DatabaseError, NotFoundError, ValidationError
from edifm.core.logging_manager import StationLogger
from edifm.database.decorators import (
    handle_db_errors,
    log_database_operation,
    validate_metadata,
)


class _Worker:
    """Minimal object exposing a logger like the entity managers do."""

    def __init__(self, logger=None):
        self.logger = logger

    @log_database_operation("add")
    def add(self, a, b):
        return a + b

    @log_database_operation("explode")
    def explode(self):
        raise ValueError("boom")

    @validate_metadata(["name", "starts_at"])
    def create(self, metadata):
        return metadata["name"]


class TestLogDatabaseOperation:
    """Tests for the log_database_operation decorator."""

    def test_successful_operation(self):
        """Completion should be logged with success=True."""
        mock_logger = MagicMock(spec=StationLogger)

        assert _Worker(mock_logger).add(1, 2) == 3

        mock_logger.log_debug.assert_called_once()
        assert "Starting add" in mock_logger.log_debug.call_args[0][0]
        mock_logger.log_operation.assert_called_once()
        call_args = mock_logger.log_operation.call_args
        assert call_args[0][0] == "add_completed"
        assert call_args[0][1]["success"] is True
        assert call_args[0][1]["manager"] == "_Worker"
        assert call_args[0][1]["elapsed_ms"] >= 0

    def test_none_logger(self):
        """A missing logger should fall back to the null logger."""
        assert _Worker(None).add(2, 2) == 4

    def test_error_logged_and_reraised(self):
        """Exceptions should be logged and propagate unchanged."""
        mock_logger = MagicMock(spec=StationLogger)

        with pytest.raises(ValueError, match="boom"):
            _Worker(mock_logger).explode()

        mock_logger.log_error.assert_called_once()
        assert mock_logger.log_error.call_args[0][1]["operation"] == "explode"
        mock_logger.log_operation.assert_not_called()

    def test_preserves_function_name(self):
        """functools.wraps should keep the wrapped name."""
        assert _Worker.add.__name__ == "add"


class TestHandleDbErrors:
    """Tests for the handle_db_errors decorator."""

    def test_integrity_error_raises_database_error(self):
        """IntegrityError should become DatabaseError."""

        @handle_db_errors
        def op():
            raise IntegrityError("statement", {}, Exception("duplicate"))

        with pytest.raises(DatabaseError) as exc_info:
            op()

        assert "Data integrity violation" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, IntegrityError)

    def test_sqlalchemy_error_raises_database_error(self):
        """Other SQLAlchemy errors should become DatabaseError."""

        @handle_db_errors
        def op():
            raise SQLAlchemyError("connection failed")

        with pytest.raises(DatabaseError) as exc_info:
            op()

        assert "Database operation failed" in str(exc_info.value)

    def test_domain_errors_propagate(self):
        """Domain errors should pass through untouched."""

        @handle_db_errors
        def op():
            raise NotFoundError("Program", 7)

        with pytest.raises(NotFoundError) as exc_info:
            op()

        assert exc_info.value.entity_id == 7

    def test_return_value_passes_through(self):
        """Successful calls should return their result."""

        @handle_db_errors
        def op():
            return "ok"

        assert op() == "ok"


class TestValidateMetadata:
    """Tests for the validate_metadata decorator."""

    def test_valid_metadata(self):
        """All required fields present should call through."""
        assert _Worker().create({"name": "Drive", "starts_at": "06:00"}) == "Drive"

    def test_keyword_metadata(self):
        """Metadata passed by keyword should be validated too."""
        with pytest.raises(ValidationError, match="starts_at"):
            _Worker().create(metadata={"name": "Drive"})

    def test_empty_value_rejected(self):
        """Empty strings count as missing."""
        with pytest.raises(ValidationError, match="name"):
            _Worker().create({"name": "", "starts_at": "06:00"})

    def test_non_dict_metadata_rejected(self):
        """A bare string is a validation failure, not a crash."""
        with pytest.raises(ValidationError, match="metadata dict"):
            _Worker().create("name")
