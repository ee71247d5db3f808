#!/usr/bin/env python3
"""
decorators.py
--------------------
Decorators shared by the entity managers.

Manager methods stack them in this order:

    @handle_db_errors
    @log_database_operation("append_play")
    def append(self, ...): ...

so the logged error is the original one and the caller sees a
DatabaseError (or the domain error, untouched).
"""
import time
from functools import wraps
from typing import Callable, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from edifm.core.exceptions import DatabaseError
from edifm.core.logging_manager import safe_logger
from edifm.core.validators import DataValidator


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 3)


def log_database_operation(operation_name: str):
    """
    Log start, completion and failure of a manager method.

    Uses ``self.logger`` (a StationLogger or None). Failures are logged
    with the operation name and re-raised unchanged.
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            logger = safe_logger(getattr(self, "logger", None))
            manager = type(self).__name__
            started = time.perf_counter()

            logger.log_debug(f"Starting {operation_name}", {"manager": manager})
            try:
                result = function(self, *args, **kwargs)
            except Exception as e:
                logger.log_error(
                    e,
                    {
                        "operation": operation_name,
                        "manager": manager,
                        "elapsed_ms": _elapsed_ms(started),
                    },
                )
                raise

            logger.log_operation(
                f"{operation_name}_completed",
                {"manager": manager, "elapsed_ms": _elapsed_ms(started), "success": True},
            )
            return result

        return wrapper

    return decorator


def validate_metadata(required_fields: List[str]):
    """
    Reject create() calls whose metadata lacks a required field.

    The metadata dict is the ``metadata`` keyword or the last positional
    argument.
    """

    def decorator(function: Callable) -> Callable:
        @wraps(function)
        def wrapper(self, *args, **kwargs):
            metadata = kwargs["metadata"] if "metadata" in kwargs else (args[-1] if args else {})
            DataValidator.validate_required_fields(metadata, required_fields)
            return function(self, *args, **kwargs)

        return wrapper

    return decorator


def handle_db_errors(function: Callable) -> Callable:
    """
    Turn SQLAlchemy errors into DatabaseError.

    Domain errors (NotFoundError, ValidationError, ...) pass through.
    """

    @wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except IntegrityError as e:
            raise DatabaseError(f"Data integrity violation: {e.orig}") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database operation failed: {e}") from e

    return wrapper
