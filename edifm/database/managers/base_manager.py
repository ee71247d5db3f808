#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager providing common CRUD operations and utilities.
All entity managers inherit from this class.

Key Features:
    - Retry logic for database lock handling
    - Generic get-or-create utilities
    - Object resolution helpers (instance or id)
    - Lookups that raise NotFoundError for missing ids
    - Scalar field update helpers driven by normalizers

Usage:
    Subclass BaseManager for each entity type and implement the
    entity-specific get/create/update methods:

    class ProgramManager(BaseManager):
        @handle_db_errors
        @log_database_operation("get_program")
        def get(self, program_id: int) -> Program:
            return self._require(Program, program_id)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import time
from abc import ABC
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar, Union, Protocol

# --- Third party imports ---
from sqlalchemy.orm import Session, Mapped
from sqlalchemy.exc import IntegrityError, OperationalError

# --- Local imports ---
from edifm.core.exceptions import DatabaseError, NotFoundError, ValidationError
from edifm.core.logging_manager import StationLogger, safe_logger
from edifm.core.validators import DataValidator


class HasId(Protocol):
    """Protocol for objects that have an id attribute."""

    id: Mapped[int]


T = TypeVar("T", bound=HasId)


class BaseManager(ABC):
    """
    Abstract base manager providing common CRUD operations and utilities.

    Attributes:
        session: SQLAlchemy session for database operations
        logger: Optional logger for operation tracking
    """

    def __init__(self, session: Session, logger: Optional[StationLogger] = None):
        """
        Initialize the base manager.

        Args:
            session: SQLAlchemy session
            logger: Optional logger for operation tracking
        """
        self.session = session
        self.logger = logger

    # -------------------------------------------------------------------------
    # Core Helper Methods
    # -------------------------------------------------------------------------

    def _execute_with_retry(
        self,
        operation: Callable,
        max_retries: int = 3,
        retry_delay: float = 0.1,
    ) -> Any:
        """
        Execute database operation with retry on lock.

        Args:
            operation: Callable that performs the operation
            max_retries: Maximum number of retry attempts
            retry_delay: Base delay between retries (exponential backoff)

        Returns:
            Result of the operation

        Raises:
            OperationalError: If all retries exhausted
            DatabaseError: If retry loop completes without success
        """
        for attempt in range(max_retries):
            try:
                return operation()
            except OperationalError as e:
                error_msg = str(e).lower()

                if (
                    "locked" in error_msg or "busy" in error_msg
                ) and attempt < max_retries - 1:
                    wait_time = retry_delay * (2**attempt)

                    safe_logger(self.logger).log_warning(
                        f"Database locked, retrying in {wait_time}s",
                        {"attempt": attempt + 1, "max_retries": max_retries},
                    )

                    time.sleep(wait_time)
                    continue

                raise

        raise DatabaseError("Retry loop completed without success")

    def _get_or_create(
        self,
        model_class: Type[T],
        lookup_fields: Dict[str, Any],
        extra_fields: Optional[Dict[str, Any]] = None,
    ) -> T:
        """
        Get an existing row or create it if it doesn't exist.

        Handles the race where another process creates the row between
        the lookup and the insert: the insert runs in a savepoint, and on
        IntegrityError the savepoint is rolled back and the lookup retried.

        Args:
            model_class: ORM model class to query or create
            lookup_fields: Dictionary of field_name: value to filter/create
            extra_fields: Additional fields for new object creation only

        Returns:
            ORM instance of the model class

        Raises:
            DatabaseError: If creation fails after handling race condition
        """
        obj = self.session.query(model_class).filter_by(**lookup_fields).first()
        if obj:
            return obj

        fields = lookup_fields.copy()
        if extra_fields:
            fields.update(extra_fields)

        try:
            with self.session.begin_nested():
                obj = model_class(**fields)
                self.session.add(obj)
            return obj
        except IntegrityError:
            obj = self.session.query(model_class).filter_by(**lookup_fields).first()
            if obj:
                return obj
            raise DatabaseError(
                f"Failed to create {model_class.__name__} even after handling race condition"
            )

    def _resolve_object(
        self, item: Union[T, int], model_class: Type[T]
    ) -> T:
        """
        Resolve an item to an ORM object.

        Handles both ORM instances and integer IDs.

        Args:
            item: Object instance or ID
            model_class: Target model class

        Returns:
            Resolved ORM object

        Raises:
            ValidationError: If an instance is not persisted
            NotFoundError: If no row has the given id
            TypeError: If item type is invalid
        """
        if isinstance(item, model_class):
            if item.id is None:
                raise ValidationError(f"{model_class.__name__} instance must be persisted")
            return item
        elif isinstance(item, int) and not isinstance(item, bool):
            return self._require(model_class, item)
        else:
            raise TypeError(
                f"Expected {model_class.__name__} instance or int, got {type(item)}"
            )

    # -------------------------------------------------------------------------
    # Generic CRUD Helpers
    # -------------------------------------------------------------------------

    def _get_by_id(self, model_class: Type[T], entity_id: Any) -> Optional[T]:
        """
        Get entity by ID.

        Args:
            model_class: ORM model class
            entity_id: The entity ID (int or numeric string)

        Returns:
            Entity if found, None otherwise
        """
        return self.session.get(model_class, DataValidator.normalize_id(entity_id))

    def _require(self, model_class: Type[T], entity_id: Any) -> T:
        """
        Get entity by ID or raise.

        Raises:
            NotFoundError: If no row has the given id
        """
        entity = self._get_by_id(model_class, entity_id)
        if entity is None:
            raise NotFoundError(model_class.__name__, entity_id)
        return entity

    def _exists_id(self, model_class: Type[T], entity_id: Any) -> bool:
        """Check whether a row with the given id exists."""
        return self._get_by_id(model_class, entity_id) is not None

    def _get_all(
        self,
        model_class: Type[T],
        order_by: Optional[str] = None,
        **filters: Any,
    ) -> List[T]:
        """
        Get all entities of a type with optional filtering and ordering.

        Args:
            model_class: ORM model class
            order_by: Column name to order by (optional, defaults to id)
            **filters: Additional filter conditions

        Returns:
            List of entities
        """
        query = self.session.query(model_class)

        if filters:
            query = query.filter_by(**filters)

        attr = getattr(model_class, order_by or "id", None)
        # Only order by mapped columns, not Python properties
        if attr is not None and hasattr(attr, "__clause_element__"):
            query = query.order_by(attr)

        return query.all()

    def _count(self, model_class: Type[T], **filters: Any) -> int:
        """
        Count entities with optional filtering.

        Args:
            model_class: ORM model class
            **filters: Additional filter conditions

        Returns:
            Count of matching entities
        """
        query = self.session.query(model_class)

        if filters:
            query = query.filter_by(**filters)

        return query.count()

    # -------------------------------------------------------------------------
    # Scalar Field Update Helpers
    # -------------------------------------------------------------------------

    def _update_scalar_fields(
        self,
        entity: Any,
        metadata: Dict[str, Any],
        field_configs: List[tuple],
    ) -> None:
        """
        Update multiple scalar fields from metadata using normalizers.

        Args:
            entity: Entity to update
            metadata: Dictionary containing field values
            field_configs: List of tuples:
                - (field_name, normalizer) for required fields
                - (field_name, normalizer, allow_none) for optional fields

        Example:
            self._update_scalar_fields(program, metadata, [
                ("name", DataValidator.normalize_string),
                ("starts_at", DataValidator.normalize_time),
            ])
        """
        for config in field_configs:
            field_name = config[0]
            normalizer = config[1]
            allow_none = config[2] if len(config) > 2 else False

            if field_name not in metadata:
                continue

            value = normalizer(metadata[field_name])
            if value is not None or allow_none:
                setattr(entity, field_name, value)
