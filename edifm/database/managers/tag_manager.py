#!/usr/bin/env python3
"""
tag_manager.py
--------------------
Manages Tag entities and the two tag edge tables.

Tags are a single vocabulary shared by programs and recordings. Each
kind of entity has its own edge table (program_tags, recording_tags),
so linking "jazz" to a program never makes a recording "jazz".

Key Features:
    - CRUD operations for tags
    - Link/unlink tags to/from programs and recordings
    - Tag set lookup through an explicit join on the edge table
    - Automatic tag normalization (whitespace, lowercase)
    - Get-or-create semantics for tag lookup

Usage:
    tag_mgr = TagManager(session, logger)

    tag = tag_mgr.get_or_create("jazz")
    tag_mgr.link(TaggableType.PROGRAM, program.id, "jazz")
    tags = tag_mgr.list_for("program", program.id)
"""
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Set, Type, Union

from sqlalchemy import Table, delete, exists, insert, select

from edifm.core.exceptions import (
    DatabaseError,
    NotFoundError,
    ReferentialIntegrityError,
    ValidationError,
)
from edifm.core.logging_manager import safe_logger
from edifm.core.validators import DataValidator
from edifm.database.decorators import handle_db_errors, log_database_operation
from edifm.database.models import (
    Program,
    Recording,
    Tag,
    TaggableType,
    program_tags,
    recording_tags,
)
from .base_manager import BaseManager


class _Edge(NamedTuple):
    model: Type[Any]
    table: Table
    column: str  # edge column pointing at the entity
    backref: str  # Tag relationship mirroring this edge table


_EDGES: Dict[TaggableType, _Edge] = {
    TaggableType.PROGRAM: _Edge(Program, program_tags, "program_id", "programs"),
    TaggableType.RECORDING: _Edge(Recording, recording_tags, "recording_id", "recordings"),
}


class TagManager(BaseManager):
    """
    Manages Tag table operations and tag edges.

    Tags are keyword labels for categorizing programs and recordings.
    Each tag is a unique normalized string.
    """

    # -------------------------------------------------------------------------
    # Core CRUD Operations
    # -------------------------------------------------------------------------

    @handle_db_errors
    @log_database_operation("tag_exists")
    def exists(self, tag_name: str) -> bool:
        """
        Check if a tag exists without raising exceptions.

        Args:
            tag_name: The tag text to check

        Returns:
            True if tag exists, False otherwise
        """
        normalized = DataValidator.normalize_tag(tag_name)
        if not normalized:
            return False

        return self.session.query(Tag).filter_by(name=normalized).first() is not None

    @handle_db_errors
    @log_database_operation("get_tag")
    def get(self, tag_name: str) -> Optional[Tag]:
        """
        Retrieve a tag by name.

        Args:
            tag_name: The tag text to retrieve

        Returns:
            Tag object if found, None otherwise
        """
        normalized = DataValidator.normalize_tag(tag_name)
        if not normalized:
            return None

        return self.session.query(Tag).filter_by(name=normalized).first()

    @handle_db_errors
    @log_database_operation("get_tag_by_id")
    def get_by_id(self, tag_id: int) -> Optional[Tag]:
        """
        Retrieve a tag by ID.

        Args:
            tag_id: The tag ID

        Returns:
            Tag object if found, None otherwise
        """
        return self._get_by_id(Tag, tag_id)

    @handle_db_errors
    @log_database_operation("get_all_tags")
    def get_all(self) -> List[Tag]:
        """Retrieve all tags ordered by name."""
        return self._get_all(Tag, order_by="name")

    @handle_db_errors
    @log_database_operation("create_tag")
    def create(self, tag_name: str) -> Tag:
        """
        Create a new tag.

        Args:
            tag_name: The tag text

        Returns:
            Created Tag object

        Raises:
            ValidationError: If the name is empty after normalization
            DatabaseError: If tag already exists

        Notes:
            - Tag text is normalized (stripped, lowercased)
            - Usually prefer get_or_create() to avoid duplicate errors
        """
        name = DataValidator.normalize_tag(tag_name)
        if not name:
            raise ValidationError("Tag cannot be empty")

        if self.get(name):
            raise DatabaseError(f"Tag already exists: {name}")

        tag = Tag(name=name)
        self.session.add(tag)
        self.session.flush()

        safe_logger(self.logger).log_debug(f"Created tag: {name}", {"tag_id": tag.id})

        return tag

    @handle_db_errors
    @log_database_operation("get_or_create_tag")
    def get_or_create(self, tag_name: str) -> Tag:
        """
        Get an existing tag or create it if it doesn't exist.

        Args:
            tag_name: The tag text

        Returns:
            Tag object (existing or newly created)

        Raises:
            ValidationError: If tag_name is empty after normalization
        """
        normalized = DataValidator.normalize_tag(tag_name)
        if not normalized:
            raise ValidationError("Tag cannot be empty")

        return self._get_or_create(Tag, {"name": normalized})

    @handle_db_errors
    @log_database_operation("delete_tag")
    def delete(self, tag: Union[Tag, int]) -> None:
        """
        Delete a tag.

        Args:
            tag: Tag object or ID to delete

        Raises:
            NotFoundError: If an ID names no tag

        Notes:
            - Edges in both program_tags and recording_tags are removed
        """
        tag = self._resolve_object(tag, Tag)

        safe_logger(self.logger).log_debug(
            f"Deleting tag: {tag.name}", {"tag_id": tag.id}
        )

        self.session.delete(tag)
        self.session.flush()

    # -------------------------------------------------------------------------
    # Edge Management
    # -------------------------------------------------------------------------

    def _edge(self, entity_type: Union[str, TaggableType]) -> _Edge:
        return _EDGES[TaggableType.coerce(entity_type)]

    def _is_linked(self, table: Table, column: str, entity_id: int, tag_id: int) -> bool:
        stmt = select(
            exists().where(table.c[column] == entity_id, table.c.tag_id == tag_id)
        )
        return bool(self.session.execute(stmt).scalar())

    @handle_db_errors
    @log_database_operation("link_tag")
    def link(
        self,
        entity_type: Union[str, TaggableType],
        entity_id: int,
        tag_name: str,
    ) -> Tag:
        """
        Link a tag to a program or recording (get-or-create the tag first).

        Linking an already linked tag is a no-op.

        Args:
            entity_type: "program" or "recording"
            entity_id: ID of the entity to tag
            tag_name: Tag text (normalized and created if needed)

        Returns:
            The Tag object that was linked

        Raises:
            ReferentialIntegrityError: If the entity does not exist
        """
        model, table, column, backref = self._edge(entity_type)
        entity_id = DataValidator.normalize_id(entity_id)
        if not self._exists_id(model, entity_id):
            raise ReferentialIntegrityError(
                f"Cannot tag {model.__name__} {entity_id}: it does not exist"
            )

        tag = self.get_or_create(tag_name)

        if not self._is_linked(table, column, entity_id, tag.id):
            self.session.execute(insert(table).values({column: entity_id, "tag_id": tag.id}))
            self.session.flush()
            # Keep already-loaded relationship collections in step with the edge table
            entity = self.session.get(model, entity_id)
            self.session.expire(entity, ["tags"])
            self.session.expire(tag, [backref])

            safe_logger(self.logger).log_debug(
                "Linked tag",
                {"tag": tag.name, "entity_type": model.__name__, "entity_id": entity_id},
            )

        return tag

    @handle_db_errors
    @log_database_operation("unlink_tag")
    def unlink(
        self,
        entity_type: Union[str, TaggableType],
        entity_id: int,
        tag_name: str,
    ) -> bool:
        """
        Unlink a tag from a program or recording.

        Args:
            entity_type: "program" or "recording"
            entity_id: ID of the entity
            tag_name: Tag text to unlink

        Returns:
            True if the edge was removed, False if it didn't exist
        """
        model, table, column, backref = self._edge(entity_type)
        entity_id = DataValidator.normalize_id(entity_id)

        tag = self.get(tag_name)
        if not tag or not self._is_linked(table, column, entity_id, tag.id):
            return False

        self.session.execute(
            delete(table).where(table.c[column] == entity_id, table.c.tag_id == tag.id)
        )
        self.session.flush()
        entity = self.session.get(model, entity_id)
        if entity is not None:
            self.session.expire(entity, ["tags"])
        self.session.expire(tag, [backref])

        safe_logger(self.logger).log_debug(
            "Unlinked tag",
            {"tag": tag.name, "entity_type": model.__name__, "entity_id": entity_id},
        )

        return True

    @handle_db_errors
    @log_database_operation("set_tags")
    def set_tags(
        self,
        entity_type: Union[str, TaggableType],
        entity_id: int,
        tags: Iterable[str],
        incremental: bool = True,
    ) -> Set[Tag]:
        """
        Update all tags for a program or recording.

        Args:
            entity_type: "program" or "recording"
            entity_id: ID of the entity
            tags: Tag names
            incremental: Add to existing tags (True) or replace them (False)

        Returns:
            The entity's tag set after the update

        Raises:
            ReferentialIntegrityError: If the entity does not exist
        """
        model, table, column, backref = self._edge(entity_type)
        entity_id = DataValidator.normalize_id(entity_id)
        if not self._exists_id(model, entity_id):
            raise ReferentialIntegrityError(
                f"Cannot tag {model.__name__} {entity_id}: it does not exist"
            )

        wanted = {DataValidator.normalize_tag(t) for t in tags}
        wanted.discard(None)

        if not incremental:
            for tag in self._tags_via(table, column, entity_id):
                if tag.name not in wanted:
                    self.unlink(entity_type, entity_id, tag.name)

        for name in sorted(wanted):
            self.link(entity_type, entity_id, name)

        return self._tags_via(table, column, entity_id)

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def _tags_via(self, table: Table, column: str, entity_id: int) -> Set[Tag]:
        stmt = (
            select(Tag)
            .join(table, table.c.tag_id == Tag.id)
            .where(table.c[column] == entity_id)
        )
        return set(self.session.execute(stmt).scalars().all())

    @handle_db_errors
    @log_database_operation("list_tags_for")
    def list_for(
        self,
        entity_type: Union[str, TaggableType],
        entity_id: int,
    ) -> Set[Tag]:
        """
        Get the tag set of a program or recording.

        Args:
            entity_type: "program" or "recording"
            entity_id: ID of the entity

        Returns:
            Set of Tag objects linked through the entity's edge table
            (no ordering guarantee)

        Raises:
            NotFoundError: If the entity does not exist
        """
        model, table, column, backref = self._edge(entity_type)
        entity_id = DataValidator.normalize_id(entity_id)
        if not self._exists_id(model, entity_id):
            raise NotFoundError(model.__name__, entity_id)

        return self._tags_via(table, column, entity_id)

    @handle_db_errors
    @log_database_operation("get_unused_tags")
    def get_unused(self) -> List[Tag]:
        """
        Get all tags that are linked to neither programs nor recordings.

        Returns:
            List of unused Tag objects ordered by name
        """
        stmt = select(Tag).order_by(Tag.name)
        for edge in _EDGES.values():
            stmt = stmt.where(~exists().where(edge.table.c.tag_id == Tag.id))
        return list(self.session.execute(stmt).scalars().all())
