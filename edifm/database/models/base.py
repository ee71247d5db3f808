"""
Base Classes
------------

Foundational ORM classes for the station database.

Classes:
    - Base: Declarative base for all SQLAlchemy models

Constraint names follow a fixed naming convention so Alembic
autogenerate produces stable diffs across SQLite and PostgreSQL.
"""
# --- Third party ---
from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base for SQLAlchemy models and provides
    access to the metadata object for table creation and migrations.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
