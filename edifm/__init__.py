"""
EDIFM Station Package
=====================

Data layer for the station's "now playing" state.

The station airs recordings as part of scheduled programs. Every time a
recording starts, the streaming side appends a play to the play log; the
web front end asks this package what is on air right now and renders it.

Main Components:
    - database: SQLAlchemy ORM models, entity managers and the now-playing query
    - core: Logging, validation, paths and exceptions
    - migrations: Alembic environment for the station schema

Primary Interfaces:
    - edifm.database.manager.StationDB: Main database interface
    - edifm.database.cli: Schema management CLI

Example Usage:
    >>> from edifm.database import StationDB
    >>> from edifm.core.paths import DATABASE_URL, ALEMBIC_DIR, LOG_DIR
    >>> db = StationDB(DATABASE_URL, alembic_dir=ALEMBIC_DIR, log_dir=LOG_DIR)
    >>> broadcast = db.current_broadcast()
    >>> if broadcast is None:
    ...     print("Off air")

License: MIT
"""
