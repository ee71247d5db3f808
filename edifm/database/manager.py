#!/usr/bin/env python3
"""
manager.py
--------------------
Database manager for the EDIFM station.

Provides the StationDB class, the entry point the web layer and the
ingestion process use to reach the station database. Handles:
    - Initialization of the database engine and sessionmaker
    - Request-scoped sessions with commit/rollback
    - Wiring of the entity managers for each session
    - Schema creation and migrations via Alembic
    - The now-playing query for callers without a session

Notes
==============
- Any SQLAlchemy URL works; SQLite and PostgreSQL are the tested targets
- On SQLite, foreign keys are switched on for every connection and
  transactions are begun explicitly so savepoints behave
- All datetimes are stored UTC-aware
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

# --- Third party ---
from sqlalchemy import create_engine, event, inspect, Engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from alembic.config import Config
from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

# --- Local imports ---
from edifm.core.exceptions import DatabaseError
from edifm.core.logging_manager import StationLogger, safe_logger
from edifm.core.paths import ALEMBIC_DIR, ALEMBIC_INI
from .decorators import handle_db_errors, log_database_operation
from .models import Base
from .managers import PlayLog, ProgramManager, RecordingManager, TagManager
from .now_playing import Broadcast, NowPlayingQuery


# ----- Main Database Manager -----
class StationDB:
    """
    Main database manager for the station database.

    Attributes:
        - database_url (str): SQLAlchemy URL of the database.
        - alembic_dir (Path): Filesystem path to the Alembic scripts.
        - engine (Engine): SQLAlchemy engine instance.
        - SessionLocal (sessionmaker): SQLAlchemy session factory.

    Usage:
        db = StationDB("sqlite:///data/edifm.db")
        with db.session_scope():
            program = db.programs.create({"name": "Breakfast",
                                          "starts_at": "06:00", "ends_at": "09:00"})
        broadcast = db.current_broadcast()
    """

    # ---- Initialization ----
    def __init__(
        self,
        database_url: str,
        alembic_dir: Union[str, Path] = ALEMBIC_DIR,
        log_dir: Optional[Union[str, Path]] = None,
        echo: bool = False,
    ) -> None:
        """
        Initialize database engine and session factory.

        A database with no tables is created from the ORM metadata and
        stamped at the newest Alembic revision. Existing databases are
        left alone; run upgrade_database() to migrate them.

        Args:
            database_url (str): SQLAlchemy database URL.
            alembic_dir (str | Path): Path to the Alembic directory.
            log_dir (str | Path): Directory for log files (optional)
            echo (bool): Echo SQL statements (debugging)
        """
        self.database_url = database_url
        self.alembic_dir = Path(alembic_dir).expanduser().resolve()
        self.echo = echo

        # --- Logging ---
        if log_dir:
            self.log_dir = Path(log_dir).expanduser().resolve() / "system"
            self.logger: Optional[StationLogger] = StationLogger(
                self.log_dir,
                component_name="database",
            )
        else:
            self.logger = None

        # Entity managers (bound in session_scope)
        self._tag_manager: Optional[TagManager] = None
        self._program_manager: Optional[ProgramManager] = None
        self._recording_manager: Optional[RecordingManager] = None
        self._play_log: Optional[PlayLog] = None
        self._now_playing: Optional[NowPlayingQuery] = None

        self._setup_engine()

    @property
    def is_sqlite(self) -> bool:
        """Whether the database URL points at SQLite."""
        return make_url(self.database_url).get_backend_name() == "sqlite"

    def _setup_engine(self) -> None:
        """Initialize database engine and session factory."""
        log = safe_logger(self.logger)
        try:
            url = make_url(self.database_url)
            log.log_operation(
                "database_init_start",
                {
                    "database": url.render_as_string(hide_password=True),
                    "alembic_dir": str(self.alembic_dir),
                },
            )

            if self.is_sqlite and url.database and url.database != ":memory:":
                Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)

            self.engine: Engine = create_engine(
                self.database_url,
                echo=self.echo,
                future=True,
                pool_pre_ping=True,
            )
            if self.is_sqlite:
                self._configure_sqlite(self.engine)

            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine,
                autoflush=True,
                expire_on_commit=False,
                future=True,
            )

            self.alembic_cfg: Config = self._setup_alembic()

            if not inspect(self.engine).get_table_names():
                self.initialize_schema()

            log.log_operation("database_init_complete", {"success": True})

        except Exception as e:
            log.log_error(e, {"operation": "database_init"})
            raise DatabaseError(f"Database initialization failed: {e}") from e

    @staticmethod
    def _configure_sqlite(engine: Engine) -> None:
        """
        Enforce foreign keys and take over transaction control from pysqlite.

        pysqlite's own BEGIN handling defeats SAVEPOINT; emitting BEGIN
        ourselves makes begin_nested() work as documented.
        """

        @event.listens_for(engine, "connect")
        def _on_connect(dbapi_conn, _record):
            dbapi_conn.isolation_level = None
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(engine, "begin")
        def _on_begin(conn):
            conn.exec_driver_sql("BEGIN")

    # ---- Session Management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a transactional scope around operations with logging.

        Also binds the entity managers to the session. They are available
        via properties (db.tags, db.programs, db.recordings, db.plays,
        db.now_playing) until the scope exits.

        Usage:
            with db.session_scope() as session:
                db.tags.link("program", program_id, "jazz")
                db.plays.append(program_id, recording_id)
        """
        session = self.SessionLocal()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        log = safe_logger(self.logger)

        self._tag_manager = TagManager(session, self.logger)
        self._program_manager = ProgramManager(session, self.logger)
        self._recording_manager = RecordingManager(session, self.logger)
        self._play_log = PlayLog(session, self.logger)
        self._now_playing = NowPlayingQuery(session, self.logger)

        log.log_debug("session_start", {"session_id": session_id})

        try:
            yield session
            session.commit()
            log.log_debug("session_commit", {"session_id": session_id})

        except Exception as e:
            session.rollback()
            log.log_error(
                e, {"operation": "session_rollback", "session_id": session_id}
            )
            raise
        finally:
            self._tag_manager = None
            self._program_manager = None
            self._recording_manager = None
            self._play_log = None
            self._now_playing = None

            session.close()
            log.log_debug("session_close", {"session_id": session_id})

    def get_session(self) -> Session:
        """Create and return a new SQLAlchemy session."""
        return self.SessionLocal()

    # -------------------------------------------------------------------------
    # Entity Manager Properties
    # -------------------------------------------------------------------------

    def _require_manager(self, manager, name: str):
        if manager is None:
            raise DatabaseError(
                f"{name} requires active session. "
                "Use within session_scope: "
                "with db.session_scope() as session: ..."
            )
        return manager

    @property
    def tags(self) -> TagManager:
        """
        Access TagManager for tag operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._require_manager(self._tag_manager, "TagManager")

    @property
    def programs(self) -> ProgramManager:
        """
        Access ProgramManager for program catalog operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._require_manager(self._program_manager, "ProgramManager")

    @property
    def recordings(self) -> RecordingManager:
        """
        Access RecordingManager for recording catalog operations.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._require_manager(self._recording_manager, "RecordingManager")

    @property
    def plays(self) -> PlayLog:
        """
        Access the PlayLog.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._require_manager(self._play_log, "PlayLog")

    @property
    def now_playing(self) -> NowPlayingQuery:
        """
        Access the NowPlayingQuery bound to the active session.

        Raises:
            DatabaseError: If accessed outside of session_scope context
        """
        return self._require_manager(self._now_playing, "NowPlayingQuery")

    # ---- Consumer entry point ----
    def current_broadcast(self) -> Optional[Broadcast]:
        """
        What is on air right now, in a session of its own.

        Does not touch the session-bound manager properties, so request
        threads sharing one StationDB can call it concurrently. The
        returned objects are detached: scalar fields stay readable,
        relationships not already loaded will not lazy-load.

        Returns:
            Broadcast snapshot, or None when the station is off air

        Raises:
            IntegrityViolationError: If the newest play is dangling
        """
        session = self.SessionLocal()
        try:
            return NowPlayingQuery(session, self.logger).current_broadcast()
        finally:
            session.close()

    # ---- Alembic setup ----
    def _setup_alembic(self) -> Config:
        """Setup Alembic configuration."""
        try:
            safe_logger(self.logger).log_debug("Setting up Alembic configuration...")

            # Installed copies may ship without alembic.ini; the options below suffice
            alembic_cfg: Config = Config(str(ALEMBIC_INI) if ALEMBIC_INI.exists() else None)
            alembic_cfg.set_main_option("script_location", str(self.alembic_dir))
            alembic_cfg.set_main_option(
                "sqlalchemy.url", self.database_url.replace("%", "%%")
            )
            return alembic_cfg
        except Exception as e:
            safe_logger(self.logger).log_error(e, {"operation": "setup_alembic"})
            raise DatabaseError(f"Alembic configuration failed: {e}")

    @handle_db_errors
    @log_database_operation("initialize_schema")
    def initialize_schema(self) -> None:
        """
        Initialize database - create tables if needed and run migrations.

        Actions:
            If the database has no tables,
                creates all tables from the ORM models
                stamps the Alembic revision to head
            If not,
                runs pending migrations to update schema
        """
        try:
            table_names = inspect(self.engine).get_table_names()

            if not table_names:
                Base.metadata.create_all(bind=self.engine)
                try:
                    command.stamp(self.alembic_cfg, "head")
                    safe_logger(self.logger).log_operation(
                        "fresh_database_created",
                        {"tables_created": len(Base.metadata.tables)},
                    )
                except Exception as e:
                    safe_logger(self.logger).log_error(e, {"operation": "stamp_database"})
            else:
                self.upgrade_database()
                safe_logger(self.logger).log_operation(
                    "existing_database_migrated",
                    {"table_count": len(table_names)},
                )

        except Exception as e:
            raise DatabaseError(f"Could not initialize database: {e}")

    @handle_db_errors
    @log_database_operation("upgrade_database")
    def upgrade_database(self, revision: str = "head") -> None:
        """
        Upgrade the database schema to the specified Alembic revision.

        Args:
            revision (str, optional): Target revision. Defaults to 'head'.
        """
        try:
            command.upgrade(self.alembic_cfg, revision)
        except Exception as e:
            raise DatabaseError(f"Database upgrade failed: {e}")

    def get_migration_history(self) -> Dict[str, Optional[str]]:
        """
        Get the current migration status of the database.

        Returns:
            Dictionary with keys:
                - 'current_revision' (str | None): revision stamped in the database
                - 'head_revision' (str | None): newest revision in the scripts
                - 'status' (str): 'up_to_date' when the two match,
                  'needs_migration' otherwise
                - 'error' (str, optional): Present if an exception occurred
        """
        try:
            with self.engine.connect() as conn:
                context = MigrationContext.configure(conn)
                current_rev = context.get_current_revision()

            head_rev = ScriptDirectory.from_config(self.alembic_cfg).get_current_head()

            return {
                "current_revision": current_rev,
                "head_revision": head_rev,
                "status": (
                    "up_to_date"
                    if current_rev is not None and current_rev == head_rev
                    else "needs_migration"
                ),
            }
        except Exception as e:
            safe_logger(self.logger).log_error(e, {"operation": "get_migration_history"})
            return {"error": str(e)}

    # ----  Helper methods ----
    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    def __enter__(self) -> "StationDB":
        """Support for context manager usage."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Release connections on context manager exit."""
        del exc_type, exc_val, exc_tb
        self.dispose()
