"""
Shared pytest fixtures for station tests.

Provides common fixtures for database setup, temporary directories,
and catalog rows used across the test suite.
"""
import tempfile
from pathlib import Path

import pytest
from sqlalchemy import create_engine

from edifm.core.logging_manager import StationLogger
from edifm.database.manager import StationDB
from edifm.database.managers import (
    PlayLog,
    ProgramManager,
    RecordingManager,
    TagManager,
)
from edifm.database.models import Base
from edifm.database.now_playing import NowPlayingQuery


@pytest.fixture
def tmp_dir():
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(tmp_dir):
    """Path of the test database file."""
    return tmp_dir / "test.db"


@pytest.fixture
def test_db_url(test_db_path):
    """SQLAlchemy URL of the test database."""
    return f"sqlite:///{test_db_path}"


@pytest.fixture
def test_db(test_db_url):
    """Create test database with all tables."""
    engine = create_engine(test_db_url)
    Base.metadata.create_all(engine)
    engine.dispose()

    db = StationDB(database_url=test_db_url)
    yield db
    db.dispose()


@pytest.fixture
def db_session(test_db):
    """Create database session for testing."""
    with test_db.session_scope() as session:
        yield session
        session.rollback()


@pytest.fixture
def test_logger(tmp_dir):
    """StationLogger writing into the temporary directory."""
    return StationLogger(tmp_dir / "logs", component_name="test")


@pytest.fixture
def tag_manager(db_session):
    """Create TagManager instance."""
    return TagManager(db_session, logger=None)


@pytest.fixture
def program_manager(db_session):
    """Create ProgramManager instance."""
    return ProgramManager(db_session, logger=None)


@pytest.fixture
def recording_manager(db_session):
    """Create RecordingManager instance."""
    return RecordingManager(db_session, logger=None)


@pytest.fixture
def play_log(db_session):
    """Create PlayLog instance."""
    return PlayLog(db_session, logger=None)


@pytest.fixture
def now_playing(db_session):
    """Create NowPlayingQuery instance."""
    return NowPlayingQuery(db_session, logger=None)


@pytest.fixture
def programs(program_manager, db_session):
    """Two programs, P1 (morning) and P2 (evening)."""
    p1 = program_manager.create({
        "name": "Morning Drive",
        "starts_at": "06:00",
        "ends_at": "09:00",
    })
    p2 = program_manager.create({
        "name": "Night Shift",
        "starts_at": "22:00",
        "ends_at": "02:00",
    })
    db_session.commit()
    return p1, p2


@pytest.fixture
def recordings(recording_manager, db_session):
    """Two recordings, R1 and R2."""
    r1 = recording_manager.create({
        "filename": "so_what.mp3",
        "title": "So What",
        "artist": "Miles Davis",
    })
    r2 = recording_manager.create({
        "filename": "windowlicker.mp3",
        "title": "Windowlicker",
        "artist": "Aphex Twin",
        "link": "https://example.org/windowlicker",
    })
    db_session.commit()
    return r1, r2
