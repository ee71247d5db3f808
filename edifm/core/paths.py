#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration for the EDIFM station project.

The project structure:
    ROOT/
    ├── edifm/         # Package code and migrations
    ├── data/          # Default SQLite database
    └── logs/          # Application logs

Environment overrides:
    DATABASE_URL   SQLAlchemy URL of the station database
                   (defaults to the SQLite file under data/)
    EDIFM_LOG_DIR  Directory for log files
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


def _get_project_root() -> Path:
    """
    Determine project root directory.

    Assumes this file is at ROOT/edifm/core/paths.py.

    Returns:
        Path object for project root

    Raises:
        RuntimeError: If project root cannot be validated
    """
    current_file = Path(__file__).resolve()

    # Navigate up: paths.py -> core/ -> edifm/ -> ROOT/
    root = current_file.parent.parent.parent

    if not (root / "edifm").is_dir():
        raise RuntimeError(
            f"Cannot determine valid project root. "
            f"Expected {root / 'edifm'} to exist. "
            f"Current file: {current_file}"
        )

    return root


# ----- Project directory -----
ROOT: Path = _get_project_root()
PACKAGE_DIR = ROOT / "edifm"
DATA_DIR = ROOT / "data"

# --- Database ---
ALEMBIC_INI = ROOT / "alembic.ini"
ALEMBIC_DIR = PACKAGE_DIR / "migrations"
DB_PATH = DATA_DIR / "edifm.db"
DATABASE_URL: str = os.environ.get("DATABASE_URL", f"sqlite:///{DB_PATH}")

# ---- Logs ----
LOG_DIR = Path(os.environ.get("EDIFM_LOG_DIR", str(ROOT / "logs")))
