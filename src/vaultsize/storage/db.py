"""SQLite helpers for the history database: schema, connections, backups."""

import logging
import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Generator

from vaultsize.core.config import DATABASE_PATH

logger = logging.getLogger(__name__)

# Numbered *.sql files, applied in name order
MIGRATIONS_DIR = Path(__file__).parent / "migrations"


def _resolve(db_path: Path | str | None) -> Path:
    return Path(db_path) if db_path else DATABASE_PATH


def applied_migrations(conn: sqlite3.Connection) -> list[str]:
    """Names of the migrations recorded in the database, oldest first."""
    conn.execute("""
        CREATE TABLE IF NOT EXISTS _migrations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT UNIQUE NOT NULL,
            applied_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    """)
    rows = conn.execute("SELECT name FROM _migrations ORDER BY id").fetchall()
    return [row[0] for row in rows]


def _run_migrations(conn: sqlite3.Connection) -> list[str]:
    """Apply pending migrations; returns the names applied in this call."""
    done = set(applied_migrations(conn))
    pending = [
        script
        for script in sorted(MIGRATIONS_DIR.glob("*.sql"))
        if script.name not in done
    ]

    for script in pending:
        logger.info("Applying migration: %s", script.name)
        conn.executescript(script.read_text())
        conn.execute("INSERT INTO _migrations (name) VALUES (?)", (script.name,))
        conn.commit()

    return [script.name for script in pending]


def init_db(db_path: Path | str | None = None) -> list[str]:
    """
    Create the database file and bring its schema up to date.

    Args:
        db_path: Path to SQLite database (defaults to DATABASE_PATH)

    Returns:
        Migrations applied by this call (empty when already current)
    """
    path = _resolve(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with closing(sqlite3.connect(path)) as conn:
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA synchronous=NORMAL")
        applied = _run_migrations(conn)

    if applied:
        logger.info("History database %s migrated: %s", path, ", ".join(applied))
    return applied


@contextmanager
def get_connection(
    db_path: Path | str | None = None,
) -> Generator[sqlite3.Connection, None, None]:
    """
    Open a connection whose rows are addressable by column name.

    The block runs as one transaction: committed when it exits normally,
    rolled back when it raises.

    Args:
        db_path: Path to SQLite database (defaults to DATABASE_PATH)
    """
    conn = sqlite3.connect(_resolve(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def backup_db(db_path: Path | str | None, destination: Path | str) -> Path:
    """
    Copy a live database, including pages still in its WAL file.

    Returns:
        The backup path
    """
    destination = Path(destination)
    with closing(sqlite3.connect(_resolve(db_path))) as source:
        with closing(sqlite3.connect(destination)) as target:
            source.backup(target)
    return destination
