"""SQLite persistence for the size history."""

import logging
import sqlite3
from pathlib import Path

from pydantic import ValidationError

from vaultsize.core.config import DATABASE_PATH
from vaultsize.core.errors import CorruptStateError, StorageError
from vaultsize.core.types import SizeHistory
from vaultsize.storage.db import (
    applied_migrations,
    backup_db,
    get_connection,
    init_db,
)
from vaultsize.storage.repos import HistoryRepo

logger = logging.getLogger(__name__)


class SqliteHistoryStore:
    """Stores one row per datapoint in a ``datapoints`` table."""

    def __init__(self, db_path: Path | str | None = None):
        """
        Initialize SQLite store, creating the schema if needed.

        Args:
            db_path: Path to SQLite database (defaults to DATABASE_PATH)

        Raises:
            StorageError: If the database cannot be initialized
        """
        self.db_path = Path(db_path) if db_path else DATABASE_PATH
        try:
            init_db(self.db_path)
        except (sqlite3.Error, OSError) as exc:
            raise StorageError(
                f"Failed to initialize database {self.db_path}: {exc}"
            ) from exc

    def load(self) -> SizeHistory:
        """
        Load all datapoints.

        Raises:
            CorruptStateError: If stored rows do not form a valid history
            StorageError: If the database cannot be read
        """
        try:
            with get_connection(self.db_path) as conn:
                datapoints = HistoryRepo(conn).get_all()
            return SizeHistory(datapoints=datapoints)
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to read {self.db_path}: {exc}") from exc
        except ValidationError as exc:
            self._quarantine()
            raise CorruptStateError(
                f"Invalid history in {self.db_path}: {exc}"
            ) from exc

    def save(self, history: SizeHistory) -> None:
        """
        Replace the stored history in one transaction.

        Raises:
            StorageError: If the write fails
        """
        try:
            with get_connection(self.db_path) as conn:
                HistoryRepo(conn).replace_all(history.datapoints)
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to write {self.db_path}: {exc}") from exc
        logger.debug(
            "Saved %d datapoints to %s", len(history.datapoints), self.db_path
        )

    def _quarantine(self) -> None:
        """Keep a copy of malformed rows before the next save replaces them."""
        backup = self.db_path.with_name(self.db_path.name + ".corrupt")
        try:
            backup.unlink(missing_ok=True)
            backup_db(self.db_path, backup)
            logger.warning("Copied malformed history database to %s", backup)
        except (sqlite3.Error, OSError):
            logger.error("Failed to back up malformed history", exc_info=True)

    def health_check(self) -> tuple[bool, str]:
        """Check the database answers queries."""
        try:
            with get_connection(self.db_path) as conn:
                count = HistoryRepo(conn).count()
                migrations = applied_migrations(conn)
        except sqlite3.Error as exc:
            return False, f"Database error: {exc}"
        schema = Path(migrations[-1]).stem if migrations else "none"
        return True, f"{self.db_path} ({count} datapoints, schema {schema})"

    def __repr__(self) -> str:
        return f"SqliteHistoryStore({self.db_path})"
