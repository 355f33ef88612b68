"""Storage layer for the size history - JSON file and SQLite backends."""

from vaultsize.storage.base import HistoryStore
from vaultsize.storage.db import (
    applied_migrations,
    backup_db,
    get_connection,
    init_db,
)
from vaultsize.storage.json_store import JsonHistoryStore
from vaultsize.storage.repos import HistoryRepo
from vaultsize.storage.sqlite_store import SqliteHistoryStore

__all__ = [
    "applied_migrations",
    "backup_db",
    "get_connection",
    "init_db",
    "HistoryRepo",
    "HistoryStore",
    "JsonHistoryStore",
    "SqliteHistoryStore",
]
