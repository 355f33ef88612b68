"""Factory for building the HistoryAggregator with all dependencies wired.

The CLI and the API server both call build_aggregator() so they read and
write the same history with the same configuration.
"""

from pathlib import Path

from vaultsize.core.aggregator import HistoryAggregator
from vaultsize.core.catalog import VaultCatalog
from vaultsize.core.config import (
    DATABASE_PATH,
    HISTORY_BACKEND,
    HISTORY_FILE,
    PERSIST_BOOTSTRAP,
    VAULT_DIR,
)
from vaultsize.storage.base import HistoryStore
from vaultsize.storage.json_store import JsonHistoryStore
from vaultsize.storage.sqlite_store import SqliteHistoryStore


def build_store(
    backend: str | None = None,
    history_file: Path | str | None = None,
    db_path: Path | str | None = None,
) -> HistoryStore:
    """
    Build the configured history store.

    Args:
        backend: "json" or "sqlite" (defaults to config)
        history_file: JSON file path (defaults to config)
        db_path: SQLite database path (defaults to config)

    Raises:
        ValueError: If the backend name is unknown
    """
    actual_backend = (backend or HISTORY_BACKEND).lower()
    if actual_backend == "json":
        return JsonHistoryStore(history_file or HISTORY_FILE)
    if actual_backend == "sqlite":
        return SqliteHistoryStore(db_path or DATABASE_PATH)
    raise ValueError(f"Unknown history backend: {actual_backend}")


def build_aggregator(
    vault_dir: Path | str | None = None,
    backend: str | None = None,
    history_file: Path | str | None = None,
    db_path: Path | str | None = None,
    persist_bootstrap: bool | None = None,
) -> HistoryAggregator:
    """
    Build a fully configured HistoryAggregator.

    Args:
        vault_dir: Vault to count (defaults to config)
        backend: History backend name (defaults to config)
        history_file: JSON history path (defaults to config)
        db_path: SQLite path (defaults to config)
        persist_bootstrap: Save the first datapoint of an empty vault

    Returns:
        Fully configured HistoryAggregator instance
    """
    catalog = VaultCatalog(Path(vault_dir) if vault_dir else VAULT_DIR)
    store = build_store(backend, history_file, db_path)
    return HistoryAggregator(
        store=store,
        catalog=catalog,
        persist_bootstrap=(
            PERSIST_BOOTSTRAP if persist_bootstrap is None else persist_bootstrap
        ),
    )
