"""History aggregator - the read-modify-write cycle around the pure fold."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from threading import Lock

from vaultsize.core.catalog import FileCatalog
from vaultsize.core.config import PERSIST_BOOTSTRAP
from vaultsize.core.errors import CorruptStateError, StorageError
from vaultsize.core.history import fold_history
from vaultsize.core.types import SizeHistory
from vaultsize.storage.base import HistoryStore

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Current wall-clock instant in UTC."""
    return datetime.now(timezone.utc)


class HistoryAggregator:
    """Loads the history, folds in the catalog snapshot and persists it.

    Cycles are serialized by an in-process lock, so a manual trigger and a
    timer tick never read the same snapshot and overwrite each other.
    """

    def __init__(
        self,
        store: HistoryStore,
        catalog: FileCatalog,
        clock: Callable[[], datetime] | None = None,
        persist_bootstrap: bool | None = None,
    ):
        """
        Initialize aggregator.

        Args:
            store: History persistence backend
            catalog: Source of the current file snapshot
            clock: Returns the current instant (defaults to UTC wall clock)
            persist_bootstrap: Save the very first datapoint of an empty
                vault (defaults to VAULTSIZE_PERSIST_BOOTSTRAP)
        """
        self.store = store
        self.catalog = catalog
        self.clock = clock or utc_now
        self.persist_bootstrap = (
            PERSIST_BOOTSTRAP if persist_bootstrap is None else persist_bootstrap
        )
        self._lock = Lock()
        self._cached: SizeHistory | None = None

    def _load(self) -> SizeHistory:
        try:
            return self.store.load()
        except CorruptStateError:
            logger.warning(
                "Persisted history is malformed, starting from empty history",
                exc_info=True,
            )
            return SizeHistory()
        except StorageError:
            if self._cached is None:
                raise
            logger.warning(
                "Failed to load history, using in-memory copy", exc_info=True
            )
            return self._cached.model_copy(deep=True)

    def update(self) -> SizeHistory:
        """
        Run one aggregation cycle.

        Returns:
            The updated history

        Raises:
            CatalogUnavailableError: If the file catalog cannot be listed;
                nothing is persisted in that case
            StorageError: If the history cannot be loaded (and no earlier
                cycle's result is held in memory) or cannot be saved
        """
        with self._lock:
            history = self._load()
            files = self.catalog.list_files()
            result = fold_history(history, files, self.clock())
            updated = result.history
            last = updated.last

            if result.bootstrap and not self.persist_bootstrap:
                logger.info("Bootstrapped empty history at %s", last.day)
                self._cached = updated
                return updated.model_copy(deep=True)

            try:
                self.store.save(updated)
            except StorageError:
                self._cached = updated
                logger.error("Failed to save history", exc_info=True)
                raise

            self._cached = updated
            logger.info(
                "History updated: %s size=%d (%d backlog files, %d datapoints)",
                last.day,
                last.size,
                result.backlog,
                len(updated.datapoints),
            )
            return updated.model_copy(deep=True)

    def get_history(self) -> SizeHistory:
        """Current persisted history, without running a cycle."""
        with self._lock:
            return self._load()

    def health_check(self) -> dict[str, tuple[bool, str]]:
        """
        Check health of the collaborators.

        Returns:
            Dict mapping component name to (healthy, message)
        """
        return {
            "store": self.store.health_check(),
            "catalog": self.catalog.health_check(),
        }


# Default instance
_aggregator: HistoryAggregator | None = None
_aggregator_lock = Lock()


def get_aggregator() -> HistoryAggregator:
    """Get or create the default aggregator instance."""
    global _aggregator
    if _aggregator is None:
        with _aggregator_lock:
            if _aggregator is None:
                from vaultsize.core.factory import build_aggregator

                _aggregator = build_aggregator()
    return _aggregator


def set_aggregator(aggregator: HistoryAggregator | None) -> None:
    """Set the default aggregator instance (for testing)."""
    global _aggregator
    _aggregator = aggregator
