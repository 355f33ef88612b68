"""Vault size history core - types, aggregation and collaborators."""

from typing import TYPE_CHECKING

from vaultsize.core.errors import (
    CatalogUnavailableError,
    CorruptStateError,
    HistoryError,
    StorageError,
)
from vaultsize.core.history import MS_IN_DAY, MS_IN_MINUTE, fold_history
from vaultsize.core.types import ChartPoint, Datapoint, FileRecord, SizeHistory

if TYPE_CHECKING:
    from vaultsize.core.aggregator import HistoryAggregator
    from vaultsize.core.factory import build_aggregator
    from vaultsize.core.scheduler import HistoryScheduler

__all__ = [
    # Core classes
    "HistoryAggregator",
    "HistoryScheduler",
    "build_aggregator",
    # Pure aggregation
    "MS_IN_DAY",
    "MS_IN_MINUTE",
    "fold_history",
    # Types
    "ChartPoint",
    "Datapoint",
    "FileRecord",
    "SizeHistory",
    # Errors
    "CatalogUnavailableError",
    "CorruptStateError",
    "HistoryError",
    "StorageError",
]


def __getattr__(name: str):
    if name == "HistoryAggregator":
        from vaultsize.core.aggregator import HistoryAggregator

        return HistoryAggregator
    if name == "HistoryScheduler":
        from vaultsize.core.scheduler import HistoryScheduler

        return HistoryScheduler
    if name == "build_aggregator":
        from vaultsize.core.factory import build_aggregator

        return build_aggregator
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
