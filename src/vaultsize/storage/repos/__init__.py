"""Repository classes for data access."""

from vaultsize.storage.repos.history_repo import HistoryRepo

__all__ = [
    "HistoryRepo",
]
