"""History store contract."""

from typing import Protocol

from vaultsize.core.types import SizeHistory


class HistoryStore(Protocol):
    """Loads and saves the whole history record (full overwrite)."""

    def load(self) -> SizeHistory:
        pass

    def save(self, history: SizeHistory) -> None:
        pass

    def health_check(self) -> tuple[bool, str]:
        pass
