"""Error types raised around an aggregation cycle."""


class HistoryError(RuntimeError):
    """Base error for size history failures."""


class StorageError(HistoryError):
    """Raised when the history store cannot be read or written."""


class CorruptStateError(HistoryError):
    """Raised when the persisted history record is malformed."""


class CatalogUnavailableError(HistoryError):
    """Raised when the file catalog cannot be listed."""
