"""JSON file persistence for the size history."""

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path

from pydantic import ValidationError

from vaultsize.core.errors import CorruptStateError, StorageError
from vaultsize.core.types import SizeHistory

logger = logging.getLogger(__name__)


class JsonHistoryStore:
    """Stores the history as ``{"datapoints": [{"day": ..., "size": ...}]}``."""

    def __init__(self, path: Path | str):
        """
        Initialize JSON store.

        Args:
            path: Path to the history JSON file
        """
        self.path = Path(path).expanduser()

    def load(self) -> SizeHistory:
        """
        Load the persisted history.

        Returns:
            Persisted history, or an empty one if nothing was saved yet

        Raises:
            CorruptStateError: If the file is not a valid history record
            StorageError: If the file cannot be read
        """
        if not self.path.exists():
            logger.debug("No history file at %s", self.path)
            return SizeHistory()

        try:
            raw_text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Failed to read {self.path}: {exc}") from exc

        try:
            raw = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            self._quarantine()
            raise CorruptStateError(f"Invalid JSON in {self.path}: {exc}") from exc

        if raw is None:
            return SizeHistory()

        if not isinstance(raw, dict):
            self._quarantine()
            raise CorruptStateError(
                f"History must be a mapping, got {type(raw).__name__}"
            )

        try:
            return SizeHistory.model_validate(raw)
        except ValidationError as exc:
            self._quarantine()
            raise CorruptStateError(f"Invalid history in {self.path}: {exc}") from exc

    def save(self, history: SizeHistory) -> None:
        """
        Overwrite the history file atomically.

        Raises:
            StorageError: If the file cannot be written
        """
        payload = history.model_dump(mode="json")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Failed to write {self.path}: {exc}") from exc
        logger.debug(
            "Saved %d datapoints to %s", len(history.datapoints), self.path
        )

    def _quarantine(self) -> None:
        """Keep a copy of a malformed file before it gets overwritten."""
        backup = self.path.with_name(self.path.name + ".corrupt")
        try:
            shutil.copy2(self.path, backup)
            logger.warning("Copied malformed history to %s", backup)
        except OSError:
            logger.error("Failed to back up malformed history", exc_info=True)

    def health_check(self) -> tuple[bool, str]:
        """Check the history file location is writable."""
        directory = self.path.parent
        while not directory.exists() and directory != directory.parent:
            directory = directory.parent
        if not os.access(directory, os.W_OK):
            return False, f"Not writable: {directory}"
        return True, str(self.path)

    def __repr__(self) -> str:
        return f"JsonHistoryStore({self.path})"
