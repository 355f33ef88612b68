"""File catalog - lists every file in a vault with its creation time."""

import logging
import os
from pathlib import Path
from typing import Protocol

from vaultsize.core.errors import CatalogUnavailableError
from vaultsize.core.types import FileRecord

logger = logging.getLogger(__name__)


class FileCatalog(Protocol):
    """Full, current snapshot of the files being counted."""

    def list_files(self) -> list[FileRecord]:
        pass

    def health_check(self) -> tuple[bool, str]:
        pass


def creation_time_ms(stat_result: os.stat_result) -> int:
    """
    Best available creation instant for a file, in epoch milliseconds.

    Uses the birth time where the platform records one. Otherwise the
    earlier of change and modification time is the closest stand-in.
    """
    birthtime = getattr(stat_result, "st_birthtime", None)
    if birthtime is None:
        birthtime = min(stat_result.st_ctime, stat_result.st_mtime)
    return int(birthtime * 1000)


class VaultCatalog:
    """Lists regular files under a vault root.

    Hidden entries (``.obsidian``, ``.trash``, ``.git`` ...) are excluded,
    the same way the note-taking app itself does not count them.
    """

    def __init__(self, root: Path | str):
        """
        Initialize catalog for a vault.

        Args:
            root: Vault root directory
        """
        self.root = Path(root).expanduser()

    @property
    def name(self) -> str:
        """Display name of the vault (its directory name)."""
        return self.root.resolve().name or str(self.root)

    def list_files(self) -> list[FileRecord]:
        """
        Walk the vault and return one record per file.

        Raises:
            CatalogUnavailableError: If the root is missing or unreadable
        """
        if not self.root.exists():
            raise CatalogUnavailableError(f"Vault not found: {self.root}")
        if not self.root.is_dir():
            raise CatalogUnavailableError(f"Vault is not a directory: {self.root}")

        def _raise(exc: OSError) -> None:
            raise exc

        records: list[FileRecord] = []
        try:
            for dirpath, dirnames, filenames in os.walk(self.root, onerror=_raise):
                dirnames[:] = [d for d in dirnames if not d.startswith(".")]
                for filename in filenames:
                    if filename.startswith("."):
                        continue
                    path = Path(dirpath) / filename
                    try:
                        stat_result = path.stat()
                    except FileNotFoundError:
                        # Deleted between listing and stat
                        continue
                    if not path.is_file():
                        continue
                    records.append(
                        FileRecord(
                            creation_time_ms=creation_time_ms(stat_result),
                            path=path.relative_to(self.root).as_posix(),
                        )
                    )
        except OSError as exc:
            raise CatalogUnavailableError(
                f"Failed to list vault {self.root}: {exc}"
            ) from exc

        logger.debug("Listed %d files in %s", len(records), self.root)
        return records

    def health_check(self) -> tuple[bool, str]:
        """Check the vault root is readable."""
        if not self.root.is_dir():
            return False, f"Vault not found: {self.root}"
        if not os.access(self.root, os.R_OK | os.X_OK):
            return False, f"Vault not readable: {self.root}"
        return True, str(self.root)

    def __repr__(self) -> str:
        return f"VaultCatalog({self.root})"
