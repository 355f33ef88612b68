"""Shared test fixtures and configuration."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from vaultsize.core.types import FileRecord, SizeHistory


def _parse_utc(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class FakeCatalog:
    """In-memory catalog returning a fixed snapshot."""

    def __init__(self, files: list[FileRecord] | None = None, name: str = "Notes"):
        self.files = list(files or [])
        self.name = name
        self.error: Exception | None = None
        self.calls = 0

    def list_files(self) -> list[FileRecord]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.files)

    def health_check(self) -> tuple[bool, str]:
        return True, "fake catalog"


class MemoryStore:
    """In-memory history store that records every save."""

    def __init__(self, history: SizeHistory | None = None):
        self.history = history
        self.saves: list[SizeHistory] = []
        self.load_error: Exception | None = None
        self.save_error: Exception | None = None

    def load(self) -> SizeHistory:
        if self.load_error is not None:
            raise self.load_error
        if self.history is None:
            return SizeHistory()
        return self.history.model_copy(deep=True)

    def save(self, history: SizeHistory) -> None:
        if self.save_error is not None:
            raise self.save_error
        self.history = history.model_copy(deep=True)
        self.saves.append(self.history)

    def health_check(self) -> tuple[bool, str]:
        return True, "memory"


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo logging configuration done by entry points under test."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers


@pytest.fixture
def to_ms():
    """Convert an ISO timestamp (UTC if naive) to epoch milliseconds."""

    def _to_ms(value: str) -> int:
        return int(_parse_utc(value).timestamp() * 1000)

    return _to_ms


@pytest.fixture
def make_files(to_ms):
    """Factory for FileRecord lists from ISO creation timestamps."""

    def _make_files(*timestamps: str) -> list[FileRecord]:
        return [
            FileRecord(creation_time_ms=to_ms(ts), path=f"note-{i}.md")
            for i, ts in enumerate(timestamps)
        ]

    return _make_files


@pytest.fixture
def make_history():
    """Factory for SizeHistory from (day, size) pairs."""

    def _make_history(*points: tuple[str, int]) -> SizeHistory:
        return SizeHistory.model_validate(
            {"datapoints": [{"day": day, "size": size} for day, size in points]}
        )

    return _make_history


@pytest.fixture
def make_clock():
    """Factory for a controllable clock returning a fixed UTC instant."""

    class Clock:
        def __init__(self, value: str):
            self.now = _parse_utc(value)

        def __call__(self) -> datetime:
            return self.now

        def set(self, value: str) -> None:
            self.now = _parse_utc(value)

    return Clock


@pytest.fixture
def fake_catalog():
    """Empty in-memory catalog."""
    return FakeCatalog()


@pytest.fixture
def memory_store():
    """Empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def vault_dir(tmp_path):
    """A vault directory with a couple of notes and a hidden config folder."""
    root = tmp_path / "MyVault"
    (root / "daily").mkdir(parents=True)
    (root / ".obsidian").mkdir()
    (root / "index.md").write_text("# Index")
    (root / "daily" / "2024-01-01.md").write_text("today")
    (root / ".obsidian" / "app.json").write_text("{}")
    return root
