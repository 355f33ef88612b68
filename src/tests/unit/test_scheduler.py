"""Tests for vaultsize.core.scheduler module."""

import asyncio
from unittest.mock import MagicMock

import pytest

from vaultsize.core.errors import CatalogUnavailableError, StorageError
from vaultsize.core.scheduler import HistoryScheduler
from vaultsize.core.types import SizeHistory


@pytest.fixture
def history(make_history):
    return make_history(("2024-01-05", 3))


@pytest.fixture
def mock_aggregator(history):
    """Aggregator whose update() returns a fixed history."""
    aggregator = MagicMock()
    aggregator.update = MagicMock(return_value=history)
    return aggregator


class TestHistoryScheduler:
    """Tests for HistoryScheduler."""

    def test_default_interval_is_one_minute(self, mock_aggregator):
        """Default interval comes from config (60s)."""
        assert HistoryScheduler(mock_aggregator).interval_seconds == 60

    @pytest.mark.parametrize("interval", [0, -1, -0.5])
    def test_rejects_non_positive_interval(self, mock_aggregator, interval):
        """A zero or negative interval would spin; it is refused."""
        with pytest.raises(ValueError, match="must be positive"):
            HistoryScheduler(mock_aggregator, interval_seconds=interval)

        mock_aggregator.update.assert_not_called()

    def test_rejects_non_positive_configured_interval(
        self, mock_aggregator, monkeypatch
    ):
        """The configured default is checked too."""
        monkeypatch.setattr(
            "vaultsize.core.scheduler.UPDATE_INTERVAL_SECONDS", 0
        )

        with pytest.raises(ValueError):
            HistoryScheduler(mock_aggregator)

    @pytest.mark.asyncio
    async def test_run_once_returns_history(self, mock_aggregator, history):
        """A successful cycle returns the history and notifies."""
        seen: list[SizeHistory] = []
        scheduler = HistoryScheduler(mock_aggregator, on_update=seen.append)

        result = await scheduler.run_once()

        assert result == history
        assert seen == [history]
        assert scheduler.cycles == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error", [StorageError("disk"), CatalogUnavailableError("gone")]
    )
    async def test_run_once_skips_failed_cycle(self, mock_aggregator, error):
        """History errors are logged and the cycle is skipped."""
        mock_aggregator.update.side_effect = error
        on_update = MagicMock()
        scheduler = HistoryScheduler(mock_aggregator, on_update=on_update)

        result = await scheduler.run_once()

        assert result is None
        assert scheduler.failures == 1
        on_update.assert_not_called()

    @pytest.mark.asyncio
    async def test_trigger_runs_a_cycle(self, mock_aggregator, history):
        """Manual trigger uses the same update path."""
        scheduler = HistoryScheduler(mock_aggregator)

        assert await scheduler.trigger() == history
        mock_aggregator.update.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_run_starts_with_immediate_cycle(self, mock_aggregator):
        """run() updates right away, then per interval."""
        scheduler = HistoryScheduler(mock_aggregator, interval_seconds=0.01)

        await scheduler.run(max_cycles=3)

        assert mock_aggregator.update.call_count == 3

    @pytest.mark.asyncio
    async def test_run_survives_failures(self, mock_aggregator, history):
        """A failing cycle does not stop the recurring trigger."""
        mock_aggregator.update.side_effect = [
            StorageError("disk"),
            RuntimeError("boom"),
            history,
        ]
        scheduler = HistoryScheduler(mock_aggregator, interval_seconds=0.01)

        await scheduler.run(max_cycles=3)

        assert mock_aggregator.update.call_count == 3
        assert scheduler.cycles == 1

    @pytest.mark.asyncio
    async def test_stop_ends_background_loop(self, mock_aggregator):
        """stop() ends the loop without waiting a full interval."""
        scheduler = HistoryScheduler(mock_aggregator, interval_seconds=3600)

        task = scheduler.start()
        await asyncio.sleep(0.05)
        await asyncio.wait_for(scheduler.shutdown(), timeout=1)

        assert task.done()
        assert mock_aggregator.update.call_count == 1
