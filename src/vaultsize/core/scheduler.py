"""Recurring trigger for aggregation cycles.

Runs a cycle when started, then once per interval, plus on demand via
trigger(). All paths call the same HistoryAggregator.update().
"""

import asyncio
import logging
from collections.abc import Callable

from vaultsize.core.aggregator import HistoryAggregator
from vaultsize.core.config import UPDATE_INTERVAL_SECONDS
from vaultsize.core.errors import HistoryError
from vaultsize.core.types import SizeHistory

logger = logging.getLogger(__name__)

OnUpdate = Callable[[SizeHistory], None]


class HistoryScheduler:
    """Drives a HistoryAggregator from an asyncio loop."""

    def __init__(
        self,
        aggregator: HistoryAggregator,
        interval_seconds: float | None = None,
        on_update: OnUpdate | None = None,
    ):
        """
        Initialize scheduler.

        Args:
            aggregator: Aggregator to drive
            interval_seconds: Delay between cycles (defaults to config)
            on_update: Called with each successfully updated history

        Raises:
            ValueError: If the interval is not positive
        """
        if interval_seconds is None:
            interval_seconds = UPDATE_INTERVAL_SECONDS
        if interval_seconds <= 0:
            raise ValueError(
                f"Update interval must be positive, got: {interval_seconds}"
            )
        self.aggregator = aggregator
        self.interval_seconds = interval_seconds
        self.on_update = on_update
        self.cycles = 0
        self.failures = 0
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    async def run_once(self) -> SizeHistory | None:
        """
        Run one cycle in a worker thread.

        Returns:
            The updated history, or None if the cycle was skipped
        """
        try:
            history = await asyncio.to_thread(self.aggregator.update)
        except HistoryError as exc:
            self.failures += 1
            logger.error("Aggregation cycle skipped: %s", exc)
            return None

        self.cycles += 1
        if self.on_update is not None:
            self.on_update(history)
        return history

    async def trigger(self) -> SizeHistory | None:
        """Run a cycle now (manual user action)."""
        logger.debug("Manual aggregation triggered")
        return await self.run_once()

    async def run(self, max_cycles: int | None = None) -> None:
        """
        Run a cycle immediately, then one per interval until stopped.

        Args:
            max_cycles: Stop after this many cycles (None runs forever)
        """
        runs = 0
        logger.info("Scheduler started (interval %ss)", self.interval_seconds)
        while not self._stop_event.is_set():
            try:
                await self.run_once()
            except Exception:
                logger.exception("Unexpected error in aggregation cycle")
            runs += 1
            if max_cycles is not None and runs >= max_cycles:
                break
            try:
                await asyncio.wait_for(
                    self._stop_event.wait(), timeout=self.interval_seconds
                )
            except asyncio.TimeoutError:
                pass
        logger.info("Scheduler stopped after %d cycles", runs)

    def start(self) -> asyncio.Task:
        """Start run() as a background task on the running loop."""
        if self._task is None or self._task.done():
            self._stop_event.clear()
            self._task = asyncio.create_task(self.run())
        return self._task

    def stop(self) -> None:
        """Ask the loop to exit after the current cycle."""
        self._stop_event.set()

    async def shutdown(self) -> None:
        """Stop and wait for the background task, if any."""
        self.stop()
        if self._task is not None:
            await self._task
            self._task = None
