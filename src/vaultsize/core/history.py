"""Day-bucketed size history aggregation.

Pure functions: given the persisted history, a full catalog snapshot and
the current instant, derive the updated history. Every calendar day is a
UTC date, so bucketing does not depend on the host's local timezone.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone
from typing import NamedTuple

from vaultsize.core.types import Datapoint, FileRecord, SizeHistory

logger = logging.getLogger(__name__)

MS_IN_MINUTE = 60 * 1000
MS_IN_DAY = 24 * 60 * MS_IN_MINUTE

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class HistoryUpdate(NamedTuple):
    """Result of one fold over the catalog."""

    history: SizeHistory
    bootstrap: bool
    backlog: int


def day_key(timestamp_ms: int) -> str:
    """UTC calendar date (YYYY-MM-DD) of an epoch-millisecond instant."""
    return (_EPOCH + timedelta(milliseconds=timestamp_ms)).date().isoformat()


def today_key(now: datetime) -> str:
    """UTC calendar date of ``now``; naive datetimes are taken as UTC."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).date().isoformat()


def day_start_ms(day: str) -> int:
    """Epoch milliseconds of midnight UTC at the start of ``day``."""
    return (date.fromisoformat(day) - _EPOCH.date()).days * MS_IN_DAY


def latest_timestamp_ms(history: SizeHistory) -> int:
    """Start of the last recorded day, or -1 when nothing is recorded."""
    last = history.last
    if last is None:
        return -1
    return day_start_ms(last.day)


def unregistered_files(
    files: Iterable[FileRecord], latest_ms: int
) -> list[FileRecord]:
    """
    Files created after the grace window following the last recorded day.

    Files created on the day after the last recorded day are already
    reflected in the running total, so only creations strictly later than
    ``latest_ms + MS_IN_DAY`` are replayed as backlog.

    Returns:
        Backlog files sorted by creation time, oldest first
    """
    threshold = latest_ms + MS_IN_DAY
    backlog = [f for f in files if f.creation_time_ms > threshold]
    backlog.sort(key=lambda f: f.creation_time_ms)
    return backlog


def fold_history(
    history: SizeHistory,
    files: Iterable[FileRecord],
    now: datetime,
) -> HistoryUpdate:
    """
    Fold backlog files into the history and resync today's total.

    The input history is not mutated; a deep copy is updated and returned.

    Args:
        history: Previously persisted history
        files: Full current catalog snapshot, in any order
        now: Current instant

    Returns:
        HistoryUpdate with the new history, whether it is a fresh
        bootstrap (empty history and empty catalog) and the backlog size
    """
    result = history.model_copy(deep=True)
    snapshot = list(files)
    today = today_key(now)

    # Files stamped after today are counted by the resync but never open
    # a bucket ahead of the clock
    tomorrow_ms = day_start_ms(today) + MS_IN_DAY
    backlog = []
    future = 0
    for record in unregistered_files(snapshot, latest_timestamp_ms(result)):
        if record.creation_time_ms < tomorrow_ms:
            backlog.append(record)
        else:
            future += 1
    if future:
        logger.debug("Ignoring %d files created after %s", future, today)

    for record in backlog:
        day = day_key(record.creation_time_ms)
        last = result.last
        if last is None:
            result.datapoints.append(Datapoint(day=day, size=1))
        elif last.day == day:
            last.size += 1
        else:
            result.datapoints.append(Datapoint(day=day, size=last.size + 1))

    current = Datapoint(day=today, size=len(snapshot))
    last = result.last
    if last is None:
        result.datapoints.append(current)
        return HistoryUpdate(result, not snapshot, 0)

    if last.day == current.day:
        last.size = current.size
    elif last.day < current.day:
        result.datapoints.append(current)
    else:
        # Clock moved back past the newest bucket; history is never rewritten
        logger.warning(
            "Current day %s precedes last recorded day %s, skipping resync",
            current.day,
            last.day,
        )

    return HistoryUpdate(result, False, len(backlog))
