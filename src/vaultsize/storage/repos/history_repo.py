"""History repository - pure data access for datapoint rows."""

import sqlite3

from vaultsize.core.types import Datapoint


class HistoryRepo:
    """Repository for datapoint rows."""

    def __init__(self, conn: sqlite3.Connection):
        """
        Initialize history repository.

        Args:
            conn: SQLite connection with row_factory set
        """
        self.conn = conn

    def get_all(self) -> list[Datapoint]:
        """Get all datapoints ordered by day."""
        rows = self.conn.execute(
            "SELECT day, size FROM datapoints ORDER BY day ASC"
        ).fetchall()
        return [Datapoint(day=row["day"], size=row["size"]) for row in rows]

    def replace_all(self, datapoints: list[Datapoint]) -> None:
        """Replace every row with the given datapoints."""
        self.conn.execute("DELETE FROM datapoints")
        self.conn.executemany(
            "INSERT INTO datapoints (day, size) VALUES (?, ?)",
            [(dp.day, dp.size) for dp in datapoints],
        )

    def count(self) -> int:
        """Number of stored datapoints."""
        row = self.conn.execute("SELECT COUNT(*) AS n FROM datapoints").fetchone()
        return row["n"]
