"""Tests for vaultsize.core.types module."""

import pytest
from pydantic import ValidationError

from vaultsize.core.types import Datapoint, SizeHistory


class TestDatapoint:
    """Tests for Datapoint validation."""

    def test_valid(self):
        """A well-formed datapoint validates."""
        dp = Datapoint(day="2024-02-29", size=0)

        assert dp.day == "2024-02-29"
        assert dp.size == 0

    @pytest.mark.parametrize(
        "day", ["2024-1-01", "2023-02-29", "2024-W01-1", "20240101", "2024-01-01\n"]
    )
    def test_rejects_bad_days(self, day):
        """Only real YYYY-MM-DD dates are accepted."""
        with pytest.raises(ValidationError):
            Datapoint(day=day, size=1)

    @pytest.mark.parametrize("size", [-1, True, "many"])
    def test_rejects_bad_sizes(self, size):
        """Sizes are non-negative integers."""
        with pytest.raises(ValidationError):
            Datapoint(day="2024-01-01", size=size)


class TestSizeHistory:
    """Tests for SizeHistory."""

    def test_defaults_to_empty(self):
        """A new history is empty."""
        history = SizeHistory()

        assert history.datapoints == []
        assert history.is_empty
        assert history.last is None

    def test_last(self, make_history):
        """last is the most recent datapoint."""
        history = make_history(("2024-01-01", 1), ("2024-01-02", 2))

        assert history.last == Datapoint(day="2024-01-02", size=2)
        assert not history.is_empty

    def test_rejects_duplicate_days(self):
        """Two datapoints for one day are rejected."""
        with pytest.raises(ValidationError, match="strictly ascending"):
            SizeHistory.model_validate(
                {
                    "datapoints": [
                        {"day": "2024-01-01", "size": 1},
                        {"day": "2024-01-01", "size": 2},
                    ]
                }
            )

    def test_ignores_unknown_fields(self):
        """Extra top-level fields are dropped."""
        history = SizeHistory.model_validate({"datapoints": [], "legacy": 1})

        assert history.model_dump() == {"datapoints": []}
