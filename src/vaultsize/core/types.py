"""Shared types and data structures for vault size history."""

from __future__ import annotations

import re
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_DAY_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

__all__ = [
    "ChartPoint",
    "Datapoint",
    "FileRecord",
    "SizeHistory",
]


class Datapoint(BaseModel):
    """The vault's file count as of the end of one calendar day."""

    model_config = ConfigDict(extra="ignore")

    day: str
    size: int = Field(ge=0)

    @field_validator("day")
    @classmethod
    def _validate_day(cls, value: str) -> str:
        if not isinstance(value, str) or not _DAY_PATTERN.fullmatch(value):
            raise ValueError(f"day must be YYYY-MM-DD, got {value!r}")
        try:
            date.fromisoformat(value)
        except ValueError as exc:
            raise ValueError(f"day must be YYYY-MM-DD, got {value!r}") from exc
        return value

    @field_validator("size", mode="before")
    @classmethod
    def _reject_bool_size(cls, value: object) -> object:
        if isinstance(value, bool):
            raise ValueError("size must be int, got bool")
        return value


class SizeHistory(BaseModel):
    """Ordered day-bucketed history, one datapoint per distinct day.

    Unknown top-level fields are ignored so a persisted record written by
    another version still loads.
    """

    model_config = ConfigDict(extra="ignore")

    datapoints: list[Datapoint] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validate_order(self) -> "SizeHistory":
        for previous, current in zip(self.datapoints, self.datapoints[1:]):
            if current.day <= previous.day:
                raise ValueError(
                    f"datapoints must be strictly ascending by day: "
                    f"{previous.day} then {current.day}"
                )
        return self

    @property
    def last(self) -> Datapoint | None:
        """Most recent datapoint, or None for an empty history."""
        return self.datapoints[-1] if self.datapoints else None

    @property
    def is_empty(self) -> bool:
        return not self.datapoints


class FileRecord(BaseModel, frozen=True):
    """One catalog entry with its creation instant in epoch milliseconds."""

    creation_time_ms: int
    path: str = ""


class ChartPoint(BaseModel, frozen=True):
    """Renderer-facing (day, size) pair."""

    x: str
    y: int
