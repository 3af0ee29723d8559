"""Typed records for the Oura v2 usercollection responses.

Only the fields the digest reads are modelled; the API sends many more and
they are ignored. Records are frozen once decoded.

The API sends ``null`` (or omits the key) for scores and durations the ring
could not measure. Those read as 0 and ``false``, and a ``null`` page reads as
empty, so a sparse day still produces a report or the fallback message.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _null_as_zero(v: Any) -> Any:
    return 0 if v is None else v


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class ActivityRecord(_Record):
    """One day of activity from ``daily_activity``."""

    active_score: int = Field(
        default=0, alias="score", ge=0, le=100, description="Activity score"
    )
    total_calories: int = Field(default=0, ge=0, description="Total burned calories (kcal)")
    non_wear_seconds: int = Field(
        default=0, alias="non_wear_time", ge=0, description="Time the ring was not worn"
    )

    @field_validator("active_score", "total_calories", "non_wear_seconds", mode="before")
    @classmethod
    def null_as_zero(cls, v: Any) -> Any:
        return _null_as_zero(v)


class SleepRecord(_Record):
    """One sleep session from ``sleep``. A day may hold several sessions."""

    bedtime_start: datetime
    bedtime_end: datetime
    deep_sleep_seconds: int = Field(default=0, alias="deep_sleep_duration", ge=0)
    light_sleep_seconds: int = Field(default=0, alias="light_sleep_duration", ge=0)
    rem_sleep_seconds: int = Field(default=0, alias="rem_sleep_duration", ge=0)
    total_sleep_seconds: int = Field(default=0, alias="total_sleep_duration", ge=0)
    efficiency_percent: int = Field(default=0, alias="efficiency", ge=0, le=100)
    low_battery_alert: bool = False

    @field_validator(
        "deep_sleep_seconds",
        "light_sleep_seconds",
        "rem_sleep_seconds",
        "total_sleep_seconds",
        "efficiency_percent",
        mode="before",
    )
    @classmethod
    def null_as_zero(cls, v: Any) -> Any:
        return _null_as_zero(v)

    @field_validator("low_battery_alert", mode="before")
    @classmethod
    def null_as_false(cls, v: Any) -> Any:
        return False if v is None else v


class SleepContributors(_Record):
    """Contributor scores that make up the daily sleep score."""

    deep_sleep: int = Field(default=0, ge=0, le=100)
    rem_sleep: int = Field(default=0, ge=0, le=100)
    restfulness: int = Field(default=0, ge=0, le=100)
    total_sleep: int = Field(default=0, ge=0, le=100)

    @field_validator("deep_sleep", "rem_sleep", "restfulness", "total_sleep", mode="before")
    @classmethod
    def null_as_zero(cls, v: Any) -> Any:
        return _null_as_zero(v)


class SleepScoreRecord(_Record):
    """One day of sleep score from ``daily_sleep``."""

    score: int = Field(default=0, ge=0, le=100)
    contributors: SleepContributors = Field(default_factory=SleepContributors)

    @field_validator("score", mode="before")
    @classmethod
    def null_as_zero(cls, v: Any) -> Any:
        return _null_as_zero(v)

    @field_validator("contributors", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return {} if v is None else v


T = TypeVar("T", bound=_Record)


class PaginatedResponse(BaseModel, Generic[T]):
    """A single page of a usercollection response.

    ``continuation_token`` is carried for visibility only; further pages are
    never requested.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    items: tuple[T, ...] = Field(alias="data")
    continuation_token: str | None = Field(default=None, alias="next_token")

    @field_validator("items", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return () if v is None else v
