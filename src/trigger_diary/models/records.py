"""Daily health log records."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, field_validator


def parse_record_date(value) -> dt.date:
    """Parse an RFC3339 timestamp or a plain YYYY-MM-DD date.

    Only the calendar day is kept; the time and offset are dropped.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            if "T" in value:
                return dt.datetime.fromisoformat(value).date()
            return dt.date.fromisoformat(value)
        except ValueError:
            pass
    raise ValueError("invalid date format, expected RFC3339")


class DatedRecord(BaseModel):
    """Base for every record kind keyed by calendar day."""

    id: Optional[int] = None
    date: dt.date
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value):
        return parse_record_date(value)


class SleepRecord(DatedRecord):
    """A night's sleep."""

    duration: float  # hours
    quality: Optional[int] = None
    disruptions: Optional[str] = None


class DietRecord(DatedRecord):
    """A meal and the food items it contained."""

    meal: Optional[str] = None
    items: list[str] = Field(default_factory=list)


class MenstrualRecord(DatedRecord):
    """A menstrual cycle observation."""

    period_event: str
    flow_level: str


class SymptomRecord(DatedRecord):
    """Self-rated symptom intensities, each on a 1-10 scale."""

    nausea: int
    fatigue: int
    pain: int


class RecordSet(BaseModel):
    """All four record collections, in storage order."""

    sleep: list[SleepRecord] = Field(default_factory=list)
    diet: list[DietRecord] = Field(default_factory=list)
    menstrual: list[MenstrualRecord] = Field(default_factory=list)
    symptoms: list[SymptomRecord] = Field(default_factory=list)
