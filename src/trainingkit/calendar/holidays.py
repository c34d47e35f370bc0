from __future__ import annotations

import calendar as _stdcal
import datetime
from typing import Any, Iterable, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .dates import to_calendar_date

_TRUE_STRINGS = frozenset({"true", "1", "yes", "y", "on"})


class Holiday(BaseModel):
    """An organization holiday.

    Attributes:
        date: Calendar date of the holiday. For recurring holidays only the
            month and day are significant.
        name: Display name, e.g. "Holi".
        is_recurring: Match every year on the same month/day instead of the
            exact date only.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, from_attributes=True)

    date: datetime.date
    name: str = ""
    is_recurring: bool = Field(default=False, alias="isRecurring")

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> datetime.date:
        return to_calendar_date(value)

    @field_validator("name", mode="before")
    @classmethod
    def _name_as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("is_recurring", mode="before")
    @classmethod
    def _loose_flag(cls, value: Any) -> bool:
        # Strings are read as flags, anything else by truthiness.
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)

    def matches(self, day: datetime.date) -> bool:
        if self.is_recurring:
            # A Feb 29 holiday has no occurrence in non-leap years.
            return (self.date.month, self.date.day) == (day.month, day.day)
        return self.date == day

    def occurrence_in(self, year: int) -> Optional[datetime.date]:
        """The date this holiday falls on in *year*, or None if it has none."""
        if not self.is_recurring:
            return self.date if self.date.year == year else None
        if (self.date.month, self.date.day) == (2, 29) and not _stdcal.isleap(year):
            return None
        return self.date.replace(year=year)


def parse_holiday(record: Any) -> Optional[Holiday]:
    """
    Coerce a holiday record to a ``Holiday``.

    Accepts ``Holiday`` instances, mappings (snake_case or camelCase keys) and
    objects exposing ``date``/``name``/``is_recurring`` attributes.  A record
    with a missing or unparseable date is logged and ``None`` is returned.
    """
    if isinstance(record, Holiday):
        return record
    try:
        return Holiday.model_validate(record)
    except ValidationError as exc:
        logger.warning(
            f"Skipping malformed holiday record {record!r}: "
            f"{exc.error_count()} validation error(s), first: {exc.errors()[0]['msg']}"
        )
        return None


def parse_holidays(records: Iterable[Any] | None) -> tuple[Holiday, ...]:
    """Parse a holiday collection, dropping malformed records in order."""
    if not records:
        return ()
    parsed = (parse_holiday(r) for r in records)
    return tuple(h for h in parsed if h is not None)


def holidays_in_range(
    holidays: Iterable[Any],
    start: Any,
    end: Any,
) -> list[tuple[datetime.date, Holiday]]:
    """
    Concrete holiday occurrences within the inclusive range ``[start, end]``.

    Recurring holidays yield one occurrence per year of the range.  Results
    are sorted by date; holidays sharing a date keep their input order.
    """
    first = to_calendar_date(start)
    last = to_calendar_date(end)
    if last < first:
        return []

    out: list[tuple[datetime.date, Holiday]] = []
    for holiday in parse_holidays(holidays):
        for year in range(first.year, last.year + 1):
            occurrence = holiday.occurrence_in(year)
            if occurrence is not None and first <= occurrence <= last:
                out.append((occurrence, holiday))
    out.sort(key=lambda pair: pair[0])
    return out
