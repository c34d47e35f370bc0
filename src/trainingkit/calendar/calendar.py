from __future__ import annotations

import datetime
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional

import numpy as np
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from .dates import ONE_DAY, WEEKDAY_NAMES, canonical_weekday, to_calendar_date, to_day_array
from .holidays import Holiday, parse_holidays

DEFAULT_WEEKLY_OFF: frozenset[str] = frozenset({"Saturday", "Sunday"})


class WorkCalendar(BaseModel):
    """Working-day configuration of an organization.

    Every calendar operation takes one of these explicitly; there is no
    module-level "current calendar".

    Attributes:
        weekly_off: Weekday names that are never worked. Names are matched
            case-insensitively; an unknown name is rejected with a
            ``ValidationError`` when the calendar is built rather than being
            treated as never matching.
        consider_holidays: Whether the holiday list takes part in classification.
        holidays: Holiday collection. Malformed records are dropped (and
            logged) when the calendar is built.
        lookahead_limit: Following days examined by ``find_next_working_day``
            before giving up.
        max_off_run: Consecutive off-days ``calculate_working_days`` walks
            before giving up.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    weekly_off: frozenset[str] = Field(default=DEFAULT_WEEKLY_OFF, alias="weeklyOffDays")
    consider_holidays: bool = Field(default=True, alias="considerHolidays")
    holidays: tuple[Holiday, ...] = ()
    lookahead_limit: PositiveInt = Field(default=10, alias="lookaheadLimit")
    max_off_run: PositiveInt = Field(default=366, alias="maxOffRun")

    @field_validator("weekly_off", mode="before")
    @classmethod
    def _canonical_weekdays(cls, value: Any) -> frozenset[str]:
        if value is None:
            return DEFAULT_WEEKLY_OFF
        if isinstance(value, str):
            value = [value]
        return frozenset(canonical_weekday(name) for name in value)

    @field_validator("consider_holidays", mode="before")
    @classmethod
    def _null_means_default(cls, value: Any) -> Any:
        return True if value is None else value

    @field_validator("holidays", mode="before")
    @classmethod
    def _drop_malformed(cls, value: Any) -> tuple[Holiday, ...]:
        return parse_holidays(value)

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "WorkCalendar":
        """Build a calendar from an organization/batch settings record."""
        known = {name for name in cls.model_fields}
        known |= {f.alias for f in cls.model_fields.values() if f.alias}
        return cls.model_validate({k: v for k, v in settings.items() if k in known})

    @property
    def working_weekdays(self) -> tuple[str, ...]:
        return tuple(name for name in WEEKDAY_NAMES if name not in self.weekly_off)

    def __repr__(self) -> str:
        off = [name for name in WEEKDAY_NAMES if name in self.weekly_off]
        return (
            f"WorkCalendar(weekly_off={off}, "
            f"consider_holidays={self.consider_holidays}, "
            f"holidays={len(self.holidays)}, "
            f"lookahead_limit={self.lookahead_limit}, "
            f"max_off_run={self.max_off_run})"
        )


class DayStatus(str, Enum):
    WORKING = "working"
    WEEKLY_OFF = "weekly_off"
    PUBLIC_HOLIDAY = "public_holiday"


class DayClassification(NamedTuple):
    day: datetime.date
    status: DayStatus
    holiday: Optional[Holiday] = None

    @property
    def is_working(self) -> bool:
        return self.status is DayStatus.WORKING


# ── day classification ───────────────────────────────────────────────────

def classify_day(day: Any, calendar: WorkCalendar) -> DayClassification:
    """
    Classify one calendar date.

    Weekly-off always wins over holidays.  Holidays are only consulted when
    ``calendar.consider_holidays`` is set; the first matching holiday in
    collection order is reported.
    """
    d = to_calendar_date(day)
    name = WEEKDAY_NAMES[d.weekday()]
    if name in calendar.weekly_off:
        logger.debug(f"{d.isoformat()} ({name}) is a weekly off day")
        return DayClassification(d, DayStatus.WEEKLY_OFF)

    if not calendar.consider_holidays or not calendar.holidays:
        return DayClassification(d, DayStatus.WORKING)

    for holiday in calendar.holidays:
        if holiday.matches(d):
            logger.debug(
                f"{d.isoformat()} is a holiday ({holiday.name}, recurring={holiday.is_recurring})"
            )
            return DayClassification(d, DayStatus.PUBLIC_HOLIDAY, holiday)

    return DayClassification(d, DayStatus.WORKING)


def is_non_working_day(day: Any, calendar: WorkCalendar) -> bool:
    return not classify_day(day, calendar).is_working


# ── walking forward ──────────────────────────────────────────────────────

def calculate_working_days(
    start: Any,
    days: int,
    calendar: WorkCalendar,
    is_end_date: bool = False,
) -> datetime.date:
    """
    Advance *start* by *days* working days.

    With ``is_end_date`` the span is inclusive of *start*: the result is the
    last day of a block of *days* working days beginning at *start*, so
    ``days - 1`` working days are walked.  Otherwise *days* working days are
    walked ("the N-th working day after start").  The walk begins strictly
    after *start*, which is never re-examined, and ``days == 0`` returns
    *start* as is.

    If ``calendar.max_off_run`` consecutive off-days are met the walk stops
    there with a warning and the cursor is returned.
    """
    current = to_calendar_date(start)
    if days == 0:
        return current

    remaining = days - 1 if is_end_date else days
    off_run = 0
    while remaining > 0:
        current += ONE_DAY
        if is_non_working_day(current, calendar):
            off_run += 1
            if off_run >= calendar.max_off_run:
                logger.warning(
                    f"Gave up advancing from {to_calendar_date(start).isoformat()}: "
                    f"{off_run} consecutive off-days up to {current.isoformat()}, "
                    f"{remaining} working day(s) still to go. Check the calendar {calendar!r}."
                )
                break
        else:
            off_run = 0
            remaining -= 1

    logger.debug(
        f"{days} working day(s) from {to_calendar_date(start).isoformat()} "
        f"(end_date={is_end_date}) -> {current.isoformat()}"
    )
    return current


def find_next_working_day(day: Any, calendar: WorkCalendar) -> datetime.date:
    """
    *day* itself if it is a working day, otherwise the nearest following one.

    At most ``calendar.lookahead_limit`` following days are examined; past
    that the last candidate is returned with a warning, and may itself be an
    off-day.
    """
    current = to_calendar_date(day)
    if not is_non_working_day(current, calendar):
        return current

    for _ in range(calendar.lookahead_limit):
        current += ONE_DAY
        if not is_non_working_day(current, calendar):
            logger.debug(f"Next working day after {to_calendar_date(day).isoformat()}: {current.isoformat()}")
            return current

    logger.warning(
        f"No working day within {calendar.lookahead_limit} days after "
        f"{to_calendar_date(day).isoformat()}; returning {current.isoformat()}. "
        f"Check the calendar {calendar!r}."
    )
    return current


# ── vectorized range helpers ─────────────────────────────────────────────

def non_working_mask(days: Any, calendar: WorkCalendar) -> np.ndarray:
    """
    Element-wise ``is_non_working_day`` over a scalar or array-like of dates.

    Returns a boolean array with the shape of the input.
    """
    d = to_day_array(days)
    # 1970-01-01 was a Thursday (weekday index 3).
    weekday = (d.astype(np.int64) + 3) % 7
    off_idx = [i for i, name in enumerate(WEEKDAY_NAMES) if name in calendar.weekly_off]
    mask = np.isin(weekday, off_idx)

    if not calendar.consider_holidays or not calendar.holidays:
        return mask

    exact = np.array(
        [h.date for h in calendar.holidays if not h.is_recurring], dtype="datetime64[D]"
    )
    recurring = [h.date.month * 100 + h.date.day for h in calendar.holidays if h.is_recurring]

    months = d.astype("datetime64[M]")
    month_day = (months.astype(np.int64) % 12 + 1) * 100 + (d - months).astype(np.int64) + 1

    return mask | np.isin(d, exact) | np.isin(month_day, recurring)


def _day_range(start: Any, end: Any) -> np.ndarray:
    first = np.datetime64(to_calendar_date(start), "D")
    last = np.datetime64(to_calendar_date(end), "D")
    return np.arange(first, last + np.timedelta64(1, "D"), dtype="datetime64[D]")


def count_working_days(start: Any, end: Any, calendar: WorkCalendar) -> int:
    """Number of working days in the inclusive range ``[start, end]``."""
    span = _day_range(start, end)
    if span.size == 0:
        return 0
    return int(np.count_nonzero(~non_working_mask(span, calendar)))


def working_days(start: Any, end: Any, calendar: WorkCalendar) -> list[datetime.date]:
    """The working days of the inclusive range ``[start, end]``, in order."""
    span = _day_range(start, end)
    if span.size == 0:
        return []
    return span[~non_working_mask(span, calendar)].tolist()
