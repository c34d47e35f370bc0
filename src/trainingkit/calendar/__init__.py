# src/trainingkit/calendar/__init__.py
"""
trainingkit.calendar
~~~~~~~~~~~~~~~~~~~~

Working-day arithmetic.  A WorkCalendar describes which weekdays are off and
which holidays apply; the functions below classify single days and walk
forward over working days.

Basic usage::

    from trainingkit.calendar import WorkCalendar, calculate_working_days

    cal = WorkCalendar(
        weekly_off=["Saturday", "Sunday"],
        holidays=[{"date": "2025-03-31", "name": "Holi"}],
    )
    calculate_working_days("2025-03-28", 1, cal)        # → 2025-04-01
    calculate_working_days("2025-04-07", 5, cal, is_end_date=True)
                                                        # → 2025-04-11

Array-likes of dates are accepted by the range helpers::

    import numpy as np
    days = np.arange("2025-03-29", "2025-04-02", dtype="datetime64[D]")
    non_working_mask(days, cal)          # → [True, True, True, False]

Public API
----------
WorkCalendar            Weekly-off set, holidays and search limits.
                        Unknown weekday names are rejected at construction.
Holiday                 One holiday record.
classify_day            Working / weekly-off / public-holiday with reason.
is_non_working_day      True for weekly-off days and matching holidays.
calculate_working_days  Advance a date by N working days.
find_next_working_day   Nearest working day on or after a date.
non_working_mask        Vectorized is_non_working_day.
count_working_days      Working days in an inclusive range.
working_days            The working dates of an inclusive range.
holidays_in_range       Concrete holiday occurrences in an inclusive range.
to_calendar_date        Normalize a date-like value to a date.
CalendarError           Base exception for all calendar-related errors.
"""

from __future__ import annotations

from trainingkit.calendar._exceptions import CalendarError
from trainingkit.calendar.calendar import (
    DEFAULT_WEEKLY_OFF,
    DayClassification,
    DayStatus,
    WorkCalendar,
    calculate_working_days,
    classify_day,
    count_working_days,
    find_next_working_day,
    is_non_working_day,
    non_working_mask,
    working_days,
)
from trainingkit.calendar.dates import WEEKDAY_NAMES, to_calendar_date, weekday_name
from trainingkit.calendar.holidays import Holiday, holidays_in_range, parse_holiday

__all__ = [
    "CalendarError",
    "DEFAULT_WEEKLY_OFF",
    "DayClassification",
    "DayStatus",
    "Holiday",
    "WEEKDAY_NAMES",
    "WorkCalendar",
    "calculate_working_days",
    "classify_day",
    "count_working_days",
    "find_next_working_day",
    "holidays_in_range",
    "is_non_working_day",
    "non_working_mask",
    "parse_holiday",
    "to_calendar_date",
    "weekday_name",
    "working_days",
]
