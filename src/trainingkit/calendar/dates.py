from __future__ import annotations

import datetime
from typing import Any, Union

import numpy as np

from ._exceptions import CalendarError

DateLike = Union[datetime.date, datetime.datetime, np.datetime64, str]

# Index matches datetime.date.weekday(): Monday is 0.
WEEKDAY_NAMES: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

_WEEKDAY_LOOKUP: dict[str, str] = {name.lower(): name for name in WEEKDAY_NAMES}

ONE_DAY = datetime.timedelta(days=1)


def to_calendar_date(value: Any) -> datetime.date:
    """
    Normalize *value* to a plain ``datetime.date``.

    Time-of-day is dropped as written; no time-zone conversion takes place,
    so ``"2025-03-31T23:30:00Z"`` is March 31st.  Applying the function to
    its own result returns the same date.
    """
    # datetime is a subclass of date, so it must be checked first.
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            raise CalendarError("NaT is not a calendar date.")
        return value.astype("datetime64[D]").item()
    if isinstance(value, str):
        return _parse_iso(value)
    raise CalendarError(f"Cannot interpret {value!r} as a calendar date.")


def _parse_iso(text: str) -> datetime.date:
    text = text.strip()
    # Keep the calendar part of an ISO datetime ("2025-03-31T10:00:00.000Z").
    if len(text) > 10 and text[10] in "T ":
        text = text[:10]
    try:
        return datetime.date.fromisoformat(text)
    except ValueError as exc:
        raise CalendarError(f"Unparseable date string {text!r}.") from exc


def weekday_name(value: Any) -> str:
    return WEEKDAY_NAMES[to_calendar_date(value).weekday()]


def canonical_weekday(name: str) -> str:
    """Map a weekday name in any letter case to its canonical spelling."""
    try:
        return _WEEKDAY_LOOKUP[name.strip().lower()]
    except (AttributeError, KeyError):
        raise CalendarError(
            f"Unknown weekday name {name!r}; expected one of {', '.join(WEEKDAY_NAMES)}."
        ) from None


def to_day_array(values: Any) -> np.ndarray:
    """
    Convert a scalar or array-like of dates to a ``datetime64[D]`` array.

    Existing datetime64 arrays are truncated to day resolution; anything else
    goes through ``to_calendar_date`` element by element.
    """
    arr = np.asarray(values)
    if np.issubdtype(arr.dtype, np.datetime64):
        return arr.astype("datetime64[D]")
    flat = [to_calendar_date(v) for v in arr.ravel().tolist()]
    return np.array(flat, dtype="datetime64[D]").reshape(arr.shape)
