from __future__ import annotations

import datetime
from typing import Any, Iterator, Mapping, Optional, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, model_validator

from trainingkit.calendar import (
    WorkCalendar,
    calculate_working_days,
    find_next_working_day,
    to_calendar_date,
)

# Phase order is fixed; each phase starts after the previous one ends.
PHASES: tuple[str, ...] = (
    "induction",
    "training",
    "certification",
    "ojt",
    "ojt_certification",
)

# Batch lifecycle as seen by the surrounding application.
LIFECYCLE: tuple[str, ...] = ("planned",) + PHASES + ("completed",)

_CAMEL = {
    "induction": "induction",
    "training": "training",
    "certification": "certification",
    "ojt": "ojt",
    "ojt_certification": "ojtCertification",
}


class PhaseDurations(BaseModel):
    """Working days occupied by each phase, inclusive of its start day."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    induction: NonNegativeInt = 0
    training: NonNegativeInt = 0
    certification: NonNegativeInt = 0
    ojt: NonNegativeInt = 0
    ojt_certification: NonNegativeInt = Field(default=0, alias="ojtCertification")

    def __getitem__(self, phase: str) -> int:
        if phase not in PHASES:
            raise KeyError(phase)
        return getattr(self, phase)

    @property
    def total(self) -> int:
        return sum(self[p] for p in PHASES)


class PhaseWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: datetime.date
    end: datetime.date

    @model_validator(mode="after")
    def _ordered(self) -> "PhaseWindow":
        if self.end < self.start:
            raise ValueError(f"Phase ends ({self.end}) before it starts ({self.start}).")
        return self

    def __contains__(self, day: Any) -> bool:
        return self.start <= to_calendar_date(day) <= self.end


class PhaseSchedule(BaseModel):
    """Dated plan of a training batch.

    Attributes:
        durations: The phase durations the schedule was computed from.
        induction .. ojt_certification: Start/end of each phase. A phase
            with zero duration has ``start == end``.
        handover_to_ops: The day the batch is handed over to operations.
    """

    model_config = ConfigDict(frozen=True)

    durations: PhaseDurations
    induction: PhaseWindow
    training: PhaseWindow
    certification: PhaseWindow
    ojt: PhaseWindow
    ojt_certification: PhaseWindow
    handover_to_ops: datetime.date

    def __getitem__(self, phase: str) -> PhaseWindow:
        if phase not in PHASES:
            raise KeyError(phase)
        return getattr(self, phase)

    def windows(self) -> Iterator[tuple[str, PhaseWindow]]:
        for phase in PHASES:
            yield phase, self[phase]

    @property
    def start(self) -> datetime.date:
        return self.induction.start

    def phase_on(self, day: Any) -> str:
        """
        Lifecycle status of the batch on *day*.

        ``"completed"`` from the handover date on.  Before that, the latest
        phase with a non-zero duration that has started, so off-days between
        two phases still belong to the earlier one.  ``"planned"`` before the
        first phase starts.
        """
        d = to_calendar_date(day)
        if d >= self.handover_to_ops:
            return "completed"
        status = "planned"
        for phase, window in self.windows():
            if self.durations[phase] == 0:
                continue
            if window.start <= d:
                status = phase
        return status

    def to_dates(self) -> dict[str, datetime.date]:
        """Flatten to ``inductionStart``/``inductionEnd``/.../``handoverToOps``."""
        out: dict[str, datetime.date] = {}
        for phase, window in self.windows():
            out[f"{_CAMEL[phase]}Start"] = window.start
            out[f"{_CAMEL[phase]}End"] = window.end
        out["handoverToOps"] = self.handover_to_ops
        return out


def next_phase(status: str) -> Optional[str]:
    """The lifecycle status that follows *status*, or None at the end."""
    try:
        idx = LIFECYCLE.index(status)
    except ValueError:
        return None
    if idx == len(LIFECYCLE) - 1:
        return None
    return LIFECYCLE[idx + 1]


def calculate_phase_dates(
    start_date: Any,
    phase_durations: Union[PhaseDurations, Mapping[str, int]],
    calendar: WorkCalendar,
) -> PhaseSchedule:
    """
    Chain the five training phases into a schedule.

    The first phase starts on the first working day on or after
    *start_date*.  Each later phase starts one working day after the previous
    phase ends, or on the very same day when the previous phase has zero
    duration, so skipped phases take no calendar time.  Phase ends are
    inclusive: a phase of N working days ends on its N-th working day.  The
    handover date follows the same rule after the last phase.
    """
    durations = (
        phase_durations
        if isinstance(phase_durations, PhaseDurations)
        else PhaseDurations.model_validate(phase_durations)
    )

    anchor = find_next_working_day(start_date, calendar)
    logger.debug(
        f"Scheduling phases from {to_calendar_date(start_date).isoformat()} "
        f"(adjusted {anchor.isoformat()}) with {durations!r} on {calendar!r}"
    )

    windows: dict[str, PhaseWindow] = {}
    previous: Optional[str] = None
    for phase in PHASES:
        if previous is None:
            start = anchor
        else:
            start = _after(windows[previous].end, durations[previous], calendar)
        end = calculate_working_days(start, durations[phase], calendar, is_end_date=True)
        windows[phase] = PhaseWindow(start=start, end=end)
        previous = phase

    handover = _after(windows["ojt_certification"].end, durations.ojt_certification, calendar)

    schedule = PhaseSchedule(durations=durations, handover_to_ops=handover, **windows)
    for phase, window in schedule.windows():
        logger.debug(f"  {phase}: {window.start.isoformat()} to {window.end.isoformat()}")
    logger.debug(f"  handover: {handover.isoformat()}")
    return schedule


def _after(end: datetime.date, duration: int, calendar: WorkCalendar) -> datetime.date:
    # A zero-duration phase hands its end date straight to the next phase.
    if duration == 0:
        return end
    return calculate_working_days(end, 1, calendar, is_end_date=False)
