# src/trainingkit/schedule/__init__.py
"""
trainingkit.schedule
~~~~~~~~~~~~~~~~~~~~

Chains the five phases of a training batch (induction, training,
certification, OJT, OJT certification) into a dated schedule on a
WorkCalendar.  Durations are counted in working days, inclusive of each
phase's start day.

Basic usage::

    from trainingkit.calendar import WorkCalendar
    from trainingkit.schedule import calculate_phase_dates

    cal = WorkCalendar(holidays=[{"date": "2025-03-31", "name": "Holi"}])
    plan = calculate_phase_dates(
        "2025-04-01",
        {"induction": 5, "training": 5, "certification": 0,
         "ojt": 5, "ojtCertification": 0},
        cal,
    )
    plan.induction.end          # → 2025-04-07
    plan.handover_to_ops        # → 2025-04-22
    plan.phase_on("2025-04-09") # → "training"
"""

from trainingkit.schedule.phases import (
    LIFECYCLE,
    PHASES,
    PhaseDurations,
    PhaseSchedule,
    PhaseWindow,
    calculate_phase_dates,
    next_phase,
)

__all__ = [
    "LIFECYCLE",
    "PHASES",
    "PhaseDurations",
    "PhaseSchedule",
    "PhaseWindow",
    "calculate_phase_dates",
    "next_phase",
]
