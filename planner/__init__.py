"""Planungs-Modul (Greedy-Heuristik mit fester Wiederholungsregel)."""

from .scheduler import (
    StudyScheduler,
    SchedulingError,
    InvalidExamDateError,
    InsufficientCapacityError,
    schedule,
)

__all__ = [
    "StudyScheduler",
    "SchedulingError",
    "InvalidExamDateError",
    "InsufficientCapacityError",
    "schedule",
]
