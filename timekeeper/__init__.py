"""Timekeeper — timer vocabulary, state machine and duration accounting."""

from .timer import (
    Time,
    TimePeriod,
    TimeState,
    TimeType,
    InvalidTransition,
    UnknownUnit,
)

__all__ = [
    "Time",
    "TimePeriod",
    "TimeState",
    "TimeType",
    "InvalidTransition",
    "UnknownUnit",
]

__version__ = "0.1.0"
