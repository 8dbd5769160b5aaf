"""Timer package."""

from .types import Time, TimePeriod, TimeState, TimeType, PERIODS_DESCENDING
from .errors import TimerError, InvalidTransition, UnknownUnit
from .machine import TRANSITIONS, TimerStateMachine, fold
from .duration import (
    DurationParts,
    breakdown,
    convert,
    describe_duration,
    elapsed_ms,
    format_duration,
    paused_ms,
)
from .timeline import Timeline

__all__ = [
    "Time",
    "TimePeriod",
    "TimeState",
    "TimeType",
    "PERIODS_DESCENDING",
    "TimerError",
    "InvalidTransition",
    "UnknownUnit",
    "TRANSITIONS",
    "TimerStateMachine",
    "fold",
    "DurationParts",
    "breakdown",
    "convert",
    "describe_duration",
    "elapsed_ms",
    "format_duration",
    "paused_ms",
    "Timeline",
]
