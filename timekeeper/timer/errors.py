"""Exceptions raised by the timer package."""

from __future__ import annotations

from typing import Any


class TimerError(Exception):
    """Base class for every timer error."""


class InvalidTransition(TimerError):
    """An event arrived that is not legal for the timer's current state."""

    def __init__(
        self,
        state: Any,
        event: Any,
        *,
        position: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.state = state
        self.event = event
        self.position = position
        self.reason = reason

        state_name = getattr(state, "name", state)
        event_name = getattr(event, "name", event)
        message = f"Cannot apply {event_name} while {state_name}"
        if position is not None:
            message += f" (event #{position})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnknownUnit(TimerError, ValueError):
    """A duration routine was asked for a unit outside ``TimePeriod``."""

    def __init__(self, unit: Any) -> None:
        self.unit = unit
        super().__init__(f"Unknown time unit: {unit!r}")
