"""Timer state machine.

Transitions
-----------
STOPPED → STARTED     (START, only if no END recorded)
STARTED → PAUSED      (PAUSE_START)
PAUSED  → STARTED     (PAUSE_END)
STARTED → STOPPED     (END — terminal)
PAUSED  → STOPPED     (END — terminal; implicit resume-then-end,
                       unless ``allow_end_while_paused`` is off)

Anything else raises ``InvalidTransition``.  An END is final: the same
timer can never be started again, use a fresh machine instead.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .errors import InvalidTransition
from .types import Time, TimeState, TimeType

logger = logging.getLogger(__name__)


# ── transition table ──────────────────────────────────────────────────────

TRANSITIONS: dict[tuple[TimeState, TimeType], TimeState] = {
    (TimeState.STOPPED, TimeType.START): TimeState.STARTED,
    (TimeState.STARTED, TimeType.PAUSE_START): TimeState.PAUSED,
    (TimeState.PAUSED, TimeType.PAUSE_END): TimeState.STARTED,
    (TimeState.STARTED, TimeType.END): TimeState.STOPPED,
    (TimeState.PAUSED, TimeType.END): TimeState.STOPPED,
}


def _event_type(event: TimeType | Time) -> TimeType:
    return event.type if isinstance(event, Time) else event


# ── machine ───────────────────────────────────────────────────────────────


class TimerStateMachine:
    """Finite state machine for one timer instance."""

    def __init__(self, *, allow_end_while_paused: bool = True) -> None:
        self._allow_end_while_paused = allow_end_while_paused
        self._state: TimeState = TimeState.STOPPED
        self._ended: bool = False

    @property
    def state(self) -> TimeState:
        return self._state

    @property
    def ended(self) -> bool:
        """True once END has been applied."""
        return self._ended

    @property
    def allow_end_while_paused(self) -> bool:
        return self._allow_end_while_paused

    def next_state(self, event: TimeType | Time) -> TimeState:
        """Return the state *event* would lead to, without applying it."""
        event = _event_type(event)

        if self._ended:
            raise InvalidTransition(
                self._state, event, reason="timer has already ended"
            )
        if (
            self._state == TimeState.PAUSED
            and event == TimeType.END
            and not self._allow_end_while_paused
        ):
            raise InvalidTransition(
                self._state, event, reason="resume before ending"
            )

        try:
            return TRANSITIONS[(self._state, event)]
        except KeyError:
            raise InvalidTransition(self._state, event) from None

    def can_apply(self, event: TimeType | Time) -> bool:
        try:
            self.next_state(event)
        except InvalidTransition:
            return False
        return True

    def apply(self, event: TimeType | Time) -> TimeState:
        """Apply *event* and return the new state."""
        event = _event_type(event)
        try:
            new_state = self.next_state(event)
        except InvalidTransition as exc:
            logger.debug("Rejected transition: %s", exc)
            raise

        logger.debug(
            "Transition %s --%s--> %s",
            self._state.name, event.name, new_state.name,
        )
        self._state = new_state
        if event == TimeType.END:
            self._ended = True
        return new_state

    def reset(self) -> None:
        """Forget all history — back to a fresh STOPPED timer."""
        self._state = TimeState.STOPPED
        self._ended = False

    def __repr__(self) -> str:
        return f"<TimerStateMachine state={self._state.name} ended={self._ended}>"


def fold(
    events: Iterable[TimeType | Time],
    *,
    allow_end_while_paused: bool = True,
) -> TimeState:
    """Replay *events* from STOPPED and return the final state.

    The first illegal (state, event) pair raises ``InvalidTransition``
    with ``position`` set to that event's index.
    """
    machine = TimerStateMachine(allow_end_while_paused=allow_end_while_paused)
    for position, event in enumerate(events):
        try:
            machine.apply(event)
        except InvalidTransition as exc:
            raise InvalidTransition(
                exc.state, exc.event, position=position, reason=exc.reason
            ) from None
    return machine.state
