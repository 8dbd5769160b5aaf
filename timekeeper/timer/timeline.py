"""Ordered, validated event history for one timer."""

from __future__ import annotations

import json
import logging
import threading
from datetime import datetime
from typing import Iterable

from . import duration
from .machine import TimerStateMachine
from .types import Time, TimeState, TimeType

logger = logging.getLogger(__name__)


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


class Timeline:
    """Owns the ``Time`` records of a single timer.

    Every append is checked against a ``TimerStateMachine`` and against
    the previous timestamp, so the stored history is always a legal
    sequence.  Writers are serialized with a lock.
    """

    def __init__(
        self,
        events: Iterable[Time] = (),
        *,
        allow_end_while_paused: bool = True,
    ) -> None:
        self._machine = TimerStateMachine(
            allow_end_while_paused=allow_end_while_paused
        )
        self._events: list[Time] = []
        self._lock = threading.Lock()
        for event in events:
            self.append(event)

    # ── properties ────────────────────────────────────────────────────

    @property
    def events(self) -> tuple[Time, ...]:
        return tuple(self._events)

    @property
    def state(self) -> TimeState:
        return self._machine.state

    @property
    def ended(self) -> bool:
        return self._machine.ended

    @property
    def allow_end_while_paused(self) -> bool:
        return self._machine.allow_end_while_paused

    @property
    def started_at(self) -> datetime | None:
        return self._events[0].date if self._events else None

    @property
    def ended_at(self) -> datetime | None:
        if self._events and self._events[-1].type == TimeType.END:
            return self._events[-1].date
        return None

    @property
    def pause_count(self) -> int:
        return sum(1 for e in self._events if e.type == TimeType.PAUSE_START)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self):
        return iter(self.events)

    # ── writing ───────────────────────────────────────────────────────

    def append(self, event: Time) -> TimeState:
        """Add *event* to the history and return the new state.

        Raises ``InvalidTransition`` for an illegal event and
        ``ValueError`` if it predates the last recorded event or mixes
        naive and timezone-aware timestamps.
        """
        with self._lock:
            if self._events and _is_aware(event.date) != _is_aware(
                self._events[-1].date
            ):
                raise ValueError(
                    f"{event.type.name} at {event.date.isoformat()} mixes naive "
                    f"and timezone-aware timestamps with the previous event at "
                    f"{self._events[-1].date.isoformat()}"
                )
            if self._events and event.date < self._events[-1].date:
                raise ValueError(
                    f"{event.type.name} at {event.date.isoformat()} is earlier "
                    f"than the previous event at "
                    f"{self._events[-1].date.isoformat()}"
                )
            new_state = self._machine.apply(event)
            self._events.append(event)
        return new_state

    def record(self, type: TimeType, at: datetime | None = None) -> Time:
        """Stamp a new event (now, unless *at* is given) and append it."""
        if at is None:
            at = datetime.now(self._events[0].date.tzinfo if self._events else None)
        event = Time(type=type, date=at)
        self.append(event)
        return event

    # ── accounting ────────────────────────────────────────────────────

    def elapsed_ms(self, now: datetime | None = None) -> int:
        return duration.elapsed_ms(
            self._events, now,
            allow_end_while_paused=self.allow_end_while_paused,
        )

    def paused_ms(self, now: datetime | None = None) -> int:
        return duration.paused_ms(
            self._events, now,
            allow_end_while_paused=self.allow_end_while_paused,
        )

    # ── encoding ──────────────────────────────────────────────────────

    def to_list(self) -> list[dict[str, str]]:
        return [event.to_dict() for event in self._events]

    @classmethod
    def from_list(
        cls, data: list[dict], *, allow_end_while_paused: bool = True
    ) -> Timeline:
        """Rebuild a timeline, replaying (and so validating) each event."""
        return cls(
            (Time.from_dict(item) for item in data),
            allow_end_while_paused=allow_end_while_paused,
        )

    def dumps(self, **kwargs) -> str:
        return json.dumps(self.to_list(), **kwargs)

    @classmethod
    def loads(cls, text: str, *, allow_end_while_paused: bool = True) -> Timeline:
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError("Timeline JSON must be a list of events")
        return cls.from_list(data, allow_end_while_paused=allow_end_while_paused)

    def __repr__(self) -> str:
        return f"<Timeline state={self.state.name} events={len(self._events)}>"
