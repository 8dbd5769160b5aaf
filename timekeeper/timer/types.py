"""Timer vocabulary.

States
------
STOPPED       Not running, not accumulating.  Initial and terminal.
STARTED       Running; elapsed time grows.
PAUSED        Suspended; elapsed time frozen until resumed.

Events
------
START         timer began running
PAUSE_START   a pause interval began
PAUSE_END     a pause interval ended (resume)
END           timer stopped for good

The event values are the exact strings used on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum

from .errors import UnknownUnit


# ── enums ─────────────────────────────────────────────────────────────────


class TimeState(Enum):
    STOPPED = "stopped"
    STARTED = "started"
    PAUSED = "paused"


class TimeType(Enum):
    START = "start"
    PAUSE_START = "pause-start"
    PAUSE_END = "pause-end"
    END = "end"


class TimePeriod(IntEnum):
    """Unit multipliers, in milliseconds."""

    MILLISECOND = 1
    SECOND = 1_000
    MINUTE = 60_000
    HOUR = 3_600_000

    @classmethod
    def parse(cls, unit: TimePeriod | str | int) -> TimePeriod:
        """Resolve *unit* from a member, name, short label or raw value.

        Raises ``UnknownUnit`` for anything that isn't one of the four
        units; never falls back to a default.
        """
        if isinstance(unit, cls):
            return unit
        if isinstance(unit, str):
            key = unit.strip().lower()
            member = _UNIT_ALIASES.get(key)
            if member is not None:
                return member
            raise UnknownUnit(unit)
        if isinstance(unit, int) and not isinstance(unit, bool):
            try:
                return cls(unit)
            except ValueError:
                raise UnknownUnit(unit) from None
        raise UnknownUnit(unit)

    @property
    def label(self) -> str:
        return self.name.lower()


# Largest first — the order used for breaking durations down.
PERIODS_DESCENDING: tuple[TimePeriod, ...] = (
    TimePeriod.HOUR,
    TimePeriod.MINUTE,
    TimePeriod.SECOND,
    TimePeriod.MILLISECOND,
)

_UNIT_ALIASES: dict[str, TimePeriod] = {}
for _period, _short in zip(PERIODS_DESCENDING, ("h", "m", "s", "ms")):
    _UNIT_ALIASES[_period.label] = _period
    _UNIT_ALIASES[_period.label + "s"] = _period
    _UNIT_ALIASES[_short] = _period
del _period, _short


# ── record ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Time:
    """One timestamped event in a timer's history."""

    type: TimeType
    date: datetime

    def __post_init__(self) -> None:
        if not isinstance(self.type, TimeType):
            object.__setattr__(self, "type", TimeType(self.type))

    @classmethod
    def now(cls, type: TimeType) -> Time:
        return cls(type=type, date=datetime.now())

    def to_dict(self) -> dict[str, str]:
        """Convert to a JSON-ready dict."""
        return {
            "type": self.type.value,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Time:
        """Create an instance from a dict.

        ``date`` may be an ISO-8601 string or epoch milliseconds.
        """
        raw = data["date"]
        if isinstance(raw, str):
            date = datetime.fromisoformat(raw)
        elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
            date = datetime.fromtimestamp(raw / TimePeriod.SECOND)
        else:
            raise ValueError(f"Unsupported date value: {raw!r}")
        return cls(type=TimeType(data["type"]), date=date)
