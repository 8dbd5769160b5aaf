"""Duration accounting and unit formatting.

Elapsed running time is::

    (END, or now if still running) - START - sum(pause intervals)

A pause that is still open counts up to END/now, so a paused timer's
elapsed value stays frozen.  Everything is in whole milliseconds.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import NamedTuple, Sequence

from .machine import fold
from .types import PERIODS_DESCENDING, Time, TimePeriod, TimeType


class DurationParts(NamedTuple):
    hours: int
    minutes: int
    seconds: int
    milliseconds: int


def to_ms(delta: timedelta) -> int:
    """Whole milliseconds in *delta* (exact integer arithmetic)."""
    return (
        (delta.days * 86_400 + delta.seconds) * TimePeriod.SECOND
        + delta.microseconds // 1_000
    )


# ── accounting ────────────────────────────────────────────────────────────


def _intervals(
    events: Sequence[Time],
    now: datetime | None,
    allow_end_while_paused: bool,
) -> tuple[int, int]:
    """Return ``(span_ms, paused_ms)`` for a validated history."""
    if not events:
        return (0, 0)
    fold(events, allow_end_while_paused=allow_end_while_paused)

    start = events[0].date
    end: datetime | None = None
    paused = 0
    pause_began: datetime | None = None

    for event in events:
        if event.type == TimeType.PAUSE_START:
            pause_began = event.date
        elif event.type == TimeType.PAUSE_END and pause_began is not None:
            paused += to_ms(event.date - pause_began)
            pause_began = None
        elif event.type == TimeType.END:
            end = event.date

    if end is None:
        end = now if now is not None else datetime.now(start.tzinfo)
    if pause_began is not None:
        paused += max(0, to_ms(end - pause_began))

    return (max(0, to_ms(end - start)), paused)


def elapsed_ms(
    events: Sequence[Time],
    now: datetime | None = None,
    *,
    allow_end_while_paused: bool = True,
) -> int:
    """Running time of a timer history, excluding pauses.

    Raises ``InvalidTransition`` if *events* break the state machine.
    """
    span, paused = _intervals(events, now, allow_end_while_paused)
    return max(0, span - paused)


def paused_ms(
    events: Sequence[Time],
    now: datetime | None = None,
    *,
    allow_end_while_paused: bool = True,
) -> int:
    """Total time spent paused."""
    return _intervals(events, now, allow_end_while_paused)[1]


# ── units ─────────────────────────────────────────────────────────────────


def breakdown(ms: int) -> DurationParts:
    """Split *ms* into hours/minutes/seconds/milliseconds, largest first."""
    if ms < 0:
        raise ValueError(f"Duration must be non-negative, got {ms}")
    values = []
    remainder = int(ms)
    for period in PERIODS_DESCENDING:
        count, remainder = divmod(remainder, period)
        values.append(count)
    return DurationParts(*values)


def convert(ms: int, unit: TimePeriod | str | int) -> int:
    """Whole *unit*s in *ms*.  Unknown units raise ``UnknownUnit``."""
    return ms // TimePeriod.parse(unit)


def format_duration(ms: int, smallest: TimePeriod | str = "second") -> str:
    """Clock-style text: ``1:01:01``, ``1:05``, ``1:05.250``.

    The hour field is dropped when zero, unless *smallest* is a minute or
    an hour (``0:01`` for 65 s by the minute).  Fields below *smallest*
    are truncated, not rounded.
    """
    smallest = TimePeriod.parse(smallest)
    parts = breakdown(ms)

    shown = [
        (period, value)
        for period, value in zip(PERIODS_DESCENDING[:3], parts[:3])
        if period >= max(smallest, TimePeriod.SECOND)
    ]
    if (
        smallest <= TimePeriod.SECOND
        and shown[0][0] == TimePeriod.HOUR
        and shown[0][1] == 0
    ):
        shown = shown[1:]

    text = str(shown[0][1]) + "".join(f":{value:02d}" for _, value in shown[1:])
    if smallest == TimePeriod.MILLISECOND:
        text += f".{parts.milliseconds:03d}"
    return text


def describe_duration(
    ms: int, smallest: TimePeriod | str = "millisecond"
) -> str:
    """Human text: ``1 hour, 1 minute, 1 second, 0 milliseconds``.

    Leading zero units are left out.
    """
    smallest = TimePeriod.parse(smallest)
    phrases: list[str] = []
    for period, value in zip(PERIODS_DESCENDING, breakdown(ms)):
        if period < smallest:
            break
        if not phrases and value == 0 and period != smallest:
            continue
        unit = period.label if value == 1 else period.label + "s"
        phrases.append(f"{value} {unit}")
    return ", ".join(phrases)
