"""Live stopwatch engine driven by a Qt timer.

Controls map one-to-one onto timer events:

start()    STOPPED → STARTED    (START)
pause()    STARTED → PAUSED     (PAUSE_START)
resume()   PAUSED  → STARTED    (PAUSE_END)
stop()     STARTED/PAUSED → STOPPED, terminal (END)
reset()    discard the history; a brand-new timer in STOPPED

An illegal control raises ``InvalidTransition``; none is ignored.
"""

from __future__ import annotations

from datetime import datetime

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..settings import Settings
from .duration import format_duration
from .timeline import Timeline
from .types import Time, TimeState, TimeType


class TimerEngine(QObject):
    """Qt-based stopwatch recording a ``Timeline`` of events.

    Signals
    -------
    tick(elapsed_ms: int)
        Emitted every tick interval while running.
    state_changed(new_state: TimeState)
        Emitted on every state transition.
    event_recorded(event: Time)
        Emitted after each event is appended to the timeline.
    finished(data: dict)
        Emitted once when the timer is stopped.  Keys:
        ``started_at``, ``ended_at``, ``elapsed_ms``, ``paused_ms``,
        ``pause_count``, ``events``.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    event_recorded = pyqtSignal(object)
    finished = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(parent)

        self._settings: Settings = settings if settings is not None else Settings()
        self._timeline: Timeline = self._new_timeline()

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(self._settings.tick_interval_ms)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimeState:
        return self._timeline.state

    @property
    def timeline(self) -> Timeline:
        return self._timeline

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_running(self) -> bool:
        """True when actively accumulating (not STOPPED, not PAUSED)."""
        return self._timeline.state == TimeState.STARTED

    @property
    def is_ticking(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def ended(self) -> bool:
        return self._timeline.ended

    def elapsed_ms(self, now: datetime | None = None) -> int:
        return self._timeline.elapsed_ms(now)

    def elapsed_text(self, now: datetime | None = None) -> str:
        """Elapsed time as a clock string, down to the configured unit."""
        return format_duration(
            self.elapsed_ms(now), self._settings.display_smallest_unit
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, at: datetime | None = None) -> Time:
        """Begin timing.  Only valid on a fresh timer."""
        event = self._record(TimeType.START, at)
        self._qt_timer.start()
        return event

    def pause(self, at: datetime | None = None) -> Time:
        """Freeze elapsed time until ``resume()``."""
        event = self._record(TimeType.PAUSE_START, at)
        self._qt_timer.stop()
        return event

    def resume(self, at: datetime | None = None) -> Time:
        event = self._record(TimeType.PAUSE_END, at)
        self._qt_timer.start()
        return event

    def stop(self, at: datetime | None = None) -> Time:
        """End the timer for good and emit ``finished``."""
        event = self._record(TimeType.END, at)
        self._qt_timer.stop()

        self.finished.emit({
            "started_at": self._timeline.started_at,
            "ended_at": event.date,
            "elapsed_ms": self._timeline.elapsed_ms(),
            "paused_ms": self._timeline.paused_ms(),
            "pause_count": self._timeline.pause_count,
            "events": self._timeline.to_list(),
        })
        return event

    def reset(self) -> None:
        """Throw away the current history and start over as a new timer."""
        self._qt_timer.stop()
        previous = self._timeline.state
        self._timeline = self._new_timeline()
        if previous != TimeState.STOPPED:
            self.state_changed.emit(TimeState.STOPPED)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _new_timeline(self) -> Timeline:
        return Timeline(
            allow_end_while_paused=self._settings.allow_end_while_paused
        )

    def _record(self, type: TimeType, at: datetime | None) -> Time:
        event = self._timeline.record(type, at)
        self.event_recorded.emit(event)
        self.state_changed.emit(self._timeline.state)
        return event

    def _on_tick(self) -> None:
        if not self.is_running:
            self._qt_timer.stop()
            return
        self.tick.emit(self._timeline.elapsed_ms())
