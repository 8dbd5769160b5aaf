"""Tests for the Qt stopwatch engine.

Covers: control → state mapping, signal emission, rejection of illegal
controls, tick behaviour, the ``finished`` summary, and reset.
"""

from datetime import datetime, timezone

import pytest

from timekeeper.settings import Settings
from timekeeper.timer.engine import TimerEngine
from timekeeper.timer.errors import InvalidTransition
from timekeeper.timer.types import Time, TimeState, TimeType

from helpers import SignalCollector, at


# ═══════════════════════════════════════════════════════════════════════════
#  STATE TRANSITIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestStateTransitions:

    def test_initial_state_is_stopped(self, engine):
        assert engine.state == TimeState.STOPPED
        assert engine.is_running is False
        assert engine.is_ticking is False
        assert len(engine.timeline) == 0

    def test_start_transitions_to_started(self, engine):
        engine.start(at(0))
        assert engine.state == TimeState.STARTED
        assert engine.is_running is True
        assert engine.is_ticking is True

    def test_pause_and_resume(self, engine):
        engine.start(at(0))
        engine.pause(at(100))
        assert engine.state == TimeState.PAUSED
        assert engine.is_ticking is False

        engine.resume(at(200))
        assert engine.state == TimeState.STARTED
        assert engine.is_ticking is True

    def test_stop_is_terminal(self, engine):
        engine.start(at(0))
        engine.stop(at(100))
        assert engine.state == TimeState.STOPPED
        assert engine.ended is True
        assert engine.is_ticking is False
        with pytest.raises(InvalidTransition):
            engine.start(at(200))

    def test_stop_while_paused(self, engine):
        engine.start(at(0))
        engine.pause(at(1_000))
        engine.stop(at(5_000))
        assert engine.elapsed_ms() == 1_000

    def test_strict_engine_refuses_stop_while_paused(self, engine_strict):
        engine_strict.start(at(0))
        engine_strict.pause(at(1))
        with pytest.raises(InvalidTransition):
            engine_strict.stop(at(2))
        assert engine_strict.state == TimeState.PAUSED

    @pytest.mark.parametrize("control", ["pause", "resume", "stop"])
    def test_controls_raise_before_start(self, engine, control):
        with pytest.raises(InvalidTransition):
            getattr(engine, control)(at(0))
        assert engine.state == TimeState.STOPPED

    def test_double_start_raises(self, engine):
        engine.start(at(0))
        with pytest.raises(InvalidTransition):
            engine.start(at(1))

    def test_resume_while_running_raises(self, engine):
        engine.start(at(0))
        with pytest.raises(InvalidTransition):
            engine.resume(at(1))

    def test_controls_return_events(self, engine):
        assert engine.start(at(0)) == Time(TimeType.START, at(0))
        assert engine.pause(at(5)).type == TimeType.PAUSE_START


# ═══════════════════════════════════════════════════════════════════════════
#  SIGNALS
# ═══════════════════════════════════════════════════════════════════════════


class TestSignals:

    def test_state_changed_fires_on_transitions(self, engine):
        c = SignalCollector()
        engine.state_changed.connect(c)

        engine.start(at(0))
        assert c.last == TimeState.STARTED
        engine.pause(at(1))
        assert c.last == TimeState.PAUSED
        engine.resume(at(2))
        assert c.last == TimeState.STARTED
        engine.stop(at(3))
        assert c.last == TimeState.STOPPED
        assert len(c) == 4

    def test_event_recorded(self, engine):
        c = SignalCollector()
        engine.event_recorded.connect(c)

        engine.start(at(0))
        engine.pause(at(10))
        assert [e.type for e in c.items] == [TimeType.START, TimeType.PAUSE_START]

    def test_rejected_control_emits_nothing(self, engine):
        c = SignalCollector()
        engine.state_changed.connect(c)
        engine.event_recorded.connect(c)
        with pytest.raises(InvalidTransition):
            engine.pause(at(0))
        assert len(c) == 0

    def test_finished_summary(self, engine):
        c = SignalCollector()
        engine.finished.connect(c)

        engine.start(at(0))
        engine.pause(at(1_000))
        engine.resume(at(1_500))
        engine.stop(at(2_000))

        assert len(c) == 1
        data = c.last
        assert data["started_at"] == at(0)
        assert data["ended_at"] == at(2_000)
        assert data["elapsed_ms"] == 1_500
        assert data["paused_ms"] == 500
        assert data["pause_count"] == 1
        assert [e["type"] for e in data["events"]] == [
            "start", "pause-start", "pause-end", "end",
        ]


# ═══════════════════════════════════════════════════════════════════════════
#  TICK
# ═══════════════════════════════════════════════════════════════════════════


class TestTick:

    def test_tick_interval_from_settings(self, qapp):
        engine = TimerEngine(settings=Settings(tick_interval_ms=250))
        assert engine._qt_timer.interval() == 250

    def test_tick_emits_elapsed(self, engine):
        c = SignalCollector()
        engine.tick.connect(c)

        engine.start()
        engine._on_tick()
        assert len(c) == 1
        assert isinstance(c.last, int)
        assert c.last >= 0

    def test_tick_with_utc_start(self, engine):
        c = SignalCollector()
        engine.tick.connect(c)

        engine.start(datetime.now(timezone.utc))
        engine._on_tick()
        assert len(c) == 1
        assert c.last >= 0

    def test_tick_while_paused_is_silent(self, engine):
        c = SignalCollector()
        engine.tick.connect(c)

        engine.start(at(0))
        engine.pause(at(10))
        engine._on_tick()
        assert len(c) == 0
        assert engine.is_ticking is False


# ═══════════════════════════════════════════════════════════════════════════
#  RESET
# ═══════════════════════════════════════════════════════════════════════════


class TestReset:

    def test_reset_gives_fresh_timer(self, engine):
        engine.start(at(0))
        engine.stop(at(10))
        old = engine.timeline

        engine.reset()
        assert engine.timeline is not old
        assert engine.state == TimeState.STOPPED
        assert engine.ended is False
        engine.start(at(20))
        assert engine.state == TimeState.STARTED

    def test_reset_while_running_emits_stopped(self, engine):
        c = SignalCollector()
        engine.start(at(0))
        engine.state_changed.connect(c)

        engine.reset()
        assert c.last == TimeState.STOPPED
        assert engine.is_ticking is False

    def test_reset_when_stopped_is_quiet(self, engine):
        c = SignalCollector()
        engine.state_changed.connect(c)
        engine.reset()
        assert len(c) == 0


# ═══════════════════════════════════════════════════════════════════════════
#  DISPLAY
# ═══════════════════════════════════════════════════════════════════════════


class TestDisplay:

    def test_elapsed_text_default_unit(self, engine):
        engine.start(at(0))
        engine.stop(at(3_661_250))
        assert engine.elapsed_text() == "1:01:01"

    def test_elapsed_text_milliseconds(self, qapp):
        engine = TimerEngine(settings=Settings(display_smallest_unit="ms"))
        engine.start(at(0))
        assert engine.elapsed_text(now=at(65_250)) == "1:05.250"
