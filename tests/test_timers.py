"""Tests for the clock and pausable countdowns."""

import asyncio

import pytest

from powersnake.timers import Countdown, ManualClock, TimerGroup, TimerState


class Recorder:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


class TestManualClock:
    def test_runs_in_deadline_order(self):
        clock = ManualClock()
        seen = []
        clock.call_later(0.2, seen.append, "b")
        clock.call_later(0.1, seen.append, "a")
        clock.call_later(0.2, seen.append, "c")
        assert clock.advance(1.0) == 3
        assert seen == ["a", "b", "c"]
        assert clock.time() == pytest.approx(1.0)

    def test_callback_sees_its_deadline(self):
        clock = ManualClock()
        seen = []
        clock.call_later(0.25, lambda: seen.append(clock.time()))
        clock.advance(1.0)
        assert seen == [pytest.approx(0.25)]

    def test_cancelled_handles_skip(self):
        clock = ManualClock()
        rec = Recorder()
        handle = clock.call_later(0.1, rec)
        handle.cancel()
        assert clock.pending == 0
        clock.advance(1.0)
        assert rec.calls == 0

    def test_callbacks_scheduled_while_advancing(self):
        clock = ManualClock()
        rec = Recorder()

        def chain():
            rec()
            if rec.calls < 5:
                clock.call_later(0.1, chain)

        clock.call_later(0.1, chain)
        clock.advance(0.35)
        assert rec.calls == 3
        clock.advance(1.0)
        assert rec.calls == 5

    def test_backwards_rejected(self):
        with pytest.raises(ValueError, match="backwards"):
            ManualClock().advance(-1)


class TestCountdown:
    def test_fires_after_duration(self):
        clock = ManualClock()
        rec = Recorder()
        timer = Countdown(clock, rec).schedule(1000)
        clock.advance(0.9)
        assert rec.calls == 0
        assert timer.time_left_ms() == pytest.approx(100)
        clock.advance(0.2)
        assert rec.calls == 1
        assert timer.state == TimerState.IDLE

    def test_cancel_returns_remaining(self):
        clock = ManualClock()
        rec = Recorder()
        timer = Countdown(clock, rec).schedule(10_000)
        clock.advance(4.0)
        assert timer.cancel() == pytest.approx(6000)
        clock.advance(100)
        assert rec.calls == 0

    def test_suspend_and_reschedule_preserve_remaining(self):
        clock = ManualClock()
        rec = Recorder()
        timer = Countdown(clock, rec).schedule(10_000)
        clock.advance(4.0)
        assert timer.suspend() == pytest.approx(6000)
        assert timer.suspended
        clock.advance(100)
        assert rec.calls == 0
        timer.reschedule()
        clock.advance(5.9)
        assert rec.calls == 0
        clock.advance(0.2)
        assert rec.calls == 1

    def test_immediate_suspend_resume_is_identity(self):
        clock = ManualClock()
        timer = Countdown(clock, Recorder()).schedule(10_000)
        timer.suspend()
        timer.reschedule()
        assert timer.time_left_ms() == pytest.approx(10_000)

    def test_overdue_timer_fires_immediately_on_reschedule(self):
        clock = ManualClock()
        rec = Recorder()
        timer = Countdown(clock, rec)
        timer.reschedule(-50)
        assert clock.run_pending() == 1
        assert rec.calls == 1

    def test_schedule_replaces_pending_callback(self):
        clock = ManualClock()
        rec = Recorder()
        timer = Countdown(clock, rec).schedule(1000)
        timer.schedule(5000)
        clock.advance(2.0)
        assert rec.calls == 0
        clock.advance(4.0)
        assert rec.calls == 1

    @pytest.mark.asyncio
    async def test_runs_on_asyncio_loop(self):
        loop = asyncio.get_running_loop()
        rec = Recorder()
        timer = Countdown(loop, rec).schedule(20)
        assert timer.running
        await asyncio.sleep(0.1)
        assert rec.calls == 1
        assert not timer.running


class TestTimerGroup:
    def test_suspend_and_resume_all(self):
        clock = ManualClock()
        rec = Recorder()
        group = TimerGroup()
        first = group.add(Countdown(clock, rec, "first")).schedule(1000)
        second = group.add(Countdown(clock, rec, "second")).schedule(3000)
        group.add(Countdown(clock, rec, "idle"))

        clock.advance(0.5)
        assert group.suspend_all() == 2
        assert first.remaining_ms == pytest.approx(500)
        assert second.remaining_ms == pytest.approx(2500)
        clock.advance(60)
        assert rec.calls == 0

        assert group.resume_all() == 2
        clock.advance(0.6)
        assert rec.calls == 1
        clock.advance(2.0)
        assert rec.calls == 2

    def test_live(self):
        clock = ManualClock()
        group = TimerGroup()
        running = group.add(Countdown(clock, Recorder())).schedule(1000)
        group.add(Countdown(clock, Recorder()))
        assert group.live() == [running]
        assert len(group) == 2

    def test_discard_cancels(self):
        clock = ManualClock()
        rec = Recorder()
        group = TimerGroup()
        timer = group.add(Countdown(clock, rec)).schedule(1000)
        group.discard(timer)
        clock.advance(2.0)
        assert rec.calls == 0
        assert len(group) == 0

    def test_cancel_all(self):
        clock = ManualClock()
        rec = Recorder()
        group = TimerGroup()
        group.add(Countdown(clock, rec)).schedule(1000)
        group.add(Countdown(clock, rec)).schedule(2000)
        group.cancel_all()
        clock.advance(5.0)
        assert rec.calls == 0
        assert len(group) == 0
