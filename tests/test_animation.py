"""Tests for the frame scheduler and the self-rescheduling animation loop."""

import pytest

from double_slit.visualization.animation import AnimationLoop, ManualScheduler


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, timestamp, delta_time):
        self.calls.append((timestamp, delta_time))


@pytest.fixture
def scheduler():
    return ManualScheduler()


class TestManualScheduler:
    def test_handles_increase(self, scheduler):
        handles = [scheduler.request_frame(lambda ts: None) for _ in range(5)]
        assert handles == sorted(handles)
        assert len(set(handles)) == 5
        assert scheduler.last_handle == handles[-1]

    def test_cancel(self, scheduler):
        fired = []
        handle = scheduler.request_frame(fired.append)
        assert scheduler.cancel_frame(handle) is True
        assert scheduler.cancel_frame(handle) is False
        assert scheduler.run_pending(16.0) == 0
        assert fired == []

    def test_run_in_request_order(self, scheduler):
        order = []
        scheduler.request_frame(lambda ts: order.append("a"))
        scheduler.request_frame(lambda ts: order.append("b"))
        assert scheduler.run_pending(1.0) == 2
        assert order == ["a", "b"]
        assert scheduler.pending_count == 0

    def test_request_during_run_waits(self, scheduler):
        fired = []

        def again(ts):
            fired.append(ts)
            scheduler.request_frame(fired.append)

        scheduler.request_frame(again)
        scheduler.run_pending(1.0)
        assert fired == [1.0]
        assert scheduler.pending_count == 1
        scheduler.run_pending(2.0)
        assert fired == [1.0, 2.0]


class TestAnimationLoop:
    def test_start_schedules_one_frame(self, scheduler):
        loop = AnimationLoop(scheduler, Recorder())
        loop.start()
        assert loop.running
        assert scheduler.pending_count == 1
        loop.start()
        assert scheduler.pending_count == 1

    def test_reschedules_itself(self, scheduler):
        recorder = Recorder()
        loop = AnimationLoop(scheduler, recorder)
        loop.start()
        for ts in (16.0, 32.0, 48.0):
            scheduler.run_pending(ts)
        assert loop.frame_count == 3
        assert scheduler.pending_count == 1

    def test_delta_time(self, scheduler):
        recorder = Recorder()
        loop = AnimationLoop(scheduler, recorder)
        loop.start()
        scheduler.run_pending(16.0)
        scheduler.run_pending(40.0)
        assert recorder.calls == [(16.0, 16.0), (40.0, 24.0)]

    def test_handles_monotonic_across_frames(self, scheduler):
        loop = AnimationLoop(scheduler, Recorder())
        loop.start()
        seen = [loop.handle]
        for ts in range(1, 6):
            scheduler.run_pending(float(ts))
            seen.append(loop.handle)
        assert seen == sorted(seen)
        assert len(set(seen)) == len(seen)

    def test_stop_cancels_pending(self, scheduler):
        recorder = Recorder()
        loop = AnimationLoop(scheduler, recorder)
        loop.start()
        scheduler.run_pending(16.0)
        assert loop.stop() is True
        assert scheduler.pending_count == 0
        assert loop.handle is None
        scheduler.run_pending(32.0)
        assert len(recorder.calls) == 1

    def test_stop_twice(self, scheduler):
        loop = AnimationLoop(scheduler, Recorder())
        loop.start()
        assert loop.stop() is True
        assert loop.stop() is False

    def test_stop_inside_frame(self, scheduler):
        loop = AnimationLoop(scheduler, lambda ts, dt: loop.stop())
        loop.start()
        scheduler.run_pending(16.0)
        assert loop.frame_count == 1
        assert not loop.running
        assert scheduler.pending_count == 0

    def test_restart_inside_frame_keeps_single_pending(self, scheduler):
        loop = AnimationLoop(scheduler, lambda ts, dt: loop.restart())
        loop.start()
        scheduler.run_pending(16.0)
        scheduler.run_pending(32.0)
        assert scheduler.pending_count == 1
        assert loop.frame_count == 2

    def test_restart_resets_clock(self, scheduler):
        recorder = Recorder()
        loop = AnimationLoop(scheduler, recorder)
        loop.start()
        scheduler.run_pending(100.0)
        loop.restart()
        scheduler.run_pending(116.0)
        assert recorder.calls[-1] == (116.0, 116.0)

    def test_numeric_error_skips_frame(self, scheduler):
        def explode(ts, dt):
            raise ValueError("bad frame")

        loop = AnimationLoop(scheduler, explode)
        loop.start()
        scheduler.run_pending(16.0)
        assert loop.skipped_frames == 1
        assert loop.frame_count == 1
        assert scheduler.pending_count == 1

    def test_any_frame_error_keeps_loop_alive(self, scheduler):
        calls = []

        def flaky(ts, dt):
            calls.append(ts)
            if len(calls) == 1:
                raise KeyError("missing")

        loop = AnimationLoop(scheduler, flaky)
        loop.start()
        scheduler.run_pending(16.0)
        assert loop.running
        assert loop.skipped_frames == 1
        assert scheduler.pending_count == 1
        assert loop.handle is not None

        scheduler.run_pending(32.0)
        assert calls == [16.0, 32.0]
        assert loop.frame_count == 2
        assert loop.skipped_frames == 1
