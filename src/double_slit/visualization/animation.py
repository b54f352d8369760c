"""Self-rescheduling frame loop driven by a refresh-cadence scheduler."""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class ManualScheduler:
    """Frame scheduler fired explicitly once per display refresh.

    request_frame hands out monotonically increasing handles; callbacks run
    on the next run_pending call, and a callback that requests another frame
    waits for the call after that.
    """

    def __init__(self) -> None:
        self._next_handle: int = 0
        self._pending: dict[int, FrameCallback] = {}

    def request_frame(self, callback: FrameCallback) -> int:
        self._next_handle += 1
        self._pending[self._next_handle] = callback
        return self._next_handle

    def cancel_frame(self, handle: int) -> bool:
        """Cancel a pending frame. Returns False if it already ran or was cancelled."""
        return self._pending.pop(handle, None) is not None

    def run_pending(self, timestamp: float) -> int:
        """Fire every callback pending at call time. Returns how many ran."""
        due, self._pending = self._pending, {}
        for handle in sorted(due):
            due[handle](timestamp)
        return len(due)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def last_handle(self) -> int:
        return self._next_handle


class AnimationLoop:
    """Run on_frame(timestamp, delta_time) once per refresh until stopped.

    Exactly one frame is pending while the loop runs; stop() cancels that
    one handle. A frame that raises is logged and skipped without
    breaking the loop.
    """

    def __init__(
        self,
        scheduler: ManualScheduler,
        on_frame: Callable[[float, float], None],
    ) -> None:
        self.scheduler = scheduler
        self.on_frame = on_frame

        self.handle: int | None = None
        self.running: bool = False
        self.frame_count: int = 0
        self.skipped_frames: int = 0
        self._last_timestamp: float = 0.0

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        self._last_timestamp = 0.0
        self.handle = self.scheduler.request_frame(self._tick)

    def stop(self) -> bool:
        """Cancel the pending frame. Returns True if one was cancelled."""
        self.running = False
        if self.handle is None:
            return False
        cancelled = self.scheduler.cancel_frame(self.handle)
        self.handle = None
        return cancelled

    def restart(self) -> None:
        self.stop()
        self.start()

    def _tick(self, timestamp: float) -> None:
        self.handle = None
        delta_time = timestamp - self._last_timestamp
        self._last_timestamp = timestamp

        try:
            self.on_frame(timestamp, delta_time)
        except Exception:
            self.skipped_frames += 1
            logger.exception("Frame %d skipped", self.frame_count)
        self.frame_count += 1

        # on_frame may have restarted the loop, which already queued a frame
        if self.running and self.handle is None:
            self.handle = self.scheduler.request_frame(self._tick)
