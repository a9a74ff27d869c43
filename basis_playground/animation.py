"""
Ping-pong animation of t between 0 and 1.

The host supplies a FrameScheduler (its "call me on the next display refresh"
primitive). FrameLoop turns frame timestamps into elapsed milliseconds and
AnimationDriver turns elapsed time into AdvanceAnimation commands.
"""

import logging
import time
from typing import Any, Callable, Protocol

from .constants import ANIMATION_SPEED, FRAME_INTERVAL_MS
from .state import AdvanceAnimation

logger = logging.getLogger(__name__)


def advance(t, direction, elapsed_ms, speed=ANIMATION_SPEED):
    """
    One ping-pong step. Returns the new (t, direction); direction flips only
    when t hits a bound, where t is clamped.
    """
    next_t = t + elapsed_ms * speed * direction
    if next_t >= 1.0:
        return 1.0, -1
    if next_t <= 0.0:
        return 0.0, 1
    return next_t, direction


class AnimationDriver:
    """
    Advances the store's t while it is playing. The direction survives
    pause/resume so a paused sweep continues the way it was going.
    """

    def __init__(self, store, speed=ANIMATION_SPEED):
        self.store = store
        self.speed = speed
        self.direction = 1

    def tick(self, elapsed_ms):
        state = self.store.state
        if not state.is_playing:
            return
        t, direction = advance(state.t, self.direction, elapsed_ms, self.speed)
        if direction != self.direction:
            logger.debug("animation bounced at t=%s", t)
        self.direction = direction
        self.store.dispatch(AdvanceAnimation(t))


# ---------- Frame scheduling ----------

class FrameScheduler(Protocol):
    def request_frame(self, callback: Callable[[float], None]) -> Any:
        """Call callback(timestamp_ms) once on the next refresh; return a handle."""

    def cancel_frame(self, handle: Any) -> None:
        """Drop a pending request so its callback never fires."""


class FrameLoop:
    """
    Repeating frame callback that reports elapsed time between frames.

    The first frame after activation only records its timestamp, and
    deactivating forgets it, so time spent paused is never reported.
    """

    def __init__(self, scheduler, on_tick):
        self.scheduler = scheduler
        self.on_tick = on_tick
        self.active = False
        self._handle = None
        self._previous = None

    def set_active(self, active):
        active = bool(active)
        if active == self.active:
            return
        self.active = active
        if active:
            self._previous = None
            self._handle = self.scheduler.request_frame(self._frame)
        else:
            self._cancel()

    def close(self):
        self.active = False
        self._cancel()

    def _cancel(self):
        if self._handle is not None:
            self.scheduler.cancel_frame(self._handle)
            self._handle = None
        self._previous = None

    def _frame(self, timestamp):
        self._handle = None
        if not self.active:
            return
        previous, self._previous = self._previous, timestamp
        if previous is not None:
            self.on_tick(timestamp - previous)
        # on_tick may have deactivated us
        if self.active and self._handle is None:
            self._handle = self.scheduler.request_frame(self._frame)


class SteppedFrameScheduler:
    """
    FrameScheduler for hosts without an event loop (a Streamlit script run,
    tests): run() delivers pending frames one at a time, sleeping one frame
    interval before each.
    """

    def __init__(self, interval_ms=FRAME_INTERVAL_MS, clock=None, sleep=time.sleep):
        self.interval_ms = interval_ms
        self.clock = clock or (lambda: time.perf_counter() * 1000.0)
        self.sleep = sleep
        self._pending = None

    def request_frame(self, callback):
        self._pending = callback
        return callback

    def cancel_frame(self, handle):
        if self._pending is handle:
            self._pending = None

    @property
    def has_pending(self):
        return self._pending is not None

    def run(self, n_frames, after_frame=None):
        """Deliver up to n_frames frames; returns how many were delivered."""
        delivered = 0
        while delivered < n_frames and self._pending is not None:
            self.sleep(self.interval_ms / 1000.0)
            callback, self._pending = self._pending, None
            callback(self.clock())
            delivered += 1
            if after_frame is not None:
                after_frame()
        return delivered
