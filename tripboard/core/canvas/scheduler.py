"""
Cooperative timer and frame scheduling.

Everything runs on the caller's thread: the frontend advances the clock
from its own event loop and due callbacks fire synchronously inside
``advance``.
"""

import heapq
import itertools
import logging
from typing import Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


class FrameScheduler:
    """
    Manually-advanced clock with one-shot timers and per-frame callbacks.

    ``request_frame`` mirrors requestAnimationFrame: the callback runs once
    on the next frame and must request again to keep a loop alive.
    """

    def __init__(self, fps: float = 60.0):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.frame_interval = 1.0 / fps
        self.now = 0.0
        self.frame_count = 0
        self._handles = itertools.count(1)
        self._timers: List[Tuple[float, int, Callable[[], None]]] = []
        self._frames: Dict[int, Callable[[int], None]] = {}
        # timers that are scheduled and not cancelled; the heap may hold stale ones
        self._live_timers = set()
        self._next_frame_at = self.frame_interval

    def call_later(self, delay: float, callback: Callable[[], None]) -> int:
        handle = next(self._handles)
        heapq.heappush(self._timers, (self.now + max(0.0, delay), handle, callback))
        self._live_timers.add(handle)
        return handle

    def request_frame(self, callback: Callable[[int], None]) -> int:
        handle = next(self._handles)
        self._frames[handle] = callback
        return handle

    def cancel(self, handle: int):
        """Cancel a pending timer or frame callback. Unknown handles are ignored."""
        if handle in self._frames:
            del self._frames[handle]
        else:
            self._live_timers.discard(handle)

    def cancel_all(self):
        self._timers.clear()
        self._frames.clear()
        self._live_timers.clear()

    @property
    def pending(self) -> int:
        """Number of live timers and frame callbacks."""
        return len(self._live_timers) + len(self._frames)

    def _run_timers(self, until: float):
        while self._timers and self._timers[0][0] <= until:
            due, handle, callback = heapq.heappop(self._timers)
            if handle not in self._live_timers:
                continue
            self._live_timers.discard(handle)
            self.now = max(self.now, due)
            callback()

    def _run_frame(self):
        self.frame_count += 1
        frames, self._frames = self._frames, {}
        for callback in frames.values():
            callback(self.frame_count)

    def advance(self, seconds: float):
        """
        Move the clock forward, firing due timers and frames in time order.

        Args:
            seconds: Elapsed wall time since the previous call
        """
        target = self.now + max(0.0, seconds)
        while self._next_frame_at <= target:
            self._run_timers(self._next_frame_at)
            self.now = self._next_frame_at
            self._run_frame()
            self._next_frame_at += self.frame_interval
        self._run_timers(target)
        self.now = target
