"""
Timer queue
----------------------------------------------
Millisecond setTimeout / setInterval queue. The window loop feeds it the
clock's frame time; tests advance it by hand.
"""

import heapq
import itertools


class TimerHandle:
    """Cancellable reference to one scheduled callback."""

    __slots__ = ("deadline_ms", "interval_ms", "callback", "args", "cancelled", "fired")

    def __init__(self, deadline_ms, callback, args=(), interval_ms=None):
        self.deadline_ms = deadline_ms
        self.interval_ms = interval_ms
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    @property
    def repeating(self):
        return self.interval_ms is not None

    @property
    def active(self):
        if self.cancelled:
            return False
        return self.repeating or not self.fired

    def cancel(self):
        self.cancelled = True

    def __repr__(self):
        state = "active" if self.active else "done"
        return f"<TimerHandle {getattr(self.callback, '__name__', self.callback)} @{self.deadline_ms}ms {state}>"


class TimerQueue:
    def __init__(self, now_ms=0):
        self._now = int(now_ms)
        self._heap = []
        self._seq = itertools.count()

    @property
    def now_ms(self):
        return self._now

    @property
    def pending(self):
        return sum(1 for _, _, h in self._heap if h.active)

    def set_timeout(self, delay_ms, callback, *args):
        if delay_ms < 0:
            raise ValueError(f"delay must be >= 0 ms, got {delay_ms}")
        handle = TimerHandle(self._now + int(delay_ms), callback, args)
        self._push(handle)
        return handle

    def set_interval(self, interval_ms, callback, *args):
        if interval_ms <= 0:
            raise ValueError(f"interval must be > 0 ms, got {interval_ms}")
        interval_ms = int(interval_ms)
        handle = TimerHandle(self._now + interval_ms, callback, args, interval_ms=interval_ms)
        self._push(handle)
        return handle

    def _push(self, handle):
        heapq.heappush(self._heap, (handle.deadline_ms, next(self._seq), handle))

    def advance(self, dt_ms):
        """
        Move the clock forward by dt_ms and run everything that came due.

        Callbacks see now_ms equal to their own deadline. Timers they
        schedule inside the window fire in the same call.
        Returns the number of callbacks run.
        """
        if dt_ms < 0:
            raise ValueError(f"cannot advance by a negative amount ({dt_ms} ms)")
        target = self._now + int(dt_ms)
        ran = 0
        while self._heap and self._heap[0][0] <= target:
            deadline, _, handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            self._now = deadline
            if handle.repeating:
                handle.deadline_ms = deadline + handle.interval_ms
                self._push(handle)
            else:
                handle.fired = True
            handle.callback(*handle.args)
            ran += 1
        self._now = target
        return ran

    def cancel_all(self):
        for _, _, handle in self._heap:
            handle.cancel()
        self._heap.clear()
