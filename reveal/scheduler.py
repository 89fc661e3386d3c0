"""
Laser Reveal — Frame Scheduler

Cooperative, single-threaded frame callbacks. A callback asks for the
next frame from inside itself; the host pumps the queue once per display
frame with the current timestamp (ms):

    scheduler = FrameScheduler()
    handle = scheduler.request_frame(tick)
    ...
    scheduler.run_pending(now_ms)   # once per display refresh

Frames requested while a batch runs wait for the next pump, so no two
frames ever run in the same pump. Cancelling is idempotent.
"""


class FrameHandle:
    """Token for one requested frame."""

    __slots__ = ("callback", "cancelled", "fired")

    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False
        self.fired = False

    @property
    def pending(self):
        return not (self.cancelled or self.fired)

    def cancel(self):
        self.cancelled = True


class FrameScheduler:

    def __init__(self):
        self._queue = []

    def request_frame(self, callback) -> FrameHandle:
        handle = FrameHandle(callback)
        self._queue.append(handle)
        return handle

    def cancel(self, handle):
        """Cancel a requested frame. None or already-cancelled is a no-op."""
        if handle is not None:
            handle.cancel()

    @property
    def has_pending(self):
        return any(h.pending for h in self._queue)

    def run_pending(self, timestamp):
        """Fire every frame requested before this call. Returns count fired."""
        batch, self._queue = self._queue, []
        fired = 0
        for handle in batch:
            if not handle.pending:
                continue
            handle.fired = True
            handle.callback(timestamp)
            fired += 1
        return fired
