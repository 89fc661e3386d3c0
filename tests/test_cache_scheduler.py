"""
Laser Reveal — Cache & Scheduler Tests

Run with: pytest tests/test_cache_scheduler.py -v
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reveal.cache import DistanceKey, GridKey, KeyedCache
from reveal.scheduler import FrameScheduler


# ---------------------------------------------------------------------------
# CACHE
# ---------------------------------------------------------------------------

class TestKeyedCache:

    def test_builds_once_per_key(self):
        cache = KeyedCache("grid")
        calls = []
        key = GridKey(100, 50, 16, "ltr")
        first = cache.get(key, lambda: calls.append(1) or ["value"])
        second = cache.get(GridKey(100, 50, 16, "ltr"), lambda: calls.append(1) or ["other"])
        assert first is second
        assert len(calls) == 1
        assert cache.builds == 1

    def test_key_change_rebuilds(self):
        cache = KeyedCache()
        cache.get(DistanceKey(2, 3, "ltr"), lambda: "a")
        assert cache.get(DistanceKey(2, 3, "rtl"), lambda: "b") == "b"
        assert cache.builds == 2

    def test_clear(self):
        cache = KeyedCache()
        cache.get(DistanceKey(1, 1, "ltr"), lambda: "a")
        cache.clear()
        assert cache.is_empty
        assert cache.get(DistanceKey(1, 1, "ltr"), lambda: "b") == "b"

    def test_keys_compare_by_value(self):
        assert GridKey(10, 10, 16, "ltr") == GridKey(10, 10, 16.0, "ltr")
        assert GridKey(10, 10, 16, "ltr") != GridKey(10, 10, 16, "zigzag")


# ---------------------------------------------------------------------------
# SCHEDULER
# ---------------------------------------------------------------------------

class TestFrameScheduler:

    def test_fires_with_timestamp(self):
        scheduler = FrameScheduler()
        seen = []
        scheduler.request_frame(seen.append)
        assert scheduler.run_pending(42.0) == 1
        assert seen == [42.0]
        assert scheduler.run_pending(43.0) == 0

    def test_frames_requested_during_run_wait_for_next_pump(self):
        scheduler = FrameScheduler()
        seen = []

        def tick(ts):
            seen.append(ts)
            scheduler.request_frame(tick)

        scheduler.request_frame(tick)
        scheduler.run_pending(1)
        assert seen == [1]
        scheduler.run_pending(2)
        assert seen == [1, 2]

    def test_cancel_prevents_callback(self):
        scheduler = FrameScheduler()
        seen = []
        handle = scheduler.request_frame(seen.append)
        scheduler.cancel(handle)
        assert not scheduler.has_pending
        scheduler.run_pending(1)
        assert seen == []

    def test_cancel_is_idempotent(self):
        scheduler = FrameScheduler()
        handle = scheduler.request_frame(lambda ts: None)
        scheduler.cancel(handle)
        scheduler.cancel(handle)
        scheduler.cancel(None)
        assert handle.cancelled

    def test_cancel_after_fire_is_noop(self):
        scheduler = FrameScheduler()
        handle = scheduler.request_frame(lambda ts: None)
        scheduler.run_pending(0)
        scheduler.cancel(handle)
        assert handle.fired
        assert not handle.pending
