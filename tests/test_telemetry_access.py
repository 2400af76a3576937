# -*- coding: utf-8 -*-

from __future__ import annotations

import threading
import unittest

from workoutworks.access import can_mutate, can_view
from workoutworks.telemetry import AuthRequestTracker


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestAuthRequestTracker(unittest.TestCase):
    def test_burst_window_and_history(self) -> None:
        clock = _Clock()
        tracker = AuthRequestTracker(window_sec=10, burst_threshold=2, history_size=3, clock=clock)

        tracker.track("signin")
        tracker.track("cookie:/api/meals")
        self.assertFalse(tracker.is_bursting())

        with self.assertLogs("workoutworks.telemetry", level="WARNING"):
            self.assertEqual(tracker.track("cookie:/api/metrics"), 3)
        self.assertTrue(tracker.is_bursting())

        clock.now = 11.0
        stats = tracker.stats()
        self.assertEqual(stats.total, 3)
        self.assertEqual(stats.recent, 0)
        self.assertFalse(tracker.is_bursting())

        tracker.track("signup")
        stats = tracker.stats()
        self.assertEqual(stats.total, 4)
        self.assertEqual(stats.recent, 1)
        self.assertEqual(stats.sources, ["cookie:/api/meals", "cookie:/api/metrics", "signup"])

        tracker.reset()
        self.assertEqual(tracker.stats().total, 0)
        self.assertEqual(tracker.stats().sources, [])


    def test_concurrent_tracking_loses_no_counts(self) -> None:
        tracker = AuthRequestTracker(window_sec=60, burst_threshold=10_000, history_size=50)

        def worker(n: int) -> None:
            for i in range(500):
                tracker.track(f"worker-{n}:{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        stats = tracker.stats()
        self.assertEqual(stats.total, 4000)
        self.assertEqual(stats.recent, 50)


class TestAccess(unittest.TestCase):
    def test_only_owner_mutates(self) -> None:
        self.assertTrue(can_mutate("a", "a"))
        self.assertFalse(can_mutate("a", "b"))
        self.assertFalse(can_mutate("", ""))

    def test_view_requires_both_approved(self) -> None:
        self.assertTrue(can_view("a", "a", acting_approved=False, target_approved=False))
        self.assertTrue(can_view("a", "b", acting_approved=True, target_approved=True))
        self.assertFalse(can_view("a", "b", acting_approved=True, target_approved=False))
        self.assertFalse(can_view("a", "b", acting_approved=False, target_approved=True))


if __name__ == "__main__":
    unittest.main()
