import unittest

from focus import LoopScheduler


class _Clock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class LoopSchedulerTests(unittest.TestCase):
    def test_call_later_runs_once_when_due(self) -> None:
        clock = _Clock()
        scheduler = LoopScheduler(monotonic_fn=clock)
        calls: list[str] = []
        job = scheduler.call_later(1.5, lambda: calls.append("fired"))

        clock.now = 101.0
        self.assertEqual(0, scheduler.run_due())
        clock.now = 101.5
        self.assertEqual(1, scheduler.run_due())
        clock.now = 110.0
        self.assertEqual(0, scheduler.run_due())

        self.assertEqual(["fired"], calls)
        self.assertTrue(job.cancelled)

    def test_call_every_delivers_missed_periods_back_to_back(self) -> None:
        clock = _Clock()
        scheduler = LoopScheduler(monotonic_fn=clock)
        calls: list[float] = []
        scheduler.call_every(1.0, lambda: calls.append(clock.now))

        clock.now = 104.2
        self.assertEqual(4, scheduler.run_due())
        self.assertEqual(4, len(calls))
        self.assertAlmostEqual(0.8, scheduler.next_due_in() or 0.0)

    def test_cancelled_job_never_runs(self) -> None:
        clock = _Clock()
        scheduler = LoopScheduler(monotonic_fn=clock)
        calls: list[str] = []
        job = scheduler.call_every(1.0, lambda: calls.append("tick"))
        job.cancel()

        clock.now = 105.0
        scheduler.run_due()

        self.assertEqual([], calls)
        self.assertIsNone(scheduler.next_due_in())

    def test_job_can_cancel_itself_mid_catch_up(self) -> None:
        clock = _Clock()
        scheduler = LoopScheduler(monotonic_fn=clock)
        calls: list[int] = []

        def callback() -> None:
            calls.append(len(calls))
            if len(calls) == 2:
                job.cancel()

        job = scheduler.call_every(1.0, callback)
        clock.now = 110.0
        scheduler.run_due()

        self.assertEqual([0, 1], calls)

    def test_failing_callback_is_logged_and_others_still_run(self) -> None:
        clock = _Clock()
        scheduler = LoopScheduler(monotonic_fn=clock)
        calls: list[str] = []

        def boom() -> None:
            raise RuntimeError("boom")

        scheduler.call_later(0.5, boom)
        scheduler.call_later(1.0, lambda: calls.append("after"))
        clock.now = 101.0

        with self.assertLogs("scheduler", level="ERROR"):
            self.assertEqual(2, scheduler.run_due())
        self.assertEqual(["after"], calls)

    def test_rejects_non_positive_interval(self) -> None:
        with self.assertRaises(ValueError):
            LoopScheduler().call_every(0, lambda: None)
