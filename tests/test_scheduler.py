"""Tests for the polled and asyncio schedulers."""

import asyncio

from engine.scheduler import AsyncioScheduler, TickScheduler


class TestTickScheduler:
    def test_runs_only_due_tasks(self, clock, scheduler):
        ran = []
        scheduler.call_later(100, lambda: ran.append("a"))
        scheduler.call_later(300, lambda: ran.append("b"))

        assert scheduler.run_pending() == 0
        clock.advance(100)
        assert scheduler.run_pending() == 1
        clock.advance(500)
        assert scheduler.run_pending() == 1
        assert ran == ["a", "b"]

    def test_due_order_then_insertion_order(self, clock, scheduler):
        ran = []
        scheduler.call_later(200, lambda: ran.append(2))
        scheduler.call_later(100, lambda: ran.append(1))
        scheduler.call_later(100, lambda: ran.append("1b"))
        clock.advance(1000)
        scheduler.run_pending()
        assert ran == [1, "1b", 2]

    def test_cancelled_task_never_runs(self, clock, scheduler):
        ran = []
        task = scheduler.call_later(100, lambda: ran.append("x"))
        task.cancel()
        assert not task.pending
        clock.advance(200)
        assert scheduler.run_pending() == 0
        assert ran == []

    def test_pending_and_next_due(self, clock, scheduler):
        assert scheduler.next_due() is None
        first = scheduler.call_later(500, lambda: None)
        scheduler.call_later(800, lambda: None)
        assert len(scheduler.pending()) == 2
        assert scheduler.next_due() == first.due
        first.cancel()
        assert scheduler.next_due() == 0.8

    def test_default_clock(self):
        sched = TickScheduler()
        task = sched.call_later(60_000, lambda: None)
        assert sched.run_pending() == 0
        assert task.pending


class TestAsyncioScheduler:
    def test_callback_fires_on_the_loop(self):
        async def scenario():
            sched = AsyncioScheduler()
            ran = []
            sched.call_later(1, lambda: ran.append("fired"))
            cancelled = sched.call_later(1, lambda: ran.append("cancelled"))
            cancelled.cancel()
            await asyncio.sleep(0.05)
            return ran

        assert asyncio.run(scenario()) == ["fired"]
