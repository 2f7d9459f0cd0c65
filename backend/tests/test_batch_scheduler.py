import asyncio
import threading

import pytest

from trainops.services.batch_scheduler import BatchPhaseScheduler


class CountingEngine:
    def __init__(self):
        self.calls = 0
        self.threads = set()
        self._lock = threading.Lock()

    def run_tick(self):
        with self._lock:
            self.calls += 1
            self.threads.add(threading.get_ident())


def test_scheduler_runs_ticks_until_stopped():
    engine = CountingEngine()

    async def scenario():
        scheduler = BatchPhaseScheduler(engine, interval_seconds=0.01)
        scheduler.start()
        assert scheduler.is_running
        await asyncio.sleep(0.2)
        await scheduler.stop()
        return scheduler

    scheduler = asyncio.run(scenario())

    assert engine.calls >= 2
    assert not scheduler.is_running
    # tick은 이벤트 루프 스레드가 아닌 워커 스레드에서 실행된다.
    assert threading.get_ident() not in engine.threads


def test_stop_interrupts_long_interval():
    engine = CountingEngine()

    async def scenario():
        scheduler = BatchPhaseScheduler(engine, interval_seconds=3600)
        scheduler.start()
        await asyncio.sleep(0.05)
        await asyncio.wait_for(scheduler.stop(), timeout=2)

    asyncio.run(scenario())

    assert engine.calls == 1


def test_start_is_idempotent_and_stop_without_start_is_safe():
    engine = CountingEngine()

    async def scenario():
        scheduler = BatchPhaseScheduler(engine, interval_seconds=3600)
        await scheduler.stop()
        scheduler.start()
        first_task = scheduler._task
        scheduler.start()
        assert scheduler._task is first_task
        await scheduler.stop()

    asyncio.run(scenario())


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        BatchPhaseScheduler(CountingEngine(), interval_seconds=0)
