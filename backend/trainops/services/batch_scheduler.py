"""차수 단계 전환 엔진을 일정 주기로 실행하는 백그라운드 스케줄러입니다."""

import asyncio
import logging
from typing import Optional

from trainops.services.batch_phase_engine import BatchPhaseEngine

logger = logging.getLogger(__name__)


class BatchPhaseScheduler:
    """run_tick()을 interval_seconds 간격으로 호출한다.

    start()는 실행 중인 이벤트 루프 안에서 호출해야 하며, stop()으로 종료를
    기다릴 수 있다. tick 자체는 동기 DB 작업이므로 워커 스레드에서 실행한다.
    """

    def __init__(self, engine: BatchPhaseEngine, interval_seconds: float = 60.0):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.engine = engine
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run(), name="batch-phase-scheduler")
        logger.info("[batch-phase] scheduler started (interval=%ss)", self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._stop_event.set()
        try:
            await self._task
        finally:
            self._task = None
            logger.info("[batch-phase] scheduler stopped")

    async def _run(self) -> None:
        while not self._stop_event.is_set():
            await asyncio.to_thread(self.engine.run_tick)
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                continue
