"""차수 단계 전환을 1회 실행합니다.

앱 내장 스케줄러를 끄고 cron/Task Scheduler로 돌릴 때 사용한다.
여러 번 실행해도 단계를 건너뛰거나 같은 전환을 중복 기록하지 않는다. 종료일이
여러 개 지난 차수는 실행할 때마다 한 단계씩 따라잡는다.
"""
import sys
import os
import logging
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from trainops.config import settings
from trainops.database import SessionLocal
from trainops.services.batch_phase_engine import BatchPhaseEngine


def run() -> None:
    BatchPhaseEngine(SessionLocal).run_tick()


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    run()
    print("Batch phase tick completed.")
