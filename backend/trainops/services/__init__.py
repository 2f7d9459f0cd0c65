"""서비스 레이어 패키지 초기화 모듈입니다."""

from trainops.services import (
    batch_phase,
    batch_store,
    batch_phase_engine,
    batch_scheduler,
    batch_service,
)
