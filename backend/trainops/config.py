"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./trainops.db"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    LOG_LEVEL: str = "INFO"

    # 차수 단계 자동 전환 스케줄러
    BATCH_PHASE_SCHEDULER_ENABLED: bool = True
    BATCH_PHASE_TICK_SECONDS: float = 60.0
    # 엔진 내부 날짜 비교 기준 타임존.
    BATCH_PHASE_TIMEZONE: str = "UTC"

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
