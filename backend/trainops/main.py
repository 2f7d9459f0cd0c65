"""FastAPI 애플리케이션 진입점. 미들웨어, API 라우터, 차수 단계 스케줄러를 등록합니다."""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from trainops.config import settings
from trainops.database import Base, SessionLocal, engine
import trainops.models  # noqa: F401 - 모델 import로 metadata 등록
from trainops.routers import batches
from trainops.services.batch_phase_engine import BatchPhaseEngine
from trainops.services.batch_scheduler import BatchPhaseScheduler

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="TrainOps 교육 차수 관리 시스템",
    description="교육 차수의 단계(induction~ojt_certification) 진행을 관리하는 시스템",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(batches.router)

app.state.batch_phase_engine = BatchPhaseEngine(SessionLocal)
app.state.batch_phase_scheduler = None


@app.on_event("startup")
async def startup():
    Base.metadata.create_all(bind=engine)
    if not settings.BATCH_PHASE_SCHEDULER_ENABLED:
        logger.info("[batch-phase] scheduler disabled by configuration")
        return
    scheduler = BatchPhaseScheduler(app.state.batch_phase_engine, settings.BATCH_PHASE_TICK_SECONDS)
    scheduler.start()
    app.state.batch_phase_scheduler = scheduler


@app.on_event("shutdown")
async def shutdown():
    scheduler = app.state.batch_phase_scheduler
    if scheduler is not None:
        await scheduler.stop()
        app.state.batch_phase_scheduler = None


@app.get("/api/health")
def health_check():
    scheduler = app.state.batch_phase_scheduler
    return {
        "status": "ok",
        "service": "TrainOps 교육 차수 관리 시스템",
        "batch_phase_scheduler": bool(scheduler and scheduler.is_running),
    }
