"""Batches 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from typing import List, Optional
from trainops.database import get_db
from trainops.schemas.batch import BatchCreate, BatchUpdate, BatchOut
from trainops.schemas.batch_history import BatchHistoryOut
from trainops.schemas.trainee import BatchTraineeCreate, BatchTraineeUpdate, BatchTraineeOut
from trainops.services import batch_service

router = APIRouter(prefix="/api/batches", tags=["batches"])


@router.get("", response_model=List[BatchOut])
def list_batches(organization_id: Optional[int] = None, db: Session = Depends(get_db)):
    return batch_service.get_batches(db, organization_id)


@router.post("", response_model=BatchOut)
def create_batch(data: BatchCreate, db: Session = Depends(get_db)):
    return batch_service.create_batch(db, data)


@router.post("/phase-sync")
def run_phase_sync(request: Request):
    engine = getattr(request.app.state, "batch_phase_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="단계 전환 엔진이 초기화되지 않았습니다.")
    engine.run_tick()
    return {"message": "단계 전환 점검을 실행했습니다."}


@router.get("/{batch_id}", response_model=BatchOut)
def get_batch(batch_id: int, db: Session = Depends(get_db)):
    return batch_service.get_batch(db, batch_id)


@router.put("/{batch_id}", response_model=BatchOut)
def update_batch(batch_id: int, data: BatchUpdate, db: Session = Depends(get_db)):
    return batch_service.update_batch(db, batch_id, data)


@router.delete("/{batch_id}")
def delete_batch(batch_id: int, db: Session = Depends(get_db)):
    batch_service.delete_batch(db, batch_id)
    return {"message": "삭제되었습니다."}


@router.get("/{batch_id}/trainees", response_model=List[BatchTraineeOut])
def list_trainees(batch_id: int, db: Session = Depends(get_db)):
    return batch_service.get_trainees(db, batch_id)


@router.post("/{batch_id}/trainees", response_model=BatchTraineeOut)
def add_trainee(batch_id: int, data: BatchTraineeCreate, db: Session = Depends(get_db)):
    return batch_service.add_trainee(db, batch_id, data)


@router.put("/{batch_id}/trainees/{enrollment_id}", response_model=BatchTraineeOut)
def update_trainee(
    batch_id: int,
    enrollment_id: int,
    data: BatchTraineeUpdate,
    db: Session = Depends(get_db),
):
    return batch_service.update_trainee(db, batch_id, enrollment_id, data)


@router.delete("/{batch_id}/trainees/{enrollment_id}")
def remove_trainee(batch_id: int, enrollment_id: int, db: Session = Depends(get_db)):
    batch_service.remove_trainee(db, batch_id, enrollment_id)
    return {"message": "삭제되었습니다."}


@router.get("/{batch_id}/history", response_model=List[BatchHistoryOut])
def list_history(batch_id: int, db: Session = Depends(get_db)):
    return batch_service.get_history(db, batch_id)
