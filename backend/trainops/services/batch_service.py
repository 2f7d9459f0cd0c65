"""Batch Service 도메인 서비스 레이어입니다. 비즈니스 규칙과 데이터 접근 흐름을 캡슐화합니다."""

from typing import List, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from trainops.models.batch import Batch
from trainops.models.batch_history import BatchHistory
from trainops.models.trainee import BatchTrainee
from trainops.schemas.batch import BatchCreate, BatchUpdate
from trainops.schemas.trainee import BatchTraineeCreate, BatchTraineeUpdate
from trainops.services.batch_phase import SCHEDULE_FIELDS, BatchPhase


def _validate_schedule_order(values: dict) -> None:
    previous_field, previous_value = None, None
    for field in SCHEDULE_FIELDS:
        value = values.get(field)
        if value is None:
            continue
        if previous_value is not None and value < previous_value:
            raise HTTPException(
                status_code=400,
                detail=f"일정 순서가 올바르지 않습니다. ({field} < {previous_field})",
            )
        previous_field, previous_value = field, value


def get_batches(db: Session, organization_id: Optional[int] = None) -> List[Batch]:
    query = db.query(Batch)
    if organization_id is not None:
        query = query.filter(Batch.organization_id == organization_id)
    return query.order_by(Batch.created_at.desc(), Batch.batch_id.desc()).all()


def get_batch(db: Session, batch_id: int) -> Batch:
    batch = db.query(Batch).filter(Batch.batch_id == batch_id).first()
    if not batch:
        raise HTTPException(status_code=404, detail="차수를 찾을 수 없습니다.")
    return batch


def create_batch(db: Session, data: BatchCreate) -> Batch:
    payload = data.model_dump()
    _validate_schedule_order(payload)
    batch = Batch(**payload, phase=BatchPhase.PLANNED.value)
    db.add(batch)
    db.commit()
    db.refresh(batch)
    return batch


def update_batch(db: Session, batch_id: int, data: BatchUpdate) -> Batch:
    batch = get_batch(db, batch_id)
    payload = data.model_dump(exclude_none=True)
    merged = {field: getattr(batch, field) for field in SCHEDULE_FIELDS}
    merged.update(payload)
    _validate_schedule_order(merged)
    # 단계와 실제 일자는 단계 전환 엔진만 변경한다.
    for k, v in payload.items():
        setattr(batch, k, v)
    db.commit()
    db.refresh(batch)
    return batch


def delete_batch(db: Session, batch_id: int):
    batch = get_batch(db, batch_id)
    if batch.phase != BatchPhase.PLANNED.value:
        raise HTTPException(status_code=400, detail="planned 상태의 차수만 삭제할 수 있습니다.")
    db.delete(batch)
    db.commit()


def get_trainees(db: Session, batch_id: int) -> List[BatchTrainee]:
    get_batch(db, batch_id)
    return (
        db.query(BatchTrainee)
        .filter(BatchTrainee.batch_id == batch_id)
        .order_by(BatchTrainee.enrollment_id.asc())
        .all()
    )


def _get_trainee(db: Session, batch_id: int, enrollment_id: int) -> BatchTrainee:
    trainee = db.query(BatchTrainee).filter(
        BatchTrainee.batch_id == batch_id,
        BatchTrainee.enrollment_id == enrollment_id,
    ).first()
    if not trainee:
        raise HTTPException(status_code=404, detail="교육생 배정 정보를 찾을 수 없습니다.")
    return trainee


def add_trainee(db: Session, batch_id: int, data: BatchTraineeCreate) -> BatchTrainee:
    batch = get_batch(db, batch_id)
    if batch.phase == BatchPhase.COMPLETED.value:
        raise HTTPException(status_code=400, detail="완료된 차수에는 교육생을 추가할 수 없습니다.")

    existing = db.query(BatchTrainee).filter(
        BatchTrainee.batch_id == batch_id,
        BatchTrainee.emp_id == data.emp_id,
    ).first()
    if existing:
        raise HTTPException(status_code=409, detail="이미 차수에 배정된 교육생입니다.")

    trainee = BatchTrainee(batch_id=batch_id, **data.model_dump())
    db.add(trainee)
    db.commit()
    db.refresh(trainee)
    return trainee


def update_trainee(db: Session, batch_id: int, enrollment_id: int, data: BatchTraineeUpdate) -> BatchTrainee:
    trainee = _get_trainee(db, batch_id, enrollment_id)
    trainee.status = data.status
    db.commit()
    db.refresh(trainee)
    return trainee


def remove_trainee(db: Session, batch_id: int, enrollment_id: int):
    trainee = _get_trainee(db, batch_id, enrollment_id)
    db.delete(trainee)
    db.commit()


def get_history(db: Session, batch_id: int) -> List[BatchHistory]:
    get_batch(db, batch_id)
    return (
        db.query(BatchHistory)
        .filter(BatchHistory.batch_id == batch_id)
        .order_by(BatchHistory.created_at.desc(), BatchHistory.history_id.desc())
        .all()
    )
