"""Batch 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime


class BatchSchedule(BaseModel):
    induction_start_date: Optional[date] = None
    induction_end_date: Optional[date] = None
    training_end_date: Optional[date] = None
    certification_end_date: Optional[date] = None
    ojt_end_date: Optional[date] = None
    ojt_certification_end_date: Optional[date] = None


class BatchCreate(BatchSchedule):
    organization_id: int
    batch_name: str
    induction_start_date: date


class BatchUpdate(BatchSchedule):
    batch_name: Optional[str] = None


class BatchOut(BatchSchedule):
    batch_id: int
    organization_id: int
    batch_name: str
    phase: str
    actual_induction_start_date: Optional[date] = None
    actual_induction_end_date: Optional[date] = None
    actual_training_start_date: Optional[date] = None
    actual_training_end_date: Optional[date] = None
    actual_certification_start_date: Optional[date] = None
    actual_certification_end_date: Optional[date] = None
    actual_ojt_start_date: Optional[date] = None
    actual_ojt_end_date: Optional[date] = None
    actual_ojt_certification_start_date: Optional[date] = None
    actual_ojt_certification_end_date: Optional[date] = None
    actual_completion_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
