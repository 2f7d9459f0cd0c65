"""차수 교육생 배정 요청/응답 스키마입니다."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

TraineeStatus = Literal["active", "inactive"]


class BatchTraineeCreate(BaseModel):
    emp_id: str
    name: str
    status: TraineeStatus = "active"


class BatchTraineeUpdate(BaseModel):
    status: TraineeStatus


class BatchTraineeOut(BaseModel):
    enrollment_id: int
    batch_id: int
    emp_id: str
    name: str
    status: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
