from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class BatchHistoryOut(BaseModel):
    history_id: int
    batch_id: int
    organization_id: int
    event_type: str
    description: str
    previous_value: Optional[str] = None
    new_value: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
