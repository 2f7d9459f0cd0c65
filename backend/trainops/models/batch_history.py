"""차수 단계 변경 이력 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from trainops.database import Base


class BatchHistory(Base):
    __tablename__ = "batch_history"

    history_id = Column(Integer, primary_key=True, autoincrement=True)
    batch_id = Column(Integer, ForeignKey("batch.batch_id", ondelete="CASCADE"), nullable=False, index=True)
    organization_id = Column(Integer, nullable=False)
    event_type = Column(String(30), nullable=False)  # phase_change/phase_reset/milestone
    description = Column(Text, nullable=False)
    previous_value = Column(String(30), nullable=True)
    new_value = Column(String(30), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    batch = relationship("Batch", back_populates="history")
