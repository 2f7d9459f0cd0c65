"""차수별 교육생 배정 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from trainops.database import Base


class BatchTrainee(Base):
    __tablename__ = "batch_trainee"

    enrollment_id = Column(Integer, primary_key=True, autoincrement=True)
    batch_id = Column(Integer, ForeignKey("batch.batch_id", ondelete="CASCADE"), nullable=False)
    emp_id = Column(String(20), nullable=False)
    name = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default="active")  # active/inactive
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    batch = relationship("Batch", back_populates="trainees")

    __table_args__ = (
        UniqueConstraint("batch_id", "emp_id", name="uq_batch_trainee_emp"),
    )
