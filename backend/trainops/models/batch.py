"""Batch(차수) 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Date, DateTime, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from trainops.database import Base


class Batch(Base):
    __tablename__ = "batch"

    batch_id = Column(Integer, primary_key=True, autoincrement=True)
    organization_id = Column(Integer, nullable=False)
    batch_name = Column(String(100), nullable=False)
    # planned/induction/training/certification/ojt/ojt_certification/completed
    phase = Column(String(30), nullable=False, default="planned")

    # Planned schedule
    induction_start_date = Column(Date, nullable=True)
    induction_end_date = Column(Date, nullable=True)
    training_end_date = Column(Date, nullable=True)
    certification_end_date = Column(Date, nullable=True)
    ojt_end_date = Column(Date, nullable=True)
    ojt_certification_end_date = Column(Date, nullable=True)

    # 실제 전환 일자는 단계 전환 엔진만 기록한다.
    actual_induction_start_date = Column(Date, nullable=True)
    actual_induction_end_date = Column(Date, nullable=True)
    actual_training_start_date = Column(Date, nullable=True)
    actual_training_end_date = Column(Date, nullable=True)
    actual_certification_start_date = Column(Date, nullable=True)
    actual_certification_end_date = Column(Date, nullable=True)
    actual_ojt_start_date = Column(Date, nullable=True)
    actual_ojt_end_date = Column(Date, nullable=True)
    actual_ojt_certification_start_date = Column(Date, nullable=True)
    actual_ojt_certification_end_date = Column(Date, nullable=True)
    actual_completion_date = Column(Date, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    trainees = relationship("BatchTrainee", back_populates="batch", cascade="all, delete-orphan")
    history = relationship("BatchHistory", back_populates="batch", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_batch_org", "organization_id"),
        Index("idx_batch_phase", "phase"),
    )
