"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from trainops.models.batch import Batch
from trainops.models.trainee import BatchTrainee
from trainops.models.batch_history import BatchHistory

__all__ = [
    "Batch",
    "BatchTrainee",
    "BatchHistory",
]
