"""차수 단계 순서와 단계별 일자 필드 매핑을 정의합니다."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from trainops.models.batch import Batch


class BatchPhase(str, Enum):
    PLANNED = "planned"
    INDUCTION = "induction"
    TRAINING = "training"
    CERTIFICATION = "certification"
    OJT = "ojt"
    OJT_CERTIFICATION = "ojt_certification"
    COMPLETED = "completed"


PHASE_ORDER: Tuple[BatchPhase, ...] = tuple(BatchPhase)

ACTIVE_PHASES: Tuple[BatchPhase, ...] = (
    BatchPhase.INDUCTION,
    BatchPhase.TRAINING,
    BatchPhase.CERTIFICATION,
    BatchPhase.OJT,
    BatchPhase.OJT_CERTIFICATION,
)

TERMINAL_PHASE = BatchPhase.COMPLETED

# 모든 단계에 대한 전진 전환표. 역방향 전환은 빈 차수 복구에서만 일어난다.
NEXT_PHASE: Dict[BatchPhase, Optional[BatchPhase]] = {
    BatchPhase.PLANNED: BatchPhase.INDUCTION,
    BatchPhase.INDUCTION: BatchPhase.TRAINING,
    BatchPhase.TRAINING: BatchPhase.CERTIFICATION,
    BatchPhase.CERTIFICATION: BatchPhase.OJT,
    BatchPhase.OJT: BatchPhase.OJT_CERTIFICATION,
    BatchPhase.OJT_CERTIFICATION: BatchPhase.COMPLETED,
    BatchPhase.COMPLETED: None,
}


@dataclass(frozen=True)
class PhaseDescriptor:
    phase: BatchPhase
    end_date_field: str
    actual_start_field: str
    actual_end_field: str


def _descriptor(phase: BatchPhase, end_date, actual_start, actual_end) -> PhaseDescriptor:
    # 모델 속성을 직접 참조하므로 컬럼명이 틀리면 import 시점에 실패한다.
    return PhaseDescriptor(
        phase=phase,
        end_date_field=end_date.key,
        actual_start_field=actual_start.key,
        actual_end_field=actual_end.key,
    )


PHASE_DESCRIPTORS: Dict[BatchPhase, PhaseDescriptor] = {
    BatchPhase.INDUCTION: _descriptor(
        BatchPhase.INDUCTION,
        Batch.induction_end_date,
        Batch.actual_induction_start_date,
        Batch.actual_induction_end_date,
    ),
    BatchPhase.TRAINING: _descriptor(
        BatchPhase.TRAINING,
        Batch.training_end_date,
        Batch.actual_training_start_date,
        Batch.actual_training_end_date,
    ),
    BatchPhase.CERTIFICATION: _descriptor(
        BatchPhase.CERTIFICATION,
        Batch.certification_end_date,
        Batch.actual_certification_start_date,
        Batch.actual_certification_end_date,
    ),
    BatchPhase.OJT: _descriptor(
        BatchPhase.OJT,
        Batch.ojt_end_date,
        Batch.actual_ojt_start_date,
        Batch.actual_ojt_end_date,
    ),
    BatchPhase.OJT_CERTIFICATION: _descriptor(
        BatchPhase.OJT_CERTIFICATION,
        Batch.ojt_certification_end_date,
        Batch.actual_ojt_certification_start_date,
        Batch.actual_ojt_certification_end_date,
    ),
}

COMPLETION_FIELD = Batch.actual_completion_date.key

SCHEDULE_FIELDS: Tuple[str, ...] = (
    Batch.induction_start_date.key,
    *(d.end_date_field for d in PHASE_DESCRIPTORS.values()),
)


def parse_phase(value) -> BatchPhase:
    """DB 문자열 값을 BatchPhase로 변환한다. 알 수 없는 값이면 ValueError."""
    return value if isinstance(value, BatchPhase) else BatchPhase(value)


def next_phase(current: BatchPhase) -> Optional[BatchPhase]:
    return NEXT_PHASE[parse_phase(current)]


def descriptor_for(phase: BatchPhase) -> PhaseDescriptor:
    """활성 단계의 일자 필드 묶음. planned/completed는 KeyError."""
    return PHASE_DESCRIPTORS[parse_phase(phase)]


def is_active(phase: BatchPhase) -> bool:
    return parse_phase(phase) in ACTIVE_PHASES


def phases_from(phase: BatchPhase) -> Tuple[BatchPhase, ...]:
    """주어진 단계와 그 이후 단계들을 순서대로 반환한다."""
    current = parse_phase(phase)
    return PHASE_ORDER[PHASE_ORDER.index(current):]


def actual_fields_from(phase: BatchPhase) -> Tuple[str, ...]:
    """주어진 단계부터 완료까지 기록되는 실제 일자 필드 목록."""
    fields = []
    for item in phases_from(phase):
        descriptor = PHASE_DESCRIPTORS.get(item)
        if descriptor is not None:
            fields.extend([descriptor.actual_start_field, descriptor.actual_end_field])
    fields.append(COMPLETION_FIELD)
    return tuple(fields)
