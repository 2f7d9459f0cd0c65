"""단계 전환 엔진이 사용하는 차수 레코드 저장소입니다.

커밋/롤백은 호출자가 관리한다. 단계 변경은 항상 조건부 UPDATE로 수행해
동시에 실행된 다른 tick이 이미 옮긴 차수를 다시 옮기지 않는다.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from trainops.models.batch import Batch
from trainops.models.batch_history import BatchHistory
from trainops.models.trainee import BatchTrainee
from trainops.services.batch_phase import BatchPhase

ACTIVE_TRAINEE_STATUS = "active"


def _phase_values(phases: Union[BatchPhase, Iterable[BatchPhase]]) -> List[str]:
    if isinstance(phases, (BatchPhase, str)):
        phases = [phases]
    return [BatchPhase(p).value for p in phases]


class BatchStore:
    def __init__(self, db: Session):
        self.db = db

    def get_batch(self, batch_id: int) -> Optional[Batch]:
        return self.db.query(Batch).filter(Batch.batch_id == batch_id).first()

    # 아래 *_refs 조회는 (batch_id, phase)만 읽는다. 일자 컬럼 값이 깨진 행이
    # 있어도 목록 조회 자체는 실패하지 않는다.

    def _refs(self, *criteria) -> List[Tuple[int, str]]:
        rows = (
            self.db.query(Batch.batch_id, Batch.phase)
            .filter(*criteria)
            .order_by(Batch.batch_id.asc())
            .all()
        )
        return [(row.batch_id, row.phase) for row in rows]

    def list_phase_refs(self, phases: Union[BatchPhase, Iterable[BatchPhase]]) -> List[Tuple[int, str]]:
        return self._refs(Batch.phase.in_(_phase_values(phases)))

    def list_planned_due_refs(self, before_day: date) -> List[Tuple[int, str]]:
        return self._refs(
            Batch.phase == BatchPhase.PLANNED.value,
            Batch.induction_start_date.isnot(None),
            Batch.induction_start_date < before_day,
        )

    def list_missing_induction_start_refs(self) -> List[Tuple[int, str]]:
        return self._refs(
            Batch.phase == BatchPhase.INDUCTION.value,
            Batch.actual_induction_start_date.is_(None),
        )

    def count_active_trainees(self, batch_id: int) -> int:
        return (
            self.db.query(func.count(BatchTrainee.enrollment_id))
            .filter(
                BatchTrainee.batch_id == batch_id,
                BatchTrainee.status == ACTIVE_TRAINEE_STATUS,
            )
            .scalar()
        ) or 0

    def update_batch(
        self,
        batch_id: int,
        fields: Dict[str, Any],
        expected_phase: Optional[BatchPhase] = None,
    ) -> Optional[Batch]:
        """부분 필드 업데이트. expected_phase가 다르면 아무것도 바꾸지 않고 None."""
        values = dict(fields)
        if "phase" in values:
            values["phase"] = BatchPhase(values["phase"]).value
        values["updated_at"] = datetime.now(timezone.utc).replace(tzinfo=None)

        stmt = update(Batch).where(Batch.batch_id == batch_id)
        if expected_phase is not None:
            stmt = stmt.where(Batch.phase == BatchPhase(expected_phase).value)
        result = self.db.execute(stmt.values(**values).execution_options(synchronize_session=False))
        if result.rowcount == 0:
            return None

        batch = self.get_batch(batch_id)
        if batch is not None:
            self.db.refresh(batch)
        return batch

    def add_history(
        self,
        batch: Batch,
        event_type: str,
        description: str,
        previous_value: Optional[str] = None,
        new_value: Optional[str] = None,
    ) -> BatchHistory:
        record = BatchHistory(
            batch_id=batch.batch_id,
            organization_id=batch.organization_id,
            event_type=event_type,
            description=description,
            previous_value=previous_value,
            new_value=new_value,
        )
        self.db.add(record)
        return record
