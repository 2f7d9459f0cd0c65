"""차수 단계 자동 전환 엔진입니다.

주기적으로 run_tick()이 호출되며, 한 번의 tick은 다음 순서로 동작한다.

1. 복구: 활성 단계인데 활성 교육생이 0명인 차수를 planned로 되돌린다.
2. 승급: 단계 종료일이 지난 차수를 다음 단계로 한 칸 이동한다.
3. 보정: induction 단계인데 실제 시작일이 비어 있는 차수에 오늘 날짜를 기록한다.

차수마다 별도 세션/트랜잭션으로 처리하므로 한 차수의 실패가 다른 차수에
영향을 주지 않는다. run_tick()은 호출자에게 예외를 던지지 않는다.
"""

import logging
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from trainops.services.batch_phase import (
    ACTIVE_PHASES,
    COMPLETION_FIELD,
    SCHEDULE_FIELDS,
    TERMINAL_PHASE,
    BatchPhase,
    actual_fields_from,
    descriptor_for,
    next_phase,
    parse_phase,
)
from trainops.services.batch_store import BatchStore
from trainops.utils.timezone import as_day, today_in

logger = logging.getLogger(__name__)

UNCHANGED = "unchanged"
SKIPPED = "skipped"
REPAIRED = "repaired"
PROMOTED = "promoted"
BACKFILLED = "backfilled"
FAILED = "failed"

Snapshot = List[Tuple[int, BatchPhase]]


class BatchPhaseEngine:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        today_provider: Optional[Callable[[], date]] = None,
    ):
        self.session_factory = session_factory
        self.today_provider = today_provider or today_in

    def run_tick(self) -> None:
        summary: Dict[str, int] = {REPAIRED: 0, PROMOTED: 0, BACKFILLED: 0, SKIPPED: 0, FAILED: 0}
        try:
            today = as_day(self.today_provider())
        except Exception:
            logger.exception("[batch-phase] tick aborted")
            return
        logger.debug("[batch-phase] tick started day=%s", today)

        self._run_each(self._guarded(self._snapshot_active, summary), self._repair_empty, today, summary)

        # 두 후보군을 쓰기 전에 함께 확정해 한 tick에 한 단계만 이동하도록 한다.
        planned_due = self._guarded(lambda: self._snapshot_planned_due(today), summary)
        active = self._guarded(self._snapshot_active, summary)
        self._run_each(planned_due, self._promote_planned, today, summary)
        self._run_each(active, self._promote_active, today, summary)

        self._run_each(
            self._guarded(self._snapshot_missing_induction_start, summary),
            self._backfill_induction_start,
            today,
            summary,
        )
        logger.info(
            "[batch-phase] tick completed day=%s repaired=%d promoted=%d backfilled=%d skipped=%d failed=%d",
            today,
            summary[REPAIRED],
            summary[PROMOTED],
            summary[BACKFILLED],
            summary[SKIPPED],
            summary[FAILED],
        )

    # ------------------------------------------------------------------
    # snapshots
    # ------------------------------------------------------------------

    def _guarded(self, reader: Callable[[], Snapshot], summary: Dict[str, int]) -> Snapshot:
        """목록 조회가 실패하면 해당 pass만 건너뛰고 나머지 pass는 계속 진행한다."""
        try:
            return reader()
        except Exception:
            logger.exception("[batch-phase] snapshot read failed; pass skipped")
            summary[FAILED] += 1
            return []

    def _read(self, loader) -> Snapshot:
        db = self.session_factory()
        try:
            return [(batch_id, parse_phase(phase)) for batch_id, phase in loader(BatchStore(db))]
        finally:
            db.close()

    def _snapshot_active(self) -> Snapshot:
        return self._read(lambda store: store.list_phase_refs(ACTIVE_PHASES))

    def _snapshot_planned_due(self, today: date) -> Snapshot:
        return self._read(lambda store: store.list_planned_due_refs(today))

    def _snapshot_missing_induction_start(self) -> Snapshot:
        return self._read(lambda store: store.list_missing_induction_start_refs())

    def _run_each(self, snapshot: Snapshot, handler, today: date, summary: Dict[str, int]) -> None:
        for batch_id, observed in snapshot:
            db = self.session_factory()
            try:
                outcome = handler(BatchStore(db), batch_id, observed, today)
                db.commit()
            except Exception:
                db.rollback()
                logger.exception(
                    "[batch-phase] %s failed for batch %s (phase=%s)",
                    handler.__name__.lstrip("_"),
                    batch_id,
                    observed.value,
                )
                outcome = FAILED
            finally:
                db.close()
            if outcome in summary:
                summary[outcome] += 1

    # ------------------------------------------------------------------
    # handlers
    # ------------------------------------------------------------------

    def _repair_empty(self, store: BatchStore, batch_id: int, observed: BatchPhase, today: date) -> str:
        if store.count_active_trainees(batch_id) > 0:
            return UNCHANGED

        fields = {field: None for field in actual_fields_from(observed)}
        fields.update({field: None for field in SCHEDULE_FIELDS})
        fields["phase"] = BatchPhase.PLANNED
        batch = store.update_batch(batch_id, fields, expected_phase=observed)
        if batch is None:
            return UNCHANGED

        store.add_history(
            batch,
            "phase_reset",
            f"Batch phase reset from {observed.value} to planned: no active trainees",
            observed.value,
            BatchPhase.PLANNED.value,
        )
        logger.warning(
            "[batch-phase] batch %s reset from %s to planned (no active trainees)",
            batch_id,
            observed.value,
        )
        return REPAIRED

    def _promote_planned(self, store: BatchStore, batch_id: int, observed: BatchPhase, today: date) -> str:
        batch = store.get_batch(batch_id)
        if batch is None or parse_phase(batch.phase) != BatchPhase.PLANNED:
            return UNCHANGED
        if batch.induction_start_date is None or as_day(batch.induction_start_date) >= today:
            return UNCHANGED
        if store.count_active_trainees(batch_id) == 0:
            logger.info("[batch-phase] batch %s not started: no active trainees", batch_id)
            return SKIPPED

        fields = {
            "phase": BatchPhase.INDUCTION,
            descriptor_for(BatchPhase.INDUCTION).actual_start_field: today,
        }
        return self._apply_transition(store, batch_id, BatchPhase.PLANNED, BatchPhase.INDUCTION, fields)

    def _promote_active(self, store: BatchStore, batch_id: int, observed: BatchPhase, today: date) -> str:
        batch = store.get_batch(batch_id)
        if batch is None or parse_phase(batch.phase) != observed:
            return UNCHANGED

        descriptor = descriptor_for(observed)
        end_value = getattr(batch, descriptor.end_date_field)
        if end_value is None:
            logger.info(
                "[batch-phase] batch %s has no %s; skipping",
                batch_id,
                descriptor.end_date_field,
            )
            return SKIPPED
        if today < as_day(end_value):
            return UNCHANGED

        target = next_phase(observed)
        if target is None:
            return UNCHANGED

        fields = {"phase": target, descriptor.actual_end_field: today}
        if target == TERMINAL_PHASE:
            fields[COMPLETION_FIELD] = today
        else:
            fields[descriptor_for(target).actual_start_field] = today
        return self._apply_transition(store, batch_id, observed, target, fields)

    def _backfill_induction_start(self, store: BatchStore, batch_id: int, observed: BatchPhase, today: date) -> str:
        field = descriptor_for(BatchPhase.INDUCTION).actual_start_field
        batch = store.get_batch(batch_id)
        if batch is None or getattr(batch, field) is not None:
            return UNCHANGED

        batch = store.update_batch(batch_id, {field: today}, expected_phase=BatchPhase.INDUCTION)
        if batch is None:
            return UNCHANGED
        store.add_history(batch, "milestone", f"Recorded actual induction start date {today.isoformat()}")
        logger.info("[batch-phase] batch %s actual induction start recorded as %s", batch_id, today)
        return BACKFILLED

    def _apply_transition(
        self,
        store: BatchStore,
        batch_id: int,
        current: BatchPhase,
        target: BatchPhase,
        fields: Dict[str, object],
    ) -> str:
        batch = store.update_batch(batch_id, fields, expected_phase=current)
        if batch is None:
            # 다른 tick이 먼저 전환했다.
            return UNCHANGED
        store.add_history(
            batch,
            "phase_change",
            f"Batch phase changed from {current.value} to {target.value}",
            current.value,
            target.value,
        )
        logger.info("[batch-phase] batch %s moved from %s to %s", batch_id, current.value, target.value)
        return PROMOTED
