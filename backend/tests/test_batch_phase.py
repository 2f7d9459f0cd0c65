import pytest

from trainops.models.batch import Batch
from trainops.services.batch_phase import (
    ACTIVE_PHASES,
    NEXT_PHASE,
    PHASE_DESCRIPTORS,
    PHASE_ORDER,
    SCHEDULE_FIELDS,
    BatchPhase,
    actual_fields_from,
    descriptor_for,
    is_active,
    next_phase,
    phases_from,
)


def test_next_phase_table_covers_every_phase():
    assert set(NEXT_PHASE) == set(BatchPhase)
    for current, target in zip(PHASE_ORDER, PHASE_ORDER[1:]):
        assert next_phase(current) == target
    assert next_phase(BatchPhase.COMPLETED) is None


def test_next_phase_accepts_stored_string():
    assert next_phase("ojt") == BatchPhase.OJT_CERTIFICATION
    with pytest.raises(ValueError):
        next_phase("handover")


def test_descriptors_exist_for_active_phases_only():
    assert tuple(PHASE_DESCRIPTORS) == ACTIVE_PHASES
    with pytest.raises(KeyError):
        descriptor_for(BatchPhase.PLANNED)
    with pytest.raises(KeyError):
        descriptor_for(BatchPhase.COMPLETED)


def test_descriptor_fields_are_batch_columns():
    columns = set(Batch.__table__.columns.keys())
    for descriptor in PHASE_DESCRIPTORS.values():
        assert descriptor.end_date_field in columns
        assert descriptor.actual_start_field in columns
        assert descriptor.actual_end_field in columns
    assert descriptor_for("ojt_certification").end_date_field == "ojt_certification_end_date"
    assert descriptor_for("induction").actual_start_field == "actual_induction_start_date"


def test_is_active():
    assert not is_active("planned")
    assert not is_active("completed")
    assert all(is_active(phase) for phase in ACTIVE_PHASES)


def test_phases_from_and_actual_fields_from():
    assert phases_from("ojt") == (BatchPhase.OJT, BatchPhase.OJT_CERTIFICATION, BatchPhase.COMPLETED)
    assert actual_fields_from("ojt") == (
        "actual_ojt_start_date",
        "actual_ojt_end_date",
        "actual_ojt_certification_start_date",
        "actual_ojt_certification_end_date",
        "actual_completion_date",
    )


def test_schedule_fields_are_in_phase_order():
    assert SCHEDULE_FIELDS == (
        "induction_start_date",
        "induction_end_date",
        "training_end_date",
        "certification_end_date",
        "ojt_end_date",
        "ojt_certification_end_date",
    )
