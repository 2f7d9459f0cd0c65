import os

os.environ.setdefault("BATCH_PHASE_SCHEDULER_ENABLED", "false")

import pytest
from datetime import date
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from trainops.database import Base, get_db
from trainops.main import app
from trainops.models.batch import Batch
from trainops.models.trainee import BatchTrainee
from trainops.services.batch_phase_engine import BatchPhaseEngine

TEST_DB_URL = "sqlite:///./test_trainops.db"
TODAY = date(2026, 3, 16)

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def phase_engine():
    return BatchPhaseEngine(TestingSession, today_provider=lambda: TODAY)


@pytest.fixture
def client(phase_engine):
    previous = app.state.batch_phase_engine
    app.state.batch_phase_engine = phase_engine
    yield TestClient(app)
    app.state.batch_phase_engine = previous


@pytest.fixture
def make_batch(db):
    def factory(phase="planned", trainees=0, organization_id=1, **fields):
        batch = Batch(
            organization_id=organization_id,
            batch_name=fields.pop("batch_name", f"{phase} 차수"),
            phase=phase,
            **fields,
        )
        db.add(batch)
        db.commit()
        db.refresh(batch)
        enroll(db, batch, trainees)
        return batch

    return factory


def enroll(db, batch, count: int, status: str = "active"):
    offset = db.query(BatchTrainee).filter(BatchTrainee.batch_id == batch.batch_id).count()
    rows = [
        BatchTrainee(
            batch_id=batch.batch_id,
            emp_id=f"T{batch.batch_id:03d}{offset + i:03d}",
            name=f"교육생{offset + i}",
            status=status,
        )
        for i in range(count)
    ]
    db.add_all(rows)
    db.commit()
    return rows


def reload(db, batch_id: int) -> Batch:
    db.expire_all()
    return db.get(Batch, batch_id)
