# /tests/conftest.py

import itertools
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.services.database_service import DatabaseService

# --- Metric Fixtures ---

# Triggers only the attendance rule (score 2, Safe) when the class average
# reward points are at or below 600.
SAFE_METRICS = {
    "attendancePercentage": 70, "periodicalTestMarks": 40, "standingArrears": False,
    "skillLevel": 8, "cgpa": 8.5, "disciplineComplaints": 0, "projectsCompleted": 2,
    "activityPoints": 6000, "rewardPoints": 600, "certificationsCount": 1, "achievementsCount": 1,
}

# Triggers every rule (score 18, Severe) whenever the class average is above zero.
SEVERE_METRICS = {
    "attendancePercentage": 60, "periodicalTestMarks": 20, "standingArrears": True,
    "skillLevel": 3, "cgpa": 6, "disciplineComplaints": 1, "projectsCompleted": 0,
    "activityPoints": 4000, "rewardPoints": 0, "certificationsCount": 0, "achievementsCount": 0,
}


@pytest.fixture
def db_session():
    """
    Provides a session bound to a fresh in-memory SQLite database for EACH test.
    StaticPool keeps the single connection alive across threads (TestClient).
    """
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def db_service(db_session):
    return DatabaseService(db_session=db_session)


@pytest.fixture
def make_student(db_service):
    """
    Factory that creates a student user plus its academic record and returns
    the record. Ids are sequential, so records sort in creation order.
    """
    counter = itertools.count(1)

    def _make(department="Information Technology", batch="2022", semester=5, **metrics):
        n = next(counter)
        user = db_service.add_user({
            "id": f"usr_{n:03d}",
            "name": f"Student {n}",
            "email": f"student{n}@bitsathy.ac.in",
            "role": "student",
            "department": department,
            "studentId": f"7376{n:04d}",
            "batch": batch,
            "semester": semester,
        })
        return db_service.add_academic_record({"id": f"acd_{n:03d}", "user_id": user.id, **metrics})

    return _make


@pytest.fixture
def safe_metrics():
    return dict(SAFE_METRICS)


@pytest.fixture
def severe_metrics():
    return dict(SEVERE_METRICS)
