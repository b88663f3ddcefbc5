# /tests/test_routers.py

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.database_service import DatabaseService, get_db_service

DEPARTMENT = "Information Technology"


@pytest.fixture
def client(db_session):
    """A TestClient whose DatabaseService is bound to the per-test SQLite session."""
    def _override():
        yield DatabaseService(db_session=db_session)

    app.dependency_overrides[get_db_service] = _override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["version"] == "1.0.0"


def test_analyze_class_endpoint(client, make_student, safe_metrics, severe_metrics):
    make_student(**safe_metrics)
    make_student(**severe_metrics)

    response = client.post("/api/classes/analyze", json={"department": DEPARTMENT, "batch": "2022", "semester": 5})

    assert response.status_code == 200
    body = response.json()
    assert body["totalStudents"] == 2
    assert body["failed"] == []
    assert body["results"][1]["analysis"]["warningLevel"] == "Severe Academic Warning"


def test_analyze_class_rejects_bad_semester(client):
    response = client.post("/api/classes/analyze", json={"department": DEPARTMENT, "batch": "2022", "semester": 9})
    assert response.status_code == 422


def test_aggregate_endpoint_for_empty_cohort(client):
    response = client.get("/api/classes/aggregate", params={"department": DEPARTMENT, "batch": "2022", "semester": 5})
    assert response.status_code == 200
    assert response.json() == {
        "averageRewardPoints": 0.0, "averageAttendance": 0.0, "averageCGPA": 0.0, "totalStudents": 0,
    }


def test_report_endpoint_as_csv(client, make_student):
    make_student()
    response = client.get("/api/classes/report", params={"department": DEPARTMENT, "format": "csv"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.text.splitlines()[0] == "Name,Student ID,Warning Level,Risk Score,Issues,Suggestions"


def test_stats_and_at_risk_endpoints(client, make_student, severe_metrics):
    make_student(**severe_metrics)
    client.post("/api/classes/analyze", json={"department": DEPARTMENT, "batch": "2022", "semester": 5})

    stats = client.get("/api/classes/stats", params={"department": DEPARTMENT}).json()
    assert stats[0]["atRiskStudents"] == 1

    at_risk = client.get("/api/classes/at-risk", params={"department": DEPARTMENT}).json()
    assert at_risk["summary"] == {"severe": 1, "moderate": 0, "mild": 0}


def test_get_academic_record(client, make_student):
    make_student(cgpa=9.2)
    response = client.get("/api/students/usr_001/academic")
    assert response.status_code == 200
    body = response.json()
    assert body["student"]["studentId"] == "73760001"
    assert body["record"]["cgpa"] == 9.2


def test_risk_analysis_for_unknown_student(client):
    response = client.get("/api/students/usr_missing/risk-analysis")
    assert response.status_code == 404


def test_risk_analysis_endpoint(client, make_student, safe_metrics):
    make_student(**safe_metrics)
    response = client.get("/api/students/usr_001/risk-analysis")
    assert response.status_code == 200
    assert response.json()["riskScore"] == 2


def test_update_rejects_out_of_range_metrics(client, make_student):
    make_student()
    response = client.put("/api/students/usr_001/academic", json={"attendancePercentage": 120})
    assert response.status_code == 422


def test_update_rejects_unknown_fields(client, make_student):
    make_student()
    response = client.put("/api/students/usr_001/academic", json={"currentRiskScore": 0})
    assert response.status_code == 422


def test_update_with_no_changes(client, make_student):
    make_student()
    response = client.put("/api/students/usr_001/academic", json={})
    assert response.status_code == 400


def test_update_and_reanalyze(client, make_student, safe_metrics):
    make_student(**safe_metrics)
    response = client.put("/api/students/usr_001/academic", json={"attendancePercentage": 95})
    assert response.status_code == 200
    body = response.json()
    assert body["record"]["attendancePercentage"] == 95
    assert body["analysis"]["riskScore"] == 0
    assert body["analysis"]["warningLevel"] == "Safe"


def test_students_listing_endpoint(client, make_student, safe_metrics, severe_metrics):
    make_student(**safe_metrics)
    make_student(**severe_metrics)
    client.post("/api/classes/analyze", json={"department": DEPARTMENT, "batch": "2022", "semester": 5})

    response = client.get("/api/classes/students", params={"department": DEPARTMENT, "warningLevel": "Severe Academic Warning"})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["students"][0]["id"] == "usr_002"
    assert body["students"][0]["warningLevel"] == "Severe Academic Warning"


def test_students_listing_rejects_unknown_warning_level(client):
    response = client.get("/api/classes/students", params={"warningLevel": "Doomed"})
    assert response.status_code == 422
