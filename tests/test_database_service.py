# /tests/test_database_service.py

import pytest
from sqlalchemy.exc import IntegrityError


def test_add_and_get_academic_record(db_service, make_student):
    record = make_student(cgpa=9.1)

    retrieved = db_service.get_academic_record(record.id)
    assert retrieved is not None
    assert retrieved.cgpa == 9.1
    assert retrieved.owner.name == "Student 1"
    assert db_service.get_academic_record_by_user_id("usr_001").id == record.id


def test_new_record_uses_default_metrics(make_student):
    record = make_student()
    assert record.attendancePercentage == 100
    assert record.periodicalTestMarks == 50
    assert record.standingArrears is False
    assert record.skillLevel == 8
    assert record.cgpa == 8.0
    assert record.currentWarningLevel == "Safe"
    assert record.failedParameters == []
    assert record.semester_performance == []


def test_get_non_existent_record(db_service):
    assert db_service.get_academic_record("acd_missing") is None


def test_find_students_filters_on_owner_cohort(db_service, make_student):
    make_student(batch="2022", semester=5)
    make_student(batch="2022", semester=5)
    make_student(batch="2023", semester=5)
    make_student(department="Civil Engineering", batch="2022", semester=5)

    cohort = db_service.find_students(department="Information Technology", batch="2022", semester=5)
    assert [r.id for r in cohort] == ["acd_001", "acd_002"]

    department = db_service.find_students(department="Information Technology")
    assert len(department) == 3
    assert len(db_service.find_students()) == 4


def test_increment_at_risk_upserts_the_cohort_row(db_service):
    assert db_service.get_class_statistics_by_cohort("Information Technology", "2022", 5) is None

    first = db_service.increment_at_risk("Information Technology", "2022", 5)
    assert first.atRiskStudents == 1

    second = db_service.increment_at_risk("Information Technology", "2022", 5)
    assert second.id == first.id
    assert second.atRiskStudents == 2
    assert second.lastUpdated is not None


def test_upsert_class_statistics_keeps_at_risk_counter(db_service):
    db_service.increment_at_risk("Information Technology", "2022", 5)
    stats = db_service.upsert_class_statistics(
        "Information Technology", "2022", 5,
        {"averageRewardPoints": 250.0, "averageAttendance": 82.5, "averageCGPA": 7.4, "totalStudents": 4},
    )
    assert stats.averageRewardPoints == 250.0
    assert stats.totalStudents == 4
    assert stats.atRiskStudents == 1


def test_list_class_statistics_sorted_by_batch_then_semester_desc(db_service):
    for batch, semester in [("2021", 7), ("2022", 3), ("2022", 5)]:
        db_service.upsert_class_statistics("Information Technology", batch, semester, {"totalStudents": 1})
    db_service.upsert_class_statistics("Civil Engineering", "2022", 5, {"totalStudents": 1})

    stats = db_service.list_class_statistics("Information Technology")
    assert [(s.batch, s.semester) for s in stats] == [("2022", 5), ("2022", 3), ("2021", 7)]
    assert len(db_service.list_class_statistics("Information Technology", batch="2022", semester=3)) == 1


def test_database_service_requires_a_session():
    from app.services.database_service import DatabaseService
    with pytest.raises(ValueError):
        DatabaseService(db_session=None)


def test_student_without_batch_is_rejected(db_service, make_student):
    """
    GIVEN: A student user with no batch.
    WHEN:  It is stored.
    THEN:  The database refuses it, since such a student has no cohort.
    """
    with pytest.raises(IntegrityError):
        make_student(batch=None)
    db_service.rollback()
    assert db_service.get_user_by_id("usr_001") is None


def test_staff_without_batch_is_accepted(db_service):
    staff = db_service.add_user({
        "id": "usr_staff", "name": "Staff", "email": "staff@bitsathy.ac.in",
        "role": "staff", "department": "Information Technology",
    })
    assert staff.batch is None


def test_find_students_filters_on_stored_warning_level(db_service, make_student):
    make_student()
    flagged = make_student()
    db_service.update_academic_record(flagged, {"currentWarningLevel": "Mild Warning", "currentRiskScore": 5})

    mild = db_service.find_students(department="Information Technology", warning_level="Mild Warning")
    assert [r.id for r in mild] == ["acd_002"]
    assert len(db_service.find_students(warning_level="Safe")) == 1
