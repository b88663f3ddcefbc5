# /tests/test_aggregation.py

from types import SimpleNamespace

from app.models.risk_model import AcademicMetrics, ClassAggregate
from app.services.risk_helpers.aggregation import compute_aggregate


def test_empty_cohort_yields_zero_aggregate():
    aggregate = compute_aggregate([])
    assert aggregate == ClassAggregate()
    assert aggregate.totalStudents == 0
    assert aggregate.averageRewardPoints == 0


def test_averages_are_plain_arithmetic_means():
    records = [
        AcademicMetrics(rewardPoints=400, attendancePercentage=90, cgpa=8.0),
        AcademicMetrics(rewardPoints=600, attendancePercentage=70, cgpa=6.0),
        AcademicMetrics(rewardPoints=500, attendancePercentage=80, cgpa=7.0),
    ]
    aggregate = compute_aggregate(records)

    assert aggregate.totalStudents == 3
    assert aggregate.averageRewardPoints == 500
    assert aggregate.averageAttendance == 80
    assert aggregate.averageCGPA == 7.0


def test_missing_values_count_as_zero():
    records = [
        SimpleNamespace(rewardPoints=None, attendancePercentage=100, cgpa=None),
        SimpleNamespace(rewardPoints=300, attendancePercentage=None, cgpa=9.0),
    ]
    aggregate = compute_aggregate(records)

    assert aggregate.totalStudents == 2
    assert aggregate.averageRewardPoints == 150
    assert aggregate.averageAttendance == 50
    assert aggregate.averageCGPA == 4.5
