# /app/services/risk_service.py

"""
This service module is the business logic layer of the risk engine.

It orchestrates the pure helpers in `risk_helpers` (rules, scorer, classifier,
aggregator) and the `DatabaseService`:

- `compute_class_aggregate` reads a cohort and averages it.
- `analyze_student` is the read-mostly, on-demand view of one record. It scores
  against the *owner's* cohort, records an at-risk transition, and persists
  nothing else.
- `analyze_class` is the authoritative batch pass. It snapshots the cohort
  aggregate once, then scores, writes back and appends history for each
  student in turn, committing after every student.
"""

from typing import Dict, List
from sqlalchemy.exc import SQLAlchemyError

from ..core.app_logger import get_logger
from ..db.models.academic_models import SemesterPerformance
from ..models.risk_model import (
    WarningLevel, CohortKey, ClassAggregate, AnalysisResult,
    StudentIdentity, StudentAnalysis, ClassAnalysisReport,
)
from .database_service import DatabaseService
from .risk_helpers import aggregation, scoring
from .risk_helpers.classification import is_at_risk

logger = get_logger(__name__)


class AcademicRecordNotFound(ValueError):
    """Raised when an academic record (or the student owning it) does not exist."""


def _cohort_of(owner) -> CohortKey:
    return CohortKey(department=owner.department, batch=owner.batch, semester=owner.semester)


# --- Aggregation ---

def compute_class_aggregate(department: str, batch: str, semester: int, db: DatabaseService) -> ClassAggregate:
    """
    Averages the current academic records of a cohort. An empty cohort is not
    an error: it yields the all-zero aggregate.
    """
    records = db.find_students(department=department, batch=batch, semester=semester)
    return aggregation.compute_aggregate(records)


def refresh_class_statistics(cohort: CohortKey, db: DatabaseService):
    """Recomputes a cohort's averages from scratch and stores them."""
    aggregate = compute_class_aggregate(cohort.department, cohort.batch, cohort.semester, db)
    return db.upsert_class_statistics(
        cohort.department, cohort.batch, cohort.semester, aggregate.model_dump()
    )


def record_at_risk_transition(academic_record, cohort: CohortKey, warning_level: WarningLevel, db: DatabaseService) -> bool:
    """
    Adds a student to a cohort's at-risk counter the first time it is found
    at risk in that cohort. Calling this again for the same student and cohort
    is a no-op; a student that moves to another semester is counted there too.

    The counter is never decremented. A student that recovers is only
    un-flagged by a class pass, so a later relapse counts again.

    Nothing is committed here; the caller saves the record afterwards.
    """
    counted = list(academic_record.atRiskCohorts or [])
    cohort_key = cohort.model_dump()
    if not is_at_risk(warning_level) or cohort_key in counted:
        return False

    # Reassigned rather than appended so the JSON column is marked dirty.
    academic_record.atRiskCohorts = counted + [cohort_key]
    stats = db.increment_at_risk(cohort.department, cohort.batch, cohort.semester)
    logger.info(
        "Record %s counted at risk in %s/%s/%s (atRiskStudents=%s)",
        academic_record.id, cohort.department, cohort.batch, cohort.semester, stats.atRiskStudents,
    )
    return True


# --- Single Student Analysis ---

def analyze_student(record_id: str, owner, db: DatabaseService) -> AnalysisResult:
    """
    Scores one academic record as it stands now.

    `owner` supplies the cohort (department, batch, semester) the aggregate is
    computed for; callers usually pass the record's own owner, but any object
    with those attributes is accepted. No history entry is appended and no
    score fields are written.
    """
    academic_record = db.get_academic_record(record_id)
    if academic_record is None:
        raise AcademicRecordNotFound(f"Academic record with ID {record_id} not found.")

    cohort = _cohort_of(owner)
    aggregate = compute_class_aggregate(cohort.department, cohort.batch, cohort.semester, db)
    breakdown = scoring.score_student(academic_record, academic_record.semester_performance, aggregate)

    if record_at_risk_transition(academic_record, cohort, breakdown.warning_level, db):
        db.save_academic_record(academic_record)

    return scoring.to_analysis_result(breakdown, aggregate)


def get_academic_record_for_user(user_id: str, db: DatabaseService):
    academic_record = db.get_academic_record_by_user_id(user_id)
    if academic_record is None:
        raise AcademicRecordNotFound(f"Academic data for student {user_id} not found.")
    return academic_record


def analyze_student_by_user_id(user_id: str, db: DatabaseService) -> AnalysisResult:
    academic_record = get_academic_record_for_user(user_id, db)
    return analyze_student(academic_record.id, academic_record.owner, db)


def update_academic_record(user_id: str, changes: Dict, db: DatabaseService):
    """
    Applies a partial, already range-validated update to a student's metrics
    and returns the stored record together with a fresh analysis.
    """
    if not changes:
        raise ValueError("No update data provided.")

    academic_record = get_academic_record_for_user(user_id, db)
    academic_record = db.update_academic_record(academic_record, changes)
    analysis = analyze_student(academic_record.id, academic_record.owner, db)
    return academic_record, analysis


# --- Class-wide Analysis ---

def _write_back(academic_record, owner, analysis: AnalysisResult) -> None:
    academic_record.currentRiskScore = analysis.riskScore
    academic_record.currentWarningLevel = analysis.warningLevel.value
    academic_record.failedParameters = list(analysis.failedParameters)
    academic_record.suggestedActions = list(analysis.suggestedActions)

    # The entry records the semester the student is in now, which may differ
    # from the cohort the pass was started for.
    academic_record.semester_performance.append(
        SemesterPerformance(
            semester=owner.semester,
            riskScore=analysis.riskScore,
            warningLevel=analysis.warningLevel.value,
            issues=list(analysis.failedParameters),
        )
    )

    if scoring.has_continuous_poor_performance(academic_record.semester_performance):
        academic_record.continuousPoorSemesters = (academic_record.continuousPoorSemesters or 0) + 1

    if not is_at_risk(analysis.warningLevel):
        academic_record.atRiskCohorts = []


def analyze_class(department: str, batch: str, semester: int, db: DatabaseService) -> ClassAnalysisReport:
    """
    Runs the authoritative analysis pass over a whole cohort.

    The aggregate is computed once up front and shared by every student, so
    one pass never sees its own write-backs. Each student is committed before
    the next is scored; a storage failure rolls back that student only and is
    reported under `failed`.
    """
    cohort = CohortKey(department=department, batch=batch, semester=semester)
    records = db.find_students(department=department, batch=batch, semester=semester)
    aggregate = aggregation.compute_aggregate(records)
    logger.info("Analyzing class %s/%s/%s: %d students", department, batch, semester, len(records))

    results: List[StudentAnalysis] = []
    processed: List[str] = []
    failed: List[str] = []
    any_at_risk = False

    for academic_record in records:
        owner = academic_record.owner
        student_id = owner.id
        try:
            breakdown = scoring.score_student(academic_record, list(academic_record.semester_performance), aggregate)
            analysis = scoring.to_analysis_result(breakdown, aggregate)
            identity = StudentIdentity.model_validate(owner)

            _write_back(academic_record, owner, analysis)
            if is_at_risk(analysis.warningLevel):
                record_at_risk_transition(academic_record, cohort, analysis.warningLevel, db)
            db.save_academic_record(academic_record)
        except SQLAlchemyError:
            logger.exception("Failed to persist analysis for student %s", student_id)
            db.rollback()
            failed.append(student_id)
            continue

        any_at_risk = any_at_risk or is_at_risk(analysis.warningLevel)
        processed.append(student_id)
        results.append(StudentAnalysis(student=identity, analysis=analysis))

    aggregate_refreshed = False
    if any_at_risk:
        try:
            refresh_class_statistics(cohort, db)
            aggregate_refreshed = True
        except SQLAlchemyError:
            logger.exception("Failed to refresh class statistics for %s/%s/%s", department, batch, semester)
            db.rollback()

    if failed:
        logger.warning(
            "Class %s/%s/%s analyzed with failures: %d processed, %d failed",
            department, batch, semester, len(processed), len(failed),
        )
    else:
        logger.info("Class %s/%s/%s analyzed: %d processed", department, batch, semester, len(processed))

    return ClassAnalysisReport(
        department=department,
        batch=batch,
        semester=semester,
        totalStudents=len(records),
        results=results,
        processed=processed,
        failed=failed,
        partialFailure=bool(failed),
        aggregateRefreshed=aggregate_refreshed,
    )
