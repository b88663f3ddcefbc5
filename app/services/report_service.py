# /app/services/report_service.py

"""
Read-only views over the stored results of class passes: the at-risk listing
grouped by tier, the cohort report (JSON rows or CSV text) and the stored
class statistics.
"""

from datetime import datetime, timezone
from typing import List, Dict, Optional
import pandas as pd

from ..models import risk_model, student_model
from ..models.risk_model import WarningLevel
from .database_service import DatabaseService

REPORT_COLUMNS = ['Name', 'Student ID', 'Warning Level', 'Risk Score', 'Issues', 'Suggestions']

# Grouping keys of the at-risk listing, most severe first.
_AT_RISK_GROUPS = [
    ("severe", WarningLevel.SEVERE),
    ("moderate", WarningLevel.MODERATE),
    ("mild", WarningLevel.MILD),
]


def list_students(
    department: Optional[str],
    batch: Optional[str],
    semester: Optional[int],
    warning_level: Optional[WarningLevel],
    db: DatabaseService,
) -> student_model.StudentList:
    """Lists the students matching every given filter, in record order."""
    records = db.find_students(
        department=department,
        batch=batch,
        semester=semester,
        warning_level=warning_level.value if warning_level else None,
    )
    students = [
        student_model.StudentListItem(
            id=record.owner.id,
            name=record.owner.name,
            email=record.owner.email,
            studentId=record.owner.studentId,
            department=record.owner.department,
            batch=record.owner.batch,
            semester=record.owner.semester,
            riskScore=record.currentRiskScore,
            warningLevel=WarningLevel(record.currentWarningLevel),
        )
        for record in records
    ]
    return student_model.StudentList(count=len(students), students=students)


def get_at_risk_summary(
    department: Optional[str],
    batch: Optional[str],
    semester: Optional[int],
    db: DatabaseService,
) -> student_model.AtRiskSummary:
    """
    Lists every non-Safe student of the filtered population, grouped by tier.
    Within a group students keep the repository order (highest risk first).
    """
    records = db.get_at_risk_records(department=department, batch=batch, semester=semester)

    grouped: Dict[str, List[student_model.AtRiskStudent]] = {key: [] for key, _ in _AT_RISK_GROUPS}
    group_by_level = {level: key for key, level in _AT_RISK_GROUPS}
    for record in records:
        owner = record.owner
        level = WarningLevel(record.currentWarningLevel)
        grouped[group_by_level[level]].append(
            student_model.AtRiskStudent(
                id=owner.id,
                name=owner.name,
                studentId=owner.studentId,
                department=owner.department,
                batch=owner.batch,
                semester=owner.semester,
                riskScore=record.currentRiskScore,
                warningLevel=level,
                failedParameters=record.failedParameters or [],
            )
        )

    return student_model.AtRiskSummary(
        total=len(records),
        grouped=grouped,
        summary={key: len(students) for key, students in grouped.items()},
    )


def build_class_report(
    department: str,
    batch: Optional[str],
    semester: Optional[int],
    db: DatabaseService,
) -> Dict:
    """Assembles the stored analysis of every student in the filtered population."""
    records = db.find_students(department=department, batch=batch, semester=semester)

    students = [
        {
            "name": record.owner.name,
            "studentId": record.owner.studentId,
            "warningLevel": record.currentWarningLevel,
            "riskScore": record.currentRiskScore,
            "issues": record.failedParameters or [],
            "suggestions": record.suggestedActions or [],
        }
        for record in records
    ]

    return {
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "department": department,
        "batch": batch,
        "semester": semester,
        "totalStudents": len(records),
        "atRiskCount": sum(1 for s in students if s["warningLevel"] != WarningLevel.SAFE.value),
        "students": students,
    }


def export_report_as_csv(report: Dict) -> str:
    """Renders a report built by `build_class_report` as CSV text."""
    export_data = [
        {
            'Name': s['name'],
            'Student ID': s['studentId'],
            'Warning Level': s['warningLevel'],
            'Risk Score': s['riskScore'],
            'Issues': '; '.join(s['issues']),
            'Suggestions': '; '.join(s['suggestions']),
        } for s in report['students']
    ]

    df = pd.DataFrame(export_data) if export_data else pd.DataFrame(columns=REPORT_COLUMNS)

    return df.to_csv(index=False)


def list_class_statistics(
    department: str,
    batch: Optional[str],
    semester: Optional[int],
    db: DatabaseService,
) -> List[risk_model.ClassStatistics]:
    stored = db.list_class_statistics(department, batch=batch, semester=semester)
    return [risk_model.ClassStatistics.model_validate(stats) for stats in stored]
