# /app/services/database_helpers/academic_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the User,
StudentAcademic, SemesterPerformance and ClassStatistics tables. It is the
direct interface to the database for the risk engine.

Cohort filters are always applied to the owning `User`, since department,
batch and semester live on the student rather than on the academic record.
"""

from datetime import datetime, timezone
from typing import List, Dict, Optional
from sqlalchemy.orm import Session, contains_eager

# Import the SQLAlchemy models this repository will interact with.
from app.db.models.user_model import User
from app.db.models.academic_models import StudentAcademic, ClassStatistics


class AcademicRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- User Methods ---

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def add_user(self, record: Dict) -> User:
        """Creates a new User record in the database."""
        new_user = User(**record)
        self.db.add(new_user)
        self.db.commit()
        self.db.refresh(new_user)
        return new_user

    # --- Academic Record Methods ---

    def _records_with_owner(self):
        return (
            self.db.query(StudentAcademic)
            .join(StudentAcademic.owner)
            .options(contains_eager(StudentAcademic.owner))
        )

    def find_students(
        self,
        department: Optional[str] = None,
        batch: Optional[str] = None,
        semester: Optional[int] = None,
        warning_level: Optional[str] = None,
    ) -> List[StudentAcademic]:
        """
        Retrieves every academic record whose owner matches the given filters,
        with the owner loaded. `warning_level` matches the stored level of the
        latest class pass. Results are ordered by record id so a class pass
        visits students in a stable order.
        """
        query = self._records_with_owner()
        if department is not None:
            query = query.filter(User.department == department)
        if batch is not None:
            query = query.filter(User.batch == batch)
        if semester is not None:
            query = query.filter(User.semester == semester)
        if warning_level is not None:
            query = query.filter(StudentAcademic.currentWarningLevel == warning_level)
        return query.order_by(StudentAcademic.id).all()

    def get_at_risk_records(
        self,
        department: Optional[str] = None,
        batch: Optional[str] = None,
        semester: Optional[int] = None,
    ) -> List[StudentAcademic]:
        """Records whose stored warning level is not Safe, highest risk first."""
        query = self._records_with_owner().filter(StudentAcademic.currentWarningLevel != "Safe")
        if department is not None:
            query = query.filter(User.department == department)
        if batch is not None:
            query = query.filter(User.batch == batch)
        if semester is not None:
            query = query.filter(User.semester == semester)
        return query.order_by(StudentAcademic.currentRiskScore.desc(), StudentAcademic.id).all()

    def get_academic_record(self, record_id: str) -> Optional[StudentAcademic]:
        return self.db.query(StudentAcademic).filter(StudentAcademic.id == record_id).first()

    def get_academic_record_by_user_id(self, user_id: str) -> Optional[StudentAcademic]:
        return self.db.query(StudentAcademic).filter(StudentAcademic.user_id == user_id).first()

    def add_academic_record(self, record: Dict) -> StudentAcademic:
        new_record = StudentAcademic(**record)
        self.db.add(new_record)
        self.db.commit()
        self.db.refresh(new_record)
        return new_record

    def update_academic_record(self, academic_record: StudentAcademic, data: Dict) -> StudentAcademic:
        for key, value in data.items():
            setattr(academic_record, key, value)
        return self.save_academic_record(academic_record)

    def save_academic_record(self, academic_record: StudentAcademic) -> StudentAcademic:
        """Commits the write-back of a single record, history included."""
        self.db.add(academic_record)
        self.db.commit()
        self.db.refresh(academic_record)
        return academic_record

    # --- Class Statistics Methods ---

    def get_class_statistics_by_cohort(self, department: str, batch: str, semester: int) -> Optional[ClassStatistics]:
        return (
            self.db.query(ClassStatistics)
            .filter(
                ClassStatistics.department == department,
                ClassStatistics.batch == batch,
                ClassStatistics.semester == semester,
            )
            .first()
        )

    def _get_or_create_class_statistics(self, department: str, batch: str, semester: int) -> ClassStatistics:
        stats = self.get_class_statistics_by_cohort(department, batch, semester)
        if stats is None:
            stats = ClassStatistics(department=department, batch=batch, semester=semester, atRiskStudents=0)
            self.db.add(stats)
        return stats

    def upsert_class_statistics(self, department: str, batch: str, semester: int, data: Dict) -> ClassStatistics:
        """Overwrites the given fields of a cohort's statistics, creating the row if absent."""
        stats = self._get_or_create_class_statistics(department, batch, semester)
        for key, value in data.items():
            setattr(stats, key, value)
        stats.lastUpdated = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(stats)
        return stats

    def increment_at_risk(self, department: str, batch: str, semester: int) -> ClassStatistics:
        """
        Bumps a cohort's at-risk counter, creating the row if absent. Only
        flushes: the caller's next commit makes it durable together with the
        student write-back that caused it.
        """
        stats = self._get_or_create_class_statistics(department, batch, semester)
        stats.atRiskStudents = (stats.atRiskStudents or 0) + 1
        stats.lastUpdated = datetime.now(timezone.utc)
        self.db.flush()
        return stats

    def list_class_statistics(
        self,
        department: str,
        batch: Optional[str] = None,
        semester: Optional[int] = None,
    ) -> List[ClassStatistics]:
        query = self.db.query(ClassStatistics).filter(ClassStatistics.department == department)
        if batch is not None:
            query = query.filter(ClassStatistics.batch == batch)
        if semester is not None:
            query = query.filter(ClassStatistics.semester == semester)
        return query.order_by(ClassStatistics.batch.desc(), ClassStatistics.semester.desc()).all()

    def rollback(self) -> None:
        self.db.rollback()
