# /app/services/database_service.py

from typing import List, Dict, Optional, Generator
from sqlalchemy.orm import Session
from fastapi import Depends

# --- Core Database Setup ---
from app.db.database import get_db

# --- Repository Imports ---
from .database_helpers.academic_repository_sql import AcademicRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        """
        Initializes the DatabaseService on top of a single SQLAlchemy session.
        Every method is a thin delegation to the SQL repository.
        """
        if db_session is None:
            raise ValueError("A database session is required.")
        self.academic_repo = AcademicRepositorySQL(db_session)

    # --- USER METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str): return self.academic_repo.get_user_by_id(user_id)
    def add_user(self, user_record: Dict): return self.academic_repo.add_user(user_record)

    # --- ACADEMIC RECORD METHODS (DELEGATED) ---
    def find_students(self, department: Optional[str] = None, batch: Optional[str] = None, semester: Optional[int] = None, warning_level: Optional[str] = None) -> List:
        return self.academic_repo.find_students(department=department, batch=batch, semester=semester, warning_level=warning_level)
    def get_at_risk_records(self, department: Optional[str] = None, batch: Optional[str] = None, semester: Optional[int] = None) -> List:
        return self.academic_repo.get_at_risk_records(department=department, batch=batch, semester=semester)
    def get_academic_record(self, record_id: str): return self.academic_repo.get_academic_record(record_id)
    def get_academic_record_by_user_id(self, user_id: str): return self.academic_repo.get_academic_record_by_user_id(user_id)
    def add_academic_record(self, record: Dict): return self.academic_repo.add_academic_record(record)
    def update_academic_record(self, academic_record, data: Dict): return self.academic_repo.update_academic_record(academic_record, data)
    def save_academic_record(self, academic_record): return self.academic_repo.save_academic_record(academic_record)

    # --- CLASS STATISTICS METHODS (DELEGATED) ---
    def get_class_statistics_by_cohort(self, department: str, batch: str, semester: int):
        return self.academic_repo.get_class_statistics_by_cohort(department, batch, semester)
    def upsert_class_statistics(self, department: str, batch: str, semester: int, data: Dict):
        return self.academic_repo.upsert_class_statistics(department, batch, semester, data)
    def increment_at_risk(self, department: str, batch: str, semester: int):
        return self.academic_repo.increment_at_risk(department, batch, semester)
    def list_class_statistics(self, department: str, batch: Optional[str] = None, semester: Optional[int] = None) -> List:
        return self.academic_repo.list_class_statistics(department, batch=batch, semester=semester)

    # --- SESSION CONTROL ---
    def rollback(self) -> None: self.academic_repo.rollback()


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService instance."""
    yield DatabaseService(db_session=db)
