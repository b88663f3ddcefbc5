# /app/db/models/academic_models.py

"""
This module defines the SQLAlchemy ORM models for the risk engine:
`StudentAcademic` (one student's metrics and latest analysis),
`SemesterPerformance` (the append-only history of analysis runs) and
`ClassStatistics` (the cached per-cohort aggregate).
"""

from sqlalchemy import (
    Column, String, Integer, Float, Boolean, JSON, DateTime, ForeignKey, UniqueConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class StudentAcademic(Base):
    """
    SQLAlchemy model holding one student's academic and behavioural metrics,
    plus the result of the most recent authoritative (class-wide) analysis.
    """
    __tablename__ = "student_academics"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id"), unique=True, nullable=False, index=True)

    # --- Metrics ---
    attendancePercentage = Column(Float, nullable=False, default=100)
    periodicalTestMarks = Column(Float, nullable=False, default=50)
    standingArrears = Column(Boolean, nullable=False, default=False)
    skillLevel = Column(Integer, nullable=False, default=8)
    cgpa = Column(Float, nullable=False, default=8.0)
    disciplineComplaints = Column(Integer, nullable=False, default=0)
    projectsCompleted = Column(Integer, nullable=False, default=0)
    activityPoints = Column(Integer, nullable=False, default=0)
    rewardPoints = Column(Integer, nullable=False, default=0)
    certificationsCount = Column(Integer, nullable=False, default=0)
    achievementsCount = Column(Integer, nullable=False, default=0)

    # --- Latest analysis ---
    currentRiskScore = Column(Integer, nullable=False, default=0)
    currentWarningLevel = Column(String, nullable=False, default="Safe")
    failedParameters = Column(JSON, nullable=False, default=list)
    suggestedActions = Column(JSON, nullable=False, default=list)
    continuousPoorSemesters = Column(Integer, nullable=False, default=0)

    # Cohort keys ({department, batch, semester}) whose at-risk counter already
    # includes this student. Emptied when a class pass finds the student Safe.
    atRiskCohorts = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="academic_record")

    # Insertion order is chronological order; entries are never reordered.
    semester_performance = relationship(
        "SemesterPerformance",
        back_populates="academic_record",
        order_by="SemesterPerformance.id",
        cascade="all, delete-orphan",
    )


class SemesterPerformance(Base):
    """
    SQLAlchemy model for one immutable snapshot appended after a class analysis.
    """
    __tablename__ = "semester_performances"

    id = Column(Integer, primary_key=True, autoincrement=True)
    academic_id = Column(String, ForeignKey("student_academics.id"), nullable=False, index=True)
    semester = Column(Integer, nullable=False)
    riskScore = Column(Integer, nullable=False, default=0)
    warningLevel = Column(String, nullable=False, default="Safe")
    issues = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    academic_record = relationship("StudentAcademic", back_populates="semester_performance")


class ClassStatistics(Base):
    """
    SQLAlchemy model for the cached aggregate of a single cohort.

    The averages are always recomputed from scratch; `atRiskStudents` is only
    ever incremented.
    """
    __tablename__ = "class_statistics"
    __table_args__ = (UniqueConstraint("department", "batch", "semester", name="uq_class_statistics_cohort"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    department = Column(String, nullable=False)
    batch = Column(String, nullable=False)
    semester = Column(Integer, nullable=False)
    averageRewardPoints = Column(Float, nullable=False, default=0)
    averageAttendance = Column(Float, nullable=False, default=0)
    averageCGPA = Column(Float, nullable=False, default=0)
    totalStudents = Column(Integer, nullable=False, default=0)
    atRiskStudents = Column(Integer, nullable=False, default=0)
    lastUpdated = Column(DateTime(timezone=True), server_default=func.now())
