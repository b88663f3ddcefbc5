# /app/db/models/user_model.py

"""
This module defines the SQLAlchemy ORM model for the `User` entity.

A user owns at most one academic record. The cohort a record belongs to
(department, batch, semester) is always read from its owning user, never from
the record itself.
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class User(Base):
    """
    SQLAlchemy model representing a student, staff member or administrator.
    """
    # A student without a batch would have no cohort to be aggregated in.
    __table_args__ = (
        CheckConstraint("role != 'student' OR batch IS NOT NULL", name="ck_users_student_batch"),
    )

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(String, nullable=False, default="student")
    department = Column(String, index=True, nullable=False)

    # The official, institution-issued code. Only students carry one.
    studentId = Column(String, unique=True, index=True, nullable=True)
    batch = Column(String, index=True, nullable=True)
    semester = Column(Integer, nullable=False, default=1)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # `uselist=False` makes this a one-to-one link: a student has exactly one
    # academic record, and deleting the user deletes the record.
    academic_record = relationship(
        "StudentAcademic", back_populates="owner", uselist=False, cascade="all, delete-orphan"
    )
