# /app/models/student_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict

from .risk_model import AcademicMetrics, SemesterPerformanceEntry, WarningLevel, StudentIdentity, AnalysisResult

# --- Model Definitions ---

class StudentOwner(StudentIdentity):
    """A student's identity together with the cohort they currently belong to."""
    department: str
    batch: Optional[str] = None
    semester: int = Field(default=1, ge=1, le=8)

class AcademicRecord(AcademicMetrics):
    """
    The full representation of an academic record, as it is stored in the
    database and returned by the API.
    """
    id: str = Field(..., description="The unique, server-generated identifier for the record.")
    user_id: str = Field(..., description="The ID of the student who owns this record.")
    currentRiskScore: int = 0
    currentWarningLevel: WarningLevel = WarningLevel.SAFE
    failedParameters: List[str] = Field(default_factory=list)
    suggestedActions: List[str] = Field(default_factory=list)
    continuousPoorSemesters: int = 0
    semester_performance: List[SemesterPerformanceEntry] = Field(default_factory=list)

class AcademicRecordDetails(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    student: StudentOwner
    record: AcademicRecord

class AcademicUpdateResponse(BaseModel):
    record: AcademicRecord
    analysis: AnalysisResult


# --- Reporting Models ---

class StudentListItem(StudentOwner):
    """One row of the staff student listing: identity, cohort and stored analysis."""
    riskScore: int = 0
    warningLevel: WarningLevel = WarningLevel.SAFE

class StudentList(BaseModel):
    count: int
    students: List[StudentListItem]

class AtRiskStudent(BaseModel):
    id: str
    name: str
    studentId: Optional[str] = None
    department: str
    batch: Optional[str] = None
    semester: int
    riskScore: int
    warningLevel: WarningLevel
    failedParameters: List[str] = Field(default_factory=list)

class AtRiskSummary(BaseModel):
    total: int
    grouped: Dict[str, List[AtRiskStudent]]
    summary: Dict[str, int]
