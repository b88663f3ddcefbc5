# /app/models/risk_model.py

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime
from enum import Enum

# --- Core Enumerations ---

class WarningLevel(str, Enum):
    SAFE = "Safe"
    MILD = "Mild Warning"
    MODERATE = "Moderate Warning"
    SEVERE = "Severe Academic Warning"

    @property
    def rank(self) -> int:
        """Position in the total order Safe < Mild < Moderate < Severe."""
        return _WARNING_LEVEL_ORDER.index(self)

_WARNING_LEVEL_ORDER = [WarningLevel.SAFE, WarningLevel.MILD, WarningLevel.MODERATE, WarningLevel.SEVERE]


# --- Cohort & Aggregate Models ---

class CohortKey(BaseModel):
    """Identifies a cohort: every student sharing department, batch and semester."""
    model_config = ConfigDict(from_attributes=True)
    department: str = Field(..., min_length=1)
    batch: str = Field(..., min_length=1)
    semester: int = Field(..., ge=1, le=8)

class ClassAggregate(BaseModel):
    """Averages computed fresh from the current academic records of a cohort."""
    model_config = ConfigDict(from_attributes=True)
    averageRewardPoints: float = 0.0
    averageAttendance: float = 0.0
    averageCGPA: float = 0.0
    totalStudents: int = 0

class ClassStatistics(ClassAggregate):
    """The cached aggregate of a cohort as it is stored and returned by the API."""
    department: str
    batch: str
    semester: int
    atRiskStudents: int = 0
    lastUpdated: Optional[datetime] = None


# --- Academic Record Models ---

class AcademicMetrics(BaseModel):
    """
    The metrics the rule set is evaluated against. The bounds here are the
    ones the stored record must respect; anything outside them is rejected.
    """
    model_config = ConfigDict(from_attributes=True)
    attendancePercentage: float = Field(default=100, ge=0, le=100)
    periodicalTestMarks: float = Field(default=50, ge=0, le=50)
    standingArrears: bool = False
    skillLevel: int = Field(default=8, ge=1, le=10)
    cgpa: float = Field(default=8.0, ge=0, le=10)
    disciplineComplaints: int = Field(default=0, ge=0)
    projectsCompleted: int = Field(default=0, ge=0)
    activityPoints: int = Field(default=0, ge=0)
    rewardPoints: int = Field(default=0, ge=0)
    certificationsCount: int = Field(default=0, ge=0)
    achievementsCount: int = Field(default=0, ge=0)

class AcademicMetricsUpdate(BaseModel):
    """
    The model for updating an academic record. All fields are optional to
    allow for partial updates; unknown fields are refused.
    """
    model_config = ConfigDict(extra="forbid")
    attendancePercentage: Optional[float] = Field(default=None, ge=0, le=100)
    periodicalTestMarks: Optional[float] = Field(default=None, ge=0, le=50)
    standingArrears: Optional[bool] = None
    skillLevel: Optional[int] = Field(default=None, ge=1, le=10)
    cgpa: Optional[float] = Field(default=None, ge=0, le=10)
    disciplineComplaints: Optional[int] = Field(default=None, ge=0)
    projectsCompleted: Optional[int] = Field(default=None, ge=0)
    activityPoints: Optional[int] = Field(default=None, ge=0)
    rewardPoints: Optional[int] = Field(default=None, ge=0)
    certificationsCount: Optional[int] = Field(default=None, ge=0)
    achievementsCount: Optional[int] = Field(default=None, ge=0)

class SemesterPerformanceEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    semester: int
    riskScore: int
    warningLevel: WarningLevel
    issues: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None


# --- Analysis Result Models ---

class AnalysisResult(BaseModel):
    """The outcome of scoring one student. Never persisted as its own entity."""
    riskScore: int = Field(..., ge=0)
    warningCount: int = Field(..., ge=0, description="How many rules were triggered.")
    warningLevel: WarningLevel
    failedParameters: List[str] = Field(default_factory=list)
    suggestedActions: List[str] = Field(default_factory=list)
    classAverages: ClassAggregate

class StudentIdentity(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    email: str
    studentId: Optional[str] = None

class StudentAnalysis(BaseModel):
    student: StudentIdentity
    analysis: AnalysisResult

class ClassAnalysisRequest(CohortKey):
    pass

class ClassAnalysisReport(BaseModel):
    """
    The result of a class-wide pass. Students whose write-back failed are
    listed under `failed`; they are never dropped silently.
    """
    department: str
    batch: str
    semester: int
    totalStudents: int
    results: List[StudentAnalysis] = Field(default_factory=list)
    processed: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)
    partialFailure: bool = False
    aggregateRefreshed: bool = False
