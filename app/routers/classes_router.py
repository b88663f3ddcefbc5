# /app/routers/classes_router.py

from fastapi import APIRouter, Depends, HTTPException, status, Query
from fastapi.responses import StreamingResponse
from typing import List, Optional

from ..models import risk_model, student_model
from ..services import risk_service, report_service, database_service

router = APIRouter()

# --- CLASS ANALYSIS ENDPOINTS (/api/classes) ---

@router.post("/analyze", response_model=risk_model.ClassAnalysisReport, summary="Analyze an Entire Class")
def analyze_class(request: risk_model.ClassAnalysisRequest, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    try:
        return risk_service.analyze_class(department=request.department, batch=request.batch, semester=request.semester, db=db)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to analyze class: {e}")

@router.get("/aggregate", response_model=risk_model.ClassAggregate, summary="Compute the Current Class Averages")
def get_class_aggregate(department: str, batch: str, semester: int = Query(..., ge=1, le=8), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return risk_service.compute_class_aggregate(department=department, batch=batch, semester=semester, db=db)

# --- REPORTING ENDPOINTS ---

@router.get("/students", response_model=student_model.StudentList, summary="List Students with Their Stored Warning Level")
def list_students(department: Optional[str] = None, batch: Optional[str] = None, semester: Optional[int] = Query(None, ge=1, le=8), warningLevel: Optional[risk_model.WarningLevel] = None, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return report_service.list_students(department=department, batch=batch, semester=semester, warning_level=warningLevel, db=db)

@router.get("/stats", response_model=List[risk_model.ClassStatistics], summary="Get Stored Class Statistics")
def get_class_stats(department: str, batch: Optional[str] = None, semester: Optional[int] = Query(None, ge=1, le=8), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return report_service.list_class_statistics(department=department, batch=batch, semester=semester, db=db)

@router.get("/at-risk", response_model=student_model.AtRiskSummary, summary="Get At-Risk Students Grouped by Warning Level")
def get_at_risk_students(department: Optional[str] = None, batch: Optional[str] = None, semester: Optional[int] = Query(None, ge=1, le=8), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    return report_service.get_at_risk_summary(department=department, batch=batch, semester=semester, db=db)

@router.get("/report", summary="Generate a Class Report as JSON or CSV")
def generate_report(department: str, batch: Optional[str] = None, semester: Optional[int] = Query(None, ge=1, le=8), format: str = Query("json", pattern="^(json|csv)$"), db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    report = report_service.build_class_report(department=department, batch=batch, semester=semester, db=db)
    if format == "csv":
        csv_string = report_service.export_report_as_csv(report)
        file_name = f"academic_report_{department.replace(' ', '_').lower()}.csv"
        return StreamingResponse(iter([csv_string]), media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={file_name}"})
    return report
