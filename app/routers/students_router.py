# /app/routers/students_router.py

from fastapi import APIRouter, Depends, HTTPException, status

from ..models import risk_model, student_model
from ..services import risk_service, database_service

router = APIRouter()

# --- STUDENT ACADEMIC RECORD ENDPOINTS (/api/students/{user_id}) ---

@router.get("/{user_id}/academic", response_model=student_model.AcademicRecordDetails, summary="Get a Student's Academic Record")
def get_academic_record(user_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    try:
        record = risk_service.get_academic_record_for_user(user_id=user_id, db=db)
    except risk_service.AcademicRecordNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return student_model.AcademicRecordDetails(
        student=student_model.StudentOwner.model_validate(record.owner),
        record=student_model.AcademicRecord.model_validate(record),
    )

@router.get("/{user_id}/risk-analysis", response_model=risk_model.AnalysisResult, summary="Analyze a Single Student Now")
def get_risk_analysis(user_id: str, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    try:
        return risk_service.analyze_student_by_user_id(user_id=user_id, db=db)
    except risk_service.AcademicRecordNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.put("/{user_id}/academic", response_model=student_model.AcademicUpdateResponse, summary="Update a Student's Academic Data")
def update_academic_record(user_id: str, update: risk_model.AcademicMetricsUpdate, db: database_service.DatabaseService = Depends(database_service.get_db_service)):
    try:
        record, analysis = risk_service.update_academic_record(user_id=user_id, changes=update.model_dump(exclude_unset=True), db=db)
    except risk_service.AcademicRecordNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return student_model.AcademicUpdateResponse(record=student_model.AcademicRecord.model_validate(record), analysis=analysis)
