# academic_records/routers/enrollment.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_profiles_db
from ..schemas.enrollment_schemas import EnrollmentCreate, BulkEnrollmentCreate
from ..services.enrollment_service import EnrollmentService

router = APIRouter(prefix="/enrollment", tags=["Enrollment"])

@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
async def enroll_student(
    enrollment: EnrollmentCreate,
    db: AsyncSession = Depends(get_profiles_db)
):
    """Enroll a student in a subject"""
    service = EnrollmentService(db)
    return await service.enroll_student(enrollment.student_id, enrollment.subject_id)

@router.post("/bulk", response_model=dict, status_code=status.HTTP_201_CREATED)
async def enroll_student_in_subjects(
    enrollment: BulkEnrollmentCreate,
    db: AsyncSession = Depends(get_profiles_db)
):
    """Enroll a student in several subjects; failed items are reported, not fatal"""
    service = EnrollmentService(db)
    return await service.enroll_student_in_subjects(enrollment.student_id, enrollment.subject_ids)

@router.delete("/{enrollment_id}", response_model=dict)
async def cancel_enrollment(enrollment_id: int, db: AsyncSession = Depends(get_profiles_db)):
    service = EnrollmentService(db)
    return await service.cancel_enrollment(enrollment_id)
