# academic_records/routers/reports.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_profiles_db
from ..services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["Reports"])

@router.get("/student-enrollments", response_model=dict)
async def get_student_enrollment_report(db: AsyncSession = Depends(get_profiles_db)):
    """Students ordered by number of enrolled subjects"""
    return await ReportService(db).student_enrollment_report()

@router.get("/students-by-career", response_model=dict)
async def get_students_by_career_report(db: AsyncSession = Depends(get_profiles_db)):
    return await ReportService(db).students_by_career_report()

@router.get("/teacher-workload", response_model=dict)
async def get_teacher_workload_report(db: AsyncSession = Depends(get_profiles_db)):
    return await ReportService(db).teacher_workload_report()

@router.get("/system-statistics", response_model=dict)
async def get_system_statistics(db: AsyncSession = Depends(get_profiles_db)):
    return await ReportService(db).system_statistics()
