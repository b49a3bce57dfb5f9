# academic_records/routers/students.py
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_profiles_db
from ..schemas.profile_schemas import StudentUpdate
from ..services.student_service import StudentService
from ..utils.pagination import Paginator, PaginationParams

router = APIRouter(prefix="/student", tags=["Students"])

@router.get("/", response_model=dict)
async def get_students(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_profiles_db)
):
    service = StudentService(db)
    result = await service.list_students(pagination.page, pagination.size)
    result["items"] = [service.dump(s) for s in result["items"]]
    return result

@router.get("/active", response_model=dict)
async def get_active_students(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_profiles_db)
):
    """Active students with their career"""
    service = StudentService(db)
    result = await service.list_active_students(pagination.page, pagination.size)
    result["items"] = [service.dump(s) for s in result["items"]]
    return result

@router.get("/{student_id}", response_model=dict)
async def get_student(student_id: int, db: AsyncSession = Depends(get_profiles_db)):
    service = StudentService(db)
    return service.dump(await service.get_student(student_id))

@router.get("/{student_id}/enrollments", response_model=dict)
async def get_student_enrollments(
    student_id: int,
    cycle_number: Optional[int] = Query(None, alias="cycleNumber", ge=1),
    db: AsyncSession = Depends(get_profiles_db)
):
    service = StudentService(db)
    return await service.get_student_enrollments(student_id, cycle_number)

@router.patch("/{student_id}", response_model=dict)
async def update_student(
    student_id: int,
    student: StudentUpdate,
    db: AsyncSession = Depends(get_profiles_db)
):
    service = StudentService(db)
    updated = await service.update_student(student_id, student.model_dump(exclude_unset=True))
    return service.dump(updated)

@router.delete("/{student_id}", response_model=dict)
async def delete_student(student_id: int, db: AsyncSession = Depends(get_profiles_db)):
    service = StudentService(db)
    return await service.delete_student(student_id)
