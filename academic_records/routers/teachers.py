# academic_records/routers/teachers.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_profiles_db
from ..schemas.profile_schemas import TeacherUpdate, SubjectAssignmentCreate, AssignmentOut
from ..services.teacher_service import TeacherService
from ..utils.pagination import Paginator, PaginationParams

router = APIRouter(prefix="/teacher", tags=["Teachers"])

@router.get("/", response_model=dict)
async def get_teachers(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_profiles_db)
):
    service = TeacherService(db)
    result = await service.list_teachers(pagination.page, pagination.size)
    result["items"] = [service.dump(t) for t in result["items"]]
    return result

@router.get("/multiple-subjects", response_model=dict)
async def get_teachers_with_multiple_subjects(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_profiles_db)
):
    service = TeacherService(db)
    return await service.list_teachers_with_multiple_subjects(pagination.page, pagination.size)

@router.get("/logical-filters", response_model=dict)
async def find_teachers_with_logical_operators(
    exclude_inactive: bool = Query(True, alias="excludeInactive"),
    is_full_time: bool = Query(False, alias="isFullTime"),
    has_subjects: bool = Query(False, alias="hasSubjects"),
    speciality_id: Optional[int] = Query(None, alias="specialityId", ge=1),
    career_id: Optional[int] = Query(None, alias="careerId", ge=1),
    db: AsyncSession = Depends(get_profiles_db)
):
    service = TeacherService(db)
    return await service.find_teachers_with_logical_operators(
        exclude_inactive=exclude_inactive,
        is_full_time=is_full_time,
        has_subjects=has_subjects,
        speciality_id=speciality_id,
        career_id=career_id,
    )

@router.get("/{teacher_id}", response_model=dict)
async def get_teacher(teacher_id: int, db: AsyncSession = Depends(get_profiles_db)):
    service = TeacherService(db)
    return service.dump(await service.get_teacher(teacher_id))

@router.patch("/{teacher_id}", response_model=dict)
async def update_teacher(
    teacher_id: int,
    teacher: TeacherUpdate,
    db: AsyncSession = Depends(get_profiles_db)
):
    service = TeacherService(db)
    updated = await service.update_teacher(teacher_id, teacher.model_dump(exclude_unset=True))
    return service.dump(updated)

@router.delete("/{teacher_id}", response_model=dict)
async def delete_teacher(teacher_id: int, db: AsyncSession = Depends(get_profiles_db)):
    service = TeacherService(db)
    return await service.delete_teacher(teacher_id)

@router.post("/{teacher_id}/subjects", response_model=AssignmentOut, status_code=status.HTTP_201_CREATED)
async def assign_subject(
    teacher_id: int,
    assignment: SubjectAssignmentCreate,
    db: AsyncSession = Depends(get_profiles_db)
):
    service = TeacherService(db)
    created = await service.assign_subject(teacher_id, assignment.subject_id)
    return AssignmentOut(id=created.id, subject_id=created.subject_id)
