# academic_records/routers/subjects.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_academic_db, get_profiles_db
from ..schemas.academic_schemas import SubjectCreate, SubjectUpdate
from ..services.subject_service import SubjectService
from ..utils.pagination import Paginator, PaginationParams

router = APIRouter(prefix="/subject", tags=["Subjects"])

@router.post("/", response_model=dict, status_code=status.HTTP_201_CREATED)
async def create_subject(
    subject: SubjectCreate,
    db: AsyncSession = Depends(get_academic_db),
    profiles_db: AsyncSession = Depends(get_profiles_db)
):
    service = SubjectService(db, profiles_db)
    return service.dump(await service.create_subject(subject.model_dump()))

@router.get("/", response_model=dict)
async def get_subjects(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_academic_db)
):
    service = SubjectService(db)
    result = await service.list_subjects(pagination.page, pagination.size)
    result["items"] = [service.dump(s) for s in result["items"]]
    return result

@router.get("/career/{career_id}", response_model=dict)
async def get_subjects_by_career(
    career_id: int,
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_academic_db)
):
    service = SubjectService(db)
    result = await service.list_subjects_by_career(career_id, pagination.page, pagination.size)
    result["items"] = [service.dump(s) for s in result["items"]]
    return result

@router.get("/career/{career_id}/cycle/{cicle_number}", response_model=dict)
async def get_subjects_by_career_and_cycle(
    career_id: int,
    cicle_number: int,
    db: AsyncSession = Depends(get_academic_db)
):
    service = SubjectService(db)
    return await service.list_subjects_by_career_and_cycle(career_id, cicle_number)

@router.get("/{subject_id}", response_model=dict)
async def get_subject(subject_id: int, db: AsyncSession = Depends(get_academic_db)):
    service = SubjectService(db)
    return service.dump(await service.get_subject(subject_id))

@router.patch("/{subject_id}", response_model=dict)
async def update_subject(
    subject_id: int,
    subject: SubjectUpdate,
    db: AsyncSession = Depends(get_academic_db)
):
    service = SubjectService(db)
    updated = await service.update_subject(subject_id, subject.model_dump(exclude_unset=True))
    return service.dump(updated)

@router.delete("/{subject_id}", response_model=dict)
async def delete_subject(subject_id: int, db: AsyncSession = Depends(get_academic_db)):
    service = SubjectService(db)
    return await service.delete_subject(subject_id)
