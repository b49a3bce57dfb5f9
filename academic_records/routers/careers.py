# academic_records/routers/careers.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_academic_db, get_profiles_db
from ..schemas.academic_schemas import CareerCreate, Career, SpecialityCreate, Speciality
from ..services.career_service import CareerService, SpecialityService
from ..utils.pagination import Paginator, PaginationParams

router = APIRouter(tags=["Careers"])

@router.post("/career", response_model=Career, status_code=status.HTTP_201_CREATED)
async def create_career(
    career: CareerCreate,
    db: AsyncSession = Depends(get_academic_db),
    profiles_db: AsyncSession = Depends(get_profiles_db)
):
    service = CareerService(db, profiles_db)
    return await service.create_named(career.model_dump())

@router.get("/career", response_model=dict)
async def get_careers(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_academic_db)
):
    result = await CareerService(db).get_paginated(page=pagination.page, size=pagination.size)
    result["items"] = [Career.model_validate(c).model_dump() for c in result["items"]]
    return result

@router.get("/career/{career_id}", response_model=Career)
async def get_career(career_id: int, db: AsyncSession = Depends(get_academic_db)):
    return await CareerService(db).get_or_404(career_id)

@router.post("/speciality", response_model=Speciality, status_code=status.HTTP_201_CREATED)
async def create_speciality(
    speciality: SpecialityCreate,
    db: AsyncSession = Depends(get_academic_db),
    profiles_db: AsyncSession = Depends(get_profiles_db)
):
    service = SpecialityService(db, profiles_db)
    return await service.create_named(speciality.model_dump())

@router.get("/speciality", response_model=dict)
async def get_specialities(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    db: AsyncSession = Depends(get_academic_db)
):
    result = await SpecialityService(db).get_paginated(page=pagination.page, size=pagination.size)
    result["items"] = [Speciality.model_validate(s).model_dump() for s in result["items"]]
    return result

@router.get("/speciality/{speciality_id}", response_model=Speciality)
async def get_speciality(speciality_id: int, db: AsyncSession = Depends(get_academic_db)):
    return await SpecialityService(db).get_or_404(speciality_id)
