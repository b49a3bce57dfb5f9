# academic_records/routers/queries.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_profiles_db
from ..services.query_service import QueryService

router = APIRouter(prefix="/queries", tags=["Queries"])

def parse_int_list(raw: str, name: str) -> List[int]:
    """Parse "1,2,3"; entries that are not integers are dropped"""
    values = []
    for part in raw.split(","):
        part = part.strip()
        if part.lstrip("-").isdigit():
            values.append(int(part))
    if not values:
        raise HTTPException(status_code=400, detail=f"{name} must contain valid comma-separated numbers")
    return values

def parse_str_list(raw: str, name: str) -> List[str]:
    values = [part.strip() for part in raw.split(",") if part.strip()]
    if not values:
        raise HTTPException(status_code=400, detail=f"{name} must contain at least one value")
    return values

@router.get("/students/logical-filters", response_model=dict)
async def find_students_with_logical_filters(
    career_id: int = Query(..., alias="careerId"),
    cycle_number: int = Query(..., alias="cycleNumber"),
    status: str = Query("active"),
    db: AsyncSession = Depends(get_profiles_db)
):
    """Students with status AND career AND enrollments in the cycle"""
    return await QueryService(db).find_students_with_logical_filters(career_id, cycle_number, status)

@router.get("/students/multiple-cycles", response_model=dict)
async def find_students_by_multiple_cycles(
    cycles: str = Query(..., description="e.g. 1,2,3"),
    career_id: Optional[int] = Query(None, alias="careerId"),
    db: AsyncSession = Depends(get_profiles_db)
):
    cycle_list = parse_int_list(cycles, "cycles")
    return await QueryService(db).find_students_by_multiple_cycles(cycle_list, career_id)

@router.get("/students/exclude-statuses", response_model=dict)
async def find_students_excluding_statuses(
    excluded_statuses: str = Query(..., alias="excludedStatuses", description="e.g. suspended,inactive"),
    career_id: Optional[int] = Query(None, alias="careerId"),
    db: AsyncSession = Depends(get_profiles_db)
):
    statuses = parse_str_list(excluded_statuses, "excludedStatuses")
    return await QueryService(db).find_students_excluding_statuses(statuses, career_id)

@router.get("/students/complex-logic", response_model=dict)
async def find_students_with_complex_logic(
    career_ids: str = Query(..., alias="careerIds", description="e.g. 1,2"),
    exclude_cycles: str = Query(..., alias="excludeCycles", description="e.g. 1,2"),
    status: str = Query("active"),
    db: AsyncSession = Depends(get_profiles_db)
):
    """status AND (career in careerIds) AND NOT (cycle in excludeCycles)"""
    return await QueryService(db).find_students_with_complex_logic(
        parse_int_list(career_ids, "careerIds"),
        parse_int_list(exclude_cycles, "excludeCycles"),
        status,
    )
