# academic_records/routers/users.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_users_db, get_profiles_db
from ..schemas.user_schemas import UserCreate, User
from ..services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
async def register_user(
    user: UserCreate,
    users_db: AsyncSession = Depends(get_users_db),
    profiles_db: AsyncSession = Depends(get_profiles_db)
):
    """Create an account and its student or teacher profile"""
    service = UserService(users_db, profiles_db)
    return await service.register_user(user.model_dump())
