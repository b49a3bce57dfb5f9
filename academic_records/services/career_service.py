# academic_records/services/career_service.py
from typing import Optional, Type
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError, ConflictError, InternalError
from ..models.academic import Career, Speciality
from .base_service import BaseService
from .reference_sync import sync_career_reference, sync_speciality_reference

logger = logging.getLogger(__name__)


class _CatalogService(BaseService):
    """Name-unique academic rows that are mirrored into the profiles database."""

    label = "Row"

    def __init__(self, model: Type, db: AsyncSession, profiles_db: Optional[AsyncSession] = None):
        super().__init__(model, db)
        self.profiles_db = profiles_db

    async def _sync(self, obj):
        raise NotImplementedError

    async def create_named(self, data: dict):
        stmt = select(self.model).where(self.model.name == data["name"])
        if (await self.db.execute(stmt)).scalars().first() is not None:
            raise ConflictError(f"{self.label} {data['name']} already exists")

        obj = await self.create(data)
        if self.profiles_db is not None:
            try:
                await self._sync(obj)
                await self.profiles_db.commit()
            except Exception:
                await self.profiles_db.rollback()
                logger.exception(f"{self.label} {obj.id} created but its reference could not be synced")
                raise InternalError(f"{self.label} created but the profiles reference could not be written")
        return obj

    async def get_or_404(self, id: int):
        obj = await self.get(id)
        if obj is None:
            raise NotFoundError(f"{self.label} with ID {id} not found")
        return obj


class CareerService(_CatalogService):
    label = "Career"

    def __init__(self, db: AsyncSession, profiles_db: Optional[AsyncSession] = None):
        super().__init__(Career, db, profiles_db)

    async def _sync(self, career):
        await sync_career_reference(self.profiles_db, career)


class SpecialityService(_CatalogService):
    label = "Speciality"

    def __init__(self, db: AsyncSession, profiles_db: Optional[AsyncSession] = None):
        super().__init__(Speciality, db, profiles_db)

    async def _sync(self, speciality):
        await sync_speciality_reference(self.profiles_db, speciality)
