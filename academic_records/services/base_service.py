# academic_records/services/base_service.py
"""Base service with common CRUD operations."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Type, Any, Dict, Optional, Sequence, TypeVar, Generic

from ..utils.pagination import Paginator

# Define generic type
T = TypeVar('T')

class BaseService(Generic[T]):
    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    async def get(self, id: Any, options: Sequence = ()) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == id).options(*options)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_paginated(
        self,
        page: int = 1,
        size: int = 20,
        where: Sequence = (),
        options: Sequence = (),
        order_by: str = None,
        sort: str = "asc",
    ) -> Dict[str, Any]:
        """Get one page of rows matching ``where`` plus the pagination counters"""
        count_stmt = select(func.count()).select_from(self.model).where(*where)
        total = (await self.db.execute(count_stmt)).scalar()

        stmt = select(self.model).where(*where).options(*options)
        if order_by and hasattr(self.model, order_by):
            order_field = getattr(self.model, order_by)
            stmt = stmt.order_by(order_field.desc() if sort.lower() == "desc" else order_field.asc())
        else:
            stmt = stmt.order_by(self.model.id.asc())

        stmt = stmt.offset(Paginator.calculate_offset(page, size)).limit(size)
        items = (await self.db.execute(stmt)).scalars().all()

        return Paginator.create_response(items, page, size, total)

    async def create(self, obj_in: Dict) -> T:
        obj = self.model(**obj_in)
        self.db.add(obj)
        await self.db.commit()
        return obj

    async def update(self, obj: T, obj_in: Dict) -> T:
        for key, value in obj_in.items():
            setattr(obj, key, value)
        await self.db.commit()
        return obj

    async def delete(self, obj: T) -> None:
        """Permanently delete record from database"""
        await self.db.delete(obj)
        await self.db.commit()
