# academic_records/services/subject_service.py
from typing import Optional
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.exceptions import NotFoundError, ConflictError, InternalError
from ..models.academic import Subject, Career
from .base_service import BaseService
from .reference_sync import sync_subject_reference

logger = logging.getLogger(__name__)

SUBJECT_LOAD_OPTIONS = (selectinload(Subject.career), selectinload(Subject.cycle))


class SubjectService(BaseService[Subject]):
    """Subjects live in the academic database; creation copies a reference into profiles."""

    def __init__(self, db: AsyncSession, profiles_db: Optional[AsyncSession] = None):
        super().__init__(Subject, db)
        self.profiles_db = profiles_db

    @staticmethod
    def dump(subject: Subject) -> dict:
        return {
            "id": subject.id,
            "name": subject.name,
            "career_id": subject.career_id,
            "cicle_number": subject.cicle_number,
            "cycle_id": subject.cycle_id,
            "career": {"id": subject.career.id, "name": subject.career.name} if subject.career else None,
            "cycle": {"id": subject.cycle.id, "name": subject.cycle.name} if subject.cycle else None,
        }

    async def _find_duplicate(self, name: str, career_id: int, cicle_number: int, exclude_id: int = None):
        stmt = select(Subject).where(
            Subject.name == name,
            Subject.career_id == career_id,
            Subject.cicle_number == cicle_number,
        )
        if exclude_id is not None:
            stmt = stmt.where(Subject.id != exclude_id)
        return (await self.db.execute(stmt)).scalars().first()

    async def _get_career(self, career_id: int) -> Career:
        career = await self.db.get(Career, career_id)
        if career is None:
            raise NotFoundError(f"Career with ID {career_id} not found")
        return career

    async def create_subject(self, data: dict) -> Subject:
        await self._get_career(data["career_id"])
        if await self._find_duplicate(data["name"], data["career_id"], data["cicle_number"]):
            raise ConflictError("Subject already exists in this career and cycle")

        subject = await self.create(data)

        if self.profiles_db is not None:
            try:
                await sync_subject_reference(self.profiles_db, subject)
                await self.profiles_db.commit()
            except Exception:
                await self.profiles_db.rollback()
                logger.exception(f"Subject {subject.id} created but its reference could not be synced")
                raise InternalError("Subject created but the profiles reference could not be written")

        return await self.get_subject(subject.id)

    async def list_subjects(self, page: int = 1, size: int = 10) -> dict:
        return await self.get_paginated(page=page, size=size, options=SUBJECT_LOAD_OPTIONS)

    async def get_subject(self, subject_id: int) -> Subject:
        subject = await self.get(subject_id, options=SUBJECT_LOAD_OPTIONS)
        if subject is None:
            raise NotFoundError(f"Subject with ID {subject_id} not found")
        return subject

    async def list_subjects_by_career(self, career_id: int, page: int = 1, size: int = 10) -> dict:
        """Subjects of one career ordered by cycle number"""
        career = await self._get_career(career_id)
        result = await self.get_paginated(
            page=page,
            size=size,
            where=[Subject.career_id == career_id],
            options=SUBJECT_LOAD_OPTIONS,
            order_by="cicle_number",
        )
        result["message"] = f"Subjects of career: {career.name}"
        result["career"] = {"id": career.id, "name": career.name, "total_cicles": career.total_cicles}
        return result

    async def list_subjects_by_career_and_cycle(self, career_id: int, cicle_number: int) -> dict:
        career = await self._get_career(career_id)
        stmt = (
            select(Subject)
            .where(Subject.career_id == career_id, Subject.cicle_number == cicle_number)
            .options(*SUBJECT_LOAD_OPTIONS)
            .order_by(Subject.name)
        )
        subjects = (await self.db.execute(stmt)).scalars().all()
        return {
            "message": f"Subjects of cycle {cicle_number} of career {career.name}",
            "data": [self.dump(s) for s in subjects],
            "total": len(subjects),
        }

    async def update_subject(self, subject_id: int, changes: dict) -> Subject:
        """Update the academic row; the profiles reference keeps its creation-time copy"""
        subject = await self.get_subject(subject_id)
        if any(changes.get(key) is not None for key in ("name", "career_id", "cicle_number")):
            duplicate = await self._find_duplicate(
                changes.get("name") or subject.name,
                changes.get("career_id") or subject.career_id,
                changes.get("cicle_number") or subject.cicle_number,
                exclude_id=subject_id,
            )
            if duplicate:
                raise ConflictError("A subject with these details already exists in this career and cycle")
        if changes.get("career_id") is not None:
            await self._get_career(changes["career_id"])

        await self.update(subject, {k: v for k, v in changes.items() if v is not None})
        self.db.expire_all()
        return await self.get_subject(subject_id)

    async def delete_subject(self, subject_id: int) -> dict:
        subject = await self.get_subject(subject_id)
        await self.delete(subject)
        return {"message": f"Subject with ID {subject_id} has been successfully removed"}
