# academic_records/core/unit_of_work.py
"""Explicit transaction scope for multi-step read-modify-write operations."""
from typing import Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Owns one transaction on ``session``.

    Every step of a workflow runs against ``uow.session``; the transaction is
    committed only when the ``async with`` body finishes without raising and is
    rolled back on every other exit path. Must be entered before the session
    has begun a transaction when an isolation level is requested.

        async with UnitOfWork(db, isolation_level="SERIALIZABLE") as uow:
            uow.session.add(row)
    """

    def __init__(self, session: AsyncSession, isolation_level: Optional[str] = None):
        self.session = session
        self.isolation_level = isolation_level
        self.committed = False

    async def __aenter__(self) -> "UnitOfWork":
        if self.isolation_level:
            # Pins the level on the connection the transaction begins on
            await self.session.connection(
                execution_options={"isolation_level": self.isolation_level}
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            try:
                await self.session.commit()
            except Exception:
                await self.session.rollback()
                raise
            self.committed = True
        else:
            logger.debug(f"Rolling back unit of work after {exc_type.__name__}")
            await self.session.rollback()
        return False
