# academic_records/services/user_service.py
"""Account creation in the users database plus its profiles-side copy."""
import logging

import bcrypt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ConflictError, InternalError
from ..models.users import User
from .reference_sync import sync_user_reference

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


class UserService:
    def __init__(self, users_db: AsyncSession, profiles_db: AsyncSession):
        self.users_db = users_db
        self.profiles_db = profiles_db

    async def register_user(self, data: dict) -> User:
        """Create the account, then its reference row and role profile.

        The two databases are written one after the other; when the second
        write fails the account stays and the gap is logged.
        """
        stmt = select(User).where(User.email == data["email"])
        if (await self.users_db.execute(stmt)).scalars().first() is not None:
            raise ConflictError(f"User with email {data['email']} already exists")

        user = User(
            name=data["name"],
            email=data["email"],
            password=hash_password(data["password"]),
            phone=data.get("phone"),
            age=data.get("age"),
            role_id=int(data["role_id"]),
            status=data.get("status", "active"),
        )
        self.users_db.add(user)
        await self.users_db.commit()
        logger.info(f"User {user.id} registered with role {user.role_id}")

        try:
            await sync_user_reference(
                self.profiles_db,
                user,
                career_id=data.get("career_id"),
                current_cicle=data.get("current_cicle"),
                speciality_id=data.get("speciality_id"),
            )
            await self.profiles_db.commit()
        except Exception:
            await self.profiles_db.rollback()
            logger.exception(f"Reference sync gap: user {user.id} exists without a profiles reference")
            raise InternalError("User created but the profile could not be written")

        return user
