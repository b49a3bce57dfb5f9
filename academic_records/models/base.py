from datetime import datetime, timezone

from sqlalchemy.orm import as_declarative, Mapped, mapped_column
from sqlalchemy import DateTime, Integer, func


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampedMixin:
    # Integer ids: reference rows reuse the id assigned by the owning database
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow
    )


# One declarative base (and one MetaData) per logical database.

@as_declarative()
class UsersBase(TimestampedMixin):
    __abstract__ = True


@as_declarative()
class ProfilesBase(TimestampedMixin):
    __abstract__ = True


@as_declarative()
class AcademicBase(TimestampedMixin):
    __abstract__ = True
