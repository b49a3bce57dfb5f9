# academic_records/models/profiles/references.py
# Read-side copies of rows owned by the users and academic databases.
# Written once at creation time, never re-synchronised.
from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..base import ProfilesBase

class UserReference(ProfilesBase):
    __tablename__ = "user_reference"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(150), unique=True, index=True, nullable=False)
    role_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False, index=True)

    student_profile = relationship(
        "StudentProfile", back_populates="user", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True
    )
    teacher_profile = relationship(
        "TeacherProfile", back_populates="user", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True
    )

class CareerReference(ProfilesBase):
    __tablename__ = "career_reference"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    total_cicles: Mapped[int] = mapped_column(Integer, nullable=False)

class SpecialityReference(ProfilesBase):
    __tablename__ = "speciality_reference"

    name: Mapped[str] = mapped_column(String(100), nullable=False)

class SubjectReference(ProfilesBase):
    __tablename__ = "subject_reference"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    career_id: Mapped[int] = mapped_column(ForeignKey("career_reference.id"), nullable=False, index=True)
    cicle_number: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    career = relationship("CareerReference")
