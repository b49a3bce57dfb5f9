from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..base import ProfilesBase

class StudentProfile(ProfilesBase):
    __tablename__ = "student_profile"

    user_id: Mapped[int] = mapped_column(ForeignKey("user_reference.id", ondelete="CASCADE"), unique=True, nullable=False)
    career_id: Mapped[int] = mapped_column(ForeignKey("career_reference.id"), nullable=False, index=True)
    current_cicle: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    user = relationship("UserReference", back_populates="student_profile")
    career = relationship("CareerReference")
    student_subjects = relationship(
        "StudentSubject", back_populates="student_profile", cascade="all, delete-orphan", passive_deletes=True
    )

class TeacherProfile(ProfilesBase):
    __tablename__ = "teacher_profile"

    user_id: Mapped[int] = mapped_column(ForeignKey("user_reference.id", ondelete="CASCADE"), unique=True, nullable=False)
    speciality_id: Mapped[int] = mapped_column(ForeignKey("speciality_reference.id"), nullable=False, index=True)
    career_id: Mapped[int] = mapped_column(ForeignKey("career_reference.id"), nullable=False, index=True)

    user = relationship("UserReference", back_populates="teacher_profile")
    speciality = relationship("SpecialityReference")
    career = relationship("CareerReference")
    subjects = relationship(
        "SubjectAssignment", back_populates="teacher_profile", cascade="all, delete-orphan", passive_deletes=True
    )
