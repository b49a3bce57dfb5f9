# academic_records/models/profiles/enrollment.py
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..base import ProfilesBase, utcnow

class StudentSubject(ProfilesBase):
    """One student enrolled in one subject."""
    __tablename__ = "student_subject"

    student_profile_id: Mapped[int] = mapped_column(ForeignKey("student_profile.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id: Mapped[int] = mapped_column(ForeignKey("subject_reference.id"), nullable=False, index=True)

    status: Mapped[str] = mapped_column(String(20), default="enrolled", nullable=False)
    grade: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    enrolled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Backstop for concurrent duplicate enrollments
    __table_args__ = (
        UniqueConstraint('student_profile_id', 'subject_id', name='unique_student_subject'),
    )

    student_profile = relationship("StudentProfile", back_populates="student_subjects")
    subject = relationship("SubjectReference")

class SubjectAssignment(ProfilesBase):
    __tablename__ = "subject_assignment"

    teacher_profile_id: Mapped[int] = mapped_column(ForeignKey("teacher_profile.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id: Mapped[int] = mapped_column(ForeignKey("subject_reference.id"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint('teacher_profile_id', 'subject_id', name='unique_teacher_subject'),
    )

    teacher_profile = relationship("TeacherProfile", back_populates="subjects")
    subject = relationship("SubjectReference")
