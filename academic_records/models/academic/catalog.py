# academic_records/models/academic/catalog.py
from datetime import date
from typing import Optional

from sqlalchemy import String, Integer, Boolean, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..base import AcademicBase

class Speciality(AcademicBase):
    __tablename__ = "specialities"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(255))

class Career(AcademicBase):
    __tablename__ = "careers"

    name: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    total_cicles: Mapped[int] = mapped_column(Integer, nullable=False)
    duration_years: Mapped[int] = mapped_column(Integer, nullable=False)

    subjects = relationship("Subject", back_populates="career")

class Cycle(AcademicBase):
    """An academic period such as 2025-1."""
    __tablename__ = "cycles"

    name: Mapped[str] = mapped_column(String(20), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    period: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __table_args__ = (
        UniqueConstraint('year', 'period', name='unique_cycle_year_period'),
    )

class Subject(AcademicBase):
    __tablename__ = "subjects"

    name: Mapped[str] = mapped_column(String(150), nullable=False)
    career_id: Mapped[int] = mapped_column(ForeignKey("careers.id"), nullable=False, index=True)
    # Position of the subject in the career's curriculum (1st cycle, 2nd cycle...)
    cicle_number: Mapped[int] = mapped_column(Integer, nullable=False)
    cycle_id: Mapped[Optional[int]] = mapped_column(ForeignKey("cycles.id"), index=True)

    __table_args__ = (
        UniqueConstraint('career_id', 'cicle_number', 'name', name='unique_subject_career_cicle_name'),
    )

    career = relationship("Career", back_populates="subjects")
    cycle = relationship("Cycle")
