# academic_records/models/__init__.py
"""Import all models here so each base's metadata is complete (alembic, tests)."""
from .base import UsersBase, ProfilesBase, AcademicBase
from .enums import RoleId, UserStatus, EnrollmentStatus

from .users import Role, User
from .academic import Speciality, Career, Cycle, Subject
from .profiles import (
    UserReference, CareerReference, SpecialityReference, SubjectReference,
    StudentProfile, TeacherProfile, StudentSubject, SubjectAssignment,
)
