from .references import UserReference, CareerReference, SpecialityReference, SubjectReference
from .profiles import StudentProfile, TeacherProfile
from .enrollment import StudentSubject, SubjectAssignment

__all__ = [
    "UserReference",
    "CareerReference",
    "SpecialityReference",
    "SubjectReference",
    "StudentProfile",
    "TeacherProfile",
    "StudentSubject",
    "SubjectAssignment",
]
