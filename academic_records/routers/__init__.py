from . import health, users, students, teachers, subjects, careers, enrollment, queries, reports

__all__ = [
    "health",
    "users",
    "students",
    "teachers",
    "subjects",
    "careers",
    "enrollment",
    "queries",
    "reports",
]
