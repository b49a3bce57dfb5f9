# academic_records/core/exceptions.py
"""Custom exceptions for the academic records API."""
from fastapi import HTTPException
from typing import Any, Dict, Optional


class AcademicRecordsException(HTTPException):
    """Base exception for the academic records application."""
    def __init__(
        self,
        status_code: int,
        detail: Any,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)

    @property
    def message(self) -> str:
        if isinstance(self.detail, dict):
            return self.detail.get("message", "")
        return str(self.detail)


class NotFoundError(AcademicRecordsException):
    """Raised when a referenced student, subject, enrollment or catalog row does not exist."""
    def __init__(self, message: str):
        super().__init__(
            status_code=404,
            detail={"error": "Not Found", "message": message}
        )


class InvalidStateError(AcademicRecordsException):
    """Raised when a business rule rejects the operation."""
    def __init__(self, message: str):
        super().__init__(
            status_code=400,
            detail={"error": "Invalid State", "message": message}
        )


class ConflictError(AcademicRecordsException):
    """Raised for duplicates: enrollments, assignments, emails, subjects."""
    def __init__(self, message: str):
        super().__init__(
            status_code=409,
            detail={"error": "Conflict", "message": message}
        )


class InternalError(AcademicRecordsException):
    """Generic failure. The cause is logged, never returned."""
    def __init__(self, message: str = "Internal server error"):
        super().__init__(
            status_code=500,
            detail={"error": "Internal Error", "message": message}
        )


BUSINESS_ERRORS = (NotFoundError, InvalidStateError, ConflictError)
