# academic_records/schemas/profile_schemas.py
"""Read models for rows of the profiles database."""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field

class CareerReferenceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    total_cicles: int

class SpecialityReferenceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str

class SubjectReferenceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    career_id: int
    cicle_number: int

class EnrollmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    subject_id: int
    status: str
    grade: Optional[float] = None
    enrolled_at: datetime
    subject: Optional[SubjectReferenceOut] = None

class StudentProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    career_id: int
    current_cicle: int
    career: Optional[CareerReferenceOut] = None
    student_subjects: List[EnrollmentOut] = []

class StudentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role_id: int
    status: str
    student_profile: Optional[StudentProfileOut] = None

class AssignmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    subject_id: int
    subject: Optional[SubjectReferenceOut] = None

class TeacherProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    speciality_id: int
    career_id: int
    speciality: Optional[SpecialityReferenceOut] = None
    career: Optional[CareerReferenceOut] = None
    subjects: List[AssignmentOut] = []

class TeacherOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role_id: int
    status: str
    teacher_profile: Optional[TeacherProfileOut] = None

class StudentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    status: Optional[str] = Field(default=None, pattern="^(active|suspended|inactive)$")
    career_id: Optional[int] = Field(default=None, gt=0)
    current_cicle: Optional[int] = Field(default=None, gt=0)

class TeacherUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    speciality_id: Optional[int] = Field(default=None, gt=0)
    career_id: Optional[int] = Field(default=None, gt=0)

class SubjectAssignmentCreate(BaseModel):
    subject_id: int = Field(..., gt=0)
