# academic_records/schemas/academic_schemas.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class CareerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    total_cicles: int = Field(..., gt=0)
    duration_years: int = Field(..., gt=0)

class Career(CareerCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int

class SpecialityCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=255)

class Speciality(SpecialityCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int

class SubjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    career_id: int = Field(..., gt=0)
    cicle_number: int = Field(..., gt=0)
    cycle_id: Optional[int] = Field(default=None, gt=0)

class SubjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    career_id: Optional[int] = Field(default=None, gt=0)
    cicle_number: Optional[int] = Field(default=None, gt=0)
    cycle_id: Optional[int] = Field(default=None, gt=0)

class Subject(SubjectCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
