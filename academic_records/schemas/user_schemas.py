# academic_records/schemas/user_schemas.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from ..models.enums import RoleId

class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)  # bcrypt input limit
    phone: Optional[str] = Field(default=None, max_length=20)
    age: Optional[int] = Field(default=None, gt=0)
    role_id: RoleId
    status: str = Field(default="active", pattern="^(active|suspended|inactive)$")

    # Profile data, required by role
    career_id: Optional[int] = Field(default=None, gt=0)
    current_cicle: Optional[int] = Field(default=None, gt=0)
    speciality_id: Optional[int] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_profile_fields(self):
        if self.role_id == RoleId.STUDENT and self.career_id is None:
            raise ValueError("career_id is required for students")
        if self.role_id == RoleId.TEACHER and (self.career_id is None or self.speciality_id is None):
            raise ValueError("career_id and speciality_id are required for teachers")
        return self

class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role_id: int
    status: str
