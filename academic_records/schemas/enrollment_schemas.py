# academic_records/schemas/enrollment_schemas.py
from typing import List
from pydantic import BaseModel, ConfigDict, Field

class EnrollmentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: int = Field(..., alias="studentId", gt=0, description="ID of the student")
    subject_id: int = Field(..., alias="subjectId", gt=0, description="ID of the subject")

class BulkEnrollmentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    student_id: int = Field(..., alias="studentId", gt=0)
    subject_ids: List[int] = Field(..., alias="subjectIds", min_length=1)
