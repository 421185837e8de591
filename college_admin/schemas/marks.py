from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from college_admin.schemas.common import PartialUpdate


class MarksCreate(BaseModel):
    student_id: int
    course_id: int
    semester: int = Field(ge=1)
    internal_marks: int = Field(default=0, ge=0, le=100)
    external_marks: int = Field(default=0, ge=0, le=100)

    # total_marks and grade are derived; sending them is an error
    class Config:
        extra = "forbid"


class MarksUpdate(PartialUpdate):
    student_id: Optional[int] = None
    course_id: Optional[int] = None
    semester: Optional[int] = Field(default=None, ge=1)
    internal_marks: Optional[int] = Field(default=None, ge=0, le=100)
    external_marks: Optional[int] = Field(default=None, ge=0, le=100)


class MarksOut(BaseModel):
    id: int
    student_id: int
    course_id: int
    semester: int
    internal_marks: int
    external_marks: int
    total_marks: int
    grade: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
