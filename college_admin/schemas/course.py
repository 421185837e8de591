from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from college_admin.schemas.common import PartialUpdate


class CourseCreate(BaseModel):
    title: str = Field(min_length=1)
    code: str = Field(min_length=1)
    credits: int = Field(gt=0)
    department: str = Field(min_length=1)
    syllabus: Optional[str] = None

    class Config:
        extra = "forbid"
        str_strip_whitespace = True


class CourseUpdate(PartialUpdate):
    nullable_fields = ("syllabus",)

    title: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = Field(default=None, min_length=1)
    credits: Optional[int] = Field(default=None, gt=0)
    department: Optional[str] = Field(default=None, min_length=1)
    syllabus: Optional[str] = None


class CourseOut(BaseModel):
    id: int
    title: str
    code: str
    credits: int
    department: str
    syllabus: Optional[str] = None
    enrolled_count: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CourseDetail(CourseOut):
    active_enrollments: int = 0
