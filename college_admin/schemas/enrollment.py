from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

from college_admin.schemas.common import PartialUpdate

EnrollmentStatus = Literal["active", "dropped", "completed"]


class EnrollmentCreate(BaseModel):
    student_id: int
    course_id: int
    enrollment_date: Optional[datetime] = None
    status: EnrollmentStatus = "active"

    class Config:
        extra = "forbid"


class EnrollmentUpdate(PartialUpdate):
    student_id: Optional[int] = None
    course_id: Optional[int] = None
    enrollment_date: Optional[datetime] = None
    status: Optional[EnrollmentStatus] = None


class EnrollmentOut(BaseModel):
    id: int
    student_id: int
    course_id: int
    enrollment_date: datetime
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class StudentSummary(BaseModel):
    id: int
    name: str
    email: str
    course: str
    year: int

    class Config:
        from_attributes = True


class CourseSummary(BaseModel):
    id: int
    title: str
    code: str
    credits: int
    department: str

    class Config:
        from_attributes = True


class EnrollmentDetail(EnrollmentOut):
    student: Optional[StudentSummary] = None
    course: Optional[CourseSummary] = None
