import datetime as dt
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel

from college_admin.schemas.common import PartialUpdate

AttendanceStatus = Literal["present", "absent", "late"]
SessionName = Literal["morning", "afternoon", "evening"]


class AttendanceBase(BaseModel):
    date: date
    status: AttendanceStatus
    session: SessionName


class AttendanceCreate(AttendanceBase):
    student_id: int
    course_id: int

    class Config:
        extra = "forbid"


class AttendanceUpdate(PartialUpdate):
    student_id: Optional[int] = None
    course_id: Optional[int] = None
    date: Optional[dt.date] = None
    status: Optional[AttendanceStatus] = None
    session: Optional[SessionName] = None


class AttendanceOut(AttendanceBase):
    id: int
    student_id: int
    course_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
