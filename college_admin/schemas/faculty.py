from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from college_admin.schemas.common import PartialUpdate
from college_admin.schemas.user import normalize_email


class FacultyCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    department: str = Field(min_length=1)
    designation: str = Field(min_length=1)
    salary: float = Field(gt=0)
    last_payment_date: Optional[date] = None
    assigned_courses: List[str] = []

    class Config:
        extra = "forbid"
        str_strip_whitespace = True

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return normalize_email(v)


class FacultyUpdate(PartialUpdate):
    nullable_fields = ("last_payment_date", "assigned_courses")

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    department: Optional[str] = Field(default=None, min_length=1)
    designation: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[float] = Field(default=None, gt=0)
    last_payment_date: Optional[date] = None
    assigned_courses: Optional[List[str]] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return normalize_email(v) if v is not None else v


class FacultyOut(BaseModel):
    id: int
    name: str
    email: str
    department: str
    designation: str
    salary: float
    last_payment_date: Optional[date] = None
    assigned_courses: Optional[List[str]] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
