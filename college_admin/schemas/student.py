from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from college_admin.schemas.common import PartialUpdate
from college_admin.schemas.user import normalize_email

StudentStatus = Literal["active", "inactive", "graduated"]


class StudentCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    course: str = Field(min_length=1)
    year: int = Field(ge=1)
    phone: Optional[str] = None
    address: Optional[str] = None
    balance: float = 0.0  # opening balance

    class Config:
        extra = "forbid"
        str_strip_whitespace = True

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return normalize_email(v)


class StudentUpdate(PartialUpdate):
    nullable_fields = ("phone", "address")

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    course: Optional[str] = Field(default=None, min_length=1)
    year: Optional[int] = Field(default=None, ge=1)
    phone: Optional[str] = None
    address: Optional[str] = None
    status: Optional[StudentStatus] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return normalize_email(v) if v is not None else v


class StudentOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    name: str
    email: str
    course: str
    year: int
    balance: float
    phone: Optional[str] = None
    address: Optional[str] = None
    enrollment_date: datetime
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class StudentLedger(BaseModel):
    student_id: int
    balance: float
    outstanding_fees: float
    difference: float
