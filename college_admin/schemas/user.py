# college_admin/schemas/user.py
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, field_validator

Role = Literal["student", "faculty", "admin"]


def normalize_email(value: str) -> str:
    # EmailStr only lower-cases the domain
    return value.lower()


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    name: str
    role: Role = "student"

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters long")
        return v

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class UserLogin(BaseModel):
    email: str
    password: str


class User(BaseModel):
    id: int
    email: str
    full_name: str
    role: str
    created_at: datetime

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str
    user: User
