from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, JSON, ForeignKey
from college_admin.db.base import Base


class Faculty(Base):
    __tablename__ = "faculty"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    department = Column(String, nullable=False)
    designation = Column(String, nullable=False)
    salary = Column(Float, nullable=False)
    last_payment_date = Column(Date, nullable=True)
    assigned_courses = Column(JSON, nullable=True)  # list of course codes
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
