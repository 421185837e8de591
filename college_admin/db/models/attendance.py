# college_admin/db/models/attendance.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey
from college_admin.db.base import Base


class Attendance(Base):
    __tablename__ = "attendance"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)  # several records per day and session are allowed

    # "present", "absent" or "late"
    status = Column(String, nullable=False)
    # "morning", "afternoon" or "evening"
    session = Column(String, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
