from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from college_admin.db.base import Base


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    code = Column(String, unique=True, index=True, nullable=False)  # stored upper-case
    credits = Column(Integer, nullable=False)
    department = Column(String, nullable=False)
    syllabus = Column(Text, nullable=True)
    enrolled_count = Column(Integer, nullable=False, default=0)  # active enrollments
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    enrollments = relationship("Enrollment", back_populates="course")
