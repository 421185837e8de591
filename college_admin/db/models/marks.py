from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from college_admin.db.base import Base


class Marks(Base):
    __tablename__ = "marks"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    semester = Column(Integer, nullable=False)
    internal_marks = Column(Integer, nullable=False, default=0)
    external_marks = Column(Integer, nullable=False, default=0)

    # Derived in core.grading, never written from request data
    total_marks = Column(Integer, nullable=False, default=0)
    grade = Column(String, nullable=False, default="F")

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    course = relationship("Course")
