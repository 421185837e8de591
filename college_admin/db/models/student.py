# college_admin/db/models/student.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from college_admin.db.base import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    course = Column(String, nullable=False)  # programme name, e.g. "Computer Science"
    year = Column(Integer, nullable=False)

    # Amount owed by the student. Only fee payments move it.
    balance = Column(Float, nullable=False, default=0.0)

    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    enrollment_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    status = Column(String, nullable=False, default="active")  # active, inactive, graduated
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    fees = relationship("Fee", back_populates="student")
    enrollments = relationship("Enrollment", back_populates="student")

    def __repr__(self):
        return f"<Student(id={self.id}, name={self.name}, balance={self.balance})>"
