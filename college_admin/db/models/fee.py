# college_admin/db/models/fee.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from college_admin.db.base import Base


class Fee(Base):
    __tablename__ = "fees"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    due_date = Column(Date, nullable=False)
    paid_date = Column(DateTime, nullable=True)

    # pending → paid, overdue → paid; paid is terminal
    status = Column(String, nullable=False, default="pending", index=True)
    type = Column(String, nullable=False)  # tuition, exam, library, hostel

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    student = relationship("Student", back_populates="fees")

    def __repr__(self):
        return f"<Fee(id={self.id}, student_id={self.student_id}, amount={self.amount}, status={self.status})>"
