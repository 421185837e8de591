# college_admin/db/models/__init__.py

from college_admin.db.base import Base
from college_admin.db.models.user import User
from college_admin.db.models.student import Student
from college_admin.db.models.course import Course
from college_admin.db.models.faculty import Faculty
from college_admin.db.models.fee import Fee
from college_admin.db.models.marks import Marks
from college_admin.db.models.attendance import Attendance
from college_admin.db.models.enrollment import Enrollment

__all__ = [
    "Base",
    "User",
    "Student",
    "Course",
    "Faculty",
    "Fee",
    "Marks",
    "Attendance",
    "Enrollment",
]
