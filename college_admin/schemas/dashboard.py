# college_admin/schemas/dashboard.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialised with camelCase keys for the admin console."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Overview(CamelModel):
    total_students: int = 0
    total_courses: int = 0
    total_faculty: int = 0
    pending_fees: int = 0
    overdue_fees: int = 0


class CourseCount(CamelModel):
    course: str
    count: int


class YearCount(CamelModel):
    year: int
    count: int


class StatusCount(CamelModel):
    status: str
    count: int


class DepartmentCount(CamelModel):
    department: str
    count: int


class StudentDistribution(CamelModel):
    by_course: List[CourseCount] = []
    by_year: List[YearCount] = []
    by_status: List[StatusCount] = []


class FacultyDistribution(CamelModel):
    by_department: List[DepartmentCount] = []


class EnrollmentStats(CamelModel):
    total: int = 0
    active: int = 0
    completion_rate: int = 0


class RecentEnrollment(CamelModel):
    id: int
    student_name: str
    course_name: str
    enrollment_date: Optional[datetime] = None
    status: str


class RecentFeePayment(CamelModel):
    id: int
    student_name: str
    amount: float
    type: str
    paid_date: Optional[datetime] = None
    status: str


class RecentActivities(CamelModel):
    enrollments: List[RecentEnrollment] = []
    fee_payments: List[RecentFeePayment] = []


class MonthlyCollection(CamelModel):
    month: str  # YYYY-MM
    total_amount: float = 0.0
    transaction_count: int = 0


class OverdueByType(CamelModel):
    type: str
    count: int
    total_amount: float


class FeeStatistics(CamelModel):
    total_collected: float = 0.0
    pending_amount: float = 0.0
    monthly_trend: List[MonthlyCollection] = []
    overdue_fees_by_type: List[OverdueByType] = []


class AttendanceStats(CamelModel):
    total_records: int = 0
    present_records: int = 0
    overall_percentage: int = 0


class CourseAverage(CamelModel):
    course_name: str
    course_code: str
    average_marks: float
    total_students: int


class TopCourse(CamelModel):
    course_name: str
    course_code: str
    average_marks: float
    enrolled_count: int


class PerformanceMetrics(CamelModel):
    average_grades_by_course: List[CourseAverage] = []
    top_performing_courses: List[TopCourse] = []


class DashboardReport(CamelModel):
    overview: Overview
    student_distribution: StudentDistribution
    faculty_distribution: FacultyDistribution
    enrollment_stats: EnrollmentStats
    recent_activities: RecentActivities
    fee_statistics: FeeStatistics
    attendance_stats: AttendanceStats
    performance_metrics: PerformanceMetrics
    generated_at: datetime
