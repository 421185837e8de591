# college_admin/core/dashboard.py
"""
Institution-wide statistics for the admin dashboard.

Every figure is recomputed from the database on each call; nothing is cached.
The sub-aggregates are independent read queries. Any one of them failing
fails the whole report with ``AggregationFailed``.
"""
import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from college_admin.core.config import settings
from college_admin.core.errors import AggregationFailed
from college_admin.db.models.attendance import Attendance
from college_admin.db.models.course import Course
from college_admin.db.models.enrollment import Enrollment
from college_admin.db.models.faculty import Faculty
from college_admin.db.models.fee import Fee
from college_admin.db.models.marks import Marks
from college_admin.db.models.student import Student
from college_admin.schemas.dashboard import (
    AttendanceStats,
    CourseAverage,
    CourseCount,
    DashboardReport,
    DepartmentCount,
    EnrollmentStats,
    FacultyDistribution,
    FeeStatistics,
    MonthlyCollection,
    Overview,
    OverdueByType,
    PerformanceMetrics,
    RecentActivities,
    RecentEnrollment,
    RecentFeePayment,
    StatusCount,
    StudentDistribution,
    TopCourse,
    YearCount,
)

logger = logging.getLogger(__name__)


def percentage(part: int, total: int) -> int:
    """``round(part / total * 100)`` with halves rounded up; 0 when total is 0."""
    if not total:
        return 0
    return (200 * part + total) // (2 * total)


def trailing_months(now: datetime, count: int) -> list[str]:
    """``count`` calendar months ending with the month of ``now``, oldest first."""
    months = []
    year, month = now.year, now.month
    for _ in range(count):
        months.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


def _count(db: Session, model, *conditions) -> int:
    stmt = select(func.count()).select_from(model)
    if conditions:
        stmt = stmt.where(*conditions)
    return db.execute(stmt).scalar_one() or 0


def _sum_amount(db: Session, *conditions) -> float:
    total = db.execute(select(func.sum(Fee.amount)).where(*conditions)).scalar_one()
    return float(total or 0.0)


def overview(db: Session) -> Overview:
    return Overview(
        total_students=_count(db, Student, Student.status == "active"),
        total_courses=_count(db, Course),
        total_faculty=_count(db, Faculty),
        pending_fees=_count(db, Fee, Fee.status == "pending"),
        overdue_fees=_count(db, Fee, Fee.status == "overdue"),
    )


def student_distribution(db: Session) -> StudentDistribution:
    by_course = db.execute(
        select(Student.course, func.count())
        .where(Student.status == "active")
        .group_by(Student.course)
        .order_by(Student.course)
    ).all()
    by_year = db.execute(
        select(Student.year, func.count())
        .where(Student.status == "active")
        .group_by(Student.year)
        .order_by(Student.year)
    ).all()
    by_status = db.execute(
        select(Student.status, func.count())
        .group_by(Student.status)
        .order_by(Student.status)
    ).all()
    return StudentDistribution(
        by_course=[CourseCount(course=c, count=n) for c, n in by_course],
        by_year=[YearCount(year=y, count=n) for y, n in by_year],
        by_status=[StatusCount(status=s, count=n) for s, n in by_status],
    )


def faculty_distribution(db: Session) -> FacultyDistribution:
    rows = db.execute(
        select(Faculty.department, func.count())
        .group_by(Faculty.department)
        .order_by(Faculty.department)
    ).all()
    return FacultyDistribution(
        by_department=[DepartmentCount(department=d, count=n) for d, n in rows]
    )


def enrollment_stats(db: Session) -> EnrollmentStats:
    total = _count(db, Enrollment)
    active = _count(db, Enrollment, Enrollment.status == "active")
    return EnrollmentStats(total=total, active=active, completion_rate=percentage(active, total))


def recent_activities(db: Session, limit: int) -> RecentActivities:
    enrollment_rows = db.execute(
        select(
            Enrollment.id,
            Student.name,
            Course.title,
            Enrollment.enrollment_date,
            Enrollment.status,
        )
        .join(Student, Enrollment.student_id == Student.id)
        .join(Course, Enrollment.course_id == Course.id)
        .order_by(Enrollment.created_at.desc(), Enrollment.id.desc())
        .limit(limit)
    ).all()
    payment_rows = db.execute(
        select(Fee.id, Student.name, Fee.amount, Fee.type, Fee.paid_date, Fee.status)
        .join(Student, Fee.student_id == Student.id)
        .where(Fee.status == "paid")
        .order_by(Fee.paid_date.desc(), Fee.created_at.desc(), Fee.id.desc())
        .limit(limit)
    ).all()
    return RecentActivities(
        enrollments=[
            RecentEnrollment(
                id=row[0],
                student_name=row[1],
                course_name=row[2],
                enrollment_date=row[3],
                status=row[4],
            )
            for row in enrollment_rows
        ],
        fee_payments=[
            RecentFeePayment(
                id=row[0],
                student_name=row[1],
                amount=row[2],
                type=row[3],
                paid_date=row[4],
                status=row[5],
            )
            for row in payment_rows
        ],
    )


def monthly_trend(db: Session, now: datetime, months: int) -> list[MonthlyCollection]:
    keys = trailing_months(now, months)
    start = datetime.strptime(keys[0], "%Y-%m")
    buckets = {key: MonthlyCollection(month=key) for key in keys}

    # Bucketed here rather than in SQL: month formatting differs per dialect
    rows = db.execute(
        select(Fee.paid_date, Fee.amount).where(
            Fee.status == "paid",
            Fee.paid_date.is_not(None),
            Fee.paid_date >= start,
        )
    ).all()
    for paid_date, amount in rows:
        bucket = buckets.get(paid_date.strftime("%Y-%m"))
        if bucket is None:
            continue
        bucket.total_amount += float(amount or 0.0)
        bucket.transaction_count += 1

    return [buckets[key] for key in keys]


def fee_statistics(db: Session, now: datetime, months: int) -> FeeStatistics:
    overdue_rows = db.execute(
        select(Fee.type, func.count(), func.sum(Fee.amount))
        .where(Fee.status == "overdue")
        .group_by(Fee.type)
        .order_by(Fee.type)
    ).all()
    return FeeStatistics(
        total_collected=_sum_amount(db, Fee.status == "paid"),
        pending_amount=_sum_amount(db, Fee.status == "pending"),
        monthly_trend=monthly_trend(db, now, months),
        overdue_fees_by_type=[
            OverdueByType(type=t, count=n, total_amount=float(total or 0.0))
            for t, n, total in overdue_rows
        ],
    )


def attendance_stats(db: Session) -> AttendanceStats:
    total = _count(db, Attendance)
    present = _count(db, Attendance, Attendance.status == "present")
    return AttendanceStats(
        total_records=total,
        present_records=present,
        overall_percentage=percentage(present, total),
    )


def performance_metrics(db: Session, top: int) -> PerformanceMetrics:
    rows = db.execute(
        select(
            Course.title,
            Course.code,
            Course.enrolled_count,
            func.avg(Marks.total_marks),
            func.count(Marks.id),
        )
        .join(Course, Marks.course_id == Course.id)
        .where(Marks.total_marks > 0)
        .group_by(Course.id, Course.title, Course.code, Course.enrolled_count)
        .order_by(Course.title)
    ).all()

    averages = [
        CourseAverage(
            course_name=title,
            course_code=code,
            average_marks=round(float(avg), 2),
            total_students=n,
        )
        for title, code, _, avg, n in rows
    ]
    ranked = sorted(rows, key=lambda row: float(row[3]), reverse=True)[:top]
    top_courses = [
        TopCourse(
            course_name=title,
            course_code=code,
            average_marks=round(float(avg), 2),
            enrolled_count=enrolled or 0,
        )
        for title, code, enrolled, avg, _ in ranked
    ]
    return PerformanceMetrics(average_grades_by_course=averages, top_performing_courses=top_courses)


def compute_dashboard(db: Session, now: datetime | None = None) -> DashboardReport:
    """Build the full dashboard snapshot. Never writes."""
    now = now or datetime.utcnow()
    try:
        report = DashboardReport(
            overview=overview(db),
            student_distribution=student_distribution(db),
            faculty_distribution=faculty_distribution(db),
            enrollment_stats=enrollment_stats(db),
            recent_activities=recent_activities(db, settings.DASHBOARD_RECENT_LIMIT),
            fee_statistics=fee_statistics(db, now, settings.DASHBOARD_TREND_MONTHS),
            attendance_stats=attendance_stats(db),
            performance_metrics=performance_metrics(db, settings.DASHBOARD_TOP_COURSES),
            generated_at=now,
        )
    except Exception as exc:
        logger.exception("Dashboard aggregation failed")
        raise AggregationFailed("Failed to fetch dashboard statistics") from exc
    return report
