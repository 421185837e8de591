from sqlalchemy.orm import Session

from college_admin.crud.common import apply_changes, paginate
from college_admin.db.models.course import Course
from college_admin.db.models.enrollment import Enrollment

SORT_COLUMNS = {
    "title": Course.title,
    "code": Course.code,
    "credits": Course.credits,
    "department": Course.department,
    "created_at": Course.created_at,
}


def get_course(db: Session, course_id: int):
    return db.query(Course).filter(Course.id == course_id).first()


def get_course_by_code(db: Session, code: str):
    return db.query(Course).filter(Course.code == code).first()


def count_active_enrollments(db: Session, course_id: int) -> int:
    return db.query(Enrollment).filter(
        Enrollment.course_id == course_id,
        Enrollment.status == "active",
    ).count()


def refresh_enrolled_count(db: Session, course_id: int):
    """Recount active enrollments into Course.enrolled_count. Caller commits."""
    course = get_course(db, course_id)
    if course is not None:
        db.flush()
        course.enrolled_count = count_active_enrollments(db, course_id)


def list_courses(db: Session, department=None, **params):
    query = db.query(Course)
    if department:
        query = query.filter(Course.department == department)
    return paginate(
        query,
        search_columns=(Course.title, Course.code, Course.department),
        sort_columns=SORT_COLUMNS,
        default_sort="title",
        **params,
    )


def create_course(db: Session, data):
    course = Course(
        title=data.title.strip(),
        code=data.code.strip().upper(),
        credits=data.credits,
        department=data.department.strip(),
        syllabus=data.syllabus.strip() if data.syllabus else None,
        enrolled_count=0,
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


def update_course(db: Session, course: Course, changes: dict):
    if "code" in changes:
        changes["code"] = changes["code"].strip().upper()
    apply_changes(course, changes)
    db.commit()
    db.refresh(course)
    return course


def delete_course(db: Session, course: Course):
    db.delete(course)
    db.commit()
