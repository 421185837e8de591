from datetime import datetime

from sqlalchemy.orm import Session

from college_admin.crud.common import apply_changes, paginate
from college_admin.crud.course import refresh_enrolled_count
from college_admin.db.models.enrollment import Enrollment

SORT_COLUMNS = {
    "enrollment_date": Enrollment.enrollment_date,
    "status": Enrollment.status,
    "created_at": Enrollment.created_at,
}


def get_enrollment(db: Session, enrollment_id: int):
    return db.query(Enrollment).filter(Enrollment.id == enrollment_id).first()


def find_enrollment(db: Session, student_id: int, course_id: int):
    return db.query(Enrollment).filter(
        Enrollment.student_id == student_id,
        Enrollment.course_id == course_id,
    ).first()


def list_enrollments(db: Session, student_id=None, course_id=None, status=None, **params):
    query = db.query(Enrollment)
    if student_id is not None:
        query = query.filter(Enrollment.student_id == student_id)
    if course_id is not None:
        query = query.filter(Enrollment.course_id == course_id)
    if status:
        query = query.filter(Enrollment.status == status)
    params.setdefault("order", "desc")
    return paginate(query, sort_columns=SORT_COLUMNS, default_sort="created_at", **params)


def create_enrollment(db: Session, data):
    enrollment = Enrollment(
        student_id=data.student_id,
        course_id=data.course_id,
        enrollment_date=data.enrollment_date or datetime.utcnow(),
        status=data.status,
    )
    db.add(enrollment)
    refresh_enrolled_count(db, data.course_id)
    db.commit()
    db.refresh(enrollment)
    return enrollment


def update_enrollment(db: Session, enrollment: Enrollment, changes: dict):
    previous_course_id = enrollment.course_id
    apply_changes(enrollment, changes)
    refresh_enrolled_count(db, enrollment.course_id)
    if previous_course_id != enrollment.course_id:
        refresh_enrolled_count(db, previous_course_id)
    db.commit()
    db.refresh(enrollment)
    return enrollment


def delete_enrollment(db: Session, enrollment: Enrollment):
    course_id = enrollment.course_id
    db.delete(enrollment)
    refresh_enrolled_count(db, course_id)
    db.commit()
