from sqlalchemy.orm import Session

from college_admin.crud.common import apply_changes, paginate
from college_admin.db.models.attendance import Attendance

SORT_COLUMNS = {
    "date": Attendance.date,
    "created_at": Attendance.created_at,
}


def get_attendance(db: Session, record_id: int):
    return db.query(Attendance).filter(Attendance.id == record_id).first()


def list_attendance(db: Session, student_id=None, course_id=None, status=None, on_date=None, **params):
    query = db.query(Attendance)
    if student_id is not None:
        query = query.filter(Attendance.student_id == student_id)
    if course_id is not None:
        query = query.filter(Attendance.course_id == course_id)
    if status:
        query = query.filter(Attendance.status == status)
    if on_date is not None:
        query = query.filter(Attendance.date == on_date)
    params.setdefault("order", "desc")
    return paginate(query, sort_columns=SORT_COLUMNS, default_sort="date", **params)


def create_attendance(db: Session, data):
    record = Attendance(**data.model_dump())
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def update_attendance(db: Session, record: Attendance, changes: dict):
    apply_changes(record, changes)
    db.commit()
    db.refresh(record)
    return record


def delete_attendance(db: Session, record: Attendance):
    db.delete(record)
    db.commit()
