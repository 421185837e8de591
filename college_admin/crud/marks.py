from sqlalchemy.orm import Session

from college_admin.core import grading
from college_admin.crud.common import apply_changes, paginate
from college_admin.db.models.marks import Marks

SORT_COLUMNS = {
    "total_marks": Marks.total_marks,
    "grade": Marks.grade,
    "semester": Marks.semester,
    "created_at": Marks.created_at,
}


def get_marks(db: Session, marks_id: int):
    return db.query(Marks).filter(Marks.id == marks_id).first()


def list_marks(db: Session, student_id=None, course_id=None, semester=None, **params):
    query = db.query(Marks)
    if student_id is not None:
        query = query.filter(Marks.student_id == student_id)
    if course_id is not None:
        query = query.filter(Marks.course_id == course_id)
    if semester is not None:
        query = query.filter(Marks.semester == semester)
    params.setdefault("order", "desc")
    return paginate(query, sort_columns=SORT_COLUMNS, default_sort="created_at", **params)


def create_marks(db: Session, data):
    record = Marks(
        student_id=data.student_id,
        course_id=data.course_id,
        semester=data.semester,
        internal_marks=data.internal_marks,
        external_marks=data.external_marks,
        **grading.derive(data.internal_marks, data.external_marks),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def update_marks(db: Session, record: Marks, changes: dict):
    internal = changes.get("internal_marks", record.internal_marks)
    external = changes.get("external_marks", record.external_marks)
    changes.update(grading.derive(internal, external))
    apply_changes(record, changes)
    db.commit()
    db.refresh(record)
    return record


def delete_marks(db: Session, record: Marks):
    db.delete(record)
    db.commit()
