from sqlalchemy.orm import Session

from college_admin.crud.common import apply_changes, paginate
from college_admin.db.models.attendance import Attendance
from college_admin.db.models.enrollment import Enrollment
from college_admin.db.models.fee import Fee
from college_admin.db.models.marks import Marks
from college_admin.db.models.student import Student

SORT_COLUMNS = {
    "name": Student.name,
    "enrollment_date": Student.enrollment_date,
    "year": Student.year,
}


def get_student(db: Session, student_id: int):
    return db.query(Student).filter(Student.id == student_id).first()


def get_student_by_email(db: Session, email: str):
    return db.query(Student).filter(Student.email == email).first()


def list_students(db: Session, course=None, year=None, status=None, **params):
    query = db.query(Student)
    if course:
        query = query.filter(Student.course == course)
    if year is not None:
        query = query.filter(Student.year == year)
    if status:
        query = query.filter(Student.status == status)
    return paginate(
        query,
        search_columns=(Student.name, Student.email, Student.course),
        sort_columns=SORT_COLUMNS,
        default_sort="name",
        **params,
    )


def create_student(db: Session, data):
    student = Student(
        name=data.name.strip(),
        email=data.email,
        course=data.course.strip(),
        year=data.year,
        balance=data.balance,
        phone=data.phone.strip() if data.phone else None,
        address=data.address.strip() if data.address else None,
        status="active",
    )
    db.add(student)
    db.commit()
    db.refresh(student)
    return student


def update_student(db: Session, student: Student, changes: dict):
    apply_changes(student, changes)
    db.commit()
    db.refresh(student)
    return student


def has_dependents(db: Session, student_id: int) -> bool:
    for model in (Fee, Marks, Attendance, Enrollment):
        if db.query(model.id).filter(model.student_id == student_id).first():
            return True
    return False


def delete_student(db: Session, student: Student):
    db.delete(student)
    db.commit()
