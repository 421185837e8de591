from sqlalchemy.orm import Session

from college_admin.crud.common import apply_changes, paginate
from college_admin.db.models.faculty import Faculty

SORT_COLUMNS = {
    "name": Faculty.name,
    "department": Faculty.department,
    "designation": Faculty.designation,
    "salary": Faculty.salary,
}


def get_faculty(db: Session, faculty_id: int):
    return db.query(Faculty).filter(Faculty.id == faculty_id).first()


def get_faculty_by_email(db: Session, email: str):
    return db.query(Faculty).filter(Faculty.email == email).first()


def list_faculty(db: Session, department=None, designation=None, **params):
    query = db.query(Faculty)
    if department:
        query = query.filter(Faculty.department == department)
    if designation:
        query = query.filter(Faculty.designation == designation)
    return paginate(
        query,
        search_columns=(Faculty.name, Faculty.email, Faculty.department),
        sort_columns=SORT_COLUMNS,
        default_sort="name",
        **params,
    )


def create_faculty(db: Session, data):
    member = Faculty(
        name=data.name.strip(),
        email=data.email,
        department=data.department.strip(),
        designation=data.designation.strip(),
        salary=data.salary,
        last_payment_date=data.last_payment_date,
        assigned_courses=data.assigned_courses,
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


def update_faculty(db: Session, member: Faculty, changes: dict):
    apply_changes(member, changes)
    db.commit()
    db.refresh(member)
    return member


def delete_faculty(db: Session, member: Faculty):
    db.delete(member)
    db.commit()
