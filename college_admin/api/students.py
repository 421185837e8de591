# college_admin/api/students.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from college_admin.api.deps import get_db, get_current_user, require_staff
from college_admin.core import ledger
from college_admin.crud import student as crud_student
from college_admin.schemas.student import (
    StudentCreate,
    StudentLedger,
    StudentOut,
    StudentStatus,
    StudentUpdate,
)

router = APIRouter()


def _get_or_404(db: Session, student_id: int):
    student = crud_student.get_student(db, student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.get("/", response_model=List[StudentOut])
def list_students(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    search: Optional[str] = None,
    course: Optional[str] = None,
    year: Optional[int] = None,
    status: Optional[StudentStatus] = None,
    sort: str = "name",
    order: str = Query("asc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return crud_student.list_students(
        db,
        course=course,
        year=year,
        status=status,
        search=search,
        sort=sort,
        order=order,
        limit=limit,
        offset=offset,
    )


@router.get("/{student_id}", response_model=StudentOut)
def get_student(student_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return _get_or_404(db, student_id)


@router.get("/{student_id}/ledger", response_model=StudentLedger)
def get_student_ledger(student_id: int, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    student = _get_or_404(db, student_id)
    return ledger.ledger_summary(db, student)


@router.post("/", response_model=StudentOut, status_code=status.HTTP_201_CREATED)
def create_student(student_in: StudentCreate, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    if crud_student.get_student_by_email(db, student_in.email):
        raise HTTPException(status_code=409, detail="Email already exists")
    return crud_student.create_student(db, student_in)


@router.put("/{student_id}", response_model=StudentOut)
def update_student(
    student_id: int,
    student_update: StudentUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_staff),
):
    student = _get_or_404(db, student_id)
    changes = student_update.model_dump(exclude_unset=True)

    if changes.get("email") and changes["email"] != student.email:
        if crud_student.get_student_by_email(db, changes["email"]):
            raise HTTPException(status_code=409, detail="Email already exists")

    # Blank contact details clear the column
    for field in ("phone", "address"):
        if changes.get(field) == "":
            changes[field] = None

    return crud_student.update_student(db, student, changes)


@router.delete("/{student_id}")
def delete_student(student_id: int, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    student = _get_or_404(db, student_id)
    if crud_student.has_dependents(db, student_id):
        raise HTTPException(status_code=409, detail="Cannot delete student with associated records")
    crud_student.delete_student(db, student)
    return {"message": "Student deleted successfully", "id": student_id}
