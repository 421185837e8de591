from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from college_admin.api.deps import get_db, get_current_user, require_staff
from college_admin.crud import attendance as crud_attendance
from college_admin.crud.course import get_course
from college_admin.crud.student import get_student
from college_admin.schemas.attendance import (
    AttendanceCreate,
    AttendanceOut,
    AttendanceStatus,
    AttendanceUpdate,
)

router = APIRouter()


def _get_or_404(db: Session, record_id: int):
    record = crud_attendance.get_attendance(db, record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Attendance record not found")
    return record


def _check_references(db: Session, student_id=None, course_id=None):
    if student_id is not None and not get_student(db, student_id):
        raise HTTPException(status_code=400, detail="Student not found")
    if course_id is not None and not get_course(db, course_id):
        raise HTTPException(status_code=400, detail="Course not found")


@router.get("/", response_model=List[AttendanceOut])
def list_attendance(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    student_id: Optional[int] = None,
    course_id: Optional[int] = None,
    status: Optional[AttendanceStatus] = None,
    on_date: Optional[date] = Query(None, alias="date"),
    sort: str = "date",
    order: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return crud_attendance.list_attendance(
        db,
        student_id=student_id,
        course_id=course_id,
        status=status,
        on_date=on_date,
        sort=sort,
        order=order,
        limit=limit,
        offset=offset,
    )


@router.get("/{record_id}", response_model=AttendanceOut)
def get_attendance(record_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return _get_or_404(db, record_id)


@router.post("/", response_model=AttendanceOut, status_code=status.HTTP_201_CREATED)
def create_attendance(
    record: AttendanceCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_staff),
):
    _check_references(db, record.student_id, record.course_id)
    return crud_attendance.create_attendance(db, record)


@router.put("/{record_id}", response_model=AttendanceOut)
def update_attendance(
    record_id: int,
    record_update: AttendanceUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_staff),
):
    record = _get_or_404(db, record_id)
    changes = record_update.model_dump(exclude_unset=True)
    _check_references(db, changes.get("student_id"), changes.get("course_id"))
    return crud_attendance.update_attendance(db, record, changes)


@router.delete("/{record_id}")
def delete_attendance(record_id: int, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    record = _get_or_404(db, record_id)
    crud_attendance.delete_attendance(db, record)
    return {"message": "Attendance record deleted successfully", "id": record_id}
