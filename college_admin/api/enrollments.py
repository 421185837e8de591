from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from college_admin.api.deps import get_db, get_current_user, require_staff
from college_admin.crud import enrollment as crud_enrollment
from college_admin.crud.course import get_course
from college_admin.crud.student import get_student
from college_admin.schemas.enrollment import (
    EnrollmentCreate,
    EnrollmentDetail,
    EnrollmentOut,
    EnrollmentStatus,
    EnrollmentUpdate,
)

router = APIRouter()

ALREADY_ENROLLED = "Student is already enrolled in this course"


def _get_or_404(db: Session, enrollment_id: int):
    enrollment = crud_enrollment.get_enrollment(db, enrollment_id)
    if not enrollment:
        raise HTTPException(status_code=404, detail="Enrollment not found")
    return enrollment


def _check_references(db: Session, student_id=None, course_id=None):
    if student_id is not None and not get_student(db, student_id):
        raise HTTPException(status_code=400, detail="Student not found")
    if course_id is not None and not get_course(db, course_id):
        raise HTTPException(status_code=400, detail="Course not found")


@router.get("/", response_model=List[EnrollmentOut])
def list_enrollments(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    student_id: Optional[int] = None,
    course_id: Optional[int] = None,
    status: Optional[EnrollmentStatus] = None,
    sort: str = "created_at",
    order: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return crud_enrollment.list_enrollments(
        db,
        student_id=student_id,
        course_id=course_id,
        status=status,
        sort=sort,
        order=order,
        limit=limit,
        offset=offset,
    )


@router.get("/{enrollment_id}", response_model=EnrollmentDetail)
def get_enrollment(enrollment_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return _get_or_404(db, enrollment_id)


@router.post("/", response_model=EnrollmentOut, status_code=status.HTTP_201_CREATED)
def create_enrollment(
    enrollment_in: EnrollmentCreate,
    db: Session = Depends(get_db),
    current_user=Depends(require_staff),
):
    _check_references(db, enrollment_in.student_id, enrollment_in.course_id)
    if crud_enrollment.find_enrollment(db, enrollment_in.student_id, enrollment_in.course_id):
        raise HTTPException(status_code=409, detail=ALREADY_ENROLLED)
    try:
        return crud_enrollment.create_enrollment(db, enrollment_in)
    except IntegrityError:
        # Concurrent insert of the same pair
        db.rollback()
        raise HTTPException(status_code=409, detail=ALREADY_ENROLLED)


@router.put("/{enrollment_id}", response_model=EnrollmentOut)
def update_enrollment(
    enrollment_id: int,
    enrollment_update: EnrollmentUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_staff),
):
    enrollment = _get_or_404(db, enrollment_id)
    changes = enrollment_update.model_dump(exclude_unset=True)
    _check_references(db, changes.get("student_id"), changes.get("course_id"))

    student_id = changes.get("student_id", enrollment.student_id)
    course_id = changes.get("course_id", enrollment.course_id)
    existing = crud_enrollment.find_enrollment(db, student_id, course_id)
    if existing and existing.id != enrollment_id:
        raise HTTPException(status_code=409, detail=ALREADY_ENROLLED)

    try:
        return crud_enrollment.update_enrollment(db, enrollment, changes)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=ALREADY_ENROLLED)


@router.delete("/{enrollment_id}")
def delete_enrollment(enrollment_id: int, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    enrollment = _get_or_404(db, enrollment_id)
    crud_enrollment.delete_enrollment(db, enrollment)
    return {"message": "Enrollment deleted successfully", "id": enrollment_id}
