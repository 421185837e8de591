from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from college_admin.api.deps import get_db, get_current_user, require_staff
from college_admin.crud import marks as crud_marks
from college_admin.crud.course import get_course
from college_admin.crud.student import get_student
from college_admin.schemas.marks import MarksCreate, MarksOut, MarksUpdate

router = APIRouter()


def _get_or_404(db: Session, marks_id: int):
    record = crud_marks.get_marks(db, marks_id)
    if not record:
        raise HTTPException(status_code=404, detail="Marks record not found")
    return record


def _check_references(db: Session, student_id=None, course_id=None):
    if student_id is not None and not get_student(db, student_id):
        raise HTTPException(status_code=400, detail="Student not found")
    if course_id is not None and not get_course(db, course_id):
        raise HTTPException(status_code=400, detail="Course not found")


@router.get("/", response_model=List[MarksOut])
def list_marks(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    student_id: Optional[int] = None,
    course_id: Optional[int] = None,
    semester: Optional[int] = None,
    sort: str = "created_at",
    order: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return crud_marks.list_marks(
        db,
        student_id=student_id,
        course_id=course_id,
        semester=semester,
        sort=sort,
        order=order,
        limit=limit,
        offset=offset,
    )


@router.get("/{marks_id}", response_model=MarksOut)
def get_marks(marks_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return _get_or_404(db, marks_id)


@router.post("/", response_model=MarksOut, status_code=status.HTTP_201_CREATED)
def create_marks(marks_in: MarksCreate, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    _check_references(db, marks_in.student_id, marks_in.course_id)
    return crud_marks.create_marks(db, marks_in)


@router.put("/{marks_id}", response_model=MarksOut)
def update_marks(
    marks_id: int,
    marks_update: MarksUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_staff),
):
    record = _get_or_404(db, marks_id)
    changes = marks_update.model_dump(exclude_unset=True)
    _check_references(db, changes.get("student_id"), changes.get("course_id"))
    return crud_marks.update_marks(db, record, changes)


@router.delete("/{marks_id}")
def delete_marks(marks_id: int, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    record = _get_or_404(db, marks_id)
    crud_marks.delete_marks(db, record)
    return {"message": "Marks record deleted successfully", "id": marks_id}
