from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from college_admin.api.deps import get_db, get_current_user, require_staff
from college_admin.crud import course as crud_course
from college_admin.schemas.course import CourseCreate, CourseDetail, CourseOut, CourseUpdate

router = APIRouter()


def _get_or_404(db: Session, course_id: int):
    course = crud_course.get_course(db, course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


@router.get("/", response_model=List[CourseOut])
def list_courses(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    search: Optional[str] = None,
    department: Optional[str] = None,
    sort: str = "title",
    order: str = Query("asc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return crud_course.list_courses(
        db, department=department, search=search, sort=sort, order=order, limit=limit, offset=offset
    )


@router.get("/{course_id}", response_model=CourseDetail)
def get_course(course_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    course = _get_or_404(db, course_id)
    detail = CourseDetail.model_validate(course)
    detail.active_enrollments = crud_course.count_active_enrollments(db, course_id)
    return detail


@router.post("/", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(course_in: CourseCreate, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    if crud_course.get_course_by_code(db, course_in.code.strip().upper()):
        raise HTTPException(status_code=409, detail="Course code already exists")
    return crud_course.create_course(db, course_in)


@router.put("/{course_id}", response_model=CourseOut)
def update_course(
    course_id: int,
    course_update: CourseUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_staff),
):
    course = _get_or_404(db, course_id)
    changes = course_update.model_dump(exclude_unset=True)
    if changes.get("code"):
        existing = crud_course.get_course_by_code(db, changes["code"].strip().upper())
        if existing and existing.id != course_id:
            raise HTTPException(status_code=409, detail="Course code already exists")
    return crud_course.update_course(db, course, changes)


@router.delete("/{course_id}")
def delete_course(course_id: int, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    course = _get_or_404(db, course_id)
    if crud_course.count_active_enrollments(db, course_id):
        raise HTTPException(status_code=409, detail="Cannot delete course with active enrollments")
    crud_course.delete_course(db, course)
    return {"message": "Course deleted successfully", "id": course_id}
