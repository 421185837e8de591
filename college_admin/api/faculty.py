from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from college_admin.api.deps import get_db, get_current_user, require_staff
from college_admin.crud import faculty as crud_faculty
from college_admin.schemas.faculty import FacultyCreate, FacultyOut, FacultyUpdate

router = APIRouter()


def _get_or_404(db: Session, faculty_id: int):
    member = crud_faculty.get_faculty(db, faculty_id)
    if not member:
        raise HTTPException(status_code=404, detail="Faculty not found")
    return member


@router.get("/", response_model=List[FacultyOut])
def list_faculty(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    search: Optional[str] = None,
    department: Optional[str] = None,
    designation: Optional[str] = None,
    sort: str = "name",
    order: str = Query("asc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return crud_faculty.list_faculty(
        db,
        department=department,
        designation=designation,
        search=search,
        sort=sort,
        order=order,
        limit=limit,
        offset=offset,
    )


@router.get("/{faculty_id}", response_model=FacultyOut)
def get_faculty(faculty_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return _get_or_404(db, faculty_id)


@router.post("/", response_model=FacultyOut, status_code=status.HTTP_201_CREATED)
def create_faculty(faculty_in: FacultyCreate, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    if crud_faculty.get_faculty_by_email(db, faculty_in.email):
        raise HTTPException(status_code=409, detail="Email already exists")
    return crud_faculty.create_faculty(db, faculty_in)


@router.put("/{faculty_id}", response_model=FacultyOut)
def update_faculty(
    faculty_id: int,
    faculty_update: FacultyUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_staff),
):
    member = _get_or_404(db, faculty_id)
    changes = faculty_update.model_dump(exclude_unset=True)
    if changes.get("email") and changes["email"] != member.email:
        if crud_faculty.get_faculty_by_email(db, changes["email"]):
            raise HTTPException(status_code=409, detail="Email already exists")
    return crud_faculty.update_faculty(db, member, changes)


@router.delete("/{faculty_id}")
def delete_faculty(faculty_id: int, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    member = _get_or_404(db, faculty_id)
    crud_faculty.delete_faculty(db, member)
    return {"message": "Faculty deleted successfully", "id": faculty_id}
