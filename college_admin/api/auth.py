import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from college_admin.api.deps import get_db, get_current_user
from college_admin.schemas.user import UserCreate, UserLogin, Token, User
from college_admin.crud import user as crud_user
from college_admin.core.security import verify_password, create_access_token

logger = logging.getLogger(__name__)

router = APIRouter()


def _issue_token(user) -> dict:
    access_token = create_access_token(data={"sub": user.email, "id": user.id, "role": user.role})
    return {"access_token": access_token, "token_type": "bearer", "user": user}


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    if crud_user.get_user_by_email(db, user_in.email):
        raise HTTPException(status_code=409, detail="Email already exists")

    user = crud_user.create_user(db, user_in)
    logger.info(f"New user registered: {user.email} with role {user.role}")
    return _issue_token(user)


@router.post("/login", response_model=Token)
def login(form: UserLogin, db: Session = Depends(get_db)):
    user = crud_user.get_user_by_email(db, form.email.strip().lower())
    if not user or not verify_password(form.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _issue_token(user)


@router.get("/me", response_model=User)
def read_me(current_user=Depends(get_current_user)):
    return current_user
