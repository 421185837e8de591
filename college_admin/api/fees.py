# college_admin/api/fees.py
import logging
from datetime import date
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from college_admin.api.deps import get_actor, get_db, get_current_user, require_staff
from college_admin.core import ledger
from college_admin.core.security import Actor
from college_admin.crud import fee as crud_fee
from college_admin.crud.student import get_student
from college_admin.schemas.fee import (
    FeeCreate,
    FeeOut,
    FeeType,
    FeeUpdate,
    OverdueSweep,
    PaymentOut,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_or_404(db: Session, fee_id: int):
    fee = crud_fee.get_fee(db, fee_id)
    if not fee:
        raise HTTPException(status_code=404, detail="Fee record not found")
    return fee


@router.get("/", response_model=List[FeeOut])
def list_fees(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    search: Optional[str] = None,
    student_id: Optional[int] = None,
    status: Optional[str] = Query(None, pattern="^(pending|overdue|paid)$"),
    type: Optional[FeeType] = None,
    sort: str = "created_at",
    order: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return crud_fee.list_fees(
        db,
        student_id=student_id,
        status=status,
        fee_type=type,
        search=search,
        sort=sort,
        order=order,
        limit=limit,
        offset=offset,
    )


@router.get("/{fee_id}", response_model=FeeOut)
def get_fee(fee_id: int, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return _get_or_404(db, fee_id)


@router.post("/", response_model=FeeOut, status_code=status.HTTP_201_CREATED)
def create_fee(fee_in: FeeCreate, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    if not get_student(db, fee_in.student_id):
        raise HTTPException(status_code=400, detail="Student not found")
    return crud_fee.create_fee(db, fee_in)


@router.post("/mark-overdue", response_model=OverdueSweep)
def mark_overdue_fees(db: Session = Depends(get_db), current_user=Depends(require_staff)):
    today = date.today()
    updated = ledger.mark_overdue(db, today)
    return {"updated": updated, "as_of": today}


@router.put("/{fee_id}", response_model=FeeOut)
def update_fee(
    fee_id: int,
    fee_update: FeeUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(require_staff),
):
    fee = _get_or_404(db, fee_id)
    if fee.status == "paid":
        raise HTTPException(status_code=409, detail="Paid fees cannot be modified")

    changes = fee_update.model_dump(exclude_unset=True)
    if "student_id" in changes and not get_student(db, changes["student_id"]):
        raise HTTPException(status_code=400, detail="Student not found")

    return crud_fee.update_fee(db, fee, changes)


@router.put("/{fee_id}/payment", response_model=PaymentOut)
def record_fee_payment(
    fee_id: int,
    payload: Any = Body(...),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    request = ledger.parse_payment_request(payload)
    result = ledger.record_payment(
        db,
        fee_id,
        request["amount_paid"],
        request["payment_method"],
        request["transaction_id"],
        actor=actor,
    )
    logger.info(f"Fee {fee_id} paid by actor {actor.id}")
    return result


@router.delete("/{fee_id}")
def delete_fee(fee_id: int, db: Session = Depends(get_db), current_user=Depends(require_staff)):
    fee = _get_or_404(db, fee_id)
    crud_fee.delete_fee(db, fee)
    return {"message": "Fee record deleted successfully", "id": fee_id}
