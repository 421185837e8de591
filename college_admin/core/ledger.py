# college_admin/core/ledger.py
"""
Fee ledger: applies a payment to a single fee and keeps the owning student's
balance in step with it.

``record_payment`` is the only code path that moves a fee to ``paid`` and the
only one that decrements ``Student.balance``. The status transition is a
single conditional UPDATE guarded by the current status, so two concurrent
payments for the same fee cannot both succeed.
"""
import json
import logging
import math
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from college_admin.core.config import settings
from college_admin.core.errors import (
    AmountMismatch,
    Conflict,
    InvalidInput,
    InvalidState,
    NotFound,
)
from college_admin.core.security import Actor
from college_admin.db.models.fee import Fee
from college_admin.db.models.student import Student

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("college_admin.audit")

PAYABLE_STATUSES = ("pending", "overdue")
OUTSTANDING_STATUSES = PAYABLE_STATUSES

# The actor comes from the session token, never from the body
IDENTITY_FIELDS = (
    "userId",
    "user_id",
    "actorId",
    "actor_id",
    "processedBy",
    "processed_by",
)

PAYMENT_FIELDS = {
    "amount_paid": ("amount_paid", "amountPaid"),
    "payment_method": ("payment_method", "paymentMethod"),
    "transaction_id": ("transaction_id", "transactionId"),
}


def parse_payment_request(body) -> dict:
    """
    Pull the payment fields out of a raw request body.

    Accepts snake_case and camelCase keys. Values are returned untouched;
    ``record_payment`` validates them.
    """
    if not isinstance(body, dict):
        raise InvalidInput("Request body must be a JSON object", field="body")

    for key in IDENTITY_FIELDS:
        if key in body:
            raise InvalidInput("User ID cannot be provided in request body", field=key)

    parsed = {}
    for name, keys in PAYMENT_FIELDS.items():
        parsed[name] = next((body[k] for k in keys if k in body), None)
    return parsed


def amounts_match(amount_paid: float, fee_amount: float, tolerance: float | None = None) -> bool:
    if tolerance is None:
        tolerance = settings.PAYMENT_AMOUNT_TOLERANCE
    # Decimal of the shortest repr keeps 100.01 vs 100.00 at exactly 0.01
    difference = abs(Decimal(repr(float(amount_paid))) - Decimal(repr(float(fee_amount))))
    return difference <= Decimal(repr(float(tolerance)))


def _validate_amount(amount_paid) -> float:
    if amount_paid is None:
        raise InvalidInput("Amount paid is required", field="amount_paid")
    if isinstance(amount_paid, bool) or not isinstance(amount_paid, (int, float)):
        raise InvalidInput("Amount paid must be a number", field="amount_paid")
    try:
        amount = float(amount_paid)
    except OverflowError:
        raise InvalidInput("Amount paid is out of range", field="amount_paid")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidInput("Amount paid must be a positive number", field="amount_paid")
    return amount


def _require_text(value, field: str, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f"{label} is required", field=field)
    return value.strip()


def _emit_audit(entry: dict) -> None:
    try:
        audit_logger.info("PAYMENT_PROCESSED %s", json.dumps(entry, default=str, sort_keys=True))
    except Exception:
        # The payment is already committed
        logger.warning(f"Could not write audit entry for fee_id={entry.get('fee_id')}", exc_info=True)


def record_payment(
    db: Session,
    fee_id: int,
    amount_paid,
    payment_method,
    transaction_id,
    actor: Actor,
) -> dict:
    """
    Apply a payment to ``fee_id`` on behalf of ``actor``.

    Checks run in order and each one fails fast: fee exists, student exists,
    input fields are well formed, fee is payable, amount matches the fee.
    On success the fee becomes ``paid`` and the student's balance drops by the
    paid amount, both in one transaction.

    Returns a dict with ``updated_fee``, ``payment_details`` and ``student_info``.
    """
    if actor is None:
        raise InvalidInput("An authenticated actor is required", field="actor")

    fee = db.get(Fee, fee_id)
    if fee is None:
        raise NotFound("Fee record not found", resource="fee", id=fee_id)

    student = db.get(Student, fee.student_id) if fee.student_id is not None else None
    if student is None:
        raise NotFound("Associated student not found", resource="student", id=fee.student_id)

    amount = _validate_amount(amount_paid)
    method = _require_text(payment_method, "payment_method", "Payment method")
    txn_id = _require_text(transaction_id, "transaction_id", "Transaction ID")

    if fee.status == "paid":
        raise Conflict("Fee has already been paid", fee_id=fee.id)
    if fee.status not in PAYABLE_STATUSES:
        raise InvalidState(
            "Fee must be in pending or overdue status to process payment",
            fee_id=fee.id,
            status=fee.status,
        )

    if not amounts_match(amount, fee.amount):
        raise AmountMismatch(amount, fee.amount)

    now = datetime.utcnow()
    fee_pk, student_pk, student_name = fee.id, student.id, student.name

    try:
        result = db.execute(
            update(Fee)
            .where(Fee.id == fee_pk, Fee.status.in_(PAYABLE_STATUSES))
            .values(status="paid", paid_date=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            # Someone else moved the fee out of a payable status first
            db.rollback()
            logger.info(f"Lost payment race on fee_id={fee_pk}, txn={txn_id}")
            raise Conflict("Fee has already been paid", fee_id=fee_pk)

        db.execute(
            update(Student)
            .where(Student.id == student_pk)
            .values(balance=func.coalesce(Student.balance, 0) - amount, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        new_balance = db.execute(
            select(Student.balance).where(Student.id == student_pk)
        ).scalar_one()
        db.commit()
    except Conflict:
        raise
    except Exception:
        db.rollback()
        logger.exception(f"Payment for fee_id={fee_pk} rolled back")
        raise

    previous_balance = new_balance + amount
    db.refresh(fee)

    payment_details = {
        "amount_paid": amount,
        "payment_method": method,
        "transaction_id": txn_id,
        "processed_by": actor.id,
        "processed_at": now,
    }
    student_info = {
        "id": student_pk,
        "name": student_name,
        "previous_balance": previous_balance,
        "new_balance": new_balance,
    }

    _emit_audit({
        "fee_id": fee_pk,
        "student_id": student_pk,
        "student_name": student_name,
        "amount": amount,
        "fee_amount": fee.amount,
        "payment_method": method,
        "transaction_id": txn_id,
        "processed_by": actor.id,
        "processed_at": now.isoformat(),
        "previous_balance": previous_balance,
        "new_balance": new_balance,
    })

    return {"updated_fee": fee, "payment_details": payment_details, "student_info": student_info}


def outstanding_total(db: Session, student_id: int) -> float:
    total = db.execute(
        select(func.coalesce(func.sum(Fee.amount), 0.0)).where(
            Fee.student_id == student_id,
            Fee.status.in_(OUTSTANDING_STATUSES),
        )
    ).scalar_one()
    return float(total)


def ledger_summary(db: Session, student: Student) -> dict:
    """Stored balance next to the sum of unpaid fees. Read only."""
    outstanding = outstanding_total(db, student.id)
    balance = float(student.balance or 0.0)
    return {
        "student_id": student.id,
        "balance": balance,
        "outstanding_fees": outstanding,
        "difference": round(balance - outstanding, 2),
    }


def mark_overdue(db: Session, today: date | None = None) -> int:
    """Move pending fees past their due date to overdue. Returns the row count."""
    today = today or date.today()
    now = datetime.utcnow()
    result = db.execute(
        update(Fee)
        .where(Fee.status == "pending", Fee.due_date < today)
        .values(status="overdue", updated_at=now)
        .execution_options(synchronize_session=False)
    )
    updated = result.rowcount
    db.commit()
    logger.info(f"Marked {updated} fees overdue as of {today.isoformat()}")
    return updated
