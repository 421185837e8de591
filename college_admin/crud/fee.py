from sqlalchemy.orm import Session

from college_admin.crud.common import apply_changes, paginate
from college_admin.db.models.fee import Fee

SORT_COLUMNS = {
    "due_date": Fee.due_date,
    "amount": Fee.amount,
    "created_at": Fee.created_at,
}


def get_fee(db: Session, fee_id: int):
    return db.query(Fee).filter(Fee.id == fee_id).first()


def list_fees(db: Session, student_id=None, status=None, fee_type=None, **params):
    query = db.query(Fee)
    if student_id is not None:
        query = query.filter(Fee.student_id == student_id)
    if status:
        query = query.filter(Fee.status == status)
    if fee_type:
        query = query.filter(Fee.type == fee_type)
    params.setdefault("order", "desc")
    return paginate(
        query,
        search_columns=(Fee.type, Fee.status),
        sort_columns=SORT_COLUMNS,
        default_sort="created_at",
        **params,
    )


def create_fee(db: Session, data):
    fee = Fee(
        student_id=data.student_id,
        amount=data.amount,
        due_date=data.due_date,
        type=data.type,
        status=data.status,
    )
    db.add(fee)
    db.commit()
    db.refresh(fee)
    return fee


def update_fee(db: Session, fee: Fee, changes: dict):
    apply_changes(fee, changes)
    db.commit()
    db.refresh(fee)
    return fee


def delete_fee(db: Session, fee: Fee):
    db.delete(fee)
    db.commit()
