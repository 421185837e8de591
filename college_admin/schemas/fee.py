# college_admin/schemas/fee.py
from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from college_admin.schemas.common import PartialUpdate

FeeType = Literal["tuition", "exam", "library", "hostel"]
# "paid" is only reachable through the payment endpoint
OpenFeeStatus = Literal["pending", "overdue"]


class FeeCreate(BaseModel):
    student_id: int
    amount: float = Field(gt=0)
    due_date: date
    type: FeeType
    status: OpenFeeStatus = "pending"

    class Config:
        extra = "forbid"


class FeeUpdate(PartialUpdate):
    student_id: Optional[int] = None
    amount: Optional[float] = Field(default=None, gt=0)
    due_date: Optional[date] = None
    type: Optional[FeeType] = None
    status: Optional[OpenFeeStatus] = None


class FeeOut(BaseModel):
    id: int
    student_id: int
    amount: float
    due_date: date
    paid_date: Optional[datetime] = None
    status: str
    type: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PaymentDetails(BaseModel):
    amount_paid: float
    payment_method: str
    transaction_id: str
    processed_by: int
    processed_at: datetime


class StudentBalanceInfo(BaseModel):
    id: int
    name: str
    previous_balance: float
    new_balance: float


class PaymentOut(BaseModel):
    updated_fee: FeeOut
    payment_details: PaymentDetails
    student_info: StudentBalanceInfo


class OverdueSweep(BaseModel):
    updated: int
    as_of: date
