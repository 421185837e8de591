import logging
import math
import threading
from datetime import date, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from college_admin.core import ledger
from college_admin.core.errors import (
    AmountMismatch,
    Conflict,
    InvalidInput,
    InvalidState,
    NotFound,
)
from college_admin.core.security import Actor
from college_admin.db import Base, Fee, Student


def test_payment_marks_fee_paid_and_reduces_balance(db, actor, make_student, make_fee):
    student = make_student(balance=1200.0)
    fee = make_fee(student, amount=500.0)

    result = ledger.record_payment(db, fee.id, 500.0, "cash", "TXN-001", actor=actor)

    db.expire_all()
    assert db.get(Fee, fee.id).status == "paid"
    assert db.get(Fee, fee.id).paid_date is not None
    assert db.get(Student, student.id).balance == pytest.approx(700.0)

    assert result["updated_fee"].status == "paid"
    assert result["payment_details"]["transaction_id"] == "TXN-001"
    assert result["payment_details"]["processed_by"] == actor.id
    assert result["student_info"]["previous_balance"] == pytest.approx(1200.0)
    assert result["student_info"]["new_balance"] == pytest.approx(700.0)


def test_replaying_a_payment_is_rejected(db, actor, make_student, make_fee):
    student = make_student(balance=1200.0)
    fee = make_fee(student, amount=500.0)
    ledger.record_payment(db, fee.id, 500.0, "cash", "TXN-001", actor=actor)

    with pytest.raises(Conflict) as exc:
        ledger.record_payment(db, fee.id, 500.0, "cash", "TXN-002", actor=actor)

    assert exc.value.code == "CONFLICT"
    db.expire_all()
    assert db.get(Student, student.id).balance == pytest.approx(700.0)


def test_amount_mismatch_reports_both_values(db, actor, make_student, make_fee):
    student = make_student(balance=300.0)
    fee = make_fee(student, amount=300.0)

    with pytest.raises(AmountMismatch) as exc:
        ledger.record_payment(db, fee.id, 250.0, "card", "TXN-9", actor=actor)

    assert "250.00" in exc.value.message
    assert "300.00" in exc.value.message
    assert exc.value.to_dict()["fee_amount"] == 300.0

    db.expire_all()
    assert db.get(Fee, fee.id).status == "pending"
    assert db.get(Fee, fee.id).paid_date is None
    assert db.get(Student, student.id).balance == pytest.approx(300.0)


@pytest.mark.parametrize("fee_amount, paid", [
    (500.0, 500.01),
    (500.0, 499.99),
    (100.0, 100.01),
    (0.3, 0.1 + 0.2),
])
def test_amount_within_tolerance_is_accepted(db, actor, make_student, make_fee, fee_amount, paid):
    student = make_student(balance=1000.0)
    fee = make_fee(student, amount=fee_amount)

    ledger.record_payment(db, fee.id, paid, "cash", "TXN-T", actor=actor)

    db.expire_all()
    assert db.get(Fee, fee.id).status == "paid"


@pytest.mark.parametrize("paid", [500.02, 499.98, 50.0])
def test_amount_outside_tolerance_is_rejected(db, actor, make_student, make_fee, paid):
    student = make_student(balance=1000.0)
    fee = make_fee(student, amount=500.0)

    with pytest.raises(AmountMismatch):
        ledger.record_payment(db, fee.id, paid, "cash", "TXN-T", actor=actor)


def test_overdue_fee_can_be_paid(db, actor, make_student, make_fee):
    student = make_student(balance=80.0)
    fee = make_fee(student, amount=80.0, status="overdue", type="library")

    ledger.record_payment(db, fee.id, 80.0, "upi", "TXN-OD", actor=actor)

    db.expire_all()
    assert db.get(Fee, fee.id).status == "paid"
    assert db.get(Student, student.id).balance == pytest.approx(0.0)


def test_unknown_fee_is_not_found_before_input_checks(db, actor):
    with pytest.raises(NotFound):
        ledger.record_payment(db, 4242, -1, "", "", actor=actor)


def test_fee_without_student_is_not_found(db, actor, make_fee):
    fee = make_fee(None, student_id=999)

    with pytest.raises(NotFound) as exc:
        ledger.record_payment(db, fee.id, 500.0, "cash", "TXN-1", actor=actor)
    assert exc.value.details["resource"] == "student"


@pytest.mark.parametrize("amount, method, txn, field", [
    (None, "cash", "T1", "amount_paid"),
    ("500", "cash", "T1", "amount_paid"),
    (True, "cash", "T1", "amount_paid"),
    (0, "cash", "T1", "amount_paid"),
    (-500.0, "cash", "T1", "amount_paid"),
    (math.inf, "cash", "T1", "amount_paid"),
    (math.nan, "cash", "T1", "amount_paid"),
    (10 ** 400, "cash", "T1", "amount_paid"),
    (500.0, "", "T1", "payment_method"),
    (500.0, "   ", "T1", "payment_method"),
    (500.0, None, "T1", "payment_method"),
    (500.0, "cash", "", "transaction_id"),
    (500.0, "cash", 12345, "transaction_id"),
])
def test_invalid_input_names_the_field(db, actor, make_student, make_fee, amount, method, txn, field):
    student = make_student(balance=500.0)
    fee = make_fee(student, amount=500.0)

    with pytest.raises(InvalidInput) as exc:
        ledger.record_payment(db, fee.id, amount, method, txn, actor=actor)

    assert exc.value.field == field
    db.expire_all()
    assert db.get(Fee, fee.id).status == "pending"


def test_missing_actor_is_rejected(db, make_student, make_fee):
    student = make_student(balance=500.0)
    fee = make_fee(student)

    with pytest.raises(InvalidInput):
        ledger.record_payment(db, fee.id, 500.0, "cash", "T1", actor=None)


def test_unexpected_status_is_invalid_state(db, actor, make_student, make_fee):
    student = make_student(balance=500.0)
    fee = make_fee(student, status="waived")

    with pytest.raises(InvalidState):
        ledger.record_payment(db, fee.id, 500.0, "cash", "T1", actor=actor)


def test_payment_method_and_transaction_are_trimmed(db, actor, make_student, make_fee):
    student = make_student(balance=500.0)
    fee = make_fee(student)

    result = ledger.record_payment(db, fee.id, 500, "  cash ", " TXN-7 ", actor=actor)

    assert result["payment_details"]["payment_method"] == "cash"
    assert result["payment_details"]["transaction_id"] == "TXN-7"
    assert result["payment_details"]["amount_paid"] == 500.0


def test_lost_race_is_a_conflict_and_balance_moves_once(
    db, session_factory, actor, make_student, make_fee, monkeypatch
):
    student = make_student(balance=1200.0)
    fee = make_fee(student, amount=500.0)
    real_match = ledger.amounts_match
    raced = []

    def pay_elsewhere_first(amount_paid, fee_amount, tolerance=None):
        # Another request wins between our status check and our write
        if not raced:
            raced.append(True)
            other = session_factory()
            try:
                ledger.record_payment(other, fee.id, 500.0, "card", "TXN-WIN", actor=actor)
            finally:
                other.close()
        return real_match(amount_paid, fee_amount, tolerance)

    monkeypatch.setattr(ledger, "amounts_match", pay_elsewhere_first)

    with pytest.raises(Conflict):
        ledger.record_payment(db, fee.id, 500.0, "cash", "TXN-LOSE", actor=actor)

    db.expire_all()
    assert db.get(Fee, fee.id).status == "paid"
    assert db.get(Student, student.id).balance == pytest.approx(700.0)


def test_concurrent_payments_decrement_balance_once(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    setup = Session()
    student = Student(name="Racer", email="racer@college.edu", course="Physics", year=2, balance=1200.0)
    setup.add(student)
    setup.commit()
    fee = Fee(
        student_id=student.id,
        amount=500.0,
        due_date=date.today() + timedelta(days=5),
        type="exam",
        status="pending",
    )
    setup.add(fee)
    setup.commit()
    fee_id, student_id = fee.id, student.id
    setup.close()

    barrier = threading.Barrier(2)
    outcomes = []
    lock = threading.Lock()

    def pay(txn_id):
        session = Session()
        try:
            barrier.wait()
            ledger.record_payment(session, fee_id, 500.0, "cash", txn_id, actor=Actor(id=1, role="admin"))
            outcome = "ok"
        except Conflict:
            outcome = "conflict"
        except Exception as exc:
            outcome = repr(exc)
        finally:
            session.close()
        with lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=pay, args=(f"TXN-{i}",)) for i in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    assert sorted(outcomes) == ["conflict", "ok"]

    check = Session()
    assert check.get(Student, student_id).balance == pytest.approx(700.0)
    assert check.get(Fee, fee_id).status == "paid"
    check.close()
    engine.dispose()


def test_audit_entry_is_written(db, actor, make_student, make_fee, caplog):
    student = make_student(balance=500.0)
    fee = make_fee(student)

    with caplog.at_level(logging.INFO, logger="college_admin.audit"):
        ledger.record_payment(db, fee.id, 500.0, "cash", "TXN-AUD", actor=actor)

    records = [r for r in caplog.records if r.name == "college_admin.audit"]
    assert len(records) == 1
    message = records[0].getMessage()
    assert "PAYMENT_PROCESSED" in message
    assert "TXN-AUD" in message
    assert f'"fee_id": {fee.id}' in message


def test_audit_failure_does_not_fail_the_payment(db, actor, make_student, make_fee, monkeypatch):
    student = make_student(balance=500.0)
    fee = make_fee(student)

    def broken(*args, **kwargs):
        raise OSError("log sink unavailable")

    monkeypatch.setattr(ledger.audit_logger, "info", broken)

    result = ledger.record_payment(db, fee.id, 500.0, "cash", "TXN-X", actor=actor)

    assert result["updated_fee"].status == "paid"


def test_parse_payment_request_accepts_both_key_styles():
    assert ledger.parse_payment_request(
        {"amount_paid": 10.0, "payment_method": "cash", "transaction_id": "A"}
    ) == {"amount_paid": 10.0, "payment_method": "cash", "transaction_id": "A"}
    assert ledger.parse_payment_request(
        {"amountPaid": 10.0, "paymentMethod": "cash", "transactionId": "A"}
    ) == {"amount_paid": 10.0, "payment_method": "cash", "transaction_id": "A"}


@pytest.mark.parametrize("key", ["userId", "user_id", "actorId", "processed_by"])
def test_parse_payment_request_rejects_identity_fields(key):
    body = {"amount_paid": 10.0, "payment_method": "cash", "transaction_id": "A", key: 1}
    with pytest.raises(InvalidInput) as exc:
        ledger.parse_payment_request(body)
    assert exc.value.field == key


def test_parse_payment_request_needs_an_object():
    with pytest.raises(InvalidInput):
        ledger.parse_payment_request([1, 2, 3])


def test_ledger_summary_compares_balance_with_unpaid_fees(db, make_student, make_fee):
    student = make_student(balance=900.0)
    make_fee(student, amount=500.0)
    make_fee(student, amount=300.0, status="overdue")
    make_fee(student, amount=1000.0, status="paid")

    summary = ledger.ledger_summary(db, student)

    assert summary["outstanding_fees"] == pytest.approx(800.0)
    assert summary["difference"] == pytest.approx(100.0)


def test_mark_overdue_only_touches_past_due_pending_fees(db, make_student, make_fee):
    student = make_student()
    late = make_fee(student, due_date=date.today() - timedelta(days=1))
    current = make_fee(student, due_date=date.today() + timedelta(days=1))
    paid = make_fee(student, due_date=date.today() - timedelta(days=10), status="paid")

    assert ledger.mark_overdue(db, date.today()) == 1

    db.expire_all()
    assert db.get(Fee, late.id).status == "overdue"
    assert db.get(Fee, current.id).status == "pending"
    assert db.get(Fee, paid.id).status == "paid"
