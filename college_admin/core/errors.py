# college_admin/core/errors.py
"""
Domain errors raised by the ledger and dashboard services.

Each error carries a machine-readable ``code``, a human-readable message and
the HTTP status the API layer answers with. Extra keyword arguments end up in
the response body next to ``error`` and ``code``.
"""


class DomainError(Exception):
    code = "DOMAIN_ERROR"
    status_code = 400

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.details = {k: v for k, v in details.items() if v is not None}

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code, **self.details}


class InvalidInput(DomainError):
    code = "INVALID_INPUT"
    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, field=field)
        self.field = field


class NotFound(DomainError):
    code = "NOT_FOUND"
    status_code = 404


class Conflict(DomainError):
    code = "CONFLICT"
    status_code = 409


class InvalidState(DomainError):
    code = "INVALID_STATE"
    status_code = 409


class AmountMismatch(DomainError):
    code = "AMOUNT_MISMATCH"
    status_code = 400

    def __init__(self, amount_paid: float, fee_amount: float):
        super().__init__(
            f"Amount paid ({amount_paid:.2f}) does not match fee amount ({fee_amount:.2f})",
            amount_paid=amount_paid,
            fee_amount=fee_amount,
        )
        self.amount_paid = amount_paid
        self.fee_amount = fee_amount


class AggregationFailed(DomainError):
    code = "AGGREGATION_FAILED"
    status_code = 500
