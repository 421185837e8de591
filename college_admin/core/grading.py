# college_admin/core/grading.py
"""Derived fields of a marks record. Applied on every marks write."""

# (lower bound, grade), highest first
GRADE_BANDS = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)
FAIL_GRADE = "F"


def total_marks(internal_marks: int | None, external_marks: int | None) -> int:
    return (internal_marks or 0) + (external_marks or 0)


def grade_for(total: int) -> str:
    for lower_bound, grade in GRADE_BANDS:
        if total >= lower_bound:
            return grade
    return FAIL_GRADE


def derive(internal_marks: int | None, external_marks: int | None) -> dict:
    """Return the derived ``total_marks`` and ``grade`` for a pair of marks."""
    total = total_marks(internal_marks, external_marks)
    return {"total_marks": total, "grade": grade_for(total)}
