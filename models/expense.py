"""
models/expense.py
-----------------
Domain model for a single expense entry, plus the write-time rules
every stored expense must satisfy.
"""

import math
from dataclasses import dataclass
from typing import Optional

from utils.errors import ValidationError

TITLE_REQUIRED = "Title không được để trống"
AMOUNT_INVALID = "Amount phải là số lớn hơn 0"


@dataclass
class Expense:
    """
    Represents a single expense record.

    Attributes:
        id: Database primary key, assigned by the store.
        title: Short description, never blank.
        amount: Strictly positive amount.
        category: Optional free-text category.
        paid: 1 if the expense is settled, 0 if still owed.
        created_at: Creation time in milliseconds since the epoch.
    """
    id: int
    title: str
    amount: float
    category: Optional[str] = None
    paid: int = 1
    created_at: int = 0

    @property
    def is_paid(self) -> bool:
        """Returns True if the expense has been paid."""
        return self.paid == 1

    def __str__(self) -> str:
        status = "paid" if self.is_paid else "unpaid"
        return f"#{self.id} {self.title} | {self.amount:.2f} | {self.category or '-'} | {status}"


def validate_expense(title, amount) -> None:
    """
    Check the fields shared by insert and update.

    Raises:
        ValidationError: If the title is blank or the amount is not a
            finite number greater than zero.
    """
    if not isinstance(title, str) or not title.strip():
        raise ValidationError(TITLE_REQUIRED)
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise ValidationError(AMOUNT_INVALID)
    try:
        value = float(amount)
    except OverflowError:
        raise ValidationError(AMOUNT_INVALID)
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(AMOUNT_INVALID)


def parse_amount(text: str) -> float:
    """
    Convert user-typed money into a float.

    Accepts plain numbers ("30000", "12.5"), a trailing currency mark
    ("30000đ") and dot-grouped thousands ("30.000", "1.250.000").

    Raises:
        ValidationError: If the text is not a number.
    """
    cleaned = (text or "").strip().lower().rstrip("đd").replace(" ", "").replace("_", "")
    parts = cleaned.split(".")
    # "30.000" / "1.250.000": every group after the first has three digits
    if len(parts) > 1 and all(len(p) == 3 and p.isdigit() for p in parts[1:]) and parts[0].isdigit():
        cleaned = "".join(parts)
    else:
        cleaned = cleaned.replace(",", ".")
    try:
        return float(cleaned)
    except ValueError:
        raise ValidationError(AMOUNT_INVALID)
