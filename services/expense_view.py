"""
services/expense_view.py
------------------------
Derived projections over an already-loaded snapshot of expenses.

Every function here is pure: (snapshot, filter parameters) -> result.
Aggregates are recomputed from the snapshot on each call, which is fine
for a single user's data but would need incremental totals at scale.
"""

import unicodedata
from dataclasses import dataclass, field
from typing import Iterable, Optional

from config import CURRENCY_SYMBOL
from models.expense import Expense


@dataclass
class ExpenseView:
    """Filtered rows plus the figures shown under the list."""
    items: list[Expense] = field(default_factory=list)
    total: float = 0.0
    unpaid_total: float = 0.0

    @property
    def count(self) -> int:
        return len(self.items)


def _fold(text: str) -> str:
    # NFC so "Cà" typed on different keyboards compares equal
    return unicodedata.normalize("NFC", text).lower()


def filter_by_text(rows: Iterable[Expense], query: Optional[str]) -> list[Expense]:
    """Case-insensitive substring match on title. An empty query keeps everything."""
    needle = _fold((query or "").strip())
    return [e for e in rows if needle in _fold(e.title)]


def filter_by_category(rows: Iterable[Expense], category: Optional[str]) -> list[Expense]:
    """Exact category match. No category keeps everything."""
    if not category:
        return list(rows)
    return [e for e in rows if e.category == category]


def total_amount(rows: Iterable[Expense]) -> float:
    """Sum of amounts; 0 for an empty set."""
    return sum((e.amount for e in rows), 0.0)


def unpaid_total(rows: Iterable[Expense]) -> float:
    """Sum of amounts still owed (paid == 0)."""
    return sum((e.amount for e in rows if not e.is_paid), 0.0)


def category_totals(rows: Iterable[Expense]) -> dict[Optional[str], float]:
    """
    Group amounts by category.

    Returns:
        {category: total}, largest first. Uncategorized rows sit under None.
    """
    totals: dict[Optional[str], float] = {}
    for e in rows:
        totals[e.category] = totals.get(e.category, 0.0) + e.amount
    return dict(sorted(totals.items(), key=lambda kv: -kv[1]))


def list_categories(rows: Iterable[Expense]) -> list[str]:
    """Distinct non-empty categories, sorted."""
    return sorted({e.category for e in rows if e.category})


def build_view(rows: Iterable[Expense], query: Optional[str] = "",
               category: Optional[str] = None) -> ExpenseView:
    """
    Apply the text and category filters, keeping snapshot order,
    and total what is left.
    """
    items = filter_by_category(filter_by_text(rows, query), category)
    return ExpenseView(items=items, total=total_amount(items), unpaid_total=unpaid_total(items))


def format_money(amount: float) -> str:
    """
    Render an amount the Vietnamese way: dot thousands, comma decimals.

    Examples:
        30000   -> "30.000đ"
        12.5    -> "12,5đ"
    """
    if float(amount).is_integer():
        body = f"{amount:,.0f}".replace(",", ".")
    else:
        body = f"{amount:,.2f}".rstrip("0").rstrip(".").replace(",", "_").replace(".", ",").replace("_", ".")
    return body + CURRENCY_SYMBOL
