"""
services/expense_service.py
----------------------------
Business logic for managing expenses.
Orchestrates between the presentation layer and the ExpenseRepository.
"""

from typing import Optional

from models.expense import parse_amount
from repositories.expense_repo import ExpenseRepository
from services.expense_view import build_view, category_totals, format_money, total_amount
from utils.errors import ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


def _clean_category(category: Optional[str]) -> Optional[str]:
    category = (category or "").strip()
    return category or None


class ExpenseService:
    """
    Handles all user-facing operations on expenses.

    Every write is followed by a fresh read of the table; nothing is
    cached between calls.
    """

    def __init__(self, repo: ExpenseRepository):
        self.repo = repo

    def add_expense(self, title: str, amount_text: str, category: Optional[str] = None) -> dict:
        """
        Validate user input and store a new expense.

        Returns:
            {'success': True, 'message', 'expense'} or {'success': False, 'error'}.
            On failure nothing is stored, so the caller can keep the input.
        """
        try:
            amount = parse_amount(amount_text)
            saved = self.repo.add((title or "").strip(), amount, _clean_category(category))
        except ValidationError as e:
            logger.warning(f"Rejected new expense: {e}")
            return {"success": False, "error": str(e)}

        msg = (
            f"💸 Đã thêm khoản chi:\n"
            f"  📝 {saved.title}\n"
            f"  💶 {format_money(saved.amount)}\n"
            f"  📂 {saved.category or 'Không có danh mục'}\n"
            f"  🔖 #{saved.id}"
        )
        return {"success": True, "message": msg, "expense": saved}

    def edit_expense(self, expense_id: int, title: str, amount_text: str,
                     category: Optional[str] = None) -> str:
        """Overwrite title, amount and category of an expense."""
        try:
            amount = parse_amount(amount_text)
            updated = self.repo.update(expense_id, (title or "").strip(), amount, _clean_category(category))
        except ValidationError as e:
            return f"⚠️ {e}"

        if not updated:
            return f"⚠️ Không tìm thấy khoản chi #{expense_id}."
        return f"✏️ Đã cập nhật khoản chi #{expense_id}: {title.strip()} - {format_money(amount)}"

    def toggle_paid(self, expense_id: int) -> str:
        """Flip an expense between paid and owed."""
        new_paid = self.repo.toggle_paid(expense_id)
        if new_paid is None:
            return f"⚠️ Không tìm thấy khoản chi #{expense_id}."
        status = "✅ Đã trả" if new_paid else "⏳ Đang nợ"
        return f"#{expense_id}: {status}"

    def delete_expense(self, expense_id: int) -> str:
        """Delete an expense by ID."""
        if self.repo.delete(expense_id):
            return f"🗑️ Đã xóa khoản chi #{expense_id}."
        return f"⚠️ Không tìm thấy khoản chi #{expense_id}."

    def list_expenses(self, query: str = "", category: Optional[str] = None) -> str:
        """
        Render the (optionally filtered) expense list with its totals.

        Args:
            query: Case-insensitive text to look for in titles.
            category: Exact category to keep, None for all.
        """
        snapshot = self.repo.list_all()
        view = build_view(snapshot, query, category)
        if not view.items:
            if query or category:
                return "📭 Không có khoản chi nào phù hợp."
            return "📭 Chưa có khoản chi tiêu nào."

        lines = []
        if query:
            lines.append(f"🔍 Kết quả cho \"{query.strip()}\" ({view.count}):\n")
        elif category:
            lines.append(f"🏷️ Danh mục \"{category}\" ({view.count}):\n")
        else:
            lines.append(f"📋 Danh sách chi tiêu ({view.count}):\n")

        for e in view.items:
            status = "✅" if e.is_paid else "⏳"
            lines.append(
                f"  {status} #{e.id} | {e.title} | {e.category or 'Không có danh mục'} | {format_money(e.amount)}"
            )

        lines.append(f"\n💶 Tổng: {format_money(view.total)}")
        if view.unpaid_total:
            lines.append(f"⏳ Đang nợ: {format_money(view.unpaid_total)}")
        return "\n".join(lines)

    def categories_summary(self) -> str:
        """Total spending per category over the whole table."""
        snapshot = self.repo.list_all()
        if not snapshot:
            return "📭 Chưa có khoản chi tiêu nào."

        overall = total_amount(snapshot)
        lines = ["📂 Chi tiêu theo danh mục:\n"]
        for cat, total in category_totals(snapshot).items():
            pct = (total / overall * 100) if overall > 0 else 0
            lines.append(f"  • {cat or 'Không có danh mục'}: {format_money(total)} ({pct:.0f}%)")
        lines.append(f"\n💶 Tổng: {format_money(overall)}")
        return "\n".join(lines)
