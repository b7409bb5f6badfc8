"""
Tests for ExpenseService and the amount parsing it relies on.
"""

import pytest

from models.expense import AMOUNT_INVALID, TITLE_REQUIRED, parse_amount
from utils.errors import ValidationError


class TestParseAmount:
    """User-typed amounts."""

    @pytest.mark.parametrize("text,expected", [
        ("30000", 30000.0),
        (" 30000 ", 30000.0),
        ("30000đ", 30000.0),
        ("30.000", 30000.0),
        ("1.250.000đ", 1250000.0),
        ("12.5", 12.5),
        ("12,5", 12.5),
    ])
    def test_parse(self, text, expected):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "12a", None])
    def test_parse_rejects_garbage(self, text):
        with pytest.raises(ValidationError):
            parse_amount(text)


class TestExpenseService:
    """User-facing operations."""

    def test_add_expense_trims_input(self, repo, expense_service):
        result = expense_service.add_expense("  Cà phê  ", "30000", "   ")

        assert result["success"] is True
        stored = repo.list_all()[0]
        assert stored.title == "Cà phê"
        assert stored.category is None
        assert "30.000đ" in result["message"]

    @pytest.mark.parametrize("title,amount,error", [
        ("", "30000", TITLE_REQUIRED),
        ("Cà phê", "0", AMOUNT_INVALID),
        ("Cà phê", "-5", AMOUNT_INVALID),
        ("Cà phê", "nan", AMOUNT_INVALID),
        ("Cà phê", "ba mươi", AMOUNT_INVALID),
    ])
    def test_add_expense_reports_validation_error(self, repo, expense_service, title, amount, error):
        result = expense_service.add_expense(title, amount)
        assert result == {"success": False, "error": error}
        assert repo.count() == 0

    def test_edit_expense(self, repo, expense_service):
        saved = repo.add("Cà phê", 30000)
        msg = expense_service.edit_expense(saved.id, "Trà sữa", "45000", "Đồ uống")

        assert "#%d" % saved.id in msg
        stored = repo.get_by_id(saved.id)
        assert (stored.title, stored.amount, stored.category) == ("Trà sữa", 45000, "Đồ uống")

    def test_edit_unknown_id(self, expense_service):
        assert "Không tìm thấy" in expense_service.edit_expense(99, "X", "1")

    def test_edit_invalid_amount(self, repo, expense_service):
        saved = repo.add("Cà phê", 30000)
        msg = expense_service.edit_expense(saved.id, "Cà phê", "0")
        assert AMOUNT_INVALID in msg
        assert repo.get_by_id(saved.id).amount == 30000

    def test_toggle_paid(self, repo, expense_service):
        saved = repo.add("Cà phê", 30000)
        assert "Đang nợ" in expense_service.toggle_paid(saved.id)
        assert "Đã trả" in expense_service.toggle_paid(saved.id)

    def test_toggle_unknown(self, expense_service):
        assert "Không tìm thấy" in expense_service.toggle_paid(5)

    def test_delete(self, repo, expense_service):
        saved = repo.add("Cà phê", 30000)
        assert "Đã xóa" in expense_service.delete_expense(saved.id)
        assert "Không tìm thấy" in expense_service.delete_expense(saved.id)

    def test_list_empty(self, expense_service):
        assert expense_service.list_expenses() == "📭 Chưa có khoản chi tiêu nào."

    def test_list_shows_rows_and_totals(self, repo, expense_service):
        repo.add("Cà phê", 30000, "Đồ uống")
        repo.add("Ăn trưa", 50000, "Ăn uống", paid=0)

        text = expense_service.list_expenses()

        assert text.index("Ăn trưa") < text.index("Cà phê")
        assert "Tổng: 80.000đ" in text
        assert "Đang nợ: 50.000đ" in text

    def test_list_with_query(self, repo, expense_service):
        repo.add("Cà phê", 30000)
        repo.add("Ăn trưa", 50000)

        text = expense_service.list_expenses(query="cà")

        assert "Cà phê" in text
        assert "Ăn trưa" not in text
        assert "Tổng: 30.000đ" in text

    def test_list_no_match(self, repo, expense_service):
        repo.add("Cà phê", 30000)
        assert "Không có khoản chi nào phù hợp" in expense_service.list_expenses(category="Xăng")

    def test_categories_summary(self, repo, expense_service):
        repo.add("Cà phê", 30000, "Đồ uống")
        repo.add("Trà", 10000, "Đồ uống")
        repo.add("Gửi xe", 5000)

        text = expense_service.categories_summary()

        assert "Đồ uống: 40.000đ" in text
        assert "Không có danh mục: 5.000đ" in text
        assert "Tổng: 45.000đ" in text
