"""
Tests for the pure filtering/aggregation helpers.
"""

import unicodedata

import pytest

from models.expense import Expense
from services.expense_view import (
    build_view,
    category_totals,
    filter_by_category,
    filter_by_text,
    format_money,
    list_categories,
    total_amount,
    unpaid_total,
)


@pytest.fixture
def snapshot():
    return [
        Expense(id=3, title="Gửi xe", amount=5000, category=None, paid=0, created_at=3),
        Expense(id=2, title="Ăn trưa", amount=50000, category="Ăn uống", paid=1, created_at=2),
        Expense(id=1, title="Cà phê", amount=30000, category="Đồ uống", paid=1, created_at=1),
    ]


class TestFilters:
    """Text and category filters."""

    def test_text_filter_case_insensitive(self, snapshot):
        result = filter_by_text(snapshot, "cà")
        assert [e.title for e in result] == ["Cà phê"]

    def test_text_filter_empty_query_keeps_all(self, snapshot):
        assert filter_by_text(snapshot, "") == snapshot
        assert filter_by_text(snapshot, "   ") == snapshot
        assert filter_by_text(snapshot, None) == snapshot

    def test_text_filter_normalizes_unicode(self, snapshot):
        """A decomposed query still matches a precomposed title."""
        decomposed = unicodedata.normalize("NFD", "CÀ PHÊ")
        assert [e.id for e in filter_by_text(snapshot, decomposed)] == [1]

    def test_text_filter_no_match(self, snapshot):
        assert filter_by_text(snapshot, "xăng") == []

    def test_category_filter(self, snapshot):
        assert [e.id for e in filter_by_category(snapshot, "Đồ uống")] == [1]

    def test_category_filter_unset_passes_through(self, snapshot):
        assert filter_by_category(snapshot, None) == snapshot
        assert filter_by_category(snapshot, "") == snapshot


class TestAggregates:
    """Totals and groupings."""

    def test_total_amount(self, snapshot):
        assert total_amount(snapshot) == 85000

    def test_total_amount_empty(self):
        assert total_amount([]) == 0

    def test_unpaid_total(self, snapshot):
        assert unpaid_total(snapshot) == 5000

    def test_category_totals_largest_first(self, snapshot):
        totals = category_totals(snapshot)
        assert list(totals.items()) == [("Ăn uống", 50000), ("Đồ uống", 30000), (None, 5000)]

    def test_list_categories(self, snapshot):
        assert list_categories(snapshot) == ["Ăn uống", "Đồ uống"]

    def test_build_view_keeps_order_and_totals_filtered(self, snapshot):
        view = build_view(snapshot)
        assert [e.id for e in view.items] == [3, 2, 1]
        assert view.total == 85000
        view = build_view(snapshot, query="phê")
        assert view.count == 1
        assert view.total == 30000
        assert view.unpaid_total == 0

    def test_build_view_combines_filters(self, snapshot):
        view = build_view(snapshot, query="trưa", category="Đồ uống")
        assert view.items == []
        assert view.total == 0


class TestFormatMoney:

    @pytest.mark.parametrize("amount,expected", [
        (30000, "30.000đ"),
        (1250000.0, "1.250.000đ"),
        (12.5, "12,5đ"),
        (1234.56, "1.234,56đ"),
        (0, "0đ"),
        (12.001, "12đ"),
        (9.999, "10đ"),
        (1234.004, "1.234đ"),
    ])
    def test_format(self, amount, expected):
        assert format_money(amount) == expected
