"""Tests for the pure aggregation over months (no database)."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.services.stats_service import compute_stats


def month(closed=False, incomes=(), expenses=()):
    return SimpleNamespace(
        closed=closed,
        incomes=[SimpleNamespace(amount=Decimal(str(a))) for a in incomes],
        expenses=[
            SimpleNamespace(amount=Decimal(str(a)), category=c) for a, c in expenses
        ],
    )


class TestComputeStats:
    """Totals, balance, averages, category breakdown and month counts."""

    def test_no_months(self):
        stats = compute_stats([])
        assert stats.total_income == 0
        assert stats.total_expense == 0
        assert stats.balance == 0
        assert stats.expense_by_category == []
        assert stats.average_income == 0
        assert stats.average_expense == 0
        assert stats.open_month_count == 0
        assert stats.closed_month_count == 0

    def test_single_month_scenario(self):
        stats = compute_stats([month(incomes=[1000], expenses=[(50, "housing")])])
        assert stats.total_income == 1000
        assert stats.total_expense == 50
        assert stats.balance == 950
        assert [(c.category, c.total) for c in stats.expense_by_category] == [("housing", 50)]

    def test_balance_identity_holds_exactly(self):
        stats = compute_stats([
            month(incomes=[0.1, 0.2, 1234.56], expenses=[(0.3, "a"), (99.99, None)]),
            month(closed=True, incomes=[10.01], expenses=[(0.07, "a")]),
        ])
        assert stats.total_income - stats.total_expense == stats.balance

    def test_categories_grouped_sorted_and_sum_to_total(self):
        stats = compute_stats([
            month(expenses=[(10, "food"), (200, "rent"), (5, None)]),
            month(expenses=[(30, "food"), (7, ""), (1, "fun")]),
        ])
        pairs = [(c.category, c.total) for c in stats.expense_by_category]
        assert pairs == [("rent", 200), ("food", 40), ("uncategorized", 12), ("fun", 1)]
        assert sum(c.total for c in stats.expense_by_category) == pytest.approx(stats.total_expense)
        totals = [c.total for c in stats.expense_by_category]
        assert totals == sorted(totals, reverse=True)

    def test_averages_only_count_months_with_entries(self):
        stats = compute_stats([
            month(incomes=[100]),
            month(expenses=[(40, "x")]),
            month(),  # empty months do not count
        ])
        assert stats.average_income == 50
        assert stats.average_expense == 20

    def test_open_and_closed_month_counts(self):
        stats = compute_stats([month(), month(closed=True), month(closed=True)])
        assert stats.open_month_count == 1
        assert stats.closed_month_count == 2

    def test_accepts_float_amounts(self):
        m = SimpleNamespace(
            closed=False,
            incomes=[SimpleNamespace(amount=12.5)],
            expenses=[SimpleNamespace(amount=2.5, category="x")],
        )
        stats = compute_stats([m])
        assert stats.balance == 10.0
