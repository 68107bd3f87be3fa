"""End-to-end scenarios around GET /managers/{id}/stats."""

import pytest
from sqlalchemy import func

from app.models import Expense
from tests.conftest import create_manager, create_month


class TestStatsScenario:
    """Manager → month → entries → stats → close → rejection."""

    def test_full_lifecycle(self, alice, session):
        manager = create_manager(alice, "Casa")
        assert manager["members"][0]["role"] == "admin"

        month = create_month(alice, manager["id"], "2024-01-01T00:00:00Z")
        expense = alice.post("/expenses", json={
            "monthId": month["id"], "amount": 50, "description": "rent", "category": "housing",
        })
        assert expense.status_code == 201
        income = alice.post("/incomes", json={
            "monthId": month["id"], "amount": 1000, "description": "salary",
        })
        assert income.status_code == 201

        stats = alice.get(f"/managers/{manager['id']}/stats").json()
        assert stats["totalIncome"] == 1000
        assert stats["totalExpense"] == 50
        assert stats["balance"] == 950
        assert stats["expenseByCategory"] == [{"category": "housing", "total": 50}]
        assert stats["averageIncome"] == 1000
        assert stats["averageExpense"] == 50
        assert stats["openMonthCount"] == 1
        assert stats["closedMonthCount"] == 0

        closed = alice.post(f"/months/{month['id']}/close", json={"closeDate": "2024-02-01T00:00:00Z"})
        assert closed.status_code == 200

        rejected = alice.post("/expenses", json={
            "monthId": month["id"], "amount": 10, "description": "late",
        })
        assert rejected.status_code == 400
        assert "closed" in rejected.json()["error"]
        assert session.query(func.count(Expense.id)).scalar() == 1

        stats = alice.get(f"/managers/{manager['id']}/stats").json()
        assert stats["openMonthCount"] == 0
        assert stats["closedMonthCount"] == 1
        assert stats["totalExpense"] == 50


class TestStatsAggregation:
    """Multi-month aggregation through the API."""

    def test_averages_categories_and_balance(self, alice):
        manager = create_manager(alice)
        jan = create_month(alice, manager["id"], "2024-01-01")
        feb = create_month(alice, manager["id"], "2024-02-01")
        create_month(alice, manager["id"], "2024-03-01")  # no entries

        for month_id, amount in ((jan["id"], 1200), (feb["id"], 800)):
            alice.post("/incomes", json={"monthId": month_id, "amount": amount, "description": "pay"})
        for month_id, amount, category in (
            (jan["id"], 300, "rent"),
            (feb["id"], 300, "rent"),
            (jan["id"], 45.25, "food"),
            (feb["id"], 19.99, None),
        ):
            alice.post("/expenses", json={
                "monthId": month_id, "amount": amount, "description": "x", "category": category,
            })

        stats = alice.get(f"/managers/{manager['id']}/stats").json()
        assert stats["totalIncome"] == 2000
        assert stats["totalExpense"] == pytest.approx(665.24)
        assert stats["totalIncome"] - stats["totalExpense"] == stats["balance"]
        assert [c["category"] for c in stats["expenseByCategory"]] == ["rent", "food", "uncategorized"]
        assert sum(c["total"] for c in stats["expenseByCategory"]) == pytest.approx(stats["totalExpense"])
        assert stats["averageIncome"] == 1000
        assert stats["averageExpense"] == pytest.approx(332.62)
        assert stats["openMonthCount"] == 3

    def test_empty_manager(self, alice):
        manager = create_manager(alice)
        stats = alice.get(f"/managers/{manager['id']}/stats").json()
        assert stats["totalIncome"] == 0
        assert stats["averageIncome"] == 0
        assert stats["expenseByCategory"] == []

    def test_non_member_forbidden(self, alice, bob):
        manager = create_manager(alice)
        assert bob.get(f"/managers/{manager['id']}/stats").status_code == 403

    def test_joined_member_sees_stats(self, alice, bob):
        manager = create_manager(alice)
        bob.post(f"/managers/{manager['id']}/join")
        assert bob.get(f"/managers/{manager['id']}/stats").status_code == 200
