"""Tests for income and expense CRUD and the closed-month gate."""

import pytest
from sqlalchemy import func

from app.models import Expense, Income
from tests.conftest import create_manager, create_month

KINDS = ["incomes", "expenses"]


@pytest.fixture
def month(alice):
    return create_month(alice, create_manager(alice)["id"])


def entry_payload(kind, month_id, **overrides):
    payload = {"monthId": month_id, "amount": 25.5, "description": "item"}
    if kind == "expenses":
        payload["category"] = "food"
    payload.update(overrides)
    return payload


def close(client, month_id):
    response = client.post(f"/months/{month_id}/close", json={"closeDate": "2024-02-01"})
    assert response.status_code == 200


class TestCreateEntry:
    """POST /incomes and POST /expenses."""

    @pytest.mark.parametrize("kind", KINDS)
    def test_create(self, alice, month, kind):
        response = alice.post(f"/{kind}", json=entry_payload(kind, month["id"], date="2024-01-10"))
        assert response.status_code == 201
        body = response.json()
        assert body["monthId"] == month["id"]
        assert body["amount"] == 25.5
        assert body["description"] == "item"
        assert body["date"] == "2024-01-10T00:00:00"

    def test_expense_category_optional(self, alice, month):
        response = alice.post("/expenses", json={"monthId": month["id"], "amount": 3, "description": "misc"})
        assert response.status_code == 201
        assert response.json()["category"] is None

    @pytest.mark.parametrize("kind", KINDS)
    def test_date_defaults_to_now(self, alice, month, kind):
        response = alice.post(f"/{kind}", json=entry_payload(kind, month["id"]))
        assert response.status_code == 201
        assert response.json()["date"]

    @pytest.mark.parametrize("kind", KINDS)
    @pytest.mark.parametrize(
        "overrides",
        [{"amount": 0}, {"amount": -5}, {"description": ""}, {"date": "not-a-date"}, {"amount": "abc"}],
    )
    def test_invalid_payload(self, alice, month, kind, overrides):
        response = alice.post(f"/{kind}", json=entry_payload(kind, month["id"], **overrides))
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"

    @pytest.mark.parametrize("kind,model", [("incomes", Income), ("expenses", Expense)])
    @pytest.mark.parametrize("amount", [0.001, 1e12, 12.345])
    def test_amount_outside_column_precision_rejected(self, alice, month, session, kind, model, amount):
        response = alice.post(f"/{kind}", json=entry_payload(kind, month["id"], amount=amount))
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid input"
        assert session.query(func.count(model.id)).scalar() == 0

    @pytest.mark.parametrize("kind", KINDS)
    def test_largest_storable_amount_accepted(self, alice, month, kind):
        response = alice.post(f"/{kind}", json=entry_payload(kind, month["id"], amount=9999999999.99))
        assert response.status_code == 201
        assert response.json()["amount"] == 9999999999.99

    @pytest.mark.parametrize("kind", KINDS)
    def test_invalid_payload_checked_before_lookup(self, alice, kind):
        response = alice.post(f"/{kind}", json=entry_payload(kind, 9999, amount=-1))
        assert response.status_code == 400

    @pytest.mark.parametrize("kind", KINDS)
    def test_missing_month(self, alice, kind):
        response = alice.post(f"/{kind}", json=entry_payload(kind, 9999))
        assert response.status_code == 404
        assert response.json() == {"error": "Month not found"}

    @pytest.mark.parametrize("kind", KINDS)
    def test_non_member(self, bob, month, kind):
        response = bob.post(f"/{kind}", json=entry_payload(kind, month["id"]))
        assert response.status_code == 403

    @pytest.mark.parametrize("kind,model", [("incomes", Income), ("expenses", Expense)])
    def test_closed_month_rejects_and_creates_nothing(self, alice, month, session, kind, model):
        close(alice, month["id"])
        response = alice.post(f"/{kind}", json=entry_payload(kind, month["id"]))
        assert response.status_code == 400
        assert response.json() == {"error": "Cannot add entries to a closed month"}
        assert session.query(func.count(model.id)).scalar() == 0


class TestUpdateAndDeleteEntry:
    """PATCH and DELETE on /incomes/{id} and /expenses/{id}."""

    @pytest.mark.parametrize("kind", KINDS)
    def test_partial_update(self, alice, month, kind):
        entry = alice.post(f"/{kind}", json=entry_payload(kind, month["id"])).json()
        response = alice.patch(f"/{kind}/{entry['id']}", json={"amount": 99})
        assert response.status_code == 200
        body = response.json()
        assert body["amount"] == 99
        assert body["description"] == "item"

    def test_expense_category_can_be_cleared(self, alice, month):
        entry = alice.post("/expenses", json=entry_payload("expenses", month["id"])).json()
        response = alice.patch(f"/expenses/{entry['id']}", json={"category": None})
        assert response.status_code == 200
        assert response.json()["category"] is None

    @pytest.mark.parametrize("kind", KINDS)
    def test_update_rejects_non_positive_amount(self, alice, month, kind):
        entry = alice.post(f"/{kind}", json=entry_payload(kind, month["id"])).json()
        assert alice.patch(f"/{kind}/{entry['id']}", json={"amount": 0}).status_code == 400

    @pytest.mark.parametrize("kind", KINDS)
    def test_update_rejects_amount_that_would_round(self, alice, month, kind):
        entry = alice.post(f"/{kind}", json=entry_payload(kind, month["id"])).json()
        assert alice.patch(f"/{kind}/{entry['id']}", json={"amount": 0.001}).status_code == 400
        stored = alice.get(f"/months/{month['id']}").json()[kind]
        assert [e["amount"] for e in stored] == [25.5]

    @pytest.mark.parametrize("kind", KINDS)
    def test_delete(self, alice, month, kind):
        entry = alice.post(f"/{kind}", json=entry_payload(kind, month["id"])).json()
        assert alice.delete(f"/{kind}/{entry['id']}").status_code == 200
        assert alice.delete(f"/{kind}/{entry['id']}").status_code == 404

    @pytest.mark.parametrize("kind", KINDS)
    def test_missing_entry(self, alice, kind):
        assert alice.patch(f"/{kind}/9999", json={"amount": 1}).status_code == 404
        assert alice.delete(f"/{kind}/9999").status_code == 404

    @pytest.mark.parametrize("kind", KINDS)
    def test_non_member(self, alice, bob, month, kind):
        entry = alice.post(f"/{kind}", json=entry_payload(kind, month["id"])).json()
        assert bob.patch(f"/{kind}/{entry['id']}", json={"amount": 1}).status_code == 403
        assert bob.delete(f"/{kind}/{entry['id']}").status_code == 403

    @pytest.mark.parametrize("kind", KINDS)
    def test_closed_month_freezes_entries(self, alice, month, kind):
        entry = alice.post(f"/{kind}", json=entry_payload(kind, month["id"])).json()
        close(alice, month["id"])

        response = alice.patch(f"/{kind}/{entry['id']}", json={"amount": 1})
        assert response.status_code == 400
        assert response.json() == {"error": "Cannot modify entries of a closed month"}
        assert alice.delete(f"/{kind}/{entry['id']}").status_code == 400

        stored = alice.get(f"/months/{month['id']}").json()[kind]
        assert [(e["id"], e["amount"]) for e in stored] == [(entry["id"], 25.5)]
