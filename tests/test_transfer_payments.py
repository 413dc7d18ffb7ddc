from datetime import date
from decimal import Decimal

import utils.dates as dates


def _freeze_today(monkeypatch, frozen):
    monkeypatch.setattr(dates, "today", lambda: frozen)


def test_transfer_carries_unpaid_payments_into_next_month(client, plot, make_payment, monkeypatch):
    _freeze_today(monkeypatch, date(2024, 1, 31))
    overdue = make_payment(due_date="2023-11-10", expected="400", paidAmount="150")
    current = make_payment(due_date="2024-01-05", expected="600")
    settled = make_payment(due_date="2024-01-06", expected="700", paidAmount="700", isPaid=True)

    response = client.post(f"/api/payments/transfer/{plot['id']}")

    assert response.status_code == 200
    carried = response.json()
    assert len(carried) == 2
    assert [c["carriedFromId"] for c in carried] == [overdue["id"], current["id"]]
    assert [Decimal(c["expectedAmount"]) for c in carried] == [Decimal("400"), Decimal("600")]
    for record in carried:
        assert record["carriedOver"] is True
        assert Decimal(record["paidAmount"]) == 0
        assert record["isPaid"] is False
        # Jan 31 + one month clamps to the end of February
        assert record["dueDate"] == "2024-02-29"
        assert record["month"] == "February"
        assert record["year"] == "2024"

    plot_after = client.get(f"/api/plots/{plot['id']}").json()
    for record in carried:
        assert record["id"] in plot_after["paymentSchedules"]
    assert settled["id"] in plot_after["paymentSchedules"]


def test_transfer_leaves_originals_untouched(client, plot, make_payment, monkeypatch):
    _freeze_today(monkeypatch, date(2024, 5, 10))
    original = make_payment(due_date="2024-04-01", expected="300", paidAmount="100")

    client.post(f"/api/payments/transfer/{plot['id']}")

    stored = client.get(f"/api/payments/{original['id']}").json()
    assert stored["isPaid"] is False
    assert Decimal(stored["paidAmount"]) == Decimal("100")
    assert stored["dueDate"] == "2024-04-01"
    assert stored["carriedOver"] is False
    assert len(client.get(f"/api/payments/plot/{plot['id']}").json()) == 2


def test_transfer_targets_month_after_today(client, plot, make_payment):
    make_payment(due_date="2020-01-01")

    carried = client.post(f"/api/payments/transfer/{plot['id']}").json()

    today = dates.today()
    expected_month = 1 if today.month == 12 else today.month + 1
    expected_year = today.year + 1 if today.month == 12 else today.year
    due = date.fromisoformat(carried[0]["dueDate"])
    assert (due.year, due.month) == (expected_year, expected_month)
    assert carried[0]["month"] == dates.MONTH_NAMES[expected_month - 1]


def test_transfer_without_unpaid_payments_fails(client, plot, make_payment):
    make_payment(due_date="2024-01-01", paidAmount="1000", isPaid=True)

    response = client.post(f"/api/payments/transfer/{plot['id']}")

    assert response.status_code == 400
    assert response.json()["detail"] == {
        "message": "No unpaid payments to transfer",
        "code": "invalid_state",
    }
    assert len(client.get(f"/api/payments/plot/{plot['id']}").json()) == 1


def test_transfer_for_plot_without_payments_fails(client, plot):
    response = client.post(f"/api/payments/transfer/{plot['id']}")
    assert response.status_code == 400


def test_transfer_for_missing_plot_is_not_found(client):
    response = client.post("/api/payments/transfer/4242")

    assert response.status_code == 404
    assert response.json()["detail"]["message"] == "Plot not found"


def test_transfer_twice_does_not_duplicate(client, plot, make_payment, monkeypatch):
    _freeze_today(monkeypatch, date(2024, 3, 20))
    make_payment(due_date="2024-03-01")
    make_payment(due_date="2024-02-01")

    first = client.post(f"/api/payments/transfer/{plot['id']}")
    second = client.post(f"/api/payments/transfer/{plot['id']}")

    assert first.status_code == 200
    assert len(first.json()) == 2
    assert second.status_code == 400
    assert len(client.get(f"/api/payments/plot/{plot['id']}").json()) == 4


def test_unpaid_carry_over_rolls_again_next_month(client, plot, make_payment, monkeypatch):
    _freeze_today(monkeypatch, date(2024, 3, 20))
    make_payment(due_date="2024-03-01")
    april_copy = client.post(f"/api/payments/transfer/{plot['id']}").json()[0]
    assert april_copy["month"] == "April"

    _freeze_today(monkeypatch, date(2024, 4, 25))
    may_copies = client.post(f"/api/payments/transfer/{plot['id']}").json()

    assert [c["carriedFromId"] for c in may_copies] == [april_copy["id"]]
    assert may_copies[0]["month"] == "May"


def test_payment_due_in_a_later_month_is_carried(client, plot, make_payment, monkeypatch):
    _freeze_today(monkeypatch, date(2024, 3, 20))
    future = make_payment(due_date="2024-06-10", expected="350")

    response = client.post(f"/api/payments/transfer/{plot['id']}")

    assert response.status_code == 200
    carried = response.json()
    assert [c["carriedFromId"] for c in carried] == [future["id"]]
    assert carried[0]["dueDate"] == "2024-04-20"
    assert Decimal(carried[0]["expectedAmount"]) == Decimal("350")


def test_transfer_mixing_overdue_current_and_future_payments(client, plot, make_payment, monkeypatch):
    _freeze_today(monkeypatch, date(2024, 3, 20))
    overdue = make_payment(due_date="2024-01-15")
    current = make_payment(due_date="2024-03-05", paidAmount="200")
    future = make_payment(due_date="2024-05-01")
    make_payment(due_date="2024-02-01", paidAmount="1000", isPaid=True)

    first = client.post(f"/api/payments/transfer/{plot['id']}")

    assert first.status_code == 200
    carried = first.json()
    assert len(carried) == 3
    assert [c["carriedFromId"] for c in carried] == [overdue["id"], current["id"], future["id"]]
    assert {c["month"] for c in carried} == {"April"}

    second = client.post(f"/api/payments/transfer/{plot['id']}")

    assert second.status_code == 400
    assert len(client.get(f"/api/payments/plot/{plot['id']}").json()) == 7

    # A later run in the same month still finds nothing to carry
    _freeze_today(monkeypatch, date(2024, 3, 28))
    assert client.post(f"/api/payments/transfer/{plot['id']}").status_code == 400
