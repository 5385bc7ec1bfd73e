from datetime import timedelta

from salon.shared.clock import local_now


def test_manual_entries_and_summary(client, headers):
    for payload in (
        {"type": "revenue", "category": "product_sale", "amount": 120.0, "description": "Shampoo"},
        {"type": "expense", "category": "rent", "amount": 70.5, "description": "June rent"},
    ):
        assert client.post("/api/transactions", json=payload, headers=headers).status_code == 201

    summary = client.get("/api/financial/summary", headers=headers).json()
    assert summary["totalRevenue"] == 120.0
    assert summary["totalExpenses"] == 70.5
    assert summary["netIncome"] == 49.5
    assert summary["transactionCount"] == 2


def test_transactions_filtered_by_date_range(client, headers):
    for day in ("2030-01-10T10:00:00", "2030-02-10T10:00:00"):
        client.post(
            "/api/transactions",
            json={
                "type": "expense",
                "category": "supplies",
                "amount": 10,
                "description": "Towels",
                "transactionDate": day,
            },
            headers=headers,
        )

    january = client.get(
        "/api/transactions", params={"startDate": "2030-01-01", "endDate": "2030-01-31"}, headers=headers
    ).json()
    assert [t["transactionDate"] for t in january] == ["2030-01-10T10:00:00"]

    summary = client.get(
        "/api/financial/summary", params={"startDate": "2030-02-01", "endDate": "2030-02-28"}, headers=headers
    ).json()
    assert summary["totalExpenses"] == 10.0


def test_rejects_non_positive_amount_and_unknown_type(client, headers):
    bad_amount = {"type": "expense", "category": "rent", "amount": 0, "description": "x"}
    bad_type = {"type": "refund", "category": "rent", "amount": 5, "description": "x"}
    assert client.post("/api/transactions", json=bad_amount, headers=headers).status_code == 422
    assert client.post("/api/transactions", json=bad_type, headers=headers).status_code == 422


def test_inverted_range_is_a_validation_error(client, headers):
    response = client.get(
        "/api/transactions", params={"startDate": "2030-02-01", "endDate": "2030-01-01"}, headers=headers
    )
    assert response.status_code == 400


def test_dashboard_stats(client, headers, book, make_service, make_client):
    service = make_service(price=40.0)
    customer = make_client(name="Joana")
    now = local_now().replace(second=0, microsecond=0)
    later_today = now + timedelta(minutes=30)

    empty = client.get("/api/dashboard/stats", headers=headers).json()
    assert empty == {"todayAppointments": 0, "activeClients": 1, "monthlyRevenue": 0.0, "nextAppointment": None}

    if later_today.date() == now.date():
        book(customer["id"], service["id"], later_today.isoformat())
        client.post(
            "/api/transactions",
            json={"type": "revenue", "category": "tip", "amount": 15, "description": "Tip"},
            headers=headers,
        )

        stats = client.get("/api/dashboard/stats", headers=headers).json()
        assert stats["todayAppointments"] == 1
        assert stats["monthlyRevenue"] == 15.0
        assert stats["nextAppointment"] == {"time": later_today.strftime("%H:%M"), "clientName": "Joana"}
