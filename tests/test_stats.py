"""
Tests for the stats overview.
"""


def seed(client, headers):
    salon_client = client.post(
        "/api/clients",
        headers=headers,
        json={"name": "Olena", "sur_name": "Koval", "phone_num": "+380501112233"},
    ).json()
    procedure = client.post(
        "/api/procedures",
        headers=headers,
        json={"name": "Manicure", "price": 400, "time_to_complete": 60},
    ).json()
    base = {"client_id": salon_client["id"], "procedure_id": procedure["id"], "time": "2026-11-02T10:00:00"}
    appointments = [
        {"price": 400, "status": "completed", "final_price": 500},
        {"price": 300, "status": "completed"},
        {"price": 400, "status": "pending"},
        {"price": 400, "status": "cancelled"},
    ]
    for appointment in appointments:
        client.post("/api/appointments", headers=headers, json={**base, **appointment})


def test_empty_overview(client, auth_headers):
    data = client.get("/api/stats", headers=auth_headers).json()
    assert data["total_clients"] == 0
    assert data["appointments"]["total"] == 0
    assert data["revenue"] == {"total": 0.0, "average": 0.0}


def test_overview(client, auth_headers):
    seed(client, auth_headers)
    data = client.get("/api/stats", headers=auth_headers).json()

    assert data["total_clients"] == 1
    assert data["total_procedures"] == 1
    assert data["appointments"] == {
        "total": 4, "pending": 1, "confirmed": 0, "completed": 2, "cancelled": 1,
    }
    # Final price where recorded, booked price otherwise
    assert data["revenue"] == {"total": 800.0, "average": 400.0}


def test_overview_recomputed_after_write(client, auth_headers):
    first = client.get("/api/stats", headers=auth_headers)
    client.post(
        "/api/clients",
        headers=auth_headers,
        json={"name": "Iryna", "sur_name": "Shevchenko", "phone_num": "+380671234567"},
    )
    second = client.get("/api/stats", headers=auth_headers)
    assert second.headers["X-Cache"] == "MISS"
    assert second.json()["total_clients"] == first.json()["total_clients"] + 1
