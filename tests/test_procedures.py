"""
Tests for the procedure endpoints.
"""

MANICURE = {"name": "Manicure", "price": 450.0, "time_to_complete": 60}


def test_procedure_crud(client, auth_headers):
    created = client.post("/api/procedures", headers=auth_headers, json=MANICURE)
    assert created.status_code == 201
    procedure_id = created.json()["id"]
    assert created.json()["price"] == 450.0

    updated = client.put(f"/api/procedures/{procedure_id}", headers=auth_headers, json={"price": 500})
    assert updated.json()["price"] == 500.0
    assert updated.json()["time_to_complete"] == 60

    listing = client.get("/api/procedures", headers=auth_headers).json()
    assert [p["name"] for p in listing] == ["Manicure"]

    deleted = client.delete(f"/api/procedures/{procedure_id}", headers=auth_headers)
    assert deleted.json()["message"] == "Procedure deleted"
    assert client.get(f"/api/procedures/{procedure_id}", headers=auth_headers).status_code == 404


def test_negative_price_rejected(client, auth_headers):
    response = client.post("/api/procedures", headers=auth_headers, json={**MANICURE, "price": -1})
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "price"


def test_duration_must_be_positive(client, auth_headers):
    response = client.post("/api/procedures", headers=auth_headers, json={**MANICURE, "time_to_complete": 0})
    assert response.status_code == 400


def test_update_missing_procedure(client, auth_headers):
    response = client.put("/api/procedures/77", headers=auth_headers, json={"price": 1})
    assert response.status_code == 404
    assert response.json()["message"] == "Procedure not found"
