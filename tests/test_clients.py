"""
Tests for the client endpoints.
"""

CLIENT = {
    "name": "Olena",
    "sur_name": "Koval",
    "phone_num": "+380501112233",
    "instagram": "@olena",
}


def create_client(client, headers, **overrides):
    response = client.post("/api/clients", headers=headers, json={**CLIENT, **overrides})
    assert response.status_code == 201
    return response.json()


def test_create_client_defaults_trust_rating(client, auth_headers):
    data = create_client(client, auth_headers)
    assert data["id"]
    assert data["trust_rating"] == 5
    assert data["instagram"] == "@olena"


def test_list_and_get(client, auth_headers):
    created = create_client(client, auth_headers)
    create_client(client, auth_headers, name="Iryna")

    listing = client.get("/api/clients", headers=auth_headers).json()
    assert [c["name"] for c in listing] == ["Olena", "Iryna"]

    one = client.get(f"/api/clients/{created['id']}", headers=auth_headers)
    assert one.json()["sur_name"] == "Koval"


def test_get_missing_client(client, auth_headers):
    response = client.get("/api/clients/404", headers=auth_headers)
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "not found", "message": "Client not found"}


def test_update_only_sent_fields(client, auth_headers):
    created = create_client(client, auth_headers)
    response = client.put(
        f"/api/clients/{created['id']}", headers=auth_headers, json={"trust_rating": 2, "name": None}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["trust_rating"] == 2
    assert data["name"] == "Olena"


def test_clear_instagram(client, auth_headers):
    created = create_client(client, auth_headers)
    response = client.put(f"/api/clients/{created['id']}", headers=auth_headers, json={"instagram": None})
    assert response.json()["instagram"] is None


def test_invalid_trust_rating(client, auth_headers):
    response = client.post("/api/clients", headers=auth_headers, json={**CLIENT, "trust_rating": 9})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation error"
    assert body["errors"][0]["field"] == "trust_rating"


def test_delete_client(client, auth_headers):
    created = create_client(client, auth_headers)
    response = client.delete(f"/api/clients/{created['id']}", headers=auth_headers)
    assert response.json() == {"success": True, "message": "Client deleted"}
    assert client.get(f"/api/clients/{created['id']}", headers=auth_headers).status_code == 404
