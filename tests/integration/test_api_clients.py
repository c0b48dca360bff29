"""Tests for the clients endpoints."""

from tests.fixtures.records import SAMPLE_CLIENT


class TestCreateClient:

    def test_create(self, client, auth_headers):
        resp = client.post("/api/clients", json=SAMPLE_CLIENT, headers=auth_headers)
        assert resp.status_code == 201
        data = resp.json()
        assert data["id"] == 1
        assert data["name"] == SAMPLE_CLIENT["name"]
        assert data["company"] == SAMPLE_CLIENT["company"]
        assert "createdAt" in data

    def test_optional_fields_null(self, client, auth_headers):
        resp = client.post(
            "/api/clients",
            json={"name": "Solo", "email": "solo@trader.com"},
            headers=auth_headers,
        )
        data = resp.json()
        assert data["phone"] is None
        assert data["address"] is None
        assert data["company"] is None

    def test_invalid_payload(self, client, auth_headers):
        resp = client.post("/api/clients", json={"name": "", "email": "nope"}, headers=auth_headers)
        assert resp.status_code == 400
        body = resp.json()
        assert body["detail"] == "Invalid client data"
        assert {e["loc"][-1] for e in body["errors"]} == {"name", "email"}

    def test_client_supplied_id_ignored(self, client, auth_headers):
        resp = client.post("/api/clients", json={**SAMPLE_CLIENT, "id": 77}, headers=auth_headers)
        assert resp.json()["id"] == 1


class TestReadClients:

    def test_list_newest_first(self, client, auth_headers):
        for name in ("First", "Second", "Third"):
            client.post("/api/clients", json={**SAMPLE_CLIENT, "name": name}, headers=auth_headers)
        resp = client.get("/api/clients", headers=auth_headers)
        assert resp.status_code == 200
        assert [c["name"] for c in resp.json()] == ["Third", "Second", "First"]

    def test_get_by_id(self, client, auth_headers):
        created = client.post("/api/clients", json=SAMPLE_CLIENT, headers=auth_headers).json()
        resp = client.get(f"/api/clients/{created['id']}", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() == created

    def test_get_missing(self, client, auth_headers):
        resp = client.get("/api/clients/42", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Client not found"

    def test_non_numeric_id(self, client, auth_headers):
        resp = client.get("/api/clients/abc", headers=auth_headers)
        assert resp.status_code == 400


class TestUpdateClient:

    def test_partial_update(self, client, auth_headers):
        created = client.post("/api/clients", json=SAMPLE_CLIENT, headers=auth_headers).json()
        resp = client.put(f"/api/clients/{created['id']}", json={"phone": "555"}, headers=auth_headers)
        assert resp.status_code == 200
        updated = resp.json()
        assert updated["phone"] == "555"
        for field in ("id", "name", "email", "address", "company", "createdAt"):
            assert updated[field] == created[field]

    def test_update_missing(self, client, auth_headers):
        resp = client.put("/api/clients/9", json={"name": "x"}, headers=auth_headers)
        assert resp.status_code == 404

    def test_update_invalid(self, client, auth_headers):
        created = client.post("/api/clients", json=SAMPLE_CLIENT, headers=auth_headers).json()
        resp = client.put(f"/api/clients/{created['id']}", json={"email": "bad"}, headers=auth_headers)
        assert resp.status_code == 400

    def test_null_name_rejected(self, client, auth_headers):
        created = client.post("/api/clients", json=SAMPLE_CLIENT, headers=auth_headers).json()
        resp = client.put(f"/api/clients/{created['id']}", json={"name": None}, headers=auth_headers)
        assert resp.status_code == 400
        assert client.get(f"/api/clients/{created['id']}", headers=auth_headers).json()["name"] == SAMPLE_CLIENT["name"]

    def test_null_error_names_the_field(self, client, auth_headers):
        created = client.post("/api/clients", json=SAMPLE_CLIENT, headers=auth_headers).json()
        resp = client.put(f"/api/clients/{created['id']}", json={"name": None}, headers=auth_headers)
        body = resp.json()
        assert body["detail"] == "Invalid client data"
        assert [e["loc"] for e in body["errors"]] == [["body", "name"]]
        assert body["errors"][0]["ctx"] == {"field": "name"}


class TestDeleteClient:

    def test_delete(self, client, auth_headers):
        created = client.post("/api/clients", json=SAMPLE_CLIENT, headers=auth_headers).json()
        resp = client.delete(f"/api/clients/{created['id']}", headers=auth_headers)
        assert resp.status_code == 204
        assert resp.content == b""
        assert client.get(f"/api/clients/{created['id']}", headers=auth_headers).status_code == 404

    def test_delete_missing(self, client, auth_headers):
        assert client.delete("/api/clients/3", headers=auth_headers).status_code == 404

    def test_id_not_reused(self, client, auth_headers):
        first = client.post("/api/clients", json=SAMPLE_CLIENT, headers=auth_headers).json()
        client.delete(f"/api/clients/{first['id']}", headers=auth_headers)
        second = client.post("/api/clients", json=SAMPLE_CLIENT, headers=auth_headers).json()
        assert second["id"] == first["id"] + 1
