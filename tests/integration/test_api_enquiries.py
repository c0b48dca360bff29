"""Tests for the enquiries endpoints."""

from tests.fixtures.records import SAMPLE_ENQUIRY


def create_enquiry(client, headers, **overrides):
    resp = client.post("/api/enquiries", json={**SAMPLE_ENQUIRY, **overrides}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestCreateEnquiry:

    def test_defaults_applied(self, client, auth_headers):
        data = create_enquiry(client, auth_headers)
        assert data["status"] == "open"
        assert data["priority"] == "medium"
        assert data["phone"] is None
        assert data["company"] is None

    def test_explicit_priority_and_status(self, client, auth_headers):
        data = create_enquiry(client, auth_headers, priority="urgent", status="in_progress")
        assert data["priority"] == "urgent"
        assert data["status"] == "in_progress"

    def test_missing_subject(self, client, auth_headers):
        payload = {k: v for k, v in SAMPLE_ENQUIRY.items() if k != "subject"}
        resp = client.post("/api/enquiries", json=payload, headers=auth_headers)
        assert resp.status_code == 400
        body = resp.json()
        assert body["detail"] == "Invalid enquiry data"
        assert [e["loc"][-1] for e in body["errors"]] == ["subject"]

    def test_bad_priority(self, client, auth_headers):
        resp = client.post("/api/enquiries", json={**SAMPLE_ENQUIRY, "priority": "asap"}, headers=auth_headers)
        assert resp.status_code == 400


class TestListEnquiries:

    def test_filters(self, client, auth_headers):
        create_enquiry(client, auth_headers, priority="high")
        create_enquiry(client, auth_headers, priority="low", status="closed")
        create_enquiry(client, auth_headers, priority="high", status="closed")

        by_status = client.get("/api/enquiries", params={"status": "closed"}, headers=auth_headers).json()
        assert [e["id"] for e in by_status] == [3, 2]

        both = client.get(
            "/api/enquiries", params={"status": "closed", "priority": "high"}, headers=auth_headers,
        ).json()
        assert [e["id"] for e in both] == [3]

    def test_unfiltered(self, client, auth_headers):
        create_enquiry(client, auth_headers)
        create_enquiry(client, auth_headers)
        assert len(client.get("/api/enquiries", headers=auth_headers).json()) == 2


class TestUpdateAndDeleteEnquiry:

    def test_status_change(self, client, auth_headers):
        created = create_enquiry(client, auth_headers)
        resp = client.put(f"/api/enquiries/{created['id']}", json={"status": "closed"}, headers=auth_headers)
        assert resp.status_code == 200
        updated = resp.json()
        assert updated["status"] == "closed"
        assert updated["priority"] == created["priority"]
        assert updated["message"] == created["message"]

    def test_get(self, client, auth_headers):
        created = create_enquiry(client, auth_headers)
        assert client.get(f"/api/enquiries/{created['id']}", headers=auth_headers).json() == created

    def test_missing(self, client, auth_headers):
        assert client.get("/api/enquiries/8", headers=auth_headers).status_code == 404
        assert client.put("/api/enquiries/8", json={"status": "closed"}, headers=auth_headers).status_code == 404
        assert client.delete("/api/enquiries/8", headers=auth_headers).status_code == 404

    def test_delete(self, client, auth_headers):
        created = create_enquiry(client, auth_headers)
        assert client.delete(f"/api/enquiries/{created['id']}", headers=auth_headers).status_code == 204
        assert client.get(f"/api/enquiries/{created['id']}", headers=auth_headers).status_code == 404
