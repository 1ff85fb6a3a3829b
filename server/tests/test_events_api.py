"""Tests for the events JSON API"""

import uuid

EVENT_PAYLOAD = {
    "title": "Hackathon",
    "description": "48 hours of building",
    "event_date": "2024-03-01T09:00:00Z",
    "form_fields": [
        {"id": "f1", "label": "T-Shirt Size", "type": "select", "options": ["S", "M", "L"]}
    ],
}


class TestEventsApi:
    def test_list_only_active_events(self, client, make_event):
        make_event("Visible")
        make_event("Hidden", is_active=False)

        response = client.get("/api/events")

        assert response.status_code == 200
        assert [event["title"] for event in response.json()["events"]] == ["Visible"]

    def test_get_event_with_form(self, client, make_event):
        event = make_event(form_fields=[{"id": "f1", "label": "Name", "required": True}])

        response = client.get(f"/api/events/{event.id}")

        assert response.status_code == 200
        data = response.json()["event"]
        assert data["id"] == str(event.id)
        assert data["form_fields"][0]["id"] == "f1"
        assert data["form_fields"][0]["required"] is True

    def test_get_missing_event(self, client):
        response = client.get(f"/api/events/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Event not found"}

    def test_create_requires_sign_in(self, client):
        response = client.post("/api/events", json=EVENT_PAYLOAD)

        assert response.status_code == 401

    def test_create_requires_admin_role(self, user_client):
        client, _ = user_client

        response = client.post("/api/events", json=EVENT_PAYLOAD)

        assert response.status_code == 403

    def test_create_ignores_form_fields(self, admin_client):
        client, _ = admin_client

        response = client.post("/api/events", json=EVENT_PAYLOAD)

        assert response.status_code == 201
        event = response.json()["event"]
        assert event["title"] == "Hackathon"
        assert event["form_fields"] == []
        assert event["event_date"].startswith("2024-03-01T09:00:00")

    def test_put_replaces_event_and_form(self, admin_client, make_event):
        client, _ = admin_client
        event = make_event("Old Title")

        response = client.put(f"/api/events/{event.id}", json=EVENT_PAYLOAD)

        assert response.status_code == 200
        data = response.json()["event"]
        assert data["title"] == "Hackathon"
        assert [field["label"] for field in data["form_fields"]] == ["T-Shirt Size"]

    def test_put_missing_event(self, admin_client):
        client, _ = admin_client

        response = client.put(f"/api/events/{uuid.uuid4()}", json=EVENT_PAYLOAD)

        assert response.status_code == 404
        assert response.json()["success"] is False
