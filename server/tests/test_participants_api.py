"""Tests for the participants JSON API"""

import uuid


class TestCreateParticipant:
    def test_requires_sign_in(self, client, make_event):
        event = make_event()

        response = client.post(
            "/api/participants", json={"event_id": str(event.id), "user_id": "auth0|x"}
        )

        assert response.status_code == 401

    def test_register_self(self, user_client, make_event):
        client, user_id = user_client
        event = make_event(form_fields=[{"id": "f1", "label": "Name"}])

        response = client.post(
            "/api/participants",
            json={"event_id": str(event.id), "user_id": user_id, "responses": {"f1": "Ada"}},
        )

        assert response.status_code == 201
        participant = response.json()["participant"]
        assert participant["user_id"] == user_id
        assert participant["responses"] == {"f1": "Ada"}

    def test_cannot_register_someone_else(self, user_client, make_event):
        client, _ = user_client
        event = make_event()

        response = client.post(
            "/api/participants",
            json={"event_id": str(event.id), "user_id": "auth0|someone-else"},
        )

        assert response.status_code == 403

    def test_duplicate_registration_conflicts(self, user_client, make_event):
        client, user_id = user_client
        event = make_event(form_fields=[{"id": "f1", "label": "Name"}])
        payload = {"event_id": str(event.id), "user_id": user_id, "responses": {"f1": "Ada"}}

        first = client.post("/api/participants", json=payload)
        second = client.post(
            "/api/participants", json={**payload, "responses": {"f1": "Changed"}}
        )

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json() == {
            "success": False,
            "error": "You are already registered for this event.",
        }

        lookup = client.get(f"/api/participants/{event.id}", params={"userId": user_id})
        assert lookup.json()["participant"]["responses"] == {"f1": "Ada"}

    def test_closed_event(self, user_client, make_event):
        client, user_id = user_client
        event = make_event(registration_open=False)

        response = client.post(
            "/api/participants", json={"event_id": str(event.id), "user_id": user_id}
        )

        assert response.status_code == 403
        assert response.json()["success"] is False

    def test_missing_event(self, user_client):
        client, user_id = user_client

        response = client.post(
            "/api/participants", json={"event_id": str(uuid.uuid4()), "user_id": user_id}
        )

        assert response.status_code == 404


class TestReadParticipants:
    def test_own_registration_lookup(self, user_client, make_event, participant_service):
        client, user_id = user_client
        event = make_event()

        before = client.get(f"/api/participants/{event.id}", params={"userId": user_id})
        participant_service.register(event.id, user_id, {})
        after = client.get(f"/api/participants/{event.id}", params={"userId": user_id})

        assert before.json() == {"success": True, "participant": None}
        assert after.json()["participant"]["user_id"] == user_id

    def test_cannot_read_other_users(self, user_client, make_event):
        client, _ = user_client
        event = make_event()

        response = client.get(
            f"/api/participants/{event.id}", params={"userId": "auth0|someone-else"}
        )

        assert response.status_code == 403

    def test_list_requires_admin(self, user_client, make_event):
        client, _ = user_client

        response = client.get(f"/api/participants/{make_event().id}")

        assert response.status_code == 403

    def test_signed_out_is_unauthorized(self, client, make_event):
        response = client.get(f"/api/participants/{make_event().id}")

        assert response.status_code == 401

    def test_admin_lists_participants(self, admin_client, make_event, participant_service):
        client, _ = admin_client
        event = make_event()
        participant_service.register(event.id, "auth0|a", {"f1": "x"})
        participant_service.register(event.id, "auth0|b", {"f1": "y"})

        response = client.get(f"/api/participants/{event.id}")

        assert response.status_code == 200
        assert [p["user_id"] for p in response.json()["participants"]] == ["auth0|a", "auth0|b"]
