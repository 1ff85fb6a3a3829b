"""Tests for event service functionality"""

import uuid
from datetime import datetime, timedelta, timezone

from event_portal.models.event import Event


class TestEventService:
    """Test event creation, listing, and updates"""

    def test_create_event_starts_with_empty_form(self, event_service):
        result = event_service.create_event(
            {
                "title": "Hackathon",
                "description": "48 hours of building",
                "form_fields": [{"label": "Ignored"}],
            }
        )

        assert result["success"]
        event = result["event"]
        assert event.id is not None
        assert event.form_fields == []
        assert event.is_active is True
        assert event.registration_open is True

    def test_get_missing_event(self, event_service):
        assert event_service.get_event(uuid.uuid4()) is None

    def test_list_events_active_only(self, make_event, event_service):
        make_event("Visible")
        make_event("Hidden", is_active=False)

        titles = [event.title for event in event_service.list_events(active_only=True)]
        all_titles = [event.title for event in event_service.list_events()]

        assert titles == ["Visible"]
        assert sorted(all_titles) == ["Hidden", "Visible"]

    def test_update_event_replaces_form_fields(self, make_event, event_service):
        event = make_event("Hackathon")

        result = event_service.update_event(
            event.id,
            {
                "title": "Hackathon 2024",
                "form_fields": [
                    {"label": "T-Shirt Size", "type": "select", "options": ["S", "M"]},
                    {"id": "veg", "label": "Vegetarian", "type": "checkbox"},
                ],
            },
        )

        assert result["success"]
        fields = result["event"].get_form_fields()
        assert result["event"].title == "Hackathon 2024"
        assert [field.label for field in fields] == ["T-Shirt Size", "Vegetarian"]
        assert fields[0].id
        assert fields[1].id == "veg"

    def test_field_ids_survive_label_edits(self, make_event, event_service):
        event = make_event(form_fields=[{"id": "f1", "label": "T-Shirt Size"}])

        result = event_service.update_event(
            event.id, {"form_fields": [{"id": "f1", "label": "Shirt Size"}]}
        )

        assert result["event"].get_form_fields()[0].id == "f1"

    def test_update_event_details_keeps_form(self, make_event, event_service):
        event = make_event(form_fields=[{"id": "f1", "label": "Name"}])

        result = event_service.update_event_details(
            event.id, {"title": "Renamed", "form_fields": []}
        )

        assert result["success"]
        assert result["event"].title == "Renamed"
        assert [field.id for field in result["event"].get_form_fields()] == ["f1"]

    def test_update_missing_event(self, event_service):
        result = event_service.update_event(uuid.uuid4(), {"title": "Nope"})

        assert result == {"success": False, "error": "Event not found"}


class TestRegistrationAvailability:
    NOW = datetime.now(timezone.utc)

    def test_open_and_active(self):
        assert Event(title="Open").registration_available()

    def test_closed_or_inactive(self):
        assert not Event(title="Closed", registration_open=False).registration_available()
        assert not Event(title="Inactive", is_active=False).registration_available()

    def test_window_does_not_close_registration(self):
        ended = Event(title="Ended", registration_end=self.NOW - timedelta(days=1))
        upcoming = Event(title="Upcoming", registration_start=self.NOW + timedelta(days=1))

        assert ended.registration_available()
        assert upcoming.registration_available()

    def test_past_end_date_still_accepts_registrations(
        self, make_event, participant_service
    ):
        event = make_event(registration_end=self.NOW - timedelta(days=1))

        participant = participant_service.register(event.id, "auth0|late", {})

        assert participant.event_id == event.id
