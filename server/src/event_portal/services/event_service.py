"""Event Service - Handles event database operations"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlmodel import Session, select

from event_portal.models.event import Event
from event_portal.models.form_field import parse_form_fields

logger = logging.getLogger(__name__)

# Attributes the edit flow may change; form_fields belongs to the form builder
METADATA_FIELDS = (
    "title",
    "description",
    "event_date",
    "registration_start",
    "registration_end",
    "is_active",
    "registration_open",
    "banner_url",
)


class EventService:
    """Service for handling event operations"""

    def __init__(self, db_session: Session):
        self.db = db_session

    def create_event(self, event_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new event. New events start with an empty registration form.

        Args:
            event_data: Event attributes (see METADATA_FIELDS)

        Returns:
            Dictionary containing creation result and the event
        """
        try:
            event = Event(
                **{key: event_data[key] for key in METADATA_FIELDS if key in event_data},
                form_fields=[],
            )
            self.db.add(event)
            self.db.commit()
            self.db.refresh(event)

            logger.info(f"Event created successfully: {event.id}")
            return {"success": True, "event": event}

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating event: {e}")
            return {"success": False, "error": f"Failed to create event: {str(e)}"}

    def get_event(self, event_id: uuid.UUID) -> Optional[Event]:
        """Get an event by ID, or None when it does not exist"""
        return self.db.get(Event, event_id)

    def list_events(self, active_only: bool = False) -> List[Event]:
        """List events, most recent event date first"""
        statement = select(Event)
        if active_only:
            statement = statement.where(Event.is_active == True)  # noqa: E712
        statement = statement.order_by(Event.event_date.desc(), Event.created_at.desc())
        return list(self.db.exec(statement).all())

    def update_event(
        self, event_id: uuid.UUID, updated_data: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Replace an event with a full payload, including its form fields.

        Args:
            event_id: UUID of the event to update
            updated_data: Full event payload

        Returns:
            Dictionary containing update result
        """
        try:
            event = self.db.get(Event, event_id)
            if not event:
                return {"success": False, "error": "Event not found"}

            for key in METADATA_FIELDS:
                if key in updated_data:
                    setattr(event, key, updated_data[key])
            if "form_fields" in updated_data:
                event.form_fields = [
                    field.model_dump(mode="json")
                    for field in parse_form_fields(updated_data["form_fields"])
                ]

            return self._save(event)

        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating event {event_id}: {e}")
            return {"success": False, "error": f"Failed to update event: {str(e)}"}

    def update_event_details(
        self, event_id: uuid.UUID, updated_data: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Edit flow: change metadata only, never the registration form"""
        details = {key: value for key, value in updated_data.items() if key != "form_fields"}
        return self.update_event(event_id, details)

    def _save(self, event: Event) -> Dict[str, Any]:
        event.updated_at = datetime.now(timezone.utc)
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)

        logger.info(f"Event updated successfully: {event.id}")
        return {"success": True, "event": event}
