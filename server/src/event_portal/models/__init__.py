"""Database models for Event Portal"""

from event_portal.models.admin_user import AdminUser
from event_portal.models.event import Event
from event_portal.models.form_field import FormFieldDefinition
from event_portal.models.participant import Participant

__all__ = [
    "AdminUser",
    "Event",
    "FormFieldDefinition",
    "Participant",
]
