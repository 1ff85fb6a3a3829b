"""SQLModel Event model"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

from event_portal.models.form_field import FormFieldDefinition, parse_form_fields


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; everything is stored as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Event(SQLModel, table=True):
    """Event with its administrator-defined registration form"""

    __tablename__ = "events"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str
    description: Optional[str] = Field(default="")
    event_date: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True), index=True)
    )
    registration_start: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True))
    )
    registration_end: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True))
    )
    is_active: bool = Field(default=True)
    registration_open: bool = Field(default=True)
    banner_url: Optional[str] = Field(default="")
    form_fields: List[dict] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True)),
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True)),
    )

    def get_form_fields(self) -> List[FormFieldDefinition]:
        """Ordered field definitions of the registration form"""
        return parse_form_fields(self.form_fields)

    def registration_available(self) -> bool:
        """Open and active. The registration window is shown to visitors, not enforced."""
        return self.registration_open and self.is_active

    def to_payload(self) -> dict:
        """JSON-safe representation used by the API and templates"""
        payload = self.model_dump(mode="json")
        for key in ("event_date", "registration_start", "registration_end"):
            value = as_utc(getattr(self, key))
            payload[key] = value.isoformat() if value else None
        payload["form_fields"] = [
            field.model_dump(mode="json") for field in self.get_form_fields()
        ]
        return payload
