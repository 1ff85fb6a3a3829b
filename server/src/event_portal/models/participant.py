"""SQLModel Participant model"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, Column, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


class Participant(SQLModel, table=True):
    """A user's registration for an event.

    At most one row per (event_id, user_id); the database constraint is
    what turns a second submission into a conflict.
    """

    __tablename__ = "participants"
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_participants_event_user"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    event_id: uuid.UUID = Field(
        foreign_key="events.id", ondelete="CASCADE", index=True
    )
    user_id: str = Field(index=True)  # Auth0 subject
    # Keyed by field id, or by field label in records written before ids were used
    responses: dict = Field(default_factory=dict, sa_column=Column(JSON))
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True)),
    )

    def created_at_utc(self) -> Optional[datetime]:
        if self.created_at is not None and self.created_at.tzinfo is None:
            return self.created_at.replace(tzinfo=timezone.utc)
        return self.created_at

    def to_payload(self) -> dict:
        payload = self.model_dump(mode="json")
        created_at = self.created_at_utc()
        payload["created_at"] = created_at.isoformat() if created_at else None
        return payload
