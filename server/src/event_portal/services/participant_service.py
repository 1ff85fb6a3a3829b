"""Participant service for handling event registrations"""

import logging
import uuid
from typing import Dict, Iterable, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from event_portal.exceptions import (
    DuplicateRegistrationError,
    EventNotFoundError,
    RegistrationClosedError,
)
from event_portal.models.event import Event
from event_portal.models.participant import Participant

logger = logging.getLogger(__name__)


class ParticipantService:
    """Service for managing event registrations"""

    def __init__(self, db_session: Session):
        self.db = db_session

    def register(
        self, event_id: uuid.UUID, user_id: str, responses: Optional[dict] = None
    ) -> Participant:
        """
        Register a user for an event.

        Args:
            event_id: UUID of the event
            user_id: Auth0 subject of the registering user
            responses: Submitted form values keyed by field id

        Returns:
            Participant: The created registration

        Raises:
            EventNotFoundError: If the event doesn't exist
            RegistrationClosedError: If the event is not accepting registrations
            DuplicateRegistrationError: If the user is already registered
        """
        event = self.db.get(Event, event_id)
        if not event:
            raise EventNotFoundError(event_id)
        if not event.registration_available():
            raise RegistrationClosedError(
                f"Registration for {event.title} is currently closed"
            )

        participant = Participant(
            event_id=event_id, user_id=user_id, responses=responses or {}
        )
        self.db.add(participant)
        try:
            self.db.commit()
        except IntegrityError:
            # The unique (event_id, user_id) constraint decides concurrent duplicates
            self.db.rollback()
            logger.info(f"Duplicate registration for event {event_id} by {user_id}")
            raise DuplicateRegistrationError(event_id, user_id)
        self.db.refresh(participant)

        logger.info(f"Created participant {participant.id} for event {event_id}")
        return participant

    def get_participants_for_event(self, event_id: uuid.UUID) -> list[Participant]:
        """Get all registrations for an event in registration order"""
        stmt = (
            select(Participant)
            .where(Participant.event_id == event_id)
            .order_by(Participant.created_at, Participant.id)
        )
        return list(self.db.exec(stmt).all())

    def count_participants_by_event(
        self, event_ids: Iterable[uuid.UUID]
    ) -> Dict[uuid.UUID, int]:
        """Registration counts per event in one grouped query; events without any map to 0"""
        event_ids = list(event_ids)
        counts = {event_id: 0 for event_id in event_ids}
        if not event_ids:
            return counts

        stmt = (
            select(Participant.event_id, func.count(Participant.id))
            .where(Participant.event_id.in_(event_ids))
            .group_by(Participant.event_id)
        )
        for event_id, count in self.db.exec(stmt).all():
            counts[event_id] = count
        return counts

    def get_participant_for_user(
        self, event_id: uuid.UUID, user_id: str
    ) -> Optional[Participant]:
        """Get a user's registration for an event"""
        stmt = select(Participant).where(
            Participant.event_id == event_id, Participant.user_id == user_id
        )
        return self.db.exec(stmt).first()

    def is_registered(self, event_id: uuid.UUID, user_id: Optional[str]) -> bool:
        if not user_id:
            return False
        return self.get_participant_for_user(event_id, user_id) is not None
