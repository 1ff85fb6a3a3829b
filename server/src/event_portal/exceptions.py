"""Domain errors raised by Event Portal services"""


class EventPortalError(Exception):
    """Base class for errors routers translate into user-facing responses"""


class EventNotFoundError(EventPortalError):
    def __init__(self, event_id):
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id


class RegistrationClosedError(EventPortalError):
    """Registration is closed or the event is inactive"""


class DuplicateRegistrationError(EventPortalError):
    """The user already has a registration for this event"""

    def __init__(self, event_id, user_id):
        super().__init__(f"User {user_id} is already registered for event {event_id}")
        self.event_id = event_id
        self.user_id = user_id


class FormValidationError(EventPortalError):
    """A submitted value does not satisfy its field definition"""

    def __init__(self, field_label: str, message: str):
        super().__init__(message)
        self.field_label = field_label
        self.message = message


class BannerUploadError(EventPortalError):
    """The banner file was rejected or could not be stored"""
