"""Lookup of admin role assignments"""

import logging
from typing import Optional

from sqlmodel import Session

from event_portal.models.admin_user import AdminUser

logger = logging.getLogger(__name__)


class AdminUserService:
    """Read-only access to the admin_users table"""

    def __init__(self, db_session: Session):
        self.db = db_session

    def get_role(self, user_id: str) -> Optional[str]:
        """
        Return the role string assigned to a user, or None when the user has none.

        Database errors propagate; callers decide how to fail.
        """
        assignment = self.db.get(AdminUser, user_id)
        if assignment is None:
            return None
        return assignment.role.value if hasattr(assignment.role, "value") else assignment.role
