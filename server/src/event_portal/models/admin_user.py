"""SQLModel AdminUser model"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field, SQLModel

from event_portal.models.field_type import AdminRole


class AdminUser(SQLModel, table=True):
    """Role assignment granting a user access to the admin console"""

    __tablename__ = "admin_users"

    user_id: str = Field(primary_key=True)  # Auth0 subject
    role: AdminRole = Field(
        default=AdminRole.ADMIN,
        sa_column=Column(
            SAEnum(
                AdminRole,
                name="admin_role",
                native_enum=True,
                values_callable=lambda enum: [e.value for e in enum],
            ),
            nullable=False,
        ),
    )
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True)),
    )
