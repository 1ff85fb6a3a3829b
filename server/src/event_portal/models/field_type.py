"""Enums for the application"""

from enum import Enum


class FieldType(str, Enum):
    """Input types an administrator can pick for a registration form field"""

    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    NUMBER = "number"
    SELECT = "select"
    CHECKBOX = "checkbox"


class AdminRole(str, Enum):
    """Roles stored in the admin_users table"""

    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"
