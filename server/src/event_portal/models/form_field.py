"""Form field definitions embedded in an event's form_fields column"""

import uuid
from typing import List, Optional

from sqlmodel import Field, SQLModel

from event_portal.models.field_type import FieldType


def generate_field_id() -> str:
    return str(uuid.uuid4())


class FormFieldDefinition(SQLModel):
    """One administrator-defined input of an event registration form.

    Not a table: the ordered list of definitions lives as JSON on the
    owning event, so list order is the display order.
    """

    id: str = Field(default_factory=generate_field_id)  # Stable, generated once
    label: str  # Display text, editable by admins
    type: FieldType = Field(default=FieldType.TEXT)
    required: bool = Field(default=False)
    placeholder: Optional[str] = None
    options: Optional[List[str]] = None  # For select fields


def parse_form_fields(raw_fields: Optional[list]) -> List[FormFieldDefinition]:
    """Validate stored or submitted field dicts, assigning ids where missing"""
    return [
        field if isinstance(field, FormFieldDefinition)
        else FormFieldDefinition.model_validate(field)
        for field in raw_fields or []
    ]
