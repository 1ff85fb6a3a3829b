"""Rendering and collection of event registration forms"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from event_portal.exceptions import FormValidationError
from event_portal.models.field_type import FieldType
from event_portal.models.form_field import FormFieldDefinition

logger = logging.getLogger(__name__)

ResponseValue = Union[str, bool, None]

MAX_TEXT_LENGTH = 250
CHECKED_VALUES = {"true", "on", "1", "yes"}

_INPUT_TYPES = {
    FieldType.TEXT: "text",
    FieldType.EMAIL: "email",
    FieldType.NUMBER: "number",
    FieldType.CHECKBOX: "checkbox",
}


def render_fields(fields: List[FormFieldDefinition]) -> List[Dict[str, Any]]:
    """
    Describe each field as a template-ready input.

    The input name is the field id, so submissions come back keyed by id.
    """
    rendered = []
    for field in fields:
        rendered.append(
            {
                "name": field.id,
                "label": field.label,
                "type": field.type.value,
                "widget": (
                    field.type.value
                    if field.type in (FieldType.SELECT, FieldType.TEXTAREA)
                    else "input"
                ),
                "input_type": _INPUT_TYPES.get(field.type, "text"),
                "required": field.required,
                "placeholder": field.placeholder or "",
                "options": field.options or [],
            }
        )
    return rendered


def _read_value(field: FormFieldDefinition, form_data: Mapping[str, Any]) -> ResponseValue:
    raw = form_data.get(field.id)

    if field.type == FieldType.CHECKBOX:
        if isinstance(raw, bool):
            return raw
        return raw is not None and str(raw).strip().lower() in CHECKED_VALUES

    if raw is None:
        return None
    return str(raw).strip()


def _validate(field: FormFieldDefinition, value: ResponseValue):
    # An unchecked checkbox is False, an empty input is "" or None
    if field.required and not value:
        raise FormValidationError(field.label, f"{field.label} is required")

    if value is None or value == "" or isinstance(value, bool):
        return

    if field.type == FieldType.NUMBER:
        try:
            float(value)
        except ValueError:
            raise FormValidationError(field.label, f"{field.label} must be a valid number")
    elif field.type == FieldType.SELECT and field.options:
        if value not in field.options:
            raise FormValidationError(field.label, f"Invalid option for {field.label}")
    elif field.type == FieldType.EMAIL:
        if "@" not in value:
            raise FormValidationError(
                field.label, f"{field.label} must be a valid email address"
            )
    elif field.type == FieldType.TEXT and len(value) >= MAX_TEXT_LENGTH:
        raise FormValidationError(
            field.label,
            f"{field.label} must be fewer than {MAX_TEXT_LENGTH} characters",
        )


def collect_responses(
    fields: List[FormFieldDefinition], form_data: Optional[Mapping[str, Any]]
) -> Dict[str, ResponseValue]:
    """
    Build the responses mapping for a submission, keyed by field id.

    Checkbox fields always get a boolean; empty text values are left out.

    Raises:
        FormValidationError: On the first field that fails validation
    """
    form_data = form_data or {}
    responses: Dict[str, ResponseValue] = {}

    for field in fields:
        value = _read_value(field, form_data)
        _validate(field, value)

        if isinstance(value, bool) or value:
            responses[field.id] = value

    logger.debug(f"Collected {len(responses)} responses from {len(fields)} fields")
    return responses
