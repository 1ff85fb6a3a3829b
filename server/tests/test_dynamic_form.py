"""Tests for rendering and collecting registration forms"""

import pytest

from event_portal.exceptions import FormValidationError
from event_portal.models.form_field import FormFieldDefinition
from event_portal.services.dynamic_form import collect_responses, render_fields

FIELDS = [
    FormFieldDefinition(id="name", label="Full Name", required=True),
    FormFieldDefinition(id="size", label="T-Shirt Size", type="select", options=["S", "M", "L"]),
    FormFieldDefinition(id="veg", label="Vegetarian", type="checkbox"),
    FormFieldDefinition(id="age", label="Age", type="number"),
    FormFieldDefinition(id="mail", label="Contact Email", type="email"),
    FormFieldDefinition(id="bio", label="About You", type="textarea"),
]


class TestRenderFields:
    def test_inputs_are_named_by_field_id(self):
        rendered = render_fields(FIELDS)

        assert [field["name"] for field in rendered] == [
            "name",
            "size",
            "veg",
            "age",
            "mail",
            "bio",
        ]
        assert rendered[0]["required"] is True
        assert rendered[1]["widget"] == "select"
        assert rendered[1]["options"] == ["S", "M", "L"]
        assert rendered[2]["input_type"] == "checkbox"
        assert rendered[4]["input_type"] == "email"
        assert rendered[5]["widget"] == "textarea"


class TestCollectResponses:
    def test_responses_are_keyed_by_field_id(self):
        responses = collect_responses(
            FIELDS,
            {"name": "  Ada Lovelace ", "size": "M", "veg": "true", "age": "36"},
        )

        assert responses == {"name": "Ada Lovelace", "size": "M", "veg": True, "age": "36"}

    def test_unchecked_checkbox_is_false(self):
        responses = collect_responses(FIELDS, {"name": "Ada"})

        assert responses["veg"] is False
        assert "size" not in responses

    def test_required_field_missing(self):
        with pytest.raises(FormValidationError, match="Full Name is required"):
            collect_responses(FIELDS, {"name": "   "})

    def test_required_checkbox_must_be_checked(self):
        fields = [FormFieldDefinition(id="terms", label="Accept Terms", type="checkbox", required=True)]

        with pytest.raises(FormValidationError, match="Accept Terms is required"):
            collect_responses(fields, {})
        assert collect_responses(fields, {"terms": "on"}) == {"terms": True}

    def test_invalid_number(self):
        with pytest.raises(FormValidationError, match="Age must be a valid number"):
            collect_responses(FIELDS, {"name": "Ada", "age": "thirty"})

    def test_invalid_select_option(self):
        with pytest.raises(FormValidationError, match="Invalid option for T-Shirt Size"):
            collect_responses(FIELDS, {"name": "Ada", "size": "XXL"})

    def test_invalid_email(self):
        with pytest.raises(FormValidationError) as exc_info:
            collect_responses(FIELDS, {"name": "Ada", "mail": "not-an-email"})
        assert exc_info.value.field_label == "Contact Email"

    def test_text_length_limit(self):
        with pytest.raises(FormValidationError, match="fewer than 250 characters"):
            collect_responses(FIELDS, {"name": "x" * 250})

    def test_long_textarea_is_allowed(self):
        responses = collect_responses(FIELDS, {"name": "Ada", "bio": "y" * 500})

        assert len(responses["bio"]) == 500
