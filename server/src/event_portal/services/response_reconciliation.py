"""Column model and value lookup for participant responses.

Stored responses are keyed by field id, except for records written by the
older label-keyed form path. Everything that reads a response value (the
admin table and the CSV export) must go through resolve_value so both key
conventions keep working.
"""

import csv
import io
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Sequence, Set

logger = logging.getLogger(__name__)

FIXED_COLUMNS = ("S.No", "Registration Date")

DISPLAY_PLACEHOLDER = "-"
DISPLAY_DATE_FORMAT = "%b %d, %Y %H:%M"
# Locale's long date and time representation
EXPORT_DATE_FORMAT = "%c"


@dataclass(frozen=True)
class Column:
    """A dynamic column of the participant table, one per form field"""

    label: str
    id: Optional[str] = None


@dataclass(frozen=True)
class DisplayCell:
    text: str
    tone: Optional[str] = None  # "positive", "negative", "muted" or None


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str
    media_type: str = "text/csv"


def build_columns(fields: Iterable[Any]) -> List[Column]:
    """One column per form field, in field definition order"""
    return [Column(label=field.label, id=getattr(field, "id", None)) for field in fields]


def resolve_value(participant: Any, field: Any) -> Any:
    """
    Look up a participant's response for a field under either key convention.

    The label key is checked first and wins when both are present. Reading
    by label only exists for label-keyed records and is deprecated; new
    submissions are keyed by field id.

    Returns:
        The stored value, or None when neither key is present
    """
    responses = getattr(participant, "responses", None) or {}

    value = responses.get(field.label)
    if value is None and getattr(field, "id", None):
        value = responses.get(field.id)
    return value


def format_for_display(value: Any) -> DisplayCell:
    if isinstance(value, bool):
        return DisplayCell("Yes", "positive") if value else DisplayCell("No", "negative")
    if value is None or value == "":
        return DisplayCell(DISPLAY_PLACEHOLDER, "muted")
    return DisplayCell(str(value))


def format_for_export(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if value is None or value == "":
        return ""
    return str(value)


def _registered_at(participant: Any) -> Optional[datetime]:
    created_at = getattr(participant, "created_at", None)
    if isinstance(created_at, str):
        created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at


def format_registration_date(participant: Any, date_format: str = DISPLAY_DATE_FORMAT) -> str:
    created_at = _registered_at(participant)
    return created_at.strftime(date_format) if created_at else ""


def build_rows(participants: Sequence[Any], columns: Sequence[Column]) -> List[dict]:
    """Display rows for the admin participant table"""
    return [
        {
            "index": index,
            "participant_id": str(getattr(participant, "id", index)),
            "registered_at": format_registration_date(participant),
            "cells": [format_for_display(resolve_value(participant, column)) for column in columns],
        }
        for index, participant in enumerate(participants, start=1)
    ]


def export_filename(event: Any) -> str:
    title = getattr(event, "title", None) if event is not None else None
    return f"{title or 'event'}-participants.csv"


def export_csv(event: Any, participants: Sequence[Any], columns: Sequence[Column]) -> CsvExport:
    """
    Render participants as CSV: a header row, then one fully quoted row each.

    Output depends only on the inputs, so repeated exports are identical.
    """
    header = io.StringIO()
    csv.writer(header, lineterminator="\n").writerow(
        [*FIXED_COLUMNS, *(column.label for column in columns)]
    )

    body = io.StringIO()
    writer = csv.writer(body, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for index, participant in enumerate(participants, start=1):
        writer.writerow(
            [
                index,
                format_registration_date(participant, EXPORT_DATE_FORMAT),
                *(format_for_export(resolve_value(participant, column)) for column in columns),
            ]
        )

    content = header.getvalue() + body.getvalue()
    # Records are joined by newline with no trailing terminator
    return CsvExport(filename=export_filename(event), content=content.rstrip("\n"))


def find_unmatched_keys(fields: Iterable[Any], participants: Iterable[Any]) -> Set[str]:
    """
    Response keys that match neither a current field label nor a field id.

    These usually come from a label renamed after people registered under
    the label-keyed convention. They are reported, not migrated or dropped.
    """
    known: Set[str] = set()
    for field in fields:
        known.add(field.label)
        if getattr(field, "id", None):
            known.add(field.id)

    unmatched: Set[str] = set()
    for participant in participants:
        responses = getattr(participant, "responses", None) or {}
        unmatched.update(key for key in responses if key not in known)

    if unmatched:
        logger.warning(
            "Participant responses contain keys with no matching form field: %s",
            sorted(unmatched),
        )
    return unmatched
