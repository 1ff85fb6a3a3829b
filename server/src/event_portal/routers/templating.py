"""Shared Jinja2 environment for server-rendered pages"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi.templating import Jinja2Templates

from event_portal.models.event import as_utc

# Get template directory relative to this file
template_dir = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=str(template_dir))


def format_event_date(value: Optional[datetime]) -> str:
    value = as_utc(value)
    return value.strftime("%B %d, %Y") if value else "Date TBA"


def format_event_time(value: Optional[datetime]) -> str:
    value = as_utc(value)
    return value.strftime("%I:%M %p") if value else ""


def format_datetime_local(value: Optional[datetime]) -> str:
    """Value for an <input type="datetime-local">, in UTC"""
    value = as_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M") if value else ""


templates.env.filters["event_date"] = format_event_date
templates.env.filters["event_time"] = format_event_time
templates.env.filters["datetime_local"] = format_datetime_local
