"""Pydantic models and constants for lead records."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from src.notion.enums import PropertyType
from src.notion.models import PropertyKey


class TrackingColumn(StrEnum):
    """Counters that can be incremented by tracking events."""

    PAGE_VIEW = "page_view"
    LINK1 = "link1"
    LINK2 = "link2"
    LINK3 = "link3"


# Counter property written for each tracking column
TRACKING_PROPERTIES: dict[str, PropertyKey] = {
    column.value: PropertyKey(column.value, PropertyType.NUMBER.value) for column in TrackingColumn
}


class Lead(BaseModel):
    """A lead record from Notion with its properties flattened to plain values."""

    page_id: str = Field(..., min_length=1, description="Notion page ID")
    fields: dict[str, Any] = Field(default_factory=dict, description="Property values by name")


class LeadFieldResult(BaseModel):
    """A single lead property rendered as text."""

    value: str = Field(..., description="Rendered property value or the default")
    page_id: str | None = Field(None, description="Notion page ID of the lead, if found")
    found: bool = Field(default=False, description="Whether the property value was found")
