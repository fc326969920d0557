"""Pydantic models for lead endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from src.leads.models import TrackingColumn


class TrackRequest(BaseModel):
    """Request model for a tracking event."""

    lead_id: str | None = Field(None, description="External lead ID")
    page_id: str | None = Field(None, description="Notion page ID of the lead")
    column: str | None = Field(
        None,
        description=f"Counter to increment ({', '.join(TrackingColumn)})",
    )


class TrackResponse(BaseModel):
    """Response model for a tracking event."""

    success: bool = Field(..., description="Whether the counter was incremented")
    message: str = Field(..., description="Outcome description")
    count: int | None = Field(None, description="New counter value")


class LeadResponse(BaseModel):
    """Response model for a lead record."""

    page_id: str = Field(..., description="Notion page ID")
    fields: dict[str, Any] = Field(default_factory=dict, description="Property values by name")
