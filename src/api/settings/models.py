"""Pydantic models for settings endpoints."""

from pydantic import BaseModel, Field


class ConnectionTestRequest(BaseModel):
    """Request model for testing a Notion integration token."""

    token: str | None = Field(
        None,
        description="Token to test, defaults to the configured token",
    )


class ConnectionTestResponse(BaseModel):
    """Response model for a connection test."""

    success: bool = Field(..., description="Whether Notion accepted the token")
    message: str = Field(..., description="Outcome description")
