"""Lead API dependencies."""

import logging

from fastapi import Depends, HTTPException, status
from pydantic import ValidationError

from src.leads.config import LeadsConfig, get_leads_settings
from src.leads.service import LeadService
from src.notion.client import NotionClient

logger = logging.getLogger(__name__)


def get_settings() -> LeadsConfig:
    """Load the lead integration settings."""
    try:
        return get_leads_settings()
    except ValidationError as e:
        logger.error(f"Invalid Notion lead configuration: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Notion integration not configured",
        ) from e


def get_notion_client(settings: LeadsConfig = Depends(get_settings)) -> NotionClient:
    """Create a NotionClient instance from the settings."""
    try:
        return settings.build_client()
    except ValueError as e:
        logger.error(f"Failed to initialise Notion client: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Notion integration not configured",
        ) from e


def get_lead_service(
    settings: LeadsConfig = Depends(get_settings),
    client: NotionClient = Depends(get_notion_client),
) -> LeadService:
    """Create a LeadService bound to the configured lead database."""
    return LeadService(
        client,
        id_property=settings.id_property,
        database_id=settings.database_id,
    )
