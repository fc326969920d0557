"""Settings endpoints for the Notion integration."""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import ValidationError

from src.api.settings.models import ConnectionTestRequest, ConnectionTestResponse
from src.leads.config import get_leads_settings
from src.leads.service import check_connection
from src.notion.client import NotionClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.post(
    "/test-connection",
    response_model=ConnectionTestResponse,
    summary="Test Notion connection",
)
def test_connection(request: ConnectionTestRequest) -> ConnectionTestResponse:
    """Check that Notion accepts the supplied or configured integration token."""
    try:
        client = get_leads_settings().build_client(request.token)
    except ValidationError as e:
        if not request.token:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Token is required",
            ) from e
        client = NotionClient(token=request.token)

    if check_connection(client):
        return ConnectionTestResponse(success=True, message="Connection working")

    return ConnectionTestResponse(success=False, message="Connection failed")
