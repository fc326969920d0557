"""Lead endpoints for tracking events and property lookups."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from src.api.dependencies import verify_token
from src.api.leads.dependencies import get_lead_service
from src.api.leads.models import LeadResponse, TrackRequest, TrackResponse
from src.leads.exceptions import (
    LeadLookupError,
    LeadValidationError,
    TrackingError,
    UnknownTrackingColumnError,
)
from src.leads.models import LeadFieldResult
from src.leads.service import LeadService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leads", tags=["Leads"])


@router.post(
    "/track",
    response_model=TrackResponse,
    summary="Track a page view or link click",
    responses={
        400: {"model": TrackResponse, "description": "Invalid tracking event"},
        502: {"model": TrackResponse, "description": "Notion request failed"},
    },
)
def track_event(
    request: TrackRequest,
    response: Response,
    service: LeadService = Depends(get_lead_service),
) -> TrackResponse:
    """Increment the counter of a lead for a view or click event.

    Failures are reported in the response body with ``success`` set to false.
    """
    missing = [name for name, value in request.model_dump().items() if not (value or "").strip()]
    if missing:
        response.status_code = status.HTTP_400_BAD_REQUEST
        message = f"Missing required fields: {', '.join(missing)}"
        return TrackResponse(success=False, message=message)

    logger.debug(f"Tracking {request.column} for lead: {request.lead_id}")
    try:
        count = service.track(request.page_id, request.column, lead_id=request.lead_id)
    except (UnknownTrackingColumnError, LeadValidationError) as e:
        logger.warning(f"Rejected tracking event: {e}")
        response.status_code = status.HTTP_400_BAD_REQUEST
        return TrackResponse(success=False, message=str(e))
    except TrackingError as e:
        logger.exception(f"Failed to track event: {e}")
        response.status_code = status.HTTP_502_BAD_GATEWAY
        return TrackResponse(success=False, message=str(e))

    return TrackResponse(success=True, message="tracked successfully", count=count)


@router.get(
    "/fields/{column}",
    response_model=LeadFieldResult,
    summary="Render a lead property",
)
def get_lead_field(
    column: str,
    lead_id: str | None = Query(None, alias="id", description="External lead ID"),
    database_id: str | None = Query(None, description="Notion database ID"),
    default: str = Query("", description="Text returned when the value is unavailable"),
    service: LeadService = Depends(get_lead_service),
) -> LeadFieldResult:
    """Render one property of the lead, or the default if it is unavailable."""
    return service.get_lead_field(lead_id, column, database_id=database_id, default=default)


@router.get(
    "/{lead_id}",
    response_model=LeadResponse,
    summary="Retrieve lead",
    dependencies=[Depends(verify_token)],
)
def get_lead(
    lead_id: str,
    database_id: str | None = Query(None, description="Notion database ID"),
    service: LeadService = Depends(get_lead_service),
) -> LeadResponse:
    """Retrieve a lead with all of its properties."""
    logger.debug(f"Retrieving lead: {lead_id}")
    try:
        lead = service.get_lead(lead_id, database_id)
    except LeadValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except LeadLookupError as e:
        logger.exception(f"Failed to retrieve lead: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e

    if lead is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lead not found")

    return LeadResponse(page_id=lead.page_id, fields=lead.fields)
