"""Lead lookup and view tracking on top of a Notion database."""

from src.leads.config import LeadsConfig, get_leads_settings
from src.leads.exceptions import (
    LeadError,
    LeadLookupError,
    LeadValidationError,
    TrackingError,
    UnknownTrackingColumnError,
)
from src.leads.models import Lead, LeadFieldResult, TrackingColumn
from src.leads.service import LeadService, check_connection

__all__ = [
    "Lead",
    "LeadError",
    "LeadFieldResult",
    "LeadLookupError",
    "LeadService",
    "LeadValidationError",
    "LeadsConfig",
    "TrackingColumn",
    "TrackingError",
    "UnknownTrackingColumnError",
    "check_connection",
    "get_leads_settings",
]
