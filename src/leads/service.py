"""Lead lookup and view tracking backed by a Notion database."""

import logging
from typing import Any

from src.leads.exceptions import (
    LeadLookupError,
    LeadValidationError,
    TrackingError,
    UnknownTrackingColumnError,
)
from src.leads.models import TRACKING_PROPERTIES, Lead, LeadFieldResult
from src.notion.client import NotionClient
from src.notion.enums import PropertyType
from src.notion.parser import flatten_properties

logger = logging.getLogger(__name__)

HTTP_OK = 200


class LeadService:
    """Read lead records and increment their tracking counters.

    Counter updates read the current value and write it back incremented.
    Concurrent events for the same lead can overwrite each other.
    """

    def __init__(
        self,
        client: NotionClient,
        *,
        id_property: str = "ID",
        database_id: str | None = None,
    ) -> None:
        """Initialise the service.

        :param client: Notion client used for all requests.
        :param id_property: Name of the rich text property holding the lead ID.
        :param database_id: Default database to look leads up in.
        """
        self._client = client
        self._id_property = id_property
        self._database_id = database_id

    def get_lead(self, lead_id: str, database_id: str | None = None) -> Lead | None:
        """Find a lead by its external ID.

        :param lead_id: Value of the ID property to match.
        :param database_id: Database to search, defaults to the configured one.
        :returns: The lead, or None if no page matches.
        :raises LeadValidationError: If the lead or database ID is missing.
        :raises LeadLookupError: If the Notion query fails.
        """
        lead_id = (lead_id or "").strip()
        if not lead_id:
            raise LeadValidationError("Invalid lead ID provided")

        database_id = database_id or self._database_id
        if not database_id:
            raise LeadValidationError("Notion database ID is required")

        result = self._client.query_database(
            database_id,
            self._id_property,
            lead_id,
            property_type=PropertyType.RICH_TEXT,
            operator="equals",
            page_size=1,
        )
        if not result.ok:
            raise LeadLookupError(f"Notion API error: {result.error}")

        page = self._client.first_page(result.data or [])
        if page is None or not page.get("id"):
            logger.info(f"No lead found for ID: {lead_id}")
            return None

        return Lead(page_id=page["id"], fields=flatten_properties(page))

    def get_lead_field(
        self,
        lead_id: str | None,
        column: str,
        *,
        database_id: str | None = None,
        default: str = "",
    ) -> LeadFieldResult:
        """Render one property of a lead, falling back to a default.

        Lookup failures are logged and never raised.

        :param lead_id: External lead ID, usually taken from the page URL.
        :param column: Name of the Notion property to render.
        :param database_id: Database to search, defaults to the configured one.
        :param default: Text returned when the value is unavailable.
        :returns: The rendered value and the lead's page ID.
        :raises LeadValidationError: If no column is given.
        """
        if not column:
            raise LeadValidationError("Column parameter is required")

        if not lead_id:
            return LeadFieldResult(value=default)

        try:
            lead = self.get_lead(lead_id, database_id)
        except (LeadValidationError, LeadLookupError) as e:
            logger.warning(f"Lead lookup failed for ID {lead_id}: {e}")
            return LeadFieldResult(value=default)

        if lead is None:
            return LeadFieldResult(value=default)

        value = lead.fields.get(column)
        if value is None or value == "" or value == []:
            return LeadFieldResult(value=default, page_id=lead.page_id)

        return LeadFieldResult(value=format_value(value), page_id=lead.page_id, found=True)

    def track(self, page_id: str, column: str, *, lead_id: str | None = None) -> int:
        """Increment a lead's tracking counter by one.

        :param page_id: Notion page ID of the lead.
        :param column: Tracking column, e.g. ``page_view`` or ``link1``.
        :param lead_id: External lead ID, for logging only.
        :returns: The new counter value.
        :raises UnknownTrackingColumnError: If the column is not tracked.
        :raises LeadValidationError: If the page ID is missing.
        :raises TrackingError: If the page could not be read or updated.
        """
        key = TRACKING_PROPERTIES.get(column)
        if key is None:
            raise UnknownTrackingColumnError(column)

        if not page_id:
            raise LeadValidationError("Notion page ID is required")

        page = self._client.retrieve_page(page_id)
        if not page.ok or not page.data:
            raise TrackingError(f"Failed to retrieve lead page: {page.error}")

        count = _current_count(self._client.get_value(page.data, key.name)) + 1

        updated = self._client.update_page(page_id, {key: count})
        if not updated.ok:
            raise TrackingError(f"Failed to update {key.name}: {updated.error}")

        logger.info(f"Tracked {column} for lead={lead_id} page={page_id}: count={count}")
        return count


def check_connection(client: NotionClient) -> bool:
    """Check that a client's token is accepted by Notion.

    :param client: Client configured with the token to test.
    :returns: True if the bot user could be retrieved.
    """
    result = client.get_current_user()
    if result.status_code != HTTP_OK:
        logger.warning(f"Notion connection test failed: {result.error}")
        return False
    return True


def format_value(value: Any) -> str:
    """Render a plain property value as display text.

    :param value: Value as produced by ``flatten_properties``.
    :returns: Text representation.
    """
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    if isinstance(value, dict):
        # ISO 8601 interval notation for date ranges
        start, end = value.get("start"), value.get("end")
        return f"{start}/{end}" if end else str(start or "")
    return str(value)


def _current_count(value: Any) -> int:
    """Read a counter value, treating missing or non-numeric values as zero."""
    if value is None or value.value is None:
        return 0
    try:
        return int(float(value.value))
    except (TypeError, ValueError):
        return 0
