"""Tests for the lead service."""

import unittest
from typing import Any
from unittest.mock import MagicMock

from src.leads.exceptions import (
    LeadLookupError,
    LeadValidationError,
    TrackingError,
    UnknownTrackingColumnError,
)
from src.leads.service import LeadService, check_connection, format_value
from src.notion.client import NotionClient
from src.notion.enums import ErrorKind
from src.notion.models import NotionResult, PropertyKey


def _lead_page(page_view: Any = 4) -> dict[str, Any]:
    """Build a Notion page for a lead."""
    return {
        "id": "page-1",
        "properties": {
            "ID": {"type": "rich_text", "rich_text": [{"plain_text": "lead-42"}]},
            "Name": {"type": "title", "title": [{"plain_text": "Ada Lovelace"}]},
            "Company": {"type": "rich_text", "rich_text": []},
            "page_view": {"type": "number", "number": page_view},
            "Tags": {"type": "multi_select", "multi_select": [{"name": "vip"}, {"name": "b2b"}]},
        },
    }


def _mock_client() -> MagicMock:
    """Build a mock client that keeps the real static helpers."""
    client = MagicMock(spec=NotionClient)
    client.get_value.side_effect = NotionClient.get_value
    client.first_page.side_effect = NotionClient.first_page
    return client


class TestGetLead(unittest.TestCase):
    """Tests for LeadService.get_lead method."""

    def setUp(self) -> None:
        """Set up the service with a mock client."""
        self.client = _mock_client()
        self.service = LeadService(self.client, id_property="ID", database_id="db-default")

    def test_get_lead_found(self) -> None:
        """Test that a matching page is flattened into a lead."""
        self.client.query_database.return_value = NotionResult.success([_lead_page()])

        lead = self.service.get_lead("lead-42", "db-123")

        self.assertEqual(lead.page_id, "page-1")
        self.assertEqual(lead.fields["Name"], "Ada Lovelace")
        self.assertEqual(lead.fields["page_view"], 4.0)
        self.assertEqual(lead.fields["Tags"], ["vip", "b2b"])
        self.client.query_database.assert_called_once_with(
            "db-123",
            "ID",
            "lead-42",
            property_type="rich_text",
            operator="equals",
            page_size=1,
        )

    def test_get_lead_uses_default_database(self) -> None:
        """Test that the configured database is used when none is given."""
        self.client.query_database.return_value = NotionResult.success([])

        self.service.get_lead("lead-42")

        self.assertEqual(self.client.query_database.call_args.args[0], "db-default")

    def test_get_lead_not_found(self) -> None:
        """Test that no match returns None."""
        self.client.query_database.return_value = NotionResult.success([])

        self.assertIsNone(self.service.get_lead("lead-42"))

    def test_get_lead_api_failure(self) -> None:
        """Test that a failed query raises LeadLookupError with the message."""
        self.client.query_database.return_value = NotionResult.failure(
            "Notion API error (401, unauthorized): API token is invalid.",
            ErrorKind.HTTP,
            status_code=401,
        )

        with self.assertRaises(LeadLookupError) as context:
            self.service.get_lead("lead-42")

        self.assertIn("401", str(context.exception))

    def test_get_lead_requires_ids(self) -> None:
        """Test that missing IDs are rejected before querying."""
        service = LeadService(self.client)

        with self.assertRaises(LeadValidationError):
            service.get_lead("  ", "db-123")
        with self.assertRaises(LeadValidationError):
            service.get_lead("lead-42")

        self.client.query_database.assert_not_called()


class TestGetLeadField(unittest.TestCase):
    """Tests for LeadService.get_lead_field method."""

    def setUp(self) -> None:
        """Set up the service with a mock client."""
        self.client = _mock_client()
        self.service = LeadService(self.client, database_id="db-123")

    def test_renders_value(self) -> None:
        """Test that a found value is rendered with the page ID."""
        self.client.query_database.return_value = NotionResult.success([_lead_page()])

        result = self.service.get_lead_field("lead-42", "Name", default="friend")

        self.assertEqual(result.value, "Ada Lovelace")
        self.assertEqual(result.page_id, "page-1")
        self.assertTrue(result.found)

    def test_renders_list_value(self) -> None:
        """Test that list values are joined."""
        self.client.query_database.return_value = NotionResult.success([_lead_page()])

        result = self.service.get_lead_field("lead-42", "Tags")

        self.assertEqual(result.value, "vip, b2b")

    def test_missing_lead_id_returns_default(self) -> None:
        """Test that a request without a lead ID never queries Notion."""
        result = self.service.get_lead_field(None, "Name", default="friend")

        self.assertEqual(result.value, "friend")
        self.assertFalse(result.found)
        self.client.query_database.assert_not_called()

    def test_empty_or_unknown_column_returns_default(self) -> None:
        """Test that empty and unknown properties fall back to the default."""
        self.client.query_database.return_value = NotionResult.success([_lead_page()])

        empty = self.service.get_lead_field("lead-42", "Company", default="-")
        unknown = self.service.get_lead_field("lead-42", "Nope", default="-")

        self.assertEqual(empty.value, "-")
        self.assertEqual(empty.page_id, "page-1")
        self.assertEqual(unknown.value, "-")

    def test_lookup_failure_returns_default(self) -> None:
        """Test that Notion failures degrade to the default value."""
        self.client.query_database.return_value = NotionResult.failure(
            "Notion API request timed out after 20s", ErrorKind.TRANSPORT
        )

        with self.assertLogs("src.leads.service", level="WARNING") as logs:
            result = self.service.get_lead_field("lead-42", "Name", default="friend")

        self.assertEqual(result.value, "friend")
        self.assertIsNone(result.page_id)
        self.assertEqual([record.levelname for record in logs.records], ["WARNING"])

    def test_column_is_required(self) -> None:
        """Test that an empty column is rejected."""
        with self.assertRaises(LeadValidationError):
            self.service.get_lead_field("lead-42", "")


class TestTrack(unittest.TestCase):
    """Tests for LeadService.track method."""

    def setUp(self) -> None:
        """Set up the service with a mock client."""
        self.client = _mock_client()
        self.service = LeadService(self.client)

    def test_track_increments_counter(self) -> None:
        """Test that the counter is read and written back incremented."""
        self.client.retrieve_page.return_value = NotionResult.success(_lead_page(page_view=4))
        self.client.update_page.return_value = NotionResult.success({"id": "page-1"})

        count = self.service.track("page-1", "page_view", lead_id="lead-42")

        self.assertEqual(count, 5)
        self.client.retrieve_page.assert_called_once_with("page-1")
        self.client.update_page.assert_called_once_with(
            "page-1", {PropertyKey("page_view", "number"): 5}
        )

    def test_track_empty_counter_starts_at_one(self) -> None:
        """Test that an empty counter is treated as zero."""
        self.client.retrieve_page.return_value = NotionResult.success(_lead_page(page_view=None))
        self.client.update_page.return_value = NotionResult.success({"id": "page-1"})

        self.assertEqual(self.service.track("page-1", "page_view"), 1)

    def test_track_link_column(self) -> None:
        """Test that link clicks update their own counter."""
        self.client.retrieve_page.return_value = NotionResult.success(_lead_page())
        self.client.update_page.return_value = NotionResult.success({"id": "page-1"})

        self.assertEqual(self.service.track("page-1", "link2"), 1)
        self.client.update_page.assert_called_once_with(
            "page-1", {PropertyKey("link2", "number"): 1}
        )

    def test_track_unknown_column(self) -> None:
        """Test that columns outside the whitelist are rejected."""
        with self.assertRaises(UnknownTrackingColumnError) as context:
            self.service.track("page-1", "Name")

        self.assertEqual(context.exception.column, "Name")
        self.client.retrieve_page.assert_not_called()

    def test_track_requires_page_id(self) -> None:
        """Test that an empty page ID is rejected."""
        with self.assertRaises(LeadValidationError):
            self.service.track("", "page_view")

    def test_track_page_not_found(self) -> None:
        """Test that a missing page raises TrackingError and does not write."""
        self.client.retrieve_page.return_value = NotionResult.failure(
            "Notion API error (404, object_not_found): Not found", ErrorKind.HTTP, status_code=404
        )

        with self.assertRaises(TrackingError):
            self.service.track("page-1", "page_view")

        self.client.update_page.assert_not_called()

    def test_track_update_failure(self) -> None:
        """Test that a failed write raises TrackingError."""
        self.client.retrieve_page.return_value = NotionResult.success(_lead_page())
        self.client.update_page.return_value = NotionResult.failure(
            "Notion API error (409, conflict_error): Conflict", ErrorKind.HTTP, status_code=409
        )

        with self.assertRaises(TrackingError) as context:
            self.service.track("page-1", "page_view")

        self.assertIn("409", str(context.exception))


class TestCheckConnection(unittest.TestCase):
    """Tests for check_connection function."""

    def test_connection_ok(self) -> None:
        """Test that a 200 response means the token works."""
        client = MagicMock(spec=NotionClient)
        client.get_current_user.return_value = NotionResult.success({"id": "bot"}, status_code=200)

        self.assertTrue(check_connection(client))

    def test_connection_rejected(self) -> None:
        """Test that any other outcome means the token does not work."""
        client = MagicMock(spec=NotionClient)
        client.get_current_user.return_value = NotionResult.failure(
            "Notion API error (401, unauthorized): API token is invalid.",
            ErrorKind.HTTP,
            status_code=401,
        )

        self.assertFalse(check_connection(client))


class TestFormatValue(unittest.TestCase):
    """Tests for format_value function."""

    def test_format_value(self) -> None:
        """Test rendering of each plain value shape."""
        self.assertEqual(format_value(3.0), "3")
        self.assertEqual(format_value(2.5), "2.5")
        self.assertEqual(format_value(True), "Yes")
        self.assertEqual(format_value(["a", "b"]), "a, b")
        self.assertEqual(format_value({"start": "2025-01-01", "end": None}), "2025-01-01")
        self.assertEqual(
            format_value({"start": "2025-01-01", "end": "2025-01-03"}), "2025-01-01/2025-01-03"
        )
        self.assertEqual(format_value("text"), "text")


if __name__ == "__main__":
    unittest.main()
