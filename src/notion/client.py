"""Notion API client for querying databases and reading and updating pages."""

import logging
import os
from collections.abc import Mapping
from typing import Any

import requests

from src.notion.enums import ErrorKind, PropertyType
from src.notion.models import NotionResult, PropertyKey, PropertyValue
from src.notion.parser import build_properties, build_query_filter, get_value

logger = logging.getLogger(__name__)

# Notion API timeout in seconds
REQUEST_TIMEOUT = 20

# Notion API version
NOTION_VERSION = "2022-06-28"

# Maximum page size accepted by the query endpoint
MAX_PAGE_SIZE = 100

HTTP_OK_MIN = 200
HTTP_OK_MAX = 300


class NotionClient:
    """Client for interacting with the Notion API.

    Every call returns a ``NotionResult`` instead of raising: failures carry the
    error message together with the HTTP status code and raw body, if any.
    Instances hold no per-call state and can be shared between callers.
    """

    BASE_URL = "https://api.notion.com"

    def __init__(
        self,
        *,
        token: str | None = None,
        notion_version: str = NOTION_VERSION,
        base_url: str = BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        """Initialise the Notion client.

        :param token: Notion integration token. If not provided, reads from
            NOTION_INTEGRATION_SECRET environment variable.
        :param notion_version: Value of the Notion-Version header.
        :param base_url: Notion API host, without the version path.
        :param timeout: Request timeout in seconds.
        :raises ValueError: If token is not provided and not found in environment.
        """
        self._token = token or os.environ.get("NOTION_INTEGRATION_SECRET")

        if not self._token:
            raise ValueError(
                "Notion integration token not provided. Set NOTION_INTEGRATION_SECRET "
                "environment variable or pass token parameter."
            )

        self._notion_version = notion_version
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

        logger.debug("NotionClient initialised")

    @property
    def _headers(self) -> dict[str, str]:
        """Headers for Notion API requests.

        :returns: Dictionary of required headers.
        """
        return {
            "Authorization": f"Bearer {self._token}",
            "Notion-Version": self._notion_version,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _request(
        self,
        method: str,
        endpoint: str,
        payload: dict[str, Any] | None = None,
    ) -> NotionResult[dict[str, Any]]:
        """Make a request to the Notion API.

        :param method: HTTP method.
        :param endpoint: API endpoint path (without base URL and version prefix).
        :param payload: Optional request body.
        :returns: Result holding the decoded JSON object, or the failure details.
        """
        url = f"{self._base_url}/v1/{endpoint}"
        logger.debug(f"Making {method} request to endpoint={endpoint}")

        try:
            response = requests.request(
                method,
                url,
                headers=self._headers,
                json=payload,
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout:
            message = f"Notion API request timed out after {self._timeout}s"
            logger.warning(f"{message}: {method} {endpoint}")
            return NotionResult.failure(message, ErrorKind.TRANSPORT)
        except requests.exceptions.RequestException as e:
            message = f"Notion API request failed: {e}"
            logger.warning(f"{message}: {method} {endpoint}")
            return NotionResult.failure(message, ErrorKind.TRANSPORT)

        status_code = response.status_code
        body = response.text

        try:
            decoded = response.json()
        except ValueError:
            decoded = None

        if not HTTP_OK_MIN <= status_code < HTTP_OK_MAX:
            message = self._extract_error_message(status_code, decoded)
            logger.warning(f"{message}: {method} {endpoint}")
            return NotionResult.failure(
                message, ErrorKind.HTTP, status_code=status_code, body=body
            )

        if not isinstance(decoded, dict):
            logger.warning(f"Non-JSON response from Notion: {method} {endpoint}")
            return NotionResult.failure(
                f"Non-JSON response from Notion ({status_code})",
                ErrorKind.DECODING,
                status_code=status_code,
                body=body,
            )

        return NotionResult.success(decoded, status_code=status_code, body=body)

    @staticmethod
    def _extract_error_message(status_code: int, data: Any) -> str:
        """Build an error message from a Notion API error response.

        :param status_code: HTTP status code of the response.
        :param data: Decoded response body, if it was JSON.
        :returns: Error message string.
        """
        message = "Unknown error"
        code = "unknown"
        if isinstance(data, dict):
            if isinstance(data.get("message"), str):
                message = data["message"]
            if isinstance(data.get("code"), str):
                code = data["code"]
        return f"Notion API error ({status_code}, {code}): {message}"

    # Database endpoints

    def query_database(  # noqa: PLR0913
        self,
        database_id: str,
        filter_property: str,
        value: Any,
        *,
        property_type: str = PropertyType.RICH_TEXT,
        operator: str = "equals",
        page_size: int = MAX_PAGE_SIZE,
        fetch_all: bool = False,
    ) -> NotionResult[list[dict[str, Any]]]:
        """Query database pages matching a single property filter.

        Only the first page of results is fetched unless ``fetch_all`` is set,
        in which case the pagination cursor is followed until exhausted.

        :param database_id: Notion database ID.
        :param filter_property: Name of the property to filter on.
        :param value: Value the property is compared against.
        :param property_type: Notion type of the filtered property.
        :param operator: Filter condition, e.g. ``equals``.
        :param page_size: Number of results per request (max 100).
        :param fetch_all: Whether to follow pagination across all pages.
        :returns: Result holding the page objects in response order.
        """
        if not database_id:
            return NotionResult.failure("Notion database ID is required", ErrorKind.VALIDATION)
        if not filter_property:
            return NotionResult.failure("Filter property is required", ErrorKind.VALIDATION)

        logger.info(f"Querying database: {database_id}")
        query_filter = build_query_filter(filter_property, value, property_type, operator)
        size = max(1, min(page_size, MAX_PAGE_SIZE))

        all_results: list[dict[str, Any]] = []
        start_cursor: str | None = None

        while True:
            payload: dict[str, Any] = {"filter": query_filter, "page_size": size}
            if start_cursor is not None:
                payload["start_cursor"] = start_cursor

            response = self._request("POST", f"databases/{database_id}/query", payload)
            if not response.ok:
                return NotionResult.failure(
                    response.error or "Notion API request failed",
                    response.error_kind or ErrorKind.TRANSPORT,
                    status_code=response.status_code,
                    body=response.body,
                )

            data = response.data or {}
            results = data.get("results")
            if isinstance(results, list):
                all_results.extend(results)

            if not fetch_all or not data.get("has_more", False):
                break

            start_cursor = data.get("next_cursor")
            if not start_cursor:
                break

        logger.info(f"Retrieved {len(all_results)} pages from database: {database_id}")
        return NotionResult.success(
            all_results, status_code=response.status_code, body=response.body
        )

    # Page endpoints

    def retrieve_page(self, page_id: str) -> NotionResult[dict[str, Any]]:
        """Retrieve a single page.

        :param page_id: Notion page ID.
        :returns: Result holding the page object with properties.
        """
        if not page_id:
            return NotionResult.failure("Notion page ID is required", ErrorKind.VALIDATION)

        logger.info(f"Retrieving page: {page_id}")
        return self._request("GET", f"pages/{page_id}")

    def update_page(
        self,
        page_id: str,
        fields: Mapping[str | PropertyKey, Any],
    ) -> NotionResult[dict[str, Any]]:
        """Update a page's properties in a single request.

        Keys are property names with an optional type hint (``"Views|number"``)
        or ``PropertyKey`` instances. Properties not listed are left untouched.

        :param page_id: Notion page ID.
        :param fields: Property keys mapped to the values to write.
        :returns: Result holding the updated page object.
        """
        if not page_id:
            return NotionResult.failure("Notion page ID is required", ErrorKind.VALIDATION)
        if not fields:
            return NotionResult.failure("No properties to update", ErrorKind.VALIDATION)

        logger.info(f"Updating page: {page_id}")
        payload = {"properties": build_properties(fields)}
        return self._request("PATCH", f"pages/{page_id}", payload)

    # User endpoints

    def get_current_user(self) -> NotionResult[dict[str, Any]]:
        """Retrieve the bot user the integration token belongs to.

        :returns: Result holding the user object.
        """
        logger.info("Retrieving integration bot user")
        return self._request("GET", "users/me")

    # Helpers

    @staticmethod
    def get_value(page: dict[str, Any], property_name: str) -> PropertyValue | None:
        """Decode a property of a page without any network access.

        :param page: Raw page object.
        :param property_name: Name of the property to decode.
        :returns: The decoded value, or None if missing or unsupported.
        """
        return get_value(page, property_name)

    @staticmethod
    def first_page(pages: list[dict[str, Any]]) -> dict[str, Any] | None:
        """Return the first page of a query result, if any."""
        return pages[0] if pages else None
