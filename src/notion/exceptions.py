"""Custom exceptions for the Notion API client."""


class NotionClientError(Exception):
    """Raised when a Notion API request fails.

    This exception covers HTTP errors, API-level errors returned by Notion,
    and malformed responses. The client itself reports failures through
    ``NotionResult``; this is raised by ``NotionResult.unwrap``.
    """

    pass


class NotionValidationError(NotionClientError, ValueError):
    """Raised when request parameters are rejected before any network call."""

    pass
