"""Notion API integration module for querying and updating database records."""

from src.notion.client import NotionClient
from src.notion.enums import ErrorKind, PropertyType
from src.notion.exceptions import NotionClientError, NotionValidationError
from src.notion.models import NotionResult, PropertyKey, PropertyValue

__all__ = [
    "ErrorKind",
    "NotionClient",
    "NotionClientError",
    "NotionResult",
    "NotionValidationError",
    "PropertyKey",
    "PropertyType",
    "PropertyValue",
]
