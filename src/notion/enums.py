"""Enums for Notion property types and request outcomes."""

from enum import StrEnum


class PropertyType(StrEnum):
    """Notion property types handled by the parser."""

    TITLE = "title"
    RICH_TEXT = "rich_text"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    CHECKBOX = "checkbox"
    NUMBER = "number"
    SELECT = "select"
    STATUS = "status"
    MULTI_SELECT = "multi_select"
    DATE = "date"
    PEOPLE = "people"
    RELATION = "relation"
    FILES = "files"


class ErrorKind(StrEnum):
    """Categories of failed Notion API requests."""

    TRANSPORT = "transport"
    DECODING = "decoding"
    HTTP = "http"
    VALIDATION = "validation"
