"""Data models for Notion property values, write keys and request results."""

from dataclasses import dataclass, field
from typing import Generic, Self, TypeVar

from src.notion.enums import ErrorKind, PropertyType
from src.notion.exceptions import NotionClientError, NotionValidationError

T = TypeVar("T")

# Separates a property name from its type hint in string write keys
TYPE_HINT_SEPARATOR = "|"


@dataclass(frozen=True)
class TextValue:
    """Plain text of a ``title`` or ``rich_text`` property."""

    property_type: PropertyType
    value: str


@dataclass(frozen=True)
class ScalarValue:
    """Value of a ``url``, ``email`` or ``phone_number`` property."""

    property_type: PropertyType
    value: str | None


@dataclass(frozen=True)
class BooleanValue:
    """Value of a ``checkbox`` property."""

    value: bool
    property_type: PropertyType = PropertyType.CHECKBOX


@dataclass(frozen=True)
class NumberValue:
    """Value of a ``number`` property, None when empty or non-numeric."""

    value: float | None
    property_type: PropertyType = PropertyType.NUMBER


@dataclass(frozen=True)
class ChoiceValue:
    """Selected option name of a ``select`` or ``status`` property."""

    property_type: PropertyType
    value: str | None


@dataclass(frozen=True)
class ChoiceSetValue:
    """Option names of a ``multi_select`` property, in Notion order."""

    value: list[str] = field(default_factory=list)
    property_type: PropertyType = PropertyType.MULTI_SELECT


@dataclass(frozen=True)
class DateRangeValue:
    """Start and end of a ``date`` property as ISO 8601 strings."""

    start: str | None = None
    end: str | None = None
    property_type: PropertyType = PropertyType.DATE

    @property
    def value(self) -> dict[str, str | None]:
        """Date range as a plain mapping."""
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class PeopleNamesValue:
    """Names of the users in a ``people`` property."""

    value: list[str] = field(default_factory=list)
    property_type: PropertyType = PropertyType.PEOPLE


@dataclass(frozen=True)
class RelationIdsValue:
    """Related page IDs of a ``relation`` property."""

    value: list[str] = field(default_factory=list)
    property_type: PropertyType = PropertyType.RELATION


@dataclass(frozen=True)
class FileUrlsValue:
    """URLs of the files in a ``files`` property."""

    value: list[str] = field(default_factory=list)
    property_type: PropertyType = PropertyType.FILES


PropertyValue = (
    TextValue
    | ScalarValue
    | BooleanValue
    | NumberValue
    | ChoiceValue
    | ChoiceSetValue
    | DateRangeValue
    | PeopleNamesValue
    | RelationIdsValue
    | FileUrlsValue
)


@dataclass(frozen=True)
class PropertyKey:
    """Target of a property write: the property name and an optional type hint.

    String keys use the ``"Name|type"`` form. Build a ``PropertyKey`` directly
    when the property name itself contains the separator.
    """

    name: str
    type_hint: str | None = None

    @classmethod
    def parse(cls, key: str) -> Self:
        """Parse a ``"Name"`` or ``"Name|type"`` key.

        Only the first separator splits the key; an empty hint means no hint.

        :param key: Raw key as supplied by the caller.
        :returns: Parsed property key.
        """
        name, _, hint = key.partition(TYPE_HINT_SEPARATOR)
        hint = hint.strip()
        return cls(name=name.strip(), type_hint=hint or None)


@dataclass(frozen=True)
class NotionResult(Generic[T]):
    """Outcome of a single Notion API call.

    Carries the decoded payload on success, or the error details on failure.
    The HTTP status code and raw body are kept whenever a response arrived.
    """

    data: T | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
    status_code: int | None = None
    body: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the call succeeded."""
        return self.error is None

    @classmethod
    def success(cls, data: T, *, status_code: int | None = None, body: str | None = None) -> Self:
        """Build a successful result."""
        return cls(data=data, status_code=status_code, body=body)

    @classmethod
    def failure(
        cls,
        message: str,
        kind: ErrorKind,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> Self:
        """Build a failed result."""
        return cls(error=message, error_kind=kind, status_code=status_code, body=body)

    def unwrap(self) -> T:
        """Return the payload, raising if the call failed.

        :returns: The decoded response payload.
        :raises NotionValidationError: If the request was rejected before sending.
        :raises NotionClientError: If the request failed.
        """
        if self.error is not None:
            if self.error_kind is ErrorKind.VALIDATION:
                raise NotionValidationError(self.error)
            raise NotionClientError(self.error)
        return self.data  # type: ignore[return-value]

