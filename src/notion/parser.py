"""Parser functions for Notion API property payloads.

This module handles the conversion between raw Notion property objects
and plain Python values, in both directions:

- decoding turns a property envelope (``{"type": "number", "number": 3}``)
  into one of the tagged values in ``src.notion.models``;
- encoding turns a caller-supplied key and value into the JSON shape the
  update endpoint expects, using the key's type hint or the value's type.
"""

import math
from collections.abc import Callable, Iterable, Mapping
from datetime import date
from typing import Any

from src.notion.enums import PropertyType
from src.notion.models import (
    BooleanValue,
    ChoiceSetValue,
    ChoiceValue,
    DateRangeValue,
    FileUrlsValue,
    NumberValue,
    PeopleNamesValue,
    PropertyKey,
    PropertyValue,
    RelationIdsValue,
    ScalarValue,
    TextValue,
)

# Keys that mark a value as an already-built Notion property payload
KNOWN_PROPERTY_KEYS = frozenset(PropertyType)


def get_value(page: Any, property_name: str) -> PropertyValue | None:
    """Decode a single property of a Notion page.

    :param page: Raw page object from a Notion API response.
    :param property_name: Name of the property to decode.
    :returns: The decoded value, or None if the property is missing or unsupported.
    """
    if not isinstance(page, Mapping):
        return None
    properties = page.get("properties")
    if not isinstance(properties, Mapping):
        return None
    return decode_property(properties.get(property_name))


def flatten_properties(page: Any) -> dict[str, Any]:
    """Decode every property of a page into plain Python values.

    :param page: Raw page object from a Notion API response.
    :returns: Mapping of property name to plain value (None when unsupported).
    """
    if not isinstance(page, Mapping):
        return {}
    properties = page.get("properties")
    if not isinstance(properties, Mapping):
        return {}

    flat: dict[str, Any] = {}
    for name, prop in properties.items():
        decoded = decode_property(prop)
        flat[name] = decoded.value if decoded is not None else None
    return flat


def decode_property(prop: Any) -> PropertyValue | None:  # noqa: PLR0911
    """Decode a Notion property envelope into a tagged value.

    Never raises: malformed envelopes and unknown types decode to None.

    :param prop: Property object as found under a page's ``properties``.
    :returns: The decoded value, or None.
    """
    if not isinstance(prop, Mapping):
        return None

    raw_type = prop.get("type")
    if not isinstance(raw_type, str) or raw_type not in KNOWN_PROPERTY_KEYS:
        return None

    prop_type = PropertyType(raw_type)
    raw = prop.get(raw_type)

    match prop_type:
        case PropertyType.TITLE | PropertyType.RICH_TEXT:
            return TextValue(prop_type, _extract_plain_text(raw))
        case PropertyType.URL | PropertyType.EMAIL | PropertyType.PHONE_NUMBER:
            return ScalarValue(prop_type, raw if isinstance(raw, str) else None)
        case PropertyType.CHECKBOX:
            return BooleanValue(bool(raw))
        case PropertyType.NUMBER:
            return NumberValue(_to_number(raw))
        case PropertyType.SELECT | PropertyType.STATUS:
            return ChoiceValue(prop_type, _extract_name(raw))
        case PropertyType.MULTI_SELECT:
            return ChoiceSetValue(_collect(raw, _extract_name))
        case PropertyType.DATE:
            return _extract_date(raw)
        case PropertyType.PEOPLE:
            return PeopleNamesValue(_collect(raw, _extract_name))
        case PropertyType.RELATION:
            return RelationIdsValue(_collect(raw, _extract_id))
        case PropertyType.FILES:
            return FileUrlsValue(_collect(raw, _extract_file_url))


def _extract_plain_text(items: Any) -> str:
    """Concatenate the plain text of rich text runs."""
    if not isinstance(items, list):
        return ""

    parts: list[str] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        plain_text = item.get("plain_text")
        if plain_text is None:
            # Payloads built for writes only carry text.content
            text = item.get("text")
            plain_text = text.get("content") if isinstance(text, Mapping) else None
        if plain_text is not None:
            parts.append(str(plain_text))
    return "".join(parts)


def _extract_name(obj: Any) -> str | None:
    if not isinstance(obj, Mapping):
        return None
    name = obj.get("name")
    return name if isinstance(name, str) else None


def _extract_id(obj: Any) -> str | None:
    if not isinstance(obj, Mapping):
        return None
    id_ = obj.get("id")
    return id_ if isinstance(id_, str) else None


def _extract_file_url(obj: Any) -> str | None:
    """Extract the URL of a file entry, preferring external links."""
    if not isinstance(obj, Mapping):
        return None
    for source in ("external", "file"):
        hosted = obj.get(source)
        if isinstance(hosted, Mapping) and isinstance(hosted.get("url"), str):
            return hosted["url"]
    return None


def _extract_date(obj: Any) -> DateRangeValue | None:
    if not isinstance(obj, Mapping):
        return None
    start = obj.get("start")
    end = obj.get("end")
    return DateRangeValue(
        start=start if isinstance(start, str) else None,
        end=end if isinstance(end, str) else None,
    )


def _collect(items: Any, extract: Callable[[Any], str | None]) -> list[str]:
    """Apply an extractor to each entry, dropping empty results and keeping order."""
    if not isinstance(items, list):
        return []
    return [value for value in (extract(item) for item in items) if value]


def _to_number(value: Any) -> float | None:
    """Coerce a number or numeric string to float, None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        if "_" in value:
            return None
        value = value.strip()
    elif not isinstance(value, int | float):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def build_query_filter(
    filter_property: str,
    value: Any,
    property_type: str = PropertyType.RICH_TEXT,
    operator: str = "equals",
) -> dict[str, Any]:
    """Build a single-property Notion query filter.

    :param filter_property: Name of the property to filter on.
    :param value: Value to compare against.
    :param property_type: Notion type of the filtered property.
    :param operator: Filter condition, e.g. ``equals`` or ``contains``.
    :returns: Notion API filter object.
    """
    return {
        "property": filter_property,
        str(property_type): {operator: value},
    }


def looks_like_property_payload(value: Any) -> bool:
    """Check whether a value is already a Notion property payload."""
    return isinstance(value, Mapping) and any(key in KNOWN_PROPERTY_KEYS for key in value)


def build_property_value(key: PropertyKey, value: Any) -> dict[str, Any]:
    """Build the payload for a single property write.

    :param key: Target property and optional type hint.
    :param value: Value supplied by the caller.
    :returns: Property value object, e.g. ``{"number": 5.0}``.
    """
    if looks_like_property_payload(value):
        return dict(value)

    if key.type_hint is not None:
        return _build_typed_value(key.type_hint, value)

    return infer_property_value(value)


def _build_typed_value(type_hint: str, value: Any) -> dict[str, Any]:  # noqa: PLR0911
    """Coerce a value into the shape of the hinted property type."""
    try:
        prop_type = PropertyType(type_hint.strip().lower())
    except ValueError:
        return infer_property_value(value)

    match prop_type:
        case PropertyType.NUMBER:
            return {"number": _to_number(value)}
        case PropertyType.CHECKBOX:
            return {"checkbox": bool(value)}
        case PropertyType.TITLE | PropertyType.RICH_TEXT:
            return {prop_type.value: _text_objects(_as_text(value))}
        case PropertyType.SELECT | PropertyType.STATUS:
            return {prop_type.value: None if value is None else {"name": str(value)}}
        case PropertyType.MULTI_SELECT:
            return {"multi_select": [{"name": str(item)} for item in _as_items(value)]}
        case PropertyType.URL | PropertyType.EMAIL | PropertyType.PHONE_NUMBER:
            return {prop_type.value: None if value is None else str(value)}
        case PropertyType.DATE:
            return {"date": _date_object(value)}
        case PropertyType.RELATION:
            return {"relation": [{"id": str(item)} for item in _as_items(value)]}
        case _:
            return infer_property_value(value)


def infer_property_value(value: Any) -> dict[str, Any]:
    """Build a property payload from the value's own type.

    Booleans become checkboxes, numbers and numeric strings become numbers,
    None clears a rich text property and anything else is written as text.
    """
    if isinstance(value, bool):
        return {"checkbox": value}

    number = _to_number(value)
    if number is not None:
        return {"number": number}

    if value is None:
        return {"rich_text": []}

    return {"rich_text": _text_objects(_as_text(value))}


def build_properties(fields: Mapping[str | PropertyKey, Any]) -> dict[str, Any]:
    """Build the ``properties`` object for a page update.

    :param fields: Mapping of ``"Name"``/``"Name|type"`` keys (or PropertyKey)
        to values.
    :returns: Combined properties object for the Notion API.
    """
    properties: dict[str, Any] = {}

    for raw_key, value in fields.items():
        key = raw_key if isinstance(raw_key, PropertyKey) else PropertyKey.parse(str(raw_key))
        properties[key.name] = build_property_value(key, value)

    return properties


def _text_objects(content: str) -> list[dict[str, Any]]:
    return [{"type": "text", "text": {"content": content}}]


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _as_items(value: Any) -> list[Any]:
    """Normalise a scalar or collection into a list, None meaning empty."""
    if value is None:
        return []
    if isinstance(value, str | bytes | Mapping) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def _date_object(value: Any) -> dict[str, str | None] | None:
    """Build a Notion date object from a string, date, mapping or DateRangeValue."""
    if value is None:
        return None

    if isinstance(value, DateRangeValue):
        start, end = value.start, value.end
    elif isinstance(value, Mapping):
        start, end = value.get("start"), value.get("end")
    else:
        start, end = value, None

    return {"start": _iso_date(start), "end": _iso_date(end)}


def _iso_date(value: Any) -> str | None:
    if value is None:
        return None
    # datetime is a subclass of date
    if isinstance(value, date):
        return value.isoformat()
    return str(value)
