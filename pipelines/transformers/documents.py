"""
Firestore Document Transformers

The Firestore REST API wraps every value in a single-key type object
(``{"integerValue": "3"}``). These helpers unwrap documents into plain
Python values.
"""

from typing import Any


def decode_value(value: dict[str, Any]) -> Any:
    """
    Decode one typed Firestore value.

    Examples:
        >>> decode_value({"integerValue": "7"})
        7
        >>> decode_value({"arrayValue": {"values": [{"stringValue": "CB1"}]}})
        ['CB1']
        >>> decode_value({"mapValue": {"fields": {"player": {"stringValue": "Kim"}}}})
        {'player': 'Kim'}
    """
    if "nullValue" in value:
        return None
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    if "geoPointValue" in value:
        return dict(value["geoPointValue"])

    for key in ("stringValue", "timestampValue", "referenceValue", "bytesValue"):
        if key in value:
            return value[key]

    return None


def decode_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Decode a Firestore ``fields`` object into a plain dict."""
    return {key: decode_value(value) for key, value in fields.items()}


def document_id(name: str) -> str:
    """Last path segment of a document resource name."""
    return name.rstrip("/").rsplit("/", 1)[-1]


def decode_document(document: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """
    Decode a REST document into ``(document_id, fields)``.

    Example:
        >>> decode_document({
        ...     "name": "projects/p/databases/(default)/documents/players/Kim",
        ...     "fields": {"goals": {"integerValue": "4"}},
        ... })
        ('Kim', {'goals': 4})
    """
    return document_id(document["name"]), decode_fields(document.get("fields", {}))
