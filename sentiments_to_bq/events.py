"""
Decoding of Firestore document events.

Firestore delivers the created document in its REST representation, where
every field is wrapped in a typed value such as {"integerValue": "5"}. Binary
(application/protobuf) events are converted to the same representation. This
module unwraps that payload into a SentimentDocument.
"""

from typing import Any, Dict, Mapping

from google.events.cloud.firestore import DocumentEventData
from google.protobuf.json_format import MessageToDict
from google.protobuf.message import DecodeError

from sentiments_to_bq.models import SentimentDocument


class EventDecodeError(ValueError):
    """Raised when an event payload does not describe a Firestore document."""


def decode_value(value: Mapping[str, Any]) -> Any:
    """Unwrap a single Firestore typed value.

    Timestamps stay in the RFC 3339 string form Firestore sends, and bytes
    stay base64 encoded.

    Args:
        value: Typed value, e.g. {"stringValue": "brand"}

    Returns:
        Plain Python value
    """
    if not isinstance(value, Mapping) or len(value) != 1:
        raise EventDecodeError(f"Malformed Firestore value: {value!r}")

    kind, raw = next(iter(value.items()))

    if kind == "nullValue":
        return None
    if kind == "booleanValue":
        return bool(raw)
    if kind in ("integerValue", "doubleValue"):
        # int64 values are sent as strings
        convert = int if kind == "integerValue" else float
        try:
            return convert(raw)
        except (TypeError, ValueError):
            raise EventDecodeError(f"Invalid {kind}: {raw!r}")
    if kind in ("stringValue", "timestampValue", "bytesValue", "referenceValue"):
        return raw
    if kind == "geoPointValue" and isinstance(raw, Mapping):
        return {
            "latitude": raw.get("latitude", 0.0),
            "longitude": raw.get("longitude", 0.0),
        }
    if kind == "arrayValue" and isinstance(raw, Mapping):
        return [decode_value(item) for item in raw.get("values", [])]
    if kind == "mapValue" and isinstance(raw, Mapping):
        return decode_fields(raw.get("fields", {}))

    raise EventDecodeError(f"Unsupported Firestore value: {value!r}")


def decode_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Unwrap a Firestore field map.

    Args:
        fields: Mapping of field name to typed value

    Returns:
        Dictionary of plain values
    """
    if not isinstance(fields, Mapping):
        raise EventDecodeError(f"Malformed Firestore fields: {fields!r}")
    return {name: decode_value(value) for name, value in fields.items()}


def document_id_from_name(name: str) -> str:
    """Get the document ID from a resource name.

    projects/p/databases/(default)/documents/sentiments/abc123 -> abc123
    """
    document_id = name.rstrip("/").rsplit("/", 1)[-1] if isinstance(name, str) else ""
    if not document_id:
        raise EventDecodeError(f"Cannot read document ID from name: {name!r}")
    return document_id


def payload_from_protobuf(data: bytes) -> Dict[str, Any]:
    """Convert a binary Firestore event to its JSON payload.

    Args:
        data: Serialized DocumentEventData

    Returns:
        Payload in the same shape as a JSON Firestore event
    """
    try:
        event = DocumentEventData.deserialize(bytes(data))
    except DecodeError as e:
        raise EventDecodeError(f"Invalid binary Firestore event: {e}")

    return MessageToDict(DocumentEventData.pb(event))


def document_from_event(data: Any) -> SentimentDocument:
    """Build the created document from a Firestore event payload.

    Works for the JSON payload of both 2nd gen CloudEvents and 1st gen
    background functions, and for protobuf encoded CloudEvent data.

    Args:
        data: Event payload with the new document under "value", or its
            protobuf encoding

    Returns:
        SentimentDocument with the document ID and its fields
    """
    if isinstance(data, (bytes, bytearray)):
        data = payload_from_protobuf(data)
    if not isinstance(data, Mapping):
        raise EventDecodeError(f"Event data must be a mapping, got {type(data).__name__}")

    value = data.get("value")
    if not isinstance(value, Mapping) or not value:
        raise EventDecodeError("Event data has no document value")

    document_id = document_id_from_name(value.get("name", ""))
    fields = decode_fields(value.get("fields", {}))

    return SentimentDocument(document_id=document_id, fields=fields)
