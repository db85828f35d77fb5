"""
Data models for sentiment records and the rows written to BigQuery.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

# Columns of the sentiments table, in insert order. "id" comes from the
# document identifier, the rest are copied from the document fields.
SENTIMENT_FIELDS = (
    "count",
    "fetchedAt",
    "lastSeenID",
    "score",
    "variance",
    "stdDev",
    "searchTerm",
    "query",
    "topic",
)
ROW_FIELDS = ("id",) + SENTIMENT_FIELDS


@dataclass(frozen=True)
class SentimentDocument:
    """A sentiment document as it was when created in Firestore."""

    document_id: str
    fields: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


@dataclass(frozen=True)
class WarehouseRow:
    """A single row for a streaming insert.

    Attributes:
        insert_id: Idempotency token BigQuery uses to drop duplicate inserts
        json: Row body keyed by column name
    """

    insert_id: str
    json: Dict[str, Any]

    @classmethod
    def from_document(cls, document: SentimentDocument) -> "WarehouseRow":
        """Project a sentiment document onto the table columns.

        Values are copied as-is. Fields missing from the document are sent
        as null, and fields the table has no column for are dropped.

        Args:
            document: The created sentiment document

        Returns:
            WarehouseRow keyed by the document ID
        """
        body = {"id": document.document_id}
        for name in SENTIMENT_FIELDS:
            body[name] = document.get(name)

        return cls(insert_id=document.document_id, json=body)
