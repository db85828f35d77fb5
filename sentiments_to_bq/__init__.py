"""
Sentiment export for the Centiment system.
Forwards newly created sentiment documents from Firestore into BigQuery.
"""

from sentiments_to_bq.config import ForwarderConfig
from sentiments_to_bq.events import EventDecodeError, document_from_event
from sentiments_to_bq.forwarder import SentimentForwarder
from sentiments_to_bq.models import SentimentDocument, WarehouseRow

__all__ = [
    "EventDecodeError",
    "ForwarderConfig",
    "SentimentDocument",
    "SentimentForwarder",
    "WarehouseRow",
    "document_from_event",
]
