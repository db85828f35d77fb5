"""
Shared fixtures for the sentiment export tests.
"""

from unittest.mock import MagicMock

import pytest

from sentiments_to_bq.models import SentimentDocument


@pytest.fixture
def sentiment_fields():
    return {
        "count": 5,
        "fetchedAt": "2024-01-01T00:00:00Z",
        "lastSeenID": "x9",
        "score": 0.42,
        "variance": 0.01,
        "stdDev": 0.1,
        "searchTerm": "brand",
        "query": "brand OR brandname",
        "topic": "brand",
    }


@pytest.fixture
def sentiment_document(sentiment_fields):
    return SentimentDocument(document_id="abc123", fields=sentiment_fields)


@pytest.fixture
def firestore_event():
    """Firestore create event payload for the abc123 sentiment."""
    return {
        "oldValue": {},
        "updateMask": {},
        "value": {
            "name": "projects/centiment-prod/databases/(default)/documents/sentiments/abc123",
            "createTime": "2024-01-01T00:00:01.000000Z",
            "updateTime": "2024-01-01T00:00:01.000000Z",
            "fields": {
                "count": {"integerValue": "5"},
                "fetchedAt": {"timestampValue": "2024-01-01T00:00:00Z"},
                "lastSeenID": {"stringValue": "x9"},
                "score": {"doubleValue": 0.42},
                "variance": {"doubleValue": 0.01},
                "stdDev": {"doubleValue": 0.1},
                "searchTerm": {"stringValue": "brand"},
                "query": {"stringValue": "brand OR brandname"},
                "topic": {"stringValue": "brand"},
            },
        },
    }


@pytest.fixture
def bq_client():
    """BigQuery client double where every call succeeds."""
    client = MagicMock()
    client.insert_rows_json.return_value = []
    return client
