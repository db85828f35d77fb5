"""
Sentiment forwarder for the Centiment system.
Appends newly created sentiment documents to a BigQuery table.
"""

import json
import logging
from typing import Any, Optional

import requests
from google.api_core.exceptions import GoogleAPIError
from google.api_core.retry import Retry
from google.auth.exceptions import GoogleAuthError
from google.cloud import bigquery

from sentiments_to_bq.config import ForwarderConfig
from sentiments_to_bq.models import SentimentDocument, WarehouseRow

logger = logging.getLogger(__name__)


class SentimentForwarder:
    """Streams sentiment documents into BigQuery, one row per document."""

    def __init__(
        self,
        config: Optional[ForwarderConfig] = None,
        client: Optional[bigquery.Client] = None
    ):
        """Initialize the forwarder.

        Args:
            config: Target dataset, table and timeout (defaults if None)
            client: Existing BigQuery client (or None to create one on first use)
        """
        self.config = config or ForwarderConfig()
        self._client = client

    @property
    def client(self) -> bigquery.Client:
        if self._client is None:
            self._client = bigquery.Client(project=self.config.project_id)
        return self._client

    @property
    def retry(self) -> Retry:
        """Client retry policy capped at the configured timeout."""
        return bigquery.DEFAULT_RETRY.with_timeout(self.config.timeout)

    def forward(self, document: SentimentDocument) -> Optional[Any]:
        """Insert a sentiment document as a new row.

        The dataset and table checks only log; the insert is attempted
        either way. Insert failures are logged and returned rather than
        raised, so the invoking runtime treats the event as handled.
        Redelivered events are deduplicated by BigQuery on the insert ID.

        Args:
            document: The created sentiment document

        Returns:
            None on success, otherwise the error payload of the insert call
            (the row errors BigQuery reported, or the raised exception)
        """
        logger.info(f"new create event for document ID: {document.document_id}")

        self.check_dataset()
        self.check_table()

        row = WarehouseRow.from_document(document)
        return self.insert(row)

    def check_dataset(self) -> bool:
        """Check that the target dataset exists.

        Returns:
            True if the dataset was found
        """
        dataset_id = self.config.dataset_id
        try:
            self.client.get_dataset(dataset_id, retry=self.retry, timeout=self.config.timeout)
            return True
        except Exception as e:
            logger.error(f"dataset {dataset_id} does not exist or is unreachable: {e}")
            return False

    def check_table(self) -> bool:
        """Check that the target table exists.

        Returns:
            True if the table was found
        """
        table_id = self.config.table_id
        try:
            self.client.get_table(table_id, retry=self.retry, timeout=self.config.timeout)
            return True
        except Exception as e:
            logger.error(f"table {table_id} does not exist or is unreachable: {e}")
            return False

    def insert(self, row: WarehouseRow) -> Optional[Any]:
        """Stream a single row into the target table.

        The row is sent as JSON against the existing table schema; nothing
        is inferred from the row itself.

        Args:
            row: Row to insert

        Returns:
            None on success, otherwise the error payload
        """
        table_id = self.config.table_id
        try:
            errors = self.client.insert_rows_json(
                table_id,
                [row.json],
                row_ids=[row.insert_id],
                retry=self.retry,
                timeout=self.config.timeout,
            )
        except (GoogleAPIError, GoogleAuthError, requests.exceptions.RequestException) as e:
            logger.error(f"insert into {table_id} failed for {row.insert_id}: {e!r}")
            return e

        if errors:
            logger.error(f"insert into {table_id} failed for {row.insert_id}: {json.dumps(errors, default=str)}")
            return errors

        logger.info(f"inserted document {row.insert_id} into {table_id}")
        return None
