"""
Main Cloud Function entry points for exporting sentiments to BigQuery.
"""

import logging

import functions_framework
from google.cloud import bigquery

from sentiments_to_bq.config import ForwarderConfig
from sentiments_to_bq.events import EventDecodeError, document_from_event
from sentiments_to_bq.forwarder import SentimentForwarder

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Initialize clients (reused across invocations)
bigquery_clients = {}


def get_bigquery_client(project_id=None):
    """Get or create the BigQuery client for a project."""
    if project_id not in bigquery_clients:
        bigquery_clients[project_id] = bigquery.Client(project=project_id)
    return bigquery_clients[project_id]


def handle_created_document(data, event_id=None):
    """Forward the document carried by a Firestore create event.

    Args:
        data: Firestore event payload
        event_id: ID of the triggering event, for logging

    Returns:
        None on success, otherwise the error that stopped the insert

    Raises:
        ValueError: If the environment configuration is invalid
    """
    try:
        document = document_from_event(data)
    except EventDecodeError as e:
        # Drop the event instead of raising
        logger.error(f"Skipping event {event_id}: {e}")
        return e

    try:
        config = ForwarderConfig.from_env()
    except ValueError as e:
        # Fail the invocation on a bad deploy
        logger.error(f"Invalid configuration, event {event_id} not forwarded: {e}")
        raise

    forwarder = SentimentForwarder(config, client=get_bigquery_client(config.project_id))

    return forwarder.forward(document)


@functions_framework.cloud_event
def sentiments_to_bq(cloud_event):
    """Cloud Function triggered when a sentiment document is created.

    Deploy with a google.cloud.firestore.document.v1.created trigger on
    sentiments/{sentimentID}. Both the protobuf and JSON event data types
    are accepted.

    Args:
        cloud_event: The Cloud Event that triggered the function

    Returns:
        Forwarding outcome
    """
    return handle_created_document(cloud_event.data, cloud_event["id"])


def sentiments_to_bq_background(data, context):
    """1st gen background Cloud Function for the same trigger.

    Args:
        data: Firestore event payload
        context: Event context

    Returns:
        Forwarding outcome
    """
    return handle_created_document(data, getattr(context, "event_id", None))
