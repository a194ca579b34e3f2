"""
Log reader counting access events indexed in a Solr collection.
"""

import logging
from typing import List

import httpx

from maxviews_quota.errors import DataAccessError
from maxviews_quota.service.log_reader.base import EventFilter, LogReader
from maxviews_quota.service.solr import SolrService

logger = logging.getLogger(__name__)


def _escape(value: str) -> str:
    """Quote a value for use in a Solr term query."""
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


class SolrLogReader(LogReader):
    """
    A log reader backed by a Solr collection of access events.

    Each event is a Solr document with a context field, a user field, an
    action kind field and a creation time field (epoch seconds).
    """

    def __init__(
        self,
        solr_service: SolrService,
        collection: str,
        context_field: str = "contextid_s",
        user_field: str = "userid_s",
        crud_field: str = "crud_s",
        time_field: str = "timecreated_l",
    ):
        """
        Initialize the Solr log reader.

        Args:
            solr_service: The Solr service to use for queries
            collection: The Solr collection holding the access log
            context_field: Field holding the context id
            user_field: Field holding the user id
            crud_field: Field holding the action kind
            time_field: Field holding the event time in epoch seconds
        """
        self.solr_service = solr_service
        self.collection = collection
        self.context_field = context_field
        self.user_field = user_field
        self.crud_field = crud_field
        self.time_field = time_field

    def build_filter_queries(self, event_filter: EventFilter) -> List[str]:
        """Translate an event filter into Solr filter queries."""
        fq = [
            f"{self.context_field}:{_escape(event_filter.context_id)}",
            f"{self.user_field}:{_escape(event_filter.user_id)}",
            f"{self.crud_field}:{_escape(event_filter.crud)}",
        ]
        if event_filter.since is not None:
            fq.append(f"{self.time_field}:[{event_filter.since} TO *]")
        return fq

    async def count(self, event_filter: EventFilter) -> int:
        fq = self.build_filter_queries(event_filter)
        try:
            return self.solr_service.count(collection=self.collection, fq=fq)
        except (httpx.RequestError, httpx.HTTPStatusError) as e:
            logger.error("Network error while counting events in Solr: %s", str(e))
            raise DataAccessError(f"Could not query access log: {e}") from e
        except ValueError as e:
            logger.error("Error processing Solr response: %s", str(e))
            raise DataAccessError(f"Invalid access log response: {e}") from e

    def __str__(self) -> str:
        return f"SolrLogReader(solr_base_url={self.solr_service.base_url}, collection={self.collection})"
