"""Null log reader used when no access log backend is configured."""

import logging

from maxviews_quota.errors import DataAccessError
from maxviews_quota.service.log_reader.base import EventFilter, LogReader

logger = logging.getLogger(__name__)


class NullLogReader(LogReader):
    """
    Log reader that cannot count anything.

    Without an access log the number of views is unknown, so every count
    fails and the items are reported as unavailable instead of unviewed.
    """

    async def count(self, event_filter: EventFilter) -> int:
        logger.error("Cannot count views for %s: no access log configured", event_filter)
        raise DataAccessError("no access log configured")

    def __str__(self) -> str:
        return "NullLogReader()"
