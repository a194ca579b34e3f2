import logging
from typing import Optional

from maxviews_quota.models.content import READ_ACTION
from maxviews_quota.service.log_reader.base import EventFilter, LogReader

logger = logging.getLogger(__name__)


class ViewCounter:
    """Counts the reads of a context by a user in the access log."""

    def __init__(self, log_reader: LogReader):
        self.log_reader = log_reader

    async def count_events(
        self, context_id: str, user_id: str, window_start: Optional[int] = None
    ) -> int:
        """
        Count the views of a context by a user.

        Args:
            context_id: Context the views were logged against
            user_id: User identifier
            window_start: Epoch second from which views count, None for all history

        Returns:
            Number of read events in the counting window
        """
        event_filter = EventFilter(
            context_id=context_id,
            user_id=user_id,
            crud=READ_ACTION,
            since=window_start,
        )
        views_count = await self.log_reader.count(event_filter)
        logger.debug("Counted %d views for %s", views_count, event_filter)
        return views_count

    def __str__(self) -> str:
        return f"ViewCounter(log_reader={self.log_reader})"
