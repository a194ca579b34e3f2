"""In-memory access log reader."""

from typing import Iterable, List

from maxviews_quota.models.content import AccessEvent
from maxviews_quota.service.log_reader.base import EventFilter, LogReader


class InMemoryLogReader(LogReader):
    """
    Log reader over a list of events held in memory.

    Used for local runs and tests; the log is append-only.
    """

    def __init__(self, events: Iterable[AccessEvent] = ()):
        self._events: List[AccessEvent] = list(events)

    def append(self, event: AccessEvent) -> None:
        self._events.append(event)

    async def count(self, event_filter: EventFilter) -> int:
        return sum(1 for event in self._events if _matches(event, event_filter))

    def __str__(self) -> str:
        return f"InMemoryLogReader(events={len(self._events)})"


def _matches(event: AccessEvent, event_filter: EventFilter) -> bool:
    if (
        event.context_id != event_filter.context_id
        or event.user_id != event_filter.user_id
        or event.crud != event_filter.crud
    ):
        return False
    return event_filter.since is None or event.time_created >= event_filter.since
