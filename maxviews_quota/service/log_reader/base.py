"""Base class for access log readers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from maxviews_quota.models.content import READ_ACTION


@dataclass(frozen=True)
class EventFilter:
    """
    Selects the access events that count as views.

    Attributes:
        context_id: Context the events were logged against
        user_id: User who triggered the events
        crud: Action kind, "r" for reads
        since: Inclusive lower bound on the event time (epoch seconds), None for all history
    """

    context_id: str
    user_id: str
    crud: str = READ_ACTION
    since: Optional[int] = None


class LogReader(ABC):
    """
    Abstract base class for access log readers.

    Log readers count logged access events matching a filter. Errors reaching
    the underlying log are raised to the caller, never turned into a count.
    """

    @abstractmethod
    async def count(self, event_filter: EventFilter) -> int:
        """
        Count the events matching the filter.

        Args:
            event_filter: The event filter

        Returns:
            Number of matching events
        """
        pass
