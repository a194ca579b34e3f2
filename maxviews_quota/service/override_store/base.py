"""Base class for override store implementations."""

from abc import ABC, abstractmethod
from typing import Optional

from maxviews_quota.models.content import OverrideRecord


class OverrideStore(ABC):
    """
    Abstract base class for override stores.

    Override stores hold at most one record per (item, user) pair. Records are
    written by administrators elsewhere; the quota engine only reads them.
    """

    @abstractmethod
    async def get(self, item_id: str, user_id: str) -> Optional[OverrideRecord]:
        """
        Look up the override for a user on an item.

        Args:
            item_id: Course module identifier
            user_id: User identifier

        Returns:
            The override record, or None when the user has no override
        """
        pass
