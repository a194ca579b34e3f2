"""Null override store that never holds an override."""

from typing import Optional

from maxviews_quota.models.content import OverrideRecord
from maxviews_quota.service.override_store.base import OverrideStore


class NullOverrideStore(OverrideStore):
    """
    Null override store implementation.

    Used when no override backend is configured: every user gets the base limit
    and all of their history counts.
    """

    async def get(self, item_id: str, user_id: str) -> Optional[OverrideRecord]:
        return None

    def __str__(self) -> str:
        return "NullOverrideStore()"
