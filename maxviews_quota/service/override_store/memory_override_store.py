"""In-memory override store."""

from typing import Dict, Iterable, Optional, Tuple

from maxviews_quota.models.content import OverrideRecord
from maxviews_quota.service.override_store.base import OverrideStore


class InMemoryOverrideStore(OverrideStore):
    """Override store keeping records in a dictionary keyed by (item, user)."""

    def __init__(self, records: Iterable[OverrideRecord] = ()):
        self._records: Dict[Tuple[str, str], OverrideRecord] = {
            (record.item_id, record.user_id): record for record in records
        }

    def put(self, record: OverrideRecord) -> None:
        self._records[(record.item_id, record.user_id)] = record

    async def get(self, item_id: str, user_id: str) -> Optional[OverrideRecord]:
        return self._records.get((item_id, user_id))

    def __str__(self) -> str:
        return f"InMemoryOverrideStore(records={len(self._records)})"
