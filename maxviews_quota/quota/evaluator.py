"""Remaining views of a user on course items."""

import asyncio
import logging
from typing import Iterable, List

from maxviews_quota.models.content import ContentItem
from maxviews_quota.models.quota import ItemEvaluation, QuotaResult
from maxviews_quota.quota.limit_resolver import UNLIMITED, resolve_base_limit
from maxviews_quota.quota.override import apply_override
from maxviews_quota.quota.view_counter import ViewCounter
from maxviews_quota.service.override_store.base import OverrideStore

logger = logging.getLogger(__name__)


class QuotaEvaluator:
    """
    Computes how many views a user has left on an item.

    Every evaluation reads the override store and the access log again;
    nothing is cached between calls.
    """

    def __init__(self, override_store: OverrideStore, view_counter: ViewCounter):
        """
        Initialize the evaluator.

        Args:
            override_store: Store of per-user overrides
            view_counter: Counter of views in the access log
        """
        self.override_store = override_store
        self.view_counter = view_counter

    async def evaluate(self, item: ContentItem, user_id: str) -> QuotaResult:
        """
        Evaluate the view quota of a user on an item.

        Args:
            item: The content item
            user_id: User identifier

        Returns:
            Views counted and allowed

        Raises:
            DataAccessError: If the override store or access log cannot be read
            ValueError: If the item's availability configuration is invalid
        """
        base_limit = resolve_base_limit(item.condition_tree)
        override = await self.override_store.get(item.id, user_id)
        views_limit, window_start = apply_override(base_limit, override)
        views_count = await self.view_counter.count_events(
            item.context_id, user_id, window_start
        )

        result = QuotaResult(
            views_count=views_count,
            views_limit=views_limit,
            unlimited=base_limit == UNLIMITED,
        )
        logger.debug(
            "User %s on item %s: %d of %d views used (%s)",
            user_id,
            item.id,
            result.views_count,
            result.views_limit,
            result.status,
        )
        return result

    async def evaluate_many(
        self, items: Iterable[ContentItem], user_id: str
    ) -> List[ItemEvaluation]:
        """
        Evaluate several items for a user.

        A failing item is reported as unavailable; the other items are still
        evaluated.

        Args:
            items: The content items
            user_id: User identifier

        Returns:
            One evaluation per item, in the order given
        """
        return list(
            await asyncio.gather(*(self._evaluate_item(item, user_id) for item in items))
        )

    async def _evaluate_item(self, item: ContentItem, user_id: str) -> ItemEvaluation:
        try:
            result = await self.evaluate(item, user_id)
        except Exception as e:
            logger.error(
                "Could not evaluate views of user %s on item %s: %s",
                user_id,
                item.id,
                str(e),
            )
            return ItemEvaluation(item_id=item.id, error=str(e) or type(e).__name__)
        return ItemEvaluation(item_id=item.id, result=result)

    def __str__(self) -> str:
        return (
            f"QuotaEvaluator(override_store={self.override_store}, "
            f"view_counter={self.view_counter})"
        )
