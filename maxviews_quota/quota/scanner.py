import logging
from typing import List, Set

from maxviews_quota.models.condition import VIEW_LIMIT_TYPE
from maxviews_quota.models.content import ContentItem
from maxviews_quota.service.content_catalog.base import ContentCatalog

logger = logging.getLogger(__name__)


def has_view_limit(item: ContentItem) -> bool:
    """Whether the item's stored availability configuration mentions a view limit."""
    return bool(item.availability) and VIEW_LIMIT_TYPE in item.availability


class ModuleScanner:
    """
    Finds the items of a course that carry a view limit and that the user can see.
    """

    def __init__(self, content_catalog: ContentCatalog):
        self.content_catalog = content_catalog

    async def find_restricted_visible(self, course_id: str, user_id: str) -> List[ContentItem]:
        """
        List the visible items of a course carrying a view limit.

        Args:
            course_id: Course identifier
            user_id: User identifier

        Returns:
            The matching items in course order, empty if the course does not exist
        """
        items = await self.content_catalog.get_items(course_id, user_id)
        if items is None:
            logger.debug("Course %s not found", course_id)
            return []

        return [item for item in items if item.visible and has_view_limit(item)]

    async def find_restricted_visible_items(self, course_id: str, user_id: str) -> Set[str]:
        """Same as ``find_restricted_visible``, returning item ids only."""
        return {item.id for item in await self.find_restricted_visible(course_id, user_id)}

    def __str__(self) -> str:
        return f"ModuleScanner(content_catalog={self.content_catalog})"
