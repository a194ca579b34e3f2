"""In-memory content catalog."""

from typing import Dict, List, Optional, Sequence

from maxviews_quota.models.content import ContentItem
from maxviews_quota.service.content_catalog.base import ContentCatalog


class InMemoryContentCatalog(ContentCatalog):
    """
    Content catalog over a fixed mapping of course id to items.

    Visibility is the same for every user.
    """

    def __init__(self, courses: Dict[str, Sequence[ContentItem]]):
        self._courses = {course_id: list(items) for course_id, items in courses.items()}

    async def get_items(self, course_id: str, user_id: str) -> Optional[List[ContentItem]]:
        items = self._courses.get(course_id)
        return list(items) if items is not None else None

    def __str__(self) -> str:
        return f"InMemoryContentCatalog(courses={len(self._courses)})"
