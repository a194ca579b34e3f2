"""Base class for content catalogs."""

from abc import ABC, abstractmethod
from typing import List, Optional

from maxviews_quota.models.content import ContentItem


class ContentCatalog(ABC):
    """
    Abstract base class for content catalogs.

    A content catalog lists the modules of a course as seen by a user, with
    their visibility and stored availability configuration.
    """

    @abstractmethod
    async def get_items(self, course_id: str, user_id: str) -> Optional[List[ContentItem]]:
        """
        List the items of a course.

        Args:
            course_id: Course identifier
            user_id: User the visibility flags are computed for

        Returns:
            The course items, or None when the course does not exist
        """
        pass
