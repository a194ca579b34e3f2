import json
import logging
import os
from typing import Any, Dict, List, Optional

from maxviews_quota.models.content import ContentItem
from maxviews_quota.service.content_catalog.base import ContentCatalog

logger = logging.getLogger(__name__)


class JsonFileContentCatalog(ContentCatalog):
    """
    Read course modules from JSON files.

    Each course is described by one file, ``{base_path}/{course_id}.json``::

        {
          "modules": [
            {"id": "101", "context_id": "501", "visible": true,
             "hidden_from": ["7"],
             "availability": "{\\"op\\":\\"&\\",\\"c\\":[{\\"type\\":\\"maxviews\\",\\"viewslimit\\":3}]}"}
          ]
        }

    ``availability`` may also be given as a JSON object; it is stored back as
    text so that it reads the same as a stored configuration.
    """

    def __init__(self, base_path: str = "/app/courses"):
        """Initialize the catalog with a base path.

        Args:
            base_path: Directory holding one JSON file per course.
        """
        self.base_path = base_path

    async def get_items(self, course_id: str, user_id: str) -> Optional[List[ContentItem]]:
        """Load the items of a course as seen by a user.

        Args:
            course_id: Course identifier.
            user_id: User the visibility flags are computed for.

        Returns:
            The course items, or None if there is no file for the course.

        Raises:
            ValueError: If the course file is not valid JSON.
        """
        course_path = self._course_path(course_id)
        if course_path is None or not os.path.exists(course_path):
            logger.debug("No course file for course %s", course_id)
            return None

        try:
            with open(course_path, "r", encoding="utf-8") as f:
                course = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid course file {course_path}: {e}") from e

        items: List[ContentItem] = []
        for module in course.get("modules", []):
            if not isinstance(module, dict) or module.get("id") in (None, ""):
                logger.warning(
                    "Skipping module without id in course %s: %r", course_id, module
                )
                continue
            items.append(self._to_item(course_id, user_id, module))
        return items

    def _course_path(self, course_id: str) -> Optional[str]:
        # Course ids become file names, so anything that could leave base_path is refused.
        if not course_id or "/" in course_id or "\\" in course_id or course_id.startswith("."):
            return None
        return os.path.join(self.base_path, f"{course_id}.json")

    def _to_item(self, course_id: str, user_id: str, module: Dict[str, Any]) -> ContentItem:
        availability = module.get("availability")
        if availability is not None and not isinstance(availability, str):
            availability = json.dumps(availability)

        hidden_from = {str(u) for u in module.get("hidden_from", [])}
        return ContentItem(
            id=str(module["id"]),
            course_id=course_id,
            context_id=str(module.get("context_id", module["id"])),
            visible=_is_visible(module.get("visible", True)) and user_id not in hidden_from,
            availability=availability,
        )

    def __str__(self) -> str:
        return f"JsonFileContentCatalog(base_path={self.base_path})"


def _is_visible(value: Any) -> bool:
    """Only true, 1 and "1"/"true" count as visible; anything else hides the module."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true")
    return False
