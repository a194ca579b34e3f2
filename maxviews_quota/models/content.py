"""Content items, overrides and access events read by the quota engine."""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from maxviews_quota.models.condition import CompositeCondition, parse_availability

logger = logging.getLogger(__name__)

READ_ACTION = "r"


@dataclass(frozen=True)
class ContentItem:
    """
    A course module as seen by one user.

    Attributes:
        id: Course module identifier
        course_id: Identifier of the course containing the module
        context_id: Identifier of the module context that access events are logged against
        visible: Whether the module is currently visible to the requesting user
        availability: Raw stored availability configuration (JSON text) or None
    """

    id: str
    course_id: str
    context_id: str
    visible: bool = True
    availability: Optional[str] = None

    @property
    def condition_tree(self) -> Optional[CompositeCondition]:
        return parse_availability(self.availability)


@dataclass(frozen=True)
class OverrideRecord:
    """
    Administrative adjustment for one user on one item.

    Attributes:
        item_id: Course module identifier
        user_id: User identifier
        limit_delta: Extra views added to the base limit
        reset_timestamp: Epoch seconds from which views are counted again, 0 for no reset
    """

    item_id: str
    user_id: str
    limit_delta: int = 0
    reset_timestamp: int = 0

    @classmethod
    def from_mapping(
        cls, item_id: str, user_id: str, data: Mapping[str, Any]
    ) -> "OverrideRecord":
        """
        Build a record from stored fields (``maxviews`` and ``lastreset``).

        Missing or non-numeric fields are read as 0, which means "no override"
        for that field.
        """
        return cls(
            item_id=item_id,
            user_id=user_id,
            limit_delta=_as_int(data.get("maxviews"), "maxviews", item_id, user_id),
            reset_timestamp=_as_int(data.get("lastreset"), "lastreset", item_id, user_id),
        )


def _as_int(value: Any, name: str, item_id: str, user_id: str) -> int:
    if value is None or value == "" or value == b"":
        return 0
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(
            "Ignoring malformed override field %s=%r for item %s, user %s",
            name,
            value,
            item_id,
            user_id,
        )
        return 0


@dataclass(frozen=True)
class AccessEvent:
    """A logged access to a context by a user."""

    context_id: str
    user_id: str
    crud: str
    time_created: int
