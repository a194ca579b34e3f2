"""Base view limit of an item from its condition tree."""

import sys
from typing import Optional

from maxviews_quota.models.condition import CompositeCondition, ViewLimitCondition

# Returned when no view limit applies; not a real number of views.
UNLIMITED: int = sys.maxsize


def resolve_base_limit(tree: Optional[CompositeCondition]) -> int:
    """
    Return the most restrictive view limit among the root's direct children.

    Only the first level of the tree is inspected: a view limit nested inside
    a child composite is not taken into account.

    Args:
        tree: The item's root condition, or None

    Returns:
        The smallest view limit found, or ``UNLIMITED`` if there is none
    """
    views_limit = UNLIMITED
    if tree is None:
        return views_limit

    for child in tree.children:
        if isinstance(child, ViewLimitCondition):
            # Several view limits on one item are allowed; the smallest wins.
            views_limit = min(views_limit, child.limit)

    return views_limit
