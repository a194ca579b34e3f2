from typing import Optional, Tuple

from maxviews_quota.models.content import OverrideRecord


def apply_override(
    base_limit: int, override: Optional[OverrideRecord]
) -> Tuple[int, Optional[int]]:
    """
    Merge a user's override into the base limit.

    Args:
        base_limit: Limit resolved from the item's conditions
        override: The user's override on the item, if any

    Returns:
        The effective limit, and the epoch second from which views are counted
        (None to count all history). The delta is added without clamping, so
        the limit may exceed ``UNLIMITED``.
    """
    if override is None:
        return base_limit, None

    window_start = override.reset_timestamp or None
    effective_limit = base_limit
    if override.limit_delta:
        effective_limit += override.limit_delta

    return effective_limit, window_start
