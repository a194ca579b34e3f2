"""
Availability condition tree attached to a content item.

The stored availability configuration is a JSON document such as::

    {"op": "&", "c": [{"type": "maxviews", "viewslimit": 5},
                      {"type": "date", "d": ">=", "t": 1700000000}],
     "showc": [true, true]}

Nodes with a ``c`` key are composites, leaves are identified by ``type``.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from dacite import Config, DaciteError, from_dict

logger = logging.getLogger(__name__)

VIEW_LIMIT_TYPE = "maxviews"


@dataclass(frozen=True)
class ViewLimitCondition:
    """Leaf limiting how many times a user may view the item."""

    limit: int


@dataclass(frozen=True)
class OtherCondition:
    """Any leaf condition that does not restrict the number of views."""

    type: str


@dataclass(frozen=True)
class CompositeCondition:
    """Boolean combination of child conditions."""

    op: str = "&"
    children: tuple["ConditionNode", ...] = field(default_factory=tuple)


ConditionNode = Union[CompositeCondition, ViewLimitCondition, OtherCondition]


@dataclass
class _ViewLimitData:
    viewslimit: int


def _as_limit(value: Any) -> int:
    """Accept integers and digit strings only; booleans and floats are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"View limit must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise ValueError(f"View limit must be an integer, got {value!r}")


_DACITE_CONFIG = Config(type_hooks={int: _as_limit})


def parse_condition(data: Dict[str, Any]) -> ConditionNode:
    """
    Build a condition node from its decoded JSON form.

    Args:
        data: One node of the availability JSON document

    Returns:
        The matching condition variant

    Raises:
        ValueError: When a view-limit leaf carries a limit that is not a
            non-negative integer
    """
    if "c" in data:
        children = tuple(
            parse_condition(child)
            for child in data.get("c") or []
            if isinstance(child, dict)
        )
        return CompositeCondition(op=str(data.get("op", "&")), children=children)

    node_type = str(data.get("type", ""))
    if node_type != VIEW_LIMIT_TYPE:
        return OtherCondition(type=node_type)

    try:
        leaf = from_dict(data_class=_ViewLimitData, data=data, config=_DACITE_CONFIG)
    except (DaciteError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid view limit condition {data!r}: {e}") from e

    if leaf.viewslimit < 0:
        raise ValueError(f"View limit must not be negative: {leaf.viewslimit}")
    return ViewLimitCondition(limit=leaf.viewslimit)


def parse_availability(availability: Optional[str]) -> Optional[CompositeCondition]:
    """
    Parse a stored availability configuration.

    Args:
        availability: The raw JSON text stored with the item, or None

    Returns:
        The root composite condition, or None when the item has no
        availability restrictions
    """
    if not availability:
        return None

    try:
        data = json.loads(availability)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid availability JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Availability root must be an object, got {type(data).__name__}")

    root = parse_condition(data)
    if isinstance(root, CompositeCondition):
        return root
    # A bare leaf at the root is wrapped so callers always walk a composite.
    return CompositeCondition(children=(root,))
