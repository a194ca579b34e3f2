"""Results produced by the quota evaluator."""

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

QuotaStatus = Literal["has_remaining_views", "out_of_views"]
EvaluationStatus = Literal["has_remaining_views", "out_of_views", "unavailable"]


@dataclass(frozen=True)
class QuotaResult:
    """
    Views used and allowed for one user on one item.

    ``views_limit`` is ``UNLIMITED`` (plus any override delta) when the item
    carries no view limit at the top level of its conditions; ``unlimited``
    is set in that case.
    """

    views_count: int
    views_limit: int
    unlimited: bool = False

    @property
    def views_remaining(self) -> int:
        return self.views_limit - self.views_count

    @property
    def status(self) -> QuotaStatus:
        # Equality denies: a user who used exactly the limit is out of views.
        if self.views_limit > self.views_count:
            return "has_remaining_views"
        return "out_of_views"


@dataclass(frozen=True)
class ItemEvaluation:
    """
    Outcome of evaluating one item in a batch.

    Exactly one of ``result`` and ``error`` is set. A failed evaluation has
    the status "unavailable", which is never the same as having no views left.
    """

    item_id: str
    result: Optional[QuotaResult] = None
    error: Optional[str] = None

    @property
    def status(self) -> EvaluationStatus:
        if self.result is None:
            return "unavailable"
        return self.result.status

    @property
    def show_warning(self) -> bool:
        return self.status == "out_of_views"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the JSON API."""
        data: Dict[str, Any] = {
            "item_id": self.item_id,
            "status": self.status,
            "show_warning": self.show_warning,
        }
        if self.result is not None:
            data.update(
                views_count=self.result.views_count,
                views_limit=self.result.views_limit,
                views_remaining=self.result.views_remaining,
                unlimited=self.result.unlimited,
            )
        if self.error is not None:
            data["error"] = self.error
        return data
