"""Evaluation of every view-limited item of a course for one user."""

import logging
from typing import List

from maxviews_quota.models.quota import ItemEvaluation
from maxviews_quota.quota.evaluator import QuotaEvaluator
from maxviews_quota.quota.scanner import ModuleScanner

logger = logging.getLogger(__name__)


async def evaluate_course(
    scanner: ModuleScanner,
    evaluator: QuotaEvaluator,
    course_id: str,
    user_id: str,
) -> List[ItemEvaluation]:
    """
    Evaluate the view quota of a user on the restricted items of a course.

    Args:
        scanner: Finds the items to evaluate
        evaluator: Evaluates each item
        course_id: Course identifier
        user_id: User identifier

    Returns:
        One evaluation per visible item with a view limit; empty if the course
        does not exist or has no such item
    """
    items = await scanner.find_restricted_visible(course_id, user_id)
    if not items:
        return []

    evaluations = await evaluator.evaluate_many(items, user_id)
    failed = sum(1 for evaluation in evaluations if evaluation.status == "unavailable")
    if failed:
        logger.warning(
            "%d of %d items of course %s could not be evaluated for user %s",
            failed,
            len(evaluations),
            course_id,
            user_id,
        )
    return evaluations
