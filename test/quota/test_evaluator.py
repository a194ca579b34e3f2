"""
Tests for the quota evaluator.
"""

import json
from typing import Optional
from unittest.mock import AsyncMock

import pytest

from maxviews_quota.errors import DataAccessError
from maxviews_quota.models.content import AccessEvent, ContentItem, OverrideRecord
from maxviews_quota.models.quota import ItemEvaluation, QuotaResult
from maxviews_quota.quota.evaluator import QuotaEvaluator
from maxviews_quota.quota.limit_resolver import UNLIMITED
from maxviews_quota.quota.view_counter import ViewCounter
from maxviews_quota.service.log_reader.memory_log_reader import InMemoryLogReader
from maxviews_quota.service.override_store.base import OverrideStore
from maxviews_quota.service.override_store.memory_override_store import (
    InMemoryOverrideStore,
)


def _item(item_id: str, limit: Optional[int] = 7) -> ContentItem:
    conditions = [{"type": "maxviews", "viewslimit": limit}] if limit is not None else []
    return ContentItem(
        id=item_id,
        course_id="42",
        context_id=f"ctx-{item_id}",
        availability=json.dumps({"op": "&", "c": conditions}),
    )


def _reads(context_id: str, user_id: str, *times: int) -> list[AccessEvent]:
    return [
        AccessEvent(context_id=context_id, user_id=user_id, crud="r", time_created=t)
        for t in times
    ]


def _evaluator(
    events: list[AccessEvent], overrides: tuple[OverrideRecord, ...] = ()
) -> QuotaEvaluator:
    return QuotaEvaluator(
        override_store=InMemoryOverrideStore(overrides),
        view_counter=ViewCounter(InMemoryLogReader(events)),
    )


async def test_has_remaining_views() -> None:
    evaluator = _evaluator(_reads("ctx-101", "7", 1, 2, 3, 4, 5, 6))

    result = await evaluator.evaluate(_item("101"), "7")

    assert result == QuotaResult(views_count=6, views_limit=7)
    assert result.views_remaining == 1
    assert result.status == "has_remaining_views"


async def test_equal_count_and_limit_is_out_of_views() -> None:
    evaluator = _evaluator(_reads("ctx-101", "7", 1, 2, 3, 4, 5, 6, 7))

    result = await evaluator.evaluate(_item("101"), "7")

    assert result.views_remaining == 0
    assert result.status == "out_of_views"


async def test_over_limit_has_negative_remaining() -> None:
    evaluator = _evaluator(_reads("ctx-101", "7", 1, 2, 3))

    result = await evaluator.evaluate(_item("101", limit=2), "7")

    assert result.views_remaining == -1
    assert result.status == "out_of_views"


async def test_override_adds_views_and_resets_window() -> None:
    evaluator = _evaluator(
        _reads("ctx-101", "7", 1, 2, 3, 4, 5, 6, 7, 100, 101),
        (OverrideRecord(item_id="101", user_id="7", limit_delta=5, reset_timestamp=100),),
    )

    result = await evaluator.evaluate(_item("101"), "7")

    assert result == QuotaResult(views_count=2, views_limit=12)
    assert result.status == "has_remaining_views"


async def test_override_of_other_user_is_ignored() -> None:
    evaluator = _evaluator(
        _reads("ctx-101", "7", 1, 2, 3, 4, 5, 6, 7),
        (OverrideRecord(item_id="101", user_id="8", limit_delta=5),),
    )

    result = await evaluator.evaluate(_item("101"), "7")

    assert result.status == "out_of_views"


async def test_item_without_direct_view_limit_is_unlimited() -> None:
    evaluator = _evaluator(_reads("ctx-101", "7", 1, 2))

    result = await evaluator.evaluate(_item("101", limit=None), "7")

    assert result.unlimited
    assert result.views_limit == UNLIMITED
    assert result.status == "has_remaining_views"


async def test_evaluate_is_idempotent() -> None:
    evaluator = _evaluator(
        _reads("ctx-101", "7", 1, 2, 3),
        (OverrideRecord(item_id="101", user_id="7", limit_delta=1, reset_timestamp=2),),
    )
    item = _item("101")

    first = await evaluator.evaluate(item, "7")
    second = await evaluator.evaluate(item, "7")

    assert first == second


async def test_evaluate_propagates_override_store_failure() -> None:
    override_store = AsyncMock(spec=OverrideStore)
    override_store.get.side_effect = DataAccessError("redis down")
    evaluator = QuotaEvaluator(override_store, ViewCounter(InMemoryLogReader()))

    with pytest.raises(DataAccessError):
        await evaluator.evaluate(_item("101"), "7")


async def test_evaluate_many_isolates_failures() -> None:
    """A failing override lookup for one item does not affect the others."""

    async def get_override(item_id: str, user_id: str) -> Optional[OverrideRecord]:
        if item_id == "101":
            raise DataAccessError("redis down")
        return None

    override_store = AsyncMock(spec=OverrideStore)
    override_store.get.side_effect = get_override
    evaluator = QuotaEvaluator(
        override_store, ViewCounter(InMemoryLogReader(_reads("ctx-102", "7", 1)))
    )

    evaluations = await evaluator.evaluate_many([_item("101"), _item("102")], "7")

    assert evaluations == [
        ItemEvaluation(item_id="101", error="redis down"),
        ItemEvaluation(item_id="102", result=QuotaResult(views_count=1, views_limit=7)),
    ]
    assert evaluations[0].status == "unavailable"
    assert not evaluations[0].show_warning
    assert evaluations[1].status == "has_remaining_views"


async def test_evaluate_many_reports_invalid_availability() -> None:
    broken = ContentItem(
        id="103", course_id="42", context_id="ctx-103", availability='{"c": [{"type": "maxviews", "viewslimit": "x"}]}'
    )
    evaluator = _evaluator([])

    [evaluation] = await evaluator.evaluate_many([broken], "7")

    assert evaluation.status == "unavailable"
    assert evaluation.result is None


@pytest.mark.parametrize("leaf", ['{"type": "maxviews"}', '{"type": "maxviews", "viewslimit": true}'])
async def test_malformed_view_limit_is_unavailable_not_out_of_views(leaf: str) -> None:
    item = ContentItem(
        id="104", course_id="42", context_id="ctx-104", availability=f'{{"op": "&", "c": [{leaf}]}}'
    )
    evaluator = _evaluator([])

    [evaluation] = await evaluator.evaluate_many([item], "7")

    assert evaluation.status == "unavailable"
    assert not evaluation.show_warning


def test_item_evaluation_to_dict() -> None:
    evaluation = ItemEvaluation(
        item_id="101", result=QuotaResult(views_count=7, views_limit=7)
    )

    assert evaluation.to_dict() == {
        "item_id": "101",
        "status": "out_of_views",
        "show_warning": True,
        "views_count": 7,
        "views_limit": 7,
        "views_remaining": 0,
        "unlimited": False,
    }


def test_failed_item_evaluation_to_dict() -> None:
    evaluation = ItemEvaluation(item_id="101", error="solr down")

    assert evaluation.to_dict() == {
        "item_id": "101",
        "status": "unavailable",
        "show_warning": False,
        "error": "solr down",
    }
