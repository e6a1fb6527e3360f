"""
Unit Tests for the List-View Cache
"""

from datetime import UTC, datetime
from uuid import uuid4

from teachassist.core.cache import EVENTS, RESOURCES, ListViewCache
from teachassist.core.schemas import QuizSummary


def _summary(topic: str) -> QuizSummary:
    return QuizSummary(
        id=uuid4(),
        topic=topic,
        difficulty="easy",
        question_count=5,
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
    )


class TestListViewCache:
    """Test get/set/invalidate semantics."""

    async def test_miss_returns_none(self):
        cache = ListViewCache(ttl_seconds=60)

        assert await cache.get(EVENTS, uuid4(), "all", QuizSummary) is None

    async def test_round_trip(self):
        cache = ListViewCache(ttl_seconds=60)
        user_id = uuid4()
        items = [_summary("Fractions"), _summary("Decimals")]

        await cache.set(EVENTS, user_id, "all", QuizSummary, items)

        assert await cache.get(EVENTS, user_id, "all", QuizSummary) == items

    async def test_invalidate_clears_every_variant(self):
        cache = ListViewCache(ttl_seconds=60)
        user_id = uuid4()
        await cache.set(EVENTS, user_id, "completed=False", QuizSummary, [_summary("A")])
        await cache.set(EVENTS, user_id, "completed=True", QuizSummary, [_summary("B")])

        await cache.invalidate(EVENTS, user_id)

        assert await cache.get(EVENTS, user_id, "completed=False", QuizSummary) is None
        assert await cache.get(EVENTS, user_id, "completed=True", QuizSummary) is None

    async def test_invalidate_is_scoped_to_user_and_entity(self):
        cache = ListViewCache(ttl_seconds=60)
        user_id, other_id = uuid4(), uuid4()
        await cache.set(EVENTS, user_id, "all", QuizSummary, [_summary("mine")])
        await cache.set(EVENTS, other_id, "all", QuizSummary, [_summary("theirs")])
        await cache.set(RESOURCES, user_id, "all", QuizSummary, [_summary("resource")])

        await cache.invalidate(EVENTS, user_id)

        assert await cache.get(EVENTS, other_id, "all", QuizSummary) is not None
        assert await cache.get(RESOURCES, user_id, "all", QuizSummary) is not None
