"""
List-View Cache

Per-user cache of entity list reads, backed by fastapi-cache. Keys are
``<prefix>:<entity>:<user_id>:<variant>``; a successful mutation clears the
whole ``<entity>:<user_id>`` namespace so the next read refetches. Entries are
invalidated, never merged.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from uuid import UUID

from fastapi_cache import FastAPICache
from fastapi_cache.backends.inmemory import InMemoryBackend
from pydantic import BaseModel, TypeAdapter

from teachassist.config import settings

logger = logging.getLogger(__name__)

CACHE_PREFIX = "teachassist"

EVENTS = "events"
RESOURCES = "resources"
QUIZZES = "quizzes"

ModelT = TypeVar("ModelT", bound=BaseModel)

_adapters: dict[type[Any], TypeAdapter[Any]] = {}


def init_list_cache() -> None:
    """Initialise the process-wide cache backend (idempotent)."""
    try:
        FastAPICache.get_backend()
    except AssertionError:
        FastAPICache.init(InMemoryBackend(), prefix=CACHE_PREFIX)
        logger.info("List-view cache initialised with in-memory backend")


def _adapter(schema: type[ModelT]) -> TypeAdapter[list[ModelT]]:
    if schema not in _adapters:
        _adapters[schema] = TypeAdapter(list[schema])  # type: ignore[valid-type]
    return _adapters[schema]


def _namespace(entity: str, user_id: UUID) -> str:
    return f"{entity}:{user_id}"


def _key(entity: str, user_id: UUID, variant: str) -> str:
    return f"{FastAPICache.get_prefix()}:{_namespace(entity, user_id)}:{variant}"


class ListViewCache:
    """Typed facade over the fastapi-cache backend for list views."""

    def __init__(self, ttl_seconds: int | None = None):
        self.ttl_seconds = ttl_seconds or settings.LIST_CACHE_TTL_SECONDS

    async def get(
        self, entity: str, user_id: UUID, variant: str, schema: type[ModelT]
    ) -> list[ModelT] | None:
        """Return the cached list, or None on a miss."""
        raw = await FastAPICache.get_backend().get(_key(entity, user_id, variant))
        if raw is None:
            return None
        return _adapter(schema).validate_json(raw)

    async def set(
        self, entity: str, user_id: UUID, variant: str, schema: type[ModelT], items: list[ModelT]
    ) -> None:
        """Store a list view."""
        payload = _adapter(schema).dump_json(items)
        await FastAPICache.get_backend().set(
            _key(entity, user_id, variant), payload, expire=self.ttl_seconds
        )

    async def invalidate(self, entity: str, user_id: UUID) -> None:
        """Drop every cached list view of ``entity`` for ``user_id``."""
        cleared = await FastAPICache.clear(namespace=_namespace(entity, user_id))
        logger.debug(f"Invalidated {cleared} cached {entity} views for user {user_id}")


list_cache = ListViewCache()
