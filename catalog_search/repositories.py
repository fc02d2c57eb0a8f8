import json
import logging
import os
import threading
from datetime import datetime
from typing import Iterable, Iterator, List, Optional, Protocol

import redis
from redis.exceptions import RedisError

from catalog_search.models import CatalogItem, SearchHistoryEvent, utcnow
from catalog_search.normalizer import normalize_query

log = logging.getLogger("catalog_search")


def read_jsonl(path: str) -> Iterator[dict]:
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                yield json.loads(line)


# ---------------------- catalog ----------------------

class CatalogRepository(Protocol):
    def list_active_items(self) -> List[CatalogItem]: ...

    def list_category_names(self) -> List[str]: ...


class InMemoryCatalogRepository:
    """
    Catalog snapshot held in memory. `replace()` swaps the whole snapshot, so a
    search running concurrently keeps the list it already fetched.
    """

    def __init__(self, items: Iterable[CatalogItem] = (), category_names: Optional[Iterable[str]] = None):
        self._items: List[CatalogItem] = list(items)
        self._category_names = list(category_names) if category_names is not None else None

    @classmethod
    def from_jsonl(cls, path: str, categories_path: Optional[str] = None) -> "InMemoryCatalogRepository":
        items: List[CatalogItem] = []
        if os.path.exists(path):
            items = [CatalogItem.model_validate(row) for row in read_jsonl(path)]
        names = None
        if categories_path and os.path.exists(categories_path):
            names = [row["name"] for row in read_jsonl(categories_path) if row.get("name")]
        return cls(items, names)

    def replace(self, items: Iterable[CatalogItem], category_names: Optional[Iterable[str]] = None) -> None:
        self._items = list(items)
        if category_names is not None:
            self._category_names = list(category_names)

    def list_active_items(self) -> List[CatalogItem]:
        return [it for it in self._items if it.is_active]

    def list_category_names(self) -> List[str]:
        if self._category_names is not None:
            return list(self._category_names)
        # fall back to the names denormalized onto the items
        names = []
        for it in self._items:
            if it.category_name and it.category_name not in names:
                names.append(it.category_name)
        return names


# ---------------------- search history ----------------------

class SearchHistoryStore:
    """
    Append-only log of search events.

    Uses a redis list when available; if redis is not configured or stops
    answering, events go to an in-process list instead.
    """

    def __init__(self, redis_url: Optional[str] = None, namespace: str = "catalog_search"):
        self.key = f"{namespace}:search_events"

        self.redis_ok = False
        self.redis = None
        if redis_url:
            try:
                self.redis = redis.Redis.from_url(redis_url, decode_responses=False)
                self.redis.ping()
                self.redis_ok = True
            except (RedisError, ValueError):
                self.redis = None
                self.redis_ok = False

        self._mem: List[SearchHistoryEvent] = []
        self._lock = threading.Lock()
        log.info(json.dumps({"event": "history_backend", "backend": self.backend}))

    @property
    def backend(self) -> str:
        return "redis" if self.redis_ok else "memory"

    def record_search_event(self, user_id: Optional[str], query: str) -> Optional[SearchHistoryEvent]:
        q = normalize_query(query)
        if not q:
            return None
        event = SearchHistoryEvent(user_id=user_id, query=q, timestamp=utcnow())

        if self.redis_ok:
            try:
                self.redis.rpush(self.key, event.model_dump_json().encode("utf-8"))
                return event
            except RedisError:
                self.redis_ok = False  # fall through to memory
        with self._lock:
            self._mem.append(event)
        return event

    def list_search_events(self, since: Optional[datetime] = None) -> List[SearchHistoryEvent]:
        events: List[SearchHistoryEvent] = []
        if self.redis_ok:
            try:
                raw = self.redis.lrange(self.key, 0, -1)
                events = [SearchHistoryEvent.model_validate_json(blob) for blob in raw]
            except RedisError:
                self.redis_ok = False
        with self._lock:
            events.extend(self._mem)
        if since is not None:
            cutoff = since.timestamp()
            events = [ev for ev in events if ev.timestamp.timestamp() >= cutoff]
        return events
