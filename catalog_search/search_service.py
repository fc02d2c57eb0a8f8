import json
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from catalog_search import config
from catalog_search.filters import Predicate, build_pipeline, passes
from catalog_search.matcher import RelevanceMatcher, RelevanceWeights
from catalog_search.models import (
    CatalogItem,
    PopularSearchEntry,
    SearchFilters,
    SearchHistoryEvent,
    SearchResultPage,
)
from catalog_search.normalizer import NormalizedQuery, parse_query
from catalog_search.popularity import popular_searches
from catalog_search.ranking import paginate, sort_results
from catalog_search.recommendations import recommend
from catalog_search.repositories import CatalogRepository, SearchHistoryStore
from catalog_search.suggestions import suggest

log = logging.getLogger("catalog_search")

Scored = Tuple[CatalogItem, float]

# distinct `since` windows kept at once
POPULAR_CACHE_SIZE = 8


class SearchService:
    """
    Stateless search core over caller-supplied snapshots.

    Every call pulls a fresh item list from the catalog repository and builds a
    new result; nothing about a query is retained between calls. The only
    shared state is the short-lived popularity ranking cache.
    """

    def __init__(
        self,
        catalog: CatalogRepository,
        history: Optional[SearchHistoryStore] = None,
        weights: Optional[RelevanceWeights] = None,
        max_page_size: int = config.MAX_PAGE_SIZE,
        scan_workers: int = config.SCAN_WORKERS,
        parallel_threshold: int = config.SCAN_PARALLEL_THRESHOLD,
        popular_ttl: int = config.POPULAR_REFRESH_SECONDS,
    ):
        self.catalog = catalog
        self.history = history if history is not None else SearchHistoryStore(redis_url=None)
        self.matcher = RelevanceMatcher(weights or RelevanceWeights.from_config())
        self.max_page_size = max_page_size
        self.scan_workers = max(1, scan_workers)
        self.parallel_threshold = parallel_threshold

        # since -> (expires_at, full ranking)
        self._popular: Dict[Optional[str], Tuple[float, List[PopularSearchEntry]]] = {}
        self._popular_ttl = popular_ttl

    # ---------------------- scanning ----------------------

    def _scan(self, query: NormalizedQuery, items: Sequence[CatalogItem], preds: List[Predicate]) -> List[Scored]:
        out: List[Scored] = []
        for it in items:
            if not passes(it, preds):
                continue
            score = self.matcher.score(query, it)
            if score is not None:
                out.append((it, score))
        return out

    def _scan_all(self, query: NormalizedQuery, items: Sequence[CatalogItem], preds: List[Predicate]) -> List[Scored]:
        if self.scan_workers == 1 or len(items) < self.parallel_threshold:
            return self._scan(query, items, preds)

        # fan out over contiguous ranges; final sort makes the merge order irrelevant
        step = -(-len(items) // self.scan_workers)
        chunks = [items[i:i + step] for i in range(0, len(items), step)]
        with ThreadPoolExecutor(max_workers=self.scan_workers) as pool:
            parts = pool.map(lambda chunk: self._scan(query, chunk, preds), chunks)
        merged: List[Scored] = []
        for part in parts:
            merged.extend(part)
        return merged

    # ---------------------- public API ----------------------

    def search(self, query: str, filters: Optional[SearchFilters] = None) -> SearchResultPage:
        """
        Flow: normalize → build filters → match/score scan → sort → paginate.
        Raises InvalidQuery, InvalidFilter or InvalidPagination.
        """
        filters = filters or SearchFilters()
        t0 = time.perf_counter()

        nq = parse_query(query, required=True)
        preds = build_pipeline(filters)
        items = self.catalog.list_active_items()

        scored = self._scan_all(nq, items, preds)
        ordered = sort_results(scored, filters.sort_by, filters.sort_order)
        page = paginate(ordered, filters.page, filters.page_size, self.max_page_size)

        log.info(
            json.dumps(
                {
                    "event": "search",
                    "query_len": len(nq.text),
                    "tokens": len(nq.tokens),
                    "sort_by": filters.sort_by,
                    "page": filters.page,
                    "page_size": page.page_size,
                    "total": page.total,
                    "scanned": len(items),
                    "took_ms": int((time.perf_counter() - t0) * 1000),
                }
            )
        )
        return page

    def suggest(self, query: str, limit: int = config.SUGGESTION_LIMIT) -> List[str]:
        nq = parse_query(query, required=True)
        if limit <= 0:
            return []
        out = suggest(nq, self.catalog.list_active_items(), self.catalog.list_category_names(), limit)
        log.info(json.dumps({"event": "suggest", "query_len": len(nq.text), "returned": len(out)}))
        return out

    def popular_searches(self, limit: int = config.POPULAR_LIMIT, since: Optional[datetime] = None) -> List[PopularSearchEntry]:
        if limit <= 0:
            return []
        key = since.isoformat() if since else None
        now = time.time()
        # evict expired windows
        for k in [k for k, rec in self._popular.items() if now >= rec[0]]:
            del self._popular[k]

        rec = self._popular.get(key)
        if rec is None:
            events = self.history.list_search_events(since)
            # one full ranking per window; each call takes a slice
            ranking = popular_searches(events, max(len(events), 1))
            if self._popular_ttl > 0:
                if len(self._popular) >= POPULAR_CACHE_SIZE:
                    self._popular.pop(next(iter(self._popular)))
                self._popular[key] = (now + self._popular_ttl, ranking)
        else:
            ranking = rec[1]

        entries = ranking[:limit]
        log.info(json.dumps({"event": "popular_searches", "limit": limit, "returned": len(entries)}))
        return list(entries)

    def record_search(self, user_id: Optional[str], query: str) -> Optional[SearchHistoryEvent]:
        event = self.history.record_search_event(user_id, query)
        if event is not None:
            self._popular.clear()
        return event

    def recommend(self, viewed_ids: Sequence[str], limit: int = 10) -> List[CatalogItem]:
        return recommend(self.catalog.list_active_items(), viewed_ids, limit)

    def stats(self) -> Dict:
        return {
            "item_count": len(self.catalog.list_active_items()),
            "category_count": len(self.catalog.list_category_names()),
            "history_backend": self.history.backend,
            "max_page_size": self.max_page_size,
        }
