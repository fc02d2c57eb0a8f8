# catalog_search/main.py
import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from prometheus_fastapi_instrumentator import Instrumentator

from catalog_search import config
from catalog_search.errors import SearchError
from catalog_search.models import (
    IndexStats,
    PopularSearchResponse,
    RecommendationResponse,
    SearchFilters,
    SearchRequest,
    SearchResponse,
    SuggestionResponse,
)
from catalog_search.repositories import InMemoryCatalogRepository, SearchHistoryStore
from catalog_search.search_service import SearchService

# ---------- Logging: JSON lines ----------
logging.basicConfig(level=logging.INFO, format="%(message)s")
log = logging.getLogger("catalog_search")

# ---------- Lifespan: initialize/teardown singletons ----------
service: Optional[SearchService] = None


def build_service() -> SearchService:
    catalog = InMemoryCatalogRepository.from_jsonl(config.CATALOG_PATH, config.CATEGORIES_PATH)
    history = SearchHistoryStore(redis_url=config.REDIS_URL, namespace=config.CACHE_NAMESPACE)
    return SearchService(catalog=catalog, history=history)


@asynccontextmanager
async def lifespan(app: FastAPI):
    global service
    service = build_service()
    try:
        yield
    finally:
        service = None


# ---------- FastAPI app ----------
app = FastAPI(title="Catalog Search API", version="0.1.0", lifespan=lifespan)

# Prometheus metrics at /metrics
Instrumentator().instrument(app).expose(app, endpoint="/metrics")


# Access-log middleware (timing every request)
@app.middleware("http")
async def access_log(request: Request, call_next):
    t0 = time.perf_counter()
    resp = await call_next(request)
    took_ms = int((time.perf_counter() - t0) * 1000)
    log.info(
        json.dumps(
            {
                "event": "http_request",
                "method": request.method,
                "path": request.url.path,
                "status": resp.status_code,
                "took_ms": took_ms,
            }
        )
    )
    return resp


# ---------- Endpoints ----------
@app.get("/healthz")
def healthz():
    return {"status": "ok", "message": "service running"}


@app.get("/index/stats", response_model=IndexStats)
def index_stats():
    assert service is not None
    return service.stats()


@app.post("/search", response_model=SearchResponse)
def search(req: SearchRequest):
    assert service is not None
    filters = SearchFilters(**req.model_dump(exclude={"query", "user_id"}))

    t0 = time.perf_counter()
    try:
        page = service.search(req.query, filters)
    except SearchError as e:
        raise HTTPException(status_code=400, detail=str(e))
    total_ms = int((time.perf_counter() - t0) * 1000)

    # history is written by the boundary, only after a successful search
    service.record_search(req.user_id, req.query)

    return SearchResponse(query=req.query, took_ms=total_ms, page=page)


@app.get("/search/suggestions", response_model=SuggestionResponse)
def suggestions(q: str = "", limit: int = Query(default=config.SUGGESTION_LIMIT)):
    assert service is not None
    try:
        out = service.suggest(q, limit)
    except SearchError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SuggestionResponse(query=q, suggestions=out)


@app.get("/search/popular", response_model=PopularSearchResponse)
def popular(limit: int = Query(default=config.POPULAR_LIMIT)):
    assert service is not None
    return PopularSearchResponse(popular_searches=service.popular_searches(limit))


@app.get("/recommendations", response_model=RecommendationResponse)
def recommendations(viewed: str = "", limit: int = 10):
    assert service is not None
    ids = [v.strip() for v in viewed.split(",") if v.strip()]
    return RecommendationResponse(items=service.recommend(ids, limit))
