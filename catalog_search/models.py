from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from catalog_search import config


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------- Catalog snapshot (owned by the catalog store) ----------

class CatalogItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    short_description: str = ""
    brand: str = ""
    tags: List[str] = Field(default_factory=list)
    search_keywords: List[str] = Field(default_factory=list)
    price: Decimal = Field(default=Decimal("0"), ge=0)
    stock: int = Field(default=0, ge=0)
    average_rating: float = Field(default=0.0, ge=0, le=5)
    review_count: int = 0
    total_sold: int = 0
    views: int = 0
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    vendor_id: Optional[str] = None
    vendor_name: Optional[str] = None
    is_active: bool = True
    is_on_sale: bool = False
    is_featured: bool = False
    created_at: datetime = Field(default_factory=utcnow)


# ---------- Search request / result ----------

class SearchFilters(BaseModel):
    # page / page_size are validated by the pagination step so that callers
    # get InvalidPagination rather than a schema error
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    category_id: Optional[str] = None
    vendor_id: Optional[str] = None
    min_rating: Optional[float] = None
    max_rating: Optional[float] = None
    in_stock_only: bool = False
    on_sale_only: bool = False
    featured_only: bool = False
    sort_by: str = "relevance"
    sort_order: Optional[str] = Field(default=None, description="'asc' or 'desc'; default depends on sort_by")
    page: int = 1
    page_size: int = config.DEFAULT_PAGE_SIZE


class SearchResultPage(BaseModel):
    items: List[CatalogItem]
    total: int
    total_pages: int
    current_page: int
    page_size: int
    has_next_page: bool
    has_previous_page: bool
    out_of_range: bool = False


class SuggestionEntry(BaseModel):
    text: str
    source: str  # "product" | "category" | "brand"


# ---------- Search history ----------

class SearchHistoryEvent(BaseModel):
    user_id: Optional[str] = None
    query: str
    timestamp: datetime = Field(default_factory=utcnow)


class PopularSearchEntry(BaseModel):
    query: str
    count: int
    last_searched: Optional[datetime] = None


# ---------- HTTP envelopes ----------

class SearchRequest(SearchFilters):
    query: str
    user_id: Optional[str] = None


class SearchResponse(BaseModel):
    query: str
    took_ms: int
    page: SearchResultPage


class SuggestionResponse(BaseModel):
    query: str
    suggestions: List[str]


class PopularSearchResponse(BaseModel):
    popular_searches: List[PopularSearchEntry]


class RecommendationResponse(BaseModel):
    items: List[CatalogItem]


class IndexStats(BaseModel):
    item_count: int
    category_count: int
    history_backend: str
    max_page_size: int
