import math
from typing import List, Optional, Sequence, Tuple

from catalog_search import config
from catalog_search.errors import InvalidPagination
from catalog_search.matcher import relevance_key
from catalog_search.models import CatalogItem, SearchResultPage

RELEVANCE = "relevance"
PRICE = "price"
RATING = "rating"
NEWEST = "newest"

# sort key -> (item key, default order)
_SORTS = {
    PRICE: (lambda it: it.price, "asc"),
    RATING: (lambda it: (it.average_rating, it.review_count), "desc"),
    NEWEST: (lambda it: it.created_at.timestamp(), "desc"),
}


def sort_results(
    scored: Sequence[Tuple[CatalogItem, float]],
    sort_by: str = RELEVANCE,
    sort_order: Optional[str] = None,
) -> List[CatalogItem]:
    """
    Order matched items. Relevance order is applied first and kept for ties
    under every other key, so the output is deterministic for a given snapshot.
    Unknown sort keys fall back to relevance.
    """
    ordered = [it for it, _ in sorted(scored, key=relevance_key)]
    spec = _SORTS.get((sort_by or RELEVANCE).lower())
    if spec is None:
        return ordered
    key, default_order = spec
    order = (sort_order or default_order).lower()
    if order not in ("asc", "desc"):
        order = default_order
    # sorted() is stable with reverse=True too, so ties stay in relevance order
    return sorted(ordered, key=key, reverse=(order == "desc"))


def clamp_page_size(page_size: int, max_page_size: int) -> int:
    return min(page_size, max_page_size)


def paginate(items: Sequence[CatalogItem], page: int, page_size: int, max_page_size: int = config.MAX_PAGE_SIZE) -> SearchResultPage:
    if page < 1:
        raise InvalidPagination(f"page must be >= 1 (got {page})")
    if page_size < 1:
        raise InvalidPagination(f"page_size must be >= 1 (got {page_size})")
    size = clamp_page_size(page_size, max_page_size)

    total = len(items)
    total_pages = math.ceil(total / size)
    out_of_range = page > max(total_pages, 1)
    # never report a current page past the data
    current = min(page, total_pages) if total_pages else 1

    start = (page - 1) * size
    page_items = [] if out_of_range else list(items[start:start + size])
    return SearchResultPage(
        items=page_items,
        total=total,
        total_pages=total_pages,
        current_page=current,
        page_size=size,
        has_next_page=current < total_pages and not out_of_range,
        has_previous_page=current > 1,
        out_of_range=out_of_range,
    )
