from typing import Iterable, List

from catalog_search.models import CatalogItem, SuggestionEntry
from catalog_search.normalizer import NormalizedQuery, normalize_query

PRODUCT = "product"
CATEGORY = "category"
BRAND = "brand"

_GROUP_ORDER = {PRODUCT: 0, CATEGORY: 1, BRAND: 2}


def _contains(query_text: str, display: str) -> bool:
    return bool(display) and query_text in normalize_query(display)


def collect_candidates(
    query: NormalizedQuery,
    items: Iterable[CatalogItem],
    category_names: Iterable[str],
) -> List[SuggestionEntry]:
    """Product names, category names and brands containing the query, first source wins on duplicates."""
    items = [it for it in items if it.is_active]
    sources = [
        (PRODUCT, (it.name for it in items)),
        (CATEGORY, category_names),
        (BRAND, (it.brand for it in items)),
    ]
    seen = set()
    out: List[SuggestionEntry] = []
    for source, names in sources:
        for name in names:
            if name in seen or not _contains(query.text, name):
                continue
            seen.add(name)
            out.append(SuggestionEntry(text=name, source=source))
    return out


def suggest(
    query: NormalizedQuery,
    items: Iterable[CatalogItem],
    category_names: Iterable[str],
    limit: int,
) -> List[str]:
    """
    Autocomplete strings: products first, then categories, then brands;
    shorter strings first within a group, then alphabetical.
    """
    if limit <= 0:
        return []
    entries = collect_candidates(query, items, category_names)
    entries.sort(key=lambda e: (_GROUP_ORDER[e.source], len(e.text), e.text))
    return [e.text for e in entries[:limit]]
