from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from catalog_search import config
from catalog_search.models import CatalogItem
from catalog_search.normalizer import NormalizedQuery, normalize_query


@dataclass(frozen=True)
class RelevanceWeights:
    name: float = 10.0
    brand: float = 6.0
    tags: float = 5.0
    keywords: float = 5.0
    category: float = 3.0
    vendor: float = 3.0
    description: float = 1.0
    exact_name_bonus: float = 100.0

    @classmethod
    def from_config(cls) -> "RelevanceWeights":
        return cls(
            name=config.WEIGHT_NAME,
            brand=config.WEIGHT_BRAND,
            tags=config.WEIGHT_TAGS,
            keywords=config.WEIGHT_KEYWORDS,
            category=config.WEIGHT_CATEGORY,
            vendor=config.WEIGHT_VENDOR,
            description=config.WEIGHT_DESCRIPTION,
            exact_name_bonus=config.EXACT_NAME_BONUS,
        )


def _token_fraction(tokens: Sequence[str], texts: Sequence[str]) -> float:
    """Share of query tokens found as a substring of at least one of `texts`."""
    if not tokens:
        return 0.0
    hits = sum(1 for t in tokens if any(t in x for x in texts))
    return hits / len(tokens)


class RelevanceMatcher:
    """
    Decides whether a catalog item matches a query and how well.

    An item matches when ANY token occurs (case-insensitive substring) in one of
    its searchable fields. The score is a weighted sum over fields of
    weight * (fraction of tokens found in that field), plus a fixed bonus when
    the whole query equals the item name.
    """

    def __init__(self, weights: Optional[RelevanceWeights] = None):
        self.weights = weights or RelevanceWeights()

    def _fields(self, item: CatalogItem) -> List[Tuple[float, List[str]]]:
        w = self.weights
        description = [normalize_query(item.description), normalize_query(item.short_description)]
        return [
            (w.name, [normalize_query(item.name)]),
            (w.brand, [normalize_query(item.brand)]),
            (w.tags, [normalize_query(t) for t in item.tags]),
            (w.keywords, [normalize_query(k) for k in item.search_keywords]),
            (w.category, [normalize_query(item.category_name or "")]),
            (w.vendor, [normalize_query(item.vendor_name or "")]),
            (w.description, description),
        ]

    def score(self, query: NormalizedQuery, item: CatalogItem) -> Optional[float]:
        """Relevance score, or None when no token matches any field."""
        total = 0.0
        matched = False
        for weight, texts in self._fields(item):
            texts = [x for x in texts if x]
            frac = _token_fraction(query.tokens, texts)
            if frac > 0:
                matched = True
                total += weight * frac
        if not matched:
            return None
        if query.text and query.text == normalize_query(item.name):
            total += self.weights.exact_name_bonus
        return total

    def matches(self, query: NormalizedQuery, item: CatalogItem) -> bool:
        return self.score(query, item) is not None


def tie_break_key(item: CatalogItem):
    # best sellers, then best rated, then newest, then id ascending
    return (-item.total_sold, -item.average_rating, -item.created_at.timestamp(), item.id)


def relevance_key(scored: Tuple[CatalogItem, float]):
    item, score = scored
    return (-score,) + tie_break_key(item)
