import math
from typing import Iterable, List

from catalog_search.models import CatalogItem

CATEGORY_WEIGHT = 5.0
VENDOR_WEIGHT = 3.0
RATING_WEIGHT = 2.0


def recommend(items: Iterable[CatalogItem], viewed_ids: Iterable[str], limit: int) -> List[CatalogItem]:
    """Items sharing a category or vendor with recently viewed ones, best first."""
    if limit <= 0:
        return []
    items = list(items)
    viewed = set(viewed_ids)
    if not viewed:
        return []

    by_id = {it.id: it for it in items}
    categories = {by_id[i].category_id for i in viewed if i in by_id and by_id[i].category_id}
    vendors = {by_id[i].vendor_id for i in viewed if i in by_id and by_id[i].vendor_id}

    scored = []
    for it in items:
        if not it.is_active or it.id in viewed:
            continue
        in_cat = it.category_id in categories
        in_vendor = it.vendor_id in vendors
        if not (in_cat or in_vendor):
            continue
        score = CATEGORY_WEIGHT * in_cat + VENDOR_WEIGHT * in_vendor
        score += RATING_WEIGHT * it.average_rating + math.log(it.views + 1)
        scored.append((score, it))

    scored.sort(key=lambda p: (-p[0], p[1].id))
    return [it for _, it in scored[:limit]]
