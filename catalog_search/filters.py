from typing import Callable, Iterable, List

from catalog_search.errors import InvalidFilter
from catalog_search.models import CatalogItem, SearchFilters

Predicate = Callable[[CatalogItem], bool]


def validate_filters(f: SearchFilters) -> None:
    if f.min_price is not None and f.min_price < 0:
        raise InvalidFilter("min_price must be >= 0")
    if f.max_price is not None and f.max_price < 0:
        raise InvalidFilter("max_price must be >= 0")
    if f.min_price is not None and f.max_price is not None and f.min_price > f.max_price:
        raise InvalidFilter(f"min_price {f.min_price} > max_price {f.max_price}")
    for label, value in (("min_rating", f.min_rating), ("max_rating", f.max_rating)):
        if value is not None and not 0 <= value <= 5:
            raise InvalidFilter(f"{label} must be between 0 and 5")
    if f.min_rating is not None and f.max_rating is not None and f.min_rating > f.max_rating:
        raise InvalidFilter(f"min_rating {f.min_rating} > max_rating {f.max_rating}")


def build_pipeline(f: SearchFilters) -> List[Predicate]:
    """
    Predicates for the constraints present in `f`, in evaluation order.
    The active-flag check is always first and cannot be switched off.
    Unknown category/vendor ids are not an error: they just match nothing.
    """
    validate_filters(f)
    preds: List[Predicate] = [lambda it: it.is_active]

    if f.min_price is not None:
        lo = f.min_price
        preds.append(lambda it: it.price >= lo)
    if f.max_price is not None:
        hi = f.max_price
        preds.append(lambda it: it.price <= hi)
    if f.category_id is not None:
        cat = f.category_id
        preds.append(lambda it: it.category_id == cat)
    if f.vendor_id is not None:
        vendor = f.vendor_id
        preds.append(lambda it: it.vendor_id == vendor)
    if f.min_rating is not None:
        rmin = f.min_rating
        preds.append(lambda it: it.average_rating >= rmin)
    if f.in_stock_only:
        preds.append(lambda it: it.stock > 0)

    # extra storefront flags
    if f.max_rating is not None:
        rmax = f.max_rating
        preds.append(lambda it: it.average_rating <= rmax)
    if f.on_sale_only:
        preds.append(lambda it: it.is_on_sale)
    if f.featured_only:
        preds.append(lambda it: it.is_featured)
    return preds


def passes(item: CatalogItem, preds: Iterable[Predicate]) -> bool:
    return all(p(item) for p in preds)
