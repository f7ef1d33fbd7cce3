# catalog_app/view.py
from typing import Iterable, List

from .core import ALL_CATEGORIES, collation_key, normalize
from .models import Product, SortMode, ViewState

# This file holds the derived-view logic: search, category filter and sort.
# Everything here is pure; the catalog is never mutated.

def item_matches(item: Product, query: str) -> bool:
    if not query:
        return True
    q = normalize(query)
    hay = " ".join(normalize(v) for v in (
        item.sku,
        item.name,
        item.brand,
        item.category,
        item.description,
    ))
    return q in hay

def get_categories(catalog: Iterable[Product]) -> List[str]:
    cats = {p.category for p in catalog if p.category}
    return sorted(cats, key=collation_key)

_SORT_KEYS = {
    "name": lambda p: collation_key(p.name),
    "price": lambda p: p.price_ex_vat,
    "sku": lambda p: collation_key(p.sku),
}

def derive_view(catalog: Iterable[Product], view: ViewState) -> List[Product]:
    out = [p for p in catalog if item_matches(p, view.query)]

    if view.category != ALL_CATEGORIES:
        out = [p for p in out if p.category == view.category]

    mode = SortMode.parse(view.sort)
    field, direction = mode.value.split("-")
    # reverse=True keeps ties in catalog order, same as negating the comparator
    return sorted(out, key=_SORT_KEYS[field], reverse=(direction == "desc"))
