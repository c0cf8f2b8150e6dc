from __future__ import annotations

from typing import Any, Dict

from .models import PRODUCT_FIELDS, ListRequest, ProductQuery, SearchSpec

SEARCH_COLUMNS = ["name", "description", "category"]
SORT_COLUMN = "price"

_SORT_DIRECTIONS = {"lowest": "asc", "highest": "desc"}

# Server-side rule set sent with every product update.
PRODUCT_VALIDATION_RULES: Dict[str, Dict[str, Any]] = {
    "name": {"required": True, "minLength": 3},
    "price": {"required": True, "greaterThan": 0},
    "stock": {"required": True, "greaterOrEqual": 0},
}


def category_filter(category: str) -> Dict[str, Any]:
    """Equality filter for a category, empty for "all"."""
    if not category or category == "all":
        return {}
    return {"category": category}


def sort_direction(sort: str) -> str:
    return _SORT_DIRECTIONS.get(sort, "asc")


def build_list_request(query: ProductQuery, collection: str) -> ListRequest:
    """Translate the grid's query state into a single list request."""
    return ListRequest(
        table=collection,
        where=category_filter(query.category),
        fields=list(PRODUCT_FIELDS),
        search=SearchSpec(columns=list(SEARCH_COLUMNS), query=query.search),
        order_by=SORT_COLUMN,
        order=sort_direction(query.sort),
        page=query.page,
        page_size=query.page_size,
    )


def product_filter(product_id: str) -> Dict[str, Any]:
    """Scope a mutation to a single product."""
    return {"product_id": product_id}
