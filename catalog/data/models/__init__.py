from .data_filters import ProductQuery, SortToken

from .products import (
    CATEGORIES,
    PRODUCT_FIELDS,
    Category,
    ProductForm,
    ProductResponse,
    validation_messages,
)
from .list_response import (
    ListRequest,
    PageResult,
    RecordResponse,
    ResponseMeta,
    SearchSpec,
)

__all__ = [
    # Query state
    "ProductQuery",
    "SortToken",
    # Product models
    "CATEGORIES",
    "PRODUCT_FIELDS",
    "Category",
    "ProductForm",
    "ProductResponse",
    "validation_messages",
    # Request / response models
    "ListRequest",
    "PageResult",
    "RecordResponse",
    "ResponseMeta",
    "SearchSpec",
]
