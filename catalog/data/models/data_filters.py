from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

SortToken = Literal["lowest", "highest"]


class ProductQuery(BaseModel):
    """Filter, sort, search and paging state for the product grid.

    Instances are immutable; the ``with_*`` helpers return updated copies.
    Changing category, sort or search always starts again from page 1.
    """
    category: str = Field(default="all", description='"all" or a single category')
    sort: SortToken = Field(default="lowest", description="Price sort direction token")
    page: int = Field(default=1, ge=1, description="1-based page number")
    page_size: int = Field(default=4, ge=1, description="Records per page")
    search: str = Field(default="", description="Free text search")

    model_config = {"frozen": True}

    def with_category(self, category: str) -> "ProductQuery":
        return self.model_copy(update={"category": category, "page": 1})

    def with_sort(self, sort: SortToken) -> "ProductQuery":
        return self.model_copy(update={"sort": sort, "page": 1})

    def with_search(self, search: str) -> "ProductQuery":
        return self.model_copy(update={"search": search, "page": 1})

    def with_page(self, page: int) -> "ProductQuery":
        return self.model_copy(update={"page": max(1, int(page))})
