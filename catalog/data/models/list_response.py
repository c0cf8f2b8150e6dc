from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .products import ProductResponse


class SearchSpec(BaseModel):
    """Full text search over a set of columns."""
    columns: List[str] = Field(description="Columns searched")
    query: str = Field(default="", description="Search text, empty matches everything")


class ListRequest(BaseModel):
    """A single paginated read against a collection."""
    table: str = Field(description="Collection name")
    where: Dict[str, Any] = Field(default_factory=dict, description="Equality filters")
    fields: List[str] = Field(description="Columns returned per record")
    search: SearchSpec = Field(description="Full text search")
    order_by: str = Field(default="price", alias="orderBy", description="Sort column")
    order: str = Field(default="asc", description='"asc" or "desc"')
    page: int = Field(default=1, ge=1, description="1-based page number")
    page_size: int = Field(default=4, ge=1, alias="list", description="Page size")

    model_config = {"populate_by_name": True}

    def to_payload(self) -> Dict[str, Any]:
        """Body sent to the record API, using its camelCase keys."""
        return self.model_dump(by_alias=True)


class ResponseMeta(BaseModel):
    """Pagination metadata returned by list calls."""
    total_pages: int = Field(default=0, alias="totalPages", description="Number of pages for the query")

    model_config = {"populate_by_name": True}


class RecordResponse(BaseModel):
    """Envelope returned by every record store call."""
    status: bool = Field(description="Success indicator")
    data: List[Dict[str, Any]] = Field(default_factory=list, description="Returned rows")
    meta: ResponseMeta = Field(default_factory=ResponseMeta, description="Pagination metadata")
    message: Optional[str] = Field(default=None, description="Optional server message")

    @field_validator("data", mode="before")
    @classmethod
    def _single_row_to_list(cls, value: Any) -> Any:
        # fetch-one answers with a bare object
        if value is None:
            return []
        if isinstance(value, dict):
            return [value]
        return value


class PageResult(BaseModel):
    """One page of products as shown in the grid."""
    records: List[ProductResponse] = Field(default_factory=list, description="Products on the page")
    total_pages: int = Field(default=0, description="Number of pages for the query")
