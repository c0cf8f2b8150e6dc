from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

Category = Literal["Electronics", "Furniture", "Wearables", "Audio", "Accessories"]

CATEGORIES: List[str] = ["Electronics", "Furniture", "Wearables", "Audio", "Accessories"]

# Columns requested on every list call, in display order.
PRODUCT_FIELDS: List[str] = [
    "product_id",
    "name",
    "category",
    "price",
    "stock",
    "description",
    "image_url",
]


class ProductResponse(BaseModel):
    """Response model for product data."""
    product_id: str = Field(description="Unique product identifier, P<epoch ms>")
    name: str = Field(description="Product name")
    category: str = Field(description="Product category")
    price: float = Field(ge=0, description="Unit price")
    stock: int = Field(ge=0, description="Units in stock")
    description: Optional[str] = Field(default=None, description="Free text description")
    image_url: Optional[str] = Field(default=None, description="Product image URL")


class ProductForm(BaseModel):
    """User input collected by the create and edit modals."""
    name: str = Field(min_length=3, max_length=100, description="Product name")
    category: Category = Field(default="Electronics", description="Product category")
    price: float = Field(gt=0, description="Unit price, must be positive")
    stock: int = Field(ge=0, description="Units in stock")
    description: Optional[str] = Field(default=None, description="Free text description")
    image_url: Optional[str] = Field(default=None, description="Product image URL")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("must be at least 3 characters")
        return value

    @field_validator("description", "image_url")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @classmethod
    def from_product(cls, product: ProductResponse) -> "ProductForm":
        """Pre-fill an edit form from an existing record."""
        return cls.model_construct(
            name=product.name,
            category=product.category,
            price=product.price,
            stock=product.stock,
            description=product.description,
            image_url=product.image_url,
        )


def validation_messages(error: ValidationError) -> Dict[str, str]:
    """Flatten a pydantic ValidationError into {field: message}."""
    messages: Dict[str, str] = {}
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "form"
        messages.setdefault(field, item["msg"])
    return messages
